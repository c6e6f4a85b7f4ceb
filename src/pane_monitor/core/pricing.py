"""
Token pricing (USD per million tokens).

Two independent strategies:
- FLAT: one table for every model (default)
- MODEL: per-model input/output price, cache tiers derived from input
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import TokenUsage

MTOK = 1_000_000.0


@dataclass(frozen=True)
class Prices:
    input: float
    output: float
    cache_read: float
    cache_write: float

    def cost(self, usage: TokenUsage) -> float:
        return (
            usage.input_tokens / MTOK * self.input
            + usage.output_tokens / MTOK * self.output
            + usage.cache_read_tokens / MTOK * self.cache_read
            + usage.cache_write_tokens / MTOK * self.cache_write
        )


FLAT_PRICES = Prices(input=3.0, output=15.0, cache_read=0.30, cache_write=3.75)

# (substrings, input, output), first match wins, so more specific first
MODEL_PRICES: list[tuple[tuple[str, ...], float, float]] = [
    (("opus-4-5", "opus-4.5"), 5.0, 25.0),
    (("opus-4",), 15.0, 75.0),
    (("sonnet-4", "sonnet-3-7", "sonnet-3.7"), 3.0, 15.0),
    (("haiku-4-5", "haiku-4.5"), 1.0, 5.0),
    (("haiku-3-5", "haiku-3.5"), 0.8, 4.0),
    (("haiku",), 0.25, 1.25),
    (("gemini-2.5-pro", "gemini-3-pro"), 1.25, 10.0),
    (("gemini-2.5-flash", "gemini-2.0-flash"), 0.30, 2.50),
]

DEFAULT_MODEL_PRICES = (3.0, 15.0)  # Sonnet


def prices_for_model(model: Optional[str]) -> Prices:
    """Per-model prices. Unknown or missing models use Sonnet pricing."""
    name = (model or "").lower()
    input_price, output_price = DEFAULT_MODEL_PRICES
    for needles, model_input, model_output in MODEL_PRICES:
        if any(needle in name for needle in needles):
            input_price, output_price = model_input, model_output
            break
    return Prices(
        input=input_price,
        output=output_price,
        cache_read=input_price * 0.1,
        cache_write=input_price * 1.25,
    )


class PricingStrategy(Enum):
    FLAT = "flat"
    MODEL = "model"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "PricingStrategy":
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            return cls.FLAT

    def cost(self, usage: TokenUsage) -> float:
        if self is PricingStrategy.MODEL:
            return prices_for_model(usage.model).cost(usage)
        return FLAT_PRICES.cost(usage)
