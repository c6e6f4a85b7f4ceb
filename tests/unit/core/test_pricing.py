"""
Tests for pane_monitor.core.pricing
"""

import pytest

from pane_monitor.core.models import TokenUsage
from pane_monitor.core.pricing import (
    FLAT_PRICES,
    PricingStrategy,
    prices_for_model,
)


class TestFlatPricing:
    def test_flat_table(self):
        assert FLAT_PRICES.input == 3.0
        assert FLAT_PRICES.output == 15.0
        assert FLAT_PRICES.cache_read == 0.30
        assert FLAT_PRICES.cache_write == 3.75

    def test_cost(self):
        usage = TokenUsage(
            input_tokens=1_000_000, output_tokens=100_000, cache_read_tokens=500_000
        )

        assert PricingStrategy.FLAT.cost(usage) == pytest.approx(3.0 + 1.5 + 0.15)

    def test_flat_ignores_model(self):
        usage = TokenUsage(input_tokens=1_000_000, model="claude-opus-4-20250514")

        assert PricingStrategy.FLAT.cost(usage) == pytest.approx(3.0)

    def test_zero_usage_costs_nothing(self):
        assert PricingStrategy.FLAT.cost(TokenUsage()) == 0.0
        assert PricingStrategy.MODEL.cost(TokenUsage()) == 0.0


class TestModelPricing:
    @pytest.mark.parametrize(
        "model,input_price,output_price",
        [
            pytest.param("claude-opus-4-5-20251101", 5.0, 25.0, id="opus_4_5"),
            pytest.param("claude-opus-4-1-20250805", 15.0, 75.0, id="opus_4"),
            pytest.param("claude-sonnet-4-20250514", 3.0, 15.0, id="sonnet_4"),
            pytest.param("claude-haiku-4-5-20251001", 1.0, 5.0, id="haiku_4_5"),
            pytest.param("claude-3-haiku-20240307", 0.25, 1.25, id="haiku_3"),
            pytest.param("gemini-2.5-pro", 1.25, 10.0, id="gemini_pro"),
            pytest.param("some-new-model", 3.0, 15.0, id="unknown_defaults_sonnet"),
            pytest.param(None, 3.0, 15.0, id="missing_defaults_sonnet"),
        ],
    )
    def test_prices_for_model(self, model, input_price, output_price):
        prices = prices_for_model(model)

        assert prices.input == input_price
        assert prices.output == output_price
        assert prices.cache_read == pytest.approx(input_price * 0.1)
        assert prices.cache_write == pytest.approx(input_price * 1.25)

    def test_model_strategy_cost(self):
        usage = TokenUsage(
            input_tokens=1_000_000,
            output_tokens=100_000,
            model="claude-opus-4-5-20251101",
        )

        assert PricingStrategy.MODEL.cost(usage) == pytest.approx(7.5)


class TestStrategyFromName:
    @pytest.mark.parametrize(
        "name,expected",
        [
            pytest.param("flat", PricingStrategy.FLAT, id="flat"),
            pytest.param("model", PricingStrategy.MODEL, id="model"),
            pytest.param(" MODEL ", PricingStrategy.MODEL, id="case_insensitive"),
            pytest.param("bogus", PricingStrategy.FLAT, id="unknown"),
            pytest.param(None, PricingStrategy.FLAT, id="none"),
        ],
    )
    def test_from_name(self, name, expected):
        assert PricingStrategy.from_name(name) is expected
