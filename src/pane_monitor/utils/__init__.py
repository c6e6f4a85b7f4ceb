"""Utility modules for Pane Monitor"""

from .formatting import format_cost, format_duration, format_tokens, truncate

__all__ = ["format_cost", "format_duration", "format_tokens", "truncate"]
