"""
Pane state tracking engine.

Feed observation batches to StateTracker.merge(), derive the view with
visible_panes(), and compute totals with aggregate() / export_stats().
PaneMonitor wires these together around a pane source.
"""

from .models import (
    AggregatedStats,
    PaneObservation,
    PaneRecord,
    PaneStats,
    Status,
    StatusSummary,
    TokenUsage,
    TransitionEvent,
)
from .tracker import StateTracker
from .view import ViewState, clamp_selection, visible_panes
from .stats import aggregate, summarize
from .export import ExportSnapshot, export_stats
from .pricing import PricingStrategy
from .usage import Provider, UsageCostResolver
from .monitor import PaneMonitor, PaneSource

__all__ = [
    # Models
    "AggregatedStats",
    "PaneObservation",
    "PaneRecord",
    "PaneStats",
    "Status",
    "StatusSummary",
    "TokenUsage",
    "TransitionEvent",
    # Engine
    "StateTracker",
    "ViewState",
    "clamp_selection",
    "visible_panes",
    "aggregate",
    "summarize",
    "ExportSnapshot",
    "export_stats",
    # Usage
    "PricingStrategy",
    "Provider",
    "UsageCostResolver",
    # Orchestration
    "PaneMonitor",
    "PaneSource",
]
