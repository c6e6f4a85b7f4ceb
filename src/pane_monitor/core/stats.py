"""
Aggregated time accounting over a view of panes.

Effective durations depend on "now", so nothing here is cached.
"""

from collections.abc import Iterable

from .models import AggregatedStats, PaneRecord, Status, StatusSummary


def aggregate(records: Iterable[PaneRecord], now: float) -> AggregatedStats:
    """Sum effective durations and state changes.

    Args:
        records: The view to aggregate (usually the visible panes).
        now: Current monotonic time, same clock as the tracker.
    """
    stats = AggregatedStats()
    for record in records:
        working, waiting, permission = record.effective_durations(now)
        stats.pane_count += 1
        stats.total_working_secs += working
        stats.total_waiting_secs += waiting
        stats.total_permission_secs += permission
        stats.total_state_changes += record.stats.state_changes
    return stats


def summarize(records: Iterable[PaneRecord]) -> StatusSummary:
    """Count panes per status"""
    summary = StatusSummary()
    for record in records:
        summary.total += 1
        if record.status == Status.WORKING:
            summary.working += 1
        elif record.status == Status.WAITING_FOR_INPUT:
            summary.waiting += 1
        elif record.status == Status.PERMISSION_REQUIRED:
            summary.permission += 1
    return summary
