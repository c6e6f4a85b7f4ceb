"""
Stats export snapshot.

Building a snapshot has no side effects; writing it somewhere is up to
the caller (see ExportSnapshot.filename / to_json).
"""

import json
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Callable, Optional

from .models import AggregatedStats, PaneRecord


@dataclass
class ExportSummary:
    total_panes: int
    total_working_secs: int
    total_waiting_secs: int
    total_permission_secs: int
    total_state_changes: int
    efficiency_percent: float

    def to_dict(self) -> dict:
        return {
            "total_panes": self.total_panes,
            "total_working_secs": self.total_working_secs,
            "total_waiting_secs": self.total_waiting_secs,
            "total_permission_secs": self.total_permission_secs,
            "total_state_changes": self.total_state_changes,
            "efficiency_percent": self.efficiency_percent,
        }


@dataclass
class ExportPane:
    session: str
    window: int
    pane: int
    path: str
    current_status: str
    task: Optional[str]
    working_secs: int
    waiting_secs: int
    permission_secs: int
    state_changes: int

    def to_dict(self) -> dict:
        return {
            "session": self.session,
            "window": self.window,
            "pane": self.pane,
            "path": self.path,
            "current_status": self.current_status,
            "task": self.task,
            "working_secs": self.working_secs,
            "waiting_secs": self.waiting_secs,
            "permission_secs": self.permission_secs,
            "state_changes": self.state_changes,
        }


@dataclass
class ExportSnapshot:
    timestamp: str  # Epoch seconds
    summary: ExportSummary
    panes: list[ExportPane] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"pane-stats-{self.timestamp}.json"

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "summary": self.summary.to_dict(),
            "panes": [p.to_dict() for p in self.panes],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def export_stats(
    records: Iterable[PaneRecord],
    stats: AggregatedStats,
    now: float,
    wall_clock: Callable[[], float] = time.time,
) -> ExportSnapshot:
    """Snapshot aggregated and per-pane stats.

    Args:
        records: Visible records, in display order.
        stats: Aggregate computed over the same records.
        now: Monotonic time used for the per-pane effective durations.
        wall_clock: Epoch clock, used only for the timestamp.
    """
    panes = []
    for record in records:
        working, waiting, permission = record.effective_durations(now)
        panes.append(
            ExportPane(
                session=record.session_name,
                window=record.window_index,
                pane=record.pane_index,
                path=record.current_path,
                current_status=record.status.label,
                task=record.task,
                working_secs=working,
                waiting_secs=waiting,
                permission_secs=permission,
                state_changes=record.stats.state_changes,
            )
        )

    return ExportSnapshot(
        timestamp=str(int(wall_clock())),
        summary=ExportSummary(
            total_panes=stats.pane_count,
            total_working_secs=stats.total_working_secs,
            total_waiting_secs=stats.total_waiting_secs,
            total_permission_secs=stats.total_permission_secs,
            total_state_changes=stats.total_state_changes,
            efficiency_percent=stats.efficiency_percent,
        ),
        panes=panes,
    )
