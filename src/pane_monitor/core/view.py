"""
Filtered, ordered view of pane records and the selection/display state
the renderer works from.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from .models import PaneRecord, Status

# Actionable panes first
STATUS_RANK = {
    Status.PERMISSION_REQUIRED: 0,
    Status.WORKING: 1,
    Status.WAITING_FOR_INPUT: 2,
    Status.NOT_DETECTED: 3,
}


def _sort_key(record: PaneRecord) -> tuple[int, str, int, int]:
    return (
        STATUS_RANK[record.status],
        record.session_name,
        record.window_index,
        record.pane_index,
    )


def visible_panes(
    records: Iterable[PaneRecord],
    show_all: bool,
    status_filter: Optional[Status] = None,
) -> list[PaneRecord]:
    """Filter and sort records for display.

    Args:
        records: Records to consider (any order).
        show_all: Keep NOT_DETECTED panes when True.
        status_filter: Keep only records in this status, if set.

    Returns:
        Records sorted by (status rank, session, window, pane).
    """
    panes = [
        r
        for r in records
        if (show_all or r.status != Status.NOT_DETECTED)
        and (status_filter is None or r.status == status_filter)
    ]
    panes.sort(key=_sort_key)
    return panes


def clamp_selection(selected_index: int, visible_count: int) -> int:
    """Keep a selection index inside a view of `visible_count` rows"""
    if visible_count <= 0:
        return 0
    if selected_index >= visible_count:
        return visible_count - 1
    return max(0, selected_index)


@dataclass
class ViewState:
    """Selection and display flags.

    Only `show_all` and `status_filter` affect which panes are visible;
    the other flags are stored for the renderer.
    """

    selected_index: int = 0
    show_all: bool = False
    status_filter: Optional[Status] = None
    compact_mode: bool = False
    group_by_session: bool = False
    show_stats: bool = False
    collapsed_sessions: set[str] = field(default_factory=set)

    def clamp(self, visible_count: int) -> None:
        self.selected_index = clamp_selection(self.selected_index, visible_count)

    def select_next(self, visible_count: int) -> None:
        if visible_count > 0:
            self.selected_index = (self.selected_index + 1) % visible_count

    def select_previous(self, visible_count: int) -> None:
        if visible_count > 0:
            if self.selected_index == 0:
                self.selected_index = visible_count - 1
            else:
                self.selected_index -= 1

    def toggle_show_all(self) -> None:
        self.show_all = not self.show_all
        self.selected_index = 0

    def toggle_status_filter(self, status: Status) -> None:
        """Filter on `status`, or clear the filter if it is already active"""
        self.status_filter = None if self.status_filter == status else status
        self.selected_index = 0

    def toggle_session_collapse(self, session: str) -> None:
        if session in self.collapsed_sessions:
            self.collapsed_sessions.remove(session)
        else:
            self.collapsed_sessions.add(session)

    def to_dict(self) -> dict:
        return {
            "selected_index": self.selected_index,
            "show_all": self.show_all,
            "status_filter": self.status_filter.value if self.status_filter else None,
            "compact_mode": self.compact_mode,
            "group_by_session": self.group_by_session,
            "show_stats": self.show_stats,
            "collapsed_sessions": sorted(self.collapsed_sessions),
        }
