"""
PaneMonitor - ties the pieces together for one dashboard.

This module provides the PaneMonitor class which:
- Polls the pane source once per tick and merges the batch
- Hands transition events to the notifier
- Keeps the selection valid as the visible set changes
- Resolves usage/cost on explicit request
"""

import threading
import time
from typing import Callable, Optional, Protocol

from ..utils.logger import debug, error, info, warn
from ..utils.settings import Settings, get_settings
from .export import ExportSnapshot, export_stats
from .models import (
    AggregatedStats,
    PaneObservation,
    PaneRecord,
    Status,
    StatusSummary,
    TokenUsage,
    TransitionEvent,
)
from .pricing import PricingStrategy
from .stats import aggregate, summarize
from .tracker import StateTracker
from .usage import Provider, UsageCostResolver
from .view import ViewState, visible_panes


class PaneSource(Protocol):
    """Returns every pane currently observed. May raise on failure."""

    def __call__(self) -> list[PaneObservation]: ...


Notifier = Callable[[TransitionEvent], None]


def resolver_from_settings(settings: Settings) -> UsageCostResolver:
    roots = {}
    for tag, root in settings.log_root_overrides().items():
        provider = Provider.from_tag(tag)
        if provider is not None:
            roots[provider] = root
    return UsageCostResolver(
        log_roots=roots, pricing=PricingStrategy.from_name(settings.pricing)
    )


class PaneMonitor:
    """Dashboard state: tracked panes, view flags and selection."""

    def __init__(
        self,
        source: PaneSource,
        tracker: Optional[StateTracker] = None,
        resolver: Optional[UsageCostResolver] = None,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
        self_pane_id: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or get_settings()
        self._source = source
        self._clock = clock
        self.tracker = tracker or StateTracker(clock=clock)
        self.resolver = resolver or resolver_from_settings(self.settings)
        self._notifier = notifier
        self.self_pane_id = (
            self_pane_id if self_pane_id is not None else self.settings.self_pane_id()
        )
        self.view = ViewState(
            show_all=self.settings.show_all_panes,
            compact_mode=self.settings.compact_mode,
        )

    # -- polling ---------------------------------------------------------

    def refresh(self) -> list[TransitionEvent]:
        """Run one poll tick.

        A failing source leaves the tracked state as it was.
        """
        try:
            batch = self._source()
        except Exception as e:  # Intentional catch-all: a failed poll is skipped, not fatal
            warn(f"[Monitor] Pane source failed, keeping previous state: {e}")
            return []

        events = self.tracker.merge(batch, exclude_id=self.self_pane_id)
        self.view.clamp(len(self.visible()))
        debug(f"[Monitor] Tick: {len(self.tracker)} panes, {len(events)} events")

        if self.settings.notify and self._notifier is not None:
            for event in events:
                self._dispatch(event)
        return events

    def _dispatch(self, event: TransitionEvent) -> None:
        try:
            self._notifier(event)
        except Exception as e:  # Intentional catch-all: notification delivery is best-effort
            error(f"[Monitor] Notifier failed for {event.pane_name}: {e}")

    def run(self, stop_event: threading.Event) -> None:
        """Poll until `stop_event` is set. Stops only between ticks."""
        info("Pane monitor started")
        while not stop_event.is_set():
            start_time = time.monotonic()
            self.refresh()
            elapsed = time.monotonic() - start_time
            stop_event.wait(max(0.0, self.settings.poll_interval - elapsed))
        info("Pane monitor stopped")

    # -- view ------------------------------------------------------------

    def visible(self) -> list[PaneRecord]:
        return visible_panes(
            self.tracker.records.values(),
            show_all=self.view.show_all,
            status_filter=self.view.status_filter,
        )

    def selected_pane(self) -> Optional[PaneRecord]:
        panes = self.visible()
        if 0 <= self.view.selected_index < len(panes):
            return panes[self.view.selected_index]
        return None

    def select_next(self) -> None:
        self.view.select_next(len(self.visible()))

    def select_previous(self) -> None:
        self.view.select_previous(len(self.visible()))

    def toggle_show_all(self) -> None:
        self.view.toggle_show_all()
        self.view.clamp(len(self.visible()))

    def toggle_status_filter(self, status: Status) -> None:
        self.view.toggle_status_filter(status)
        self.view.clamp(len(self.visible()))

    def toggle_compact(self) -> None:
        self.view.compact_mode = not self.view.compact_mode

    def toggle_grouping(self) -> None:
        self.view.group_by_session = not self.view.group_by_session

    def toggle_stats(self) -> None:
        self.view.show_stats = not self.view.show_stats

    def toggle_session_collapse(self, session: str) -> None:
        self.view.toggle_session_collapse(session)

    # -- stats -----------------------------------------------------------

    def aggregated_stats(self) -> AggregatedStats:
        return aggregate(self.visible(), self._clock())

    def summary(self) -> StatusSummary:
        return summarize(self.visible())

    def export_stats(self) -> ExportSnapshot:
        panes = self.visible()
        now = self._clock()
        return export_stats(panes, aggregate(panes, now), now)

    def to_dict(self) -> dict:
        """Renderer state: visible panes in display order, view flags and totals"""
        panes = self.visible()
        now = self._clock()
        return {
            "panes": [
                {**record.to_dict(), "status_secs": record.status_duration(now)}
                for record in panes
            ],
            "view": self.view.to_dict(),
            "summary": summarize(panes).to_dict(),
            "stats": aggregate(panes, now).to_dict(),
        }

    # -- usage -----------------------------------------------------------

    def refresh_cost(self, pane_id: str) -> Optional[TokenUsage]:
        """Resolve and cache usage for one pane. None if the pane is gone."""
        record = self.tracker.get(pane_id)
        if record is None:
            return None
        usage = self.resolver.resolve(record.current_path, record.provider)
        self.tracker.attach_usage(pane_id, usage)
        return usage

    def refresh_costs(self) -> int:
        """Resolve usage for every pane with a supported provider.

        Returns the number of panes updated.
        """
        pane_ids = [
            pane_id
            for pane_id, record in self.tracker.records.items()
            if Provider.from_tag(record.provider) is not None
        ]
        for pane_id in pane_ids:
            self.refresh_cost(pane_id)
        info(f"[Monitor] Refreshed costs for {len(pane_ids)} pane(s)")
        return len(pane_ids)
