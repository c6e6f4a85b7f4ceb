"""
Per-pane state tracking.

StateTracker owns the id -> PaneRecord table. Each merge:
- inserts panes seen for the first time
- credits elapsed time to the previous status when a status changes
- emits a TransitionEvent when a pane stops working and needs the user
- evicts panes absent from the batch
"""

import time
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Callable, Optional

from ..utils.logger import debug
from .models import PaneObservation, PaneRecord, Status, TokenUsage, TransitionEvent

# Statuses that mean "the agent stopped and wants the user"
ATTENTION_STATUSES = frozenset({Status.WAITING_FOR_INPUT, Status.PERMISSION_REQUIRED})


class StateTracker:
    """Keyed collection of PaneRecords fed by observation batches."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._records: dict[str, PaneRecord] = {}

    @property
    def records(self) -> Mapping[str, PaneRecord]:
        """Read-only view of the live records"""
        return MappingProxyType(self._records)

    def get(self, pane_id: str) -> Optional[PaneRecord]:
        return self._records.get(pane_id)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, pane_id: object) -> bool:
        return pane_id in self._records

    def merge(
        self,
        batch: Iterable[PaneObservation],
        exclude_id: Optional[str] = None,
    ) -> list[TransitionEvent]:
        """Merge a complete observation batch.

        Args:
            batch: Every pane currently observed. Ids appear at most once.
            exclude_id: Pane to ignore (the monitor's own pane).

        Returns:
            Transition events for panes that went from working to waiting
            or permission, in batch order.
        """
        now = self._clock()
        seen: set[str] = set()
        events: list[TransitionEvent] = []

        for obs in batch:
            if exclude_id is not None and obs.id == exclude_id:
                continue
            seen.add(obs.id)

            record = self._records.get(obs.id)
            if record is None:
                self._records[obs.id] = PaneRecord(
                    observation=obs,
                    status=obs.status,
                    status_changed_at=now,
                )
                debug(f"[Tracker] New pane {obs.id} ({obs.status.value})")
                continue

            if record.status != obs.status:
                event = self._apply_transition(record, obs, now)
                if event is not None:
                    events.append(event)
            record.observation = obs

        vanished = [pane_id for pane_id in self._records if pane_id not in seen]
        for pane_id in vanished:
            del self._records[pane_id]
        if vanished:
            debug(f"[Tracker] Evicted {len(vanished)} vanished pane(s)")

        return events

    def _apply_transition(
        self, record: PaneRecord, obs: PaneObservation, now: float
    ) -> Optional[TransitionEvent]:
        old = record.status
        new = obs.status

        record.stats.add(old, record.status_duration(now))
        record.stats.state_changes += 1

        event = None
        if old == Status.WORKING and new in ATTENTION_STATUSES:
            event = TransitionEvent(
                pane_id=obs.id,
                pane_name=obs.display_name,
                folder_name=obs.folder_name,
                session_name=obs.session_name,
                window_index=obs.window_index,
                pane_index=obs.pane_index,
                is_permission=new == Status.PERMISSION_REQUIRED,
            )

        record.previous_status = old
        # status_changed_at never moves backwards
        record.status_changed_at = max(record.status_changed_at, now)
        record.status = new
        debug(f"[Tracker] {obs.id}: {old.value} -> {new.value}")
        return event

    def attach_usage(self, pane_id: str, usage: TokenUsage) -> bool:
        """Cache a usage result on a record. Returns False if the pane is gone."""
        record = self._records.get(pane_id)
        if record is None:
            return False
        record.usage = usage
        return True
