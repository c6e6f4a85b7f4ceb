"""
Tests for pane_monitor.core.stats
"""

import math

import pytest

from pane_monitor.core.models import AggregatedStats, PaneRecord, PaneStats, Status
from pane_monitor.core.stats import aggregate, summarize
from pane_monitor.core.tracker import StateTracker

from tests.factories import make_observation


def make_record(status, changed_at=0.0, **stats) -> PaneRecord:
    return PaneRecord(
        observation=make_observation(status=status),
        status=status,
        status_changed_at=changed_at,
        stats=PaneStats(**stats),
    )


# =============================================================================
# aggregate()
# =============================================================================


class TestAggregate:
    def test_empty_view(self):
        stats = aggregate([], now=100.0)

        assert stats.pane_count == 0
        assert stats.total_working_secs == 0
        assert stats.efficiency == 0.0
        assert stats.efficiency_percent == 0.0

    def test_all_zero_efficiency_is_zero_not_nan(self):
        """Panes with no tracked time must not divide by zero"""
        records = [
            make_record(Status.NOT_DETECTED, changed_at=0.0),
            make_record(Status.WORKING, changed_at=50.0),
        ]

        stats = aggregate(records, now=50.0)

        assert stats.pane_count == 2
        assert stats.efficiency == 0.0
        assert not math.isnan(stats.efficiency)

    @pytest.mark.parametrize(
        "status,expected",
        [
            pytest.param(Status.WORKING, (15, 20, 30), id="working"),
            pytest.param(Status.WAITING_FOR_INPUT, (10, 25, 30), id="waiting"),
            pytest.param(Status.PERMISSION_REQUIRED, (10, 20, 35), id="permission"),
            pytest.param(Status.NOT_DETECTED, (10, 20, 30), id="not_detected"),
        ],
    )
    def test_open_span_added_to_current_bucket_only(self, status, expected):
        record = make_record(
            status,
            changed_at=95.0,
            working_secs=10,
            waiting_secs=20,
            permission_secs=30,
        )

        stats = aggregate([record], now=100.0)

        assert (
            stats.total_working_secs,
            stats.total_waiting_secs,
            stats.total_permission_secs,
        ) == expected

    def test_sums_across_panes(self):
        records = [
            make_record(Status.WORKING, changed_at=90.0, working_secs=10, state_changes=2),
            make_record(Status.WAITING_FOR_INPUT, changed_at=80.0, working_secs=5, state_changes=3),
        ]

        stats = aggregate(records, now=100.0)

        assert stats.pane_count == 2
        assert stats.total_working_secs == 25
        assert stats.total_waiting_secs == 20
        assert stats.total_permission_secs == 0
        assert stats.total_state_changes == 5
        assert stats.efficiency == pytest.approx(25 / 45)
        assert stats.efficiency_percent == pytest.approx(2500 / 45)

    def test_recomputed_at_call_time(self, clock):
        """The open-ended span grows between calls"""
        tracker = StateTracker(clock=clock)
        tracker.merge([make_observation("%1", Status.WORKING)])

        clock.advance(3)
        first = aggregate(tracker.records.values(), clock())
        clock.advance(4)
        second = aggregate(tracker.records.values(), clock())

        assert first.total_working_secs == 3
        assert second.total_working_secs == 7

    def test_efficiency_all_working(self):
        stats = AggregatedStats(pane_count=1, total_working_secs=60)

        assert stats.efficiency == 1.0
        assert stats.efficiency_percent == 100.0


# =============================================================================
# summarize()
# =============================================================================


class TestSummarize:
    def test_counts_per_status(self):
        records = [
            make_record(Status.WORKING),
            make_record(Status.WORKING),
            make_record(Status.WAITING_FOR_INPUT),
            make_record(Status.PERMISSION_REQUIRED),
            make_record(Status.NOT_DETECTED),
        ]

        summary = summarize(records)

        assert summary.to_dict() == {
            "total": 5,
            "working": 2,
            "waiting": 1,
            "permission": 1,
        }
