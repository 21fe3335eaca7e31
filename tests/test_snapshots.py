"""
Tests for the snapshot builder.
"""

from datetime import datetime, timedelta, timezone

from jobscope.api.schemas import JobSnapshot
from jobscope.api.services.snapshots import (
    build_job_snapshot,
    build_snapshots,
    format_time,
    snapshot_payload,
)

from .conftest import FIXED_DATETIME, FakeJob, FakeSchedulerBackend


class TestFormatTime:
    """Tests for timestamp formatting."""

    def test_none_is_empty(self):
        assert format_time(None) == ""

    def test_seconds_precision_with_offset(self):
        value = datetime(2026, 3, 4, 5, 6, 7, 891011, tzinfo=timezone.utc)

        assert format_time(value) == "2026-03-04T05:06:07+00:00"

    def test_non_utc_offset(self):
        value = datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone(timedelta(hours=9)))

        assert format_time(value) == "2026-03-04T05:06:07+09:00"


class TestBuildJobSnapshot:
    """Tests for build_job_snapshot()."""

    def test_fields(self):
        last = FIXED_DATETIME - timedelta(seconds=10)
        job = FakeJob("plain", tags=["a", "b"], last_run=last)

        snapshot = build_job_snapshot(job)

        assert isinstance(snapshot, JobSnapshot)
        assert snapshot.id == job.id
        assert snapshot.tags == ["a", "b"]
        assert snapshot.last_run == "2026-01-01T11:59:50+00:00"
        assert snapshot.next_run == "2026-01-01T12:00:00+00:00"
        assert snapshot.schedule == "Every 10 seconds"
        assert snapshot.schedule_detail == "Duration: 10s"

    def test_at_most_five_upcoming_runs(self):
        snapshot = build_job_snapshot(FakeJob("plain"))

        assert len(snapshot.next_runs) == 5

    def test_upcoming_runs_are_ordered(self):
        snapshot = build_job_snapshot(FakeJob("plain", interval=timedelta(hours=2)))

        parsed = [datetime.fromisoformat(run) for run in snapshot.next_runs]
        assert parsed == sorted(parsed)

    def test_single_upcoming_run(self):
        """A job with one remaining run falls back to the default label."""
        snapshot = build_job_snapshot(FakeJob("plain", interval=None))

        assert len(snapshot.next_runs) == 1
        assert snapshot.schedule == "Scheduled"
        assert snapshot.schedule_detail == "Custom schedule"

    def test_name_pattern_wins(self):
        snapshot = build_job_snapshot(FakeJob("one-time-job", interval=timedelta(seconds=3)))

        assert snapshot.schedule == "One time only"


class TestBuildSnapshots:
    """Tests for build_snapshots() and snapshot_payload()."""

    def test_order_follows_backend(self):
        backend = FakeSchedulerBackend()
        names = ["c", "a", "b"]
        for name in names:
            backend.add(FakeJob(name))

        assert [s.name for s in build_snapshots(backend)] == names

    def test_payload_uses_wire_names(self):
        backend = FakeSchedulerBackend()
        backend.add(FakeJob("plain"))

        payload = snapshot_payload(backend)

        assert payload[0]["nextRun"] == "2026-01-01T12:00:00+00:00"
        assert payload[0]["scheduleDetail"] == "Duration: 10s"
        assert "next_run" not in payload[0]

    def test_no_caching(self):
        backend = FakeSchedulerBackend()

        assert snapshot_payload(backend) == []
        backend.add(FakeJob("late"))
        assert len(snapshot_payload(backend)) == 1
