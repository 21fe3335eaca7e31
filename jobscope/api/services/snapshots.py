"""
Snapshot builder.

Projects the scheduler's current jobs into wire-ready JobSnapshot records.
Nothing is cached: every call asks the backend again, so two snapshots
built moments apart may legitimately disagree.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from jobscope.config import NEXT_RUNS_COUNT
from jobscope.scheduler import JobView, SchedulerBackend, describe_schedule

from ..schemas.jobs import JobSnapshot


def format_time(value: Optional[datetime]) -> str:
    """RFC 3339 with seconds precision; empty string for no timestamp."""
    if value is None:
        return ""
    return value.isoformat(timespec="seconds")


def format_times(values: Sequence[datetime]) -> List[str]:
    return [format_time(value) for value in values]


def build_job_snapshot(job: JobView) -> JobSnapshot:
    """Convert one scheduler job into a JobSnapshot."""
    next_runs = job.next_runs(NEXT_RUNS_COUNT)
    schedule, schedule_detail = describe_schedule(job.name, next_runs)

    return JobSnapshot(
        id=job.id,
        name=job.name,
        tags=job.tags,
        next_run=format_time(job.next_run()),
        last_run=format_time(job.last_run()),
        next_runs=format_times(next_runs),
        schedule=schedule,
        schedule_detail=schedule_detail,
    )


def build_snapshots(backend: SchedulerBackend) -> List[JobSnapshot]:
    """Snapshot every job, in the order the scheduler enumerates them."""
    return [build_job_snapshot(job) for job in backend.jobs()]


def snapshot_payload(backend: SchedulerBackend) -> List[Dict[str, Any]]:
    """build_snapshots() as JSON-ready dicts using wire field names."""
    return [snapshot.model_dump(by_alias=True) for snapshot in build_snapshots(backend)]
