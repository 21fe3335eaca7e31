"""
Pytest configuration and shared fixtures.

FakeSchedulerBackend is an in-memory stand-in for the APScheduler backend:
jobs run on a fixed interval from a fixed start time, and every failure
mode the API must surface can be switched on per test.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from jobscope.scheduler import (
    CronJob,
    DailyJob,
    DurationJob,
    JobNotFoundError,
    SchedulerError,
)


# Fixed time for deterministic snapshots
FIXED_DATETIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeJob:
    """JobView with a fixed start and interval."""

    def __init__(
        self,
        name: str,
        tags=(),
        interval: Optional[timedelta] = timedelta(seconds=10),
        start: datetime = FIXED_DATETIME,
        last_run: Optional[datetime] = None,
        job_id: Optional[str] = None,
    ):
        self._id = job_id or str(uuid.uuid4())
        self._name = name
        self._tags = list(tags)
        self.interval = interval
        self.start = start
        self._last_run = last_run
        self.func = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    def last_run(self) -> Optional[datetime]:
        return self._last_run

    def next_run(self) -> Optional[datetime]:
        return self.start

    def next_runs(self, count: int) -> List[datetime]:
        if self.interval is None:
            return [self.start][:count]
        return [self.start + self.interval * i for i in range(count)]


class FakeSchedulerBackend:
    """In-memory SchedulerBackend."""

    def __init__(self):
        self._jobs: List[FakeJob] = []
        self.running = True
        self.list_calls = 0
        self.added = []
        self.ran: List[str] = []
        self.start_calls = 0
        self.stop_calls = 0

        # Failure switches
        self.add_error: Optional[str] = None
        self.run_error: Optional[str] = None
        self.stop_error: Optional[str] = None
        self.start_error: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self.running

    def add(self, job: FakeJob) -> FakeJob:
        self._jobs.append(job)
        return job

    def jobs(self) -> List[FakeJob]:
        self.list_calls += 1
        return list(self._jobs)

    def get_job(self, job_id: str) -> Optional[FakeJob]:
        for job in self._jobs:
            if job.id == job_id:
                return job
        return None

    def add_job(self, definition, func, name, tags=()):
        if self.add_error:
            raise SchedulerError(self.add_error)

        if isinstance(definition, DurationJob):
            interval = timedelta(seconds=definition.seconds)
        elif isinstance(definition, DailyJob):
            interval = timedelta(days=definition.interval_days)
        elif isinstance(definition, CronJob):
            interval = timedelta(minutes=1)
        else:
            interval = None

        job = FakeJob(name, tags=tags, interval=interval)
        job.func = func
        self.added.append((definition, job))
        return self.add(job)

    def remove_job(self, job_id: str) -> None:
        job = self.get_job(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        self._jobs.remove(job)

    def run_now(self, job_id: str) -> None:
        if self.get_job(job_id) is None:
            raise JobNotFoundError(job_id)
        if self.run_error:
            raise SchedulerError(self.run_error)
        self.ran.append(job_id)

    def start(self) -> None:
        self.start_calls += 1
        if self.start_error:
            raise SchedulerError(self.start_error)
        self.running = True

    def stop(self) -> None:
        self.stop_calls += 1
        if self.stop_error:
            raise SchedulerError(self.stop_error)
        self.running = False

    def shutdown(self) -> None:
        self.running = False


@pytest.fixture
def fake_backend():
    """Install a FakeSchedulerBackend as the API's scheduler."""
    from jobscope.api._scheduler_state import (
        clear_scheduler_backend,
        set_scheduler_backend,
    )

    backend = FakeSchedulerBackend()
    set_scheduler_backend(backend)

    yield backend

    clear_scheduler_backend()


@pytest.fixture
def client(fake_backend):
    """Test client bound to the fake backend (no lifespan, no broadcaster)."""
    from jobscope.api.main import app
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_live_state():
    """Give every test a fresh connection registry."""
    from jobscope.api.services.connection_registry import reset_connection_registry

    reset_connection_registry()
    yield
    reset_connection_registry()
