"""
Scheduler capability interface and its APScheduler implementation.

The monitoring layer never talks to APScheduler directly. It only needs:
- enumerate jobs (id, name, tags, last run, next run, next N runs)
- submit a job from a definition, a callable and options (name, tags)
- remove a job, run a job immediately
- start / stop all scheduled execution

APSchedulerBackend wraps a BackgroundScheduler and keeps the bits
APScheduler does not track itself (tags, last run time, run limits) in a
small lock-protected metadata table keyed by job id.
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Union

from apscheduler.events import (
    EVENT_JOB_REMOVED,
    EVENT_JOB_SUBMITTED,
    JobEvent,
    JobSubmissionEvent,
)
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import STATE_PAUSED, STATE_RUNNING, STATE_STOPPED
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from .errors import JobNotFoundError, SchedulerError
from .triggers import DailyAtTimeTrigger


logger = logging.getLogger(__name__)


# =============================================================================
# Job Definitions
# =============================================================================


@dataclass(frozen=True)
class DurationJob:
    """Run every `seconds` seconds."""

    seconds: int


@dataclass(frozen=True)
class CronJob:
    """Run on a standard 5-field crontab expression."""

    expression: str


@dataclass(frozen=True)
class DailyJob:
    """Run every `interval_days` days at `at_time`."""

    interval_days: int
    at_time: time


@dataclass(frozen=True)
class RandomDurationJob:
    """Run at a random interval between `min_seconds` and `max_seconds`."""

    min_seconds: int
    max_seconds: int


@dataclass(frozen=True)
class OneTimeJob:
    """Run exactly once at `run_at`."""

    run_at: datetime


JobDefinition = Union[DurationJob, CronJob, DailyJob, RandomDurationJob, OneTimeJob]


# =============================================================================
# Capability Interface
# =============================================================================


class JobView(Protocol):
    """Read-only view of one scheduled job."""

    @property
    def id(self) -> str:
        ...

    @property
    def name(self) -> str:
        ...

    @property
    def tags(self) -> List[str]:
        ...

    def last_run(self) -> Optional[datetime]:
        ...

    def next_run(self) -> Optional[datetime]:
        ...

    def next_runs(self, count: int) -> List[datetime]:
        ...


class SchedulerBackend(Protocol):
    """Operations the monitoring layer needs from a scheduling engine."""

    @property
    def is_running(self) -> bool:
        ...

    def jobs(self) -> List[JobView]:
        ...

    def get_job(self, job_id: str) -> Optional[JobView]:
        ...

    def add_job(
        self,
        definition: JobDefinition,
        func: Callable[..., object],
        name: str,
        tags: Sequence[str] = (),
    ) -> JobView:
        ...

    def remove_job(self, job_id: str) -> None:
        ...

    def run_now(self, job_id: str) -> None:
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def shutdown(self) -> None:
        ...


# =============================================================================
# APScheduler Implementation
# =============================================================================


@dataclass
class _JobMeta:
    tags: List[str] = field(default_factory=list)
    last_run: Optional[datetime] = None
    run_count: int = 0
    max_runs: Optional[int] = None


class APSchedulerJobView:
    """JobView over an APScheduler Job plus the backend's metadata."""

    def __init__(self, job, meta: _JobMeta, timezone):
        self._job = job
        self._tags = list(meta.tags)
        self._last_run = meta.last_run
        self._timezone = timezone

    @property
    def id(self) -> str:
        return self._job.id

    @property
    def name(self) -> str:
        return self._job.name

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    def last_run(self) -> Optional[datetime]:
        return self._last_run

    def next_run(self) -> Optional[datetime]:
        # Pending jobs (scheduler never started) have no next_run_time yet
        next_run_time = getattr(self._job, "next_run_time", None)
        if next_run_time is None and self._job.pending:
            now = datetime.now(self._timezone)
            next_run_time = self._job.trigger.get_next_fire_time(None, now)
        return next_run_time

    def next_runs(self, count: int) -> List[datetime]:
        runs: List[datetime] = []
        fire_time = self.next_run()
        while fire_time is not None and len(runs) < count:
            runs.append(fire_time)
            fire_time = self._job.trigger.get_next_fire_time(
                fire_time, fire_time + timedelta(microseconds=1)
            )
        return runs


class APSchedulerBackend:
    """
    SchedulerBackend backed by an APScheduler BackgroundScheduler.

    Every job gets a UUID4 string id. Start/stop map to APScheduler's
    start/resume and pause, so stopping keeps all jobs registered.
    """

    def __init__(self, scheduler: Optional[BackgroundScheduler] = None):
        self._scheduler = scheduler or BackgroundScheduler()
        self._meta: Dict[str, _JobMeta] = {}
        self._meta_lock = threading.Lock()

        self._scheduler.add_listener(self._on_job_submitted, EVENT_JOB_SUBMITTED)
        self._scheduler.add_listener(self._on_job_removed, EVENT_JOB_REMOVED)

    @property
    def scheduler(self) -> BackgroundScheduler:
        return self._scheduler

    @property
    def timezone(self):
        return self._scheduler.timezone

    @property
    def is_running(self) -> bool:
        return self._scheduler.state == STATE_RUNNING

    # -------------------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------------------

    def _view(self, job) -> APSchedulerJobView:
        with self._meta_lock:
            meta = self._meta.get(job.id) or _JobMeta()
            return APSchedulerJobView(job, meta, self.timezone)

    def jobs(self) -> List[APSchedulerJobView]:
        return [self._view(job) for job in self._scheduler.get_jobs()]

    def get_job(self, job_id: str) -> Optional[APSchedulerJobView]:
        job = self._scheduler.get_job(job_id)
        if job is None:
            return None
        return self._view(job)

    # -------------------------------------------------------------------------
    # Submission / Removal
    # -------------------------------------------------------------------------

    def _build_trigger(self, definition: JobDefinition):
        tz = self.timezone

        if isinstance(definition, DurationJob):
            return IntervalTrigger(seconds=definition.seconds, timezone=tz)

        if isinstance(definition, CronJob):
            return CronTrigger.from_crontab(definition.expression, timezone=tz)

        if isinstance(definition, DailyJob):
            at = definition.at_time
            if definition.interval_days == 1:
                return CronTrigger(
                    hour=at.hour, minute=at.minute, second=at.second, timezone=tz
                )
            return DailyAtTimeTrigger(
                definition.interval_days, at, datetime.now(tz).date(), timezone=tz
            )

        if isinstance(definition, RandomDurationJob):
            if definition.max_seconds < definition.min_seconds:
                raise ValueError("max_seconds must not be less than min_seconds")
            spread = (definition.max_seconds - definition.min_seconds) / 2
            return IntervalTrigger(
                seconds=definition.min_seconds + spread,
                jitter=int(spread) or None,
                timezone=tz,
            )

        if isinstance(definition, OneTimeJob):
            return DateTrigger(run_date=definition.run_at, timezone=tz)

        raise ValueError(f"Unsupported job definition: {definition!r}")

    def add_job(
        self,
        definition: JobDefinition,
        func: Callable[..., object],
        name: str,
        tags: Sequence[str] = (),
        args: Sequence[object] = (),
        kwargs: Optional[dict] = None,
        max_runs: Optional[int] = None,
        singleton: bool = False,
    ) -> APSchedulerJobView:
        """
        Submit a new job.

        Args:
            definition: Schedule definition
            func: Job body
            name: Display name
            tags: Labels attached to the job
            args, kwargs: Arguments passed to func
            max_runs: Remove the job after this many runs (None = unlimited)
            singleton: Never run two instances of the job concurrently

        Raises:
            SchedulerError: If the schedule is rejected
        """
        try:
            trigger = self._build_trigger(definition)
        except ValueError as e:
            raise SchedulerError(str(e)) from e

        job_id = str(uuid.uuid4())

        with self._meta_lock:
            self._meta[job_id] = _JobMeta(tags=list(tags), max_runs=max_runs)

        try:
            job = self._scheduler.add_job(
                func,
                trigger=trigger,
                args=list(args),
                kwargs=kwargs or {},
                id=job_id,
                name=name,
                max_instances=1 if singleton else 3,
                coalesce=True,
            )
        except Exception as e:
            with self._meta_lock:
                self._meta.pop(job_id, None)
            raise SchedulerError(str(e)) from e

        logger.debug(f"Job added: {name} ({job_id})")
        return self._view(job)

    def remove_job(self, job_id: str) -> None:
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError as e:
            raise JobNotFoundError(job_id) from e

        with self._meta_lock:
            self._meta.pop(job_id, None)

    def run_now(self, job_id: str) -> None:
        """
        Execute a job immediately, outside its schedule.

        The run happens on a separate thread; its schedule is untouched.

        Raises:
            JobNotFoundError: No job with that id
            SchedulerError: Scheduler has not been started
        """
        job = self._scheduler.get_job(job_id)
        if job is None:
            raise JobNotFoundError(job_id)

        if self._scheduler.state == STATE_STOPPED:
            raise SchedulerError("Failed to run job: scheduler is not running")

        limit_reached = self._record_run(job_id)

        thread = threading.Thread(
            target=self._execute,
            args=(job,),
            name=f"run-now-{job_id[:8]}",
            daemon=True,
        )
        thread.start()

        if limit_reached:
            self._retire(job_id)

    def _execute(self, job) -> None:
        try:
            job.func(*job.args, **job.kwargs)
        except Exception:
            logger.exception(f"Job {job.name} ({job.id}) raised during run-now")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Start the scheduler, or resume it after stop()."""
        try:
            if self._scheduler.state == STATE_STOPPED:
                self._scheduler.start()
            elif self._scheduler.state == STATE_PAUSED:
                self._scheduler.resume()
        except Exception as e:
            raise SchedulerError(str(e)) from e

    def stop(self) -> None:
        """Pause all job execution; jobs stay registered."""
        try:
            self._scheduler.pause()
        except Exception as e:
            raise SchedulerError(str(e)) from e

    def shutdown(self) -> None:
        if self._scheduler.state != STATE_STOPPED:
            self._scheduler.shutdown(wait=False)

    # -------------------------------------------------------------------------
    # Event listeners
    # -------------------------------------------------------------------------

    def _record_run(self, job_id: str) -> bool:
        """
        Record a run; returns True when the job reached its run limit.

        Jobs added straight to the scheduler get an entry on first run;
        jobs already removed are not recorded.
        """
        # Looked up before taking _meta_lock: the scheduler holds its own
        # job store lock while dispatching events
        known = self._scheduler.get_job(job_id) is not None

        with self._meta_lock:
            meta = self._meta.get(job_id)
            if meta is None:
                if not known:
                    return False
                meta = self._meta[job_id] = _JobMeta()
            meta.last_run = datetime.now(self.timezone)
            meta.run_count += 1
            return meta.max_runs is not None and meta.run_count >= meta.max_runs

    def _retire(self, job_id: str) -> None:
        logger.info(f"Job {job_id} reached its run limit, removing")
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            logger.debug(f"Job {job_id} already removed")

    def _on_job_submitted(self, event: JobSubmissionEvent) -> None:
        if self._record_run(event.job_id):
            self._retire(event.job_id)

    def _on_job_removed(self, event: JobEvent) -> None:
        with self._meta_lock:
            self._meta.pop(event.job_id, None)
