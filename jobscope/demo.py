"""
Demo jobs.

A set of sample jobs covering each schedule kind the monitor knows how to
describe. Their names carry the patterns the schedule descriptor matches
on, so the UI labels line up with the real schedules.
"""

import logging
import random
import time
from datetime import datetime, timedelta
from datetime import time as time_of_day

from jobscope.scheduler import (
    APSchedulerBackend,
    CronJob,
    DailyJob,
    DurationJob,
    OneTimeJob,
    RandomDurationJob,
    SchedulerError,
)


logger = logging.getLogger(__name__)


def _announce(message: str) -> None:
    logger.info(message)


def _parameterized(name: str, count: int) -> None:
    logger.info(f"Job with parameters: name={name}, count={count}")


def _context_aware(context: dict) -> None:
    logger.info(f"Job with context executed, context: {context}")


def _long_running() -> None:
    logger.info("Singleton job started")
    time.sleep(8)
    logger.info("Singleton job completed")


def _with_listeners() -> None:
    logger.info("   -> before run: event-listener-job starting")
    time.sleep(random.randint(1, 3))
    logger.info("   -> after run: event-listener-job completed")


def _process_items() -> None:
    items = random.randint(1, 100)
    logger.info(f"Processing {items} items...")
    time.sleep(2)
    logger.info(f"Successfully processed {items} items")


def _health_check() -> None:
    status = "degraded" if random.random() < 0.1 else "healthy"
    logger.info(f"Health check: System is {status}")


def register_demo_jobs(backend: APSchedulerBackend) -> int:
    """
    Add the demo jobs to a backend.

    A job that fails to register is logged and skipped.

    Returns:
        Number of jobs registered
    """
    one_time_at = datetime.now(backend.timezone) + timedelta(seconds=30)

    demo_jobs = [
        dict(
            definition=DurationJob(10),
            func=_announce,
            args=("Running 10-second interval job",),
            name="simple-10s-interval",
            tags=["interval", "simple"],
        ),
        dict(
            definition=DurationJob(5),
            func=_announce,
            args=("Fast 5-second job executed",),
            name="fast-5s-job",
            tags=["interval", "fast"],
        ),
        dict(
            definition=CronJob("* * * * *"),
            func=_announce,
            args=("Cron job executed (every minute)",),
            name="cron-every-minute",
            tags=["cron", "periodic"],
        ),
        dict(
            definition=DailyJob(1, time_of_day(14, 30)),
            func=_announce,
            args=("Daily job executed at 2:30 PM",),
            name="daily-afternoon-report",
            tags=["daily", "report"],
        ),
        dict(
            definition=CronJob("0 9 * * mon,wed,fri"),
            func=_announce,
            args=("Weekly job executed (Mon, Wed, Fri at 9:00 AM)",),
            name="weekly-mwf-morning",
            tags=["weekly", "morning", "report"],
        ),
        dict(
            definition=DurationJob(12),
            func=_parameterized,
            args=("example-job", 42),
            name="parameterized-job",
            tags=["parameters", "demo"],
        ),
        dict(
            definition=DurationJob(8),
            func=_context_aware,
            args=({"source": "demo"},),
            name="context-aware-job",
            tags=["context", "advanced"],
        ),
        dict(
            definition=RandomDurationJob(5, 15),
            func=_announce,
            args=("Random interval job executed (5-15 seconds)",),
            name="random-interval-job",
            tags=["random", "variable"],
        ),
        dict(
            definition=DurationJob(5),
            func=_long_running,
            name="singleton-mode-job",
            tags=["singleton", "long-running"],
            singleton=True,
        ),
        dict(
            definition=DurationJob(7),
            func=_announce,
            args=("Limited run job executed",),
            name="limited-run-job",
            tags=["limited", "demo"],
            max_runs=3,
        ),
        dict(
            definition=DurationJob(15),
            func=_with_listeners,
            name="event-listener-job",
            tags=["events", "monitoring"],
        ),
        dict(
            definition=OneTimeJob(one_time_at),
            func=_announce,
            args=("One-time job executed!",),
            name="one-time-job",
            tags=["onetime", "scheduled"],
        ),
        dict(
            definition=DurationJob(20),
            func=_process_items,
            name="data-processor-job",
            tags=["processing", "batch"],
        ),
        dict(
            definition=DurationJob(30),
            func=_health_check,
            name="health-check-job",
            tags=["monitoring", "health"],
        ),
    ]

    registered = 0
    for job_kwargs in demo_jobs:
        try:
            backend.add_job(**job_kwargs)
            registered += 1
        except SchedulerError as e:
            logger.error(f"Error creating {job_kwargs['name']}: {e}")

    return registered
