"""
Scheduler integration package.

The scheduling engine itself is APScheduler; this package holds the narrow
capability interface the API consumes plus the schedule descriptor.
"""

from .errors import SchedulerError, JobNotFoundError
from .backend import (
    APSchedulerBackend,
    APSchedulerJobView,
    CronJob,
    DailyJob,
    DurationJob,
    JobDefinition,
    JobView,
    OneTimeJob,
    RandomDurationJob,
    SchedulerBackend,
)
from .descriptor import describe_schedule, describe_from_name, describe_interval
from .triggers import DailyAtTimeTrigger

__all__ = [
    # Errors
    "SchedulerError",
    "JobNotFoundError",
    # Backend
    "APSchedulerBackend",
    "APSchedulerJobView",
    "JobView",
    "SchedulerBackend",
    # Definitions
    "JobDefinition",
    "DurationJob",
    "CronJob",
    "DailyJob",
    "RandomDurationJob",
    "OneTimeJob",
    "DailyAtTimeTrigger",
    # Descriptor
    "describe_schedule",
    "describe_from_name",
    "describe_interval",
]
