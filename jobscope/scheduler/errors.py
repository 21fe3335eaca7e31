"""
Scheduler-specific exceptions.

Raised by SchedulerBackend implementations; the API layer maps them to
HTTP errors.
"""


class SchedulerError(Exception):
    """Base exception for all scheduler errors."""
    pass


class JobNotFoundError(SchedulerError):
    """Raised when a requested job does not exist."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")
