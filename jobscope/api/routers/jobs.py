"""
Jobs router for job management API.

Endpoints:
- GET /api/jobs - List job snapshots
- POST /api/jobs - Create job (duration, cron or daily)
- GET /api/jobs/{job_id} - Get one job snapshot
- DELETE /api/jobs/{job_id} - Remove job from the scheduler
- POST /api/jobs/{job_id}/run - Run job immediately

Every handler validates its input before calling the scheduler and is a
plain `def`, so FastAPI runs it in the threadpool (scheduler calls may
block). Failures answer {"error": "<message>"}.
"""

import logging
import uuid
from datetime import datetime, time
from functools import partial
from typing import List

from fastapi import APIRouter

from jobscope.scheduler import (
    CronJob,
    DailyJob,
    DurationJob,
    JobDefinition,
    JobNotFoundError,
    SchedulerError,
)

from ..errors import BadRequest, InternalError, NotFound
from ..schemas.jobs import ErrorResponse, JobCreateRequest, JobSnapshot, MessageResponse
from ..services.snapshots import build_job_snapshot, build_snapshots
from .._scheduler_state import get_scheduler_backend


logger = logging.getLogger(__name__)

router = APIRouter()

SUPPORTED_JOB_TYPES = ("duration", "cron", "daily")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def parse_job_id(job_id: str) -> str:
    """Validate a job id; returns its canonical UUID string."""
    try:
        return str(uuid.UUID(job_id))
    except ValueError:
        raise BadRequest("Invalid job ID")


def parse_at_time(value: str) -> time:
    """
    Parse a time of day, trying HH:MM:SS first and HH:MM second.

    Raises:
        ValueError: If neither format matches
    """
    try:
        return datetime.strptime(value, "%H:%M:%S").time()
    except ValueError:
        return datetime.strptime(value, "%H:%M").time()


def build_definition(request: JobCreateRequest) -> JobDefinition:
    """Turn a validated creation request into a job definition."""
    if request.type == "duration":
        if request.interval <= 0:
            raise BadRequest("Interval must be positive for duration jobs")
        return DurationJob(seconds=request.interval)

    if request.type == "cron":
        if not request.cron_expression:
            raise BadRequest("Cron expression is required for cron jobs")
        return CronJob(expression=request.cron_expression)

    if request.type == "daily":
        if request.interval <= 0:
            raise BadRequest("Interval must be positive for daily jobs")
        if not request.at_time:
            raise BadRequest("AtTime is required for daily jobs")
        try:
            at_time = parse_at_time(request.at_time)
        except ValueError:
            raise BadRequest("Invalid time format. Use HH:MM:SS")
        return DailyJob(interval_days=request.interval, at_time=at_time)

    raise BadRequest(
        f"Invalid job type. Supported: {', '.join(SUPPORTED_JOB_TYPES)}"
    )


def placeholder_task(job_name: str) -> None:
    """Body of API-created jobs: they only announce themselves."""
    logger.info(f"Executing job: {job_name}")


@router.get("", response_model=List[JobSnapshot])
def list_jobs():
    """
    List every job currently known to the scheduler.

    Order follows the scheduler's own enumeration.
    """
    return build_snapshots(get_scheduler_backend())


@router.post(
    "",
    response_model=JobSnapshot,
    status_code=201,
    responses=ERROR_RESPONSES,
)
def create_job(request: JobCreateRequest):
    """
    Create a new job.

    Supported types:
    - duration: `interval` seconds between runs
    - cron: `cronExpression` (5 fields)
    - daily: every `interval` days at `atTime` (HH:MM:SS or HH:MM)

    The job body is a placeholder that logs the job name.
    """
    if not request.name:
        raise BadRequest("Job name is required")

    definition = build_definition(request)
    backend = get_scheduler_backend()

    try:
        job = backend.add_job(
            definition,
            partial(placeholder_task, request.name),
            name=request.name,
            tags=request.tags or [],
        )
    except SchedulerError as e:
        raise InternalError(str(e))

    logger.info(f"Created job {request.name} ({job.id}) type={request.type}")
    return build_job_snapshot(job)


@router.get("/{job_id}", response_model=JobSnapshot, responses=ERROR_RESPONSES)
def get_job(job_id: str):
    """Get a single job snapshot."""
    job_id = parse_job_id(job_id)

    job = get_scheduler_backend().get_job(job_id)
    if job is None:
        raise NotFound("Job not found")

    return build_job_snapshot(job)


@router.delete("/{job_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
def delete_job(job_id: str):
    """Remove a job from the scheduler."""
    job_id = parse_job_id(job_id)

    try:
        get_scheduler_backend().remove_job(job_id)
    except JobNotFoundError:
        raise NotFound("Job not found")

    logger.info(f"Deleted job {job_id}")
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/run", response_model=MessageResponse, responses=ERROR_RESPONSES)
def run_job(job_id: str):
    """Run a job immediately without changing its schedule."""
    job_id = parse_job_id(job_id)
    backend = get_scheduler_backend()

    if backend.get_job(job_id) is None:
        raise NotFound("Job not found")

    try:
        backend.run_now(job_id)
    except JobNotFoundError:
        # Removed between lookup and trigger
        raise NotFound("Job not found")
    except SchedulerError as e:
        raise InternalError(str(e))

    logger.info(f"Triggered job {job_id}")
    return MessageResponse(message="Job executed")
