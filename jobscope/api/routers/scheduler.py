"""
Scheduler router for scheduler control APIs.

Endpoints under /api/scheduler/* for start and stop.

Both calls are forwarded to the backend as-is; whether repeating them is
harmless is the scheduler's business. Stop pauses execution and keeps
every job registered.
"""

import logging

from fastapi import APIRouter

from jobscope.scheduler import SchedulerError

from ..errors import InternalError
from ..schemas.jobs import ErrorResponse, MessageResponse
from .._scheduler_state import get_scheduler_backend


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/stop", response_model=MessageResponse, responses={500: {"model": ErrorResponse}})
def stop_scheduler():
    """Stop all scheduled execution."""
    try:
        get_scheduler_backend().stop()
    except SchedulerError as e:
        raise InternalError(str(e))

    logger.info("Scheduler stopped via API")
    return MessageResponse(message="Scheduler stopped")


@router.post("/start", response_model=MessageResponse, responses={500: {"model": ErrorResponse}})
def start_scheduler():
    """Start (or resume) scheduled execution."""
    try:
        get_scheduler_backend().start()
    except SchedulerError as e:
        raise InternalError(str(e))

    logger.info("Scheduler started via API")
    return MessageResponse(message="Scheduler started")
