"""
Live router - real-time job updates over WebSocket.

A client connecting to /ws immediately receives
{"type": "jobs", "data": [...]} and then the same message on every
broadcast tick. Anything the client sends is read only to notice that it
went away.
"""

import logging

from fastapi import APIRouter, WebSocket
from fastapi.concurrency import run_in_threadpool

from ..services.broadcaster import jobs_message
from ..services.connection_registry import get_connection_registry
from ..services.snapshots import snapshot_payload
from .._scheduler_state import get_scheduler_backend


logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def job_updates(websocket: WebSocket):
    """Register an observer and keep it until it disconnects."""
    await websocket.accept()

    # Initial push happens before registering so it never overlaps a tick
    try:
        jobs = await run_in_threadpool(snapshot_payload, get_scheduler_backend())
        await websocket.send_json(jobs_message(jobs))
    except Exception as e:
        logger.warning(f"Error sending initial jobs: {e}")

    registry = get_connection_registry()
    registry.add(websocket)
    logger.info(f"WebSocket client connected. Total clients: {registry.count()}")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        if registry.remove(websocket):
            logger.info(
                f"WebSocket client disconnected. Total clients: {registry.count()}"
            )
