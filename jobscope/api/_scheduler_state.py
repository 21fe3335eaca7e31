"""
Scheduler backend state for API integration.

Provides singleton access to the SchedulerBackend the API controls.
The process that owns the jobs installs its backend before the app starts
(see jobscope.__main__); when nothing was installed, an empty APScheduler
backend is created and started during FastAPI lifespan.

Usage:
    from ._scheduler_state import get_scheduler_backend, set_scheduler_backend

    # Before serving:
    set_scheduler_backend(APSchedulerBackend(my_scheduler))

    # In routers:
    backend = get_scheduler_backend()
"""

import logging
from typing import Optional

from jobscope.scheduler import APSchedulerBackend, SchedulerBackend


logger = logging.getLogger(__name__)

# Global scheduler backend instance
_scheduler_backend: Optional[SchedulerBackend] = None


def set_scheduler_backend(backend: SchedulerBackend) -> SchedulerBackend:
    """
    Install the backend the API should control.

    Replaces any previously installed backend without shutting it down;
    the caller owns the backend's lifecycle.
    """
    global _scheduler_backend
    _scheduler_backend = backend
    return backend


def init_scheduler_backend() -> SchedulerBackend:
    """
    Return the installed backend, creating and starting a default one if
    none was installed.

    Called during FastAPI lifespan startup.
    """
    global _scheduler_backend

    if _scheduler_backend is not None:
        return _scheduler_backend

    backend = APSchedulerBackend()
    backend.start()
    logger.info("No scheduler installed, started an empty APScheduler backend")
    _scheduler_backend = backend
    return backend


def get_scheduler_backend() -> SchedulerBackend:
    """
    Get the scheduler backend singleton.

    Raises:
        RuntimeError: If no backend has been installed or initialized
    """
    if _scheduler_backend is None:
        raise RuntimeError(
            "Scheduler backend not initialized. "
            "Call set_scheduler_backend() or init_scheduler_backend() first."
        )

    return _scheduler_backend


def clear_scheduler_backend() -> None:
    """Forget the installed backend without touching its lifecycle."""
    global _scheduler_backend
    _scheduler_backend = None
