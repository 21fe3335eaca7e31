"""
API services - live observer plumbing and snapshot building.
"""

from .connection_registry import (
    ConnectionRegistry,
    ReadWriteLock,
    get_connection_registry,
    reset_connection_registry,
)
from .broadcaster import (
    JobBroadcaster,
    jobs_message,
    get_broadcaster,
    startup_broadcaster,
    shutdown_broadcaster,
)
from .snapshots import (
    build_job_snapshot,
    build_snapshots,
    snapshot_payload,
    format_time,
)

__all__ = [
    "ConnectionRegistry",
    "ReadWriteLock",
    "get_connection_registry",
    "reset_connection_registry",
    "JobBroadcaster",
    "jobs_message",
    "get_broadcaster",
    "startup_broadcaster",
    "shutdown_broadcaster",
    "build_job_snapshot",
    "build_snapshots",
    "snapshot_payload",
    "format_time",
]
