"""
Job broadcaster.

Background task that pushes the current job snapshot to every live
observer on a fixed cadence.

Each tick:
- no observers -> nothing is built or sent
- otherwise one snapshot is built (in a worker thread, scheduler calls may
  block) and sent to all observers concurrently
- an observer whose send fails is removed from the registry and closed;
  the remaining observers still get the tick

Ticks are independent. There is no ordering with control requests: a job
deleted through the API may still show up in a tick that raced the delete.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool

from jobscope.config import BROADCAST_INTERVAL_SECONDS

from .connection_registry import ConnectionRegistry


logger = logging.getLogger(__name__)

SnapshotSource = Callable[[], List[Dict[str, Any]]]


def jobs_message(jobs: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Envelope used for every push on the live channel."""
    return {"type": "jobs", "data": jobs}


class JobBroadcaster:
    """
    Periodically broadcasts job snapshots to registered connections.

    Connections only need an awaitable send_json(data) and close().
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        snapshot_source: SnapshotSource,
        interval: float = BROADCAST_INTERVAL_SECONDS,
    ):
        """
        Initialize broadcaster.

        Args:
            registry: Connections to push to
            snapshot_source: Callable returning the JSON-ready job list
            interval: Seconds between ticks
        """
        self.registry = registry
        self.snapshot_source = snapshot_source
        self.interval = interval

        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the broadcast loop on the running event loop."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._broadcast_loop())
        logger.info(f"[Broadcaster] Started with interval: {self.interval}s")

    async def stop(self) -> None:
        """Cancel the broadcast loop."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("[Broadcaster] Stopped")

    async def _broadcast_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self.interval)
            try:
                await self.broadcast_once()
            except Exception as e:
                logger.error(f"[Broadcaster] Tick failed: {e}")

    async def broadcast_once(self) -> int:
        """
        Run a single broadcast tick.

        Returns:
            Number of connections the snapshot was delivered to
        """
        if self.registry.count() == 0:
            return 0

        jobs = await run_in_threadpool(self.snapshot_source)
        message = jobs_message(jobs)

        targets: list = []
        self.registry.for_each(targets.append)

        results = await asyncio.gather(*(self._send(conn, message) for conn in targets))
        return sum(1 for delivered in results if delivered)

    async def _send(self, conn, message: Dict[str, Any]) -> bool:
        try:
            await conn.send_json(message)
            return True
        except Exception as e:
            logger.warning(f"[Broadcaster] Error broadcasting to client: {e}")

        if self.registry.remove(conn):
            await self._close(conn)
            logger.info(
                f"[Broadcaster] Dropped client. Total clients: {self.registry.count()}"
            )
        return False

    async def _close(self, conn) -> None:
        try:
            await conn.close()
        except Exception as e:
            logger.debug(f"[Broadcaster] Close after failed send also failed: {e}")


# Global broadcaster instance
_broadcaster: Optional[JobBroadcaster] = None


def get_broadcaster() -> Optional[JobBroadcaster]:
    """Get the running broadcaster, if any."""
    return _broadcaster


async def startup_broadcaster(
    registry: ConnectionRegistry,
    snapshot_source: SnapshotSource,
    interval: float = BROADCAST_INTERVAL_SECONDS,
) -> JobBroadcaster:
    """Create and start the broadcaster. Called on FastAPI startup."""
    global _broadcaster
    if _broadcaster is None:
        _broadcaster = JobBroadcaster(registry, snapshot_source, interval=interval)
    await _broadcaster.start()
    return _broadcaster


async def shutdown_broadcaster() -> None:
    """Stop the broadcaster. Called on FastAPI shutdown."""
    global _broadcaster
    if _broadcaster is not None:
        await _broadcaster.stop()
        _broadcaster = None
