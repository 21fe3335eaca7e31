"""
Tests for the live WebSocket channel.
"""

import time
from unittest.mock import patch

from fastapi.testclient import TestClient

from jobscope.api.main import app
from jobscope.api.services.connection_registry import get_connection_registry

from .conftest import FakeJob


def wait_for_count(registry, expected: int, timeout: float = 2.0) -> int:
    """Registration follows the initial push, so poll briefly for it."""
    deadline = time.monotonic() + timeout
    while registry.count() != expected and time.monotonic() < deadline:
        time.sleep(0.01)
    return registry.count()


class TestJobUpdatesSocket:
    """Tests for /ws."""

    def test_initial_push(self, client, fake_backend):
        """A new observer immediately receives the current job list."""
        job = fake_backend.add(FakeJob("alpha", tags=["t"]))

        with client.websocket_connect("/ws") as ws:
            message = ws.receive_json()

        assert message["type"] == "jobs"
        assert len(message["data"]) == 1
        snapshot = message["data"][0]
        assert snapshot["id"] == job.id
        assert snapshot["tags"] == ["t"]
        assert snapshot["nextRun"] == "2026-01-01T12:00:00+00:00"
        assert snapshot["schedule"] == "Every 10 seconds"

    def test_empty_initial_push(self, client):
        with client.websocket_connect("/ws") as ws:
            assert ws.receive_json() == {"type": "jobs", "data": []}

    def test_registered_while_connected(self, client):
        """Connection is in the registry until the client goes away."""
        registry = get_connection_registry()

        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            assert wait_for_count(registry, 1) == 1

        assert registry.count() == 0

    def test_client_messages_are_ignored(self, client):
        registry = get_connection_registry()

        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text("hello")
            ws.send_text("still here")
            assert wait_for_count(registry, 1) == 1

    def test_initial_snapshot_failure_is_logged(self, client):
        """A failed first push is logged and the channel stays open."""
        with patch(
            "jobscope.api.routers.live.snapshot_payload",
            side_effect=RuntimeError("scheduler unavailable"),
        ) as mock_payload:
            with patch("jobscope.api.routers.live.logger") as mock_logger:
                with client.websocket_connect("/ws") as ws:
                    ws.send_text("ping")

        mock_payload.assert_called_once()
        mock_logger.warning.assert_called_once()
        assert "Error sending initial jobs" in mock_logger.warning.call_args[0][0]
        assert get_connection_registry().count() == 0

    def test_not_registered_during_initial_push(self, client):
        """The initial push completes before ticks can reach the connection."""
        counts_during_push = []

        def payload(backend):
            counts_during_push.append(get_connection_registry().count())
            return []

        with patch("jobscope.api.routers.live.snapshot_payload", side_effect=payload):
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()
                assert wait_for_count(get_connection_registry(), 1) == 1

        assert counts_during_push == [0]


class TestLiveUpdatesWithLifespan:
    """The running app pushes ticks to connected observers."""

    def test_receives_tick_after_initial_push(self, fake_backend):
        job = fake_backend.add(FakeJob("alpha"))

        with patch("jobscope.api.main.BROADCAST_INTERVAL_SECONDS", 0.05):
            with TestClient(app) as client:
                with client.websocket_connect("/ws") as ws:
                    initial = ws.receive_json()
                    tick = ws.receive_json()

        assert initial["type"] == "jobs"
        assert tick["type"] == "jobs"
        assert [j["id"] for j in tick["data"]] == [job.id]
        assert fake_backend.list_calls >= 2
