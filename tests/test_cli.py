"""
Tests for the command-line entry point.
"""

from unittest.mock import MagicMock, patch

import pytest

from jobscope import config
from jobscope.cli import build_parser, main


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.host == config.HOST
        assert args.port == config.PORT
        assert args.title == config.UI_TITLE
        assert args.no_demo is False

    def test_overrides(self):
        args = build_parser().parse_args(
            ["--port", "9090", "--title", "Nightly", "--no-demo"]
        )

        assert args.port == 9090
        assert args.title == "Nightly"
        assert args.no_demo is True


class TestMain:
    """Tests for main() wiring, with uvicorn and the scheduler mocked."""

    @pytest.fixture
    def mocks(self):
        from jobscope.api._scheduler_state import clear_scheduler_backend
        from jobscope.api.main import app

        original_title = app.state.title
        backend = MagicMock()
        backend.jobs.return_value = []

        with patch("jobscope.cli.setup_logging"), \
             patch("jobscope.cli.uvicorn.run") as mock_run, \
             patch("jobscope.cli.APSchedulerBackend", return_value=backend), \
             patch("jobscope.demo.register_demo_jobs", return_value=14) as mock_demo:
            yield {"backend": backend, "run": mock_run, "demo": mock_demo, "app": app}

        app.state.title = original_title
        clear_scheduler_backend()

    def test_serves_installed_backend(self, mocks):
        from jobscope.api._scheduler_state import get_scheduler_backend

        assert main(["--port", "9999", "--title", "Nightly"]) == 0

        backend = mocks["backend"]
        backend.start.assert_called_once()
        assert get_scheduler_backend() is backend
        assert mocks["app"].state.title == "Nightly"
        mocks["demo"].assert_called_once_with(backend)

        _, kwargs = mocks["run"].call_args
        assert kwargs["port"] == 9999

    def test_no_demo(self, mocks):
        main(["--no-demo"])

        mocks["demo"].assert_not_called()

    def test_scheduler_shut_down_after_server_exits(self, mocks):
        mocks["run"].side_effect = KeyboardInterrupt

        assert main([]) == 0
        mocks["backend"].shutdown.assert_called_once()
