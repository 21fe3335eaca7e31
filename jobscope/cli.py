"""
Command-line entry point.

Starts an APScheduler backend (optionally loaded with demo jobs), installs
it into the API, and serves the monitor with uvicorn until interrupted.
"""

import argparse
import logging
from typing import List, Optional

import uvicorn

from jobscope import config
from jobscope.infra.logging_config import setup_logging
from jobscope.scheduler import APSchedulerBackend


logger = logging.getLogger("jobscope.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobscope",
        description="Live monitoring and control UI for scheduled jobs",
    )
    parser.add_argument("--host", default=config.HOST, help="Interface to bind")
    parser.add_argument("--port", type=int, default=config.PORT, help="Port to run the server on")
    parser.add_argument("--title", default=config.UI_TITLE, help="Custom title for the UI")
    parser.add_argument(
        "--no-demo",
        action="store_true",
        help="Start with an empty scheduler instead of the demo jobs",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)

    # Imported late so the app module sees the configured logging
    from jobscope.api._scheduler_state import set_scheduler_backend
    from jobscope.api.main import app
    from jobscope.demo import register_demo_jobs

    backend = APSchedulerBackend()
    if not args.no_demo:
        registered = register_demo_jobs(backend)
        logger.info(f"Registered {registered} demo jobs")

    backend.start()
    set_scheduler_backend(backend)
    app.state.title = args.title

    logger.info("=" * 70)
    logger.info("Job Scheduler Monitor Started")
    logger.info("=" * 70)
    logger.info(f"API:          http://{args.host}:{args.port}/api")
    logger.info(f"Docs:         http://{args.host}:{args.port}/docs")
    logger.info(f"WebSocket:    ws://{args.host}:{args.port}/ws")
    logger.info(f"Total Jobs:   {len(backend.jobs())}")
    logger.info("=" * 70)

    try:
        uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received - shutting down")
    finally:
        backend.shutdown()
        logger.info("Server stopped gracefully")

    return 0
