"""
FastAPI application entry point.

Monitoring and control surface for a scheduler that lives in this process.

Lifespan:
- startup: make sure a scheduler backend exists, start the job broadcaster
- shutdown: stop the broadcaster, drop live connections
The scheduler itself belongs to whoever installed it and is not shut down here.
"""

from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobscope import __version__
from jobscope.config import BROADCAST_INTERVAL_SECONDS, CORS_ORIGINS, UI_TITLE
from .errors import register_error_handlers
from .routers import jobs, live, scheduler
from .schemas.jobs import UIConfigResponse
from .services.broadcaster import startup_broadcaster, shutdown_broadcaster
from .services.connection_registry import (
    get_connection_registry,
    reset_connection_registry,
)
from .services.snapshots import snapshot_payload
from ._scheduler_state import init_scheduler_backend


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown of:
    - scheduler backend (default one only when none was installed)
    - job broadcaster background task
    """
    backend = init_scheduler_backend()
    await startup_broadcaster(
        get_connection_registry(),
        partial(snapshot_payload, backend),
        interval=BROADCAST_INTERVAL_SECONDS,
    )

    yield

    await shutdown_broadcaster()
    reset_connection_registry()


# Tag metadata for Swagger UI
tags_metadata = [
    {
        "name": "jobs",
        "description": "Job snapshots and job control - list, inspect, create, delete, run now",
    },
    {
        "name": "scheduler",
        "description": "Global scheduler control - start and stop all scheduled execution",
    },
    {
        "name": "live",
        "description": "WebSocket channel pushing job snapshots every broadcast tick",
    },
]

app = FastAPI(
    title="Job Scheduler Monitor API",
    lifespan=lifespan,
    description="""
## Job Scheduler Monitor API

Live view and control plane for the jobs of an in-process scheduler.

### Features
- **Snapshots**: next/last run, upcoming runs, tags, schedule description
- **Control**: create, delete, run now, start/stop the scheduler
- **Live updates**: `ws://<host>/ws` pushes `{"type": "jobs", "data": [...]}` every second

### Errors
Every failure answers `{"error": "<message>"}` with status 400, 404 or 500.

### Usage
```bash
# Start server with demo jobs
python -m jobscope --port 8080

# Create a job
curl -X POST http://localhost:8080/api/jobs \\
  -H "Content-Type: application/json" \\
  -d '{"name": "report", "type": "daily", "interval": 1, "atTime": "14:30"}'
```

### Note
There is no authentication. Bind to localhost or put it behind a proxy.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    allow_credentials=True,
)

register_error_handlers(app)

app.state.title = UI_TITLE


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/api/config", response_model=UIConfigResponse)
async def ui_config():
    """UI settings (page title) for the frontend."""
    return UIConfigResponse(title=app.state.title)


app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(scheduler.router, prefix="/api/scheduler", tags=["scheduler"])
app.include_router(live.router, tags=["live"])
