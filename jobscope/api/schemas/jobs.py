"""
Job API schemas.

Wire names are camelCase (nextRun, cronExpression, ...); Python attributes
are snake_case with aliases.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class JobSnapshot(BaseModel):
    """Point-in-time view of one scheduled job."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique job identifier (UUID)")
    name: str = Field(..., description="Job display name")
    tags: List[str] = Field(default_factory=list, description="Job labels")
    next_run: str = Field(
        default="",
        alias="nextRun",
        description="Next run timestamp (RFC 3339), empty if none"
    )
    last_run: str = Field(
        default="",
        alias="lastRun",
        description="Last run timestamp (RFC 3339), empty if never run"
    )
    next_runs: List[str] = Field(
        default_factory=list,
        alias="nextRuns",
        description="Up to 5 upcoming run timestamps, soonest first"
    )
    schedule: str = Field(..., description="Human-readable schedule description")
    schedule_detail: str = Field(
        ...,
        alias="scheduleDetail",
        description="Technical schedule detail (interval, cron expression, ...)"
    )


class JobCreateRequest(BaseModel):
    """
    Request to create a new job.

    Type-specific checks (positive interval, cron expression, time format)
    happen in the router so every failure carries its own error message.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", description="Job display name (required)")
    type: str = Field(
        default="",
        description="Job type: duration, cron or daily"
    )
    interval: int = Field(
        default=0,
        description="Seconds between runs (duration) or days between runs (daily)"
    )
    cron_expression: str = Field(
        default="",
        alias="cronExpression",
        description="5-field crontab expression (cron jobs)"
    )
    at_time: str = Field(
        default="",
        alias="atTime",
        description="Time of day as HH:MM:SS or HH:MM (daily jobs)"
    )
    tags: Optional[List[str]] = Field(default=None, description="Job labels")


class MessageResponse(BaseModel):
    """Generic success response."""

    message: str


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint."""

    error: str


class UIConfigResponse(BaseModel):
    """UI settings exposed to the frontend."""

    title: str
