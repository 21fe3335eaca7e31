"""
API Schemas package.

Pydantic models for request/response validation.
"""

from .jobs import (
    JobSnapshot,
    JobCreateRequest,
    MessageResponse,
    ErrorResponse,
    UIConfigResponse,
)

__all__ = [
    "JobSnapshot",
    "JobCreateRequest",
    "MessageResponse",
    "ErrorResponse",
    "UIConfigResponse",
]
