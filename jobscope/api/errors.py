"""
API error taxonomy.

Every failing endpoint answers with {"error": "<message>"} and one of
three statuses:
- BadRequest (400): malformed id, missing/invalid field, unsupported type
- NotFound (404): no job with the given id
- InternalError (500): the scheduler rejected a well-formed request
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base API error carrying an HTTP status and a client-facing message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug(f"Rejected body for {request.method} {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


def register_error_handlers(app: FastAPI) -> None:
    """Install the {"error": ...} handlers on an application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
