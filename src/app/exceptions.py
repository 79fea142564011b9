# src/app/exceptions.py
"""Application error types and their HTTP mapping.

Services and repositories raise these; only the handlers registered here
turn them into responses, so business code never builds HTTP errors.

    ProofingError (500)
    ├── ValidationError  -> 400
    ├── NotFoundError    -> 404
    └── DatabaseError    -> 500
"""
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProofingError(Exception):
    """Base class for all application errors.

    ``message`` is safe to return to the caller, ``context`` is only logged.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ProofingError):
    """Client input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "Missing required fields",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ProofingError):
    """Resource is absent or not owned by the caller.

    Both cases share this error so callers cannot discover ids they
    do not own.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource


class DatabaseError(ProofingError):
    """Storage failed; details stay in the server log."""

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(ProofingError)
    async def proofing_error_handler(request: Request, exc: ProofingError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message} {exc.context}")
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        fields = [
            ".".join(str(part) for part in err.get("loc", ())[1:])
            for err in errors
        ]
        if errors and all(err.get("type") == "missing" for err in errors):
            detail = "Missing required fields"
        else:
            detail = "Invalid request fields"
        logger.info(f"Rejected request to {request.url.path}: {detail.lower()} {fields}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": detail, "fields": fields},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return app
