import logging
import traceback
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from fleet.schemas.common import ErrorResponse, ErrorBody, ErrorDetail
from fleet.utils.exceptions import AppException, ErrorCode

logger = logging.getLogger(__name__)

# Seconds a client should wait before retrying a write during a backend outage
BACKEND_RETRY_AFTER = "30"


def _error(status_code: int, message: str, body: ErrorBody, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, error=body).model_dump(mode="json"),
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render every AppException subclass into the standard error envelope."""
    error = exc.detail.get("error") or {"code": ErrorCode.INTERNAL_SERVER_ERROR}
    headers = None
    if error.get("code") == ErrorCode.BACKEND_UNAVAILABLE:
        headers = {"Retry-After": BACKEND_RETRY_AFTER}
        logger.warning(f"{request.method} {request.url.path} failed: remote data service unavailable")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.detail.get("message", "An error occurred"),
            "error": error,
        },
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Request schema failures (422), one detail per offending field.
    loc looks like ("body", "fuel_required") or ("query", "page").
    """
    details = [
        ErrorDetail(
            field=".".join(str(part) for part in e.get("loc", ()) if part != "body") or "unknown",
            message=e.get("msg", "Invalid value"),
        )
        for e in exc.errors()
    ]
    return _error(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error. Please check your input.",
        ErrorBody(
            code=ErrorCode.VALIDATION_ERROR,
            details=details,
            field=details[0].field if len(details) == 1 else None,
        ),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations from the remote database; the raw DB message stays in the log."""
    logger.warning(f"IntegrityError on {request.method} {request.url.path}: {exc.orig}")
    return _error(
        status.HTTP_409_CONFLICT,
        "The record conflicts with existing data (duplicate value or missing reference).",
        ErrorBody(code=ErrorCode.DUPLICATE_ENTRY),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}\n"
        f"{''.join(traceback.format_exception(exc))}"
    )
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        ErrorBody(code=ErrorCode.INTERNAL_SERVER_ERROR),
    )
