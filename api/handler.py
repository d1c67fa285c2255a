"""Exception handlers for the intake API.

Every error leaves the API in the same envelope as a success:
``{"success": false, "message": ..., "data": ...}``.
"""
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from orchestrator.exceptions import IntakeException

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, data: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, "data": data})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request body: report each offending field by its dotted location."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]) or "body",
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        {"validation_errors": errors},
    )


async def intake_exception_handler(request: Request, exc: IntakeException) -> JSONResponse:
    """Handle intake configuration errors such as an unknown mode."""
    logger.warning(f"Intake request rejected on {request.url.path}: {exc.message}")
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.data)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
