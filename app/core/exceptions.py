"""Application exceptions and FastAPI exception handlers.

All handlers answer with RFC 7807 Problem Details.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from app.core.logging import get_logger
from app.core.problem_details import (
    ERROR_TYPES,
    ProblemDetailResponse,
    problem_response,
)

logger = get_logger(__name__)


# =============================================================================
# Exception Classes
# =============================================================================


class OfferInsightsError(Exception):
    """Base exception for OfferInsights application errors.

    Each subclass maps to an RFC 7807 problem type URI and HTTP status.
    """

    error_type_uri: str = ERROR_TYPES["INTERNAL_ERROR"]

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            status_code: HTTP status code.
            details: Additional error context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    @property
    def title(self) -> str:
        """RFC 7807 title - short summary of problem type."""
        return self.code.replace("_", " ").title()


class NotFoundError(OfferInsightsError):
    """Requested resource does not exist."""

    error_type_uri: str = ERROR_TYPES["NOT_FOUND"]

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code="NOT_FOUND", status_code=404, details=details)


class ValidationError(OfferInsightsError):
    """Input failed domain validation (e.g. malformed country code)."""

    error_type_uri: str = ERROR_TYPES["VALIDATION_ERROR"]

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, code="VALIDATION_ERROR", status_code=422, details=details
        )


class BadRequestError(OfferInsightsError):
    """Request is well-formed but cannot be served."""

    error_type_uri: str = ERROR_TYPES["BAD_REQUEST"]

    def __init__(
        self,
        message: str = "Bad request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code="BAD_REQUEST", status_code=400, details=details)


class UpstreamServiceError(OfferInsightsError):
    """A third-party service we proxy to failed or answered garbage.

    Callers may retry later; the failure is not caused by the request.
    """

    error_type_uri: str = ERROR_TYPES["UPSTREAM_ERROR"]

    def __init__(
        self,
        message: str = "Upstream service failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, code="UPSTREAM_ERROR", status_code=502, details=details
        )


# =============================================================================
# Exception Handlers (RFC 7807)
# =============================================================================


async def offerinsights_exception_handler(
    _request: Request,
    exc: OfferInsightsError,
) -> ProblemDetailResponse:
    """Render an OfferInsightsError as a problem document."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app.error_handled",
        error=exc.message,
        error_type=type(exc).__name__,
        error_code=exc.code,
        status_code=exc.status_code,
        details=exc.details,
    )

    return problem_response(
        status=exc.status_code,
        title=exc.title,
        detail=exc.message,
        error_code=exc.code,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> ProblemDetailResponse:
    """Render Pydantic request validation errors with a field-level ``errors`` list.

    Args:
        request: FastAPI request object.
        exc: Pydantic validation error.

    Returns:
        422 problem document.
    """
    field_errors: list[dict[str, str]] = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_path = ".".join(str(part) for part in loc if part != "body")
        field_errors.append(
            {
                "field": field_path,
                "message": str(error.get("msg", "Validation failed")),
                "type": str(error.get("type", "unknown")),
            }
        )

    logger.warning(
        "app.validation_error",
        error_count=len(field_errors),
        path=str(request.url.path),
        fields=[e["field"] for e in field_errors],
    )

    return problem_response(
        status=422,
        title="Validation Error",
        detail=f"Request validation failed with {len(field_errors)} error(s).",
        error_code="VALIDATION_ERROR",
        errors=field_errors,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> ProblemDetailResponse:
    """Render any unexpected exception as a generic 500 problem document."""
    logger.error(
        "app.unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )

    return problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred. Contact support with the request_id.",
        error_code="INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all problem-details handlers on the app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(OfferInsightsError, offerinsights_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
