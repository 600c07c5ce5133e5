"""RFC 7807 Problem Details for HTTP APIs.

Every error leaving the API (application errors, request validation errors
and unexpected failures) is rendered as ``application/problem+json`` so the
dashboard can show a consistent message and quote the request_id.

Reference: https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.core.logging import request_id_ctx

# Relative base keeps type URIs portable across deployments
ERROR_TYPE_BASE = "/errors"

ERROR_TYPES = {
    "NOT_FOUND": f"{ERROR_TYPE_BASE}/not-found",
    "VALIDATION_ERROR": f"{ERROR_TYPE_BASE}/validation",
    "BAD_REQUEST": f"{ERROR_TYPE_BASE}/bad-request",
    "UPSTREAM_ERROR": f"{ERROR_TYPE_BASE}/upstream",
    "INTERNAL_ERROR": f"{ERROR_TYPE_BASE}/internal",
}


class ProblemDetail(BaseModel):
    """RFC 7807 problem document.

    Attributes:
        type: URI identifying the error category.
        title: Short summary of the problem type.
        status: HTTP status code.
        detail: Explanation specific to this occurrence.
        instance: URI reference for this occurrence.
        errors: Field-level validation errors (422 only).
        code: Machine-readable error code.
        request_id: Correlation ID of the failing request.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="about:blank", description="Problem type URI")
    title: str = Field(..., description="Short summary of the problem type")
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str | None = Field(None, description="Occurrence-specific explanation")
    instance: str | None = Field(None, description="URI of this occurrence")
    errors: list[dict[str, Any]] | None = Field(None, description="Field-level errors")
    code: str | None = Field(None, description="Machine-readable error code")
    request_id: str | None = Field(None, description="Request correlation ID")


class ProblemDetailResponse(JSONResponse):
    """JSON response with the RFC 7807 media type."""

    media_type = "application/problem+json"


def create_problem_detail(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
) -> ProblemDetail:
    """Create a ProblemDetail bound to the current request.

    Args:
        status: HTTP status code.
        title: Short problem summary.
        detail: Detailed explanation (optional).
        error_code: Internal error code used to pick the type URI.
        errors: Field-level validation errors (optional).

    Returns:
        Configured ProblemDetail instance.
    """
    request_id = request_id_ctx.get()

    return ProblemDetail(
        type=ERROR_TYPES.get(error_code, f"{ERROR_TYPE_BASE}/{error_code.lower()}"),
        title=title,
        status=status,
        detail=detail,
        instance=f"/requests/{request_id}" if request_id else None,
        errors=errors,
        code=error_code,
        request_id=request_id,
    )


def problem_response(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
) -> ProblemDetailResponse:
    """Render a problem document as a ``application/problem+json`` response."""
    problem = create_problem_detail(
        status=status,
        title=title,
        detail=detail,
        error_code=error_code,
        errors=errors,
    )

    return ProblemDetailResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
    )
