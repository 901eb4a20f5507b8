"""
Standard API Response Models
Consistent response structure across all endpoints
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """
    Error body returned for every rejected request.

    Attributes:
        code: Machine-readable error code (one of the ErrorKind values)
        message: Human-readable explanation of why the request was rejected
        details: Additional error context (optional)
        correlation_id: Request id echoed from X-Request-ID (optional)
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        None,
        description="Additional error context",
    )
    correlation_id: str | None = Field(None, description="Request correlation id")


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response wrapper.

    Attributes:
        success: Always True for success responses
        data: Response payload
        message: Optional success message
    """

    model_config = ConfigDict(frozen=True)

    success: bool = Field(True, description="Indicates successful operation")
    data: T = Field(..., description="Response payload")
    message: str | None = Field(None, description="Optional success message")


# OpenAPI documentation for the error statuses every mutating route can return
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    403: {"model": ErrorDetail, "description": "Role not allowed"},
    404: {"model": ErrorDetail, "description": "Referenced record not found"},
    409: {"model": ErrorDetail, "description": "Invalid transition or conflict"},
    422: {"model": ErrorDetail, "description": "Validation failed or pricing rule missing"},
}
