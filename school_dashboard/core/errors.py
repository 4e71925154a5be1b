# PUBLIC_INTERFACE
"""
Error types and unified error response models.
"""
from __future__ import annotations

from fastapi import HTTPException
from pydantic import BaseModel, Field


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Standard error envelope with a stable code."""
    status: str = Field(default="error", description="Always 'error'")
    code: str = Field(..., description="Stable error code")
    message: str = Field(..., description="Human readable error message")
    login_url: str | None = Field(default=None, description="Where the client should re-authenticate")


class ErrorCode:
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL = "INTERNAL"


# PUBLIC_INTERFACE
class IdentityConfigError(RuntimeError):
    """The identity pass-phrase is missing or unusable."""


# PUBLIC_INTERFACE
class DirectoryError(RuntimeError):
    """The school directory (hosted data store) could not answer a query."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# PUBLIC_INTERFACE
def http_error(status_code: int, code: str, message: str, login_url: str | None = None) -> HTTPException:
    """Create HTTPException with a unified error response body."""
    body = ErrorResponse(status="error", code=code, message=message, login_url=login_url)
    return HTTPException(status_code=status_code, detail=body.model_dump(exclude_none=True))
