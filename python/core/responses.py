"""
Unified response formats.
- ApiResponse: envelope returned by every HTTP endpoint
- AdvisoryResult: outcome of a best-effort operation (logged, never raised)
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from pydantic import BaseModel

T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """
    Unified API response wrapper.

    All API endpoints should return this format:
    {
        "success": true/false,
        "data": <payload or null>,
        "error": <error message or null>,
        "code": <error code for errors, null for success>,
        "meta": <optional metadata>
    }
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, data: T = None, meta: Dict[str, Any] = None) -> "ApiResponse[T]":
        """Create successful response."""
        return cls(success=True, data=data, meta=meta)

    @classmethod
    def fail(
        cls,
        message: str,
        code: str = "ERROR",
    ) -> "ApiResponse":
        """Create error response."""
        return cls(success=False, error=message, code=code)

    @classmethod
    def from_exception(cls, exc: "AppException") -> "ApiResponse":
        """Create error response from AppException."""
        return cls(success=False, error=exc.message, code=exc.code)


class AdvisoryResult(BaseModel):
    """
    Result of an advisory operation (job polling, cleanup).

    Failures are reported here instead of raised; callers may ignore it.
    """

    ok: bool
    operation: str
    attempts: int = 0
    error: Optional[str] = None

    @classmethod
    def success(cls, operation: str, attempts: int = 0) -> "AdvisoryResult":
        return cls(ok=True, operation=operation, attempts=attempts)

    @classmethod
    def failure(cls, operation: str, error: str, attempts: int = 0) -> "AdvisoryResult":
        return cls(ok=False, operation=operation, attempts=attempts, error=error)
