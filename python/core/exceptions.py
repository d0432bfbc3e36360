"""
Custom exception hierarchy for the application.
All exceptions inherit from AppException for unified handling.
"""

from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        status_code: HTTP status code for API responses
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: str = "ERROR",
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# === Not Found Errors ===

class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, entity: str, identifier: str = None):
        message = f"{entity} not found"
        if identifier:
            message = f"{entity} '{identifier}' not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404
        )


class DetectorNotConfiguredError(NotFoundError):
    def __init__(self, detector: str):
        super().__init__("Detector", detector)


# === Database Errors ===

class DatabaseError(AppException):
    """Database operation failed."""

    def __init__(self, message: str, operation: str = None):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message=f"Database error: {message}",
            code="DATABASE_ERROR",
            status_code=500,
            details=details
        )


# === Backend Errors ===

class BackendError(AppException):
    """Request to an external recognition backend failed."""

    def __init__(
        self,
        message: str,
        backend: str = None,
        operation: str = None,
        upstream_status: int = None
    ):
        details = {}
        if backend:
            details["backend"] = backend
        if operation:
            details["operation"] = operation
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            message=message,
            code="BACKEND_ERROR",
            status_code=502,
            details=details
        )


# === Recognition Errors ===

class RecognitionError(AppException):
    """Face recognition operation failed."""

    def __init__(self, message: str, phase: str = None):
        details = {"phase": phase} if phase else {}
        super().__init__(
            message=message,
            code="RECOGNITION_ERROR",
            status_code=500,
            details=details
        )


class NoFacesDetectedError(RecognitionError):
    def __init__(self):
        super().__init__(
            message="No face found in image",
            phase="detection"
        )
