"""
Custom exceptions for the application.

Defines hierarchy of application-specific exceptions for
clean error handling and proper HTTP status code mapping.
"""

from typing import Any, Dict, Optional


class BackfillDashboardException(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code to return
            details: Additional error context
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class FormValidationError(BackfillDashboardException):
    """
    Form validation error.

    Raised when a submitted form is missing a required field.
    """

    def __init__(
        self,
        field: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["field"] = field
        super().__init__(
            message=message or f"Missing required form field '{field}'",
            status_code=422,
            details=details,
        )


class BackfillNotFoundError(BackfillDashboardException):
    """
    Backfill not found error.

    Raised when the backend has no backfill run with the requested id.
    """

    def __init__(self, backfill_id: Any, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        details["backfill_id"] = str(backfill_id)
        super().__init__(
            message=f"Backfill with id '{backfill_id}' not found",
            status_code=404,
            details=details,
        )


class BackendServiceError(BackfillDashboardException):
    """
    Backend service error.

    Raised when the backfill backend rejects a call, e.g. a create request
    with an invalid range or an unknown service.
    """

    def __init__(
        self,
        message: str = "Backfill backend call failed",
        backend_status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if backend_status_code is not None:
            details["backend_status_code"] = backend_status_code
        super().__init__(message=message, status_code=502, details=details)


class BackendUnavailableError(BackfillDashboardException):
    """
    Backend unavailable error.

    Raised when the backfill backend cannot be reached at all.
    """

    def __init__(
        self,
        message: str = "Backfill backend is unavailable",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=503, details=details)
