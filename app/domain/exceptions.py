"""Domain exceptions for the campus search application.

Defines domain-level exceptions independent of infrastructure concerns.
The presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CampusException(Exception):
    """Base exception for all campus search errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, collection).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CampusException):
    """Raised when input validation fails (e.g. a record without an id)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(CampusException):
    """Raised when a requested record is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of record (e.g. 'note', 'event').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreError(CampusException):
    """Raised when the record store request fails (transport, auth or server error)."""

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize with the failing collection and HTTP status when known.

        Args:
            message: Description of the failure.
            collection: Collection that was being queried.
            status_code: HTTP status returned by the store, None for transport errors.
        """
        details: dict[str, Any] = {}
        if collection:
            details["collection"] = collection
        if status_code is not None:
            details["status_code"] = status_code
        self.collection = collection
        self.status_code = status_code
        super().__init__(message, "STORE_ERROR", details)


class StoreNotConfiguredException(CampusException):
    """Raised when a request needs the record store but SUPABASE_URL is not set."""

    def __init__(self, message: str = "Record store is not configured") -> None:
        super().__init__(message, "STORE_UNAVAILABLE")
