"""Domain exceptions for the object gateway.

Defines domain-level exceptions that represent identifier rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class GatewayException(Exception):
    """Base exception for all gateway errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, key).
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
        """Return a JSON-serialisable representation (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(GatewayException):
    """Raised when an identifier set breaks a key derivation rule.

    The message names the rule that failed and is returned to the caller
    verbatim, so callers can tell which rule broke.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional identifier field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class MissingFileNameException(ValidationException):
    """Raised when an object key is requested without a file name."""

    def __init__(self, message: str = "File Name is Mandatory") -> None:
        super().__init__(message, field="file_name")
        self.error_code = "FILE_NAME_MANDATORY"
