"""
Exception hierarchy for the debitor store.

Provides layered exception structure for validation, data access and
classified store failures. All exceptions carry a details dict so the
context survives into logs.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the data-access core
"""

from enum import Enum
from typing import Any


class DebitorStoreException(Exception):
    """Base exception for all debitor store errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DebitorStoreException):
    """Raised when a caller-supplied argument violates a precondition."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Argument or field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class DataAccessError(DebitorStoreException):
    """Raised by the repository when a read fails outside the guard's control."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class FailureKind(str, Enum):
    """Category of a failure that trips the connection latch."""

    TIMEOUT = "timeout"
    VENDOR_ERROR = "vendor_error"
    GENERIC = "generic"


class StoreFailure(DebitorStoreException):
    """
    Base for classified failures that trip the connection latch.

    The guard absorbs these and hands them back on its result; they are only
    raised when a caller asks for it via GuardResult.raise_for_status().
    """

    kind: FailureKind = FailureKind.GENERIC

    def __init__(
        self,
        message: str,
        vendor_code: int | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store failure.

        Args:
            message: Underlying driver or exception message
            vendor_code: Vendor-specific error code, where the driver reports one
            details: Additional context
        """
        details = details or {}
        details["kind"] = self.kind.value
        if vendor_code is not None:
            details["vendor_code"] = vendor_code
        self.vendor_code = vendor_code
        super().__init__(message, details)


class ConnectionTimeoutError(StoreFailure):
    """Raised when the store is unreachable within the driver's timeout window."""

    kind = FailureKind.TIMEOUT


class StoreError(StoreFailure):
    """Raised when the store returns any other driver-level error."""

    kind = FailureKind.VENDOR_ERROR


class UnclassifiedStoreError(StoreFailure):
    """Raised for any other failure while opening or executing."""

    kind = FailureKind.GENERIC


class ShortCircuitedError(DebitorStoreException):
    """Raised on request when a call was skipped because the latch is tripped."""

    def __init__(self, message: str = "Database connection already failed; call skipped") -> None:
        super().__init__(message)
