"""
Custom Exception Classes for Extra Fields

This module defines custom exceptions for consistent error handling
between the services, the request processors and the HTTP layer.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes, stable across releases."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    ACCESS_DENIED = "ACCESS_DENIED"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # Connector / bootstrap codes
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CORE_NOT_FOUND = "CORE_NOT_FOUND"
    INIT_FAILED = "INIT_FAILED"
    INVALID_ACTION = "INVALID_ACTION"
    PROCESSOR_NOT_FOUND = "PROCESSOR_NOT_FOUND"
    EXCEPTION_CAUGHT = "EXCEPTION_CAUGHT"


class ExtraFieldsError(Exception):
    """Base exception class for all Extra Fields exceptions"""

    error_code = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(ExtraFieldsError):
    """Raised when input fails a business rule (empty or duplicate name)"""

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        self.field = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class NotFoundError(ExtraFieldsError):
    """Base class for resource not found errors"""

    error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class FieldNotFoundError(NotFoundError):
    """Raised when a field is not found"""

    def __init__(self, field_id: Any | None = None):
        super().__init__(resource_type="Field", resource_id=field_id)


# ============================================================================
# Persistence & Storage Exceptions
# ============================================================================


class PersistenceError(ExtraFieldsError):
    """Raised when a save or delete reports failure without raising"""

    error_code = ErrorCode.PERSISTENCE_FAILED

    def __init__(self, message: str = "The object could not be saved", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


class StorageError(ExtraFieldsError):
    """Raised when the database layer fails (wraps SQLAlchemyError)"""

    error_code = ErrorCode.STORAGE_ERROR

    def __init__(self, message: str = "A database error occurred", code: str | None = None):
        details = {"code": code} if code else {}
        self.code = code
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


class UnexpectedError(ExtraFieldsError):
    """Raised for any other failure surfaced at a boundary"""

    error_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str = "An unexpected error occurred", location: str | None = None):
        details = {"location": location} if location else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(ExtraFieldsError):
    """Raised when the environment or bootstrap configuration is missing"""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.CONFIG_NOT_FOUND):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=error_code,
        )
