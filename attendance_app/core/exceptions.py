"""
Custom Exceptions for the Attendance Analytics Application

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from typing import Any, Dict, Iterable, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Workflow errors
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


# ========================================
# General Application Exceptions
# ========================================

class InvalidArgumentError(BaseAppException):
    """
    Exception raised when a caller passes an unusable argument.

    Carries the name of the offending parameter and, for enumerated
    parameters, the set of accepted values.
    """

    def __init__(
        self,
        field: str,
        message: Optional[str] = None,
        value: Optional[Any] = None,
        allowed: Optional[Iterable[str]] = None,
    ):
        self.field = field
        self.value = value
        self.allowed = sorted(allowed) if allowed is not None else None

        if not message:
            message = f"Invalid value for '{field}'"
            if value is not None:
                message += f": {value!r}"
            if self.allowed:
                message += f" (allowed: {', '.join(self.allowed)})"

        details: Dict[str, Any] = {"field": field}
        if value is not None:
            details["value"] = str(value)
        if self.allowed is not None:
            details["allowed"] = self.allowed
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details, 400)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


# ========================================
# Alert Workflow Exceptions
# ========================================

class InvalidAlertTransitionError(BaseAppException):
    """Exception raised when an alert is moved to a state it cannot reach"""

    def __init__(
        self,
        alert_id: Optional[str],
        current_status: str,
        target_status: str,
    ):
        message = (
            f"Alert {alert_id} cannot move from {current_status} to {target_status}"
        )
        details = {
            "alert_id": alert_id,
            "current_status": current_status,
            "target_status": target_status,
        }
        super().__init__(message, ErrorCode.INVALID_STATE_TRANSITION, details, 409)


# ========================================
# Persistence Exceptions
# ========================================

class RepositoryError(BaseAppException):
    """Exception raised when a repository operation fails"""

    def __init__(
        self,
        message: str = "Repository operation failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.DATABASE_ERROR, details, 500)


# ========================================
# Configuration Exceptions
# ========================================

class ConfigurationError(BaseAppException):
    """Exception raised for configuration errors"""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
    ):
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = str(config_value)
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details, 500)


# Export all exception classes
__all__ = [
    # Enums
    'ErrorCode',

    # Base exceptions
    'BaseAppException',

    # General exceptions
    'InvalidArgumentError',
    'ResourceNotFoundError',

    # Alert workflow exceptions
    'InvalidAlertTransitionError',

    # Persistence exceptions
    'RepositoryError',

    # Configuration exceptions
    'ConfigurationError',
]
