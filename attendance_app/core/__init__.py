"""
Core package: application-wide exceptions shared by every layer.
"""

from attendance_app.core.exceptions import (
    BaseAppException,
    ConfigurationError,
    ErrorCode,
    InvalidAlertTransitionError,
    InvalidArgumentError,
    RepositoryError,
    ResourceNotFoundError,
)

__all__ = [
    "BaseAppException",
    "ConfigurationError",
    "ErrorCode",
    "InvalidAlertTransitionError",
    "InvalidArgumentError",
    "RepositoryError",
    "ResourceNotFoundError",
]
