"""
errors/ - Error Taxonomy

Structured error classification shared by views and backend adapters.
"""

from .taxonomy import (
    ErrorCategory,
    FleetViewError,
    ServiceError,
    InputValidationError,
    ConfigurationError,
    describe_error,
)

__all__ = [
    "ErrorCategory",
    "FleetViewError",
    "ServiceError",
    "InputValidationError",
    "ConfigurationError",
    "describe_error",
]
