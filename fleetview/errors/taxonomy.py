"""
errors/taxonomy.py - Error classification v1.0

Structured error types for the view layer and the backend adapters.

Taxonomy:
- fetch failures become a FAILED load state (non-fatal, no retry)
- commit/create failures become error notifications
- handler failures are logged and isolated by the dispatcher
- invalid local input blocks the operation before the backend is reached
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from enum import Enum
import logging

from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger("errors.taxonomy")


class ErrorCategory(Enum):
    """Error categories."""
    FETCH = "fetch"
    COMMIT = "commit"
    CREATE = "create"
    HANDLER = "handler"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"


class FleetViewError(Exception):
    """
    Base class for fleetview errors.

    Carries a human-readable message (what an error notification shows)
    plus a category and free-form details for logs.
    """

    category: ErrorCategory = ErrorCategory.FETCH

    def __init__(
        self,
        message: str = "",
        *,
        category: Optional[ErrorCategory] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.__class__.__doc__ or "Unexpected error"
        if category is not None:
            self.category = category
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class ServiceError(FleetViewError):
    """Backend request failed."""

    def __init__(
        self,
        message: str = "",
        *,
        status_code: Optional[int] = None,
        category: Optional[ErrorCategory] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, category=category, details=details)
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class InputValidationError(FleetViewError):
    """Local input is not valid for submission."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str = "", *, field: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class ConfigurationError(FleetViewError):
    """Invalid configuration."""

    category = ErrorCategory.CONFIGURATION


def describe_error(error: Any) -> str:
    """
    Extract the human-readable message of a failure.

    Order: explicit ``message`` attribute, pydantic validation errors
    (first issue plus a count), then ``str()``, then the type name.
    """
    if error is None:
        return ""

    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message

    if isinstance(error, PydanticValidationError):
        issues = error.errors()
        if issues:
            first = issues[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            text = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "")
            if len(issues) > 1:
                text += f" (+{len(issues) - 1} more)"
            return text

    text = str(error)
    if text:
        return text
    return error.__class__.__name__ if isinstance(error, BaseException) else repr(error)
