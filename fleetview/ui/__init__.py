"""
ui/ - Component-local event plumbing
"""

from .events import (
    ViewEventType,
    ReviewCreated,
    ViewEvent,
    EventHandler,
    ViewEventEmitter,
)

__all__ = [
    "ViewEventType",
    "ReviewCreated",
    "ViewEvent",
    "EventHandler",
    "ViewEventEmitter",
]
