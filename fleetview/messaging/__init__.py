"""
messaging/ - Cross-component selection channel
"""

from .selection_bus import (
    MessageScope,
    SelectionMessage,
    MessageHandler,
    Subscription,
    SelectionBus,
)

__all__ = [
    "MessageScope",
    "SelectionMessage",
    "MessageHandler",
    "Subscription",
    "SelectionBus",
]
