"""
ui/events.py - View Event System

Component-local events: loading signals for hosts and the
"review created" signal consumed by the detail view.

Unlike the SelectionBus (messaging/selection_bus.py), these emitters are
owned by a single component; the parent attaches listeners to the child
it composed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime, timezone
from enum import Enum
import uuid
import logging

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("ui.events")


class ViewEventType(Enum):
    """Types of view events."""
    LOADING = "loading"
    DONE_LOADING = "doneloading"
    REVIEW_CREATED = "createreview"


class ReviewCreated(BaseModel):
    """Payload of the review created signal."""

    model_config = ConfigDict(frozen=True)

    boat_id: str = Field(..., min_length=1)
    review_id: Optional[str] = None


@dataclass
class ViewEvent:
    """A view event with payload."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    event_type: ViewEventType = ViewEventType.LOADING
    source: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "type": self.event_type.value,
            "source": self.source,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "payload": self.payload,
        }

    @classmethod
    def loading(cls, source: str) -> "ViewEvent":
        return cls(event_type=ViewEventType.LOADING, source=source)

    @classmethod
    def done_loading(cls, source: str) -> "ViewEvent":
        return cls(event_type=ViewEventType.DONE_LOADING, source=source)

    @classmethod
    def review_created(cls, created: ReviewCreated, source: str = "review_form") -> "ViewEvent":
        """Create a review created event."""
        return cls(
            event_type=ViewEventType.REVIEW_CREATED,
            source=source,
            payload=created.model_dump(),
        )

    @property
    def created(self) -> Optional[ReviewCreated]:
        """Typed payload of a review created event."""
        if self.event_type is not ViewEventType.REVIEW_CREATED:
            return None
        return ReviewCreated.model_validate(self.payload)


# Type alias for event handlers
EventHandler = Callable[[ViewEvent], None]


class ViewEventEmitter:
    """
    Event emitter owned by one component.

    Handlers run in registration order; a failing handler is logged and
    does not stop the others.
    """

    def __init__(self, source: str = ""):
        self._source = source
        self._handlers: Dict[ViewEventType, List[EventHandler]] = {}

    @property
    def source(self) -> str:
        return self._source

    def add_listener(self, event_type: ViewEventType, handler: EventHandler) -> None:
        """
        Listen for events of one type.

        Args:
            event_type: Type of events to receive
            handler: Callback function(event) -> None
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"[{self._source}] listener added for {event_type.value}")

    def remove_listener(self, event_type: ViewEventType, handler: EventHandler) -> bool:
        """
        Stop listening.

        Returns:
            True if handler was removed
        """
        try:
            self._handlers.get(event_type, []).remove(handler)
            return True
        except ValueError:
            return False

    def dispatch(self, event: ViewEvent) -> None:
        """Deliver an event to the listeners of its type."""
        if not event.source:
            event.source = self._source

        logger.debug(f"Dispatching {event.event_type.value} from {event.source}")

        for handler in list(self._handlers.get(event.event_type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"[{self._source}] {event.event_type.value} handler failed: {e}")

    @property
    def handler_count(self) -> int:
        return sum(len(handlers) for handlers in self._handlers.values())

    def clear(self) -> None:
        self._handlers.clear()
