"""
fleetview SelectionBus v1.0

Instance-scoped publish/subscribe channel broadcasting the selected
record identifier to unrelated views.

The bus is constructed by the hosting page session and injected into
every component that publishes or subscribes. This allows:
- Testing with isolated buses
- Several page sessions in one process
- Clear ownership (subscribers own and release their subscriptions)

INVARIANT: Each subscriber receives every message published while it is
registered exactly once, in publish order. A subscriber registered after
a publish never sees that message.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Deque, List, Mapping, Optional, Tuple, Union
import logging
import weakref

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("messaging.selection_bus")


class MessageScope(str, Enum):
    """Delivery scope. Every subscriber in the page session receives every publish."""
    APPLICATION = "application"


class SelectionMessage(BaseModel):
    """The only payload shape travelling over the bus."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    record_id: str = Field(..., alias="recordId", min_length=1)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


# Type alias for message handlers
MessageHandler = Callable[[SelectionMessage], None]


@dataclass(eq=False)
class Subscription:
    """
    Handle returned by ``SelectionBus.subscribe``.

    ``unsubscribe()`` may be called any number of times, including from
    inside a handler while a message is being dispatched.
    """
    handler: MessageHandler
    subscription_id: str = ""
    scope: MessageScope = MessageScope.APPLICATION
    _bus_ref: Optional[Callable[[], Optional["SelectionBus"]]] = field(default=None, repr=False)
    _active: bool = field(default=True, repr=False)

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> bool:
        """
        Stop receiving messages.

        Returns:
            True if this call removed the subscription, False if it was
            already inactive
        """
        if not self._active:
            return False
        self._active = False
        bus = self._bus_ref() if self._bus_ref else None
        if bus is not None:
            bus._remove(self)
        logger.debug(f"Unsubscribed {self.subscription_id}")
        return True


class SelectionBus:
    """
    Publish/subscribe channel for ``SelectionMessage``.

    Delivery is synchronous. A publish issued from inside a handler is
    queued and delivered once the in-flight message has reached all of
    its recipients, which keeps per-subscriber ordering equal to publish
    order.

    Usage:
        bus = SelectionBus(channel="boat_selection")

        subscription = bus.subscribe(lambda message: print(message.record_id))
        bus.publish({"recordId": "a01"})
        subscription.unsubscribe()
    """

    def __init__(self, channel: str = "selection"):
        """
        Initialize the bus.

        Args:
            channel: Channel name, used in log output
        """
        self._channel = channel
        self._subscriptions: List[Subscription] = []
        self._pending: Deque[Tuple[SelectionMessage, Tuple[Subscription, ...]]] = deque()
        self._dispatching = False
        self._subscription_counter = 0
        self._published_count = 0

        logger.debug(f"SelectionBus created for channel={channel}")

    @property
    def channel(self) -> str:
        return self._channel

    def subscribe(
        self,
        handler: MessageHandler,
        scope: MessageScope = MessageScope.APPLICATION,
    ) -> Subscription:
        """
        Register a handler.

        Args:
            handler: Callback function(message) -> None
            scope: Delivery scope

        Returns:
            Subscription handle
        """
        if not callable(handler):
            raise TypeError("handler must be callable")

        self._subscription_counter += 1
        subscription = Subscription(
            handler=handler,
            subscription_id=f"{self._channel}_sub_{self._subscription_counter}",
            scope=MessageScope(scope),
            _bus_ref=weakref.ref(self),
        )
        self._subscriptions.append(subscription)
        logger.debug(f"Subscribed {subscription.subscription_id} ({subscription.scope.value})")
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    def publish(self, message: Union[SelectionMessage, Mapping[str, Any]]) -> SelectionMessage:
        """
        Publish a message to every current subscriber.

        Args:
            message: SelectionMessage or a mapping validated into one

        Returns:
            The validated message

        Raises:
            pydantic.ValidationError: If the payload is not a valid message
        """
        if not isinstance(message, SelectionMessage):
            message = SelectionMessage.model_validate(message)

        self._published_count += 1
        # Recipients are fixed at publish time
        self._pending.append((message, tuple(self._subscriptions)))

        if self._dispatching:
            logger.debug(f"Queued {message.record_id} behind in-flight dispatch")
            return message

        self._dispatching = True
        try:
            while self._pending:
                current, recipients = self._pending.popleft()
                self._deliver(current, recipients)
        finally:
            self._dispatching = False

        return message

    def _deliver(self, message: SelectionMessage, recipients: Tuple[Subscription, ...]) -> None:
        logger.debug(
            f"Delivering recordId={message.record_id} on {self._channel} "
            f"to {len(recipients)} subscriber(s)"
        )
        for subscription in recipients:
            if not subscription.active:
                continue
            try:
                subscription.handler(message)
            except Exception as e:
                logger.error(
                    f"Selection handler {subscription.subscription_id} failed: {e}"
                )

    @property
    def handler_count(self) -> int:
        """Number of active subscriptions."""
        return len(self._subscriptions)

    @property
    def published_count(self) -> int:
        return self._published_count

    def clear(self) -> None:
        """Deactivate every subscription."""
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()
        logger.debug(f"Cleared subscriptions on {self._channel}")
