"""
views/base.py - Base class for data views

Views receive the SelectionBus, backend and presentation capabilities
through their constructor to keep them decoupled and testable.
"""

from __future__ import annotations
from typing import Optional
import logging

from fleetview.core.enums import Severity
from fleetview.services.presentation import LoggingNotifier
from fleetview.services.protocol import Notifier
from fleetview.ui.events import EventHandler, ViewEvent, ViewEventEmitter, ViewEventType

logger = logging.getLogger("views.base")


class BaseView:
    """
    Base class for all views.

    Owns a local event emitter and the edge-triggered loading signal:
    ``loading`` is dispatched on every entry into the loading state and
    ``doneloading`` on every exit.
    """

    def __init__(self, name: str, notifier: Optional[Notifier] = None):
        self.name = name
        self.events = ViewEventEmitter(source=name)
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        self._loading = False

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def is_loading(self) -> bool:
        return self._loading

    def add_listener(self, event_type: ViewEventType, handler: EventHandler) -> None:
        self.events.add_listener(event_type, handler)

    def remove_listener(self, event_type: ViewEventType, handler: EventHandler) -> bool:
        return self.events.remove_listener(event_type, handler)

    def dispatch(self, event: ViewEvent) -> None:
        self.events.dispatch(event)

    def _notify_loading(self, loading: bool) -> None:
        if loading == self._loading:
            return
        self._loading = loading
        if loading:
            self.dispatch(ViewEvent.loading(self.name))
        else:
            self.dispatch(ViewEvent.done_loading(self.name))

    def notify(
        self,
        title: str,
        message: Optional[str] = None,
        severity: Severity = Severity.SUCCESS,
    ) -> None:
        """Show a notification through the injected notifier."""
        try:
            self._notifier.notify(title, message, severity)
        except Exception as e:
            logger.error(f"[{self.name}] notification failed: {e}")
