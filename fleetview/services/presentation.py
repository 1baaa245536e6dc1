"""
services/presentation.py - Default notification and navigation sinks

Used when the hosting page does not inject its own capabilities (CLI,
headless sessions). Both log and keep a bounded history.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from fleetview.core.enums import Severity

logger = logging.getLogger("services.presentation")


@dataclass
class Notification:
    """A shown notification."""
    title: str
    message: Optional[str] = None
    severity: Severity = Severity.SUCCESS
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }


class LoggingNotifier:
    """Notifier writing to the log."""

    def __init__(self, max_history: int = 50):
        self._max_history = max_history
        self._history: List[Notification] = []

    def notify(
        self,
        title: str,
        message: Optional[str] = None,
        severity: Severity = Severity.SUCCESS,
    ) -> None:
        severity = Severity(severity)
        notification = Notification(title=title, message=message, severity=severity)
        self._history.append(notification)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

        text = f"{title}: {message}" if message else title
        if severity is Severity.ERROR:
            logger.error(text)
        elif severity is Severity.WARNING:
            logger.warning(text)
        else:
            logger.info(text)

    @property
    def history(self) -> List[Notification]:
        return list(self._history)

    @property
    def last(self) -> Optional[Notification]:
        return self._history[-1] if self._history else None

    def clear(self) -> None:
        self._history.clear()


class LoggingNavigator:
    """Navigator recording requested record pages."""

    def __init__(self):
        self._visits: List[Dict[str, str]] = []

    def navigate_to_record(self, record_id: str, action: str = "view") -> None:
        self._visits.append({"record_id": record_id, "action": action})
        logger.info(f"Navigate to record {record_id} ({action})")

    @property
    def visits(self) -> List[Dict[str, str]]:
        return list(self._visits)
