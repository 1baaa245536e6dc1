"""
services/ - External capabilities consumed by the views

Backend RPC interface with in-memory and HTTP implementations, plus the
notification and navigation sinks.
"""

from .protocol import (
    VesselDataService,
    Notifier,
    Navigator,
)

from .presentation import (
    Notification,
    LoggingNotifier,
    LoggingNavigator,
)

from .memory import (
    InMemoryVesselDataService,
    sample_service,
)

from .http_client import HttpVesselDataService

__all__ = [
    "VesselDataService",
    "Notifier",
    "Navigator",
    "Notification",
    "LoggingNotifier",
    "LoggingNavigator",
    "InMemoryVesselDataService",
    "sample_service",
    "HttpVesselDataService",
]
