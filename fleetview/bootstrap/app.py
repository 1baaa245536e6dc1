"""
bootstrap/app.py - Page session composition v1.0

Builds one page session: the selection bus, the search section, the
detail view with its review list and form, and a page-level loading
tracker over every data view. The bus lives as long as the session.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional
import logging

from fleetview.messaging.selection_bus import SelectionBus
from fleetview.services.http_client import HttpVesselDataService
from fleetview.services.memory import sample_service
from fleetview.services.presentation import LoggingNavigator, LoggingNotifier
from fleetview.services.protocol import Navigator, Notifier, VesselDataService
from fleetview.state.loading import LoadingTracker
from fleetview.views.detail import DetailView
from fleetview.views.search import VesselSearchView

from .config import FleetViewConfig, load_config

logger = logging.getLogger("bootstrap.app")


class SessionState(Enum):
    """Page session lifecycle states."""
    CREATED = "created"
    RUNNING = "running"
    CLOSED = "closed"


def build_service(config: FleetViewConfig) -> VesselDataService:
    """Backend selected by configuration."""
    if config.service.use_memory:
        logger.info("Using in-memory sample backend")
        return sample_service(latency_seconds=config.service.latency_seconds)

    headers = {}
    if config.service.api_token:
        headers["Authorization"] = f"Bearer {config.service.api_token}"
    logger.info(f"Using HTTP backend at {config.service.base_url}")
    return HttpVesselDataService(
        config.service.base_url,
        timeout_seconds=config.service.timeout_seconds,
        headers=headers,
    )


class PageSession:
    """
    One hosting page.

    Usage:
        session = PageSession().build()
        session.search.search_vessels("Sailboat")
        await session.search.results.wait()
        session.search.results.select_vessel("a01")
        await session.detail.wait()
        await session.close()
    """

    def __init__(
        self,
        config: Optional[FleetViewConfig] = None,
        service: Optional[VesselDataService] = None,
        notifier: Optional[Notifier] = None,
        navigator: Optional[Navigator] = None,
    ):
        self._config = config
        self._service = service
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.navigator = navigator if navigator is not None else LoggingNavigator()
        self.state = SessionState.CREATED

        self.bus: Optional[SelectionBus] = None
        self.search: Optional[VesselSearchView] = None
        self.detail: Optional[DetailView] = None
        self.loading = LoadingTracker()

    @property
    def config(self) -> FleetViewConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    @property
    def service(self) -> VesselDataService:
        if self._service is None:
            self._service = build_service(self.config)
        return self._service

    def build(self) -> "PageSession":
        """Create and wire the views."""
        if self.state is not SessionState.CREATED:
            return self

        config = self.config
        self.bus = SelectionBus(channel=config.ui.selection_channel)
        self.search = VesselSearchView(self.bus, self.service, self.notifier)
        self.detail = DetailView(
            self.bus,
            self.service,
            notifier=self.notifier,
            navigator=self.navigator,
            labels=config.ui.labels,
            default_tab=config.ui.default_tab,
        )

        self.loading.attach(self.search.results)
        self.loading.attach(self.detail)
        self.loading.attach(self.detail.review_list)

        self.state = SessionState.RUNNING
        logger.info(f"Page session ready (channel={self.bus.channel})")
        return self

    @property
    def is_loading(self) -> bool:
        return self.loading.is_loading

    async def close(self) -> None:
        """Tear the session down: release subscriptions and transports."""
        if self.state is SessionState.CLOSED:
            return
        if self.detail is not None:
            self.detail.disconnect()
        if self.bus is not None:
            self.bus.clear()
        if self._service is not None:
            await self._service.aclose()
        self.state = SessionState.CLOSED
        logger.info("Page session closed")

    async def __aenter__(self) -> "PageSession":
        return self.build()

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
