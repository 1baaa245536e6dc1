"""
views/detail.py - Selected vessel detail tabs

Follows the SelectionBus, loads the selected vessel and hosts the
details, reviews and add-review tabs. The review list and the review
form are held by reference; the review created signal of the form
switches to the reviews tab and refreshes the list.
"""

from __future__ import annotations
from typing import Dict, Mapping, Optional, Union
import asyncio
import logging

from fleetview.core.enums import DEFAULT_LABELS, DETAILS_TAB_ICON, DetailTab
from fleetview.core.models import Vessel, to_vessel
from fleetview.messaging.selection_bus import SelectionBus, SelectionMessage, Subscription
from fleetview.services.protocol import Navigator, Notifier, VesselDataService
from fleetview.state.load_state import LoadState, LoadStateMachine
from fleetview.ui.events import ViewEvent, ViewEventType

from .base import BaseView
from .review_form import ReviewSubmissionForm
from .review_list import ReviewListView

logger = logging.getLogger("views.detail")


class DetailView(BaseView):
    """
    Detail tabs of the vessel selected anywhere on the page.

    The bus subscription is taken on construction and released by
    ``disconnect()``; after that no message reaches this view.
    """

    def __init__(
        self,
        bus: SelectionBus,
        service: VesselDataService,
        notifier: Optional[Notifier] = None,
        navigator: Optional[Navigator] = None,
        review_list: Optional[ReviewListView] = None,
        review_form: Optional[ReviewSubmissionForm] = None,
        labels: Optional[Mapping[str, str]] = None,
        default_tab: Union[DetailTab, str] = DetailTab.DETAILS,
        name: str = "detail",
    ):
        super().__init__(name, notifier)
        self._bus = bus
        self._service = service
        self._navigator = navigator
        self._subscription: Optional[Subscription] = None

        self.labels: Dict[str, str] = {**DEFAULT_LABELS, **(labels or {})}
        self._active_tab = DetailTab(default_tab)
        self._vessel_id: Optional[str] = None

        self.review_list = review_list if review_list is not None else ReviewListView(
            service, navigator=navigator, notifier=self.notifier,
        )
        self.review_form = review_form if review_form is not None else ReviewSubmissionForm(
            service, notifier=self.notifier,
        )
        self.review_form.add_listener(ViewEventType.REVIEW_CREATED, self.handle_review_created)

        self._record = LoadStateMachine(self._load_vessel, name=name)
        self._record.add_listener(self._on_state)

        self.connect()

    # -------------------------------------------------------------------------
    # Subscription lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def connect(self) -> None:
        """Subscribe to the selection bus (no-op if already subscribed)."""
        if self.is_connected:
            return
        self._subscription = self._bus.subscribe(self.handle_message)
        logger.debug(f"[{self.name}] subscribed to {self._bus.channel}")

    def disconnect(self) -> None:
        """Release the bus subscription. Safe to call repeatedly."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
            logger.debug(f"[{self.name}] unsubscribed from {self._bus.channel}")

    def handle_message(self, message: SelectionMessage) -> None:
        self.set_vessel_id(message.record_id)

    # -------------------------------------------------------------------------
    # Record
    # -------------------------------------------------------------------------

    async def _load_vessel(self, vessel_id: str) -> Vessel:
        return to_vessel(await self._service.fetch_vessel_by_id(vessel_id))

    def _on_state(self, state: LoadState) -> None:
        self._notify_loading(state.is_loading)

    @property
    def vessel_id(self) -> Optional[str]:
        return self._vessel_id

    def set_vessel_id(self, vessel_id: Optional[str]) -> Optional[asyncio.Task]:
        """Adopt a vessel id and load its record."""
        self._vessel_id = vessel_id or None
        self.review_form.record_id = self._vessel_id
        if self._active_tab is DetailTab.REVIEWS:
            self._bind_review_list()
        return self._record.set_identifier(self._vessel_id)

    @property
    def state(self) -> LoadState:
        return self._record.state

    @property
    def vessel(self) -> Optional[Vessel]:
        return self._record.data if self._record.state.is_loaded else None

    @property
    def has_record(self) -> bool:
        return self.vessel is not None

    @property
    def details_tab_icon_name(self) -> Optional[str]:
        return DETAILS_TAB_ICON if self.has_record else None

    @property
    def vessel_name(self) -> str:
        vessel = self.vessel
        return vessel.name if vessel is not None else ""

    async def wait(self) -> LoadState:
        return await self._record.wait()

    # -------------------------------------------------------------------------
    # Tabs
    # -------------------------------------------------------------------------

    @property
    def active_tab(self) -> DetailTab:
        return self._active_tab

    def select_tab(self, tab: Union[DetailTab, str]) -> None:
        self._active_tab = DetailTab(tab)
        if self._active_tab is DetailTab.REVIEWS:
            self._bind_review_list()

    def _bind_review_list(self) -> None:
        if self.review_list.record_id != self._vessel_id:
            self.review_list.record_id = self._vessel_id

    def handle_review_created(self, event: Optional[ViewEvent] = None) -> None:
        """
        Show the reviews tab and reload the list.

        The list is bound without fetching so the refresh is the only
        request issued.
        """
        self._active_tab = DetailTab.REVIEWS
        if self.review_list.record_id != self._vessel_id:
            self.review_list.bind(self._vessel_id)
        self.review_list.refresh()

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate_to_record_view_page(self) -> None:
        """Open the full record page of the current vessel."""
        if not self._vessel_id:
            return
        if self._navigator is None:
            logger.warning(f"No navigator configured, cannot open {self._vessel_id}")
            return
        self._navigator.navigate_to_record(self._vessel_id)
