"""
views/review_list.py - Reviews of one vessel
"""

from __future__ import annotations
from typing import List, Optional
import asyncio
import logging

from fleetview.core.models import VesselReview, to_reviews
from fleetview.services.protocol import Navigator, Notifier, VesselDataService
from fleetview.state.load_state import LoadState, LoadStateMachine

from .base import BaseView

logger = logging.getLogger("views.review_list")


class ReviewListView(BaseView):
    """
    Lists the reviews of the vessel given by ``record_id``.

    Setting ``record_id`` fetches; an empty id leaves the list empty and
    not loading. ``refresh()`` re-fetches unconditionally. A failed fetch
    keeps its error in ``error`` and the list shows nothing; there is no
    automatic retry.
    """

    def __init__(
        self,
        service: VesselDataService,
        navigator: Optional[Navigator] = None,
        notifier: Optional[Notifier] = None,
        name: str = "review_list",
    ):
        super().__init__(name, notifier)
        self._service = service
        self._navigator = navigator
        self._reviews = LoadStateMachine(self._load_reviews, name=name)
        self._reviews.add_listener(self._on_state)

    async def _load_reviews(self, vessel_id: str) -> List[VesselReview]:
        rows = await self._service.fetch_reviews(vessel_id)
        return to_reviews(rows)

    def _on_state(self, state: LoadState) -> None:
        self._notify_loading(state.is_loading)

    @property
    def record_id(self) -> Optional[str]:
        return self._reviews.identifier

    @record_id.setter
    def record_id(self, value: Optional[str]) -> None:
        self._reviews.set_identifier(value)

    def bind(self, record_id: Optional[str]) -> None:
        """Adopt a vessel id without fetching; refresh() loads it."""
        self._reviews.set_identifier(record_id, fetch=False)

    @property
    def state(self) -> LoadState:
        return self._reviews.state

    @property
    def reviews(self) -> List[VesselReview]:
        return list(self._reviews.data or [])

    @property
    def reviews_to_show(self) -> bool:
        return len(self.reviews) > 0

    @property
    def error(self) -> Optional[BaseException]:
        return self._reviews.error

    def refresh(self) -> Optional[asyncio.Task]:
        """Re-fetch the reviews of the current vessel."""
        return self._reviews.refresh()

    async def wait(self) -> LoadState:
        return await self._reviews.wait()

    def navigate_to_record(self, review_id: str) -> None:
        """Open the record page of a review."""
        if self._navigator is None:
            logger.warning(f"No navigator configured, cannot open {review_id}")
            return
        self._navigator.navigate_to_record(review_id)
