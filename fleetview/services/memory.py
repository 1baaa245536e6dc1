"""
services/memory.py - In-process vessel backend

Deterministic backend used by the CLI demo and the test suite. Each call
yields to the event loop once before answering so callers observe the
same LOADING window they would against a remote service.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import asyncio
import logging
import uuid

from fleetview.core.models import (
    PartialVessel,
    ReviewDraft,
    Vessel,
    VesselReview,
    to_review,
    to_vessel,
)
from fleetview.errors import ErrorCategory, ServiceError

from .protocol import VesselDataService

logger = logging.getLogger("services.memory")

NAME_MAX_LENGTH = 80


class InMemoryVesselDataService(VesselDataService):
    """
    Vessel backend holding records in dicts.

    Edits are applied atomically: a batch with one invalid row changes
    nothing.
    """

    def __init__(
        self,
        vessels: Optional[Iterable[Any]] = None,
        reviews: Optional[Iterable[Any]] = None,
        latency_seconds: float = 0.0,
    ):
        self._vessels: Dict[str, Vessel] = {}
        self._reviews: List[VesselReview] = []
        self._latency = latency_seconds

        for row in vessels or []:
            vessel = to_vessel(row)
            self._vessels[vessel.id] = vessel
        for row in reviews or []:
            self._reviews.append(to_review(row))

    async def _yield(self) -> None:
        await asyncio.sleep(self._latency)

    def _get(self, vessel_id: str) -> Vessel:
        vessel = self._vessels.get(vessel_id)
        if vessel is None:
            raise ServiceError(
                f"Vessel {vessel_id} not found",
                status_code=404,
                category=ErrorCategory.FETCH,
            )
        return vessel

    async def fetch_vessels(self, boat_type_id: str = "") -> List[Vessel]:
        await self._yield()
        vessels = [
            vessel for vessel in self._vessels.values()
            if not boat_type_id or vessel.boat_type == boat_type_id
        ]
        return sorted(vessels, key=lambda vessel: vessel.name)

    async def fetch_vessel_by_id(self, vessel_id: str) -> Vessel:
        await self._yield()
        return self._get(vessel_id)

    async def commit_vessel_edits(self, edits: List[PartialVessel]) -> None:
        await self._yield()

        updated: Dict[str, Vessel] = {}
        for edit in edits:
            current = updated.get(edit.id) or self._get(edit.id)
            changes = edit.model_dump(exclude_unset=True, exclude={"id"})
            name = changes.get("name")
            if name is not None and len(name) > NAME_MAX_LENGTH:
                raise ServiceError("Field too long", status_code=400, category=ErrorCategory.COMMIT)
            updated[edit.id] = current.model_copy(update=changes)

        self._vessels.update(updated)
        logger.debug(f"Committed edits for {len(updated)} vessel(s)")

    async def fetch_reviews(self, vessel_id: str) -> List[VesselReview]:
        await self._yield()
        return [review for review in self._reviews if review.boat_id == vessel_id]

    async def create_review(self, fields: Dict[str, Any]) -> VesselReview:
        await self._yield()

        draft = ReviewDraft.model_validate(fields)
        self._get(draft.boat_id)

        review = VesselReview(
            id=uuid.uuid4().hex[:12],
            boat_id=draft.boat_id,
            name=draft.name or "",
            rating=draft.rating,
            comment=draft.comment,
        )
        self._reviews.append(review)
        logger.debug(f"Created review {review.id} for {review.boat_id}")
        return review


def sample_service(latency_seconds: float = 0.0) -> InMemoryVesselDataService:
    """Backend preloaded with a small demo fleet."""
    vessels = [
        {"Id": "a01", "Name": "Wind Dancer", "BoatType": "Sailboat", "Length": 12.5, "Price": 85000, "Description": "Fast cruising sloop"},
        {"Id": "a02", "Name": "Blue Heron", "BoatType": "Sailboat", "Length": 9.8, "Price": 42000, "Description": "Family daysailer"},
        {"Id": "a03", "Name": "Sea Ranger", "BoatType": "Fishing", "Length": 7.2, "Price": 38000, "Description": "Center console"},
        {"Id": "a04", "Name": "Harbor Queen", "BoatType": "Cabin Cruiser", "Length": 14.0, "Price": 210000, "Description": "Twin diesel cruiser"},
    ]
    reviews = [
        {"Id": "r01", "Boat": "a01", "Name": "Loved it", "Rating": 5, "Comment": "Points high and feels solid"},
        {"Id": "r02", "Boat": "a01", "Name": "Tender", "Rating": 3, "Comment": "Needs a reef early"},
        {"Id": "r03", "Boat": "a03", "Name": "Good fishing", "Rating": 4, "Comment": "Dry ride"},
    ]
    return InMemoryVesselDataService(vessels, reviews, latency_seconds=latency_seconds)
