"""
services/protocol.py - External capability interfaces

The views consume these capabilities; they do not implement them.
Backend failures are raised as exceptions carrying a human-readable
message (ServiceError for the bundled adapters).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from fleetview.core.enums import Severity
from fleetview.core.models import PartialVessel, Vessel, VesselReview


class VesselDataService(ABC):
    """Backend RPC surface for vessels and reviews."""

    @abstractmethod
    async def fetch_vessels(self, boat_type_id: str = "") -> List[Vessel]:
        """Vessels of one type; an empty type id means all types."""

    @abstractmethod
    async def commit_vessel_edits(self, edits: List[PartialVessel]) -> None:
        """Apply a batch of inline edits as one commit."""

    @abstractmethod
    async def fetch_reviews(self, vessel_id: str) -> List[VesselReview]:
        """All reviews of one vessel."""

    @abstractmethod
    async def create_review(self, fields: Dict[str, Any]) -> VesselReview:
        """Create a review from an alias-keyed field set."""

    @abstractmethod
    async def fetch_vessel_by_id(self, vessel_id: str) -> Vessel:
        """Full record of one vessel."""

    async def aclose(self) -> None:
        """Release transport resources."""
        return None


@runtime_checkable
class Notifier(Protocol):
    """Toast/notification presentation capability."""

    def notify(
        self,
        title: str,
        message: Optional[str] = None,
        severity: Severity = Severity.SUCCESS,
    ) -> None:
        ...


@runtime_checkable
class Navigator(Protocol):
    """Record page navigation capability."""

    def navigate_to_record(self, record_id: str, action: str = "view") -> None:
        ...
