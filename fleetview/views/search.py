"""
views/search.py - Vessel search section

Host of the search results grid. Keeps the spinner flag in step with the
grid's loading/doneloading signals.
"""

from __future__ import annotations
from typing import Callable, Optional
import asyncio
import logging

from fleetview.messaging.selection_bus import SelectionBus
from fleetview.services.protocol import Notifier, VesselDataService
from fleetview.state.loading import LoadingTracker

from .search_results import SearchResultsView

logger = logging.getLogger("views.search")


class VesselSearchView:
    """Search section: boat type filter plus results grid."""

    def __init__(
        self,
        bus: SelectionBus,
        service: VesselDataService,
        notifier: Optional[Notifier] = None,
        results: Optional[SearchResultsView] = None,
        on_loading_change: Optional[Callable[[bool], None]] = None,
    ):
        self.results = results if results is not None else SearchResultsView(bus, service, notifier)
        self.loading = LoadingTracker(on_change=on_loading_change)
        self.loading.attach(self.results)

    @property
    def is_loading(self) -> bool:
        return self.loading.is_loading

    def search_vessels(self, boat_type_id: Optional[str] = "") -> asyncio.Task:
        """Apply a boat type filter ("" = all types)."""
        logger.debug(f"Boat type filter -> {boat_type_id!r}")
        return self.results.search_vessels(boat_type_id)
