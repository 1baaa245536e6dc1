"""
views/search_results.py - Vessel search results grid

Loads the vessels of a boat type, publishes row selections on the
SelectionBus and commits inline edits.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import asyncio
import logging

from pydantic import ValidationError

from fleetview.core.enums import (
    ERROR_TITLE,
    SAVE_SUCCESS_MESSAGE,
    SAVE_SUCCESS_TITLE,
    Severity,
)
from fleetview.core.models import VESSEL_COLUMNS, Column, PartialVessel, Vessel, to_vessels
from fleetview.errors import describe_error
from fleetview.messaging.selection_bus import SelectionBus, SelectionMessage
from fleetview.services.protocol import Notifier, VesselDataService
from fleetview.state.load_state import LoadState, LoadStateMachine

from .base import BaseView

logger = logging.getLogger("views.search_results")

EditLike = Union[PartialVessel, Mapping[str, Any]]


class SearchResultsView(BaseView):
    """
    Vessel grid for one boat type filter.

    Loading signal: the view is loading while a fetch is in flight or any
    commit is running. A save therefore reports ``loading`` when the
    commit starts and ``doneloading`` only after the reconciling refresh
    has settled.
    """

    def __init__(
        self,
        bus: SelectionBus,
        service: VesselDataService,
        notifier: Optional[Notifier] = None,
        boat_type_id: str = "",
        name: str = "search_results",
    ):
        super().__init__(name, notifier)
        self._bus = bus
        self._service = service
        self._boat_type_id = boat_type_id or ""
        self._selected_vessel_id: Optional[str] = None
        self._drafts: Dict[str, Dict[str, Any]] = {}
        self._commits_in_flight = 0

        self._vessels = LoadStateMachine(
            self._load_vessels,
            name=name,
            require_identifier=False,
        )
        self._vessels.add_listener(self._on_state)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def boat_type_id(self) -> str:
        return self._boat_type_id

    @property
    def state(self) -> LoadState:
        return self._vessels.state

    @property
    def vessels(self) -> List[Vessel]:
        return list(self._vessels.data or [])

    @property
    def error(self) -> Optional[BaseException]:
        return self._vessels.error

    @property
    def columns(self) -> List[Column]:
        return list(VESSEL_COLUMNS)

    @property
    def selected_vessel_id(self) -> Optional[str]:
        return self._selected_vessel_id

    @property
    def draft_values(self) -> List[Dict[str, Any]]:
        """Pending edits, one alias-keyed dict per vessel."""
        return [dict(fields) for fields in self._drafts.values()]

    async def _load_vessels(self, boat_type_id: str) -> List[Vessel]:
        rows = await self._service.fetch_vessels(boat_type_id)
        return to_vessels(rows)

    def _on_state(self, state: LoadState) -> None:
        self._sync_loading()

    def _sync_loading(self) -> None:
        self._notify_loading(self._commits_in_flight > 0 or self._vessels.is_loading)

    async def wait(self) -> LoadState:
        return await self._vessels.wait()

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search_vessels(self, boat_type_id: Optional[str] = "") -> asyncio.Task:
        """
        Run the search for a boat type ("" = all types).

        The loading signal is dispatched before this method returns.
        """
        self._boat_type_id = boat_type_id or ""
        logger.debug(f"Searching vessels for type {self._boat_type_id!r}")
        return self._vessels.set_identifier(self._boat_type_id)

    def refresh(self) -> asyncio.Task:
        """Reconciling refresh of the current search."""
        task = self._vessels.refresh()
        if task is None:
            task = self.search_vessels(self._boat_type_id)
        return task

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_vessel(self, vessel_id: str) -> SelectionMessage:
        """Select a row and broadcast it to the other views."""
        self._selected_vessel_id = vessel_id
        message = SelectionMessage(record_id=vessel_id)
        self._bus.publish(message)
        logger.debug(f"Selected vessel {vessel_id}")
        return message

    # -------------------------------------------------------------------------
    # Inline edit
    # -------------------------------------------------------------------------

    def stage_edit(self, vessel_id: str, **fields: Any) -> Dict[str, Any]:
        """
        Add edits for one vessel to the pending buffer.

        Fields may use wire names (Name, Price) or Python names (name,
        price); the row is validated immediately.
        """
        merged = dict(self._drafts.get(vessel_id, {"Id": vessel_id}))
        merged.update(PartialVessel.model_validate({"Id": vessel_id, **fields}).to_fields())
        self._drafts[vessel_id] = merged
        return dict(merged)

    def discard_edits(self) -> None:
        self._drafts.clear()

    async def save(self, edits: Optional[Iterable[EditLike]] = None) -> bool:
        """
        Commit a batch of inline edits, then refresh.

        Args:
            edits: Rows to commit; defaults to the pending buffer

        Returns:
            True if the commit succeeded
        """
        rows = list(edits) if edits is not None else self.draft_values
        if not rows:
            logger.debug("Save skipped: no edits")
            return False

        try:
            batch = [
                row if isinstance(row, PartialVessel) else PartialVessel.model_validate(row)
                for row in rows
            ]
        except ValidationError as e:
            self.notify(ERROR_TITLE, describe_error(e), Severity.ERROR)
            return False

        self._commits_in_flight += 1
        self._sync_loading()

        succeeded = False
        try:
            await self._service.commit_vessel_edits(batch)
            succeeded = True
        except Exception as e:
            logger.warning(f"Commit of {len(batch)} edit(s) failed: {e}")
            self.notify(ERROR_TITLE, describe_error(e), Severity.ERROR)
        else:
            logger.info(f"Committed {len(batch)} edit(s)")
            self.notify(SAVE_SUCCESS_TITLE, SAVE_SUCCESS_MESSAGE, Severity.SUCCESS)
            for row in batch:
                self._drafts.pop(row.id, None)
        finally:
            # Refresh is issued before the commit count drops; loading stays true throughout.
            task = self.refresh()
            self._commits_in_flight -= 1
            self._sync_loading()

        await task
        return succeeded
