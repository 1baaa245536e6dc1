"""
state/loading.py - Aggregate loading indicator

A host containing several data views shows "loading" while ANY of them
is loading and "done" only once ALL have settled.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
import logging

from fleetview.ui.events import ViewEvent, ViewEventType

from .load_state import LoadState, LoadStateMachine

logger = logging.getLogger("state.loading")


class LoadingTracker:
    """
    Tracks named loading sources.

    Sources are fed either by a LoadStateMachine (``watch``) or by a
    view's loading/doneloading events (``attach``).
    """

    def __init__(self, on_change: Optional[Callable[[bool], None]] = None):
        self._sources: Dict[str, bool] = {}
        self._on_change = on_change
        self._is_loading = False

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def loading_sources(self) -> List[str]:
        return [name for name, loading in self._sources.items() if loading]

    def set_loading(self, source: str, loading: bool) -> None:
        """Record the loading flag of one source."""
        self._sources[source] = bool(loading)
        self._update()

    def _update(self) -> None:
        aggregate = any(self._sources.values())
        if aggregate == self._is_loading:
            return
        self._is_loading = aggregate
        logger.debug(f"Aggregate loading -> {aggregate} (sources: {self.loading_sources})")
        if self._on_change is not None:
            try:
                self._on_change(aggregate)
            except Exception as e:
                logger.error(f"Loading change callback failed: {e}")

    def watch(self, machine: LoadStateMachine, source: str = "") -> None:
        """Follow a state machine directly."""
        name = source or machine.name

        def _on_state(state: LoadState) -> None:
            self.set_loading(name, state.is_loading)

        machine.add_listener(_on_state)
        self.set_loading(name, machine.is_loading)

    def attach(self, view: Any, source: str = "") -> None:
        """Follow a view through its loading/doneloading events."""
        name = source or getattr(view, "name", "") or repr(view)

        def _on_loading(event: ViewEvent) -> None:
            self.set_loading(name, True)

        def _on_done(event: ViewEvent) -> None:
            self.set_loading(name, False)

        view.add_listener(ViewEventType.LOADING, _on_loading)
        view.add_listener(ViewEventType.DONE_LOADING, _on_done)
        self.set_loading(name, bool(getattr(view, "is_loading", False)))

    def reset(self) -> None:
        self._sources.clear()
        self._update()
