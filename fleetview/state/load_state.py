"""
state/load_state.py - Async fetch lifecycle v1.0

Generic idle -> loading -> loaded | failed tracker, one instance per
data-consuming view.

There is no network-level cancellation. Every resolution is checked at
completion time against the current identifier and the latest issued
request; anything superseded is dropped, so an old response can never
overwrite fresher state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any, Awaitable, Callable, Generic, List, Optional, Set, TypeVar,
)
import asyncio
import logging

logger = logging.getLogger("state.load_state")

K = TypeVar("K")
T = TypeVar("T")


class LoadStatus(Enum):
    """Lifecycle status."""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadState(Generic[T]):
    """
    Immutable snapshot of a load lifecycle.

    Build through the classmethods so that data is only present when
    LOADED and error only when FAILED.
    """
    status: LoadStatus = LoadStatus.IDLE
    identifier: Any = None
    data: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def idle(cls) -> "LoadState[T]":
        return cls()

    @classmethod
    def loading(cls, identifier: Any) -> "LoadState[T]":
        return cls(status=LoadStatus.LOADING, identifier=identifier)

    @classmethod
    def loaded(cls, identifier: Any, data: T) -> "LoadState[T]":
        return cls(status=LoadStatus.LOADED, identifier=identifier, data=data)

    @classmethod
    def failed(cls, identifier: Any, error: BaseException) -> "LoadState[T]":
        return cls(status=LoadStatus.FAILED, identifier=identifier, error=error)

    @property
    def is_idle(self) -> bool:
        return self.status is LoadStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.status is LoadStatus.LOADED

    @property
    def is_failed(self) -> bool:
        return self.status is LoadStatus.FAILED

    @property
    def is_settled(self) -> bool:
        return self.status in (LoadStatus.LOADED, LoadStatus.FAILED)


# Type aliases
Fetcher = Callable[[K], Awaitable[T]]
StateListener = Callable[[LoadState], None]


class LoadStateMachine(Generic[K, T]):
    """
    Identifier-keyed fetch state machine.

    Transitions:
    - set_identifier(empty) -> IDLE, in-flight requests become inert
    - set_identifier(id)    -> LOADING, one fetch issued for id
    - refresh()             -> LOADING, one fetch issued for the current id
    - fetch resolves        -> LOADED(data) / FAILED(error) if still current

    Listeners are called on every transition, so a host sees each entry
    into and exit from LOADING, not only terminal states.

    Usage:
        machine = LoadStateMachine(service.fetch_reviews, name="reviews")
        machine.add_listener(lambda state: print(state.status))
        machine.set_identifier("a01")
        await machine.wait()
    """

    def __init__(
        self,
        fetcher: Fetcher,
        name: str = "",
        require_identifier: bool = True,
    ):
        """
        Initialize the machine.

        Args:
            fetcher: Coroutine function fetching data for an identifier
            name: Owner name, used in log output
            require_identifier: When False, an empty identifier is a valid
                key (e.g. an "all types" filter) instead of forcing IDLE
        """
        self._fetcher = fetcher
        self._name = name or "load_state"
        self._require_identifier = require_identifier

        self._state: LoadState[T] = LoadState.idle()
        self._identifier: Optional[K] = None
        self._has_identifier = False
        self._generation = 0
        self._latest_task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: List[StateListener] = []
        self._fetch_count = 0

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> LoadState[T]:
        return self._state

    @property
    def status(self) -> LoadStatus:
        return self._state.status

    @property
    def identifier(self) -> Optional[K]:
        return self._identifier

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def data(self) -> Optional[T]:
        return self._state.data

    @property
    def error(self) -> Optional[BaseException]:
        return self._state.error

    @property
    def fetch_count(self) -> int:
        """Number of fetches issued so far."""
        return self._fetch_count

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, listener: StateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> bool:
        try:
            self._listeners.remove(listener)
            return True
        except ValueError:
            return False

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _is_empty(self, identifier: Any) -> bool:
        if not self._require_identifier:
            return False
        return identifier is None or identifier == ""

    def set_identifier(
        self,
        identifier: Optional[K],
        fetch: bool = True,
    ) -> Optional[asyncio.Task]:
        """
        Adopt a new identifier.

        Args:
            identifier: Key to fetch for; empty/None forces IDLE when an
                identifier is required
            fetch: When False, the identifier is adopted in IDLE and the
                next refresh() issues the fetch

        Returns:
            The scheduled fetch task, or None when no fetch was issued
        """
        if self._is_empty(identifier):
            self._identifier = None
            self._has_identifier = False
            self._generation += 1
            self._latest_task = None
            self._transition(LoadState.idle())
            return None

        if identifier is None:
            identifier = ""
        self._identifier = identifier
        self._has_identifier = True
        if not fetch:
            self._generation += 1
            self._latest_task = None
            self._transition(LoadState(identifier=identifier))
            return None
        return self._issue()

    def refresh(self) -> Optional[asyncio.Task]:
        """
        Re-issue the fetch for the current identifier.

        Returns:
            The scheduled fetch task, or None if no identifier is set
        """
        if not self._has_identifier:
            logger.debug(f"[{self._name}] refresh ignored: no identifier")
            return None
        return self._issue()

    def _issue(self) -> asyncio.Task:
        loop = asyncio.get_running_loop()

        self._generation += 1
        generation = self._generation
        identifier = self._identifier

        self._transition(LoadState.loading(identifier))
        self._fetch_count += 1

        task = loop.create_task(self._fetch(generation, identifier))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._latest_task = task

        logger.debug(f"[{self._name}] fetch #{generation} issued for {identifier!r}")
        return task

    def _is_current(self, generation: int, identifier: Any) -> bool:
        return (
            self._has_identifier
            and generation == self._generation
            and identifier == self._identifier
        )

    async def _fetch(self, generation: int, identifier: K) -> None:
        try:
            data = await self._fetcher(identifier)
        except Exception as e:
            if not self._is_current(generation, identifier):
                logger.debug(f"[{self._name}] discarding stale failure #{generation}: {e}")
                return
            logger.warning(f"[{self._name}] fetch for {identifier!r} failed: {e}")
            self._transition(LoadState.failed(identifier, e))
            return

        if not self._is_current(generation, identifier):
            logger.debug(f"[{self._name}] discarding stale response #{generation}")
            return
        self._transition(LoadState.loaded(identifier, data))

    def _transition(self, state: LoadState[T]) -> None:
        previous = self._state
        self._state = state
        logger.debug(
            f"[{self._name}] {previous.status.value} -> {state.status.value}"
        )
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"[{self._name}] state listener failed: {e}")

    async def wait(self) -> LoadState[T]:
        """
        Wait until the most recently issued fetch has settled.

        Returns:
            The state after settling
        """
        while self._latest_task is not None and not self._latest_task.done():
            task = self._latest_task
            await asyncio.wait({task})
        return self._state
