"""
fleetview Test Configuration and Fixtures

Provides a controllable backend whose calls stay pending until the test
resolves them, so stale-response races can be driven step by step.
"""

import asyncio
import pytest
from typing import Any, List, Optional, Tuple
from unittest.mock import Mock

from fleetview.core.models import Vessel, VesselReview
from fleetview.messaging.selection_bus import SelectionBus
from fleetview.services.protocol import VesselDataService


async def _flush(rounds: int = 5) -> None:
    """Let scheduled tasks and callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class ControlledService(VesselDataService):
    """
    Backend whose calls return pending futures.

    Every call is recorded in ``calls`` as (method, argument).
    """

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []
        self._pending: List[Tuple[str, Any, asyncio.Future]] = []

    def _call(self, method: str, arg: Any) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((method, arg))
        self._pending.append((method, arg, future))
        return future

    async def fetch_vessels(self, boat_type_id: str = ""):
        return await self._call("fetch_vessels", boat_type_id)

    async def commit_vessel_edits(self, edits):
        return await self._call("commit_vessel_edits", edits)

    async def fetch_reviews(self, vessel_id: str):
        return await self._call("fetch_reviews", vessel_id)

    async def create_review(self, fields):
        return await self._call("create_review", fields)

    async def fetch_vessel_by_id(self, vessel_id: str):
        return await self._call("fetch_vessel_by_id", vessel_id)

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def pending(self, method: Optional[str] = None) -> List[Tuple[str, Any, asyncio.Future]]:
        return [
            entry for entry in self._pending
            if not entry[2].done() and (method is None or entry[0] == method)
        ]

    def _take(self, method: str, arg: Any) -> asyncio.Future:
        for name, call_arg, future in self._pending:
            if name == method and call_arg == arg and not future.done():
                return future
        raise AssertionError(f"No pending {method}({arg!r})")

    def resolve(self, method: str, arg: Any, result: Any) -> None:
        """Complete the oldest pending call matching method and argument."""
        self._take(method, arg).set_result(result)

    def reject(self, method: str, arg: Any, error: BaseException) -> None:
        self._take(method, arg).set_exception(error)


@pytest.fixture
def flush():
    """Coroutine function draining pending loop callbacks."""
    return _flush


@pytest.fixture
def bus():
    """Fresh SelectionBus."""
    return SelectionBus(channel="test_selection")


@pytest.fixture
def controlled_service():
    return ControlledService()


@pytest.fixture
def notifier():
    """Mock notifier capability."""
    return Mock(spec=["notify"])


@pytest.fixture
def navigator():
    """Mock navigation capability."""
    return Mock(spec=["navigate_to_record"])


@pytest.fixture
def vessel_v1():
    return Vessel(id="v1", name="Wind", boat_type="Sailboat", length=10.0, price=50000.0, description="Sloop")


@pytest.fixture
def vessel_v2():
    return Vessel(id="v2", name="Tide", boat_type="Sailboat", length=8.0, price=30000.0)


@pytest.fixture
def review_r1():
    return VesselReview(id="r1", boat_id="v1", name="Nice", rating=4, comment="Good boat")
