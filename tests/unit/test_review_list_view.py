"""
Unit tests for ReviewListView.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from fleetview.errors import ServiceError
from fleetview.services.protocol import VesselDataService
from fleetview.state.load_state import LoadStatus
from fleetview.ui.events import ViewEventType
from fleetview.views.review_list import ReviewListView


@pytest.fixture
def service(review_r1):
    service = Mock(spec=VesselDataService)
    service.fetch_reviews = AsyncMock(return_value=[review_r1.model_dump(by_alias=True)])
    return service


class TestReviewListView:
    """Tests for loading and showing reviews."""

    def test_empty_record_id_does_not_fetch(self, service):
        """Empty record id does not fetch."""
        view = ReviewListView(service)

        view.record_id = ""

        assert view.state.status is LoadStatus.IDLE
        assert view.reviews_to_show is False
        service.fetch_reviews.assert_not_called()

    @pytest.mark.asyncio
    async def test_record_id_fetches(self, service, review_r1):
        """Record id fetches."""
        view = ReviewListView(service)

        view.record_id = "v1"
        assert view.is_loading is True
        await view.wait()

        assert view.reviews == [review_r1]
        assert view.reviews_to_show is True
        service.fetch_reviews.assert_awaited_once_with("v1")

    @pytest.mark.asyncio
    async def test_loading_signals(self, service):
        """Loading signals."""
        view = ReviewListView(service)
        log = []
        view.add_listener(ViewEventType.LOADING, lambda e: log.append(e.event_type.value))
        view.add_listener(ViewEventType.DONE_LOADING, lambda e: log.append(e.event_type.value))

        view.record_id = "v1"
        await view.wait()

        assert log == ["loading", "doneloading"]

    @pytest.mark.asyncio
    async def test_refresh_refetches_same_vessel(self, service):
        """Refresh refetches same vessel."""
        view = ReviewListView(service)
        view.record_id = "v1"
        await view.wait()

        task = view.refresh()
        await task

        assert service.fetch_reviews.await_count == 2

    @pytest.mark.asyncio
    async def test_bind_defers_fetch_to_refresh(self, service, review_r1):
        """bind() adopts the vessel and refresh() issues the single fetch."""
        view = ReviewListView(service)

        view.bind("v1")
        assert view.record_id == "v1"
        service.fetch_reviews.assert_not_called()

        await view.refresh()

        service.fetch_reviews.assert_awaited_once_with("v1")
        assert view.reviews == [review_r1]

    def test_refresh_without_vessel(self, service):
        """Refresh without vessel."""
        view = ReviewListView(service)

        assert view.refresh() is None
        service.fetch_reviews.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_shows_nothing(self, service):
        """Failure shows nothing."""
        service.fetch_reviews.side_effect = ServiceError("boom")
        view = ReviewListView(service)

        view.record_id = "v1"
        await view.wait()

        assert view.state.status is LoadStatus.FAILED
        assert view.reviews == []
        assert view.reviews_to_show is False
        assert str(view.error) == "boom"

    @pytest.mark.asyncio
    async def test_switch_vessel_ignores_stale_reviews(self, controlled_service, review_r1, flush):
        """Switch vessel ignores stale reviews."""
        view = ReviewListView(controlled_service)
        view.record_id = "v1"
        await flush()
        view.record_id = "v2"
        await flush()

        controlled_service.resolve("fetch_reviews", "v1", [review_r1])
        await flush()

        assert view.reviews == []
        assert view.is_loading is True

    def test_navigate_to_record(self, service, navigator):
        """Navigate to record."""
        view = ReviewListView(service, navigator=navigator)

        view.navigate_to_record("r1")

        navigator.navigate_to_record.assert_called_once_with("r1")

    def test_navigate_without_navigator(self, service):
        """Navigate without navigator."""
        ReviewListView(service).navigate_to_record("r1")
