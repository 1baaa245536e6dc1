"""
Unit tests for DetailView.

Covers bus subscription lifecycle, record loading, tab binding and the
review created routing from the form to the review list.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from fleetview.core.enums import DETAILS_TAB_ICON, DetailTab
from fleetview.errors import ServiceError
from fleetview.services.protocol import VesselDataService
from fleetview.state.load_state import LoadStatus
from fleetview.ui.events import ReviewCreated, ViewEvent, ViewEventType
from fleetview.views.detail import DetailView
from fleetview.views.review_form import ReviewSubmissionForm
from fleetview.views.review_list import ReviewListView


@pytest.fixture
def service(vessel_v1, vessel_v2):
    records = {"v1": vessel_v1, "v2": vessel_v2}
    service = Mock(spec=VesselDataService)
    service.fetch_vessel_by_id = AsyncMock(side_effect=lambda vessel_id: records[vessel_id])
    service.fetch_reviews = AsyncMock(return_value=[])
    service.create_review = AsyncMock(return_value={"Id": "r9", "Boat": "v1", "Rating": 5})
    return service


class TestSubscription:
    """Tests for the bus subscription lifecycle."""

    def test_subscribes_on_creation(self, bus, service):
        """Subscribes on creation."""
        view = DetailView(bus, service)

        assert view.is_connected is True
        assert bus.handler_count == 1

    @pytest.mark.asyncio
    async def test_message_loads_record(self, bus, service, vessel_v1):
        """Message loads record."""
        view = DetailView(bus, service)

        bus.publish({"recordId": "v1"})

        assert view.state.status is LoadStatus.LOADING
        assert view.has_record is False

        await view.wait()

        assert view.vessel == vessel_v1
        assert view.has_record is True
        assert view.vessel_name == "Wind"
        assert view.details_tab_icon_name == DETAILS_TAB_ICON
        assert view.review_form.record_id == "v1"

    def test_no_record_before_selection(self, bus, service):
        """No record before selection."""
        view = DetailView(bus, service)

        assert view.vessel is None
        assert view.details_tab_icon_name is None
        assert view.vessel_name == ""

    def test_disconnect_stops_messages(self, bus, service):
        """Disconnect stops messages."""
        view = DetailView(bus, service)

        view.disconnect()
        view.disconnect()
        bus.publish({"recordId": "v1"})

        assert view.is_connected is False
        assert bus.handler_count == 0
        assert view.vessel_id is None
        service.fetch_vessel_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_failure(self, bus, service):
        """Fetch failure."""
        service.fetch_vessel_by_id.side_effect = ServiceError("Vessel v9 not found", status_code=404)
        view = DetailView(bus, service)

        bus.publish({"recordId": "v9"})
        await view.wait()

        assert view.state.status is LoadStatus.FAILED
        assert view.has_record is False
        assert view.details_tab_icon_name is None

    @pytest.mark.asyncio
    async def test_rapid_reselection_keeps_latest(self, bus, controlled_service, vessel_v1, vessel_v2, flush):
        """Rapid reselection keeps latest."""
        view = DetailView(bus, controlled_service)
        bus.publish({"recordId": "v1"})
        await flush()
        bus.publish({"recordId": "v2"})
        await flush()

        controlled_service.resolve("fetch_vessel_by_id", "v2", vessel_v2)
        await flush()
        controlled_service.resolve("fetch_vessel_by_id", "v1", vessel_v1)
        await flush()

        assert view.vessel == vessel_v2


class TestTabs:
    """Tests for tab selection and review list binding."""

    def test_default_tab(self, bus, service):
        """Default tab."""
        assert DetailView(bus, service).active_tab is DetailTab.DETAILS
        assert DetailView(bus, service, default_tab="reviews").active_tab is DetailTab.REVIEWS

    @pytest.mark.asyncio
    async def test_reviews_tab_binds_list(self, bus, service):
        """Reviews tab binds list."""
        view = DetailView(bus, service)
        bus.publish({"recordId": "v1"})
        await view.wait()

        assert view.review_list.record_id is None

        view.select_tab(DetailTab.REVIEWS)
        await view.review_list.wait()

        assert view.review_list.record_id == "v1"
        service.fetch_reviews.assert_awaited_once_with("v1")

    @pytest.mark.asyncio
    async def test_reselecting_tab_does_not_refetch(self, bus, service):
        """Reselecting tab does not refetch."""
        view = DetailView(bus, service)
        bus.publish({"recordId": "v1"})
        view.select_tab("reviews")
        await view.review_list.wait()

        view.select_tab("details")
        view.select_tab("reviews")

        assert service.fetch_reviews.await_count == 1

    @pytest.mark.asyncio
    async def test_selection_while_on_reviews_tab_rebinds(self, bus, service):
        """Selection while on reviews tab rebinds."""
        view = DetailView(bus, service, default_tab=DetailTab.REVIEWS)

        bus.publish({"recordId": "v2"})
        await view.review_list.wait()

        service.fetch_reviews.assert_awaited_once_with("v2")

    def test_labels_override(self, bus, service):
        """Labels override."""
        view = DetailView(bus, service, labels={"reviews": "Opinions"})

        assert view.labels["reviews"] == "Opinions"
        assert view.labels["details"] == "Details"


class TestReviewCreated:
    """Tests for the form to list routing."""

    def test_switches_tab_and_refreshes_once(self, bus, service):
        """Switches tab and refreshes once."""
        review_list = Mock(spec=ReviewListView)
        review_list.record_id = "v1"
        form = ReviewSubmissionForm(service)
        view = DetailView(bus, service, review_list=review_list, review_form=form)

        form.dispatch(ViewEvent.review_created(ReviewCreated(boat_id="v1")))

        assert view.active_tab is DetailTab.REVIEWS
        review_list.refresh.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_submission_shows_new_review(self, bus, service):
        """Submission shows new review."""
        view = DetailView(bus, service)
        bus.publish({"recordId": "v1"})
        await view.wait()
        view.select_tab("add_review")
        service.fetch_reviews.return_value = [{"Id": "r9", "Boat": "v1", "Rating": 5}]

        view.review_form.handle_rating_changed(5)
        await view.review_form.submit()
        await view.review_list.wait()

        assert view.active_tab is DetailTab.REVIEWS
        assert [r.id for r in view.review_list.reviews] == ["r9"]
        service.fetch_reviews.assert_awaited_once_with("v1")

    def test_listener_registered_on_form(self, bus, service):
        """Listener registered on form."""
        form = ReviewSubmissionForm(service)
        DetailView(bus, service, review_form=form)

        assert form.events.handler_count == 1


class TestNavigation:
    """Tests for navigate_to_record_view_page()."""

    @pytest.mark.asyncio
    async def test_navigates_to_current_vessel(self, bus, service, navigator):
        """Navigates to current vessel."""
        view = DetailView(bus, service, navigator=navigator)
        bus.publish({"recordId": "v1"})
        await view.wait()

        view.navigate_to_record_view_page()

        navigator.navigate_to_record.assert_called_once_with("v1")

    def test_no_vessel_no_navigation(self, bus, service, navigator):
        """No vessel no navigation."""
        view = DetailView(bus, service, navigator=navigator)

        view.navigate_to_record_view_page()

        navigator.navigate_to_record.assert_not_called()
