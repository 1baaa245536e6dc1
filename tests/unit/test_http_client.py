"""
Unit tests for the HTTP vessel backend.

Requests are served by an httpx.MockTransport.
"""

import json

import httpx
import pytest

from fleetview.core.models import PartialVessel, Vessel
from fleetview.errors import ErrorCategory, ServiceError
from fleetview.services.http_client import HttpVesselDataService


def make_service(handler):
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="https://fleet.test/api",
    )
    return HttpVesselDataService("https://fleet.test/api", client=client)


class TestRoutes:
    """Tests for request shapes."""

    @pytest.mark.asyncio
    async def test_fetch_vessels(self):
        """Fetch vessels."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"Id": "v1", "Name": "Wind", "BoatType": "Sailboat"}])

        service = make_service(handler)

        vessels = await service.fetch_vessels("Sailboat")

        assert vessels == [Vessel(id="v1", name="Wind", boat_type="Sailboat")]
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/vessels"
        assert seen[0].url.params["boatTypeId"] == "Sailboat"

    @pytest.mark.asyncio
    async def test_fetch_vessel_by_id(self):
        """Fetch vessel by id."""
        service = make_service(lambda request: httpx.Response(200, json={"Id": "v1", "Name": "Wind"}))

        vessel = await service.fetch_vessel_by_id("v1")

        assert vessel.name == "Wind"

    @pytest.mark.asyncio
    async def test_commit_sends_only_edited_fields(self):
        """Commit sends only edited fields."""
        bodies = []

        def handler(request):
            bodies.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(204)

        service = make_service(handler)

        await service.commit_vessel_edits([PartialVessel(id="v1", price=51000)])

        assert bodies == [("PATCH", "/api/vessels", {"data": [{"Id": "v1", "Price": 51000.0}]})]

    @pytest.mark.asyncio
    async def test_reviews_and_create(self):
        """Reviews and create."""
        def handler(request):
            if request.method == "GET":
                assert request.url.path == "/api/vessels/v1/reviews"
                return httpx.Response(200, json=[{"Id": "r1", "Boat": "v1", "Rating": 4}])
            assert request.url.path == "/api/reviews"
            assert json.loads(request.content) == {"Boat": "v1", "Rating": 5}
            return httpx.Response(201, json={"Id": "r2", "Boat": "v1", "Rating": 5})

        service = make_service(handler)

        reviews = await service.fetch_reviews("v1")
        created = await service.create_review({"Boat": "v1", "Rating": 5})

        assert reviews[0].rating == 4
        assert created.id == "r2"

    @pytest.mark.asyncio
    async def test_ids_are_encoded_as_one_path_segment(self):
        """Ids containing reserved characters stay inside their path segment."""
        paths = []

        def handler(request):
            paths.append(request.url.raw_path)
            if request.url.raw_path.endswith(b"/reviews"):
                return httpx.Response(200, json=[])
            return httpx.Response(200, json={"Id": "a/b?c#d", "Name": "Odd"})

        service = make_service(handler)

        await service.fetch_vessel_by_id("a/b?c#d")
        await service.fetch_reviews("a/b?c#d")

        assert paths == [
            b"/api/vessels/a%2Fb%3Fc%23d",
            b"/api/vessels/a%2Fb%3Fc%23d/reviews",
        ]


class TestErrors:
    """Tests for error mapping."""

    @pytest.mark.asyncio
    async def test_server_message_surfaces(self):
        """Server message surfaces."""
        service = make_service(lambda request: httpx.Response(400, json={"message": "Field too long"}))

        with pytest.raises(ServiceError) as exc:
            await service.commit_vessel_edits([PartialVessel(id="v1", name="x")])

        assert exc.value.message == "Field too long"
        assert exc.value.status_code == 400
        assert exc.value.category is ErrorCategory.COMMIT

    @pytest.mark.asyncio
    async def test_list_body_message(self):
        """List body message."""
        service = make_service(lambda request: httpx.Response(400, json=[{"message": "Required fields are missing"}]))

        with pytest.raises(ServiceError) as exc:
            await service.create_review({"Boat": "v1", "Rating": 5})

        assert exc.value.message == "Required fields are missing"
        assert exc.value.category is ErrorCategory.CREATE

    @pytest.mark.asyncio
    async def test_plain_text_body(self):
        """Plain text body."""
        service = make_service(lambda request: httpx.Response(503, text="maintenance"))

        with pytest.raises(ServiceError) as exc:
            await service.fetch_vessels()

        assert exc.value.message == "maintenance"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        """Transport failure."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        service = make_service(handler)

        with pytest.raises(ServiceError) as exc:
            await service.fetch_reviews("v1")

        assert exc.value.status_code is None
        assert "Service unavailable" in exc.value.message

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Timeouts become ServiceError."""
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        service = make_service(handler)

        with pytest.raises(ServiceError) as exc:
            await service.fetch_vessel_by_id("v1")

        assert "timed out" in exc.value.message


class TestLifecycle:
    """Tests for client ownership."""

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        """Injected client left open."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))
        service = HttpVesselDataService("https://fleet.test", client=client)

        await service.aclose()

        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        """Owned client closed."""
        async with HttpVesselDataService("https://fleet.test/", timeout_seconds=5) as service:
            client = service._get_client()
            assert service.base_url == "https://fleet.test"

        assert client.is_closed is True
