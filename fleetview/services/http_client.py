"""
services/http_client.py - HTTP adapter for the vessel backend

REST rendition of the RPC surface over httpx:

    GET   /vessels?boatTypeId=...     -> [Vessel]
    GET   /vessels/{id}               -> Vessel
    PATCH /vessels   {"data": [...]}  -> 204
    GET   /vessels/{id}/reviews       -> [VesselReview]
    POST  /reviews   {fields}         -> VesselReview

Timeouts belong to this layer. HTTP and transport failures are raised as
ServiceError carrying the server's message when it sends one.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging

import httpx

from fleetview.core.models import (
    PartialVessel,
    Vessel,
    VesselReview,
    to_review,
    to_reviews,
    to_vessel,
    to_vessels,
)
from fleetview.errors import ErrorCategory, ServiceError

from .protocol import VesselDataService

logger = logging.getLogger("services.http_client")


class HttpVesselDataService(VesselDataService):
    """VesselDataService backed by a REST endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the adapter.

        Args:
            base_url: Service root, e.g. "https://example.org/api"
            timeout_seconds: Per-request timeout
            headers: Extra headers sent with every request
            client: Pre-built client (tests inject one with a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._headers = headers or {}
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                headers=self._headers,
            )
        return self._client

    async def _request(
        self,
        method: str,
        url: str,
        category: ErrorCategory,
        **kwargs,
    ) -> httpx.Response:
        client = self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.warning(f"{method} {url} -> {e.response.status_code}: {message}")
            raise ServiceError(
                message,
                status_code=e.response.status_code,
                category=category,
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out")
            raise ServiceError(
                f"Request timed out after {self.timeout_seconds}s",
                category=category,
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ServiceError(
                f"Service unavailable: {e}",
                category=category,
            ) from e
        return response

    async def fetch_vessels(self, boat_type_id: str = "") -> List[Vessel]:
        response = await self._request(
            "GET", "/vessels",
            ErrorCategory.FETCH,
            params={"boatTypeId": boat_type_id or ""},
        )
        return to_vessels(response.json())

    async def fetch_vessel_by_id(self, vessel_id: str) -> Vessel:
        response = await self._request("GET", f"/vessels/{_segment(vessel_id)}", ErrorCategory.FETCH)
        return to_vessel(response.json())

    async def commit_vessel_edits(self, edits: List[PartialVessel]) -> None:
        await self._request(
            "PATCH", "/vessels",
            ErrorCategory.COMMIT,
            json={"data": [edit.to_fields() for edit in edits]},
        )

    async def fetch_reviews(self, vessel_id: str) -> List[VesselReview]:
        response = await self._request("GET", f"/vessels/{_segment(vessel_id)}/reviews", ErrorCategory.FETCH)
        return to_reviews(response.json())

    async def create_review(self, fields: Dict[str, Any]) -> VesselReview:
        response = await self._request("POST", "/reviews", ErrorCategory.CREATE, json=fields)
        return to_review(response.json())

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpVesselDataService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _segment(value: str) -> str:
    """Percent-encode an id for use as one path segment."""
    return quote(str(value), safe="")


def _error_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    elif isinstance(body, list) and body and isinstance(body[0], dict):
        value = body[0].get("message")
        if isinstance(value, str) and value:
            return value

    return response.text or response.reason_phrase or f"HTTP {response.status_code}"
