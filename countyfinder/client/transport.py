from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from ..core.config import AppSettings
from ..core.errors import CountyFinderError, UpstreamError
from ..schemas.address import AutocompleteResult, GeocodeResult, LatLng
from ..services.maps import (
    AUTOCOMPLETE_FAILED,
    GEOCODE_FAILED,
    PLACE_DETAILS_FAILED,
    GoogleMapsClient,
)

logger = logging.getLogger(__name__)


class LookupTransport(Protocol):
    """How the suggestion controller reaches Google.

    Every method either returns a parsed result or raises ``UpstreamError``
    (``ConfigError`` too, for in-process transports without a key).
    """

    async def autocomplete(self, text: str) -> AutocompleteResult:
        ...

    async def place_location(self, place_id: str) -> LatLng:
        ...

    async def reverse_geocode(self, location: LatLng) -> GeocodeResult:
        ...

    async def aclose(self) -> None:
        ...


class ProxyTransport:
    """Talk to the ``/api`` proxy over HTTP; the key never leaves the server."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def _get(self, path: str, params: dict[str, Any], failure_message: str) -> Any:
        try:
            response = await self._client.get(path, params=params)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Proxy call %s failed: %s", path, exc)
            raise UpstreamError(failure_message) from exc

        if response.status_code >= 400:
            error = data.get("error") if isinstance(data, dict) else None
            message = data.get("message") if isinstance(data, dict) else None
            if not isinstance(error, str):
                raise UpstreamError(failure_message, status_code=response.status_code)
            # 400s relay a provider status; 500s are config or transport trouble.
            provider_status = error if response.status_code == 400 else None
            raise UpstreamError(
                error,
                message,
                status_code=response.status_code,
                provider_status=provider_status,
            )
        return data

    async def autocomplete(self, text: str) -> AutocompleteResult:
        data = await self._get("autocomplete", {"input": text}, AUTOCOMPLETE_FAILED)
        return AutocompleteResult.from_envelope(data)

    async def place_location(self, place_id: str) -> LatLng:
        data = await self._get("place-details", {"place_id": place_id}, PLACE_DETAILS_FAILED)
        return LatLng.from_place_details(data)

    async def reverse_geocode(self, location: LatLng) -> GeocodeResult:
        data = await self._get(
            "geocode", {"lat": location.lat, "lng": location.lng}, GEOCODE_FAILED
        )
        return GeocodeResult.from_envelope(data)

    async def aclose(self) -> None:
        await self._client.aclose()


class DirectTransport:
    """Call Google in-process, for code that already runs server-side."""

    def __init__(self, maps: GoogleMapsClient) -> None:
        self.maps = maps

    async def autocomplete(self, text: str) -> AutocompleteResult:
        return AutocompleteResult.from_envelope(await self.maps.autocomplete(text))

    async def place_location(self, place_id: str) -> LatLng:
        return LatLng.from_place_details(await self.maps.place_details(place_id))

    async def reverse_geocode(self, location: LatLng) -> GeocodeResult:
        return GeocodeResult.from_envelope(
            await self.maps.reverse_geocode(location.lat, location.lng)
        )

    async def aclose(self) -> None:
        return None


def build_transport(
    settings: AppSettings,
    *,
    kind: Optional[str] = None,
    proxy_url: Optional[str] = None,
) -> LookupTransport:
    """Pick the transport named by ``CLIENT_TRANSPORT`` (or ``kind``)."""

    kind = (kind or settings.CLIENT_TRANSPORT).lower()
    if kind == "direct":
        return DirectTransport(GoogleMapsClient(settings))
    if kind == "proxy":
        return ProxyTransport(
            proxy_url or settings.PROXY_BASE_URL,
            timeout=settings.PROXY_TIMEOUT_SECONDS,
        )
    raise CountyFinderError(f"Unknown transport {kind!r}")
