from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..core.config import AppSettings
from ..core.errors import ConfigError, UpstreamError
from ..schemas.address import AutocompleteResult

logger = logging.getLogger(__name__)

API_KEY_MISSING = "API key not configured"
GEOCODE_FAILED = "Failed to geocode address"
PLACE_DETAILS_FAILED = "Failed to get place details"
AUTOCOMPLETE_FAILED = "Failed to fetch address suggestions"


def _log_http_status(response: httpx.Response, context: str) -> None:
    if response.status_code in {401, 403}:
        logger.warning("Google Maps authentication failed for %s", context)
    elif response.status_code >= 500:
        logger.error("Google service error %s during %s", response.status_code, context)
    elif response.status_code >= 400:
        logger.error("Google request error %s during %s", response.status_code, context)


class GoogleMapsClient:
    """Forward lookups to Google with the server-held key attached.

    Geocode and place-details envelopes come back exactly as Google sent them
    when ``status`` is ``OK``. Any other status becomes an ``UpstreamError``
    carrying only the status and ``error_message``; network and JSON failures
    become an ``UpstreamError`` with a generic message.
    """

    def __init__(
        self,
        settings: AppSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    def _ensure_configured(self) -> str:
        if not self.settings.api_key_configured:
            raise ConfigError(API_KEY_MISSING)
        return self.settings.GOOGLE_API_KEY

    async def _get_envelope(
        self,
        url: str,
        params: Dict[str, Any],
        *,
        context: str,
        failure_message: str,
    ) -> Dict[str, Any]:
        params = {**params, "key": self._ensure_configured()}
        timeout = httpx.Timeout(self.settings.PROVIDER_TIMEOUT_SECONDS)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
            _log_http_status(response, context)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Google %s request failed: %s", context, exc, exc_info=True)
            raise UpstreamError(failure_message) from exc

        if not isinstance(data, dict) or not isinstance(data.get("status"), str):
            logger.error("Google %s returned a payload without a status", context)
            raise UpstreamError(failure_message)
        return data

    @staticmethod
    def _raise_for_provider_status(data: Dict[str, Any], context: str) -> None:
        status = data["status"]
        if status == "OK":
            return
        logger.warning("Google %s error: %s (%s)", context, status, data.get("error_message"))
        raise UpstreamError(
            status,
            data.get("error_message"),
            status_code=400,
            provider_status=status,
        )

    async def reverse_geocode(self, lat: float, lng: float) -> Dict[str, Any]:
        """Return the reverse-geocode envelope for a coordinate pair."""

        data = await self._get_envelope(
            self.settings.GOOGLE_GEOCODE_URL,
            {"latlng": f"{lat},{lng}"},
            context="reverse geocode",
            failure_message=GEOCODE_FAILED,
        )
        self._raise_for_provider_status(data, "reverse geocode")
        return data

    async def place_details(self, place_id: str) -> Dict[str, Any]:
        """Return the place-details envelope, geometry only (cheapest SKU)."""

        data = await self._get_envelope(
            self.settings.GOOGLE_PLACES_DETAILS_URL,
            {"place_id": place_id, "fields": "geometry"},
            context="place details",
            failure_message=PLACE_DETAILS_FAILED,
        )
        self._raise_for_provider_status(data, "place details")
        return data

    async def autocomplete(self, text: str) -> Dict[str, Any]:
        """Return US street-address predictions reduced to description and place id."""

        params: Dict[str, Any] = {"input": text.strip(), "types": "address"}
        region_code = (self.settings.GOOGLE_REGION_CODE or "").strip()
        if region_code:
            # Autocomplete only accepts country filters in ``components``.
            params["components"] = f"country:{region_code.lower()}"

        data = await self._get_envelope(
            self.settings.GOOGLE_PLACES_AUTOCOMPLETE_URL,
            params,
            context="address autocomplete",
            failure_message=AUTOCOMPLETE_FAILED,
        )
        if data["status"] == "ZERO_RESULTS":
            return {"status": "ZERO_RESULTS", "predictions": []}
        self._raise_for_provider_status(data, "address autocomplete")

        try:
            result = AutocompleteResult.from_envelope(data)
        except UpstreamError as exc:
            logger.error("Google address autocomplete payload rejected: %s", exc.user_message)
            raise UpstreamError(AUTOCOMPLETE_FAILED) from exc
        return result.to_envelope()
