"""Typed views of the Google envelopes that flow through a lookup.

WHAT: Pydantic models for address components, coordinates, suggestions and the
classified county record.
WHEN: Built whenever a geocode, place-details or autocomplete envelope is read,
whether it came straight from Google or through the proxy.
WHY: Every later stage works on validated objects instead of digging through
nested dictionaries.
HOW: ``from_envelope`` constructors pick the fields a lookup needs and turn any
malformed payload into an ``UpstreamError``.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.errors import UpstreamError
from ..core.jinja import PLACEHOLDER

MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


def _envelope_status(data: Any) -> str:
    if not isinstance(data, dict) or not isinstance(data.get("status"), str):
        raise UpstreamError(MALFORMED_RESPONSE, "Provider response had no status")
    return data["status"]


class AddressComponent(BaseModel):
    """One ``address_components`` entry of a geocoding result."""

    model_config = ConfigDict(frozen=True)

    long_name: str
    short_name: str = ""
    types: FrozenSet[str] = Field(default_factory=frozenset)


class CountyInfo(BaseModel):
    """County, city, state and ZIP pulled out of one geocoding result."""

    county: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    state_short: Optional[str] = None
    zip: Optional[str] = None

    @property
    def state_label(self) -> Optional[str]:
        if not self.state_short:
            return self.state
        return f"{self.state or PLACEHOLDER} ({self.state_short})"


class LatLng(BaseModel):
    """Latitude/longitude pair returned by place details."""

    lat: float = Field(..., description="Latitude in decimal degrees")
    lng: float = Field(..., description="Longitude in decimal degrees")

    @field_validator("lat")
    def _validate_lat(cls, value: float) -> float:
        if not -90 <= value <= 90:
            raise ValueError("lat must be between -90 and 90 degrees")
        return value

    @field_validator("lng")
    def _validate_lng(cls, value: float) -> float:
        if not -180 <= value <= 180:
            raise ValueError("lng must be between -180 and 180 degrees")
        return value

    @classmethod
    def from_place_details(cls, data: Any) -> "LatLng":
        status = _envelope_status(data)
        if status != "OK":
            raise UpstreamError(status, data.get("error_message"), provider_status=status)
        result = data.get("result")
        geometry = result.get("geometry") if isinstance(result, dict) else None
        location = geometry.get("location") if isinstance(geometry, dict) else None
        if not isinstance(location, dict) or not location:
            raise UpstreamError(
                MALFORMED_RESPONSE, "Place details had no geometry", provider_status=status
            )
        try:
            return cls.model_validate(location)
        except ValidationError as exc:
            raise UpstreamError(MALFORMED_RESPONSE, "Place details had no usable location") from exc


class Suggestion(BaseModel):
    """An autocomplete prediction, alive for one dropdown render."""

    description: str
    place_id: str


class AutocompleteResult(BaseModel):
    status: str
    predictions: List[Suggestion] = Field(default_factory=list)

    @classmethod
    def from_envelope(cls, data: Any) -> "AutocompleteResult":
        status = _envelope_status(data)
        if status not in {"OK", "ZERO_RESULTS"}:
            raise UpstreamError(status, data.get("error_message"), provider_status=status)
        try:
            return cls.model_validate(
                {"status": status, "predictions": data.get("predictions") or []}
            )
        except ValidationError as exc:
            raise UpstreamError(MALFORMED_RESPONSE, "Autocomplete predictions were malformed") from exc

    def to_envelope(self) -> Dict[str, Any]:
        return self.model_dump()


class GeocodeResult(BaseModel):
    """The first result of a reverse-geocode envelope."""

    formatted_address: Optional[str] = None
    address_components: List[AddressComponent] = Field(default_factory=list)

    @classmethod
    def from_envelope(cls, data: Any) -> "GeocodeResult":
        status = _envelope_status(data)
        if status != "OK":
            raise UpstreamError(status, data.get("error_message"), provider_status=status)
        results = data.get("results")
        if not isinstance(results, list) or not results:
            raise UpstreamError(
                MALFORMED_RESPONSE, "Geocode response had no results", provider_status=status
            )
        try:
            return cls.model_validate(results[0])
        except ValidationError as exc:
            raise UpstreamError(MALFORMED_RESPONSE, "Geocode result was malformed") from exc


class LookupResult(BaseModel):
    """What a resolved suggestion turns into."""

    info: CountyInfo
    formatted_address: Optional[str] = None
    location: LatLng
