"""Shared fakes for the Google Maps Platform endpoints."""

import copy
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("GOOGLE_API_KEY", "test-key")

from countyfinder.core.config import AppSettings

LOCATION = {"lat": 30.2686, "lng": -97.7424}

GEOCODE_ENVELOPE = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "600 Congress Ave, Austin, TX 78701, USA",
            "address_components": [
                {"long_name": "600", "short_name": "600", "types": ["street_number"]},
                {"long_name": "Congress Avenue", "short_name": "Congress Ave", "types": ["route"]},
                {"long_name": "Austin", "short_name": "Austin", "types": ["locality", "political"]},
                {
                    "long_name": "Travis County",
                    "short_name": "Travis County",
                    "types": ["administrative_area_level_2", "political"],
                },
                {
                    "long_name": "Texas",
                    "short_name": "TX",
                    "types": ["administrative_area_level_1", "political"],
                },
                {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
                {"long_name": "78701", "short_name": "78701", "types": ["postal_code"]},
            ],
            "geometry": {"location": LOCATION, "location_type": "ROOFTOP"},
            "place_id": "ChIJgeocoded",
            "types": ["street_address"],
        }
    ],
}

PLACE_DETAILS_ENVELOPE = {
    "status": "OK",
    "html_attributions": [],
    "result": {"geometry": {"location": LOCATION}},
}

AUTOCOMPLETE_ENVELOPE = {
    "status": "OK",
    "predictions": [
        {
            "description": "600 Congress Avenue, Austin, TX, USA",
            "place_id": "ChIJcongress600",
            "types": ["street_address", "geocode"],
            "structured_formatting": {"main_text": "600 Congress Avenue"},
        },
        {
            "description": "600 Congress Street, Boston, MA, USA",
            "place_id": "ChIJcongressboston",
            "types": ["street_address", "geocode"],
        },
    ],
}

ENDPOINTS = {
    "/maps/api/geocode/json": "geocode",
    "/maps/api/place/details/json": "place_details",
    "/maps/api/place/autocomplete/json": "autocomplete",
}


class FakeGoogle:
    """Answers the three Google endpoints from canned envelopes and records calls."""

    def __init__(self) -> None:
        self.envelopes: Dict[str, Any] = {
            "geocode": copy.deepcopy(GEOCODE_ENVELOPE),
            "place_details": copy.deepcopy(PLACE_DETAILS_ENVELOPE),
            "autocomplete": copy.deepcopy(AUTOCOMPLETE_ENVELOPE),
        }
        self.failures: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def calls(self, endpoint: Optional[str] = None) -> List[httpx.Request]:
        if endpoint is None:
            return list(self.requests)
        return [r for r in self.requests if ENDPOINTS.get(r.url.path) == endpoint]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = ENDPOINTS.get(request.url.path)
        if endpoint is None:
            return httpx.Response(404, json={"status": "NOT_FOUND"})
        if endpoint in self.failures:
            return self.failures[endpoint](request)
        return httpx.Response(200, json=self.envelopes[endpoint])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture()
def settings() -> AppSettings:
    return AppSettings(GOOGLE_API_KEY="test-key")
