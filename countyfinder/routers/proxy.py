"""Credential-shielding proxy for the browser front end.

WHAT: ``/api/geocode``, ``/api/place-details`` and ``/api/autocomplete``.
WHEN: Called by the lookup client (``ProxyTransport``) or any browser page.
WHY: The Google key stays on the server; clients only ever see envelopes.
HOW: Check the query parameters, then hand off to ``GoogleMapsClient``. Errors
are raised as ``CountyFinderError`` subclasses and rendered by the handlers in
``core.errors`` as ``{"error", "message"}``.
"""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, Query

from ..core.errors import BadRequest
from ..deps.maps import get_maps_client
from ..services.maps import GoogleMapsClient

router = APIRouter(prefix="/api", tags=["proxy"])


def _coordinate(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise BadRequest("Invalid lat or lng parameter") from None
    if not math.isfinite(number):
        raise BadRequest("Invalid lat or lng parameter")
    return number


@router.get("/geocode")
async def geocode(
    lat: str | None = Query(default=None),
    lng: str | None = Query(default=None),
    maps: GoogleMapsClient = Depends(get_maps_client),
):
    if not lat or not lng:
        raise BadRequest("Missing lat or lng parameter")
    return await maps.reverse_geocode(_coordinate(lat), _coordinate(lng))


@router.get("/place-details")
async def place_details(
    place_id: str | None = Query(default=None),
    maps: GoogleMapsClient = Depends(get_maps_client),
):
    if not place_id:
        raise BadRequest("Missing place_id parameter")
    return await maps.place_details(place_id)


@router.get("/autocomplete")
async def autocomplete(
    input_text: str | None = Query(default=None, alias="input"),
    maps: GoogleMapsClient = Depends(get_maps_client),
):
    if not input_text or not input_text.strip():
        raise BadRequest("Missing input parameter")
    return await maps.autocomplete(input_text)
