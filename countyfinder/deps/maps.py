from __future__ import annotations

from ..core.config import get_settings
from ..services.maps import GoogleMapsClient


def get_maps_client() -> GoogleMapsClient:
    """Request-scoped Google client; tests swap it via ``dependency_overrides``."""

    return GoogleMapsClient(get_settings())
