from __future__ import annotations

from typing import Iterable

from ..core.errors import NoCountyData
from ..schemas.address import AddressComponent, CountyInfo

COUNTY_TYPE = "administrative_area_level_2"
CITY_TYPE = "locality"
STATE_TYPE = "administrative_area_level_1"
ZIP_TYPE = "postal_code"

NO_COUNTY_MESSAGE = "County information not available for this address"


def classify(components: Iterable[AddressComponent]) -> CountyInfo:
    """Map geocoder address components onto a ``CountyInfo`` record.

    Google gives no ordering guarantee, so when two components carry the same
    type the one seen last wins. Types nobody asked for are ignored and missing
    ones stay ``None``.
    """

    fields: dict[str, str] = {}
    for component in components:
        types = component.types
        if COUNTY_TYPE in types:
            fields["county"] = component.long_name
        if CITY_TYPE in types:
            fields["city"] = component.long_name
        if STATE_TYPE in types:
            fields["state"] = component.long_name
            fields["state_short"] = component.short_name
        if ZIP_TYPE in types:
            fields["zip"] = component.long_name
    return CountyInfo(**fields)


def require_county(info: CountyInfo) -> CountyInfo:
    if not info.county:
        raise NoCountyData("NO_COUNTY", NO_COUNTY_MESSAGE)
    return info
