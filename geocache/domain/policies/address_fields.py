"""AddressFieldsPolicy — map a Nominatim ``address`` block onto city/province/country."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from geocache.domain.entities.place import ReverseGeocodeResult

# Priority order, first non-empty value wins
CITY_FIELDS: tuple[str, ...] = (
    "city",
    "town",
    "village",
    "municipality",
    "city_district",
    "suburb",
    "county",
    "hamlet",
)
PROVINCE_FIELDS: tuple[str, ...] = ("province", "state", "region", "state_district")
COUNTRY_FIELDS: tuple[str, ...] = ("country",)


def first_present(address: Mapping[str, Any], fields: Sequence[str]) -> str | None:
    """Return the first field in *fields* holding a non-blank string, else None."""
    for field in fields:
        value = address.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def extract_place(payload: Mapping[str, Any]) -> ReverseGeocodeResult:
    """Build a result from a ``/reverse`` response body.

    Missing ``address`` or missing fields produce None, never an empty string.
    """
    address = payload.get("address")
    if not isinstance(address, Mapping):
        address = {}

    display_name = payload.get("display_name")
    if not isinstance(display_name, str) or not display_name.strip():
        display_name = None

    return ReverseGeocodeResult(
        city=first_present(address, CITY_FIELDS),
        province=first_present(address, PROVINCE_FIELDS),
        country=first_present(address, COUNTRY_FIELDS),
        display_name=display_name,
    )
