"""Tests for AddressFieldsPolicy (field fallback precedence)."""

from geocache.domain.policies.address_fields import extract_place, first_present


def test_city_preferred_over_town():
    result = extract_place({"address": {"city": "A", "town": "B"}})
    assert result.city == "A"


def test_town_used_when_no_city():
    result = extract_place({"address": {"town": "B"}})
    assert result.city == "B"


def test_city_falls_back_to_hamlet_last():
    result = extract_place({"address": {"hamlet": "H", "county": "C"}})
    assert result.city == "C"
    result = extract_place({"address": {"hamlet": "H"}})
    assert result.city == "H"


def test_province_precedence():
    address = {"state_district": "SD", "region": "R", "state": "S"}
    assert extract_place({"address": address}).province == "S"
    assert extract_place({"address": {"province": "P", "state": "S"}}).province == "P"
    assert extract_place({"address": {"state_district": "SD"}}).province == "SD"


def test_new_york(nominatim_new_york_payload):
    result = extract_place(nominatim_new_york_payload)
    assert result.city == "New York"
    assert result.province == "New York"
    assert result.country == "United States"
    assert result.display_name == "New York, United States"


def test_missing_address_gives_nulls():
    result = extract_place({"display_name": "Somewhere"})
    assert result.city is None
    assert result.province is None
    assert result.country is None
    assert result.display_name == "Somewhere"


def test_empty_strings_become_none():
    """Empty values are skipped, not returned as ''."""
    result = extract_place({"display_name": "", "address": {"city": "", "town": "T", "country": ""}})
    assert result.city == "T"
    assert result.country is None
    assert result.display_name is None


def test_non_dict_address_ignored():
    result = extract_place({"address": ["not", "a", "dict"]})
    assert result.is_negative()


def test_first_present_skips_non_strings():
    assert first_present({"city": 42, "town": "T"}, ("city", "town")) == "T"
    assert first_present({}, ("city",)) is None
