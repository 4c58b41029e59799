from __future__ import annotations

import pytest

from phonemap.core.record import (
    NUMBER_TYPES,
    PhoneNumberRecord,
    coerce_bool,
    coerce_number_type,
    coerce_str,
)


def test_to_dict_uses_camel_case_keys() -> None:
    record = PhoneNumberRecord(country_code="US", e164_format="+16502530000")
    d = record.to_dict()
    assert set(d) == {
        "countryCode",
        "regionDescription",
        "nationalNumber",
        "e164Format",
        "carrier",
        "timezone",
        "isValidNumber",
        "numberType",
        "isPossibleNumber",
        "regionLatitude",
        "regionLongitude",
    }
    assert d["countryCode"] == "US"
    assert d["carrier"] is None


def test_from_dict_normalizes_empty_and_malformed_values() -> None:
    record = PhoneNumberRecord.from_dict(
        {
            "countryCode": "",
            "regionDescription": "   ",
            "carrier": None,
            "timezone": 0,
            "isValidNumber": "true",
            "isPossibleNumber": 1,
            "numberType": "",
            "regionLatitude": "37.4",
            "regionLongitude": True,
        }
    )
    assert record == PhoneNumberRecord()


def test_from_dict_keeps_explicit_booleans() -> None:
    record = PhoneNumberRecord.from_dict({"isValidNumber": False, "isPossibleNumber": True})
    assert record.is_valid_number is False
    assert record.is_possible_number is True


def test_from_dict_accepts_snake_case_and_strips() -> None:
    record = PhoneNumberRecord.from_dict(
        {"country_code": "us", "carrier": " Verizon ", "region_latitude": 37, "region_longitude": -122.1}
    )
    assert record.country_code == "US"
    assert record.carrier == "Verizon"
    assert record.region_latitude == 37.0
    assert record.region_longitude == pytest.approx(-122.1)


def test_out_of_range_coordinates_are_dropped() -> None:
    record = PhoneNumberRecord.from_dict({"regionLatitude": 91, "regionLongitude": -181})
    assert record.region_latitude is None
    assert record.region_longitude is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("MOBILE", "MOBILE"),
        ("mobile", "MOBILE"),
        ("fixed line or mobile", "FIXED_LINE_OR_MOBILE"),
        ("SATELLITE", "UNKNOWN"),
        ("", None),
        (None, None),
        (3, None),
    ],
)
def test_coerce_number_type(value, expected) -> None:
    result = coerce_number_type(value)
    assert result == expected
    assert result is None or result in NUMBER_TYPES


def test_scalar_coercers() -> None:
    assert coerce_str("x") == "x"
    assert coerce_str("") is None
    assert coerce_bool(True) is True
    assert coerce_bool("false") is None
    assert coerce_bool(0) is None


def test_record_is_immutable() -> None:
    record = PhoneNumberRecord()
    with pytest.raises(AttributeError):
        record.carrier = "x"  # type: ignore[misc]
