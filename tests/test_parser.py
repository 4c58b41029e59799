from __future__ import annotations

import logging

from phonenumbers.phonenumberutil import PhoneNumberType

from phonemap.core.parser import (
    ParseFailure,
    ParseSuccess,
    join_time_zones,
    number_type_label,
    parse,
    parse_partial,
)
from phonemap.core.record import NUMBER_TYPES


def test_parse_us_number_populates_deterministic_fields() -> None:
    result = parse("+16502530000")  # Google HQ (stable test vector)
    assert isinstance(result, ParseSuccess)
    assert result.ok is True
    assert result.country_code == "US"
    assert result.national_number == "6502530000"
    assert result.e164_format == "+16502530000"
    assert result.is_valid_number is True
    assert result.is_possible_number is True
    assert result.number_type in NUMBER_TYPES
    assert result.timezone is not None and "America/" in result.timezone


def test_parse_uk_number() -> None:
    result = parse("+442071234567")
    assert isinstance(result, ParseSuccess)
    assert result.country_code == "GB"
    assert result.e164_format == "+442071234567"
    assert result.number_type in NUMBER_TYPES


def test_parse_too_short_is_failure_not_exception(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="phonemap.core.parser"):
        result = parse("+1")
    assert isinstance(result, ParseFailure)
    assert result.ok is False
    assert result.reason
    assert "+1" in caplog.text


def test_parse_empty_and_missing_country_code_fail() -> None:
    assert isinstance(parse(""), ParseFailure)
    assert isinstance(parse("6502530000"), ParseFailure)


def test_parse_partial_failure_marks_number_known_invalid() -> None:
    record = parse_partial("+1")
    assert record.is_valid_number is False
    assert record.is_possible_number is False
    assert record.country_code is None
    assert record.national_number is None
    assert record.e164_format is None
    assert record.timezone is None
    assert record.number_type is None


def test_parse_partial_leaves_model_fields_empty() -> None:
    record = parse_partial("+16502530000")
    assert record.country_code == "US"
    assert record.region_description is None
    assert record.carrier is None
    assert record.region_latitude is None
    assert record.region_longitude is None


def test_parse_invalid_but_parseable_number() -> None:
    result = parse("+19999999999")
    assert isinstance(result, ParseSuccess)
    assert result.is_valid_number is False


def test_number_type_label_maps_into_closed_enum() -> None:
    assert number_type_label(PhoneNumberType.MOBILE) == "MOBILE"
    assert number_type_label(PhoneNumberType.FIXED_LINE_OR_MOBILE) == "FIXED_LINE_OR_MOBILE"
    assert number_type_label(999) == "UNKNOWN"


def test_join_time_zones() -> None:
    assert join_time_zones(["America/New_York", "America/Chicago"]) == (
        "America/New_York, America/Chicago"
    )
    assert join_time_zones([]) is None
    assert join_time_zones(("Etc/Unknown",)) is None
