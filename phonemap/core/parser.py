"""
Deterministic phone number parsing.

This module wraps `phonenumbers` and never raises for bad input: parsing
returns either a `ParseSuccess` carrying the canonical fields or a
`ParseFailure` carrying the reason. Callers treat an unparseable number as
ordinary data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

import phonenumbers
from phonenumbers import NumberParseException, timezone
from phonenumbers.phonenumber import PhoneNumber
from phonenumbers.phonenumberutil import PhoneNumberFormat, PhoneNumberType

from phonemap.core.record import UNKNOWN_NUMBER_TYPE, PhoneNumberRecord

logger = logging.getLogger(__name__)

# libphonenumber's placeholder when it has no zone data for a number.
_UNKNOWN_TIME_ZONE = "Etc/Unknown"


def number_type_label(nt: int) -> str:
    """Return the closed-enum label for a libphonenumber NumberType."""

    # phonenumbers exposes PhoneNumberType values as ints.
    mapping: dict[int, str] = {
        PhoneNumberType.FIXED_LINE: "FIXED_LINE",
        PhoneNumberType.MOBILE: "MOBILE",
        PhoneNumberType.FIXED_LINE_OR_MOBILE: "FIXED_LINE_OR_MOBILE",
        PhoneNumberType.TOLL_FREE: "TOLL_FREE",
        PhoneNumberType.PREMIUM_RATE: "PREMIUM_RATE",
        PhoneNumberType.SHARED_COST: "SHARED_COST",
        PhoneNumberType.VOIP: "VOIP",
        PhoneNumberType.PERSONAL_NUMBER: "PERSONAL_NUMBER",
        PhoneNumberType.PAGER: "PAGER",
        PhoneNumberType.UAN: "UAN",
        PhoneNumberType.VOICEMAIL: "VOICEMAIL",
        PhoneNumberType.UNKNOWN: "UNKNOWN",
    }
    return mapping.get(nt, UNKNOWN_NUMBER_TYPE)


def join_time_zones(zones: tuple[str, ...] | list[str]) -> str | None:
    """Join IANA zone names with ", "; None when the library reported none."""

    known = [z for z in zones if z and z != _UNKNOWN_TIME_ZONE]
    return ", ".join(known) if known else None


@dataclass(frozen=True, slots=True)
class ParseSuccess:
    """Fields libphonenumber could determine for a parsed number."""

    country_code: str | None
    national_number: str | None
    e164_format: str | None
    timezone: str | None
    is_valid_number: bool
    is_possible_number: bool
    number_type: str
    ok: Literal[True] = True

    def to_record(self) -> PhoneNumberRecord:
        return PhoneNumberRecord(
            country_code=self.country_code,
            national_number=self.national_number,
            e164_format=self.e164_format,
            timezone=self.timezone,
            is_valid_number=self.is_valid_number,
            number_type=self.number_type,
            is_possible_number=self.is_possible_number,
        )


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """The library rejected the input; `reason` says why."""

    reason: str
    ok: Literal[False] = False

    def to_record(self) -> PhoneNumberRecord:
        # "Known invalid" rather than "unknown".
        return PhoneNumberRecord(is_valid_number=False, is_possible_number=False)


ParseResult = ParseSuccess | ParseFailure


def _describe(parsed: PhoneNumber) -> ParseSuccess:
    region = phonenumbers.region_code_for_number(parsed)
    national = phonenumbers.national_significant_number(parsed)
    e164 = phonenumbers.format_number(parsed, PhoneNumberFormat.E164)
    return ParseSuccess(
        country_code=region or None,
        national_number=national or None,
        e164_format=e164 or None,
        timezone=join_time_zones(timezone.time_zones_for_number(parsed)),
        is_valid_number=bool(phonenumbers.is_valid_number(parsed)),
        is_possible_number=bool(phonenumbers.is_possible_number(parsed)),
        number_type=number_type_label(int(phonenumbers.number_type(parsed))),
    )


def parse(raw: str) -> ParseResult:
    """
    Parse a phone number given in international format (leading `+`).

    No validation happens before the library call. Any exception the library
    raises is logged and returned as a `ParseFailure`.
    """

    try:
        parsed = phonenumbers.parse(raw, None)
        return _describe(parsed)
    except NumberParseException as exc:
        logger.warning("Could not parse phone number %r: %s", raw, exc)
        return ParseFailure(reason=str(exc))
    except Exception as exc:
        logger.exception("Unexpected error parsing phone number %r", raw)
        return ParseFailure(reason=f"{type(exc).__name__}: {exc}")


def parse_partial(raw: str) -> PhoneNumberRecord:
    """
    Parse `raw` into a partial record.

    Region description, carrier and coordinates are always None here; those
    are outside what libphonenumber can answer reliably.
    """

    return parse(raw).to_record()
