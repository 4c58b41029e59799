"""
The phone number record returned to callers.

A record is built once per lookup and never mutated. Every field may be None;
the serialized form keeps the camelCase keys the web form expects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

NUMBER_TYPES: frozenset[str] = frozenset(
    {
        "FIXED_LINE",
        "MOBILE",
        "FIXED_LINE_OR_MOBILE",
        "TOLL_FREE",
        "PREMIUM_RATE",
        "SHARED_COST",
        "VOIP",
        "PERSONAL_NUMBER",
        "PAGER",
        "UAN",
        "VOICEMAIL",
        "UNKNOWN",
    }
)

UNKNOWN_NUMBER_TYPE = "UNKNOWN"

# attribute name -> serialized key
_WIRE_KEYS: dict[str, str] = {
    "country_code": "countryCode",
    "region_description": "regionDescription",
    "national_number": "nationalNumber",
    "e164_format": "e164Format",
    "carrier": "carrier",
    "timezone": "timezone",
    "is_valid_number": "isValidNumber",
    "number_type": "numberType",
    "is_possible_number": "isPossibleNumber",
    "region_latitude": "regionLatitude",
    "region_longitude": "regionLongitude",
}

# Fields only libphonenumber can answer exactly.
DETERMINISTIC_FIELDS: tuple[str, ...] = (
    "country_code",
    "national_number",
    "e164_format",
    "timezone",
    "is_valid_number",
    "number_type",
    "is_possible_number",
)

# Fields left to the model's world knowledge.
INFERRED_FIELDS: tuple[str, ...] = (
    "region_description",
    "carrier",
    "region_latitude",
    "region_longitude",
)


@dataclass(frozen=True, slots=True)
class PhoneNumberRecord:
    """Parsed and enriched details for one phone number."""

    country_code: str | None = None
    region_description: str | None = None
    national_number: str | None = None
    e164_format: str | None = None
    carrier: str | None = None
    timezone: str | None = None
    is_valid_number: bool | None = None
    number_type: str | None = None
    is_possible_number: bool | None = None
    region_latitude: float | None = None
    region_longitude: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in _WIRE_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PhoneNumberRecord:
        """
        Build a record from untrusted data (camelCase or snake_case keys).

        Every value goes through the coercion rules below, so the result never
        carries empty strings or non-boolean flags.
        """

        values: dict[str, Any] = {}
        for f in fields(cls):
            wire = _WIRE_KEYS[f.name]
            raw = data.get(wire, data.get(f.name))
            values[f.name] = _COERCERS[f.name](raw)
        return cls(**values)


def coerce_str(value: Any) -> str | None:
    """Non-empty strings survive (stripped); everything else becomes None."""

    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def coerce_bool(value: Any) -> bool | None:
    """Only real booleans survive; "can't tell" is None, never False."""

    return value if isinstance(value, bool) else None


def _coerce_degrees(value: Any, limit: float) -> float | None:
    # bool is an int subclass; True is not a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value) or abs(value) > limit:
        return None
    return value


def coerce_latitude(value: Any) -> float | None:
    return _coerce_degrees(value, 90.0)


def coerce_longitude(value: Any) -> float | None:
    return _coerce_degrees(value, 180.0)


def coerce_number_type(value: Any) -> str | None:
    """
    Normalize a number type into the closed enumeration.

    Falsy values are None. Anything else that does not name a known type maps
    to the UNKNOWN sentinel instead of leaking an arbitrary string.
    """

    text = coerce_str(value)
    if text is None:
        return None
    label = text.upper().replace(" ", "_").replace("-", "_")
    return label if label in NUMBER_TYPES else UNKNOWN_NUMBER_TYPE


_COERCERS = {
    "country_code": lambda v: (coerce_str(v) or "").upper() or None,
    "region_description": coerce_str,
    "national_number": coerce_str,
    "e164_format": coerce_str,
    "carrier": coerce_str,
    "timezone": coerce_str,
    "is_valid_number": coerce_bool,
    "number_type": coerce_number_type,
    "is_possible_number": coerce_bool,
    "region_latitude": coerce_latitude,
    "region_longitude": coerce_longitude,
}
