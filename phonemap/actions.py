"""
Inbound boundary for form handlers.

`get_phone_number_details` never raises: the caller always gets either a
record or an error message, never both.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from phonemap.core.enrich import PhoneNumberEnricher
from phonemap.core.record import PhoneNumberRecord

logger = logging.getLogger(__name__)

# Client-side check: optional "+", no leading zero, 2-15 digits.
PHONE_NUMBER_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")

INVALID_INPUT = "Invalid input."
NO_DETAILS = "Failed to parse phone number. No details returned."


def is_well_formed(value: str) -> bool:
    return bool(PHONE_NUMBER_PATTERN.match(value))


@dataclass(frozen=True, slots=True)
class ActionResult:
    data: PhoneNumberRecord | None
    error: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data.to_dict() if self.data is not None else None,
            "error": self.error,
        }


async def get_phone_number_details(
    phone_number: Any, *, enricher: PhoneNumberEnricher
) -> ActionResult:
    """
    Look up `phone_number` and wrap the outcome for the UI.

    Non-string or blank input is rejected before the enricher is called.
    """

    if not isinstance(phone_number, str) or not phone_number.strip():
        return ActionResult(data=None, error=INVALID_INPUT)

    try:
        record = await enricher.enrich(phone_number)
    except Exception as exc:
        logger.error("Lookup failed for %s: %s", phone_number, exc, exc_info=True)
        message = str(exc) or "An unknown error occurred while parsing the phone number."
        return ActionResult(data=None, error=message)

    if record is None:
        return ActionResult(data=None, error=NO_DETAILS)
    return ActionResult(data=record, error=None)
