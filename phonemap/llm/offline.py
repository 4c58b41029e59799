"""
Network-free enricher backed by libphonenumber metadata.

Region and carrier come from the geocoder/carrier data shipped with
`phonenumbers`. Carrier data is empty for many numbers (fixed lines, ported
numbers, countries without metadata); that is normal and yields None.
Coordinates are left to the map's country fallback.
"""

from __future__ import annotations

from typing import Any, Mapping

import phonenumbers
from phonenumbers import NumberParseException, carrier, geocoder

from phonemap.llm.interface import Enricher, PhoneParserTool


class OfflineEnricher(Enricher):
    name = "offline"

    def __init__(self, *, locale: str = "en") -> None:
        self._locale = locale

    async def infer(
        self, phone_number: str, *, tool: PhoneParserTool
    ) -> Mapping[str, Any] | None:
        output: dict[str, Any] = dict(tool({"phoneNumber": phone_number}))
        if not output.get("e164Format"):
            return output

        try:
            parsed = phonenumbers.parse(phone_number, None)
        except NumberParseException:
            return output

        output["regionDescription"] = geocoder.description_for_number(parsed, self._locale)
        output["carrier"] = carrier.name_for_number(parsed, self._locale)
        return output
