"""Prompt text and output schema for the chat-completions enricher."""

from __future__ import annotations

from typing import Any

SYSTEM_PROMPT = """You are a phone number analysis expert.
Your task is to analyse the phone number you are given and return its details.

First, call the `parse_phone_number` tool to get the foundational information. It provides:
- countryCode (e.g. 'US', 'IN')
- nationalNumber
- e164Format
- timezone
- isValidNumber
- numberType
- isPossibleNumber

The tool always returns null for regionDescription, carrier, regionLatitude and regionLongitude.

After you have the tool output, use its countryCode and nationalNumber together with your
general knowledge to determine:
1. regionDescription: the specific state or region name (e.g. "California", "West Bengal",
   "New South Wales"), not just the country name.
2. carrier: the telecommunications company serving the number (e.g. "Verizon", "Reliance Jio").
3. regionLatitude and regionLongitude: approximate coordinates in decimal degrees of the
   centre of that region.

Copy the tool's fields into your answer unchanged. If you cannot confidently determine
regionDescription, carrier or the coordinates, return null for them. Never guess a value
the tool already provided."""

USER_PROMPT_TEMPLATE = "Phone number to analyse: {phone_number}"


def _nullable(kind: str, description: str) -> dict[str, Any]:
    return {"type": [kind, "null"], "description": description}


OUTPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "countryCode": _nullable("string", "ISO region code, e.g. US, IN."),
        "regionDescription": _nullable(
            "string", "State or region name, e.g. California. Not just the country name."
        ),
        "nationalNumber": _nullable("string", "National significant number, e.g. 6502530000."),
        "e164Format": _nullable("string", "E.164 format, e.g. +16502530000."),
        "carrier": _nullable("string", "Carrier name, e.g. Verizon, if known."),
        "timezone": _nullable("string", "Comma-separated IANA time zones."),
        "isValidNumber": _nullable("boolean", "Whether the number is valid."),
        "numberType": _nullable("string", "Number type, e.g. MOBILE, FIXED_LINE."),
        "isPossibleNumber": _nullable("boolean", "Whether the number is possible."),
        "regionLatitude": _nullable("number", "Approximate latitude of the region."),
        "regionLongitude": _nullable("number", "Approximate longitude of the region."),
    },
    "required": [
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
    ],
    "additionalProperties": False,
}


def response_format() -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": "phone_number_details", "strict": True, "schema": OUTPUT_SCHEMA},
    }


def build_messages(phone_number: str) -> list[dict[str, Any]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT_TEMPLATE.format(phone_number=phone_number)},
    ]
