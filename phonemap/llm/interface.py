"""Contracts for model-backed enrichment and the parser tool binding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from phonemap.core.parser import ParseResult, parse


@dataclass(frozen=True)
class ToolCall:
    phone_number: str
    result: ParseResult


class PhoneParserTool:
    """
    The deterministic parser exposed as a callable tool.

    Enrichers hand this to the model (or call it directly). Every invocation
    is recorded; once the tool has been used, the orchestrator takes the
    library's answers over whatever the model echoes back.
    """

    name = "parse_phone_number"
    description = (
        "Parses a phone number with libphonenumber. Returns countryCode, nationalNumber, "
        "e164Format, timezone, isValidNumber, numberType and isPossibleNumber. It always "
        "returns null for regionDescription, carrier, regionLatitude and regionLongitude; "
        "those must be determined from general knowledge."
    )
    parameters: dict[str, Any] = {
        "type": "object",
        "properties": {
            "phoneNumber": {
                "type": "string",
                "description": "The phone number in international format, e.g. +16502530000.",
            }
        },
        "required": ["phoneNumber"],
        "additionalProperties": False,
    }

    def __init__(self, parser: Callable[[str], ParseResult] = parse) -> None:
        self._parser = parser
        self.calls: list[ToolCall] = []

    def __call__(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        phone_number = arguments.get("phoneNumber")
        if not isinstance(phone_number, str):
            phone_number = ""
        result = self._parser(phone_number)
        self.calls.append(ToolCall(phone_number=phone_number, result=result))
        return result.to_record().to_dict()

    def to_openai_tool(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class Enricher(ABC):
    """Base interface for enrichment backends."""

    name: str

    @abstractmethod
    async def infer(
        self, phone_number: str, *, tool: PhoneParserTool
    ) -> Mapping[str, Any] | None:
        """
        Produce the structured record for `phone_number`.

        Args:
            phone_number: Raw number as entered by the user.
            tool: Parser tool the backend may invoke for deterministic fields.

        Returns:
            A mapping with the record's camelCase keys (missing keys are fine),
            or None when the backend produced no output at all.
        """

        raise NotImplementedError
