"""
Phone number enrichment orchestration.

One lookup makes a single enricher call. The enricher gets the deterministic
parser as a tool, the model fills in what the library cannot know (region,
carrier, coordinates), and the answer is merged into a `PhoneNumberRecord`
with every missing or malformed field normalized to None.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from phonemap.core.parser import ParseResult, parse
from phonemap.core.record import DETERMINISTIC_FIELDS, PhoneNumberRecord
from phonemap.llm.interface import Enricher, PhoneParserTool

logger = logging.getLogger(__name__)


class EnrichmentError(RuntimeError):
    """Raised when the enricher produced no output at all."""


def merge_record(
    output: Mapping[str, Any], parsed: ParseResult | None = None
) -> PhoneNumberRecord:
    """
    Merge model output with the parser's result.

    Model values are coerced field by field (see `PhoneNumberRecord.from_dict`).
    When the parser ran on the number, its fields replace whatever the model
    reported for them.
    """

    record = PhoneNumberRecord.from_dict(output)
    if parsed is None:
        return record

    exact = parsed.to_record()
    return replace(record, **{name: getattr(exact, name) for name in DETERMINISTIC_FIELDS})


class PhoneNumberEnricher:
    """Runs one enrichment request per call; holds no per-request state."""

    def __init__(self, enricher: Enricher, *, timeout_seconds: float | None = 60.0) -> None:
        self._enricher = enricher
        self._timeout = timeout_seconds

    async def enrich(self, raw: str) -> PhoneNumberRecord:
        tool = PhoneParserTool()
        try:
            output = await asyncio.wait_for(
                self._enricher.infer(raw, tool=tool), timeout=self._timeout
            )
        except asyncio.TimeoutError as exc:
            logger.warning("Enricher %s timed out after %ss", self._enricher.name, self._timeout)
            raise EnrichmentError(
                "The model did not return any output before the timeout."
            ) from exc
        except Exception as exc:
            # Backend failures (HTTP errors, malformed payloads) mean no output.
            logger.error("Enricher %s failed for %s: %s", self._enricher.name, raw, exc)
            raise EnrichmentError(f"The model backend failed: {exc}") from exc

        if not isinstance(output, Mapping):
            raise EnrichmentError(
                "The model did not return a valid output for parsing the phone number."
            )

        # Whatever string the model passed to the tool, the parser's answer for
        # the user's own input is the authoritative one.
        parsed = parse(raw) if tool.calls else None
        record = merge_record(output, parsed)
        logger.info(
            "Enriched %s via %s (tool calls: %d)", raw, self._enricher.name, len(tool.calls)
        )
        return record


async def enrich_phone_number(
    raw: str, enricher: Enricher, *, timeout_seconds: float | None = 60.0
) -> PhoneNumberRecord:
    return await PhoneNumberEnricher(enricher, timeout_seconds=timeout_seconds).enrich(raw)
