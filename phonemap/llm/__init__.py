"""Enrichment backends for phonemap."""

from __future__ import annotations

from .chat import (
    BackendConfigurationError,
    ChatCompletionsEnricher,
    build_openai_client,
    decode_output,
)
from .interface import Enricher, PhoneParserTool, ToolCall
from .offline import OfflineEnricher

__all__ = [
    "BackendConfigurationError",
    "ChatCompletionsEnricher",
    "build_openai_client",
    "decode_output",
    "Enricher",
    "PhoneParserTool",
    "ToolCall",
    "OfflineEnricher",
]
