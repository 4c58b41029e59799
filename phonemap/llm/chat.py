"""
OpenAI-compatible chat-completions enricher.

The model is given the parser as a function tool and a JSON schema for its
answer. Any endpoint that speaks the chat-completions protocol with tool
calling works (OpenAI, Gemini's OpenAI endpoint, local servers); point
`base_url` at it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx
from openai import AsyncOpenAI

from phonemap.llm.interface import Enricher, PhoneParserTool
from phonemap.llm.prompts import build_messages, response_format
from phonemap.net.http import HttpClientConfig

logger = logging.getLogger(__name__)


class BackendConfigurationError(RuntimeError):
    """Raised when a model backend is selected but not configured."""


def build_openai_client(
    *,
    api_key: str | None,
    base_url: str,
    http_client: httpx.AsyncClient,
    http_config: HttpClientConfig,
) -> AsyncOpenAI:
    if not api_key:
        raise BackendConfigurationError(
            "The chat-completions enricher requires an API key. Set `OPENAI_API_KEY` "
            "in your environment or .env, or use the offline enricher."
        )
    return AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        http_client=http_client,
        max_retries=http_config.max_retries,
        timeout=http_config.timeout_seconds,
    )


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def decode_output(content: str | None) -> dict[str, Any] | None:
    """Decode the model's final message into a JSON object, or None."""

    if not isinstance(content, str) or not content.strip():
        return None
    try:
        data = json.loads(_strip_code_fence(content))
    except json.JSONDecodeError as exc:
        logger.warning("Model output is not valid JSON: %s", exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Model output is not a JSON object: %s", type(data).__name__)
        return None
    return data


def _function_calls(tool_calls: Any) -> list[tuple[str, str, str]]:
    """Return (id, name, arguments) for each well-formed function call."""

    calls: list[tuple[str, str, str]] = []
    for call in tool_calls or []:
        fn = getattr(call, "function", None)
        name = getattr(fn, "name", None)
        if not isinstance(name, str):
            logger.warning("Ignoring malformed tool call: %r", call)
            continue
        arguments = getattr(fn, "arguments", None)
        calls.append(
            (str(getattr(call, "id", "")), name, arguments if isinstance(arguments, str) else "")
        )
    return calls


class ChatCompletionsEnricher(Enricher):
    name = "openai"

    def __init__(
        self,
        *,
        client: AsyncOpenAI,
        model: str,
        temperature: float = 0.0,
        max_tool_rounds: int = 2,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tool_rounds = max(0, max_tool_rounds)

    def _run_tool(self, name: str, arguments: str, tool: PhoneParserTool) -> dict[str, Any]:
        if name != tool.name:
            logger.warning("Model requested unknown tool %r", name)
            return {"error": f"Unknown tool: {name}"}
        try:
            parsed = json.loads(arguments or "{}")
        except json.JSONDecodeError:
            parsed = {}
        logger.info("Model invoked %s", name)
        return tool(parsed if isinstance(parsed, dict) else {})

    async def infer(
        self, phone_number: str, *, tool: PhoneParserTool
    ) -> Mapping[str, Any] | None:
        messages: list[dict[str, Any]] = build_messages(phone_number)

        # The last round withholds the tool so the model has to answer.
        for round_no in range(self._max_tool_rounds + 1):
            kwargs: dict[str, Any] = {}
            if round_no < self._max_tool_rounds:
                kwargs["tools"] = [tool.to_openai_tool()]

            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                response_format=response_format(),
                **kwargs,
            )
            if response.usage is not None:
                logger.debug("chat completion usage: %s", response.usage)
            if not response.choices:
                logger.warning("Model returned no choices for %s", phone_number)
                return None
            message = response.choices[0].message

            calls = _function_calls(message.tool_calls)
            if calls:
                messages.append(
                    {
                        "role": "assistant",
                        "content": message.content,
                        "tool_calls": [
                            {
                                "id": call_id,
                                "type": "function",
                                "function": {"name": name, "arguments": arguments},
                            }
                            for call_id, name, arguments in calls
                        ],
                    }
                )
                for call_id, name, arguments in calls:
                    messages.append(
                        {
                            "role": "tool",
                            "tool_call_id": call_id,
                            "content": json.dumps(self._run_tool(name, arguments, tool)),
                        }
                    )
                continue

            return decode_output(message.content)

        logger.warning("Model kept calling tools after %d rounds", self._max_tool_rounds)
        return None
