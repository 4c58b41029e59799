"""
Configuration loader.

Design goals:
- No secrets committed to the repo.
- Support `.env` for local development.
- Support YAML for non-secret defaults (model name, timeouts).
- Validate configuration with pydantic.

Precedence (highest to lowest):
1. OS environment variables
2. `.env` values
3. YAML config file values
4. Code defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import httpx
import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, Field
from pydantic import ConfigDict as PydanticConfigDict

from phonemap.llm import (
    ChatCompletionsEnricher,
    Enricher,
    OfflineEnricher,
    build_openai_client,
)
from phonemap.net.http import HttpClientConfig


class PhonemapSettings(BaseModel):
    model_config = PydanticConfigDict(extra="ignore")

    # General
    log_level: str = "INFO"
    json_logging: bool = False
    locale: str = "en"

    # Enrichment
    enricher: Literal["openai", "offline"] = "openai"
    llm_api_key: str | None = Field(default=None)
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.0
    llm_timeout_seconds: float = 60.0
    llm_max_tool_rounds: int = 2

    # HTTP
    http_timeout_seconds: float = 30.0
    http_max_retries: int = 2
    http_user_agent: str = "phonemap/0.1"

    def http_config(self) -> HttpClientConfig:
        return HttpClientConfig(
            timeout_seconds=self.http_timeout_seconds,
            max_retries=self.http_max_retries,
            user_agent=self.http_user_agent,
        )


_ENV_MAP: dict[str, str] = {
    "OPENAI_API_KEY": "llm_api_key",
    "OPENAI_BASE_URL": "llm_base_url",
    "PHONEMAP_LOG_LEVEL": "log_level",
    "PHONEMAP_JSON_LOGGING": "json_logging",
    "PHONEMAP_LOCALE": "locale",
    "PHONEMAP_ENRICHER": "enricher",
    "PHONEMAP_LLM_API_KEY": "llm_api_key",
    "PHONEMAP_LLM_BASE_URL": "llm_base_url",
    "PHONEMAP_LLM_MODEL": "llm_model",
    "PHONEMAP_LLM_TEMPERATURE": "llm_temperature",
    "PHONEMAP_LLM_TIMEOUT_SECONDS": "llm_timeout_seconds",
    "PHONEMAP_LLM_MAX_TOOL_ROUNDS": "llm_max_tool_rounds",
    "PHONEMAP_HTTP_TIMEOUT_SECONDS": "http_timeout_seconds",
    "PHONEMAP_HTTP_MAX_RETRIES": "http_max_retries",
    "PHONEMAP_HTTP_USER_AGENT": "http_user_agent",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return raw if isinstance(raw, dict) else {}


def _read_dotenv(path: Path) -> dict[str, str]:
    # dotenv_values does not mutate os.environ; it just parses the file.
    values = dotenv_values(path)
    return {k: v for k, v in values.items() if isinstance(k, str) and isinstance(v, str)}


def _overlay_env(target: dict[str, Any], env: dict[str, str]) -> None:
    # Later keys in _ENV_MAP win, so PHONEMAP_LLM_* beats the OPENAI_* aliases.
    for env_key, field_name in _ENV_MAP.items():
        if env_key in env:
            target[field_name] = env[env_key]


def load_settings(
    *, yaml_path: Path | None = None, env_path: Path | None = None
) -> PhonemapSettings:
    """
    Load settings from YAML and .env, with OS env overrides.

    Args:
        yaml_path: Optional YAML config path.
        env_path: Optional .env path (default: `.env` if present).
    """

    data: dict[str, Any] = {}

    if env_path is None:
        maybe = Path(".env")
        env_path = maybe if maybe.exists() else None

    dotenv = _read_dotenv(env_path) if env_path is not None and env_path.exists() else {}

    # explicit yaml_path, else PHONEMAP_CONFIG from OS env, else from .env
    if yaml_path is None:
        cfg = os.environ.get("PHONEMAP_CONFIG") or dotenv.get("PHONEMAP_CONFIG")
        if cfg:
            yaml_path = Path(cfg)

    if yaml_path is not None and yaml_path.exists():
        data.update(_read_yaml(yaml_path))

    if dotenv:
        _overlay_env(data, dotenv)

    os_env: dict[str, str] = {k: v for k, v in os.environ.items() if k in _ENV_MAP}
    _overlay_env(data, os_env)

    return PhonemapSettings.model_validate(data)


def build_enricher(
    settings: PhonemapSettings, *, client: httpx.AsyncClient | None = None
) -> Enricher:
    """
    Create the enricher selected by `settings.enricher`.

    The chat-completions backend sends its requests through `client` (see
    `phonemap.net.http.build_async_client`) to `settings.llm_base_url`.
    """

    if settings.enricher == "offline":
        return OfflineEnricher(locale=settings.locale)

    if client is None:
        raise ValueError("The openai enricher needs an HTTP client.")
    openai_client = build_openai_client(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        http_client=client,
        http_config=settings.http_config(),
    )
    return ChatCompletionsEnricher(
        client=openai_client,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tool_rounds=settings.llm_max_tool_rounds,
    )
