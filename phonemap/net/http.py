"""
Async HTTP client construction (httpx).

The model backend's SDK sends its requests through the client built here,
so timeouts and the user agent are configured in one place and tests can
inject a mock transport.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx


@dataclass(frozen=True, slots=True)
class HttpClientConfig:
    timeout_seconds: float = 30.0
    max_retries: int = 2
    user_agent: str = "phonemap/0.1"


@asynccontextmanager
async def build_async_client(
    config: HttpClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    timeout = httpx.Timeout(config.timeout_seconds)
    headers = {"User-Agent": config.user_agent}
    async with httpx.AsyncClient(
        timeout=timeout, headers=headers, follow_redirects=True, transport=transport
    ) as client:
        yield client
