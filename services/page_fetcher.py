from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import httpx

from services.extracted_content import ExtractionMethod

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_PROXY_URL = "https://api.allorigins.win/get"


@dataclass(frozen=True)
class FetchResult:
    html: str
    method: ExtractionMethod


@dataclass(frozen=True)
class FetchFailure:
    strategy: str
    reason: str


class FetchStrategy(Protocol):
    name: str

    async def fetch(self, client: httpx.AsyncClient, url: str) -> FetchResult | FetchFailure:
        ...


class DirectFetchStrategy:
    """Request the page itself with a browser-like user agent."""

    name = "direct"

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self._user_agent = user_agent

    async def fetch(self, client: httpx.AsyncClient, url: str) -> FetchResult | FetchFailure:
        try:
            response = await client.get(url, headers={"User-Agent": self._user_agent})
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return FetchFailure(self.name, f"request failed: {exc!r}")

        if not response.is_success:
            return FetchFailure(self.name, f"status {response.status_code}")
        return FetchResult(html=response.text, method=ExtractionMethod.direct_scrape)


class ProxyFetchStrategy:
    """Request the page through a CORS relay that wraps it as ``{"contents": ...}``."""

    name = "proxy"

    def __init__(self, proxy_url: str = DEFAULT_PROXY_URL) -> None:
        self._proxy_url = proxy_url

    async def fetch(self, client: httpx.AsyncClient, url: str) -> FetchResult | FetchFailure:
        try:
            response = await client.get(self._proxy_url, params={"url": url})
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return FetchFailure(self.name, f"request failed: {exc!r}")

        if not response.is_success:
            return FetchFailure(self.name, f"status {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            return FetchFailure(self.name, "proxy returned invalid JSON")

        contents = payload.get("contents") if isinstance(payload, dict) else None
        if not isinstance(contents, str):
            return FetchFailure(self.name, "proxy envelope has no contents")
        return FetchResult(html=contents, method=ExtractionMethod.proxy_scrape)


class PageFetcherService:
    """Retrieve raw HTML by trying each strategy once, in order."""

    def __init__(
        self,
        strategies: Sequence[FetchStrategy] | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._strategies = tuple(strategies or (DirectFetchStrategy(), ProxyFetchStrategy()))
        self._timeout = timeout
        self._transport = transport

    async def fetch(self, url: str) -> FetchResult | FetchFailure:
        failures: list[FetchFailure] = []
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            for strategy in self._strategies:
                outcome = await strategy.fetch(client, url)
                if isinstance(outcome, FetchResult):
                    logger.debug("Fetched %s via %s strategy", url, strategy.name)
                    return outcome
                logger.info("Fetch strategy %s failed for %s: %s", outcome.strategy, url, outcome.reason)
                failures.append(outcome)

        return FetchFailure(
            strategy="all",
            reason="; ".join(f"{item.strategy}: {item.reason}" for item in failures) or "no strategies",
        )
