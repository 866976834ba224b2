"""Firecrawl scrape API client.

Firecrawl renders JavaScript-heavy pages in a headless browser, optionally
runs a list of browser actions (waits, clicks, script execution) and
returns the page as markdown and/or HTML.

API docs: https://docs.firecrawl.dev/api-reference/endpoint/scrape
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from artistshield.core.config import ConfigurationError, Settings

logger = logging.getLogger(__name__)

SCRAPE_PATH = "/v1/scrape"
DEFAULT_BASE_URL = "https://api.firecrawl.dev"
DEFAULT_TIMEOUT = 90.0


class FirecrawlError(Exception):
    """Firecrawl answered with a non-success response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def describe_upstream_error(e: Exception) -> str:
    """Return a log-safe description of a render failure.

    httpx exceptions can carry request headers (and with them the bearer
    credential) in their string form, so only generic text is returned.
    """
    if isinstance(e, FirecrawlError):
        return f"Firecrawl error: {e}"
    if isinstance(e, httpx.TimeoutException):
        return "Firecrawl timeout"
    if isinstance(e, httpx.ConnectError):
        return "Firecrawl connection failed"
    if isinstance(e, httpx.HTTPError):
        return "Firecrawl request failed"
    return "Scrape failed"


@dataclass(frozen=True)
class ScrapedPage:
    markdown: str = ""
    html: str = ""
    # Values returned by executeJavascript actions, in action order
    javascript_returns: tuple[Any, ...] = ()

    @classmethod
    def from_response(cls, payload: dict) -> ScrapedPage:
        data = payload.get("data") or payload
        actions = data.get("actions") or {}
        returns = tuple(
            item.get("value") if isinstance(item, dict) else item
            for item in actions.get("javascriptReturns") or []
        )
        return cls(
            markdown=data.get("markdown") or "",
            html=data.get("html") or "",
            javascript_returns=returns,
        )


class FirecrawlClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not api_key:
            raise ConfigurationError("Firecrawl not configured")
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def scrape(
        self,
        url: str,
        formats: tuple[str, ...] = ("markdown",),
        actions: list[dict] | None = None,
        wait_for: int | None = None,
        only_main_content: bool = True,
        proxy: str | None = None,
    ) -> ScrapedPage:
        """Render one page. Raises FirecrawlError on a non-success response."""
        body: dict[str, Any] = {
            "url": url,
            "formats": list(formats),
            "onlyMainContent": only_main_content,
        }
        if wait_for is not None:
            body["waitFor"] = wait_for
        if actions:
            body["actions"] = actions
            body["blockAds"] = False
        if proxy:
            body["proxy"] = proxy

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}{SCRAPE_PATH}",
                json=body,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success or data.get("success") is False:
            message = data.get("error") or f"Scraping failed (HTTP {response.status_code})"
            raise FirecrawlError(message, status_code=response.status_code)

        return ScrapedPage.from_response(data)


def build_firecrawl_client(settings: Settings) -> FirecrawlClient:
    """Raises ConfigurationError when FIRECRAWL_API_KEY is not set."""
    return FirecrawlClient(
        settings.firecrawl_api_key,
        base_url=settings.firecrawl_api_url,
        timeout=settings.scrape_timeout_seconds,
    )
