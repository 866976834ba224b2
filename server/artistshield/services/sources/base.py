"""Abstract base for repertory search sources.

Each source wraps one PRO repertory website. The sites are JavaScript apps
behind a terms-of-use dialog, so every search is a single Firecrawl render
with a fixed interaction: wait, accept the terms, wait, scan the DOM.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar

from artistshield.models.saved_ipi import RecordType
from artistshield.schemas.search import SearchResult
from artistshield.services.extraction import extract_results
from artistshield.services.firecrawl import FirecrawlClient, describe_upstream_error
from artistshield.services.sources.scripts import DOM_SCAN_SCRIPT, build_accept_terms_script

logger = logging.getLogger(__name__)


def parse_script_entries(javascript_returns: Sequence[Any]) -> list[dict]:
    """Decode the DOM scan output (the last script return value).

    Firecrawl hands back the raw return value, which is the JSON string the
    scan script produced; an already-decoded list is accepted as well.
    """
    if not javascript_returns:
        return []
    value = javascript_returns[-1]
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            logger.info("Could not parse DOM scan output: %.200s", value)
            return []
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


class RepertorySource(ABC):
    """One PRO repertory searched through a rendered page."""

    #: Registry key, e.g. "ascap"
    source_name: ClassVar[str]
    #: Tag put on every result, e.g. "ASCAP"
    display_name: ClassVar[str]
    #: Visible text of the terms dialog's accept control
    agree_labels: ClassVar[tuple[str, ...]]

    def __init__(
        self,
        client: FirecrawlClient,
        initial_wait_ms: int = 3000,
        results_wait_ms: int = 6000,
        wait_for_ms: int = 5000,
    ):
        self.client = client
        self.initial_wait_ms = initial_wait_ms
        self.results_wait_ms = results_wait_ms
        self.wait_for_ms = wait_for_ms

    @abstractmethod
    def build_search_url(self, query: str, category: RecordType) -> str:
        """Repertory-specific search URL for a name query.

        Sources are only searched for writers and publishers; performers go
        through the real-name resolver instead.
        """

    def build_actions(self) -> list[dict]:
        return [
            {"type": "wait", "milliseconds": self.initial_wait_ms},
            {"type": "executeJavascript", "script": build_accept_terms_script(self.agree_labels)},
            {"type": "wait", "milliseconds": self.results_wait_ms},
            {"type": "executeJavascript", "script": DOM_SCAN_SCRIPT},
        ]

    async def search(self, name: str, category: RecordType) -> list[SearchResult]:
        """Search the repertory by name.

        Never raises: a failed render is logged and reported as no results.
        """
        url = self.build_search_url(name, category)
        logger.info("Scraping %s URL: %s", self.display_name, url)

        try:
            page = await self.client.scrape(
                url,
                formats=("markdown", "html"),
                actions=self.build_actions(),
                wait_for=self.wait_for_ms,
                only_main_content=False,
                proxy="stealth",
            )
        except Exception as e:
            logger.error("%s search failed: %s", self.display_name, describe_upstream_error(e))
            return []

        entries = parse_script_entries(page.javascript_returns)
        results = extract_results(page.markdown, page.html, category, self.display_name, entries)
        logger.info(
            "Found %d %s results on %s for %r",
            len(results),
            category.value,
            self.display_name,
            name,
        )
        return results
