"""Search orchestrator: routes a name query to the repertories or the resolver.

Writer and publisher queries fan out to every configured repertory at once
and the result lists are concatenated in source order. The same person
registered with two PROs therefore shows up twice, once per source.

Performer queries only resolve the performer's legal name; with
``performer_writer_lookup`` enabled, the writer indexes are then searched
for that name as well and the hits are relabelled as performer results.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from artistshield.core.config import Settings
from artistshield.models.saved_ipi import RecordType
from artistshield.schemas.search import SearchResponse, SearchResult
from artistshield.services.firecrawl import build_firecrawl_client
from artistshield.services.real_name import RealNameResolver
from artistshield.services.sources import RepertorySource, build_sources

logger = logging.getLogger(__name__)

QUERY_REQUIRED = "Query is required"


class SearchOrchestrator:
    def __init__(
        self,
        sources: Sequence[RepertorySource],
        resolver: RealNameResolver,
        performer_writer_lookup: bool = False,
    ):
        self.sources = list(sources)
        self.resolver = resolver
        self.performer_writer_lookup = performer_writer_lookup

    async def handle(self, query: str, category: RecordType) -> SearchResponse:
        query = (query or "").strip()
        if not query:
            return SearchResponse(success=False, error=QUERY_REQUIRED)

        if category == RecordType.PERFORMER:
            return await self._search_performer(query)

        results = await self.search_sources(query, category)
        logger.info("Found %d results for %s: %s", len(results), category.value, query)
        return SearchResponse(success=True, results=results)

    async def search_sources(self, query: str, category: RecordType) -> list[SearchResult]:
        """Query every source concurrently and wait for all of them."""
        batches = await asyncio.gather(
            *(source.search(query, category) for source in self.sources)
        )
        return [result for batch in batches for result in batch]

    async def _search_performer(self, stage_name: str) -> SearchResponse:
        real_name = await self.resolver.resolve(stage_name)
        if real_name is None:
            logger.info("No real name found for performer %r", stage_name)

        results: list[SearchResult] = []
        if real_name and self.performer_writer_lookup:
            writer_results = await self.search_sources(real_name, RecordType.WRITER)
            results = [r.model_copy(update={"type": RecordType.PERFORMER}) for r in writer_results]

        return SearchResponse(success=True, results=results, real_name=real_name)


def build_search_orchestrator(settings: Settings) -> SearchOrchestrator:
    """Wire sources and resolver from settings.

    Raises ConfigurationError when the Firecrawl credential is missing.
    """
    client = build_firecrawl_client(settings)
    sources = build_sources(
        client,
        settings.repertory_names,
        initial_wait_ms=settings.scrape_initial_wait_ms,
        results_wait_ms=settings.scrape_results_wait_ms,
        wait_for_ms=settings.scrape_wait_for_ms,
    )
    return SearchOrchestrator(
        sources,
        RealNameResolver(client),
        performer_writer_lookup=settings.performer_writer_lookup,
    )
