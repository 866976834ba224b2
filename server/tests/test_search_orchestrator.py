"""Tests for search orchestration across repertories and the name resolver."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from artistshield.core.config import ConfigurationError, Settings
from artistshield.models.saved_ipi import RecordType
from artistshield.schemas.search import SearchResult
from artistshield.services.firecrawl import ScrapedPage
from artistshield.services.real_name import RealNameResolver
from artistshield.services.search import (
    QUERY_REQUIRED,
    SearchOrchestrator,
    build_search_orchestrator,
)
from artistshield.services.sources.ascap import AscapSource
from artistshield.services.sources.bmi import BmiSource


def _result(name: str, ipi: str, source: str, type_=RecordType.WRITER) -> SearchResult:
    return SearchResult(name=name, ipi_number=ipi, type=type_, source=source)


def _source(results: list[SearchResult]) -> MagicMock:
    source = MagicMock()
    source.search = AsyncMock(return_value=results)
    return source


def _resolver(real_name: str | None) -> MagicMock:
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=real_name)
    return resolver


@pytest.mark.asyncio
class TestHandle:
    async def test_blank_query_is_rejected(self):
        ascap = _source([])
        orchestrator = SearchOrchestrator([ascap], _resolver(None))

        response = await orchestrator.handle("   ", RecordType.WRITER)

        assert response.success is False
        assert response.error == QUERY_REQUIRED
        ascap.search.assert_not_called()

    async def test_writer_search_concatenates_sources_in_order(self):
        ascap = _source([_result("Jane Doe", "123456789", "ASCAP")])
        bmi = _source(
            [_result("Jane Doe", "123456789", "BMI"), _result("Jane Dole", "987654321", "BMI")]
        )
        orchestrator = SearchOrchestrator([ascap, bmi], _resolver(None))

        response = await orchestrator.handle("Jane Doe", RecordType.WRITER)

        assert response.success is True
        assert [(r.source, r.ipi_number) for r in response.results] == [
            ("ASCAP", "123456789"),
            ("BMI", "123456789"),
            ("BMI", "987654321"),
        ]
        ascap.search.assert_awaited_once_with("Jane Doe", RecordType.WRITER)
        bmi.search.assert_awaited_once_with("Jane Doe", RecordType.WRITER)

    async def test_publisher_search_passes_category(self):
        ascap = _source([])
        orchestrator = SearchOrchestrator([ascap], _resolver(None))

        response = await orchestrator.handle("Acme", RecordType.PUBLISHER)

        assert response.success is True
        assert response.results == []
        ascap.search.assert_awaited_once_with("Acme", RecordType.PUBLISHER)

    async def test_performer_search_only_resolves_name(self):
        ascap = _source([_result("Calvin Broadus", "123456789", "ASCAP")])
        resolver = _resolver("Calvin Cordozar Broadus Jr.")
        orchestrator = SearchOrchestrator([ascap], resolver)

        response = await orchestrator.handle("Snoop Dogg", RecordType.PERFORMER)

        assert response.success is True
        assert response.real_name == "Calvin Cordozar Broadus Jr."
        assert response.results == []
        resolver.resolve.assert_awaited_once_with("Snoop Dogg")
        ascap.search.assert_not_called()

    async def test_performer_not_found(self):
        orchestrator = SearchOrchestrator([_source([])], _resolver(None))

        response = await orchestrator.handle("Unknown Act", RecordType.PERFORMER)

        assert response.success is True
        assert response.real_name is None
        assert response.results == []

    async def test_performer_writer_lookup_relabels_results(self):
        ascap = _source([_result("Calvin Broadus", "123456789", "ASCAP")])
        orchestrator = SearchOrchestrator(
            [ascap], _resolver("Calvin Cordozar Broadus Jr."), performer_writer_lookup=True
        )

        response = await orchestrator.handle("Snoop Dogg", RecordType.PERFORMER)

        ascap.search.assert_awaited_once_with("Calvin Cordozar Broadus Jr.", RecordType.WRITER)
        assert [(r.name, r.type) for r in response.results] == [
            ("Calvin Broadus", RecordType.PERFORMER)
        ]

    async def test_performer_writer_lookup_skipped_without_name(self):
        ascap = _source([])
        orchestrator = SearchOrchestrator([ascap], _resolver(None), performer_writer_lookup=True)

        await orchestrator.handle("Unknown Act", RecordType.PERFORMER)

        ascap.search.assert_not_called()

    async def test_snoop_dogg_end_to_end(self):
        client = MagicMock()
        client.scrape = AsyncMock(
            return_value=ScrapedPage(
                markdown="| Born | Calvin Cordozar Broadus Jr.<br>(1971-10-20) |"
            )
        )
        orchestrator = SearchOrchestrator([AscapSource(client)], RealNameResolver(client))

        response = await orchestrator.handle("Snoop Dogg", RecordType.PERFORMER)

        assert response.model_dump(by_alias=True, exclude_none=True) == {
            "success": True,
            "results": [],
            "realName": "Calvin Cordozar Broadus Jr.",
        }


class TestBuildSearchOrchestrator:
    def test_missing_key_raises(self):
        with pytest.raises(ConfigurationError, match="Firecrawl not configured"):
            build_search_orchestrator(Settings(firecrawl_api_key="", _env_file=None))

    def test_builds_configured_sources(self):
        settings = Settings(
            firecrawl_api_key="fc-key",
            repertories="bmi, ascap",
            scrape_results_wait_ms=1500,
            performer_writer_lookup=True,
            _env_file=None,
        )
        orchestrator = build_search_orchestrator(settings)

        assert [type(s) for s in orchestrator.sources] == [BmiSource, AscapSource]
        assert orchestrator.sources[0].results_wait_ms == 1500
        assert orchestrator.performer_writer_lookup is True

    @patch("artistshield.services.search.build_sources")
    def test_sources_share_one_client(self, mock_build_sources):
        mock_build_sources.return_value = []
        orchestrator = build_search_orchestrator(
            Settings(firecrawl_api_key="fc-key", _env_file=None)
        )

        client = mock_build_sources.call_args[0][0]
        assert orchestrator.resolver.client is client
