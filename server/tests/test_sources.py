"""Tests for the ASCAP/BMI sources and the source registry."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from artistshield.models.saved_ipi import RecordType
from artistshield.services.firecrawl import FirecrawlError, ScrapedPage
from artistshield.services.sources import (
    RepertorySource,
    build_sources,
    get_source_class,
    list_source_names,
    parse_script_entries,
    register_source,
)
from artistshield.services.sources import registry
from artistshield.services.sources.ascap import AscapSource
from artistshield.services.sources.bmi import BmiSource
from artistshield.services.sources.scripts import DOM_SCAN_SCRIPT


def _client(page: ScrapedPage | None = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.scrape = AsyncMock(return_value=page, side_effect=error)
    return client


@pytest.fixture
def restore_registry():
    saved = dict(registry._sources)
    yield
    registry._clear_sources()
    registry._sources.update(saved)


class TestSearchUrls:
    def test_ascap_url_embeds_category_and_query(self):
        source = AscapSource(_client())
        url = source.build_search_url("Jane Doe", RecordType.WRITER)
        assert url == "https://www.ascap.com/repertory#/ace/search/writer/Jane%20Doe"

    def test_ascap_publisher_category(self):
        source = AscapSource(_client())
        url = source.build_search_url("Acme", RecordType.PUBLISHER)
        assert url == "https://www.ascap.com/repertory#/ace/search/publisher/Acme"

    def test_bmi_url_parameters(self):
        source = BmiSource(_client())
        url = source.build_search_url("Jane Doe", RecordType.WRITER)
        assert url.startswith("https://repertoire.bmi.com/Search/Search?")
        assert "Main_Search_Text=Jane+Doe" in url
        assert "Main_Search=Writer%2FComposer" in url
        assert "Search_Type=all" in url
        assert "View_Count=100" in url

    def test_bmi_publisher_category(self):
        url = BmiSource(_client()).build_search_url("Acme", RecordType.PUBLISHER)
        assert "Main_Search=Publisher" in url


class TestBuildActions:
    def test_wait_accept_wait_scan(self):
        source = AscapSource(_client(), initial_wait_ms=1000, results_wait_ms=2000)
        actions = source.build_actions()

        assert [a["type"] for a in actions] == [
            "wait",
            "executeJavascript",
            "wait",
            "executeJavascript",
        ]
        assert actions[0]["milliseconds"] == 1000
        assert actions[2]["milliseconds"] == 2000
        assert '["I Agree"]' in actions[1]["script"]
        assert actions[3]["script"] == DOM_SCAN_SCRIPT

    def test_bmi_accept_labels(self):
        script = BmiSource(_client()).build_actions()[1]["script"]
        assert '["Accept", "I Accept"]' in script


class TestParseScriptEntries:
    def test_decodes_last_json_string(self):
        entries = parse_script_entries(["clicked", '[{"name": "Jane Doe", "ipi": "123456789"}]'])
        assert entries == [{"name": "Jane Doe", "ipi": "123456789"}]

    def test_accepts_decoded_list(self):
        entries = parse_script_entries([[{"name": "Jane Doe", "ipi": "123456789"}, "junk"]])
        assert entries == [{"name": "Jane Doe", "ipi": "123456789"}]

    def test_unparseable_value_is_empty(self):
        assert parse_script_entries(["not json"]) == []

    def test_non_list_value_is_empty(self):
        assert parse_script_entries(['{"name": "Jane Doe"}']) == []

    def test_no_returns(self):
        assert parse_script_entries(()) == []


@pytest.mark.asyncio
class TestSourceSearch:
    async def test_returns_results_from_dom_scan(self):
        scan = json.dumps([{"name": "DOE JANE", "ipi": "123456789"}])
        client = _client(ScrapedPage(markdown="", html="", javascript_returns=("clicked", scan)))
        source = AscapSource(client, wait_for_ms=4000)

        results = await source.search("Jane Doe", RecordType.WRITER)

        assert len(results) == 1
        assert results[0].name == "Doe Jane"
        assert results[0].source == "ASCAP"
        assert results[0].type == RecordType.WRITER
        kwargs = client.scrape.call_args[1]
        assert kwargs["formats"] == ("markdown", "html")
        assert kwargs["only_main_content"] is False
        assert kwargs["proxy"] == "stealth"
        assert kwargs["wait_for"] == 4000

    async def test_falls_back_to_markdown(self):
        client = _client(ScrapedPage(markdown="Jane Doe | 123456789", javascript_returns=("[]",)))
        results = await BmiSource(client).search("Jane Doe", RecordType.WRITER)
        assert [(r.name, r.ipi_number, r.source) for r in results] == [
            ("Jane Doe", "123456789", "BMI")
        ]

    async def test_provider_error_returns_empty(self):
        client = _client(error=FirecrawlError("Insufficient credits", status_code=402))
        assert await AscapSource(client).search("Jane Doe", RecordType.WRITER) == []

    async def test_transport_error_returns_empty(self):
        client = _client(error=TimeoutError())
        assert await BmiSource(client).search("Jane Doe", RecordType.PUBLISHER) == []


class TestRegistry:
    def test_builtin_sources_registered(self):
        assert {"ascap", "bmi"} <= set(list_source_names())
        assert get_source_class("ascap") is AscapSource
        assert get_source_class("bmi") is BmiSource

    def test_unknown_source(self):
        assert get_source_class("sesac") is None

    def test_build_sources_in_requested_order(self):
        client = _client()
        sources = build_sources(client, ["bmi", "ascap"], results_wait_ms=1234)
        assert [type(s) for s in sources] == [BmiSource, AscapSource]
        assert all(s.client is client for s in sources)
        assert all(s.results_wait_ms == 1234 for s in sources)

    def test_build_sources_skips_unknown_names(self):
        sources = build_sources(_client(), ["ascap", "sesac"])
        assert [type(s) for s in sources] == [AscapSource]

    def test_register_custom_source(self, restore_registry):
        @register_source
        class SesacSource(RepertorySource):
            source_name = "sesac"
            display_name = "SESAC"
            agree_labels = ("Accept",)

            def build_search_url(self, query, category):
                return f"https://sesac.example/search?q={query}"

        assert get_source_class("sesac") is SesacSource
        assert "sesac" in list_source_names()
