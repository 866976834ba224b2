"""ASCAP ACE repertory."""

from urllib.parse import quote

from artistshield.models.saved_ipi import RecordType
from artistshield.services.sources.base import RepertorySource
from artistshield.services.sources.registry import register_source

ASCAP_SEARCH_URL = "https://www.ascap.com/repertory#/ace/search/{category}/{query}"


@register_source
class AscapSource(RepertorySource):
    source_name = "ascap"
    display_name = "ASCAP"
    agree_labels = ("I Agree",)

    def build_search_url(self, query: str, category: RecordType) -> str:
        return ASCAP_SEARCH_URL.format(category=category.value, query=quote(query, safe=""))
