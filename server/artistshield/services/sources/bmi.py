"""BMI Songview repertoire."""

from urllib.parse import urlencode

from artistshield.models.saved_ipi import RecordType
from artistshield.services.sources.base import RepertorySource
from artistshield.services.sources.registry import register_source

BMI_SEARCH_URL = "https://repertoire.bmi.com/Search/Search"

# BMI's name for each search category
_MAIN_SEARCH = {
    RecordType.WRITER: "Writer/Composer",
    RecordType.PUBLISHER: "Publisher",
}


@register_source
class BmiSource(RepertorySource):
    source_name = "bmi"
    display_name = "BMI"
    agree_labels = ("Accept", "I Accept")

    def build_search_url(self, query: str, category: RecordType) -> str:
        params = {
            "Main_Search_Text": query,
            "Main_Search": _MAIN_SEARCH[category],
            "Search_Type": "all",
            "View_Count": 100,
            "Page_Number": 0,
        }
        return f"{BMI_SEARCH_URL}?{urlencode(params)}"
