from artistshield.schemas.saved_ipi import SavedIpiCreate, SavedIpiOut
from artistshield.schemas.search import SearchRequest, SearchResponse, SearchResult
from artistshield.schemas.split_sheet import Publisher, SongInfo, SplitSheetRequest, Writer

__all__ = [
    "SavedIpiCreate",
    "SavedIpiOut",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "Publisher",
    "SongInfo",
    "SplitSheetRequest",
    "Writer",
]
