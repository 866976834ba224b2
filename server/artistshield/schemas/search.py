from pydantic import BaseModel, ConfigDict, Field, field_validator

from artistshield.core.validation import normalize_single_line
from artistshield.models.saved_ipi import RecordType


class SearchResult(BaseModel):
    """A (name, IPI number) pair found in one repertory."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    ipi_number: str = Field(alias="ipiNumber")
    type: RecordType
    source: str  # originating repertory, e.g. "ASCAP"

    @property
    def selection_key(self) -> tuple[str, str]:
        """Identity used when the same result appears in several result lists."""
        return (self.type.value, self.ipi_number)


class SearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(default="", max_length=200)
    search_type: RecordType = Field(default=RecordType.WRITER, alias="searchType")

    @field_validator("query")
    @classmethod
    def normalize_query(cls, v: str) -> str:
        return normalize_single_line(v) or ""


class SearchResponse(BaseModel):
    """Uniform envelope returned by every search, successful or not."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    results: list[SearchResult] | None = None
    real_name: str | None = Field(default=None, alias="realName")
    error: str | None = None
