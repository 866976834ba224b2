"""Split sheet payloads.

Field names follow the camelCase wire format of the split sheet form;
Python code uses the snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from artistshield.core.validation import normalize_single_line

PRO_OPTIONS = [
    "ASCAP",
    "BMI",
    "SESAC",
    "GMR",
    "PRS",
    "SOCAN",
    "GEMA",
    "SACEM",
    "Other",
]

ROLE_OPTIONS = [
    "Composer",
    "Lyricist",
    "Composer/Lyricist",
    "Arranger",
    "Producer",
    "Co-Writer",
]


def _normalize_email(v: str) -> str:
    v = v.strip()
    if v and ("@" not in v or " " in v):
        raise ValueError("Invalid email address")
    return v


class Publisher(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    name: str = Field(default="", max_length=255)
    email: str = Field(default="", max_length=320)
    pro: str = Field(default="", max_length=50)
    ipi_number: str = Field(default="", max_length=20, alias="ipiNumber")
    share: float = Field(default=0, ge=0, le=100)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return normalize_single_line(v) or ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalize_email(v)


class Writer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    full_name: str = Field(default="", max_length=255, alias="fullName")
    email: str = Field(default="", max_length=320)
    pro: str = Field(default="", max_length=50)
    ipi_number: str = Field(default="", max_length=20, alias="ipiNumber")
    role: str = Field(default="", max_length=50)
    share: float = Field(default=0, ge=0, le=100)
    publisher: Publisher | None = None

    @field_validator("full_name")
    @classmethod
    def normalize_full_name(cls, v: str) -> str:
        return normalize_single_line(v) or ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalize_email(v)


class SongInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(default="", max_length=255)
    artist_name: str = Field(default="", max_length=255, alias="artistName")
    album_title: str = Field(default="", max_length=255, alias="albumTitle")
    release_date: str = Field(default="", max_length=50, alias="releaseDate")
    isrc_code: str = Field(default="", max_length=20, alias="isrcCode")

    @field_validator("title", "artist_name", "album_title", "release_date", "isrc_code")
    @classmethod
    def normalize_fields(cls, v: str) -> str:
        return normalize_single_line(v) or ""


class SplitSheetRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    song_info: SongInfo = Field(default_factory=SongInfo, alias="songInfo")
    writers: list[Writer] = Field(default_factory=list, max_length=50)


class SplitSheetPreviewRequest(SplitSheetRequest):
    recipient_name: str = Field(default="", max_length=255, alias="recipientName")


class ShareSummaryRequest(BaseModel):
    writers: list[Writer] = Field(default_factory=list, max_length=50)


class ShareSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    writers_total: float = Field(alias="writersTotal")
    publishers_total: float = Field(alias="publishersTotal")
    grand_total: float = Field(alias="grandTotal")
    is_valid: bool = Field(alias="isValid")
    recipient_count: int = Field(alias="recipientCount")


class SplitSheetOptions(BaseModel):
    pros: list[str] = PRO_OPTIONS
    roles: list[str] = ROLE_OPTIONS


class SplitSheetSendResponse(BaseModel):
    success: bool = True
    sent: int
