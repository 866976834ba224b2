from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from artistshield.core.validation import is_ipi_number, normalize_single_line
from artistshield.models.saved_ipi import RecordType


class SavedIpiCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    ipi_number: str = Field(..., alias="ipiNumber")
    type: RecordType

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        normalized = normalize_single_line(v)
        return normalized if normalized else v

    @field_validator("ipi_number")
    @classmethod
    def validate_ipi_number(cls, v: str) -> str:
        v = v.strip()
        if not is_ipi_number(v):
            raise ValueError("IPI number must be 9 to 11 digits")
        return v


class SavedIpiBatchCreate(BaseModel):
    items: list[SavedIpiCreate] = Field(..., min_length=1, max_length=500)


class SavedIpiOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    ipi_number: str
    type: RecordType
    created_at: datetime


class DeleteResponse(BaseModel):
    deleted: int
