import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from artistshield.core.time import utcnow
from artistshield.models.base import Base


class RecordType(str, Enum):
    WRITER = "writer"
    PUBLISHER = "publisher"
    PERFORMER = "performer"


def _new_id() -> str:
    return str(uuid.uuid4())


class SavedIpi(Base):
    """A search result saved to the shared collection. Rows are write-once."""

    __tablename__ = "saved_ipis"
    __table_args__ = (
        CheckConstraint(
            "type IN ('writer', 'publisher', 'performer')", name="ck_saved_ipis_type"
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), index=True)
    ipi_number: Mapped[str] = mapped_column(String(11))
    type: Mapped[str] = mapped_column(String(20), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
