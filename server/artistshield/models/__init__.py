from artistshield.models.base import Base
from artistshield.models.saved_ipi import RecordType, SavedIpi

__all__ = [
    "Base",
    "RecordType",
    "SavedIpi",
]
