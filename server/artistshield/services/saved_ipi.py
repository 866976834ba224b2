"""Shared collection of saved IPI records.

Rows are write-once: there is no update path. Concurrent saves are not
coordinated; the database decides the outcome.
"""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from artistshield.models.saved_ipi import SavedIpi
from artistshield.schemas.saved_ipi import SavedIpiCreate


def list_saved_ipis(db: Session, ids: Sequence[str] | None = None) -> list[SavedIpi]:
    """Saved records, newest first. Optionally restricted to the given ids."""
    query = db.query(SavedIpi)
    if ids is not None:
        query = query.filter(SavedIpi.id.in_(list(ids)))
    return query.order_by(SavedIpi.created_at.desc()).all()


def save_ipis(db: Session, items: Sequence[SavedIpiCreate]) -> list[SavedIpi]:
    """Insert one row per item in a single transaction."""
    rows = [
        SavedIpi(name=item.name, ipi_number=item.ipi_number, type=item.type.value)
        for item in items
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


def delete_saved_ipis(db: Session, ids: Sequence[str]) -> int:
    """Delete the given records. Unknown ids are ignored. Returns the count removed."""
    if not ids:
        return 0
    count = (
        db.query(SavedIpi)
        .filter(SavedIpi.id.in_(list(ids)))
        .delete(synchronize_session=False)
    )
    db.commit()
    return count
