from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from artistshield.api.deps import get_db
from artistshield.api.downloads import export_download
from artistshield.schemas.saved_ipi import DeleteResponse, SavedIpiBatchCreate, SavedIpiOut
from artistshield.services.export import ExportFormat
from artistshield.services.saved_ipi import delete_saved_ipis, list_saved_ipis, save_ipis

router = APIRouter()


@router.get("", response_model=list[SavedIpiOut])
def get_saved_ipis(db: Session = Depends(get_db)) -> list[SavedIpiOut]:
    return list_saved_ipis(db)


@router.post("", response_model=list[SavedIpiOut], status_code=status.HTTP_201_CREATED)
def create_saved_ipis(
    payload: SavedIpiBatchCreate,
    db: Session = Depends(get_db),
) -> list[SavedIpiOut]:
    return save_ipis(db, payload.items)


@router.delete("", response_model=DeleteResponse)
def remove_saved_ipis(
    ids: list[str] = Query(..., min_length=1, max_length=500),
    db: Session = Depends(get_db),
) -> DeleteResponse:
    return DeleteResponse(deleted=delete_saved_ipis(db, ids))


@router.get("/export/{fmt}")
def export_saved_ipis(
    fmt: ExportFormat,
    ids: list[str] | None = Query(None, max_length=500),
    db: Session = Depends(get_db),
) -> StreamingResponse:
    """Download the saved collection, or only the selected ids."""
    return export_download(list_saved_ipis(db, ids), fmt)
