from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse, StreamingResponse

from artistshield.api import deps
from artistshield.api.downloads import export_download
from artistshield.core.config import get_settings
from artistshield.core.rate_limit import limiter
from artistshield.schemas.common import ErrorResponse
from artistshield.schemas.search import SearchRequest, SearchResponse, SearchResult
from artistshield.services.export import ExportFormat, rows_from_selection
from artistshield.services.search import QUERY_REQUIRED

router = APIRouter()
settings = get_settings()


@router.post("", response_model=SearchResponse, response_model_exclude_unset=True)
@limiter.limit(lambda: f"{settings.search_rate_limit_per_minute}/minute")
async def search(request: Request, payload: SearchRequest) -> SearchResponse | JSONResponse:
    """Search the repertories (writer/publisher) or resolve a performer's legal name."""
    if not payload.query:
        error = ErrorResponse(error=QUERY_REQUIRED)
        return JSONResponse(status_code=400, content=error.model_dump())
    orchestrator = deps.get_search_orchestrator()
    return await orchestrator.handle(payload.query, payload.search_type)


@router.post("/export/{fmt}")
def export_selection(
    fmt: ExportFormat,
    results: list[SearchResult] = Body(..., max_length=500),
) -> StreamingResponse:
    """Download a selection of unsaved search results."""
    return export_download(rows_from_selection(results), fmt)
