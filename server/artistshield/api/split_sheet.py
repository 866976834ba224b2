from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from artistshield.api import deps
from artistshield.core.config import get_settings
from artistshield.core.rate_limit import limiter
from artistshield.schemas.split_sheet import (
    ShareSummary,
    ShareSummaryRequest,
    SplitSheetOptions,
    SplitSheetPreviewRequest,
    SplitSheetRequest,
    SplitSheetSendResponse,
)
from artistshield.services.split_sheet import (
    render_split_sheet_html,
    summarize_shares,
    validate_split_sheet,
)

router = APIRouter()
settings = get_settings()


@router.get("/options", response_model=SplitSheetOptions)
def get_options() -> SplitSheetOptions:
    """PRO and role choices for the split sheet form."""
    return SplitSheetOptions()


@router.post("/summary", response_model=ShareSummary)
def share_summary(payload: ShareSummaryRequest) -> ShareSummary:
    return summarize_shares(payload.writers)


@router.post("/preview", response_class=HTMLResponse)
def preview(payload: SplitSheetPreviewRequest) -> HTMLResponse:
    """Render the email a recipient would receive, without sending anything."""
    html = render_split_sheet_html(
        payload.song_info, payload.writers, payload.recipient_name or "Writer"
    )
    return HTMLResponse(content=html)


@router.post("/send", response_model=SplitSheetSendResponse)
@limiter.limit(lambda: f"{settings.split_sheet_rate_limit_per_minute}/minute")
async def send_split_sheet(request: Request, payload: SplitSheetRequest) -> SplitSheetSendResponse:
    """Email the split sheet to every writer and publisher for signature.

    Validation failures return 400 before any email is sent; a rejected
    email fails the whole request with 502.
    """
    validate_split_sheet(payload.song_info, payload.writers)
    notifier = deps.get_split_sheet_notifier()
    sent = await notifier.send(payload.song_info, payload.writers)
    return SplitSheetSendResponse(sent=sent)
