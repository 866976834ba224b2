"""File download responses shared by the export endpoints."""

from collections.abc import Iterable
from urllib.parse import quote

from fastapi.responses import StreamingResponse

from artistshield.services.export import ExportFormat, generate_export_filename, render_export

MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.JSON: "application/json",
}


def _content_disposition(filename: str) -> str:
    """Build an RFC 6266 Content-Disposition header value for a download."""
    safe_filename = filename.replace('"', '\\"')
    ascii_filename = quote(filename, safe="")
    return f"attachment; filename=\"{safe_filename}\"; filename*=UTF-8''{ascii_filename}"


def export_download(records: Iterable, fmt: ExportFormat) -> StreamingResponse:
    content = render_export(records, fmt)
    filename = generate_export_filename(fmt.value)
    return StreamingResponse(
        iter([content]),
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": _content_disposition(filename)},
    )
