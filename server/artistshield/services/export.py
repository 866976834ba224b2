"""Export service for saved IPI records (CSV and JSON)."""

import csv
import io
import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from artistshield.core.time import isoformat_utc, utcnow
from artistshield.schemas.search import SearchResult

CSV_HEADER = ["Name", "IPI Number", "Type", "Date Saved"]
EXPORT_BASENAME = "saved-ipis"


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


@dataclass(frozen=True)
class ExportRow:
    """Anything exportable: a saved record, or a search result stamped with a time."""

    name: str
    ipi_number: str
    type: str
    created_at: datetime


def sanitize_csv_value(value: str | None) -> str:
    """
    Sanitize a value to prevent CSV formula injection.

    Spreadsheet applications interpret cells starting with =, +, -, @, tab
    or carriage return as formulas; a leading single quote disables that.
    """
    if not value:
        return ""
    if value[0] in ("=", "+", "-", "@", "\t", "\r"):
        return "'" + value
    return value


def _type_value(value) -> str:
    return getattr(value, "value", value)


def generate_export_filename(extension: str) -> str:
    date_str = datetime.now(UTC).strftime("%Y%m%d")
    return f"{EXPORT_BASENAME}_{date_str}.{extension}"


def export_to_csv(records: Iterable) -> str:
    """
    Render records as CSV.

    The header row is plain; every data cell is quoted. Records need
    ``name``, ``ipi_number``, ``type`` and ``created_at`` attributes.
    """
    output = io.StringIO()
    output.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow(
            [
                sanitize_csv_value(record.name),
                sanitize_csv_value(record.ipi_number),
                _type_value(record.type),
                isoformat_utc(record.created_at),
            ]
        )
    return output.getvalue()


def export_to_json(records: Iterable) -> str:
    """Render records as a JSON array of {name, ipiNumber, type, dateSaved}."""
    data = [
        {
            "name": record.name,
            "ipiNumber": record.ipi_number,
            "type": _type_value(record.type),
            "dateSaved": isoformat_utc(record.created_at),
        }
        for record in records
    ]
    return json.dumps(data, indent=2)


def rows_from_selection(
    results: Sequence[SearchResult], stamped_at: datetime | None = None
) -> list[ExportRow]:
    """Turn a selection of unsaved search results into export rows.

    A result listed more than once (same type and IPI number) is exported once.
    """
    stamped_at = stamped_at or utcnow()
    rows = []
    seen: set[tuple[str, str]] = set()
    for result in results:
        if result.selection_key in seen:
            continue
        seen.add(result.selection_key)
        rows.append(
            ExportRow(
                name=result.name,
                ipi_number=result.ipi_number,
                type=result.type.value,
                created_at=stamped_at,
            )
        )
    return rows


def render_export(records: Iterable, fmt: ExportFormat) -> str:
    if fmt == ExportFormat.CSV:
        return export_to_csv(records)
    return export_to_json(records)
