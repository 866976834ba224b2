"""Recover (name, IPI number) pairs from rendered repertory pages.

The repertory sites are single-page apps with no stable markup, so results
are mined from whatever the renderer hands back. Extraction is an ordered
chain of stages; each stage is a pure function over the page content and
the first one that yields at least one usable record wins:

1. entries returned by the DOM scan script run inside the live page
2. HTML table rows (name cell followed by a 9-11 digit cell)
3. markdown "Name | 123456789" / "Name - 123456789" and pipe-table rows
4. line proximity: a digit run paired with a capitalized span on the same
   or the previous markdown line
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from artistshield.core.validation import is_ipi_number
from artistshield.models.saved_ipi import RecordType
from artistshield.schemas.search import SearchResult
from artistshield.services.name_normalizer import format_name, is_plausible_name

logger = logging.getLogger(__name__)

MAX_RESULTS = 50

# Gaps never cross a row boundary
_IN_ROW = r"(?:(?!</tr>)[\s\S])*?"
HTML_ROW_RE = re.compile(
    r"<tr[^>]*>" + _IN_ROW + r"<td[^>]*>([^<]+)</td>" + _IN_ROW + r"<td[^>]*>(\d{9,11})</td>"
    + _IN_ROW + r"</tr>",
    re.IGNORECASE,
)
# Name and number on one line, separated by a pipe, hyphen or en dash
MD_DELIMITED_RE = re.compile(r"([A-Z][A-Za-z ,.'()\-]+?)[ \t]*[|\-–][ \t]*(\d{9,11})(?!\d)")
MD_TABLE_ROW_RE = re.compile(r"\|[ \t]*([^|\n]+?)[ \t]*\|[ \t]*(\d{9,11})[ \t]*\|")
LINE_IPI_RE = re.compile(r"(?<!\d)(\d{9,11})(?!\d)")
LINE_NAME_RE = re.compile(r"([A-Z][a-zA-Z\s,.'()-]{2,50})")

Candidate = tuple[str, str]


@dataclass(frozen=True)
class PageContent:
    markdown: str = ""
    html: str = ""
    script_entries: tuple[dict, ...] = ()


def script_entry_stage(page: PageContent) -> list[Candidate]:
    """Pairs already extracted by the DOM scan against the rendered page."""
    candidates = []
    for entry in page.script_entries:
        if not isinstance(entry, dict):
            continue
        name = str(entry.get("name") or "").strip()
        ipi = str(entry.get("ipi") or entry.get("ipiNumber") or "").strip()
        if name and is_ipi_number(ipi):
            candidates.append((name, ipi))
    return candidates


def html_table_stage(page: PageContent) -> list[Candidate]:
    return [(m.group(1).strip(), m.group(2)) for m in HTML_ROW_RE.finditer(page.html)]


def markdown_delimiter_stage(page: PageContent) -> list[Candidate]:
    candidates = [
        (m.group(1).strip(), m.group(2)) for m in MD_DELIMITED_RE.finditer(page.markdown)
    ]
    for m in MD_TABLE_ROW_RE.finditer(page.markdown):
        name = m.group(1).strip()
        # Header cells such as "| IPI # | 123456789 |"
        if name.upper().startswith("IPI"):
            continue
        candidates.append((name, m.group(2)))
    return candidates


def _capitalized_span(line: str) -> str | None:
    match = LINE_NAME_RE.search(line)
    return match.group(1).strip() if match else None


def line_proximity_stage(page: PageContent) -> list[Candidate]:
    candidates = []
    lines = page.markdown.split("\n")
    for i, line in enumerate(lines):
        ipi_match = LINE_IPI_RE.search(line)
        if not ipi_match:
            continue
        name = _capitalized_span(line)
        if not name and i > 0:
            name = _capitalized_span(lines[i - 1])
        if name and len(name) > 2:
            candidates.append((name, ipi_match.group(1)))
    return candidates


Stage = Callable[[PageContent], list[Candidate]]

EXTRACTION_STAGES: tuple[Stage, ...] = (
    script_entry_stage,
    html_table_stage,
    markdown_delimiter_stage,
    line_proximity_stage,
)


def build_results(
    candidates: Iterable[Candidate], category: RecordType, source: str
) -> list[SearchResult]:
    """Format, filter and deduplicate raw candidates (first IPI wins, max 50)."""
    results: list[SearchResult] = []
    seen: set[str] = set()
    for raw_name, ipi in candidates:
        if ipi in seen:
            continue
        name = format_name(raw_name)
        if not is_plausible_name(name):
            continue
        seen.add(ipi)
        results.append(SearchResult(name=name, ipi_number=ipi, type=category, source=source))
        if len(results) >= MAX_RESULTS:
            break
    return results


def extract_results(
    markdown: str,
    html: str,
    category: RecordType,
    source: str,
    script_entries: Iterable[dict] | None = None,
    stages: Sequence[Stage] = EXTRACTION_STAGES,
) -> list[SearchResult]:
    """Run the stage chain and return the first non-empty result set."""
    page = PageContent(
        markdown=markdown or "",
        html=html or "",
        script_entries=tuple(script_entries or ()),
    )
    for stage in stages:
        results = build_results(stage(page), category, source)
        if results:
            logger.debug(
                "%s: %d results via %s",
                source,
                len(results),
                getattr(stage, "__name__", "stage"),
            )
            return results
    return []
