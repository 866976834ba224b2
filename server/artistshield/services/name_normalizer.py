"""Name cleanup for scraped repertory entries."""

import re

MULTI_SPACE_RE = re.compile(r"\s+")
NUMERIC_RE = re.compile(r"^\d+$")

MIN_NAME_LENGTH = 1  # exclusive
MAX_NAME_LENGTH = 100  # exclusive


def format_name(name: str) -> str:
    """Collapse whitespace and capitalize each word.

    "SMITH  JOHN a" -> "Smith John A". Each word gets its first character
    title-cased and the rest lower-cased ("ßtraße" -> "Sstraße"), so the
    result is stable when formatted again.
    """
    collapsed = MULTI_SPACE_RE.sub(" ", name).strip()
    return " ".join(word.capitalize() for word in collapsed.split(" "))


def is_plausible_name(name: str) -> bool:
    """Reject empty, single-character, overlong, and purely numeric names."""
    return MIN_NAME_LENGTH < len(name) < MAX_NAME_LENGTH and not NUMERIC_RE.match(name)
