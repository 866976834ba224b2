"""Input validation and sanitization utilities."""

import re
import unicodedata

# Control characters to remove (except newline, tab)
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

MULTI_WHITESPACE_PATTERN = re.compile(r"\s+")

# IPI name numbers are 9 to 11 digits
IPI_NUMBER_PATTERN = re.compile(r"^\d{9,11}$")


def normalize_text(text: str | None) -> str | None:
    """
    Normalize text input by:
    - Normalizing Unicode to NFC form
    - Removing null bytes and control characters
    - Collapsing whitespace runs and trimming

    Returns None if input is None.
    """
    if text is None:
        return None

    text = unicodedata.normalize("NFC", text)
    text = CONTROL_CHAR_PATTERN.sub("", text)
    return MULTI_WHITESPACE_PATTERN.sub(" ", text).strip()


def normalize_single_line(text: str | None) -> str | None:
    """Normalize text for single-line fields (names, queries, titles)."""
    if text is None:
        return None
    return normalize_text(text.replace("\n", " ").replace("\r", " "))


def is_ipi_number(value: str | None) -> bool:
    """Check that a value is a bare 9-11 digit IPI number."""
    if not value:
        return False
    return bool(IPI_NUMBER_PATTERN.match(value))
