"""Repertory search sources. Importing this package registers ASCAP and BMI."""

from artistshield.services.sources import ascap, bmi  # noqa: F401
from artistshield.services.sources.base import RepertorySource, parse_script_entries
from artistshield.services.sources.registry import (
    build_sources,
    get_source_class,
    list_source_names,
    register_source,
)

__all__ = [
    "RepertorySource",
    "build_sources",
    "get_source_class",
    "list_source_names",
    "parse_script_entries",
    "register_source",
]
