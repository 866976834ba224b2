"""Source registry: central lookup for repertory search sources.

Classes are registered, not instances: a source is only built once a
Firecrawl client (and with it the credential) is available.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artistshield.services.sources.base import RepertorySource

if TYPE_CHECKING:
    from artistshield.services.firecrawl import FirecrawlClient

logger = logging.getLogger(__name__)

_sources: dict[str, type[RepertorySource]] = {}


def register_source(source_cls: type[RepertorySource]) -> type[RepertorySource]:
    """Register a source class by its name. Usable as a class decorator."""
    _sources[source_cls.source_name] = source_cls
    return source_cls


def get_source_class(name: str) -> type[RepertorySource] | None:
    return _sources.get(name)


def list_source_names() -> list[str]:
    return list(_sources)


def build_sources(
    client: FirecrawlClient, names: list[str] | None = None, **options
) -> list[RepertorySource]:
    """Instantiate the named sources (all registered ones by default), in order.

    Unknown names are logged and skipped.
    """
    sources = []
    for name in names if names is not None else list_source_names():
        source_cls = _sources.get(name)
        if source_cls is None:
            logger.warning("Unknown repertory %r, skipping", name)
            continue
        sources.append(source_cls(client, **options))
    return sources


def _clear_sources() -> None:
    """Clear all registered sources (for testing only)."""
    _sources.clear()
