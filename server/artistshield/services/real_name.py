"""Performer legal-name lookup.

Renders the performer's English Wikipedia article as markdown and runs an
ordered list of text heuristics over it. Heuristics are tried in priority
order and the first one that produces a plausible name wins; a miss is a
normal outcome and yields None.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from urllib.parse import quote

from artistshield.services.firecrawl import FirecrawlClient, describe_upstream_error

logger = logging.getLogger(__name__)

WIKIPEDIA_ARTICLE_URL = "https://en.wikipedia.org/wiki/{title}"

MIN_NAME_LENGTH = 5  # exclusive
MAX_NAME_LENGTH = 60  # exclusive

# A run of at least two capitalized words: "Calvin Cordozar Broadus Jr."
_NAME_RUN = r"[A-Z][\w.'’\-]*(?:[ \t]+[A-Z][\w.'’\-]*)+"
# Where an infobox/label value ends
_CELL_END = r"[ \t]*(?:<br|\(|\||\n|$)"
# An infobox/label value; markdown links are consumed whole
_CELL_VALUE = r"((?:\[[^\]\n]*\]\([^)\n]*\)|[^|<\n(\[])+?)"

MARKDOWN_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
MULTI_SPACE_RE = re.compile(r"\s+")


def build_article_url(stage_name: str) -> str:
    title = stage_name.strip().replace(" ", "_")
    return WIKIPEDIA_ARTICLE_URL.format(title=quote(title, safe="_()',.-"))


def clean_candidate(text: str) -> str:
    text = MARKDOWN_LINK_RE.sub(r"\1", text)
    text = text.replace("*", "").replace("[", "").replace("]", "")
    text = MULTI_SPACE_RE.sub(" ", text).strip()
    return text.strip(",;:")


def is_valid_real_name(candidate: str, stage_name: str) -> bool:
    """At least two words, 6-59 characters, and not the stage name again."""
    if len(candidate.split()) < 2:
        return False
    if not MIN_NAME_LENGTH < len(candidate) < MAX_NAME_LENGTH:
        return False
    return stage_name.strip().lower() not in candidate.lower()


def _first_group(match: re.Match[str]) -> str:
    return clean_candidate(match.group(1))


@dataclass(frozen=True)
class NameHeuristic:
    label: str
    # Built per query since some patterns embed the stage name
    pattern: Callable[[str], re.Pattern[str]]
    extract: Callable[[re.Match[str]], str] = _first_group
    validate: Callable[[str, str], bool] = is_valid_real_name


def _infobox_born(stage_name: str) -> re.Pattern[str]:
    # "| Born | Calvin Cordozar Broadus Jr.<br>(1971-10-20) ..."
    return re.compile(r"\|[ \t]*Born[ \t]*\|[ \t]*" + _CELL_VALUE + _CELL_END, re.MULTILINE)


def _born_sentence(stage_name: str) -> re.Pattern[str]:
    # "... was born Calvin Cordozar Broadus Jr. on October 20, 1971"
    return re.compile(r"\b[Bb]orn[ \t]+\**(" + _NAME_RUN + ")")


def _lead_born(stage_name: str) -> re.Pattern[str]:
    # "Snoop Dogg (born Calvin Cordozar Broadus Jr.; October 20, 1971)"
    return re.compile(
        r"\**" + re.escape(stage_name.strip()) + r"\**[ \t]*\([ \t]*born[ \t]+([^;,)\n]+)",
        re.IGNORECASE,
    )


def _known_professionally(stage_name: str) -> re.Pattern[str]:
    # "Calvin Cordozar Broadus Jr. (born October 20, 1971), known professionally as ..."
    return re.compile(
        r"\**(" + _NAME_RUN + r")\**[ \t]*(?:\([^)\n]*\))?[ \t]*,[ \t]*"
        r"(?:better[ \t]+)?known[ \t]+professionally[ \t]+as"
    )


def _birth_name_label(stage_name: str) -> re.Pattern[str]:
    # "Birth name: Calvin Cordozar Broadus Jr." or "| Birth name | ... |"
    return re.compile(
        r"birth[ \t]+name[ \t]*(?::|\|)[ \t]*" + _CELL_VALUE + _CELL_END,
        re.IGNORECASE | re.MULTILINE,
    )


NAME_HEURISTICS: tuple[NameHeuristic, ...] = (
    NameHeuristic("infobox_born", _infobox_born),
    NameHeuristic("born_sentence", _born_sentence),
    NameHeuristic("lead_born", _lead_born),
    NameHeuristic("known_professionally", _known_professionally),
    NameHeuristic("birth_name_label", _birth_name_label),
)


def find_real_name(
    markdown: str,
    stage_name: str,
    heuristics: Sequence[NameHeuristic] = NAME_HEURISTICS,
) -> str | None:
    """Return the first valid candidate produced by the highest-priority heuristic."""
    if not markdown or not stage_name.strip():
        return None
    for heuristic in heuristics:
        for match in heuristic.pattern(stage_name).finditer(markdown):
            candidate = heuristic.extract(match)
            if candidate and heuristic.validate(candidate, stage_name):
                logger.info(
                    "Resolved %r to %r via %s", stage_name, candidate, heuristic.label
                )
                return candidate
    return None


class RealNameResolver:
    def __init__(
        self,
        client: FirecrawlClient,
        heuristics: Sequence[NameHeuristic] = NAME_HEURISTICS,
    ):
        self.client = client
        self.heuristics = heuristics

    async def resolve(self, stage_name: str) -> str | None:
        """Look up a performer's legal name. Returns None when nothing matches.

        A failed page render is logged and treated the same as a miss.
        """
        stage_name = stage_name.strip()
        if not stage_name:
            return None

        url = build_article_url(stage_name)
        logger.info("Resolving real name for %r from %s", stage_name, url)
        try:
            page = await self.client.scrape(url, formats=("markdown",))
        except Exception as e:
            logger.warning(
                "Real name lookup for %r failed: %s", stage_name, describe_upstream_error(e)
            )
            return None

        return find_real_name(page.markdown, stage_name, self.heuristics)
