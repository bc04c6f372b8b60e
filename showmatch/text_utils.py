#!/usr/bin/env python3
"""
Centralized Text Utilities
Canonicalization helpers shared by the evaluator, the resolver and the
episode pre-selection. Every helper is total: None or garbage in, a plain
(possibly empty) string or None out.
"""

import re
from typing import Optional

from .constants import (
    APOSTROPHE_PATTERN,
    CODEC_SOURCE_TAGS_PATTERN,
    PARENTHETICAL_SUFFIX_PATTERN,
    PUNCTUATION_PATTERN,
    RESOLUTION_PATTERN,
    TITLE_SEPARATOR_PATTERN,
    WHITESPACE_PATTERN,
    YEAR_TOKEN_PATTERN,
)


def safe_trim(text: str | None) -> str:
    """Trim a possibly-None string."""
    if not text:
        return ""
    return text.strip()


def collapse_whitespace(text: str | None) -> str:
    return WHITESPACE_PATTERN.sub(" ", text or "").strip()


def replace_punctuation(text: str | None) -> str:
    """
    Turn punctuation into spacing so formatting differences compare equal.

    Examples:
        "The.Night.Manager" -> "The Night Manager"
        "Marvel's Agents of S.H.I.E.L.D." -> "Marvels Agents of S H I E L D"
        "Law & Order: SVU" -> "Law and Order SVU"
    """
    if not text:
        return ""
    text = text.replace("&", " and ")
    text = APOSTROPHE_PATTERN.sub("", text)
    text = PUNCTUATION_PATTERN.sub(" ", text)
    return collapse_whitespace(text)


def canonical_tokens(text: str | None) -> str:
    """Lowercase, punctuation-stripped, whitespace-collapsed token string."""
    return replace_punctuation(text).casefold()


def make_query_string(name: str | None) -> str:
    """
    Normalized key for provider queries and pinned ids.

    Idempotent: ``make_query_string(make_query_string(x)) == make_query_string(x)``.
    """
    return canonical_tokens(name)


def equals_ignore_case(left: str | None, right: str | None) -> bool:
    """Case-insensitive equality where blank never matches anything."""
    if not left or not right:
        return False
    return left.casefold() == right.casefold()


def parse_year(text: str | None) -> Optional[int]:
    """
    Return the first standalone 19xx/20xx year in ``text``.

    "Archer (2010)" -> 2010, "Some Show 2011" -> 2011, "Show2011" -> None
    """
    if not text:
        return None
    match = YEAR_TOKEN_PATTERN.search(text)
    if not match:
        return None
    return int(match.group("year"))


def strip_parenthetical_suffix(text: str | None) -> str:
    """Drop one trailing parenthetical group: "The Office (US)" -> "The Office"."""
    return PARENTHETICAL_SUFFIX_PATTERN.sub("", text or "").strip()


def is_parenthetical_variant(name: str | None, base: str | None) -> bool:
    """True when ``name`` is ``"<base> (<suffix>)"`` (base compared case-insensitively)."""
    name = safe_trim(name)
    base = safe_trim(base)
    if not name or not base or len(name) <= len(base) + 3:
        return False
    return (
        name[: len(base)].casefold() == base.casefold()
        and name[len(base):].startswith(" (")
        and name.endswith(")")
    )


def extract_title_text(
    basename: str | None,
    season: int | None,
    episode: int | None,
    resolution: str | None = None,
) -> Optional[str]:
    """
    Extract the episode-title portion of a filename.

    Strips everything up to and including the season/episode marker, the
    resolution and anything after it, and common codec/source tags.

    Examples:
        "CHiPs.S03E18.Off.Road.1080p.WEBRip" -> "Off Road"
        "Show.3x18.Crash.Diet.HDTV" -> "Crash Diet"
    """
    if not basename or season is None or episode is None:
        return None

    marker = re.search(rf"[sS]0*{season}[eE]0*{episode}(?!\d)", basename)
    if not marker:
        marker = re.search(rf"\b0*{season}[x.]0*{episode}\b", basename)
    if not marker:
        return None
    # Underscores are word characters, so tag boundaries need them as spaces
    after = basename[marker.end():].replace("_", " ")

    if resolution:
        cut = after.lower().find(resolution.lower())
        if cut >= 0:
            after = after[:cut]
    else:
        found = RESOLUTION_PATTERN.search(after)
        if found:
            after = after[: found.start()]

    after = CODEC_SOURCE_TAGS_PATTERN.sub("", after)
    title = collapse_whitespace(TITLE_SEPARATOR_PATTERN.sub(" ", after))
    return title or None
