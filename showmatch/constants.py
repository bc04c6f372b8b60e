#!/usr/bin/env python3
"""
Centralized Constants for Show Matcher

Shared thresholds, reasons and pre-compiled patterns used by the scorer,
the show selection evaluator and the episode title helpers.
Import from here instead of defining constants in multiple places.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Thresholds:
    """Minimum best score and minimum gap to the runner-up for an automatic pick."""
    min_score: float
    min_gap: float

    def accepts(self, best: float, second: float) -> bool:
        return best >= self.min_score and (best - second) >= self.min_gap


# ============================================================================
# Fuzzy Thresholds (empirically chosen, may need tuning)
# ============================================================================

# Show candidates: auto-select the best fuzzy match only when it is strong
# and clearly ahead of the second best.
AUTO_SELECT_MIN_SCORE = 0.80
AUTO_SELECT_MIN_GAP = 0.10

# Episode options: pre-select one of two titles from filename title text.
PRESELECT_MIN_SCORE = 0.60
PRESELECT_MIN_GAP = 0.15

AUTO_SELECT_THRESHOLDS = Thresholds(AUTO_SELECT_MIN_SCORE, AUTO_SELECT_MIN_GAP)
PRESELECT_THRESHOLDS = Thresholds(PRESELECT_MIN_SCORE, PRESELECT_MIN_GAP)

# Accepted distance between an extracted year and a candidate's first aired year
YEAR_TOLERANCE = 1


# ============================================================================
# Decision Reasons
# ============================================================================

REASON_NO_MATCHES = "No matches"
REASON_PINNED_ID = "Resolved via pinned ID"
REASON_EXACT_NAME = "Resolves via exact name match"
REASON_EXACT_ALIAS = "Resolves via exact alias match"
REASON_BASE_TITLE = "Preferred base title over parenthetical variants"
REASON_TOKEN_MATCH = "Preferred exact token match over extra tokens"
REASON_YEAR_MATCH = "Resolved via FirstAiredYear (±{tolerance}) match"
REASON_UNIQUE = "Resolves uniquely"
REASON_AMBIGUOUS = "Still ambiguous (would prompt)"


# ============================================================================
# Patterns
# ============================================================================

# 19xx/20xx bounded by whitespace, parentheses or string edges
YEAR_TOKEN_PATTERN = re.compile(r"(?:^|\s|\()(?P<year>19\d{2}|20\d{2})(?=\s|\)|$)")

# Trailing "(...)" disambiguation suffix, e.g. "The Office (US)"
PARENTHETICAL_SUFFIX_PATTERN = re.compile(r"\s*\([^()]*\)\s*$")

# Anything that is not a letter, digit or whitespace (underscore included)
PUNCTUATION_PATTERN = re.compile(r"[^\w\s]|_")
APOSTROPHE_PATTERN = re.compile(r"['’`]")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Common codec, source and audio tags found after the episode title
CODEC_SOURCE_TAGS_PATTERN = re.compile(
    r"\b(WEBRip|WEB[.-]?DL|WEB|BluRay|BRRip|BDRip|HDTV|DVDRip"
    r"|x264|x265|H\.?264|H\.?265|HEVC|AVC|AAC|AC3|DTS"
    r"|PROPER|REPACK|INTERNAL|AMZN|NF|HULU|DSNP|10bit)\b",
    re.IGNORECASE,
)
RESOLUTION_PATTERN = re.compile(r"\b(2160p|1080p|720p|576p|480p|4K|UHD)\b", re.IGNORECASE)
TITLE_SEPARATOR_PATTERN = re.compile(r"[._-]+")
