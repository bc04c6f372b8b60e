#!/usr/bin/env python3
"""
Show Selection Evaluator
Decides whether an extracted show name resolves to exactly one provider
candidate, is ambiguous, or has no match at all.

The evaluator is a pure function of its arguments:
- it never calls a provider or touches preferences
- it never mutates the candidates it is given
- every traversal follows the caller's candidate order, so repeated calls
  with the same input produce identical decisions

Decision order:
1. No candidates -> NotFound
2. Pinned id present among candidates -> Resolved
3. Candidate name equals the extracted name (raw or punctuation-normalized)
4. Candidate alias equals the extracted name (raw or punctuation-normalized)
5. Base title (the extracted name itself) preferred over "(suffix)" variants of it
6. Exactly one candidate with the same canonical token string
7. Exactly one candidate first aired within the year tolerance
8. Only one candidate at all
9. Fuzzy fallback: strong, clearly-ahead best score, else Ambiguous
"""

import logging
from typing import Optional, Sequence

from . import constants
from .constants import Thresholds
from .models import Ambiguous, Candidate, Decision, NotFound, Resolved, ScoredCandidate
from .similarity import similarity
from .text_utils import (
    canonical_tokens,
    equals_ignore_case,
    is_parenthetical_variant,
    parse_year,
    replace_punctuation,
    safe_trim,
)

logger = logging.getLogger(__name__)


class _ExtractedName:
    """The forms of the extracted name each step compares against."""

    __slots__ = ("raw", "normalized", "base", "tokens", "year")

    def __init__(self, extracted_name: str | None):
        self.raw = safe_trim(extracted_name)
        self.normalized = replace_punctuation(self.raw)
        self.base = self.normalized or self.raw
        self.tokens = canonical_tokens(self.normalized or self.raw)
        self.year = parse_year(self.raw) or parse_year(self.normalized)

    def matches(self, candidate_name: str | None) -> bool:
        """Case-insensitive equality against the raw or normalized form."""
        if not candidate_name:
            return False
        return equals_ignore_case(candidate_name, self.raw) or equals_ignore_case(
            candidate_name, self.normalized
        )


def _only(hits: list[Candidate]) -> Optional[Candidate]:
    """The single qualifying candidate, or None when zero or several qualify."""
    return hits[0] if len(hits) == 1 else None


def _match_exact_name(extracted: _ExtractedName, candidates: Sequence[Candidate]) -> Optional[Candidate]:
    for candidate in candidates:
        if extracted.matches(candidate.name):
            return candidate
    return None


def _match_exact_alias(extracted: _ExtractedName, candidates: Sequence[Candidate]) -> Optional[Candidate]:
    for candidate in candidates:
        for alias in candidate.aliases or ():
            if extracted.matches(alias):
                return candidate
    return None


def _prefer_base_title(extracted: _ExtractedName, candidates: Sequence[Candidate]) -> Optional[Candidate]:
    if not extracted.base:
        return None
    base = _only([
        c for c in candidates
        if equals_ignore_case(safe_trim(c.name), extracted.base)
    ])
    if base is None:
        return None
    base_name = safe_trim(base.name)
    has_variants = any(
        c is not base and is_parenthetical_variant(c.name, base_name)
        for c in candidates
    )
    return base if has_variants else None


def _match_token_set(extracted: _ExtractedName, candidates: Sequence[Candidate]) -> Optional[Candidate]:
    if not extracted.tokens:
        return None
    return _only([
        c for c in candidates
        if c.name and canonical_tokens(c.name) == extracted.tokens
    ])


def _match_year(
    extracted: _ExtractedName, candidates: Sequence[Candidate], tolerance: int
) -> Optional[Candidate]:
    if extracted.year is None:
        return None
    return _only([
        c for c in candidates
        if c.first_aired_year is not None
        and abs(c.first_aired_year - extracted.year) <= tolerance
    ])


def best_score(extracted_name: str | None, candidate: Candidate) -> float:
    """Best similarity of the extracted name against a candidate's name and aliases."""
    names = [candidate.name, *(candidate.aliases or ())]
    return max((similarity(extracted_name, n) for n in names if n), default=0.0)


def rank_candidates(extracted_name: str | None, candidates: Sequence[Candidate]) -> list[ScoredCandidate]:
    """
    Score every candidate and sort best-first.

    The sort is stable, so equal scores keep the caller's order.
    """
    name = safe_trim(extracted_name)
    scored = [ScoredCandidate(c, best_score(name, c)) for c in candidates]
    return sorted(scored, key=lambda sc: sc.score, reverse=True)


def evaluate(
    extracted_name: str | None,
    candidates: Sequence[Candidate] | None,
    pinned_id: str | None = None,
    *,
    thresholds: Thresholds = constants.AUTO_SELECT_THRESHOLDS,
    year_tolerance: int = constants.YEAR_TOLERANCE,
) -> Decision:
    """
    Evaluate whether provider candidates can be auto-resolved without prompting.

    Args:
        extracted_name: Show name parsed from the filename (or an override's
            replacement text). Blank means "no strong signal".
        candidates: Provider candidates in provider order (may be empty).
        pinned_id: A user-pinned candidate id for this query, if any.
        thresholds: Minimum score and gap for the fuzzy auto-select.
        year_tolerance: Accepted distance for the first-aired-year tie-break.

    Returns:
        Resolved, Ambiguous (with a best-first ranked list) or NotFound.
    """
    options = [c for c in (candidates or ()) if c is not None]
    if not options:
        return NotFound(constants.REASON_NO_MATCHES)

    if pinned_id and pinned_id.strip():
        for candidate in options:
            if candidate.id and candidate.id == pinned_id:
                return _resolved(candidate, constants.REASON_PINNED_ID, extracted_name)

    extracted = _ExtractedName(extracted_name)

    steps = (
        (_match_exact_name, constants.REASON_EXACT_NAME),
        (_match_exact_alias, constants.REASON_EXACT_ALIAS),
        (_prefer_base_title, constants.REASON_BASE_TITLE),
        (_match_token_set, constants.REASON_TOKEN_MATCH),
    )
    for step, reason in steps:
        chosen = step(extracted, options)
        if chosen is not None:
            return _resolved(chosen, reason, extracted_name)

    chosen = _match_year(extracted, options, year_tolerance)
    if chosen is not None:
        reason = constants.REASON_YEAR_MATCH.format(tolerance=year_tolerance)
        return _resolved(chosen, reason, extracted_name)

    if len(options) == 1:
        return _resolved(options[0], constants.REASON_UNIQUE, extracted_name)

    ranked = rank_candidates(extracted.raw, options)
    best = ranked[0].score
    second = ranked[1].score
    if thresholds.accepts(best, second):
        reason = f"Resolved via fuzzy match ({best:.0%} similarity, {best - second:.0%} ahead of next)"
        return _resolved(ranked[0].candidate, reason, extracted_name)

    logger.debug(
        f"Ambiguous '{extracted.raw}': best={best:.3f} second={second:.3f} "
        f"({len(options)} candidates)"
    )
    return Ambiguous(constants.REASON_AMBIGUOUS, tuple(ranked))


def _resolved(candidate: Candidate, reason: str, extracted_name: str | None) -> Resolved:
    logger.debug(f"Resolved '{extracted_name}' -> '{candidate.name}' [{candidate.id}]: {reason}")
    return Resolved(candidate, reason)
