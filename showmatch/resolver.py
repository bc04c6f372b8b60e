#!/usr/bin/env python3
"""
Show Resolver
Host-side orchestration around the pure evaluator.

The resolver owns no global state. Its collaborators are injected:
- a CandidateSource that searches a provider for a query string
- a PinnedIdStore holding user-pinned candidate ids per query string
- optional ShowNameOverrides mapping extracted names to corrected names

Lookups for many files run concurrently, one task per unique show name.
The evaluator is pure, so no locking is needed around it; a caller that no
longer wants a result simply ignores the future.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from . import constants
from .constants import Thresholds
from .evaluator import evaluate
from .exceptions import CandidateLookupError, SelectionError
from .models import Ambiguous, Candidate, Decision, NotFound
from .text_utils import make_query_string, safe_trim

logger = logging.getLogger(__name__)


class CandidateSource(Protocol):
    """Provider search collaborator."""

    def search(self, query: str) -> Sequence[Candidate]:
        """Return candidates for a normalized query string, provider order."""
        ...


class PinnedIdStore(Protocol):
    """Persisted query-string -> candidate id collaborator."""

    def get(self, query: str) -> Optional[str]:
        ...

    def pin(self, query: str, candidate_id: str) -> None:
        ...

    def unpin(self, query: str) -> None:
        ...


class InMemoryPinnedIdStore:
    """Thread-safe dict-backed pinned id store keyed by query string."""

    def __init__(self, pins: Optional[Mapping[str, str]] = None):
        self._lock = threading.Lock()
        self._pins: Dict[str, str] = {}
        for query, candidate_id in (pins or {}).items():
            self.pin(query, candidate_id)

    def get(self, query: str) -> Optional[str]:
        with self._lock:
            return self._pins.get(make_query_string(query))

    def pin(self, query: str, candidate_id: str) -> None:
        with self._lock:
            self._pins[make_query_string(query)] = candidate_id

    def unpin(self, query: str) -> None:
        with self._lock:
            self._pins.pop(make_query_string(query), None)

    def to_dict(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._pins)


class StaticCandidateSource:
    """Candidate source over a fixed catalog, searched by query string."""

    def __init__(self, catalog: Mapping[str, Sequence[Candidate]]):
        self._catalog = {make_query_string(q): list(c) for q, c in catalog.items()}

    def search(self, query: str) -> Sequence[Candidate]:
        return list(self._catalog.get(make_query_string(query), []))


class ShowNameOverrides:
    """
    User corrections for extracted show names.

    Matching is a case-insensitive exact match on the extracted name; the
    first matching entry wins and a blank replacement keeps the original.
    """

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        self._overrides: Dict[str, str] = dict(overrides or {})

    def __len__(self) -> int:
        return len(self._overrides)

    def set(self, extracted_name: str, replacement: str) -> None:
        self._overrides[extracted_name] = replacement

    def resolve(self, extracted_name: Optional[str]) -> Optional[str]:
        if extracted_name is None:
            return None
        wanted = extracted_name.casefold()
        for source, replacement in self._overrides.items():
            if source and source.casefold() == wanted:
                return replacement if replacement and replacement.strip() else extracted_name
        return extracted_name


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one extracted show name."""
    extracted_name: str
    effective_name: str
    query_string: str
    candidates: tuple[Candidate, ...]
    decision: Decision

    @property
    def chosen(self) -> Optional[Candidate]:
        return getattr(self.decision, "chosen", None)


class ShowResolver:
    """Source candidates and pins, then let the evaluator decide."""

    def __init__(
        self,
        source: CandidateSource,
        pins: Optional[PinnedIdStore] = None,
        overrides: Optional[ShowNameOverrides] = None,
        thresholds: Thresholds = constants.AUTO_SELECT_THRESHOLDS,
        year_tolerance: int = constants.YEAR_TOLERANCE,
        max_workers: int = 4,
    ):
        self.source = source
        self.pins = pins if pins is not None else InMemoryPinnedIdStore()
        self.overrides = overrides or ShowNameOverrides()
        self.thresholds = thresholds
        self.year_tolerance = year_tolerance
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_settings(cls, source: CandidateSource, settings, **kwargs) -> "ShowResolver":
        """Build a resolver using thresholds and worker count from Settings."""
        return cls(
            source,
            thresholds=settings.auto_select_thresholds(),
            year_tolerance=settings.year_tolerance,
            max_workers=settings.max_workers,
            **kwargs,
        )

    def resolve(self, extracted_name: str) -> Resolution:
        """Resolve one extracted show name to a decision."""
        effective = safe_trim(self.overrides.resolve(extracted_name))
        query = make_query_string(effective)
        if effective != safe_trim(extracted_name):
            logger.info(f"Override: '{extracted_name}' -> '{effective}'")

        if not query:
            return Resolution(extracted_name, effective, query, (), NotFound(constants.REASON_NO_MATCHES))

        try:
            candidates = tuple(self.source.search(query) or ())
        except CandidateLookupError as e:
            logger.warning(f"Show lookup failed for '{query}': {e.details}")
            decision = NotFound(f"{constants.REASON_NO_MATCHES}: {e.message}")
            return Resolution(extracted_name, effective, query, (), decision)

        pinned_id = self.pins.get(query)
        decision = evaluate(
            effective,
            candidates,
            pinned_id,
            thresholds=self.thresholds,
            year_tolerance=self.year_tolerance,
        )
        logger.info(f"Resolved '{effective}' ({len(candidates)} candidates): {decision.kind.value} - {decision.reason}")
        return Resolution(extracted_name, effective, query, candidates, decision)

    def resolve_many(self, extracted_names: Iterable[str]) -> Dict[str, Resolution]:
        """
        Resolve many names concurrently, one task per unique name.

        The returned dict keeps first-seen input order.
        """
        unique = list(dict.fromkeys(extracted_names))
        if not unique:
            return {}
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(unique))) as executor:
            futures = {name: executor.submit(self.resolve, name) for name in unique}
            return {name: future.result() for name, future in futures.items()}

    @staticmethod
    def pending_disambiguations(resolutions: Iterable[Resolution]) -> List[Resolution]:
        """Resolutions that need a user choice, for a single batch prompt."""
        return [r for r in resolutions if isinstance(r.decision, Ambiguous)]

    def pin_choice(self, resolution: Resolution, candidate_id: str) -> None:
        """Remember the user's pick so later lookups resolve via the pinned id."""
        if not any(c.id == candidate_id for c in resolution.candidates):
            raise SelectionError(resolution.query_string, candidate_id)
        self.pins.pin(resolution.query_string, candidate_id)
        logger.info(f"Pinned '{resolution.query_string}' -> {candidate_id}")

    def validate_override(self, replacement: str) -> Decision:
        """Check whether an override's replacement text is likely to resolve."""
        return self.resolve(replacement).decision
