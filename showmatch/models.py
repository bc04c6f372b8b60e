"""
Data model shared by the scorer, the show selection evaluator and the
episode title chain propagator.

Candidates, scored candidates, episode options and decisions are immutable
value objects. ``EpisodeRow.chosen_index`` is the only mutable state the
matching code touches.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Hashable, NamedTuple, Optional


class Outcome(str, Enum):
    """Kind of a show selection decision."""
    RESOLVED = "resolved"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Candidate:
    """A show option returned by a provider search."""
    id: str
    name: str
    aliases: tuple[str, ...] = ()
    first_aired_year: Optional[int] = None

    def __post_init__(self):
        # Accept any iterable of aliases but store a hashable, ordered tuple
        if not isinstance(self.aliases, tuple):
            object.__setattr__(self, "aliases", tuple(self.aliases or ()))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "aliases": list(self.aliases),
            "first_aired_year": self.first_aired_year,
        }


class ScoredCandidate(NamedTuple):
    """A candidate paired with its best similarity to the extracted name."""
    candidate: Candidate
    score: float


class Decision:
    """Base of the three evaluator outcomes."""
    kind: ClassVar[Outcome]
    reason: str

    @property
    def is_resolved(self) -> bool:
        return self.kind is Outcome.RESOLVED

    @property
    def is_ambiguous(self) -> bool:
        return self.kind is Outcome.AMBIGUOUS

    @property
    def is_not_found(self) -> bool:
        return self.kind is Outcome.NOT_FOUND

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "reason": self.reason}


@dataclass(frozen=True)
class Resolved(Decision):
    """Safe to proceed automatically with ``chosen``."""
    kind: ClassVar[Outcome] = Outcome.RESOLVED
    chosen: Candidate
    reason: str

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["chosen"] = self.chosen.to_dict()
        return result


@dataclass(frozen=True)
class Ambiguous(Decision):
    """Needs a human (or pinned id) decision; ``ranked`` is best-first."""
    kind: ClassVar[Outcome] = Outcome.AMBIGUOUS
    reason: str
    ranked: tuple[ScoredCandidate, ...] = ()

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["ranked"] = [
            {"candidate": sc.candidate.to_dict(), "score": round(sc.score, 4)}
            for sc in self.ranked
        ]
        return result


@dataclass(frozen=True)
class NotFound(Decision):
    """Nothing to show."""
    kind: ClassVar[Outcome] = Outcome.NOT_FOUND
    reason: str


@dataclass(frozen=True)
class EpisodeOption:
    """One plausible episode identity for a (season, episode) placement."""
    title: str
    episode_ref: Any = None


@dataclass
class EpisodeRow:
    """
    Propagation unit owned by the host's table.

    Only rows with exactly two options take part in chain propagation.
    """
    show_key: Hashable
    options: tuple[EpisodeOption, ...] = field(default_factory=tuple)
    chosen_index: int = 0

    def __post_init__(self):
        if not isinstance(self.options, tuple):
            self.options = tuple(self.options or ())

    @property
    def chosen(self) -> Optional[EpisodeOption]:
        if 0 <= self.chosen_index < len(self.options):
            return self.options[self.chosen_index]
        return None

    @property
    def is_two_way(self) -> bool:
        return len(self.options) == 2
