"""
Pydantic models for JSON input accepted by the command-line host
"""
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .models import Candidate, EpisodeOption, EpisodeRow


class CandidatePayload(BaseModel):
    """One provider candidate"""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    aliases: List[str] = Field(default_factory=list)
    first_aired_year: Optional[int] = Field(default=None, ge=1800, le=2200)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Provider ids are often numeric in JSON"""
        return str(v) if isinstance(v, int) else v

    def to_candidate(self) -> Candidate:
        return Candidate(self.id, self.name, tuple(self.aliases), self.first_aired_year)


class CandidateList(BaseModel):
    """Candidates in provider order"""
    candidates: List[CandidatePayload]

    def to_candidates(self) -> List[Candidate]:
        return [c.to_candidate() for c in self.candidates]


class EpisodeOptionPayload(BaseModel):
    """One title option for an episode slot"""
    title: str
    episode_ref: Any = None


class EpisodeRowPayload(BaseModel):
    """One row of the episode table"""
    show_key: Union[str, int]
    options: List[EpisodeOptionPayload]
    chosen_index: int = Field(default=0, ge=0)

    def to_row(self) -> EpisodeRow:
        options = tuple(EpisodeOption(o.title, o.episode_ref) for o in self.options)
        return EpisodeRow(self.show_key, options, self.chosen_index)


class EpisodeTablePayload(BaseModel):
    """Rows of the episode table in display order"""
    rows: List[EpisodeRowPayload]

    def to_rows(self) -> List[EpisodeRow]:
        return [r.to_row() for r in self.rows]
