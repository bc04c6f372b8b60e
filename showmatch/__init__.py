"""
Show Matcher core package
Show selection and episode title chain propagation, shared by the CLI and
any other host application
"""
__version__ = "1.0.0"

from .models import (
    Ambiguous,
    Candidate,
    Decision,
    EpisodeOption,
    EpisodeRow,
    NotFound,
    Outcome,
    Resolved,
    ScoredCandidate,
)
from .similarity import levenshtein_distance, similarity
from .evaluator import evaluate, rank_candidates
from .preselect import fuzzy_preselect
from .propagation import EpisodeTable, index_of_title, propagate, select_title
from .resolver import (
    CandidateSource,
    InMemoryPinnedIdStore,
    PinnedIdStore,
    Resolution,
    ShowNameOverrides,
    ShowResolver,
    StaticCandidateSource,
)
from .text_utils import extract_title_text, make_query_string

# Exceptions (always available)
from .exceptions import (
    ShowMatchError,
    CandidateLookupError,
    InvalidInputError,
    ConfigurationError,
    SelectionError,
)

__all__ = [
    # Version
    "__version__",
    # Model
    "Outcome",
    "Candidate",
    "ScoredCandidate",
    "Decision",
    "Resolved",
    "Ambiguous",
    "NotFound",
    "EpisodeOption",
    "EpisodeRow",
    # Scoring and selection
    "similarity",
    "levenshtein_distance",
    "evaluate",
    "rank_candidates",
    # Episodes
    "propagate",
    "select_title",
    "index_of_title",
    "fuzzy_preselect",
    "EpisodeTable",
    "extract_title_text",
    # Resolution host
    "CandidateSource",
    "PinnedIdStore",
    "InMemoryPinnedIdStore",
    "StaticCandidateSource",
    "ShowNameOverrides",
    "ShowResolver",
    "Resolution",
    "make_query_string",
    # Exceptions
    "ShowMatchError",
    "CandidateLookupError",
    "InvalidInputError",
    "ConfigurationError",
    "SelectionError",
]
