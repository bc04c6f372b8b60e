"""
Fuzzy pre-selection of one of two episode title options, driven by the
title text embedded in the original filename.
"""

import logging
from typing import Optional, Sequence

from .constants import PRESELECT_THRESHOLDS, Thresholds
from .models import EpisodeOption
from .similarity import similarity

logger = logging.getLogger(__name__)


def fuzzy_preselect(
    title_text: Optional[str],
    options: Sequence[EpisodeOption],
    thresholds: Thresholds = PRESELECT_THRESHOLDS,
) -> Optional[int]:
    """
    Return 0 or 1 when one of exactly two options clearly matches
    ``title_text``, otherwise None.
    """
    if len(options) != 2 or not title_text or not title_text.strip():
        return None

    score0 = similarity(title_text, options[0].title)
    score1 = similarity(title_text, options[1].title)
    logger.debug(
        f"Fuzzy episode pre-select for '{title_text}': "
        f"'{options[0].title}'={score0:.3f}, '{options[1].title}'={score1:.3f}"
    )

    best, second = max(score0, score1), min(score0, score1)
    if thresholds.accepts(best, second):
        return 0 if score0 > score1 else 1
    return None
