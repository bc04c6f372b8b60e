"""
Episode Title Chain Propagation

A provider can expose two different titles for the same season/episode slot
(airing order vs. disc order). When consecutive two-option rows share titles
pairwise (ep18 {A, B}, ep19 {B, C}, ep20 {C, D}), choosing a title for one row
determines the rest of the chain:

    choosing B for ep18 means ep19 cannot be B, so ep19 takes C;
    ep20 then cannot be C, so it takes D.

Propagation only ever changes ``chosen_index``; options are never touched, so
the user can re-select any row afterwards, which propagates from that row.
"""

import logging
import threading
from dataclasses import replace
from typing import Iterator, MutableSequence, Optional, Sequence

from .constants import PRESELECT_THRESHOLDS, Thresholds
from .models import EpisodeRow
from .preselect import fuzzy_preselect

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


def index_of_title(row: EpisodeRow, title: str | None) -> int:
    """Index of the option whose title equals ``title`` exactly, or -1."""
    if title is None:
        return -1
    for index, option in enumerate(row.options):
        if option.title == title:
            return index
    return -1


def _chain_links(
    rows: MutableSequence[EpisodeRow],
    visited: set[int],
    changed: list[int],
    title: str,
    show_key,
) -> Iterator[str]:
    """
    Flip every unvisited two-option row of ``show_key`` that offers ``title``
    to its other option, yielding the newly chosen title of each flipped row.

    Rows are examined lazily, so a row flipped deeper in the chain is already
    visited when this scan reaches it.
    """
    for index, row in enumerate(rows):
        if index in visited or row.show_key != show_key or not row.is_two_way:
            continue
        match = index_of_title(row, title)
        if match < 0:
            continue
        other = 1 - match
        if row.chosen_index == other:
            continue
        row.chosen_index = other
        visited.add(index)
        changed.append(index)
        logger.debug(f"Row {index}: '{title}' taken, switched to '{row.options[other].title}'")
        yield row.options[other].title


def propagate(
    rows: MutableSequence[EpisodeRow],
    source_index: int,
    selected_title: str,
) -> list[int]:
    """
    Cascade a title choice made on ``rows[source_index]`` across sibling rows.

    The caller has already updated the source row. Depth-first: each flipped
    row's new title is followed to the end of its chain before the scan that
    found it continues. Every row is flipped at most once, so cyclic title
    graphs terminate.

    Precondition: ``0 <= source_index < len(rows)``. A violation is logged
    and treated as a no-op.

    Returns:
        Indices of the rows that changed, in the order they were changed
        (the source row is never included).
    """
    if not 0 <= source_index < len(rows):
        logger.warning(f"propagate: source index {source_index} out of range for {len(rows)} rows")
        return []
    if selected_title is None:
        return []

    show_key = rows[source_index].show_key
    visited = {source_index}
    changed: list[int] = []

    # Explicit stack of scans instead of recursion keeps long chains safe
    stack = [_chain_links(rows, visited, changed, selected_title, show_key)]
    while stack:
        next_title = next(stack[-1], _EXHAUSTED)
        if next_title is _EXHAUSTED:
            stack.pop()
        else:
            stack.append(_chain_links(rows, visited, changed, next_title, show_key))

    if changed:
        logger.debug(f"Propagated '{selected_title}' from row {source_index} to rows {changed}")
    return changed


def select_title(rows: MutableSequence[EpisodeRow], index: int, title: str) -> list[int]:
    """
    Choose ``title`` on ``rows[index]`` and propagate the choice.

    Returns every changed row index, the selected row first when its choice
    actually changed. Unknown titles and out-of-range indices change nothing.
    """
    if not 0 <= index < len(rows):
        logger.warning(f"select_title: index {index} out of range for {len(rows)} rows")
        return []
    row = rows[index]
    option_index = index_of_title(row, title)
    if option_index < 0:
        return []

    changed = []
    if row.chosen_index != option_index:
        row.chosen_index = option_index
        changed.append(index)
    return changed + propagate(rows, index, title)


class EpisodeTable:
    """
    Row collection with a single writer lock.

    A propagation has to finish before the next one starts, otherwise it
    could see a row mid-update and wrongly skip it as "already correct".
    The lock covers the whole collection, never a single row.
    """

    def __init__(self, rows: Sequence[EpisodeRow] = (), preselect_thresholds: Thresholds = PRESELECT_THRESHOLDS):
        self._rows: list[EpisodeRow] = list(rows)
        self._lock = threading.RLock()
        self.preselect_thresholds = preselect_thresholds

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> EpisodeRow:
        return self._rows[index]

    def append(self, row: EpisodeRow) -> int:
        with self._lock:
            self._rows.append(row)
            return len(self._rows) - 1

    def select(self, index: int, title: str) -> list[int]:
        """Apply a user selection and return every changed row index."""
        with self._lock:
            return select_title(self._rows, index, title)

    def preselect(self, index: int, title_text: Optional[str]) -> list[int]:
        """
        Pick one of two options from filename title text, then cascade.

        Returns an empty list when the text gives no confident pick.
        """
        with self._lock:
            if not 0 <= index < len(self._rows):
                return []
            row = self._rows[index]
            pick = fuzzy_preselect(title_text, row.options, self.preselect_thresholds)
            if pick is None:
                return []
            return select_title(self._rows, index, row.options[pick].title)

    def rows(self) -> list[EpisodeRow]:
        """Snapshot copies of the rows, taken between selections."""
        with self._lock:
            return [replace(row) for row in self._rows]

    def chosen_titles(self) -> list[Optional[str]]:
        """Snapshot of each row's chosen title."""
        with self._lock:
            return [row.chosen.title if row.chosen else None for row in self._rows]
