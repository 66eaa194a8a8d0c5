"""
Updatable min-heap used as the frontier of shortest-path searches.

Elements are arbitrary hashable keys. Each element lives at most once in the
frontier; setting the score of a member moves it in place (decrease-key or
increase-key) instead of pushing a duplicate. Scores are also kept in a ledger
that survives extraction, so a search can read the final distance of nodes it
already popped.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Dict, Generic, Hashable, List, Tuple, TypeVar


T = TypeVar("T", bound=Hashable)


class HeapError(Exception):
    """Base class for every error raised by UpdatableMinHeap."""


class EmptyHeapError(HeapError, IndexError):
    """Raised when extracting from or peeking into an empty frontier."""


class ScoreNotFoundError(HeapError, KeyError):
    """Raised when asking for the score of an element that was never scored."""

    def __init__(self, target) -> None:
        super().__init__(target)
        self.target = target

    def __str__(self) -> str:
        return f"no score recorded for {self.target!r}"


class InvalidScoreError(HeapError, ValueError):
    """Raised when a score is NaN, too large for a float, or not a real number."""


class UpdatableMinHeap(Generic[T]):
    """
    Binary min-heap with an element -> position index.

    All mutating operations are O(log n). The structure is not thread safe.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[float, T]] = []
        self._positions: Dict[T, int] = {}
        self._scores: Dict[T, float] = {}

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def set_score(self, target: T, score: float) -> None:
        """
        Set the score of an element, inserting it into the frontier if it is not
        already there. Popped elements are added back.
        """
        if target is None:
            raise ValueError("target must not be None")
        if isinstance(score, bool) or not isinstance(score, Real):
            raise InvalidScoreError(f"score must be a real number, got {score!r}")
        try:
            score = float(score)
        except OverflowError:
            raise InvalidScoreError(f"score for {target!r} does not fit in a float") from None
        if math.isnan(score):
            raise InvalidScoreError(f"score for {target!r} is NaN")

        self._scores[target] = score

        idx = self._positions.get(target)
        if idx is None:
            self._entries.append((score, target))
            idx = len(self._entries) - 1
            self._positions[target] = idx
            self._sift_up(idx)
            return

        old_score = self._entries[idx][0]
        self._entries[idx] = (score, target)
        if score < old_score:
            self._sift_up(idx)
        elif score > old_score:
            self._sift_down(idx)

    def pop(self) -> T:
        """Remove and return the element with the lowest score. Its score is kept."""
        if not self._entries:
            raise EmptyHeapError("pop from an empty heap")

        last = self._entries.pop()
        if not self._entries:
            del self._positions[last[1]]
            return last[1]

        _, target = self._entries[0]
        del self._positions[target]
        self._entries[0] = last
        self._positions[last[1]] = 0
        self._sift_down(0)
        return target

    def peek(self) -> T:
        if not self._entries:
            raise EmptyHeapError("peek into an empty heap")
        return self._entries[0][1]

    def peek_score(self) -> float:
        if not self._entries:
            raise EmptyHeapError("peek into an empty heap")
        return self._entries[0][0]

    def get_score(self, target: T) -> float:
        """Return the last score set for ``target``, even if it was popped."""
        try:
            return self._scores[target]
        except KeyError:
            raise ScoreNotFoundError(target) from None

    def has_score(self, target: T) -> bool:
        return target in self._scores

    def scores(self) -> Dict[T, float]:
        """Copy of the score ledger."""
        return dict(self._scores)

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        """Forget the frontier and every recorded score."""
        self._entries.clear()
        self._positions.clear()
        self._scores.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, target: object) -> bool:
        return target in self._positions

    def __repr__(self) -> str:
        return f"UpdatableMinHeap(size={len(self._entries)}, scored={len(self._scores)})"

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _swap(self, i: int, j: int) -> None:
        entries = self._entries
        entries[i], entries[j] = entries[j], entries[i]
        self._positions[entries[i][1]] = i
        self._positions[entries[j][1]] = j

    def _sift_up(self, idx: int) -> None:
        entries = self._entries
        while idx > 0:
            parent = (idx - 1) // 2
            if entries[idx][0] >= entries[parent][0]:
                break
            self._swap(idx, parent)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        entries = self._entries
        n = len(entries)
        while True:
            left = 2 * idx + 1
            if left >= n:
                return
            smallest = left
            right = left + 1
            if right < n and entries[right][0] < entries[left][0]:
                smallest = right
            if entries[smallest][0] >= entries[idx][0]:
                return
            self._swap(idx, smallest)
            idx = smallest
