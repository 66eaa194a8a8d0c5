"""
Core utilities package.
Contains the updatable frontier heap and the algorithms built on it.
"""

from .algebra import Vector3
from .astar import a_star_search
from .heap import (
    UpdatableMinHeap,
    HeapError,
    EmptyHeapError,
    ScoreNotFoundError,
    InvalidScoreError,
)

__all__ = [
    'Vector3',
    'a_star_search',
    'UpdatableMinHeap',
    'HeapError',
    'EmptyHeapError',
    'ScoreNotFoundError',
    'InvalidScoreError',
]
