from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple


class BestTourTracker:
    """Shortest complete tour seen so far; its length never increases."""

    def __init__(self):
        self._tour: Optional[Tuple[int, ...]] = None
        self._length = math.inf

    @property
    def tour(self) -> Optional[Tuple[int, ...]]:
        return self._tour

    @property
    def length(self) -> float:
        return self._length

    @property
    def has_tour(self) -> bool:
        return self._tour is not None

    def consider(self, tour: Sequence[int], length: float) -> bool:
        """Keep `tour` if it is strictly shorter than the stored best."""
        if self._tour is not None and not length < self._length:
            return False
        self._tour = tuple(tour)
        self._length = length
        return True
