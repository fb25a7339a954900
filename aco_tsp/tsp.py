from __future__ import annotations
import csv
import math
import random
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Sequence

Coord = Tuple[float, float]


@dataclass(frozen=True)
class TSPInstance:
    """Fixed, ordered set of 2D cities. A city is identified by its index."""
    coords: Tuple[Coord, ...]
    name: str = "euclidean_tsp"
    _dist: Tuple[Tuple[float, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        coords = []
        for k, c in enumerate(self.coords):
            if len(c) != 2:
                raise ValueError(f"City {k} must have exactly two coordinates, got {c!r}")
            x, y = float(c[0]), float(c[1])
            if not (math.isfinite(x) and math.isfinite(y)):
                raise ValueError(f"City {k} has non-finite coordinates ({x}, {y})")
            coords.append((x, y))
        if len(coords) < 2:
            raise ValueError(f"At least 2 cities are required, got {len(coords)}")
        object.__setattr__(self, "coords", tuple(coords))
        n = len(coords)
        D = [[0.0] * n for _ in range(n)]
        for i in range(n):
            for j in range(i + 1, n):
                d = self.distance(i, j)
                D[i][j] = D[j][i] = d
        object.__setattr__(self, "_dist", tuple(tuple(row) for row in D))

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, width: float = 100.0,
                         height: Optional[float] = None, margin: float = 0.0,
                         name: str = "random_euclidean") -> "TSPInstance":
        """Uniform points in a width x height box, kept `margin` away from the edges."""
        height = width if height is None else height
        rng = random.Random(seed)
        coords = []
        for _ in range(n):
            x = min(max(rng.uniform(0, width), margin), width - margin)
            y = min(max(rng.uniform(0, height), margin), height - margin)
            coords.append((x, y))
        return TSPInstance(coords=tuple(coords), name=name)

    @staticmethod
    def from_csv(path: str, name: Optional[str] = None) -> "TSPInstance":
        """Load `x,y` rows; blank lines are skipped."""
        with open(path, encoding="utf-8", newline="") as f:
            rows = [row for row in csv.reader(f) if row]
        try:
            coords = tuple((float(r[0]), float(r[1])) for r in rows if len(r) == 2)
        except ValueError as e:
            raise ValueError(f"{path}: coordinates must be numeric") from e
        if len(coords) != len(rows):
            raise ValueError(f"{path}: every row must hold exactly two values")
        return TSPInstance(coords=coords, name=name or path)

    def to_csv(self, path: str) -> None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            for x, y in self.coords:
                writer.writerow([x, y])

    def n_cities(self) -> int:
        return len(self.coords)

    def distance(self, i: int, j: int) -> float:
        (x1, y1), (x2, y2) = self.coords[i], self.coords[j]
        return math.hypot(x1 - x2, y1 - y2)

    def distance_matrix(self) -> List[List[float]]:
        return [list(row) for row in self._dist]

    def tour_length(self, tour: Sequence[int]) -> float:
        n = len(tour)
        dist = 0.0
        for k in range(n):
            i, j = tour[k], tour[(k + 1) % n]
            dist += self._dist[i][j]
        return dist
