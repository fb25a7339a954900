from __future__ import annotations
from typing import List, Sequence

import numpy as np


class PheromoneMatrix:
    """Symmetric n x n pheromone trail, stored as nested lists.

    Every mutation touches (i, j) and (j, i) together, so the matrix stays
    symmetric without a separate check. There is no floor: repeated
    evaporation may drive entries arbitrarily close to zero.
    """

    def __init__(self, n: int):
        self.initialize(n)

    def initialize(self, n: int) -> None:
        if n < 1:
            raise ValueError(f"Pheromone matrix needs n >= 1, got {n}")
        self.n = n
        tau0 = 1.0 / (n * n)
        self.tau: List[List[float]] = [[tau0] * n for _ in range(n)]

    def value(self, i: int, j: int) -> float:
        return self.tau[i][j]

    def row(self, i: int) -> List[float]:
        return self.tau[i]

    def evaporate(self, rho: float) -> None:
        keep = 1.0 - rho
        for i in range(self.n):
            row = self.tau[i]
            for j in range(self.n):
                row[j] *= keep

    def deposit(self, tour: Sequence[int], length: float, Q: float) -> None:
        """Add Q/length to every edge of the closed tour, both directions."""
        dta = Q / length if length > 0 else 0.0
        m = len(tour)
        for k in range(m):
            i, j = tour[k], tour[(k + 1) % m]
            self.tau[i][j] += dta
            self.tau[j][i] += dta

    def is_symmetric(self) -> bool:
        return all(self.tau[i][j] == self.tau[j][i]
                   for i in range(self.n) for j in range(i + 1, self.n))

    def as_lists(self) -> List[List[float]]:
        return [list(row) for row in self.tau]

    def to_numpy(self) -> np.ndarray:
        return np.array(self.tau, dtype=float)
