from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

STALL_POLICIES = ("yield", "uniform")


@dataclass
class ACOConfig:
    alpha: float = 1.0          # pheromone influence
    beta: float = 5.0           # heuristic (1/d) influence
    rho: float = 0.3            # evaporation rate
    Q: float = 100.0            # pheromone deposit factor
    n_ants: Optional[int] = None # if None, max(20, 20 * n)
    eps: float = 1e-9           # added to distances before inverting
    seed: Optional[int] = None
    # what an ant does when every candidate scores 0:
    #   "yield"   - stay put, the invocation ends and the ant stays stalled
    #   "uniform" - pick any unvisited city uniformly at random
    stall_policy: str = "yield"

    def __post_init__(self):
        if not 0.0 <= self.rho <= 1.0:
            raise ValueError(f"rho must be in [0, 1], got {self.rho}")
        if self.Q <= 0:
            raise ValueError(f"Q must be positive, got {self.Q}")
        if self.eps < 0:
            raise ValueError(f"eps must be non-negative, got {self.eps}")
        if self.n_ants is not None and self.n_ants < 1:
            raise ValueError(f"n_ants must be >= 1, got {self.n_ants}")
        if self.stall_policy not in STALL_POLICIES:
            raise ValueError(f"Unknown stall policy {self.stall_policy!r}; expected one of {STALL_POLICIES}")

    def colony_size(self, n_cities: int) -> int:
        if self.n_ants is not None:
            return self.n_ants
        return max(20, 20 * n_cities)


@dataclass
class ACOResult:
    best_tour: List[int]
    best_length: float
    history_best_lengths: List[float]
    config: ACOConfig
    elapsed_sec: float
    cycles: int = 0
    stalled: bool = False
