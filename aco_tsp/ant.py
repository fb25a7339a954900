from __future__ import annotations
import enum
import math
import random
from typing import List, Optional, Sequence

from .config import ACOConfig
from .pheromone import PheromoneMatrix


class AntState(enum.Enum):
    IDLE = "idle"
    TOURING = "touring"
    COMPLETE = "complete"


class Ant:
    """One agent's tour: path, visited flags and accumulated length.

    The length excludes the closing edge until `complete` is called.
    """

    def __init__(self, n: int):
        self.n = n
        self.reset()

    def reset(self) -> None:
        self.state = AntState.IDLE
        self.path: List[int] = []
        self.visited: List[bool] = [False] * self.n
        self.length = 0.0

    @property
    def current(self) -> int:
        return self.path[-1]

    def is_full(self) -> bool:
        return len(self.path) == self.n

    def start(self, city: int) -> None:
        if self.state is not AntState.IDLE:
            raise RuntimeError(f"Cannot start an ant in state {self.state.name}")
        self.path = [city]
        self.visited = [False] * self.n
        self.visited[city] = True
        self.length = 0.0
        self.state = AntState.TOURING

    def move_to(self, city: int, dist: float) -> None:
        if self.state is not AntState.TOURING:
            raise RuntimeError(f"Cannot move an ant in state {self.state.name}")
        if self.visited[city]:
            raise RuntimeError(f"City {city} already visited")
        self.path.append(city)
        self.visited[city] = True
        self.length += dist

    def complete(self, closing_dist: float) -> float:
        if self.state is not AntState.TOURING or not self.is_full():
            raise RuntimeError(f"Cannot complete a tour with {len(self.path)}/{self.n} cities")
        self.length += closing_dist
        self.state = AntState.COMPLETE
        return self.length


def _power(base: float, exp: float) -> float:
    try:
        return base ** exp
    except OverflowError:
        return math.inf


def desirability(tau: Sequence[float], dist: Sequence[float], visited: Sequence[bool],
                 cfg: ACOConfig) -> List[float]:
    """tau^alpha * (1/(d+eps))^beta for unvisited cities, 0 for visited ones.

    Terms too large for a float become inf. A zero pheromone term keeps the
    score at 0 even next to an infinite heuristic.
    """
    alpha, beta, eps = cfg.alpha, cfg.beta, cfg.eps
    scores = []
    for j in range(len(visited)):
        if visited[j]:
            scores.append(0.0)
            continue
        t = _power(tau[j], alpha)
        try:
            eta = (1.0 / (dist[j] + eps)) ** beta
        except (OverflowError, ZeroDivisionError):
            eta = math.inf
        scores.append(0.0 if t == 0.0 or eta == 0.0 else t * eta)
    return scores


def select_next_city(ant: Ant, pheromone: PheromoneMatrix, D: List[List[float]],
                     cfg: ACOConfig, rng: random.Random) -> Optional[int]:
    """Roulette-wheel choice of the next city, or None when the ant stalls."""
    i = ant.current
    scores = desirability(pheromone.row(i), D[i], ant.visited, cfg)
    candidates = [j for j in range(ant.n) if not ant.visited[j]]
    total = sum(scores)
    if total == 0.0:
        if cfg.stall_policy == "uniform" and candidates:
            return rng.choice(candidates)
        return None
    if math.isinf(total):
        top = [j for j in candidates if math.isinf(scores[j])]
        if top:
            return rng.choice(top)
        # finite scores whose sum overflowed
        peak = max(scores)
        scores = [s / peak for s in scores]
        total = sum(scores)
    r = rng.random() * total
    fallback = None
    for j in candidates:
        if scores[j] <= 0.0:
            continue
        fallback = j
        r -= scores[j]
        if r <= 0:
            return j
    # rounding can leave a sliver of r after the last candidate
    return fallback
