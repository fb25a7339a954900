from __future__ import annotations
import logging
import random
import time
from typing import List, Optional, Sequence, Tuple

from .ant import Ant, AntState, select_next_city
from .best import BestTourTracker
from .config import ACOConfig, ACOResult
from .pheromone import PheromoneMatrix
from .tsp import TSPInstance

logger = logging.getLogger(__name__)


class Colony:
    """Ant System session advanced in bounded steps.

    One atomic step is either moving the current ant by one city or
    finalizing its complete tour and moving the cursor to the next ant.
    Starting an idle ant is fused with its first move. When the last ant
    completes, pheromone is evaporated and deposited, every ant is reset and
    the call returns, so each cycle begins on a fresh invocation.
    """

    def __init__(self, instance: TSPInstance, cfg: Optional[ACOConfig] = None):
        self.instance = instance
        self.cfg = cfg or ACOConfig()
        self.n = instance.n_cities()
        self.D = instance.distance_matrix()
        self.rng = random.Random(self.cfg.seed)

        self.pheromone = PheromoneMatrix(self.n)
        self.ants = [Ant(self.n) for _ in range(self.cfg.colony_size(self.n))]
        self.best = BestTourTracker()
        self.cursor = 0
        self.cycle = 0
        self.stalled = False

        # per-cycle history for visualization
        self.history_best_lengths: List[float] = []
        self.history_best_tours: List[List[int]] = []

    @classmethod
    def from_coords(cls, coords: Sequence[Tuple[float, float]], cfg: Optional[ACOConfig] = None) -> "Colony":
        return cls(TSPInstance(coords=tuple(coords)), cfg)

    @property
    def n_ants(self) -> int:
        return len(self.ants)

    @property
    def best_tour(self) -> Optional[List[int]]:
        return list(self.best.tour) if self.best.has_tour else None

    @property
    def best_length(self) -> float:
        return self.best.length

    def partial_tours(self) -> List[List[int]]:
        return [list(ant.path) for ant in self.ants]

    def status_line(self) -> str:
        return f"Cities: {self.n} | Ant: {self.cursor + 1}/{self.n_ants} | Best: {self.best_length:.2f}"

    def step(self, budget: int) -> None:
        if budget < 0:
            raise ValueError(f"Step budget must be non-negative, got {budget}")
        steps = 0
        while steps < budget:
            self.stalled = False
            ant = self.ants[self.cursor]

            if ant.state is AntState.IDLE:
                ant.start(self.rng.randrange(self.n))

            if not ant.is_full():
                nxt = select_next_city(ant, self.pheromone, self.D, self.cfg, self.rng)
                if nxt is None:
                    self.stalled = True
                    logger.debug("Ant %d stalled at city %d after %d/%d cities",
                                 self.cursor, ant.current, len(ant.path), self.n)
                    return
                ant.move_to(nxt, self.D[ant.current][nxt])
                steps += 1

            if ant.is_full():
                L = ant.complete(self.D[ant.path[-1]][ant.path[0]])
                if self.best.consider(ant.path, L):
                    logger.debug("Cycle %d ant %d: new best length %.4f", self.cycle, self.cursor, L)
                self.cursor += 1
                steps += 1

            if self.cursor >= self.n_ants:
                self._finish_cycle()
                return

    def _finish_cycle(self) -> None:
        self.pheromone.evaporate(self.cfg.rho)
        for ant in self.ants:
            self.pheromone.deposit(ant.path, ant.length, self.cfg.Q)
        for ant in self.ants:
            ant.reset()
        self.cursor = 0
        self.cycle += 1

        self.history_best_lengths.append(self.best.length)
        self.history_best_tours.append(list(self.best.tour))
        logger.debug("Cycle %d done, best length %.4f", self.cycle, self.best.length)

    def run(self, n_cycles: int, steps_per_call: Optional[int] = None) -> ACOResult:
        """Step until `n_cycles` more cycles finish, or the colony stalls."""
        budget = steps_per_call or self.n_ants * self.n
        target = self.cycle + n_cycles
        start = time.time()
        while self.cycle < target:
            self.step(budget)
            if self.stalled:
                # nothing changes the pheromone until the cycle ends
                logger.warning("Colony stalled in cycle %d at ant %d/%d",
                               self.cycle + 1, self.cursor + 1, self.n_ants)
                break
        elapsed = time.time() - start
        return ACOResult(best_tour=self.best_tour or [], best_length=self.best_length,
                         history_best_lengths=list(self.history_best_lengths), config=self.cfg,
                         elapsed_sec=elapsed, cycles=self.cycle, stalled=self.stalled)
