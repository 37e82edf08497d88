import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import population as pop_store
from .errors import InvalidConfiguration, InvariantViolation
from .evaluation import distance_matrix, select_parent, selection_probabilities, summarize, tour_lengths
from .reporting import RunReporter
from .tsp.base import Coordinate, SolveResult, Tour, build_graph, is_permutation
from .tsp.genome import CROSSOVERS, mutate


logger = logging.getLogger(__name__)

# Minimum decrease of the best length that counts as an improvement.
IMPROVEMENT_EPS = 1e-12


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class EvolutionConfig:
    population_size: int = 40
    num_cities: Optional[int] = None
    mutation_rate: float = 0.02
    max_epochs: Optional[int] = 100
    stagnation_limit: Optional[int] = None
    target_distance: Optional[float] = None
    random_seed: int = 123
    elitism: bool = False
    crossover: str = "order"

    def validate(self, num_cities: Optional[int] = None) -> None:
        if not _is_int(self.population_size) or self.population_size < 2:
            raise InvalidConfiguration(
                f"population_size must be an int >= 2, got {self.population_size!r}"
            )
        if isinstance(self.mutation_rate, bool) or not isinstance(self.mutation_rate, (int, float)):
            raise InvalidConfiguration(f"mutation_rate must be a number, got {self.mutation_rate!r}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidConfiguration(f"mutation_rate must be in [0, 1], got {self.mutation_rate!r}")
        if self.max_epochs is not None and (not _is_int(self.max_epochs) or self.max_epochs < 1):
            raise InvalidConfiguration(f"max_epochs must be an int >= 1, got {self.max_epochs!r}")
        if self.stagnation_limit is not None and (
            not _is_int(self.stagnation_limit) or self.stagnation_limit < 1
        ):
            raise InvalidConfiguration(
                f"stagnation_limit must be an int >= 1, got {self.stagnation_limit!r}"
            )
        if self.target_distance is not None and (
            isinstance(self.target_distance, bool)
            or not isinstance(self.target_distance, (int, float))
            or not math.isfinite(self.target_distance)
            or self.target_distance < 0
        ):
            raise InvalidConfiguration(
                f"target_distance must be a finite number >= 0, got {self.target_distance!r}"
            )
        if self.max_epochs is None and self.stagnation_limit is None and self.target_distance is None:
            raise InvalidConfiguration(
                "no termination criterion: set max_epochs, stagnation_limit or target_distance"
            )
        if not _is_int(self.random_seed):
            raise InvalidConfiguration(f"random_seed must be an int, got {self.random_seed!r}")
        if self.crossover not in CROSSOVERS:
            raise InvalidConfiguration(
                f"unknown crossover {self.crossover!r}, expected one of {sorted(CROSSOVERS)}"
            )
        if num_cities is not None and self.num_cities is not None and self.num_cities != num_cities:
            raise InvalidConfiguration(
                f"num_cities={self.num_cities} does not match the {num_cities} cities supplied"
            )


class GeneticSearch:
    """Generational GA over city permutations with roulette-wheel selection.

    Each epoch evaluates the current population, records it, checks the
    termination criteria and, if the run goes on, breeds a full replacement
    generation. With ``elitism`` the best tour of an epoch is carried over
    unchanged, which makes the per-epoch best non-increasing.
    """

    solver_name = "genetic"

    def __init__(
        self,
        config: EvolutionConfig,
        cities: Sequence[Coordinate],
        rng: random.Random = None,
        device=None,
        optimum: Optional[float] = None,
    ):
        config.validate(num_cities=len(cities))
        self.cfg = config
        self.graph = build_graph(cities)
        self.num_cities = self.graph.number_of_nodes()
        self.dist_mat = distance_matrix(self.graph, device=device)
        self.optimum = optimum
        self.rng = rng or random.Random(config.random_seed)
        self.crossover = CROSSOVERS[config.crossover]
        self.population = pop_store.initialize(config.population_size, self.num_cities, self.rng)
        self.reporter = RunReporter()
        self.best_tour: Optional[Tour] = None
        self.best_length = float("inf")
        self.stale_epochs = 0
        self.stop_reason: Optional[str] = None
        self._stop_requested = False
        logger.info(
            "initialized %d chromosomes over %d cities (crossover=%s, elitism=%s, seed=%d)",
            config.population_size,
            self.num_cities,
            config.crossover,
            config.elitism,
            config.random_seed,
        )

    @property
    def epoch(self) -> int:
        return self.population.epoch

    @property
    def finished(self) -> bool:
        return self.stop_reason is not None

    def request_stop(self) -> None:
        """Ask the search to stop at the next termination check."""
        self._stop_requested = True

    def evaluate(self) -> Tuple[List[float], np.ndarray]:
        costs = tour_lengths(self.dist_mat, self.population.chromosomes)
        probs = selection_probabilities(costs)
        gen_best, gen_avg = summarize(costs)
        self.reporter.record(self.epoch, gen_best, gen_avg)
        best_idx = int(np.argmin(costs))
        if gen_best < self.best_length - IMPROVEMENT_EPS:
            self.best_length = gen_best
            self.best_tour = self.population[best_idx]
            self.stale_epochs = 0
        else:
            self.stale_epochs += 1
        logger.debug(
            "epoch %d: best=%.4f avg=%.4f best_so_far=%.4f stale=%d",
            self.epoch,
            gen_best,
            gen_avg,
            self.best_length,
            self.stale_epochs,
        )
        return costs, probs

    def check_termination(self) -> Optional[str]:
        cfg = self.cfg
        if self._stop_requested:
            return "stop_requested"
        if cfg.target_distance is not None and self.best_length <= cfg.target_distance:
            return "target_distance"
        if cfg.stagnation_limit is not None and self.stale_epochs >= cfg.stagnation_limit:
            return "stagnation"
        if cfg.max_epochs is not None and len(self.reporter) >= cfg.max_epochs:
            return "max_epochs"
        return None

    def _checked(self, chromosome: Tour, operator: str) -> Tour:
        if not is_permutation(chromosome, self.num_cities):
            raise InvariantViolation(operator, epoch=self.epoch, chromosome=chromosome)
        return chromosome

    def reproduce(self, costs: Sequence[float], probs: np.ndarray) -> List[Tour]:
        children: List[Tour] = []
        if self.cfg.elitism:
            children.append(self.population[int(np.argmin(costs))])
        parents = self.population.chromosomes
        while len(children) < self.cfg.population_size:
            p1 = select_parent(parents, probs, self.rng)
            p2 = select_parent(parents, probs, self.rng)
            child = self._checked(self.crossover(p1, p2, self.rng), self.crossover.__name__)
            child = self._checked(mutate(child, self.cfg.mutation_rate, self.rng), "swap_mutation")
            children.append(child)
        return children

    def step(self) -> bool:
        """Run one epoch. Returns False once a termination criterion has fired."""
        if self.finished:
            return False
        costs, probs = self.evaluate()
        reason = self.check_termination()
        if reason is not None:
            self.stop_reason = reason
            logger.info(
                "stopped after %d epochs (%s): best=%.4f", len(self.reporter), reason, self.best_length
            )
            return False
        self.population = pop_store.replace(self.population, self.reproduce(costs, probs))
        return True

    def run(self) -> SolveResult:
        while self.step():
            pass
        return self.result()

    def best(self) -> Tuple[Optional[Tour], float]:
        return self.best_tour, self.best_length

    def result(self) -> SolveResult:
        return SolveResult(
            tour=list(self.best_tour) if self.best_tour is not None else [],
            length=self.best_length,
            solver_name=self.solver_name,
            optimum=self.optimum,
            history=self.reporter.history(),
            stop_reason=self.stop_reason or "",
        )
