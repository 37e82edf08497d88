import random
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from .errors import InvariantViolation
from .tsp.base import Tour
from .tsp.genome import random_permutation


@dataclass(frozen=True)
class Population:
    """One generation of candidate tours. Never mutated; ``replace`` builds the next one."""

    chromosomes: Tuple[Tour, ...]
    epoch: int = 0

    def __len__(self) -> int:
        return len(self.chromosomes)

    def __iter__(self) -> Iterator[Tour]:
        return iter(self.chromosomes)

    def __getitem__(self, idx: int) -> Tour:
        return self.chromosomes[idx]


def initialize(size: int, n: int, rng: random.Random) -> Population:
    return Population(tuple(random_permutation(n, rng) for _ in range(size)), epoch=0)


def replace(old: Population, new_chromosomes: Sequence[Sequence[int]]) -> Population:
    if len(new_chromosomes) != len(old):
        raise InvariantViolation(
            "replace",
            epoch=old.epoch,
            detail=f"population size changed: {len(old)} -> {len(new_chromosomes)}",
        )
    return Population(tuple(tuple(c) for c in new_chromosomes), epoch=old.epoch + 1)
