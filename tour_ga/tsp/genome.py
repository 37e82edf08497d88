import random
from typing import Callable, Dict, Sequence

from ..errors import InvalidInput
from .base import Tour


Crossover = Callable[[Sequence[int], Sequence[int], random.Random], Tour]


def random_permutation(n: int, rng: random.Random) -> Tour:
    genes = list(range(n))
    rng.shuffle(genes)
    return tuple(genes)


def _cut_point(p1: Sequence[int], p2: Sequence[int], rng: random.Random) -> int:
    if len(p1) != len(p2):
        raise InvalidInput(f"parents differ in length: {len(p1)} != {len(p2)}")
    if len(p1) < 2:
        raise InvalidInput(f"crossover needs at least 2 genes, got {len(p1)}")
    return rng.randint(1, len(p1) - 1)


def order_crossover(p1: Sequence[int], p2: Sequence[int], rng: random.Random) -> Tour:
    """Single-cut Order Crossover (OX).

    The head ``p1[:c]`` is copied verbatim, the tail is the remaining genes in
    the order they appear in ``p2``.
    """
    cut = _cut_point(p1, p2, rng)
    head = list(p1[:cut])
    used = set(head)
    tail = [g for g in p2 if g not in used]
    return tuple(head + tail)


def partially_mapped_crossover(p1: Sequence[int], p2: Sequence[int], rng: random.Random) -> Tour:
    """Single-cut Partially Mapped Crossover (PMX)."""
    cut = _cut_point(p1, p2, rng)
    child = list(p1[:cut])
    segment = set(child)
    # gene of p1 at position i -> gene of p2 at position i, inside the segment
    mapping = {p1[i]: p2[i] for i in range(cut)}
    for i in range(cut, len(p1)):
        gene = p2[i]
        while gene in segment:
            gene = mapping[gene]
        child.append(gene)
    return tuple(child)


CROSSOVERS: Dict[str, Crossover] = {
    "order": order_crossover,
    "pmx": partially_mapped_crossover,
}


def swap_mutation(chromosome: Sequence[int], rng: random.Random) -> Tour:
    genes = list(chromosome)
    if len(genes) < 2:
        return tuple(genes)
    i, j = rng.sample(range(len(genes)), 2)
    genes[i], genes[j] = genes[j], genes[i]
    return tuple(genes)


def mutate(chromosome: Sequence[int], rate: float, rng: random.Random) -> Tour:
    if rng.random() < rate:
        return swap_mutation(chromosome, rng)
    return tuple(chromosome)
