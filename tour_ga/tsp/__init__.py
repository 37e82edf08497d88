from .base import City, SolveResult, Tour, build_graph, distance, is_permutation, tour_length
from .genome import (
    CROSSOVERS,
    mutate,
    order_crossover,
    partially_mapped_crossover,
    random_permutation,
    swap_mutation,
)

__all__ = [
    "City",
    "SolveResult",
    "Tour",
    "build_graph",
    "distance",
    "is_permutation",
    "tour_length",
    "CROSSOVERS",
    "mutate",
    "order_crossover",
    "partially_mapped_crossover",
    "random_permutation",
    "swap_mutation",
]
