import random
from typing import List, Sequence, Tuple

import networkx as nx
import numpy as np
import torch

from .errors import FitnessNormalizationError
from .tsp.base import Tour


PROBABILITY_TOLERANCE = 1e-9
# Relative spread below which a generation's costs count as all equal.
COST_TIE_TOLERANCE = 1e-9


def distance_matrix(graph: nx.Graph, device=None) -> torch.Tensor:
    n = graph.number_of_nodes()
    device = device or torch.device("cpu")
    mat = torch.zeros((n, n), dtype=torch.float64, device=device)
    edges = list(graph.edges(data="weight", default=0.0))
    if not edges:
        return mat
    rows = []
    cols = []
    vals = []
    for u, v, w in edges:
        rows.extend([u, v])
        cols.extend([v, u])
        vals.extend([w, w])
    rows = torch.tensor(rows, device=device, dtype=torch.long)
    cols = torch.tensor(cols, device=device, dtype=torch.long)
    mat[rows, cols] = torch.tensor(vals, device=device, dtype=torch.float64)
    return mat


def tour_lengths(dist: torch.Tensor, chromosomes: Sequence[Sequence[int]]) -> List[float]:
    """Closed-tour length of every chromosome in one batched lookup."""
    idx = torch.tensor([list(c) for c in chromosomes], device=dist.device, dtype=torch.long)
    a = idx
    b = idx.roll(-1, dims=1)
    return dist[a, b].sum(dim=1).tolist()


def selection_probabilities(costs: Sequence[float]) -> np.ndarray:
    costs = np.asarray(costs, dtype=np.float64)
    if costs.size == 0:
        raise FitnessNormalizationError("cannot normalize fitness of an empty generation")
    if not np.all(np.isfinite(costs)):
        raise FitnessNormalizationError(f"non-finite tour cost in generation: {costs.tolist()}")
    worst = costs.max()
    if np.ptp(costs) <= COST_TIE_TOLERANCE * max(1.0, abs(worst)):
        # Every tour costs the same up to rounding, e.g. rotations of one tour.
        probs = np.full(costs.size, 1.0 / costs.size)
    else:
        fitness = worst - costs
        probs = fitness / fitness.sum()
    if abs(probs.sum() - 1.0) > PROBABILITY_TOLERANCE:
        raise FitnessNormalizationError(
            f"selection probabilities sum to {probs.sum()!r}, expected 1"
        )
    return probs


def select_parent(population: Sequence[Tour], probs: Sequence[float], rng: random.Random) -> Tour:
    idx = rng.choices(range(len(population)), weights=probs, k=1)[0]
    return population[idx]


def summarize(costs: Sequence[float]) -> Tuple[float, float]:
    if not costs:
        return float("inf"), float("inf")
    return float(min(costs)), float(sum(costs) / len(costs))
