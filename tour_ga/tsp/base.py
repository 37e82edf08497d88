import math
from dataclasses import dataclass, field
from numbers import Real
from typing import List, Optional, Sequence, Tuple, Union

import networkx as nx

from ..errors import InvalidInput


Tour = Tuple[int, ...]


@dataclass(frozen=True)
class City:
    x: float
    y: float


Coordinate = Union[City, Sequence[float]]


def _xy(city: Coordinate) -> Tuple[float, float]:
    if isinstance(city, City):
        return city.x, city.y
    return city[0], city[1]


def distance(a: Coordinate, b: Coordinate) -> float:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return math.hypot(ax - bx, ay - by)


def _as_city(idx: int, raw) -> City:
    if isinstance(raw, City):
        raw = (raw.x, raw.y)
    try:
        values = list(raw)
    except TypeError:
        raise InvalidInput(f"city {idx} is not a coordinate pair: {raw!r}") from None
    if len(values) != 2:
        raise InvalidInput(f"city {idx} must have exactly 2 coordinates, got {len(values)}")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, Real) or not math.isfinite(v):
            raise InvalidInput(f"city {idx} has a malformed coordinate: {v!r}")
    return City(float(values[0]), float(values[1]))


def build_graph(cities: Sequence[Coordinate]) -> nx.Graph:
    """Complete undirected graph over the cities, weighted by Euclidean distance.

    Nodes are the 0-based city indices and carry their ``pos``.
    """
    points = [_as_city(i, c) for i, c in enumerate(cities)]
    if len(points) < 2:
        raise InvalidInput(f"at least 2 cities are required, got {len(points)}")
    graph = nx.Graph()
    for i, p in enumerate(points):
        graph.add_node(i, pos=p)
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            graph.add_edge(i, j, weight=distance(points[i], points[j]))
    return graph


def tour_length(graph: nx.Graph, tour: Sequence[int]) -> float:
    n = len(tour)
    if n < 2:
        raise InvalidInput(f"a tour needs at least 2 cities, got {n}")
    dist = 0.0
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += graph[a][b]["weight"]
    return float(dist)


def is_permutation(tour: Sequence[int], n: int) -> bool:
    return len(tour) == n and sorted(tour) == list(range(n))


@dataclass
class SolveResult:
    tour: List[int]
    length: float
    solver_name: str
    optimum: Optional[float] = None
    history: tuple = field(default_factory=tuple)
    stop_reason: str = ""

    @property
    def epochs(self) -> int:
        return len(self.history)

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.length - self.optimum) / self.optimum
