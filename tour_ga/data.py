import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import tsplib95
from tsplib95.exceptions import TsplibError

from .errors import InvalidInput
from .tsp.base import City, build_graph, tour_length


logger = logging.getLogger(__name__)


@dataclass
class Instance:
    name: str
    path: Optional[Path]
    cities: List[City]
    optimum: Optional[float]


def parse_cities(text: str) -> List[City]:
    """Parse ``"x,y x,y ..."`` (whitespace or ``;`` separated pairs)."""
    cities = []
    for idx, token in enumerate(text.replace(";", " ").split()):
        parts = token.split(",")
        if len(parts) != 2:
            raise InvalidInput(f"city {idx}: expected 'x,y', got {token!r}")
        try:
            cities.append(City(float(parts[0]), float(parts[1])))
        except ValueError:
            raise InvalidInput(f"city {idx}: non-numeric coordinate in {token!r}") from None
    return cities


def _parse_tsplib(path: Path):
    try:
        return tsplib95.load(path)
    except (OSError, ValueError, TsplibError) as exc:
        raise InvalidInput(f"cannot read TSPLIB file {path}: {exc}") from exc


def _load_optimum(cities: List[City], node_ids: List[int], path: Path) -> Optional[float]:
    """Length of the reference tour stored beside ``path``, if there is one.

    Looks for ``<name>.opt.tour`` next to the instance, then under ``solutions/``.
    """
    index = {node: i for i, node in enumerate(node_ids)}
    for candidate in (path.with_suffix(".opt.tour"), path.parent / "solutions" / f"{path.stem}.opt.tour"):
        if not candidate.is_file():
            continue
        tour_file = _parse_tsplib(candidate)
        if not tour_file.tours:
            logger.warning("%s has no tour section, ignoring", candidate)
            continue
        try:
            tour = [index[n] for n in tour_file.tours[0]]
        except KeyError as exc:
            logger.warning("%s references unknown node %s, ignoring", candidate, exc)
            continue
        # Scored with the same exact Euclidean model as the search, not TSPLIB's rounded weights.
        return tour_length(build_graph(cities), tour)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    problem = _parse_tsplib(path)
    coords = dict(problem.node_coords)
    if not coords:
        raise InvalidInput(f"{path} has no NODE_COORD_SECTION")
    node_ids = sorted(coords)
    cities = []
    for node in node_ids:
        xy = coords[node]
        if len(xy) != 2:
            raise InvalidInput(f"{path}: node {node} is not a 2D coordinate")
        cities.append(City(float(xy[0]), float(xy[1])))
    if len(cities) < 2:
        raise InvalidInput(f"{path}: at least 2 cities are required, got {len(cities)}")
    optimum = _load_optimum(cities, node_ids, path)
    logger.info("loaded %s: %d cities, optimum=%s", problem.name, len(cities), optimum)
    return Instance(name=problem.name or path.stem, path=path, cities=cities, optimum=optimum)
