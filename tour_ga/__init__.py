"""
Genetic algorithm for permutation problems, instantiated for the Euclidean TSP.
"""

from .errors import (
    FitnessNormalizationError,
    GAError,
    InvalidConfiguration,
    InvalidInput,
    InvariantViolation,
)
from .evolutionary import EvolutionConfig, GeneticSearch
from .reporting import EpochRecord, RunReporter
from .tsp.base import City, SolveResult

__all__ = [
    "City",
    "EpochRecord",
    "EvolutionConfig",
    "FitnessNormalizationError",
    "GAError",
    "GeneticSearch",
    "InvalidConfiguration",
    "InvalidInput",
    "InvariantViolation",
    "RunReporter",
    "SolveResult",
    "data",
    "evaluation",
    "evolutionary",
    "population",
]
