from typing import Optional, Sequence


class GAError(Exception):
    """Base class for errors raised by the GA engine."""


class InvalidConfiguration(GAError, ValueError):
    pass


class InvalidInput(InvalidConfiguration):
    pass


class FitnessNormalizationError(GAError, ArithmeticError):
    pass


class InvariantViolation(GAError, RuntimeError):
    """A chromosome stopped being a permutation after an operator ran.

    Not recoverable: the run is aborted and no partial result is returned.
    """

    def __init__(
        self,
        operator: str,
        epoch: Optional[int] = None,
        chromosome: Sequence[int] = (),
        detail: str = "",
    ):
        self.operator = operator
        self.epoch = epoch
        self.chromosome = tuple(chromosome)
        where = f"epoch {epoch}" if epoch is not None else "setup"
        msg = detail or f"invalid chromosome {list(self.chromosome)}"
        super().__init__(f"{operator} failed at {where}: {msg}")
