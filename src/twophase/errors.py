"""Error kinds raised by the two-phase simplex solver."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    INTERNAL_INVARIANT_VIOLATION = "internal_invariant_violation"
    INVALID_INPUT = "invalid_input"
    ITERATION_LIMIT = "iteration_limit"


class SimplexError(ArithmeticError):
    """Base class for simplex solver errors."""
    kind: Optional[ErrorKind] = None


class InvalidInputError(SimplexError, ValueError):
    """The matrix handed to the solver is not a usable tableau."""
    kind = ErrorKind.INVALID_INPUT


class InfeasibleError(SimplexError):
    """The constraints admit no non-negative solution."""
    kind = ErrorKind.INFEASIBLE


class UnboundedError(SimplexError):
    """No constraint row limits the entering column."""
    kind = ErrorKind.UNBOUNDED

    def __init__(self, column: int, phase: str = ""):
        where = f" during {phase}" if phase else ""
        super().__init__(f"Objective is unbounded along column {column}{where}")
        self.column = column
        self.phase = phase


class InternalInvariantError(SimplexError):
    """The tableau lost its canonical form."""
    kind = ErrorKind.INTERNAL_INVARIANT_VIOLATION

    def __init__(self, row: int, message: str = ""):
        super().__init__(message or f"Couldn't find variable location at row {row}")
        self.row = row


class IterationLimitError(SimplexError):
    """The pivot loop ran past the configured iteration cap."""
    kind = ErrorKind.ITERATION_LIMIT

    def __init__(self, iterations: int, phase: str = ""):
        where = f" in {phase}" if phase else ""
        super().__init__(f"Iteration limit of {iterations} reached{where}")
        self.iterations = iterations
        self.phase = phase
