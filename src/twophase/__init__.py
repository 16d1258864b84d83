"""Two-phase tableau simplex for standard-form maximization problems."""

from .errors import (
    ErrorKind,
    InfeasibleError,
    InternalInvariantError,
    InvalidInputError,
    IterationLimitError,
    SimplexError,
    UnboundedError,
)
from .numeric import SIMPLEX_PRECISION, normalize
from .problem import LP, as_matrix
from .simplex import SimplexMaximizer, SimplexResult, SolveOptions, maximize
from .tableau import Tableau

__all__ = [
    "ErrorKind",
    "InfeasibleError",
    "InternalInvariantError",
    "InvalidInputError",
    "IterationLimitError",
    "LP",
    "SIMPLEX_PRECISION",
    "SimplexError",
    "SimplexMaximizer",
    "SimplexResult",
    "SolveOptions",
    "Tableau",
    "UnboundedError",
    "as_matrix",
    "maximize",
    "normalize",
]
