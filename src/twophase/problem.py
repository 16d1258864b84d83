"""Input validation and assembly of solver matrices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .errors import InvalidInputError


def as_matrix(rows) -> np.ndarray:
    """Copy `rows` into an owned float64 tableau buffer.

    Row 0 is the objective row and the last column holds the RHS. Raises
    InvalidInputError for anything that cannot be read as a rectangular,
    finite matrix with at least one constraint row and one variable column.
    """
    if rows is None:
        raise InvalidInputError("Input matrix must not be None")
    if not isinstance(rows, np.ndarray):
        rows = list(rows)
        if not rows:
            raise InvalidInputError("Input matrix must not be empty")
        widths = set()
        for i, row in enumerate(rows):
            try:
                widths.add(len(row))
            except TypeError:
                raise InvalidInputError(f"Row {i} is not a sequence") from None
        if len(widths) != 1:
            raise InvalidInputError(f"All rows must have the same length, got {sorted(widths)}")
    try:
        matrix = np.array(rows, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Input matrix is not numeric: {e}") from e
    if matrix.ndim != 2:
        raise InvalidInputError(f"Input matrix must be two-dimensional, got {matrix.ndim} dimensions")
    if matrix.shape[0] < 2:
        raise InvalidInputError("Should have at least two rows")
    if matrix.shape[1] < 2:
        raise InvalidInputError("Each row needs at least one coefficient and a RHS value")
    if not np.all(np.isfinite(matrix)):
        raise InvalidInputError("Input matrix contains NaN or infinite values")
    return np.ascontiguousarray(matrix)


@dataclass
class LP:
    """maximize c.x subject to A x = b, x >= 0."""
    c: List[float]
    A: List[List[float]]
    b: List[float]

    def to_matrix(self) -> np.ndarray:
        # objective row is stored negated: z - c.x = 0
        m, n = len(self.A), len(self.c)
        if m == 0:
            raise InvalidInputError("At least one constraint is required")
        if len(self.b) != m:
            raise InvalidInputError(f"Expected {m} RHS values, got {len(self.b)}")
        for i, row in enumerate(self.A):
            if len(row) != n:
                raise InvalidInputError(f"Constraint {i + 1} has {len(row)} coefficients, expected {n}")
        rows: List[Sequence[float]] = [list(self.c) + [0.0]]
        rows += [list(row) + [rhs] for row, rhs in zip(self.A, self.b)]
        matrix = as_matrix(rows)
        matrix[0, :-1] *= -1.0
        return matrix
