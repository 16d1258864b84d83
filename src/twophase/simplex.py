"""
Two-phase simplex solver for standard-form maximization problems.

Input contract (programmatic API):
- matrix: rows of floats, row 0 the objective row in tableau form (the
  negated objective coefficients, i.e. z - c.x = 0), rows 1..m the equality
  constraints; the last column of every row is the RHS.
- every variable is implicitly non-negative.

Phase one adds an artificial variable per constraint and maximizes minus
their sum. A zero optimum proves feasibility; the reduced constraint rows
then seed phase two on the original objective.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

import numpy as np

from .errors import InfeasibleError, InvalidInputError
from .numeric import SIMPLEX_PRECISION, fmt_num, is_negligible, is_zero
from .problem import as_matrix
from .tableau import PIVOT_RULES, Tableau

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveOptions:
    precision: int = SIMPLEX_PRECISION
    pivot_rule: str = "dantzig"  # dantzig | bland
    max_iterations: Optional[int] = None  # per phase, None = no cap

    def __post_init__(self):
        if self.pivot_rule not in PIVOT_RULES:
            raise ValueError(f"pivot_rule must be one of {', '.join(PIVOT_RULES)}")
        if self.precision < 0:
            raise ValueError("precision must be non-negative")
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative")


@dataclass(frozen=True)
class SimplexResult:
    status: str  # optimal | infeasible
    optimal_value: Optional[float]
    solution: Optional[Tuple[float, ...]]  # one value per variable column, then the objective value
    iterations: Tuple[int, int]  # phase one, phase two
    tableau: np.ndarray = field(repr=False, compare=False)
    details: Dict[str, object] = field(default_factory=dict, compare=False)

    @property
    def feasible(self) -> bool:
        return self.status == "optimal"

    @property
    def values(self) -> Optional[Tuple[float, ...]]:
        return None if self.solution is None else self.solution[:-1]

    def raise_for_status(self) -> "SimplexResult":
        if not self.feasible:
            raise InfeasibleError("No feasible solution (phase one optimum is not zero)")
        return self


def build_phase_one_tableau(matrix: np.ndarray, options: SolveOptions) -> Tableau:
    """Augment `matrix` with one artificial column per constraint row.

    Layout: structural columns, artificial columns a1..am, RHS. The objective
    row costs 1 on every artificial; each constraint row has its own
    artificial set to 1, making the artificials the starting basis.
    """
    num_rows, width = matrix.shape
    rhs_col = width - 1
    num_cols = width + num_rows - 1
    T = np.zeros((num_rows, num_cols))
    # set all artificial coefficients to 1 for the objective function
    T[0, rhs_col:num_cols - 1] = 1.0
    for y in range(1, num_rows):
        # the artificial basis must start non-negative
        sign = -1.0 if matrix[y, rhs_col] < 0 else 1.0
        T[y, :rhs_col] = matrix[y, :rhs_col] * sign
        T[y, -1] = matrix[y, rhs_col] * sign  # move RHS to the end
        T[y, rhs_col + y - 1] = 1.0
    names = [f"x{j+1}" for j in range(rhs_col)] + [f"a{i}" for i in range(1, num_rows)]
    return Tableau(T, names, precision=options.precision, pivot_rule=options.pivot_rule, phase="phase one")


def reduce_phase_one_objective(tableau: Tableau):
    """Subtract every constraint row from the objective row.

    This zeroes the artificial costs so the objective row is canonical for
    the artificial basis.
    """
    total = np.zeros(tableau.cols)
    for i in range(1, tableau.rows):
        total += tableau.T[i, :]
    tableau.T[0, :] -= total


def drive_out_artificials(tableau: Tableau, num_structural: int) -> List[int]:
    """Replace artificial basic variables left at level zero after phase one.

    Returns the constraint rows whose structural part vanished; those
    constraints are linear combinations of the others.
    """
    redundant = []
    for i in range(1, tableau.rows):
        if tableau.basic_column(i) < num_structural:
            continue
        for j in range(num_structural):
            if not is_negligible(tableau.T[i, j]):
                logger.debug("Pivoting artificial out of row %d on %s", i, tableau.var_names[j])
                tableau.pivot(i, j)
                break
        else:
            logger.warning("Constraint row %d is redundant and carries no basic variable", i)
            redundant.append(i)
    return redundant


def transfer_basis(phase_one: Tableau, matrix: np.ndarray):
    """Copy the reduced constraint rows into `matrix`, dropping artificials."""
    rhs_col = matrix.shape[1] - 1
    for y in range(1, matrix.shape[0]):
        matrix[y, :rhs_col] = phase_one.T[y, :rhs_col]
        matrix[y, rhs_col] = phase_one.T[y, -1]


def canonicalize_phase_two(tableau: Tableau):
    """Eliminate the basic columns from the original objective row."""
    obj = tableau.T[0, :]
    for i in range(1, tableau.rows):
        if tableau.is_redundant(i):
            continue
        col = tableau.basic_column(i)
        factor = -obj[col]
        if factor == 0:
            continue
        obj += tableau.T[i, :] * factor


def _frozen(T: np.ndarray) -> np.ndarray:
    out = T.copy()
    out.setflags(write=False)
    return out


def _check_writable(matrix):
    if isinstance(matrix, np.ndarray):
        if not matrix.flags.writeable or matrix.ndim != 2:
            raise InvalidInputError("in_place needs a writable two-dimensional array")
        return
    if isinstance(matrix, (str, bytes)) or not all(isinstance(row, MutableSequence) for row in matrix):
        raise InvalidInputError("in_place needs an ndarray or mutable rows")


def _write_back(target, source: np.ndarray):
    if isinstance(target, np.ndarray):
        target[...] = source
        return
    for row, values in zip(target, source):
        row[:] = values.tolist()


def maximize(matrix, options: Optional[SolveOptions] = None, *, in_place: bool = False) -> SimplexResult:
    """Solve the maximization problem described by `matrix`.

    The caller's matrix is left untouched unless `in_place` is set, in which
    case it receives the final phase-two tableau (nothing is written when
    the problem is infeasible).

    Raises InvalidInputError for malformed input, UnboundedError when the
    objective grows without bound and IterationLimitError when
    options.max_iterations is exceeded. Infeasibility is reported through
    the result status.
    """
    options = options or SolveOptions()
    working = as_matrix(matrix)
    if in_place:
        _check_writable(matrix)
    num_structural = working.shape[1] - 1

    phase_one = build_phase_one_tableau(working, options)
    reduce_phase_one_objective(phase_one)
    iters1 = phase_one.solve(options.max_iterations)
    logger.info("Phase one finished after %d iterations with artificial cost %s",
                iters1, fmt_num(phase_one.objective_value))
    if not is_zero(phase_one.objective_value, options.precision):
        logger.info("Problem is infeasible")
        return SimplexResult(
            status="infeasible",
            optimal_value=None,
            solution=None,
            iterations=(iters1, 0),
            tableau=_frozen(phase_one.T),
        )

    redundant = drive_out_artificials(phase_one, num_structural)
    transfer_basis(phase_one, working)

    phase_two = Tableau(working, precision=options.precision, pivot_rule=options.pivot_rule, phase="phase two")
    canonicalize_phase_two(phase_two)
    iters2 = phase_two.solve(options.max_iterations)
    values = phase_two.extract_solution()
    logger.info("Phase two finished after %d iterations with objective %s", iters2, fmt_num(values[-1]))

    if in_place:
        _write_back(matrix, working)

    # a nonbasic column with zero reduced cost means the optimum is not unique
    basis = phase_two.basis()
    basic_cols = {col for col in basis if col is not None}
    alt_vars = [phase_two.var_names[j] for j in range(phase_two.num_vars)
                if j not in basic_cols and is_negligible(phase_two.T[0, j])]
    details = {
        "basis": [None if col is None else phase_two.var_names[col] for col in basis],
        "redundant_rows": redundant,
        "alternate_optimal": len(alt_vars) > 0,
        "alt_zero_rc_vars": alt_vars,
        "var_names": phase_two.var_names,
    }
    return SimplexResult(
        status="optimal",
        optimal_value=float(values[-1]),
        solution=tuple(float(v) for v in values),
        iterations=(iters1, iters2),
        tableau=_frozen(working),
        details=details,
    )


class SimplexMaximizer:
    """Object interface over maximize().

    The matrix is validated at construction. solve() returns True when a
    feasible optimum was found and leaves the solution in `solution`, or
    False with `solution` cleared.
    """

    SimplexPrecision = SIMPLEX_PRECISION

    def __init__(self, input_matrix, options: Optional[SolveOptions] = None, in_place: bool = False):
        self.matrix = as_matrix(input_matrix)
        if in_place:
            _check_writable(input_matrix)
        self._input = input_matrix
        self.options = options or SolveOptions()
        self.in_place = in_place
        self.result: Optional[SimplexResult] = None

    @property
    def solution(self) -> Optional[Tuple[float, ...]]:
        return None if self.result is None else self.result.solution

    def solve(self) -> bool:
        target = self._input if self.in_place else self.matrix
        self.result = maximize(target, self.options, in_place=self.in_place)
        return self.result.feasible
