"""Tableau pivot engine shared by both simplex phases.

The tableau is kept in canonical form for a maximization problem:

- row 0 is the objective row, rows 1..m are constraints;
- the last column is the right-hand side;
- every constraint row has one basic column that is 1 in that row and 0 in
  all other constraint rows.

An objective row without negative entries (RHS excluded) is optimal.
"""

from __future__ import annotations

from typing import List, Optional
import logging

import numpy as np

from .errors import InternalInvariantError, IterationLimitError, UnboundedError
from .numeric import EPS, SIMPLEX_PRECISION, fmt_num, is_negligible, is_one, is_positive, is_zero, normalize

logger = logging.getLogger(__name__)

PIVOT_RULES = ("dantzig", "bland")


class Tableau:
    def __init__(self, T: np.ndarray, var_names: Optional[List[str]] = None,
                 precision: int = SIMPLEX_PRECISION, pivot_rule: str = "dantzig", phase: str = ""):
        # T is used as the working buffer and mutated in place; callers copy first
        if pivot_rule not in PIVOT_RULES:
            raise ValueError(f"pivot_rule must be one of {', '.join(PIVOT_RULES)}")
        self.T = T
        self.rows, self.cols = T.shape
        self.m = self.rows - 1              # number of constraint rows
        self.num_vars = self.cols - 1       # number of variable columns
        self.rhs = self.cols - 1            # index of the RHS column
        self.var_names = var_names[:] if var_names else [f"x{j+1}" for j in range(self.num_vars)]
        self.precision = precision
        self.pivot_rule = pivot_rule
        self.phase = phase
        self.iter = 0

    @property
    def objective_value(self) -> float:
        return float(self.T[0, self.rhs])

    def is_optimal(self) -> bool:
        return not np.any(self.T[0, :self.rhs] < -EPS)

    def choose_entering(self) -> Optional[int]:
        """Column with the most negative objective entry, or None if optimal.

        Ties keep the leftmost column. Under Bland's rule the leftmost
        negative column is taken regardless of magnitude.
        """
        obj_row = self.T[0, :self.rhs]
        candidates = np.flatnonzero(obj_row < -EPS)
        if candidates.size == 0:
            return None
        if self.pivot_rule == "bland":
            return int(candidates[0])
        best_j = None
        best_val = 0.0
        for j in candidates:
            if best_j is None or -obj_row[j] > best_val:
                best_val = -obj_row[j]
                best_j = int(j)
        return best_j

    def choose_leaving(self, enter_j: int) -> int:
        """Minimum-ratio test over the rows with a positive entry in enter_j.

        The first row reaching the minimum wins. Under Bland's rule rows tied
        on the ratio are resolved by the smallest basic column instead.
        """
        ratios = []
        best_i = None
        best_ratio = 0.0
        for i in range(1, self.rows):
            aij = self.T[i, enter_j]
            if not is_positive(aij):
                continue
            ratio = self.T[i, self.rhs] / aij
            ratios.append((i, ratio))
            if best_i is None or ratio < best_ratio:
                best_ratio = ratio
                best_i = i
        if best_i is None:
            raise UnboundedError(enter_j, self.phase)
        if self.pivot_rule == "bland":
            ties = [i for i, ratio in ratios if is_zero(ratio - best_ratio, self.precision)]
            if len(ties) > 1:
                return min(ties, key=self.basic_column)
        return best_i

    def pivot(self, row: int, col: int):
        piv = self.T[row, col]
        if is_negligible(piv):
            raise InternalInvariantError(row, f"Zero pivot encountered at row {row}, column {col}")
        self.T[row, :] /= piv
        for i in range(self.rows):
            if i == row:
                continue
            factor = -self.T[i, col]
            if factor == 0:
                continue
            self.T[i, :] += self.T[row, :] * factor

    def solve(self, max_iterations: Optional[int] = None) -> int:
        """Pivot until optimal and return the number of pivots made.

        Raises UnboundedError when no row bounds the entering column and
        IterationLimitError when max_iterations pivots did not suffice.
        """
        steps = 0
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", self.render(f"{self.phase} initial tableau"))
        while True:
            enter_j = self.choose_entering()
            if enter_j is None:
                break
            if max_iterations is not None and steps >= max_iterations:
                raise IterationLimitError(max_iterations, self.phase)
            leave_i = self.choose_leaving(enter_j)
            self.iter += 1
            steps += 1
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s iteration %d: %s enters at row %d", self.phase, self.iter,
                             self.var_names[enter_j], leave_i)
                logger.debug("%s", self.render(f"Iteration {self.iter}", enter_j=enter_j, leave_i=leave_i))
            self.pivot(leave_i, enter_j)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", self.render(f"{self.phase} final tableau (iteration {self.iter})"))
        return steps

    def _find_basic(self, row: int) -> Optional[int]:
        for col in range(self.num_vars):
            if not is_one(self.T[row, col], self.precision):
                continue
            others = np.delete(self.T[1:, col], row - 1)
            if not np.any(normalize(others, self.precision) != 0):
                return col
        return None

    def basic_column(self, row: int) -> int:
        """Column of the basic variable of constraint row `row`.

        Only constraint rows are inspected, so the lookup also works while
        the objective row is still being brought into canonical form.
        """
        col = self._find_basic(row)
        if col is None:
            raise InternalInvariantError(row)
        return col

    def is_redundant(self, row: int) -> bool:
        return not np.any(np.abs(self.T[row, :]) > EPS)

    def basis(self) -> List[Optional[int]]:
        # None marks an all-zero row
        return [None if self.is_redundant(i) else self.basic_column(i) for i in range(1, self.rows)]

    def extract_solution(self) -> np.ndarray:
        """One value per variable column followed by the objective value."""
        values = np.zeros(self.cols)
        values[-1] = self.T[0, self.rhs]
        for i in range(1, self.rows):
            if self.is_redundant(i):
                continue
            values[self.basic_column(i)] = self.T[i, self.rhs]
        return values

    def render(self, title: str = "", enter_j: Optional[int] = None, leave_i: Optional[int] = None) -> str:
        title = title or f"Iteration {self.iter}"
        headers = [""] + self.var_names + ["RHS", "BV", "Ratio"]

        samples = headers[:]
        for i in range(self.rows):
            samples.extend(fmt_num(v) for v in self.T[i, :])
        colw = max(6, max(len(s) for s in samples) + 2)

        lines = [title, " ".join(f"{h:>{colw}}" for h in headers), "-" * (len(headers) * (colw + 1))]
        for i in range(self.rows):
            cells = ["Z" if i == 0 else ""]
            for j in range(self.num_vars):
                val = fmt_num(self.T[i, j])
                if i == leave_i and j == enter_j:
                    val = f"*{val}"
                cells.append(val)
            cells.append(fmt_num(self.T[i, self.rhs]))
            if i == 0:
                cells.extend(["Z", ""])
            else:
                basic = self._find_basic(i)
                cells.append(self.var_names[basic] if basic is not None else "-")
                ratio = ""
                if enter_j is not None and is_positive(self.T[i, enter_j]):
                    ratio = fmt_num(self.T[i, self.rhs] / self.T[i, enter_j])
                cells.append(ratio)
            lines.append(" ".join(f"{c:>{colw}}" for c in cells))
        return "\n".join(lines)

    def __str__(self):
        return self.render()
