import numpy as np
import pytest

from twophase.errors import InvalidInputError
from twophase.problem import LP, as_matrix


def test_as_matrix_copies_into_float_buffer():
    rows = [[-1, 0], [1, 5]]
    matrix = as_matrix(rows)
    assert matrix.dtype == np.float64
    assert matrix.flags.c_contiguous
    matrix[1, 1] = 7.0
    assert rows[1][1] == 5


def test_as_matrix_copies_arrays():
    source = np.array([[-1.0, 0.0], [1.0, 5.0]])
    matrix = as_matrix(source)
    matrix[0, 0] = 3.0
    assert source[0, 0] == -1.0


@pytest.mark.parametrize(
    "rows, message",
    [
        (None, "None"),
        ([], "empty"),
        ([[1.0, 2.0]], "at least two rows"),
        ([[1.0], [2.0]], "at least one coefficient"),
        ([[1.0, 2.0], [1.0, 2.0, 3.0]], "same length"),
        ([1.0, 2.0], "not a sequence"),
        ([["a", 1.0], [1.0, 2.0]], "not numeric"),
        ([[float("nan"), 1.0], [1.0, 2.0]], "NaN or infinite"),
        ([[float("inf"), 1.0], [1.0, 2.0]], "NaN or infinite"),
        (np.zeros((2, 2, 2)), "two-dimensional"),
    ],
)
def test_as_matrix_rejects(rows, message):
    with pytest.raises(InvalidInputError, match=message):
        as_matrix(rows)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        as_matrix([[1.0, 2.0]])


def test_lp_to_matrix_negates_objective():
    lp = LP(c=[3, 2], A=[[1, 1], [1, 3]], b=[4, 6])
    expected = np.array([[-3.0, -2.0, 0.0], [1.0, 1.0, 4.0], [1.0, 3.0, 6.0]])
    assert np.array_equal(lp.to_matrix(), expected)


@pytest.mark.parametrize(
    "lp",
    [
        LP(c=[1.0], A=[], b=[]),
        LP(c=[1.0, 2.0], A=[[1.0, 1.0]], b=[1.0, 2.0]),
        LP(c=[1.0, 2.0], A=[[1.0]], b=[1.0]),
    ],
)
def test_lp_shape_mismatch(lp):
    with pytest.raises(InvalidInputError):
        lp.to_matrix()
