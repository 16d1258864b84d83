import numpy as np
import pytest

from twophase.numeric import (
    SIMPLEX_PRECISION,
    fmt_num,
    is_negligible,
    is_one,
    is_positive,
    is_zero,
    normalize,
)


def test_precision_is_four_digits():
    assert SIMPLEX_PRECISION == 4


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.23456789, 1.2345),
        (-1.23456789, -1.2345),
        (0.99999, 0.9999),  # truncation, not rounding
        (-0.00001, 0.0),
        (5.0, 5.0),
    ],
)
def test_normalize_truncates_toward_zero(value, expected):
    assert normalize(value) == expected


def test_normalize_custom_precision():
    assert normalize(1.23456, precision=2) == 1.23


def test_normalize_arrays_elementwise():
    out = normalize(np.array([1.00001, -0.00001, 2.5]))
    assert np.array_equal(out, np.array([1.0, 0.0, 2.5]))


def test_float_drift_is_absorbed():
    drift = 0.1 + 0.2 - 0.3
    assert drift != 0
    assert is_zero(drift)
    assert is_zero(-1e-17)
    assert not is_positive(-1e-13)
    assert not is_positive(1e-13)
    assert is_one(1.0 + 1e-12)


def test_signs_beyond_precision_are_kept():
    assert not is_positive(-0.001)
    assert is_positive(0.001)
    assert not is_zero(0.001)
    assert not is_one(1.001)


@pytest.mark.parametrize(
    "value, text",
    [(4.0, "4"), (0.5, "1/2"), (-2 / 3, "-2/3"), (1e-15, "0"), (float("inf"), "inf")],
)
def test_fmt_num(value, text):
    assert fmt_num(value) == text


def test_small_coefficients_keep_their_sign():
    # truncation would read these as zero
    assert is_zero(5e-5)
    assert is_positive(5e-5)
    assert not is_positive(-5e-5)
    assert not is_negligible(-5e-5)
    assert not is_negligible(5e-5)


@pytest.mark.parametrize("value", [0.0, -0.0, 1e-17, -1e-13])
def test_negligible(value):
    assert is_negligible(value)
