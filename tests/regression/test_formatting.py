"""
Tests for the column text grammar (regression/formatting.py).
"""

import re

import numpy as np
import pytest

from pyols.core.exceptions import DimensionError, NumericInstabilityError
from pyols.regression.formatting import format_column, format_value, parse_column

_NUMBER = re.compile(r"-?\d+\.(\d+)")


class TestFormatColumn:

    def test_documented_example(self):
        assert format_column([1, -2.5, 10]) == (
            "[[ 1.00000],\n"
            " [-2.50000],\n"
            " [10.00000]]"
        )

    def test_single_value(self):
        assert format_column([3.14159265]) == "[[3.14159]]"

    def test_empty(self):
        assert format_column([]) == "[]"

    def test_column_matrix_accepted(self):
        assert format_column(np.array([[1.0], [2.0]])) == "[[1.00000],\n [2.00000]]"

    def test_rounding(self):
        assert format_column([0.123456, 0.000004]) == "[[0.12346],\n [0.00000]]"

    def test_negative_zero_normalized(self):
        assert format_column([-0.0, -1e-9]) == "[[0.00000],\n [0.00000]]"

    def test_custom_precision(self):
        assert format_column([1.0, 2.0], precision=2) == "[[1.00],\n [2.00]]"

    def test_every_value_has_five_decimals(self, rng):
        values = rng.standard_normal(20) * 10.0 ** rng.integers(-3, 6, size=20)
        text = format_column(values)
        numbers = _NUMBER.findall(text)
        assert len(numbers) == 20
        assert all(len(decimals) == 5 for decimals in numbers)

    def test_rows_right_aligned(self):
        lines = format_column([1.0, -123.5, 7.25]).split("\n")
        closing = [line.index("]") for line in lines]
        assert len(set(closing)) == 1

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(NumericInstabilityError) as exc_info:
            format_column([1.0, bad])
        assert exc_info.value.indices == (1,)

    def test_matrix_rejected(self):
        with pytest.raises(DimensionError):
            format_column(np.ones((2, 2)))


class TestFormatValue:

    def test_plain(self):
        assert format_value(2.0) == "2.00000"

    def test_negative(self):
        assert format_value(-2.0) == "-2.00000"


class TestParseColumn:

    def test_inverse_of_format(self):
        values = np.array([0.5, -12.25, 300.0])
        np.testing.assert_array_equal(parse_column(format_column(values)), values)

    def test_empty(self):
        assert parse_column("[]").size == 0

    def test_rejects_missing_brackets(self):
        with pytest.raises(ValueError, match="brackets"):
            parse_column("1.00000")

    def test_rejects_malformed_row(self):
        with pytest.raises(ValueError, match="row 1"):
            parse_column("[[1.00000],\n [abc]]")
