"""
Text rendering of coefficient and t-statistic vectors.

The two strings produced here are the externally visible output of a
regression, so the grammar is fixed:

    column := "[" row ( ",\\n " row )* "]"
    row    := "[" number "]"
    number := fixed-point value with exactly `precision` decimals
              (default 5), left-padded with spaces to the width of the
              widest entry in the column

Example, format_column([1, -2.5, 10]):

    [[ 1.00000],
     [-2.50000],
     [10.00000]]

A single value renders as "[[1.00000]]" and an empty column as "[]".
Negative zero renders as "0.00000". NaN and Inf are never rendered.
"""

import re
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyols.core.exceptions import NumericInstabilityError, DimensionError

DEFAULT_PRECISION = 5

_ROW_SEPARATOR = ",\n "
_ROW_PATTERN = re.compile(r"^\[ *(-?\d+\.\d+)\]$")


def format_value(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Fixed-point rendering of one value, without padding."""
    text = f"{value:.{precision}f}"
    if text.startswith('-') and float(text) == 0.0:
        text = text[1:]
    return text


def format_column(values: ArrayLike, precision: int = DEFAULT_PRECISION) -> str:
    """
    Render a column vector.

    Args:
        values: 1D array or k x 1 column matrix
        precision: Digits after the decimal point

    Returns:
        Bracketed text, one value per line

    Raises:
        DimensionError: If values is not a vector
        NumericInstabilityError: If any value is NaN or Inf
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr.ravel()
    if arr.ndim != 1:
        raise DimensionError(
            f"values: expected a vector or k x 1 matrix, got shape {arr.shape}"
        )

    if not np.all(np.isfinite(arr)):
        bad = [int(i) for i in np.flatnonzero(~np.isfinite(arr))]
        raise NumericInstabilityError(
            f"Cannot format non-finite values at positions {bad}.",
            quantity='values',
            indices=tuple(bad),
        )

    if arr.size == 0:
        return "[]"

    cells = [format_value(v, precision) for v in arr]
    width = max(len(c) for c in cells)
    rows = [f"[{c.rjust(width)}]" for c in cells]
    return "[" + _ROW_SEPARATOR.join(rows) + "]"


def parse_column(text: str) -> NDArray[np.floating[Any]]:
    """
    Inverse of format_column().

    Raises:
        ValueError: If text does not follow the column grammar
    """
    if not (text.startswith("[") and text.endswith("]")):
        raise ValueError("column text must be enclosed in brackets")

    body = text[1:-1]
    if body == "":
        return np.empty(0, dtype=np.float64)

    values = []
    for i, row in enumerate(body.split(_ROW_SEPARATOR)):
        match = _ROW_PATTERN.match(row)
        if match is None:
            raise ValueError(f"row {i} is malformed: {row!r}")
        values.append(float(match.group(1)))
    return np.array(values, dtype=np.float64)
