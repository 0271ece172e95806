"""
Observation matrix intake.

Turns the raw forms an observation matrix arrives in into a validated
float64 array:

    load_observations("data.csv")            # headerless delimited file
    parse_observations("1,2,3\\n4,5,6\\n")    # same, from a string
    observations_from_values(flat, 2, 3)     # row-major values + shape

Every row is one observation; the last column is the response. This
module only checks that the input is a rectangular table of finite
numbers. Regression-specific requirements (at least one predictor, more
rows than columns) belong to pyols.regression.design.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, IO, Sequence
import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import ValidationError, DimensionError
from pyols.core.validation import check_array, check_finite


def load_observations(
    source: str | Path | IO[str],
    *,
    delimiter: str = ',',
) -> NDArray[np.float64]:
    """
    Read a headerless delimited text file of numbers.

    Blank lines are skipped and whitespace around cells is ignored.

    Args:
        source: Path to the file, or an open text buffer
        delimiter: Field separator

    Returns:
        Observation matrix (rows x cols) as float64

    Raises:
        ValidationError: If the file is empty, rows have unequal length,
            or a cell is not a finite number
    """
    import pandas as pd

    name = str(source) if isinstance(source, (str, Path)) else 'observations'

    try:
        df = pd.read_csv(
            source,
            header=None,
            sep=delimiter,
            dtype=str,
            skip_blank_lines=True,
            keep_default_na=False,
            na_values=[''],
            engine='c',
        )
    except pd.errors.EmptyDataError as e:
        raise ValidationError(f"{name}: no data") from e
    except pd.errors.ParserError as e:
        raise ValidationError(f"{name}: all rows should have the same length: {e}") from e

    missing = df.isna().any(axis=1).to_numpy()
    if missing.any():
        row = int(np.flatnonzero(missing)[0])
        raise ValidationError(
            f"{name}: row {row} has {int(df.iloc[row].notna().sum())} of {df.shape[1]} fields "
            f"(missing or empty cells; all rows should have the same length)"
        )

    try:
        values = df.apply(lambda col: pd.to_numeric(col.str.strip(), errors='raise'))
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: non-numeric cell: {e}") from e

    # Every cell held text at this point, so NaN came from a marker like "nan"
    converted_nan = values.isna().to_numpy()
    if converted_nan.any():
        row, col = (int(i) for i in np.argwhere(converted_nan)[0])
        raise ValidationError(
            f"{name}: non-numeric cell {df.iat[row, col].strip()!r} "
            f"at row {row}, column {col}"
        )

    observations = check_array(values.to_numpy(), name)
    check_finite(observations, name)
    return observations


def parse_observations(text: str, *, delimiter: str = ',') -> NDArray[np.float64]:
    """Parse delimited text held in memory. See load_observations()."""
    return load_observations(io.StringIO(text), delimiter=delimiter)


def observations_from_values(
    values: Sequence[float] | NDArray[Any],
    rows: int,
    cols: int,
) -> NDArray[np.float64]:
    """
    Build an observation matrix from row-major values and an explicit shape.

    Raises:
        DimensionError: If len(values) != rows * cols or a dimension is negative
        ValidationError: If values are non-numeric or non-finite
    """
    if rows < 0 or cols < 0:
        raise DimensionError(f"shape must be non-negative, got ({rows}, {cols})")

    flat = check_array(values, 'values').ravel()
    if flat.size != rows * cols:
        raise DimensionError(
            f"values: expected {rows} * {cols} = {rows * cols} elements, got {flat.size}"
        )

    observations = flat.reshape(rows, cols)
    check_finite(observations, 'observations')
    return observations
