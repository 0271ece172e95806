"""
Synthetic observation matrices for examples and tests.

Every generator takes an explicit numpy.random.Generator so results are
reproducible and no global random state is touched:

    rng = np.random.default_rng(42)
    obs = linear_observations(rng, [1.0, 2.0, -0.5], rows=50, noise=0.1)

Reference dataset:
    small_example: the 5 x 3 matrix used throughout the documentation
"""

from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import DimensionError

# Two predictors + response; y is close to, but not exactly, x1 + x2
small_example = np.array([
    [1.0, 1.0, 2.0],
    [2.0, 1.0, 3.0],
    [3.0, 2.0, 5.0],
    [4.0, 2.0, 6.0],
    [5.0, 3.0, 9.0],
])


def random_observations(
    rng: np.random.Generator,
    rows: int,
    cols: int,
    scale: float = 100.0,
) -> NDArray[np.float64]:
    """Uniform values in [0, scale), shape (rows, cols)."""
    if rows < 0 or cols < 0:
        raise DimensionError(f"shape must be non-negative, got ({rows}, {cols})")
    return rng.random((rows, cols)) * scale


def linear_observations(
    rng: np.random.Generator,
    coefficients: Sequence[float] | NDArray[Any],
    rows: int,
    noise: float = 0.0,
) -> NDArray[np.float64]:
    """
    Observations whose response follows a known linear model.

    Predictors are standard normal; the response is
    a0 + a1*x1 + ... + ak*xk plus Gaussian noise with standard deviation
    `noise`. With noise=0 the relationship is exact.

    Args:
        rng: Random generator
        coefficients: [a0, a1, ..., ak]; at least an intercept and one slope
        rows: Number of observations
        noise: Noise standard deviation

    Returns:
        rows x (k + 1) matrix; the last column is the response
    """
    coef = np.asarray(coefficients, dtype=np.float64)
    if coef.ndim != 1 or coef.size < 2:
        raise DimensionError(
            f"coefficients: need intercept and at least one slope, got shape {coef.shape}"
        )

    k = coef.size - 1
    x = rng.standard_normal((rows, k))
    y = coef[0] + x @ coef[1:]
    if noise > 0:
        y = y + rng.standard_normal(rows) * noise
    return np.column_stack([x, y])


def to_csv_text(observations: NDArray[Any], precision: int = 6) -> str:
    """Render observations as headerless CSV, one row per line."""
    arr = np.asarray(observations, dtype=np.float64)
    if arr.ndim != 2:
        raise DimensionError(f"observations: expected 2D array, got {arr.ndim}D")
    return "".join(
        ",".join(f"{v:.{precision}f}" for v in row) + "\n" for row in arr
    )
