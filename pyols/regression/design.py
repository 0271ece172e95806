"""
Regression Design.

Design takes an observation matrix and splits it into the design matrix X
(intercept column of ones followed by the predictors) and the response y
(the last column). It knows it's building an OLS regression; the
observation matrix doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyols.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_min_columns,
    check_more_rows_than_columns,
)


@dataclass(frozen=True)
class Design:
    """
    OLS design built from an observation matrix.

    For an r x c observation matrix:
        X: r x c, column 0 is 1.0, columns 1..c-1 are observation
           columns 0..c-2
        y: r,     observation column c-1

    Immutable after construction; observations, X and y are fresh copies
    flagged read-only.

    Construction:
        Design.from_observations(observations)   # last column is the response
    """
    _observations: NDArray[np.floating[Any]]
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int

    @classmethod
    def from_observations(cls, observations: ArrayLike) -> Design:
        """
        Build Design from an observation matrix.

        Args:
            observations: r x c numeric matrix; the last column is the
                response, the others are predictors

        Returns:
            Design ready for regression

        Raises:
            ValidationError: If the input is non-numeric or non-finite
            DimensionError: If the input is not 2D, has fewer than 2
                columns, or has no more rows than columns
        """
        data = check_array(observations, 'observations')
        check_2d(data, 'observations')
        check_min_columns(data, 2, 'observations')
        check_finite(data, 'observations')
        check_more_rows_than_columns(data, 'observations')

        n, c = data.shape
        X = np.hstack([np.ones((n, 1), dtype=np.float64), data[:, :c - 1]])
        y = data[:, c - 1].copy()
        data.setflags(write=False)
        X.setflags(write=False)
        y.setflags(write=False)

        return cls(_observations=data, _X=X, _y=y, _n=n, _p=c)

    # === Properties ===

    @property
    def observations(self) -> NDArray[np.floating[Any]]:
        """Validated observation matrix (n x p), last column is the response."""
        return self._observations

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix with intercept column (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def Y(self) -> NDArray[np.floating[Any]]:
        """Response as a column matrix (n x 1)."""
        return self._y.reshape(-1, 1)

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of parameters (intercept + predictors)."""
        return self._p

    @property
    def n_predictors(self) -> int:
        return self._p - 1

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y
