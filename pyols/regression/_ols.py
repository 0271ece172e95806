"""
OLS estimation via the normal equations.

Both stages are written against the MatrixOps protocol so that every
backend (NumPy, PyTorch on CPU/CUDA/MPS) runs the exact same algorithm:

    split_observations:   X = [1 | predictors], Y = last column
    solve_coefficients:   β = (X'X)⁻¹ X'Y
    compute_significance: residuals, σ̂², SE(β) = sqrt(σ̂² diag((X'X)⁻¹)),
                          t = β / SE(β)

All vectors are column matrices. Nothing here mutates its inputs.
"""

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import (
    InsufficientDataError,
    NumericInstabilityError,
    SingularMatrixError,
)
from pyols.core.protocols import MatrixOps

M = TypeVar('M')

DFMethod = Literal['standard', 'legacy']

# Extra parameters subtracted by the legacy degrees-of-freedom convention
LEGACY_DF_OFFSET = 2


@dataclass(frozen=True)
class CoefficientFit(Generic[M]):
    """
    Output of the coefficient solver.

    Attributes:
        coefficients: β (p x 1); β[0] is the intercept
        xtx_inverse: (X'X)⁻¹ (p x p), reused for standard errors
        condition_number: cond(X'X)
        rank: numerical rank of X
    """
    coefficients: M
    xtx_inverse: M
    condition_number: float
    rank: int


@dataclass(frozen=True)
class Significance(Generic[M]):
    """Output of the significance calculator."""
    fitted_values: M
    residuals: M
    rss: float
    sigma_squared: float
    standard_errors: M
    t_statistics: M


def split_observations(ops: MatrixOps[M], observations: M, n_rows: int, n_cols: int) -> tuple[M, M]:
    """
    Build the design matrix and response on the ops device.

    X = [1 | observations[:, :c-1]] (n x c), Y = observations[:, c-1] (n x 1).
    Shapes are validated by Design.from_observations() beforehand.
    """
    X = ops.hstack(ops.ones(n_rows, 1), ops.column_slice(observations, 0, n_cols - 1))
    Y = ops.column_slice(observations, n_cols - 1, n_cols)
    return X, Y


def solve_coefficients(ops: MatrixOps[M], X: M, Y: M) -> CoefficientFit[M]:
    """
    Solve the normal equations (X'X)β = X'Y.

    Args:
        ops: Matrix capability implementation owning X and Y
        X: Design matrix (n x p) with intercept column
        Y: Response (n x 1)

    Returns:
        CoefficientFit with β, (X'X)⁻¹ and diagnostics

    Raises:
        SingularMatrixError: If X is rank-deficient or X'X cannot be
            inverted (collinear or constant predictors)
    """
    Xt = ops.transpose(X)
    xtx = ops.matmul(Xt, X)
    p = ops.to_numpy(xtx).shape[0]

    rank = ops.rank(X)
    if rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={rank}, expected={p}. "
            f"This indicates collinear or constant predictors.",
            matrix_name='X',
            rank=rank,
            expected_rank=p,
        )

    try:
        xtx_inv = ops.inverse(xtx)
    except SingularMatrixError as e:
        raise SingularMatrixError(
            f"X'X is not invertible: {e}",
            matrix_name="X'X",
            condition_number=e.condition_number,
            rank=rank,
            expected_rank=p,
        ) from e

    cond = ops.condition_number(xtx)
    beta = ops.matmul(ops.matmul(xtx_inv, Xt), Y)

    return CoefficientFit(
        coefficients=beta,
        xtx_inverse=xtx_inv,
        condition_number=cond,
        rank=rank,
    )


def residual_df(n_rows: int, n_cols: int, method: DFMethod = 'standard') -> int:
    """
    Residual degrees of freedom.

    Args:
        n_rows: Number of observations
        n_cols: Columns of the observation matrix, which equals the number
            of estimated parameters (intercept + predictors)
        method: 'standard' gives n_rows - n_cols. 'legacy' gives
            n_rows - n_cols - 2, reproducing historical output.

    Raises:
        InsufficientDataError: If the result is <= 0
        ValueError: If method is unknown
    """
    if method == 'standard':
        df = n_rows - n_cols
    elif method == 'legacy':
        df = n_rows - n_cols - LEGACY_DF_OFFSET
    else:
        raise ValueError(f"Unknown df_method: {method!r}. Use 'standard' or 'legacy'.")

    if df <= 0:
        raise InsufficientDataError(
            f"Residual degrees of freedom must be positive, got {df} "
            f"({n_rows} rows, {n_cols} columns, df_method={method!r}).",
            n_rows=n_rows,
            n_cols=n_cols,
            df_residual=df,
            method=method,
        )
    return df


def compute_significance(
    ops: MatrixOps[M],
    X: M,
    Y: M,
    fit: CoefficientFit[M],
    df_residual: int,
) -> Significance[M]:
    """
    Standard errors and t-statistics of the OLS coefficients.

    Args:
        ops: Matrix capability implementation owning X and Y
        X: Design matrix (n x p)
        Y: Response (n x 1)
        fit: Output of solve_coefficients()
        df_residual: Positive degrees of freedom, see residual_df()

    Raises:
        InsufficientDataError: If df_residual <= 0
        NumericInstabilityError: If a coefficient variance is negative or
            non-finite, the residuals are within rounding error of zero
            (RSS <= (n·eps)² · max(cond(X'X), 1) · Y'Y), or a t-statistic is
            non-finite
    """
    if df_residual <= 0:
        raise InsufficientDataError(
            f"Residual degrees of freedom must be positive, got {df_residual}.",
            df_residual=df_residual,
        )

    beta = fit.coefficients
    fitted = ops.matmul(X, beta)
    residuals = ops.subtract(Y, fitted)
    rss = ops.total(ops.square(residuals))
    sigma_sq = rss / df_residual

    variance = ops.scale(ops.diagonal(fit.xtx_inverse), sigma_sq)
    var_np = ops.to_numpy(variance).ravel()
    _reject(~np.isfinite(var_np), 'coefficient_variance', "is non-finite")
    _reject(var_np < 0, 'coefficient_variance', "is negative")

    # Residuals below the rounding floor of the solve mean an exact fit,
    # whose standard errors are rounding noise rather than zero
    n_rows = ops.to_numpy(Y).shape[0]
    yty = ops.total(ops.square(Y))
    rss_floor = (n_rows * ops.eps) ** 2 * max(fit.condition_number, 1.0) * yty
    exact = np.full(var_np.shape, rss <= rss_floor)

    se = ops.sqrt(variance)
    se_np = ops.to_numpy(se).ravel()
    _reject(exact | (se_np == 0), 'standard_errors',
            "is numerically zero (the model fits the data exactly)")

    t_stats = ops.divide(beta, se)
    _reject(~ops.is_finite(t_stats).ravel(), 't_statistics', "is non-finite")

    return Significance(
        fitted_values=fitted,
        residuals=residuals,
        rss=rss,
        sigma_squared=sigma_sq,
        standard_errors=se,
        t_statistics=t_stats,
    )


def _reject(mask: NDArray[np.bool_], quantity: str, problem: str) -> None:
    """Raise NumericInstabilityError naming the coefficients flagged in mask."""
    if not mask.any():
        return
    indices = tuple(int(i) for i in np.flatnonzero(mask))
    raise NumericInstabilityError(
        f"{quantity} {problem} for coefficient(s) {list(indices)}.",
        quantity=quantity,
        indices=indices,
    )
