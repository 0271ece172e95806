"""
Shared normal-equations pipeline for regression backends.

A backend only decides which MatrixOps to run on and how to time it;
the sequence of matrix operations is identical everywhere.
"""

from typing import Any
import numpy as np

from pyols.core.protocols import MatrixOps
from pyols.core.result import Result
from pyols.core.compute.timing import Timer
from pyols.regression._ols import (
    DFMethod,
    split_observations,
    solve_coefficients,
    compute_significance,
    residual_df,
)
from pyols.regression.design import Design
from pyols.regression.solution import RegressionParams

# cond(X'X) above which coefficients lose more than ~10 significant
# digits in float64. Reported as a warning, never refused.
ILL_CONDITIONED_THRESHOLD = 1e10


def solve_normal_equations(
    ops: MatrixOps[Any],
    design: Design,
    *,
    df_method: DFMethod,
    backend_name: str,
    timer: Timer,
) -> Result[RegressionParams]:
    """
    Run the full OLS pipeline on `ops` and wrap it in a Result.

    The degrees of freedom are checked before any matrix work so that an
    undersized problem fails fast with InsufficientDataError. Non-fatal
    issues are recorded on Result.warnings; the public entry points turn
    them into RuntimeWarnings.

    Raises:
        InsufficientDataError: If residual degrees of freedom <= 0
        SingularMatrixError: If X'X cannot be inverted
        NumericInstabilityError: If standard errors or t-statistics are
            not finite and positive
    """
    timer.start()
    df = residual_df(design.n, design.p, df_method)

    with timer.section('data_transfer'):
        observations = ops.asmatrix(design.observations)

    with timer.section('design'):
        X, Y = split_observations(ops, observations, design.n, design.p)

    with timer.section('coefficients'):
        fit = solve_coefficients(ops, X, Y)

    with timer.section('significance'):
        sig = compute_significance(ops, X, Y, fit, df)

    with timer.section('data_transfer'):
        coefficients = ops.to_numpy(fit.coefficients).ravel()
        standard_errors = ops.to_numpy(sig.standard_errors).ravel()
        t_statistics = ops.to_numpy(sig.t_statistics).ravel()
        residuals = ops.to_numpy(sig.residuals).ravel()
        fitted_values = ops.to_numpy(sig.fitted_values).ravel()

    y = design.y
    tss = float(np.sum((y - np.mean(y)) ** 2))

    timer.stop()

    issues: list[str] = []
    if fit.condition_number > ILL_CONDITIONED_THRESHOLD:
        issues.append(
            f"X'X is ill-conditioned (condition number: {fit.condition_number:.3e}). "
            f"Coefficients and t-statistics may be inaccurate; check for "
            f"nearly collinear or badly scaled predictors."
        )

    params = RegressionParams(
        coefficients=coefficients,
        standard_errors=standard_errors,
        t_statistics=t_statistics,
        residuals=residuals,
        fitted_values=fitted_values,
        rss=sig.rss,
        tss=tss,
        sigma_squared=sig.sigma_squared,
        df_residual=df,
    )

    info: dict[str, Any] = {
        'method': 'normal_equations',
        'matrix_ops': ops.name,
        'rank': fit.rank,
        'condition_number': fit.condition_number,
        'df_method': df_method,
    }

    return Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=backend_name,
        warnings=tuple(issues),
    )
