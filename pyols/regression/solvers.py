"""
Solver dispatch for regression.

This module provides the public entry points (fit, linear_regression)
and backend selection.
"""

from typing import Literal, get_args
import warnings
from numpy.typing import ArrayLike

from pyols.core.compute.device import select_device
from pyols.regression._ols import DFMethod
from pyols.regression.design import Design
from pyols.regression.solution import RegressionSolution
from pyols.regression.backends.cpu import CPUNormalBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'gpu', 'cpu_normal', 'gpu_normal']


def fit(
    observations: ArrayLike | Design,
    *,
    backend: BackendChoice = 'auto',
    df_method: DFMethod = 'standard',
) -> RegressionSolution:
    """
    Fit an OLS regression with intercept.

    The last column of `observations` is the response; every other column
    is a predictor. An intercept column of ones is prepended, so the
    returned coefficients are [intercept, slope_1, ..., slope_k].

    Args:
        observations: r x c numeric matrix (or an already-built Design)
        backend: Computational backend to use:
            - 'auto': GPU if one is available, else CPU
            - 'cpu' / 'cpu_normal': NumPy float64
            - 'gpu' / 'gpu_normal': PyTorch on the detected GPU
        df_method: Residual degrees-of-freedom convention:
            - 'standard': rows - cols
            - 'legacy': rows - cols - 2, reproducing historical output

    Returns:
        RegressionSolution with coefficients, t-statistics, diagnostics
        and the formatted output strings

    Raises:
        ValueError: If backend or df_method is unknown
        ValidationError: If observations are non-numeric or non-finite
        DimensionError: If observations have < 2 columns or rows <= columns
        InsufficientDataError: If residual degrees of freedom <= 0
        SingularMatrixError: If predictors are collinear
        NumericInstabilityError: If standard errors are zero or t-statistics
            are non-finite

    Warns:
        RuntimeWarning: If X'X is ill-conditioned (also recorded on
            RegressionSolution.warnings)

    Example:
        >>> import numpy as np
        >>> from pyols.regression import fit
        >>>
        >>> rng = np.random.default_rng(0)
        >>> x = rng.standard_normal((100, 2))
        >>> y = 1.0 + x @ [2.0, -3.0] + rng.standard_normal(100) * 0.1
        >>> result = fit(np.column_stack([x, y]))
        >>> print(result.coefficients_text)
        >>> print(result.summary())
    """
    solution = _solve(observations, backend, df_method)
    _warn_issues(solution)
    return solution


def linear_regression(
    observations: ArrayLike,
    *,
    backend: BackendChoice = 'cpu',
    df_method: DFMethod = 'standard',
) -> tuple[str, str]:
    """
    Regression output as text.

    Returns:
        (coefficients_text, t_statistics_text), both rendered by
        pyols.regression.formatting.format_column()

    Raises:
        Same as fit(). Failure is always an exception; the strings are
        only returned for a successful fit.
    """
    solution = _solve(observations, backend, df_method)
    _warn_issues(solution)
    return solution.coefficients_text, solution.t_statistics_text


def _get_backend(choice: BackendChoice, df_method: DFMethod):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if choice == 'auto':
        device = select_device('auto')
        if device.is_gpu:
            from pyols.regression.backends.gpu import GPUNormalBackend
            return GPUNormalBackend(
                df_method=df_method,
                device=device.torch_device,
                use_fp64=device.supports_fp64,
            )
        return CPUNormalBackend(df_method=df_method)

    elif choice in ('cpu', 'cpu_normal'):
        return CPUNormalBackend(df_method=df_method)

    elif choice in ('gpu', 'gpu_normal'):
        device = select_device('gpu')
        from pyols.regression.backends.gpu import GPUNormalBackend
        return GPUNormalBackend(
            df_method=df_method,
            device=device.torch_device,
            use_fp64=device.supports_fp64,
        )

    else:
        raise ValueError(f"Unknown backend: {choice!r}")


def _solve(
    observations: ArrayLike | Design,
    backend: BackendChoice,
    df_method: DFMethod,
) -> RegressionSolution:
    if df_method not in get_args(DFMethod):
        raise ValueError(
            f"Unknown df_method: {df_method!r}. Use 'standard' or 'legacy'."
        )

    # This is the boundary - validate here, trust everywhere else
    if isinstance(observations, Design):
        design = observations
    else:
        design = Design.from_observations(observations)

    backend_impl = _get_backend(backend, df_method)
    result = backend_impl.solve(design)

    return RegressionSolution(_result=result, _design=design)


def _warn_issues(solution: RegressionSolution) -> None:
    """Re-raise recorded issues as warnings attributed to the public caller."""
    for issue in solution.warnings:
        # 1 = here, 2 = fit()/linear_regression(), 3 = their caller
        warnings.warn(issue, RuntimeWarning, stacklevel=3)
