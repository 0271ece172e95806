"""
Ordinary least squares regression with t-statistics.

Public API:
    fit(observations, ...) -> RegressionSolution
    linear_regression(observations, ...) -> (coefficients_text, t_statistics_text)

fit() handles:
    - Input validation
    - Design construction (intercept column + predictors, last column as response)
    - Backend selection
    - Result wrapping

Example:
    >>> from pyols.regression import linear_regression
    >>> coeffs, tstats = linear_regression(
    ...     [[1, 1, 2], [2, 1, 3], [3, 2, 5], [4, 2, 6], [5, 3, 9]]
    ... )
    >>> print(coeffs)
"""

from pyols.regression.design import Design
from pyols.regression.solution import RegressionSolution, RegressionParams
from pyols.regression.solvers import fit, linear_regression
from pyols.regression.formatting import format_column, parse_column

__all__ = [
    "fit",
    "linear_regression",
    "Design",
    "RegressionSolution",
    "RegressionParams",
    "format_column",
    "parse_column",
]
