"""
PyOLS: multivariate ordinary least squares with t-statistics.

Submodules:
    regression: OLS fit, significance and text output
    core: Exceptions, validation, observation intake, matrix kernels
    datasets: Seeded synthetic observation matrices
"""

__version__ = "0.1.0"

from pyols import regression
from pyols import datasets
from pyols.core.datasource import (
    load_observations,
    parse_observations,
    observations_from_values,
)
from pyols.regression import fit, linear_regression

__all__ = [
    "__version__",
    "regression",
    "datasets",
    "fit",
    "linear_regression",
    "load_observations",
    "parse_observations",
    "observations_from_values",
]
