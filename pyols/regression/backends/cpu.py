"""
CPU reference backend for OLS regression.

Runs the normal equations on NumPy float64 arrays (LAPACK for inversion,
rank and condition estimates). This is the reference implementation
other backends are validated against.
"""

from pyols.core.result import Result
from pyols.core.compute.timing import Timer
from pyols.core.compute.linalg import NumpyOps
from pyols.regression._ols import DFMethod
from pyols.regression.design import Design
from pyols.regression.solution import RegressionParams
from pyols.regression.backends._common import solve_normal_equations


class CPUNormalBackend:
    """
    CPU backend solving β = (X'X)⁻¹X'Y with NumPy.

    Implements the Backend protocol for Design -> RegressionParams.
    """

    def __init__(self, df_method: DFMethod = 'standard'):
        self.df_method = df_method
        self.ops = NumpyOps()

    @property
    def name(self) -> str:
        return 'cpu_normal'

    def solve(self, design: Design) -> Result[RegressionParams]:
        """
        Solve OLS via the normal equations.

        Algorithm:
            1. XtX = X'X, verify full column rank, invert
            2. β = (X'X)⁻¹ X'Y
            3. Residuals, σ̂² = RSS / df, SE = sqrt(σ̂² diag((X'X)⁻¹)),
               t = β / SE

        Raises:
            SingularMatrixError: If X is rank-deficient
            InsufficientDataError: If residual degrees of freedom <= 0
            NumericInstabilityError: If a standard error is zero or a
                t-statistic is non-finite
        """
        return solve_normal_equations(
            self.ops,
            design,
            df_method=self.df_method,
            backend_name=self.name,
            timer=Timer(),
        )
