"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyols.core.result import Result
from pyols.regression.formatting import format_column

if TYPE_CHECKING:
    from pyols.regression.design import Design


@dataclass(frozen=True)
class RegressionParams:
    """
    Parameter payload for OLS regression.

    This is the immutable data computed by backends. Every array is a
    1D float64 NumPy array regardless of the backend that produced it.
    """
    coefficients: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    sigma_squared: float
    df_residual: int


@dataclass
class RegressionSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors for all
    regression outputs, including the two formatted strings that make up
    the wire-visible output (coefficients_text, t_statistics_text).
    """
    _result: Result[RegressionParams]
    _design: 'Design'

    # Cached computations
    _p_values: NDArray[np.floating[Any]] | None = None

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """β; index 0 is the intercept, index k the slope of predictor k-1."""
        return self._result.params.coefficients

    @property
    def intercept(self) -> float:
        return float(self.coefficients[0])

    @property
    def slopes(self) -> NDArray[np.floating[Any]]:
        return self.coefficients[1:]

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """SE(β) = sqrt(diag(σ̂² (X'X)⁻¹))."""
        return self._result.params.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_statistics

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def sigma_squared(self) -> float:
        """Residual variance estimate σ̂² = RSS / df."""
        return self._result.params.sigma_squared

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def df_method(self) -> str:
        return self._result.info['df_method']

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def adjusted_r_squared(self) -> float:
        n = self._design.n
        df = self.df_residual
        if self.tss == 0:
            return self.r_squared
        return 1.0 - (1.0 - self.r_squared) * (n - 1) / df

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self.sigma_squared))

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values of the t-statistics on df_residual degrees of freedom."""
        if self._p_values is not None:
            return self._p_values

        from scipy import stats
        self._p_values = 2.0 * stats.t.sf(np.abs(self.t_statistics), self.df_residual)
        return self._p_values

    @property
    def coefficients_text(self) -> str:
        """Coefficients rendered by format_column()."""
        return format_column(self.coefficients)

    @property
    def t_statistics_text(self) -> str:
        """t-statistics rendered by format_column()."""
        return format_column(self.t_statistics)

    @property
    def condition_number(self) -> float:
        """cond(X'X)."""
        return self._result.info['condition_number']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Linear Regression Results",
            "=" * 70,
            f"Observations: {self._design.n}",
            f"Predictors: {self._design.n_predictors}",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Residual Std. Error: {self.residual_std_error:.6f} "
            f"on {self.df_residual} DF ({self.df_method})",
            "",
            "Coefficients:",
            "-" * 70,
            f"{'':<12} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
            "-" * 70,
        ]

        for i, (coef, se, t, pv) in enumerate(zip(
            self.coefficients, self.standard_errors, self.t_statistics, self.p_values
        )):
            label = "(Intercept)" if i == 0 else f"x{i}"
            lines.append(f"{label:<12} {coef:14.6f} {se:12.6f} {t:10.3f} {pv:12.4g}")

        lines.append("-" * 70)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"RegressionSolution(n={self._design.n}, p={self._design.p}, "
            f"df_residual={self.df_residual}, r_squared={self.r_squared:.4f})"
        )
