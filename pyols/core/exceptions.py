"""
Exception hierarchy for PyOLS.

All exceptions inherit from PyOLSError so callers can catch any
library-specific failure in one place and map it to their own error
reporting (HTTP status codes, exit codes, ...).

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
    - Nothing is retried: the computation is deterministic
"""


class PyOLSError(Exception):
    """Base exception for all PyOLS errors."""
    pass


class ValidationError(PyOLSError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks
    (non-numeric cells, NaN/Inf values, ragged rows).
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when the observation matrix has fewer than two columns,
    is not two-dimensional, or has no more rows than columns.
    """
    pass


class NumericalError(PyOLSError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when X'X cannot be inverted, which signals collinear or
    rank-deficient predictors.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (the parameter count)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class InsufficientDataError(NumericalError):
    """
    Not enough observations to estimate the residual variance.

    Raised when the residual degrees of freedom are zero or negative.

    Attributes:
        n_rows: Number of observations
        n_cols: Number of columns of the observation matrix
        df_residual: The offending degrees of freedom
        method: Degrees-of-freedom convention in use
    """

    def __init__(
        self,
        message: str,
        n_rows: int | None = None,
        n_cols: int | None = None,
        df_residual: int | None = None,
        method: str | None = None
    ):
        super().__init__(message)
        self.n_rows = n_rows
        self.n_cols = n_cols
        self.df_residual = df_residual
        self.method = method


class NumericInstabilityError(NumericalError):
    """
    A computed quantity is non-finite or outside its valid domain.

    Raised instead of returning NaN/Inf: negative or non-finite coefficient
    variances, zero standard errors, non-finite t-statistics.

    Attributes:
        quantity: Name of the offending quantity (e.g. 'standard_errors')
        indices: Coefficient indices where the problem occurred
    """

    def __init__(
        self,
        message: str,
        quantity: str | None = None,
        indices: tuple[int, ...] | None = None
    ):
        super().__init__(message)
        self.quantity = quantity
        self.indices = indices
