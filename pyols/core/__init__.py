"""
Core infrastructure for PyOLS.

Key components:
    protocols: MatrixOps and Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Reading observation matrices from delimited text
    compute: Hardware detection, timing, matrix operation kernels
"""

from pyols.core.protocols import MatrixOps, Backend
from pyols.core.result import Result
from pyols.core.exceptions import (
    PyOLSError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    InsufficientDataError,
    NumericInstabilityError,
)

__all__ = [
    # Protocols
    "MatrixOps",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyOLSError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "InsufficientDataError",
    "NumericInstabilityError",
]
