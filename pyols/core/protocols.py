"""
Core protocols for PyOLS.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
any linear-algebra library can be plugged in without inheriting from us.

Design Principles:
    - Minimal contracts: prescribe only what the estimator needs
    - Library-agnostic: matrices are opaque values owned by a MatrixOps
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, TYPE_CHECKING, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pyols.core.result import Result

M = TypeVar('M')  # Matrix type owned by a MatrixOps implementation
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class MatrixOps(Protocol[M]):
    """
    Capability interface for dense float matrices.

    The OLS estimator is written purely against this protocol. A concrete
    implementation wraps one linear-algebra library (NumPy, PyTorch, ...)
    and owns the matrix representation M. Every operation returns a new
    matrix; inputs are never modified in place.

    All vectors are column matrices (k x 1).
    """

    @property
    def name(self) -> str:
        """Short identifier, e.g. 'numpy' or 'torch_cuda_fp64'."""
        ...

    @property
    def eps(self) -> float:
        """Machine epsilon of the working precision."""
        ...

    def asmatrix(self, array: NDArray[np.floating[Any]]) -> M:
        """Copy a 2D NumPy array into this library's representation."""
        ...

    def to_numpy(self, matrix: M) -> NDArray[np.floating[Any]]:
        """Copy a matrix back to a float64 NumPy array."""
        ...

    def ones(self, rows: int, cols: int) -> M:
        """Matrix of ones."""
        ...

    def hstack(self, *matrices: M) -> M:
        """Concatenate matrices with equal row counts side by side."""
        ...

    def column_slice(self, matrix: M, start: int, stop: int) -> M:
        """Columns start..stop-1 (all rows)."""
        ...

    def transpose(self, matrix: M) -> M:
        ...

    def matmul(self, a: M, b: M) -> M:
        ...

    def subtract(self, a: M, b: M) -> M:
        ...

    def divide(self, a: M, b: M) -> M:
        """Elementwise a / b."""
        ...

    def scale(self, matrix: M, factor: float) -> M:
        """Elementwise multiplication by a scalar."""
        ...

    def square(self, matrix: M) -> M:
        ...

    def sqrt(self, matrix: M) -> M:
        ...

    def total(self, matrix: M) -> float:
        """Sum of all elements."""
        ...

    def diagonal(self, matrix: M) -> M:
        """Main diagonal of a square matrix as a column vector."""
        ...

    def inverse(self, matrix: M) -> M:
        """
        Inverse of a square matrix.

        Raises:
            SingularMatrixError: If the matrix cannot be inverted
        """
        ...

    def rank(self, matrix: M) -> int:
        """Numerical rank."""
        ...

    def condition_number(self, matrix: M) -> float:
        """2-norm condition number (inf for singular matrices)."""
        ...

    def is_finite(self, matrix: M) -> NDArray[np.bool_]:
        """Elementwise finiteness mask as a NumPy array."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a Design and produces a parameter payload. The
    backend handles all hardware-specific computation (CPU/GPU, precision).

    Backends are stateless apart from construction-time configuration,
    which makes them safe to share between concurrent callers.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_normal', 'gpu_normal_fp64'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the statistical computation.

        Args:
            design: Validated design

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            NumericalError: If numerical issues prevent a solution
        """
        ...
