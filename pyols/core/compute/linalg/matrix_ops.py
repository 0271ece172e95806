"""
MatrixOps implementations.

Provides the dense-matrix capability interface on CPU (NumPy, LAPACK under
the hood) and on CPU/GPU through PyTorch. The OLS estimator only ever talks
to these objects, so swapping the linear-algebra library is a matter of
passing a different ops instance to the backend.

Conventions:
    - Every operation returns a new matrix; inputs are never mutated
    - Vectors are column matrices (k x 1)
    - Singularity is reported as SingularMatrixError, never as a
      library-specific exception
"""

from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import SingularMatrixError

if TYPE_CHECKING:
    import torch


def _singularity_limit(dtype_eps: float) -> float:
    """Condition number above which a matrix is treated as singular."""
    return 1.0 / dtype_eps


class NumpyOps:
    """
    CPU float64 matrices backed by numpy.ndarray.

    This is the reference implementation.
    """

    @property
    def name(self) -> str:
        return 'numpy'

    @property
    def eps(self) -> float:
        return float(np.finfo(np.float64).eps)

    def asmatrix(self, array: NDArray[np.floating[Any]]) -> NDArray[np.float64]:
        return np.array(array, dtype=np.float64, copy=True)

    def to_numpy(self, matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.array(matrix, dtype=np.float64, copy=True)

    def ones(self, rows: int, cols: int) -> NDArray[np.float64]:
        return np.ones((rows, cols), dtype=np.float64)

    def hstack(self, *matrices: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.hstack(matrices)

    def column_slice(self, matrix: NDArray[np.float64], start: int, stop: int) -> NDArray[np.float64]:
        return matrix[:, start:stop].copy()

    def transpose(self, matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        return matrix.T.copy()

    def matmul(self, a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        return a @ b

    def subtract(self, a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        return a - b

    def divide(self, a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        # Zero divisors are rejected by the caller before this point
        with np.errstate(divide='ignore', invalid='ignore'):
            return a / b

    def scale(self, matrix: NDArray[np.float64], factor: float) -> NDArray[np.float64]:
        return matrix * factor

    def square(self, matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.square(matrix)

    def sqrt(self, matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        with np.errstate(invalid='ignore'):
            return np.sqrt(matrix)

    def total(self, matrix: NDArray[np.float64]) -> float:
        return float(np.sum(matrix))

    def diagonal(self, matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.diag(matrix).reshape(-1, 1).copy()

    def inverse(self, matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        """
        Inverse via LAPACK getrf/getri.

        Matrices whose condition number exceeds 1/eps are refused even when
        LAPACK finds no exactly-zero pivot: their inverse is dominated by
        rounding error.
        """
        cond = self.condition_number(matrix)
        if not np.isfinite(cond) or cond > _singularity_limit(np.finfo(np.float64).eps):
            raise SingularMatrixError(
                f"Matrix is singular to working precision "
                f"(condition number: {cond:.3e}).",
                condition_number=cond,
            )
        try:
            return np.linalg.inv(matrix)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"Matrix inversion failed: {e}",
                condition_number=cond,
            ) from e

    def rank(self, matrix: NDArray[np.float64]) -> int:
        # Tolerance: max(shape) * eps * largest singular value
        return int(np.linalg.matrix_rank(matrix))

    def condition_number(self, matrix: NDArray[np.float64]) -> float:
        sv = np.linalg.svd(matrix, compute_uv=False)
        if sv.size == 0 or sv[-1] == 0:
            return float('inf')
        return float(sv[0] / sv[-1])

    def is_finite(self, matrix: NDArray[np.float64]) -> NDArray[np.bool_]:
        return np.isfinite(matrix)


class TorchOps:
    """
    Matrices backed by torch.Tensor on any torch device.

    FP64 by default: t-statistics divide by standard errors derived from
    (X'X)^-1, which squares the condition number of X, so single precision
    loses most significant digits on realistic data. MPS has no float64
    support and must be used with use_fp64=False.
    """

    def __init__(self, device: str = 'cpu', use_fp64: bool = True):
        """
        Args:
            device: torch device string ('cpu', 'cuda', 'cuda:0', 'mps')
            use_fp64: If True, compute in float64, else float32

        Raises:
            RuntimeError: If the device is unavailable or cannot run fp64
        """
        import torch

        if device.startswith('cuda') and not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA not available. Install PyTorch with CUDA support, "
                "or use backend='cpu'."
            )
        if device == 'mps':
            if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
                raise RuntimeError(
                    "MPS not available. Requires macOS with Apple Silicon "
                    "and PyTorch with MPS support."
                )
            if use_fp64:
                raise RuntimeError(
                    "MPS does not support float64. Use use_fp64=False "
                    "or use backend='cpu' for double precision."
                )

        self.device = torch.device(device)
        self.dtype = torch.float64 if use_fp64 else torch.float32
        self.use_fp64 = use_fp64

    @property
    def name(self) -> str:
        precision = "fp64" if self.use_fp64 else "fp32"
        return f"torch_{self.device.type}_{precision}"

    @property
    def eps(self) -> float:
        import torch
        return float(torch.finfo(self.dtype).eps)

    def asmatrix(self, array: NDArray[np.floating[Any]]) -> 'torch.Tensor':
        import torch
        # np.array copies; Design arrays are read-only
        return torch.tensor(np.array(array), device=self.device, dtype=self.dtype)

    def to_numpy(self, matrix: 'torch.Tensor') -> NDArray[np.float64]:
        return matrix.detach().cpu().numpy().astype(np.float64)

    def ones(self, rows: int, cols: int) -> 'torch.Tensor':
        import torch
        return torch.ones((rows, cols), device=self.device, dtype=self.dtype)

    def hstack(self, *matrices: 'torch.Tensor') -> 'torch.Tensor':
        import torch
        return torch.hstack(matrices)

    def column_slice(self, matrix: 'torch.Tensor', start: int, stop: int) -> 'torch.Tensor':
        return matrix[:, start:stop].clone()

    def transpose(self, matrix: 'torch.Tensor') -> 'torch.Tensor':
        return matrix.T.clone()

    def matmul(self, a: 'torch.Tensor', b: 'torch.Tensor') -> 'torch.Tensor':
        return a @ b

    def subtract(self, a: 'torch.Tensor', b: 'torch.Tensor') -> 'torch.Tensor':
        return a - b

    def divide(self, a: 'torch.Tensor', b: 'torch.Tensor') -> 'torch.Tensor':
        return a / b

    def scale(self, matrix: 'torch.Tensor', factor: float) -> 'torch.Tensor':
        return matrix * factor

    def square(self, matrix: 'torch.Tensor') -> 'torch.Tensor':
        import torch
        return torch.square(matrix)

    def sqrt(self, matrix: 'torch.Tensor') -> 'torch.Tensor':
        import torch
        return torch.sqrt(matrix)

    def total(self, matrix: 'torch.Tensor') -> float:
        import torch
        return float(torch.sum(matrix).item())

    def diagonal(self, matrix: 'torch.Tensor') -> 'torch.Tensor':
        import torch
        return torch.diagonal(matrix).reshape(-1, 1).clone()

    def inverse(self, matrix: 'torch.Tensor') -> 'torch.Tensor':
        import torch

        cond = self.condition_number(matrix)
        if not np.isfinite(cond) or cond > _singularity_limit(torch.finfo(self.dtype).eps):
            raise SingularMatrixError(
                f"Matrix is singular to working precision "
                f"(condition number: {cond:.3e}).",
                condition_number=cond,
            )
        inv, info = torch.linalg.inv_ex(matrix)
        if int(info.item()) != 0:
            raise SingularMatrixError(
                f"Matrix inversion failed: zero pivot at position {int(info.item())}.",
                condition_number=cond,
            )
        return inv

    def rank(self, matrix: 'torch.Tensor') -> int:
        import torch
        return int(torch.linalg.matrix_rank(self._svd_capable(matrix)).item())

    def condition_number(self, matrix: 'torch.Tensor') -> float:
        import torch

        sv = torch.linalg.svdvals(self._svd_capable(matrix))
        sv_min = float(sv[-1].item())
        if sv_min == 0:
            return float('inf')
        return float(sv[0].item()) / sv_min

    def is_finite(self, matrix: 'torch.Tensor') -> NDArray[np.bool_]:
        import torch
        return torch.isfinite(matrix).cpu().numpy()

    def _svd_capable(self, matrix: 'torch.Tensor') -> 'torch.Tensor':
        # svdvals is not implemented on MPS
        if self.device.type == 'mps':
            return matrix.cpu()
        return matrix
