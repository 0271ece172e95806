"""
Linear algebra kernels for PyOLS.

Each class here implements the MatrixOps capability protocol
(pyols.core.protocols.MatrixOps) for one linear-algebra library:

    NumpyOps: CPU float64 reference (NumPy/LAPACK)
    TorchOps: PyTorch tensors on CPU, CUDA or MPS
"""

from pyols.core.compute.linalg.matrix_ops import NumpyOps, TorchOps

__all__ = [
    "NumpyOps",
    "TorchOps",
]
