"""
Regression backends.

Available backends:
    CPUNormalBackend: CPU reference implementation (NumPy)
    GPUNormalBackend: PyTorch implementation (CUDA, MPS or CPU device)
"""

from pyols.regression.backends.cpu import CPUNormalBackend

__all__ = [
    "CPUNormalBackend",
]
