"""
GPU backend for OLS regression using PyTorch.

Performance path for large problems, validated against the CPU reference.
Supports CUDA (Linux/Windows) and MPS (macOS Apple Silicon); 'cpu' is
accepted as a device so the torch path can be exercised anywhere.
"""

from pyols.core.result import Result
from pyols.core.compute.timing import Timer
from pyols.core.compute.linalg import TorchOps
from pyols.regression._ols import DFMethod
from pyols.regression.design import Design
from pyols.regression.solution import RegressionParams
from pyols.regression.backends._common import solve_normal_equations


class GPUNormalBackend:
    """
    PyTorch backend solving β = (X'X)⁻¹X'Y.

    FP64 by default. Pass use_fp64=False on consumer GPUs for speed, and
    always on MPS, which has no float64 support.
    """

    def __init__(
        self,
        df_method: DFMethod = 'standard',
        device: str = 'cuda',
        use_fp64: bool = True,
    ):
        """
        Args:
            df_method: Degrees-of-freedom convention
            device: torch device ('cuda', 'cuda:0', 'mps', 'cpu')
            use_fp64: Compute in float64 (True) or float32 (False)

        Raises:
            RuntimeError: If the device is unavailable
        """
        self.df_method = df_method
        self.ops = TorchOps(device=device, use_fp64=use_fp64)

    @property
    def name(self) -> str:
        precision = "fp64" if self.ops.use_fp64 else "fp32"
        return f'gpu_normal_{precision}'

    def solve(self, design: Design) -> Result[RegressionParams]:
        """
        Solve OLS via the normal equations on the configured torch device.

        Same algorithm and errors as CPUNormalBackend.solve().
        """
        return solve_normal_equations(
            self.ops,
            design,
            df_method=self.df_method,
            backend_name=self.name,
            timer=Timer(sync_cuda=self.ops.device.type == 'cuda'),
        )
