"""
Tests for the PyTorch backend.

The backend runs on the CPU device when no GPU is present, so these tests
only need PyTorch installed. Results must agree with the NumPy reference.
"""

import numpy as np
import pytest

from pyols.core.exceptions import (
    InsufficientDataError,
    NumericInstabilityError,
    SingularMatrixError,
)
from pyols.regression import Design
from pyols.regression.backends.cpu import CPUNormalBackend
from pyols.regression.backends.gpu import GPUNormalBackend


def _torch_available():
    try:
        import torch  # noqa: F401
        return True
    except ImportError:
        return False


pytestmark = pytest.mark.skipif(
    not _torch_available(), reason="PyTorch not installed"
)


def _both(observations, df_method='standard'):
    design = Design.from_observations(observations)
    cpu = CPUNormalBackend(df_method=df_method).solve(design)
    gpu = GPUNormalBackend(df_method=df_method, device='cpu').solve(design)
    return cpu, gpu


class TestTorchMatchesNumpy:

    def test_coefficients_and_t(self, noisy_linear_data):
        observations, _ = noisy_linear_data
        cpu, gpu = _both(observations)
        np.testing.assert_allclose(gpu.params.coefficients, cpu.params.coefficients, rtol=1e-10)
        np.testing.assert_allclose(gpu.params.t_statistics, cpu.params.t_statistics, rtol=1e-10)
        assert gpu.params.df_residual == cpu.params.df_residual

    def test_small_example(self, small_observations):
        cpu, gpu = _both(small_observations)
        np.testing.assert_allclose(gpu.params.standard_errors, cpu.params.standard_errors, rtol=1e-10)

    def test_backend_metadata(self, small_observations):
        _, gpu = _both(small_observations)
        assert gpu.backend_name == 'gpu_normal_fp64'
        assert gpu.info['matrix_ops'] == 'torch_cpu_fp64'
        assert isinstance(gpu.params.coefficients, np.ndarray)

    def test_fp32_close(self, noisy_linear_data):
        observations, _ = noisy_linear_data
        design = Design.from_observations(observations)
        cpu = CPUNormalBackend().solve(design)
        gpu = GPUNormalBackend(device='cpu', use_fp64=False).solve(design)
        assert gpu.backend_name == 'gpu_normal_fp32'
        np.testing.assert_allclose(gpu.params.coefficients, cpu.params.coefficients, rtol=1e-3, atol=1e-4)


class TestTorchErrors:

    def test_singular(self, duplicate_column_data):
        design = Design.from_observations(duplicate_column_data)
        with pytest.raises(SingularMatrixError):
            GPUNormalBackend(device='cpu').solve(design)

    def test_exact_fit(self, exact_linear_data):
        observations, _ = exact_linear_data
        design = Design.from_observations(observations)
        with pytest.raises(NumericInstabilityError, match="exactly"):
            GPUNormalBackend(device='cpu').solve(design)

    def test_legacy_insufficient(self, small_observations):
        design = Design.from_observations(small_observations)
        with pytest.raises(InsufficientDataError):
            GPUNormalBackend(df_method='legacy', device='cpu').solve(design)
