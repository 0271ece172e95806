"""
Tests for the MatrixOps implementations (core/compute/linalg).

NumpyOps is always tested. TorchOps runs on the CPU device when PyTorch
is installed, so the torch code path is covered without a GPU.
"""

import numpy as np
import pytest

from pyols.core.compute.linalg import NumpyOps
from pyols.core.exceptions import SingularMatrixError
from pyols.core.protocols import MatrixOps


def _torch_ops():
    pytest.importorskip("torch")
    from pyols.core.compute.linalg import TorchOps
    return TorchOps(device="cpu", use_fp64=True)


@pytest.fixture(params=["numpy", "torch"])
def ops(request):
    if request.param == "numpy":
        return NumpyOps()
    return _torch_ops()


A = np.array([[4.0, 1.0], [2.0, 3.0]])
B = np.array([[1.0], [2.0]])


class TestProtocol:

    def test_numpy_ops_satisfies_protocol(self):
        assert isinstance(NumpyOps(), MatrixOps)

    def test_torch_ops_satisfies_protocol(self):
        assert isinstance(_torch_ops(), MatrixOps)

    def test_eps_matches_precision(self, ops):
        assert ops.eps == np.finfo(np.float64).eps

    def test_torch_fp32_eps(self):
        pytest.importorskip("torch")
        from pyols.core.compute.linalg import TorchOps
        assert TorchOps(device="cpu", use_fp64=False).eps == np.finfo(np.float32).eps


class TestElementary:

    def test_roundtrip_copies(self, ops):
        src = A.copy()
        m = ops.asmatrix(src)
        src[0, 0] = -1.0
        np.testing.assert_array_equal(ops.to_numpy(m), A)

    def test_ones_and_hstack(self, ops):
        m = ops.hstack(ops.ones(2, 1), ops.asmatrix(A))
        np.testing.assert_array_equal(ops.to_numpy(m), [[1, 4, 1], [1, 2, 3]])

    def test_column_slice(self, ops):
        m = ops.column_slice(ops.asmatrix(A), 1, 2)
        np.testing.assert_array_equal(ops.to_numpy(m), [[1.0], [3.0]])

    def test_transpose_matmul(self, ops):
        a = ops.asmatrix(A)
        np.testing.assert_allclose(
            ops.to_numpy(ops.matmul(ops.transpose(a), a)), A.T @ A
        )

    def test_elementwise(self, ops):
        a, b = ops.asmatrix(A), ops.asmatrix(B)
        np.testing.assert_allclose(ops.to_numpy(ops.subtract(b, b)), [[0.0], [0.0]])
        np.testing.assert_allclose(ops.to_numpy(ops.divide(b, b)), [[1.0], [1.0]])
        np.testing.assert_allclose(ops.to_numpy(ops.scale(a, 2.0)), A * 2)
        np.testing.assert_allclose(ops.to_numpy(ops.square(b)), [[1.0], [4.0]])
        np.testing.assert_allclose(ops.to_numpy(ops.sqrt(ops.square(b))), B)

    def test_total_and_diagonal(self, ops):
        a = ops.asmatrix(A)
        assert ops.total(a) == pytest.approx(10.0)
        np.testing.assert_array_equal(ops.to_numpy(ops.diagonal(a)), [[4.0], [3.0]])

    def test_is_finite(self, ops):
        mask = ops.is_finite(ops.asmatrix(np.array([[1.0], [np.inf]])))
        np.testing.assert_array_equal(mask, [[True], [False]])


class TestInverseAndRank:

    def test_inverse(self, ops):
        inv = ops.to_numpy(ops.inverse(ops.asmatrix(A)))
        np.testing.assert_allclose(inv @ A, np.eye(2), atol=1e-12)

    def test_exactly_singular(self, ops):
        with pytest.raises(SingularMatrixError):
            ops.inverse(ops.asmatrix(np.array([[1.0, 2.0], [2.0, 4.0]])))

    def test_zero_matrix(self, ops):
        with pytest.raises(SingularMatrixError) as exc_info:
            ops.inverse(ops.asmatrix(np.zeros((2, 2))))
        assert exc_info.value.condition_number == float("inf")

    def test_rank(self, ops):
        assert ops.rank(ops.asmatrix(A)) == 2
        dup = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        assert ops.rank(ops.asmatrix(dup)) == 1

    def test_condition_number(self, ops):
        assert ops.condition_number(ops.asmatrix(np.eye(3))) == pytest.approx(1.0)
        assert ops.condition_number(ops.asmatrix(np.diag([1.0, 100.0]))) == pytest.approx(100.0)


class TestTorchOpsConfig:

    def test_name(self):
        assert _torch_ops().name == "torch_cpu_fp64"

    def test_fp32_name(self):
        pytest.importorskip("torch")
        from pyols.core.compute.linalg import TorchOps
        assert TorchOps(device="cpu", use_fp64=False).name == "torch_cpu_fp32"

    def test_unavailable_cuda(self):
        torch = pytest.importorskip("torch")
        if torch.cuda.is_available():
            pytest.skip("CUDA is available")
        from pyols.core.compute.linalg import TorchOps
        with pytest.raises(RuntimeError, match="CUDA not available"):
            TorchOps(device="cuda")
