import numpy as np
import pytest

from ndlinalg.krylov.arnoldi import Arnoldi, arnoldi_householder, arnoldi_mgs
from ndlinalg.krylov.householder import Householder
from ndlinalg.krylov.mgs import MGS
from ndlinalg.linear_operator import MatrixOperator


def _problem(n=6, seed=4):
    rng = np.random.default_rng(seed)
    return rng.standard_normal((n, n)), rng.standard_normal(n)


@pytest.mark.parametrize("method", [arnoldi_mgs, arnoldi_householder])
def test_full_krylov_space(method):
    a, v = _problem()
    q, h = method(a, v, 1e-10)
    assert q.shape == (6, 6)
    assert h.shape == (6, 6)
    np.testing.assert_allclose(q.T @ q, np.eye(6), atol=1e-10)
    np.testing.assert_allclose(a @ q, q @ h, atol=1e-8)
    np.testing.assert_allclose(np.tril(h, -2), 0.0, atol=1e-12)


@pytest.mark.parametrize("method", [arnoldi_mgs, arnoldi_householder])
def test_first_basis_vector_is_normalized_start(method):
    a, v = _problem()
    q, _ = method(a, v, 1e-10)
    np.testing.assert_allclose(q[:, 0], v / np.linalg.norm(v), atol=1e-12)


@pytest.mark.parametrize("method", [arnoldi_mgs, arnoldi_householder])
def test_invariant_subspace(method):
    a = np.diag([1.0, 2.0, 3.0, 4.0])
    v = np.array([1.0, 1.0, 0.0, 0.0])
    q, h = method(a, v, 1e-10)
    assert q.shape == (4, 2)
    np.testing.assert_allclose(np.sort(np.linalg.eigvals(h).real), [1.0, 2.0], atol=1e-10)


def test_complex_operator():
    rng = np.random.default_rng(12)
    a = rng.standard_normal((4, 4)) + 1j * rng.standard_normal((4, 4))
    v = rng.standard_normal(4) + 1j * rng.standard_normal(4)
    q, h = arnoldi_mgs(MatrixOperator(a), v, 1e-10)
    np.testing.assert_allclose(q.conj().T @ q, np.eye(4), atol=1e-10)
    np.testing.assert_allclose(a @ q, q @ h, atol=1e-8)


def test_iteration_yields_growing_coefficients():
    a, v = _problem(n=4)
    arnoldi = Arnoldi(a, v, MGS(4, 1e-10))
    assert arnoldi.dim() == 1
    lengths = [c.size for c in arnoldi]
    assert lengths == [2, 3, 4]
    assert arnoldi.dim() == 4
    with pytest.raises(StopIteration):
        next(arnoldi)


def test_rejects_non_empty_orthogonalizer():
    ortho = Householder(3, 1e-9)
    ortho.append(np.array([1.0, 0.0, 0.0]))
    with pytest.raises(ValueError):
        Arnoldi(np.eye(3), np.ones(3), ortho)


def test_rejects_large_tolerance():
    with pytest.raises(ValueError):
        Arnoldi(np.eye(3), np.ones(3), MGS(3, 1.5))