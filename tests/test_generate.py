import numpy as np
import pytest

from ndlinalg.error import IncompatibleShapeError
from ndlinalg.generate import (
    conjugate,
    from_diag,
    hstack,
    random,
    random_hermite,
    random_hpd,
    random_regular,
    random_unitary,
    vstack,
)


def test_conjugate_is_conjugate_transpose():
    a = np.array([[1 + 2j, 3], [4j, 5 - 1j], [0, 1]])
    c = conjugate(a)
    assert c.shape == (2, 3)
    np.testing.assert_array_equal(c, a.T.conj())
    np.testing.assert_array_equal(conjugate(c), a)


@pytest.mark.parametrize("dtype", [np.float64, np.float32, np.complex128])
def test_random_shape_and_dtype(dtype):
    a = random((3, 4), dtype)
    assert a.shape == (3, 4)
    assert a.dtype == np.dtype(dtype)


def test_random_complex_has_imaginary_part():
    a = random(50, np.complex128)
    assert np.any(a.imag != 0)


@pytest.mark.parametrize("dtype", [np.float64, np.complex128])
def test_random_unitary(dtype):
    u = random_unitary(4, dtype)
    np.testing.assert_allclose(u.conj().T @ u, np.eye(4), atol=1e-10)


def test_random_regular_is_invertible():
    a = random_regular(5)
    np.testing.assert_allclose(a @ np.linalg.inv(a), np.eye(5), atol=1e-8)


@pytest.mark.parametrize("dtype", [np.float64, np.complex128])
def test_random_hermite(dtype):
    a = random_hermite(5, dtype)
    np.testing.assert_allclose(a, a.conj().T)
    assert np.all(np.diag(a).imag == 0)


@pytest.mark.parametrize("dtype", [np.float64, np.complex128])
def test_random_hpd_eigenvalues_at_least_one(dtype):
    a = random_hpd(4, dtype)
    np.testing.assert_allclose(a, a.conj().T, atol=1e-12)
    assert np.all(np.linalg.eigvalsh(a) >= 1 - 1e-10)


def test_from_diag():
    m = from_diag([1.0, 2.0, 3.0])
    np.testing.assert_array_equal(np.diag(m), [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(m - np.diag(np.diag(m)), np.zeros((3, 3)))


def test_hstack_and_vstack():
    xs = [np.array([1.0, 2.0]), np.array([3.0, 4.0]), np.array([5.0, 6.0])]
    h = hstack(xs)
    v = vstack(xs)
    assert h.shape == (2, 3)
    assert v.shape == (3, 2)
    for i, x in enumerate(xs):
        np.testing.assert_array_equal(h[:, i], x)
        np.testing.assert_array_equal(v[i], x)


def test_stack_mismatched_lengths():
    with pytest.raises(IncompatibleShapeError):
        hstack([np.ones(2), np.ones(3)])


def test_stack_empty():
    with pytest.raises(IncompatibleShapeError):
        vstack([])