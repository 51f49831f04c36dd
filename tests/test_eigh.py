import numpy as np
import pytest

from ndlinalg.eigh import eigh, eigh_generalized, eigvalsh, ssqrt
from ndlinalg.error import IncompatibleShapeError, NotSquareError
from ndlinalg.generate import random_hermite, random_hpd
from ndlinalg.layout import UPLO


@pytest.mark.parametrize("dtype", [np.float64, np.complex128])
def test_eigh_decomposes(dtype):
    a = random_hermite(5, dtype)
    w, v = eigh(a)
    np.testing.assert_allclose(a @ v, v * w, atol=1e-10)
    assert np.all(np.diff(w) >= 0)
    np.testing.assert_allclose(v.conj().T @ v, np.eye(5), atol=1e-10)


def test_eigh_reads_requested_triangle():
    a = np.array([[2.0, 100.0], [1.0, 3.0]])
    w_lower, _ = eigh(a, UPLO.LOWER)
    w_upper, _ = eigh(a, UPLO.UPPER)
    sym_lower = np.tril(a) + np.tril(a, -1).T
    sym_upper = np.triu(a) + np.triu(a, 1).T
    np.testing.assert_allclose(w_lower, np.linalg.eigvalsh(sym_lower))
    np.testing.assert_allclose(w_upper, np.linalg.eigvalsh(sym_upper))


def test_eigh_leaves_input_untouched():
    a = random_hermite(3)
    before = a.copy()
    eigh(a)
    np.testing.assert_array_equal(a, before)


def test_eigvalsh_matches_eigh():
    a = random_hermite(4, np.complex128)
    w, _ = eigh(a)
    np.testing.assert_allclose(eigvalsh(a), w, atol=1e-10)


def test_eigh_generalized():
    a = random_hermite(4)
    b = random_hpd(4)
    w, v = eigh_generalized(a, b)
    np.testing.assert_allclose(a @ v, (b @ v) * w, atol=1e-8)


def test_eigh_generalized_shape_mismatch():
    with pytest.raises(IncompatibleShapeError):
        eigh_generalized(np.eye(2), np.eye(3))


def test_ssqrt_squares_back():
    a = random_hpd(4)
    s = ssqrt(a)
    np.testing.assert_allclose(s @ s, a, atol=1e-8)
    np.testing.assert_allclose(s, s.T, atol=1e-10)


def test_ssqrt_of_negative_eigenvalue_is_nan():
    s = ssqrt(np.diag([-1.0, 4.0]))
    assert np.isnan(s).any()


@pytest.mark.parametrize("func", [eigh, eigvalsh, ssqrt])
def test_not_square(func):
    with pytest.raises(NotSquareError):
        func(np.ones((2, 3)))