"""Generators of test matrices and stacking helpers."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ndlinalg.error import IncompatibleShapeError
from ndlinalg.qr import qr


def conjugate(a) -> np.ndarray:
    """Hermitian conjugate (conjugate transpose) as a new array."""
    return np.array(np.asarray(a).T.conj())


def random(shape, dtype=np.float64) -> np.ndarray:
    """Random array of the given shape; complex dtypes get random imaginary parts."""
    rng = np.random.default_rng()
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.complexfloating):
        values = rng.random(shape) + 1j * rng.random(shape)
    else:
        values = rng.random(shape)
    return np.asarray(values, dtype=dtype)


def random_unitary(n: int, dtype=np.float64) -> np.ndarray:
    """Random unitary matrix from a QR decomposition; not uniformly distributed."""
    q, _ = qr(random((n, n), dtype))
    return q


def random_regular(n: int, dtype=np.float64) -> np.ndarray:
    """Random non-singular matrix; not uniformly distributed."""
    q, r = qr(random((n, n), dtype))
    idx = np.arange(n)
    r[idx, idx] = 1 + np.abs(r[idx, idx])
    return q @ r


def random_hermite(n: int, dtype=np.float64) -> np.ndarray:
    """Random Hermitian matrix."""
    a = random((n, n), dtype)
    lower = np.tril(a, -1)
    diag = np.diag(a)
    return lower + lower.conj().T + np.diag(diag + diag.conj())


def random_hpd(n: int, dtype=np.float64) -> np.ndarray:
    """Random Hermitian positive-definite matrix with eigenvalues of at least one."""
    a = random((n, n), dtype)
    return np.eye(n, dtype=a.dtype) + conjugate(a) @ a


def from_diag(d) -> np.ndarray:
    """Square matrix with ``d`` on its diagonal."""
    return np.diag(np.asarray(d))


def _stack(xs: Sequence, axis: int) -> np.ndarray:
    arrays = [np.asarray(x) for x in xs]
    if not arrays:
        raise IncompatibleShapeError("cannot stack an empty sequence")
    if any(x.ndim != 1 for x in arrays):
        raise IncompatibleShapeError("only 1-D vectors can be stacked")
    try:
        return np.stack(arrays, axis=axis)
    except ValueError as exc:
        raise IncompatibleShapeError(str(exc)) from exc


def hstack(xs: Sequence) -> np.ndarray:
    """Stack vectors as the columns of a matrix."""
    return _stack(xs, 1)


def vstack(xs: Sequence) -> np.ndarray:
    """Stack vectors as the rows of a matrix."""
    return _stack(xs, 0)