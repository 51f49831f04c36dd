"""Operator norms of dense and tridiagonal matrices."""

from __future__ import annotations

from enum import Enum

import numpy as np

from ndlinalg.error import IncompatibleShapeError
from ndlinalg.layout import _matrix, layout


class NormType(Enum):
    """Kind of matrix norm, named by the LAPACK ``*lange`` character."""

    ONE = "O"
    INFINITY = "I"
    FROBENIUS = "F"


def opnorm(a, t: NormType) -> float:
    """Compute the operator norm ``t`` of the matrix ``a``."""
    arr = _matrix(a)
    layout(arr)
    kind = NormType(t)
    if arr.size == 0:
        return 0.0
    magnitudes = np.abs(arr)
    if kind is NormType.ONE:
        return float(magnitudes.sum(axis=0).max())
    if kind is NormType.INFINITY:
        return float(magnitudes.sum(axis=1).max())
    return float(np.sqrt(np.sum(magnitudes * magnitudes)))


def opnorm_one(a) -> float:
    """Maximum absolute column sum."""
    return opnorm(a, NormType.ONE)


def opnorm_inf(a) -> float:
    """Maximum absolute row sum."""
    return opnorm(a, NormType.INFINITY)


def opnorm_fro(a) -> float:
    """Square root of the sum of squared magnitudes."""
    return opnorm(a, NormType.FROBENIUS)


def tridiagonal_opnorm(dl, d, du, t: NormType) -> float:
    """Operator norm of the tridiagonal matrix with sub-, main and super-diagonals.

    ``dl`` holds the entries below the diagonal, ``du`` those above it; both
    have one element fewer than ``d``.
    """
    dl = np.asarray(dl).ravel()
    d = np.asarray(d).ravel()
    du = np.asarray(du).ravel()
    n = d.size
    expected = max(n - 1, 0)
    if dl.size != expected or du.size != expected:
        raise IncompatibleShapeError(
            f"off-diagonals must have {expected} elements, got {dl.size} and {du.size}"
        )
    kind = NormType(t)
    if n == 0:
        return 0.0
    dtype = np.result_type(dl.dtype, d.dtype, du.dtype)
    zero = np.zeros(1, dtype=dtype)
    if kind is NormType.ONE:
        # Align each column: [u_j; d_j; l_{j+1}] as a 3 x n matrix.
        lower = np.concatenate([dl, zero])
        upper = np.concatenate([zero, du])
        arranged = np.stack([upper, d.astype(dtype), lower], axis=0)
    elif kind is NormType.INFINITY:
        # Align each row: [l_i, d_i, u_{i+1}] as an n x 3 matrix.
        lower = np.concatenate([zero, dl])
        upper = np.concatenate([du, zero])
        arranged = np.stack([lower, d.astype(dtype), upper], axis=1)
    else:
        arranged = np.concatenate([dl, d, du]).astype(dtype)[np.newaxis, :]
    return opnorm(arranged, kind)