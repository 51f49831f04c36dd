"""Eigenvalue decomposition of Hermitian (real symmetric) matrices."""

from __future__ import annotations

import numpy as np
import scipy.linalg

from ndlinalg.error import IncompatibleShapeError, LapackError
from ndlinalg.layout import UPLO, _inexact_copy, _matrix, square_layout


def _square_copy(a) -> np.ndarray:
    arr = _inexact_copy(_matrix(a))
    square_layout(arr)
    return arr


def eigh(a, uplo: UPLO = UPLO.UPPER) -> tuple[np.ndarray, np.ndarray]:
    """Eigenvalues (ascending) and eigenvectors, reading the ``uplo`` triangle."""
    arr = _square_copy(a)
    try:
        return scipy.linalg.eigh(arr, lower=uplo is UPLO.LOWER)
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc


def eigh_generalized(a, b, uplo: UPLO = UPLO.UPPER) -> tuple[np.ndarray, np.ndarray]:
    """Solve ``A v = lambda B v`` for Hermitian ``A`` and positive-definite ``B``."""
    arr_a = _square_copy(a)
    arr_b = _square_copy(b)
    if arr_a.shape != arr_b.shape:
        raise IncompatibleShapeError(
            f"matrices of shape {arr_a.shape} and {arr_b.shape} do not match"
        )
    try:
        return scipy.linalg.eigh(arr_a, arr_b, lower=uplo is UPLO.LOWER)
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc


def eigvalsh(a, uplo: UPLO = UPLO.UPPER) -> np.ndarray:
    """Eigenvalues (ascending) without eigenvectors."""
    arr = _square_copy(a)
    try:
        return scipy.linalg.eigvalsh(arr, lower=uplo is UPLO.LOWER)
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc


def ssqrt(a, uplo: UPLO = UPLO.UPPER) -> np.ndarray:
    """Symmetric square root ``V sqrt(E) V^H``; negative eigenvalues give NaN."""
    values, vectors = eigh(a, uplo)
    with np.errstate(invalid="ignore"):
        roots = np.sqrt(values)
    return (vectors * roots) @ vectors.conj().T