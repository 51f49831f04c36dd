"""Orthogonalization by Householder reflections."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from ndlinalg.krylov.orthogonalizer import AppendResult, Orthogonalizer, Strategy, qr
from ndlinalg.layout import _inexact_copy
from ndlinalg.norm import inner, norm_l2


def _phase(z):
    """``z / |z|``, or one when ``z`` is zero."""
    magnitude = abs(z)
    return z / magnitude if magnitude != 0 else 1.0


def calc_reflector(x: np.ndarray) -> None:
    """Overwrite ``x`` with the unit reflector ``w`` that maps it onto its first axis."""
    if x.size == 0:
        raise ValueError("cannot build a reflector from an empty vector")
    alpha = -_phase(x[0]) * norm_l2(x)
    x[0] -= alpha
    x *= 1.0 / norm_l2(x)


def reflect(w, a: np.ndarray) -> None:
    """Apply ``P = I - 2 w w^H`` to ``a`` in place."""
    w = np.asarray(w)
    if w.shape != a.shape:
        raise ValueError(f"size mismatch: {w.shape} and {a.shape}")
    c = 2 * inner(w, a)
    a -= c * w


class Householder(Orthogonalizer):
    """Iterative orthogonalizer storing Householder reflectors."""

    def __init__(self, dim: int, tol: float) -> None:
        self._dim = dim
        self._tol = tol
        self._v: list[np.ndarray] = []

    def dim(self) -> int:
        return self._dim

    def __len__(self) -> int:
        return len(self._v)

    def tolerance(self) -> float:
        return self._tol

    def _check(self, a: np.ndarray) -> None:
        if a.shape != (self._dim,):
            raise ValueError(
                f"input array of shape {a.shape} does not match dimension {self._dim}"
            )

    def forward_reflection(self, a: np.ndarray) -> None:
        """Apply ``P_l ... P_1`` to ``a`` in place."""
        self._check(a)
        for k, v in enumerate(self._v):
            reflect(v[k:], a[k:])

    def backward_reflection(self, a: np.ndarray) -> None:
        """Apply ``P_1 ... P_l`` to ``a`` in place."""
        self._check(a)
        for k in reversed(range(len(self._v))):
            reflect(self._v[k][k:], a[k:])

    def _compose_coefficients(self, a: np.ndarray) -> np.ndarray:
        k = len(self)
        residual = norm_l2(a[k:])
        coef = np.zeros(k + 1, dtype=np.result_type(a.dtype, np.float64))
        coef[:k] = a[:k]
        coef[k] = -_phase(a[k]) * residual if k < a.size else residual
        return coef

    def _construct_residual(self, a: np.ndarray) -> None:
        a[: len(self)] = 0
        self.backward_reflection(a)

    def _push_reflector(self, a: np.ndarray) -> None:
        k = len(self)
        w = np.array(a[k:])
        calc_reflector(w)
        reflector = np.zeros_like(a)
        reflector[k:] = w
        self._v.append(reflector)

    def decompose(self, a: np.ndarray) -> np.ndarray:
        self.forward_reflection(a)
        coef = self._compose_coefficients(a)
        self._construct_residual(a)
        return coef

    def coeff(self, a) -> np.ndarray:
        arr = _inexact_copy(a)
        self.forward_reflection(arr)
        return self._compose_coefficients(arr)

    def div_append(self, a: np.ndarray) -> AppendResult:
        """Append ``a``; on success ``a`` becomes the new unit basis vector.

        For a dependent vector ``a`` is overwritten with its residual.
        """
        self._check(a)
        k = len(self)
        self.forward_reflection(a)
        coef = self._compose_coefficients(a)
        if abs(coef[k]) < self._tol:
            self._construct_residual(a)
            return AppendResult(coef, is_dependent=True)
        self._push_reflector(a)
        a[:] = 0
        a[k] = 1
        self.backward_reflection(a)
        return AppendResult(coef)

    def append(self, a) -> AppendResult:
        arr = _inexact_copy(a)
        self._check(arr)
        k = len(self)
        self.forward_reflection(arr)
        coef = self._compose_coefficients(arr)
        if abs(coef[k]) < self._tol:
            return AppendResult(coef, is_dependent=True)
        self._push_reflector(arr)
        return AppendResult(coef)

    def get_q(self) -> np.ndarray:
        if not self._v:
            raise ValueError("no basis vector has been appended")
        q = np.zeros((self._dim, len(self)), dtype=self._v[0].dtype)
        for i in range(len(self)):
            column = q[:, i]
            column[i] = 1
            self.backward_reflection(column)
        return q


def householder(
    vectors: Iterable, dim: int, rtol: float, strategy: Strategy
) -> tuple[np.ndarray, np.ndarray]:
    """Online QR decomposition using Householder reflections."""
    return qr(vectors, Householder(dim, rtol), strategy)