"""Arnoldi iteration."""

from __future__ import annotations

import numpy as np

from ndlinalg.krylov.householder import Householder
from ndlinalg.krylov.mgs import MGS
from ndlinalg.krylov.orthogonalizer import Orthogonalizer
from ndlinalg.layout import _inexact_copy
from ndlinalg.linear_operator import LinearOperator, MatrixOperator
from ndlinalg.norm import norm_l2


class Arnoldi:
    """Arnoldi iteration; each step yields the next column of the Hessenberg matrix."""

    def __init__(self, a, v, ortho: Orthogonalizer) -> None:
        if len(ortho) != 0:
            raise ValueError("the orthogonalizer must start empty")
        if not ortho.tolerance() < 1:
            raise ValueError("the tolerance must be smaller than one")
        vector = _inexact_copy(v)
        if isinstance(a, LinearOperator):
            operator = a
        else:
            operator = MatrixOperator(a)
            vector = vector.astype(np.result_type(vector.dtype, operator.matrix.dtype))
        with np.errstate(divide="ignore", invalid="ignore"):
            vector /= norm_l2(vector)
        ortho.append(vector)
        self._a = operator
        self._v = vector
        self._ortho = ortho
        self._h: list[np.ndarray] = []
        self._done = False

    def dim(self) -> int:
        """Dimension of the Krylov subspace built so far."""
        return len(self._ortho)

    def __iter__(self) -> Arnoldi:
        return self

    def __next__(self) -> np.ndarray:
        if self._done:
            raise StopIteration
        self._a.apply_mut(self._v)
        result = self._ortho.div_append(self._v)
        with np.errstate(divide="ignore", invalid="ignore"):
            self._v /= norm_l2(self._v)
        self._h.append(result.coeff)
        if result.is_dependent:
            self._done = True
            raise StopIteration
        return result.coeff

    def complete(self) -> tuple[np.ndarray, np.ndarray]:
        """Iterate to convergence and return the basis ``Q`` and Hessenberg ``H``."""
        for _ in self:
            pass
        q = self._ortho.get_q()
        n = len(self._h)
        dtype = np.result_type(*self._h) if self._h else self._v.dtype
        h = np.zeros((n, n), dtype=dtype, order="F")
        for i, column in enumerate(self._h):
            m = min(n, i + 2)
            h[:m, i] = column[:m]
        return q, h


def arnoldi_householder(a, v, tol: float) -> tuple[np.ndarray, np.ndarray]:
    """Arnoldi iteration with Householder orthogonalization."""
    return Arnoldi(a, v, Householder(np.asarray(v).size, tol)).complete()


def arnoldi_mgs(a, v, tol: float) -> tuple[np.ndarray, np.ndarray]:
    """Arnoldi iteration with modified Gram-Schmidt orthogonalization."""
    return Arnoldi(a, v, MGS(np.asarray(v).size, tol)).complete()