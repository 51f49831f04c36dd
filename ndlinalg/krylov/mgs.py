"""Orthogonalization by the modified Gram-Schmidt procedure."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from ndlinalg.generate import hstack
from ndlinalg.krylov.orthogonalizer import AppendResult, Orthogonalizer, Strategy, qr
from ndlinalg.layout import _inexact_copy
from ndlinalg.norm import inner, norm_l2


class MGS(Orthogonalizer):
    """Iterative orthogonalizer using modified Gram-Schmidt."""

    def __init__(self, dim: int, tol: float) -> None:
        self._dim = dim
        self._tol = tol
        self._q: list[np.ndarray] = []

    def dim(self) -> int:
        return self._dim

    def __len__(self) -> int:
        return len(self._q)

    def tolerance(self) -> float:
        return self._tol

    def decompose(self, a: np.ndarray) -> np.ndarray:
        if a.shape != (self._dim,):
            raise ValueError(
                f"input array of shape {a.shape} does not match dimension {self._dim}"
            )
        coef = np.zeros(len(self) + 1, dtype=np.result_type(a.dtype, np.float64))
        for i, q in enumerate(self._q):
            c = inner(q, a)
            a -= c * q
            coef[i] = c
        coef[-1] = norm_l2(a)
        return coef

    def coeff(self, a) -> np.ndarray:
        return self.decompose(_inexact_copy(a))

    def append(self, a) -> AppendResult:
        return self.div_append(_inexact_copy(a))

    def div_append(self, a: np.ndarray) -> AppendResult:
        """Append ``a``; on success ``a`` becomes the new unit basis vector.

        For a dependent vector ``a`` is overwritten with its residual.
        """
        coef = self.decompose(a)
        nrm = float(np.real(coef[-1]))
        if nrm < self._tol:
            return AppendResult(coef, is_dependent=True)
        a /= nrm
        self._q.append(a.copy())
        return AppendResult(coef)

    def get_q(self) -> np.ndarray:
        return hstack(self._q)


def mgs(
    vectors: Iterable, dim: int, rtol: float, strategy: Strategy
) -> tuple[np.ndarray, np.ndarray]:
    """Online QR decomposition using modified Gram-Schmidt."""
    return qr(vectors, MGS(dim, rtol), strategy)