"""Truncated singular value decomposition built on LOBPCG."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ndlinalg.generate import random
from ndlinalg.layout import _inexact_copy, _matrix
from ndlinalg.lobpcg.solver import Order, lobpcg


def magnitude_correction(dtype) -> float:
    """Factor scaling machine epsilon into the cut-off for small singular values."""
    dtype = np.dtype(dtype)
    if dtype == np.float32:
        return 1.0e3
    if dtype == np.float64:
        return 1.0e6
    raise ValueError(f"no magnitude correction for dtype {dtype}")


@dataclass
class TruncatedSvdResult:
    """Eigenpairs of ``A^T A`` or ``A A^T``, not yet turned into singular triplets.

    ``ngm`` is true when ``A`` has more rows than columns, in which case the
    eigenvectors are right-singular vectors.
    """

    eigvals: np.ndarray
    eigvecs: np.ndarray
    problem: np.ndarray
    ngm: bool

    def _singular_values_with_indices(self) -> tuple[np.ndarray, list[int]]:
        eigvals = np.asarray(self.eigvals)
        if eigvals.size == 0:
            raise ValueError("no eigenvalues to turn into singular values")
        ordered = sorted(range(eigvals.size), key=lambda i: eigvals[i], reverse=True)
        dtype = eigvals.dtype if np.issubdtype(eigvals.dtype, np.floating) else np.float64
        cutoff = np.finfo(dtype).eps * magnitude_correction(dtype) * eigvals[ordered[0]]
        indices = [i for i in ordered if eigvals[i] > cutoff]
        values = np.sqrt(eigvals[indices])
        return values, indices

    def values(self) -> np.ndarray:
        """Singular values, largest first, with negligible ones dropped."""
        values, _ = self._singular_values_with_indices()
        return values

    def values_vectors(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(U, sigma, V^T)``."""
        values, indices = self._singular_values_with_indices()
        if self.ngm:
            v = self.eigvecs[:, indices]
            u = (self.problem @ v) / values
        else:
            u = self.eigvecs[:, indices]
            v = (self.problem.T @ u) / values
        return u, values, v.T.copy()


class TruncatedSvd:
    """Solver for a few of the largest or smallest singular triplets."""

    def __init__(self, problem, order: Order) -> None:
        self.problem = _inexact_copy(_matrix(problem))
        self.order = Order(order)
        self._precision = 1e-5
        self._maxiter = self.problem.shape[0] * 2

    def precision(self, precision: float) -> TruncatedSvd:
        """Set the convergence threshold on the singular values."""
        self._precision = float(precision)
        return self

    def maxiter(self, maxiter: int) -> TruncatedSvd:
        """Set the maximal number of iterations."""
        self._maxiter = int(maxiter)
        return self

    def decompose(self, num: int) -> TruncatedSvdResult:
        """Compute ``num`` singular triplets; raises ``LinalgError`` if nothing is found."""
        if num < 1:
            raise ValueError(
                "The number of singular values to compute should be larger than zero!"
            )
        n, m = self.problem.shape
        x = random((min(n, m), num), np.float32).astype(self.problem.dtype)
        precision = self._precision * self._precision
        problem = self.problem

        if n > m:
            def operator(y):
                return problem.T @ (problem @ y)
        else:
            def operator(y):
                return problem @ (problem.T @ y)

        result = lobpcg(operator, x, None, None, precision, self._maxiter, self.order)
        return TruncatedSvdResult(
            eigvals=result.eigvals,
            eigvecs=result.eigvecs,
            problem=problem,
            ngm=n > m,
        )