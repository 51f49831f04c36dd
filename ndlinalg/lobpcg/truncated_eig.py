"""Truncated eigenvalue decomposition built on LOBPCG."""

from __future__ import annotations

import copy

import numpy as np

from ndlinalg.error import LinalgError
from ndlinalg.generate import random
from ndlinalg.layout import _inexact_copy, _matrix
from ndlinalg.lobpcg.solver import LobpcgResult, Order, lobpcg


class TruncatedEig:
    """Solver for a few extreme eigenpairs of a symmetric matrix.

    Parameters are set builder-style: ``precision``, ``maxiter``,
    ``orthogonal_to`` and ``precondition_with`` each return the solver.
    Iterating over the solver yields one eigenvalue/eigenvector pair per step.
    """

    def __init__(self, problem, order: Order) -> None:
        self.problem = _inexact_copy(_matrix(problem))
        self.order = Order(order)
        self.constraints: np.ndarray | None = None
        self._preconditioner: np.ndarray | None = None
        self._precision = 1e-5
        self._maxiter = self.problem.shape[0] * 2

    def precision(self, precision: float) -> TruncatedEig:
        """Set the residual norm below which an eigenpair counts as converged."""
        self._precision = float(precision)
        return self

    def maxiter(self, maxiter: int) -> TruncatedEig:
        """Set the maximal number of iterations."""
        self._maxiter = int(maxiter)
        return self

    def orthogonal_to(self, constraints) -> TruncatedEig:
        """Search only in the orthogonal complement of the columns of ``constraints``."""
        self.constraints = _inexact_copy(_matrix(constraints))
        return self

    def precondition_with(self, preconditioner) -> TruncatedEig:
        """Use ``preconditioner`` (approximating the inverse problem) on residuals."""
        self._preconditioner = _inexact_copy(_matrix(preconditioner))
        return self

    def decompose(self, num: int) -> LobpcgResult:
        """Compute ``num`` eigenpairs from a random initial guess."""
        x = random((self.problem.shape[0], num), np.float64).astype(self.problem.dtype)
        preconditioner = self._preconditioner

        def precondition(y: np.ndarray) -> None:
            y[...] = preconditioner @ y

        return lobpcg(
            lambda y: self.problem @ y,
            x,
            precondition if preconditioner is not None else None,
            self.constraints,
            self._precision,
            self._maxiter,
            self.order,
        )

    def __iter__(self) -> TruncatedEigIterator:
        return TruncatedEigIterator(self)


class TruncatedEigIterator:
    """Yields eigenvalue/eigenvector pairs one at a time.

    Each found eigenvector is added to the constraints so the next step finds
    the following pair. Iteration stops when every pair has been found, when
    a pair does not converge, or when the solver fails.
    """

    def __init__(self, eig: TruncatedEig) -> None:
        self._eig = copy.copy(eig)
        self._step_size = 1
        self._remaining = eig.problem.shape[0]

    def __iter__(self) -> TruncatedEigIterator:
        return self

    def __next__(self) -> tuple[np.ndarray, np.ndarray]:
        if self._remaining == 0:
            raise StopIteration
        step_size = min(self._step_size, self._remaining)
        try:
            result = self._eig.decompose(step_size)
        except LinalgError:
            self._remaining = 0
            raise StopIteration from None

        if any(norm > 0.1 for norm in result.residual_norms):
            self._remaining = 0
            raise StopIteration

        vals, vecs = result.eigvals, result.eigvecs
        if self._eig.constraints is not None:
            self._eig.constraints = np.hstack([self._eig.constraints, vecs])
        else:
            self._eig.constraints = vecs.copy()
        self._remaining -= step_size
        return vals, vecs