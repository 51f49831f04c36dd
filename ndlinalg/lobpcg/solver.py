"""Locally Optimal Block Preconditioned Conjugate Gradient (LOBPCG) eigensolver.

LOBPCG finds a few of the largest or smallest eigenpairs of a large symmetric
(positive-definite) problem. Only real-valued problems are supported.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np
import scipy.linalg

from ndlinalg.eigh import eigh, eigh_generalized
from ndlinalg.error import LapackError, LinalgError
from ndlinalg.layout import UPLO, _inexact_copy, _matrix


class Order(Enum):
    """Whether to look for the largest or the smallest eigenvalues."""

    LARGEST = "largest"
    SMALLEST = "smallest"


TruncatedOrder = Order


@dataclass
class LobpcgResult:
    """Best eigenpairs found by :func:`lobpcg`.

    ``error`` is ``None`` when the solver finished normally (all residuals
    below the tolerance, or the iteration limit reached). Otherwise it holds
    the error that stopped the iteration; the pairs are then still the best
    ones seen and may be usable.
    """

    eigvals: np.ndarray
    eigvecs: np.ndarray
    residual_norms: list[float]
    error: LinalgError | None = None

    @property
    def converged(self) -> bool:
        """Whether the solver stopped without an error."""
        return self.error is None


def sorted_eig(a, b, size: int, order: Order) -> tuple[np.ndarray, np.ndarray]:
    """Solve the (generalized) symmetric eigenproblem and keep ``size`` pairs.

    For :attr:`Order.LARGEST` the pairs come largest first, for
    :attr:`Order.SMALLEST` smallest first.
    """
    a = _matrix(a)
    n = a.shape[0]
    if size > n:
        raise ValueError(f"cannot select {size} eigenpairs of a {n} x {n} problem")
    if b is None:
        vals, vecs = eigh(a, UPLO.UPPER)
    else:
        vals, vecs = eigh_generalized(a, b, UPLO.UPPER)
    if Order(order) is Order.LARGEST:
        return vals[n - size:][::-1].copy(), vecs[:, n - size:][:, ::-1].copy()
    return vals[:size].copy(), vecs[:, :size].copy()


def mask_columns(matrix, mask: Sequence[bool]) -> np.ndarray:
    """Return a copy of the columns of ``matrix`` whose mask entry is true."""
    arr = _matrix(matrix)
    selector = np.asarray(mask, dtype=bool)
    if selector.shape != (arr.shape[1],):
        raise ValueError(
            f"mask of length {selector.size} does not match {arr.shape[1]} columns"
        )
    return arr[:, selector].copy()


def _cholesky_lower(a: np.ndarray) -> np.ndarray:
    try:
        return scipy.linalg.cholesky(a, lower=True, check_finite=False)
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc


def _solve_lower(lower: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    try:
        return scipy.linalg.solve_triangular(
            lower, rhs, lower=True, check_finite=False
        )
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc


def _apply_constraints(v: np.ndarray, cholesky_yy, y: np.ndarray) -> None:
    """Make the columns of ``v`` orthogonal to the column space of ``y`` in place."""
    gram_yv = y.T @ v
    u = scipy.linalg.cho_solve(cholesky_yy, gram_yv, check_finite=False)
    v -= y @ u


def orthonormalize(v) -> tuple[np.ndarray, np.ndarray]:
    """Orthonormalize the columns of ``v`` through a Cholesky factorization.

    Returns the orthonormal matrix and the lower factor ``L`` of ``V^T V``,
    i.e. the transposed ``R`` of the QR problem.
    """
    arr = _inexact_copy(_matrix(v))
    gram = arr.T @ arr
    lower = _cholesky_lower(gram)
    u = _solve_lower(lower, arr.T).T
    return u, lower


def lobpcg(
    a: Callable[[np.ndarray], np.ndarray],
    x,
    m: Callable[[np.ndarray], None] | None = None,
    y=None,
    tol: float = 1e-5,
    maxiter: int = 100,
    order: Order = Order.LARGEST,
) -> LobpcgResult:
    """Find a few extreme eigenpairs of a large symmetric problem.

    ``a`` maps an ``n x k`` block to the operator applied to it. ``x`` is the
    ``n x k`` initial guess. ``m`` is an optional preconditioner that modifies
    its argument in place. ``y`` optionally holds full-rank constraints: the
    search happens in the orthogonal complement of its columns. An eigenpair
    stops being refined once its residual L2 norm falls below ``tol``; at most
    ``min(10 n, maxiter)`` iterations are made.

    The best result over all iterations is returned. If the solver fails before
    any result exists a :class:`LinalgError` is raised.
    """
    x = _inexact_copy(_matrix(x))
    n, size_x = x.shape
    if size_x > n:
        raise ValueError(f"{size_x} vectors requested in a space of dimension {n}")

    iterations_left = min(n * 10, maxiter)
    tol = float(tol)
    order = Order(order)

    cholesky_yy = None
    if y is not None:
        y = _inexact_copy(_matrix(y))
        try:
            cholesky_yy = scipy.linalg.cho_factor(
                y.T @ y, lower=True, check_finite=False
            )
        except np.linalg.LinAlgError as exc:
            raise LapackError(str(exc)) from exc
        _apply_constraints(x, cholesky_yy, y)

    x, _ = orthonormalize(x)
    ax = a(x)
    xax = x.T @ ax
    lam, eig_block = sorted_eig(xax, None, size_x, order)

    x = x @ eig_block
    ax = ax @ eig_block

    active = [True] * size_x
    best: tuple[np.ndarray, np.ndarray, list[float]] | None = None
    previous_p_ap: tuple[np.ndarray, np.ndarray] | None = None
    final_error: LinalgError | None = None

    while True:
        r = ax - x * lam
        residual_norms = [float(np.linalg.norm(col)) for col in r.T]

        if best is None or sum(best[2]) > sum(residual_norms):
            best = (lam.copy(), x.copy(), list(residual_norms))

        active = [norm > tol and flag for norm, flag in zip(residual_norms, active)]
        block_size = sum(active)
        if block_size == 0 or iterations_left == 0:
            break

        active_r = mask_columns(r, active)
        if m is not None:
            m(active_r)
        if cholesky_yy is not None:
            _apply_constraints(active_r, cholesky_yy, y)
        active_r -= x @ (x.T @ active_r)

        try:
            r, _ = orthonormalize(active_r)
        except LinalgError as err:
            final_error = err
            break

        ar = a(r)

        xar = x.T @ ar
        rar = r.T @ ar
        rar = (rar + rar.T) / 2
        xax = x.T @ ax
        xax = (xax + xax.T) / 2
        xx = x.T @ x
        rr = r.T @ r
        xr = x.T @ r

        p_ap = None
        if previous_p_ap is not None:
            prev_p, prev_ap = previous_p_ap
            try:
                active_p, p_r = orthonormalize(mask_columns(prev_p, active))
                active_ap = _solve_lower(p_r, mask_columns(prev_ap, active).T).T
                p_ap = (active_p, active_ap)
            except LinalgError:
                p_ap = None

        result = None
        if p_ap is not None:
            active_p, active_ap = p_ap
            xap = x.T @ active_ap
            rap = r.T @ active_ap
            pap = active_p.T @ active_ap
            pap = (pap + pap.T) / 2
            xp = x.T @ active_p
            rp = r.T @ active_p
            pp = active_p.T @ active_p
            try:
                result = sorted_eig(
                    np.block([[xax, xar, xap], [xar.T, rar, rap], [xap.T, rap.T, pap]]),
                    np.block([[xx, xr, xp], [xr.T, rr, rp], [xp.T, rp.T, pp]]),
                    size_x,
                    order,
                )
            except LinalgError:
                p_ap = None

        if result is None:
            try:
                result = sorted_eig(
                    np.block([[xax, xar], [xar.T, rar]]),
                    np.block([[xx, xr], [xr.T, rr]]),
                    size_x,
                    order,
                )
            except LinalgError as err:
                final_error = err
                break

        lam, eig_vecs = result
        tau = eig_vecs[:size_x]
        if p_ap is not None:
            active_p, active_ap = p_ap
            alpha = eig_vecs[size_x:size_x + block_size]
            gamma = eig_vecs[size_x + block_size:]
            p = r @ alpha + active_p @ gamma
            ap = ar @ alpha + active_ap @ gamma
        else:
            alpha = eig_vecs[size_x:]
            p = r @ alpha
            ap = ar @ alpha

        x = x @ tau + p
        ax = ax @ tau + ap
        previous_p_ap = (p, ap)
        iterations_left -= 1

    vals, vecs, norms = best
    return LobpcgResult(vals, vecs, norms, final_error)