"""Least-squares solutions of ``A x = b`` via the divide-and-conquer SVD (``*gelsd``).

The solution ``x`` minimises the 2-norm ``|b - A x|``. The right-hand side
may be a vector or a matrix whose columns are solved for at once.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.linalg

from ndlinalg.error import IncompatibleShapeError, LapackError
from ndlinalg.layout import _matrix


@dataclass
class LeastSquaresResult:
    """Outcome of a least-squares solve.

    ``residual_sum_of_squares`` is ``None`` unless ``A`` has at least as many
    rows as columns and full column rank. For a vector right-hand side it is a
    single real number; for a matrix right-hand side it holds one value per
    column.
    """

    singular_values: np.ndarray
    solution: np.ndarray
    rank: int
    residual_sum_of_squares: float | np.ndarray | None


def _check_shapes(a: np.ndarray, b: np.ndarray) -> None:
    if b.ndim not in (1, 2):
        raise IncompatibleShapeError(
            f"right-hand side must be 1-D or 2-D, got {b.ndim}-D"
        )
    if a.shape[0] != b.shape[0]:
        raise IncompatibleShapeError(
            f"matrix has {a.shape[0]} rows but right-hand side has {b.shape[0]}"
        )


def _solve(a: np.ndarray, b: np.ndarray, overwrite: bool) -> LeastSquaresResult:
    _check_shapes(a, b)
    m, n = a.shape
    try:
        solution, residues, rank, singular_values = scipy.linalg.lstsq(
            a,
            b,
            overwrite_a=overwrite,
            overwrite_b=overwrite,
            lapack_driver="gelsd",
        )
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc
    rank = int(rank)

    residual: float | np.ndarray | None
    if m < n or rank != n:
        residual = None
    else:
        real_dtype = np.abs(np.zeros(1, dtype=solution.dtype)).dtype
        if m == n or np.size(residues) == 0:
            sums = np.zeros(b.shape[1:] or (1,), dtype=real_dtype)
        else:
            sums = np.asarray(residues, dtype=real_dtype)
        residual = float(sums[0]) if b.ndim == 1 else sums

    return LeastSquaresResult(
        singular_values=np.asarray(singular_values),
        solution=np.asarray(solution),
        rank=rank,
        residual_sum_of_squares=residual,
    )


def _common_inexact(a: np.ndarray, b: np.ndarray):
    dtype = np.result_type(a.dtype, b.dtype)
    if not np.issubdtype(dtype, np.inexact):
        dtype = np.float64
    return dtype


def least_squares(a, b) -> LeastSquaresResult:
    """Solve ``A x = b`` in the least-squares sense; ``a`` and ``b`` are untouched."""
    arr_a = _matrix(a)
    arr_b = np.asarray(b)
    dtype = _common_inexact(arr_a, arr_b)
    return _solve(np.array(arr_a, dtype=dtype), np.array(arr_b, dtype=dtype), True)


def least_squares_in_place(a, b) -> LeastSquaresResult:
    """Solve ``A x = b`` in the least-squares sense, allowing ``a`` and ``b`` to be overwritten.

    Arrays of a floating-point or complex type may be used as workspace and
    are left in an unspecified state; other inputs are converted first.
    """
    arr_a = _matrix(a)
    arr_b = np.asarray(b)
    dtype = _common_inexact(arr_a, arr_b)
    if arr_a.dtype != dtype:
        arr_a = arr_a.astype(dtype)
    if arr_b.dtype != dtype:
        arr_b = arr_b.astype(dtype)
    return _solve(arr_a, arr_b, True)