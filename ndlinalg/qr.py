"""QR decomposition."""

from __future__ import annotations

import numpy as np
import scipy.linalg

from ndlinalg.error import LapackError
from ndlinalg.layout import _inexact_copy, _matrix, square_layout


def qr(a) -> tuple[np.ndarray, np.ndarray]:
    """Reduced QR decomposition: ``Q`` is n x k, ``R`` is k x m, k = min(n, m)."""
    arr = _inexact_copy(_matrix(a))
    try:
        q, r = scipy.linalg.qr(arr, mode="economic")
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc
    return q, r


def qr_square(a) -> tuple[np.ndarray, np.ndarray]:
    """QR decomposition of a square matrix."""
    arr = _inexact_copy(_matrix(a))
    square_layout(arr)
    try:
        q, r = scipy.linalg.qr(arr)
    except np.linalg.LinAlgError as exc:
        raise LapackError(str(exc)) from exc
    return q, np.triu(r)