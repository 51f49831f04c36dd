"""Vector norms, normalisation and the conjugated inner product."""

from __future__ import annotations

from enum import IntEnum

import numpy as np

from ndlinalg.layout import _inexact_copy, _matrix


class NormalizeAxis(IntEnum):
    """Normalise the rows or the columns of a matrix."""

    ROW = 0
    COLUMN = 1


def norm_l1(a) -> float:
    """Sum of absolute values."""
    return float(np.sum(np.abs(np.asarray(a))))


def norm_l2(a) -> float:
    """Euclidean norm of all elements."""
    values = np.abs(np.asarray(a))
    return float(np.sqrt(np.sum(values * values)))


def norm(a) -> float:
    """Alias of :func:`norm_l2`."""
    return norm_l2(a)


def norm_max(a) -> float:
    """Largest absolute value, zero for an empty array."""
    return float(np.max(np.abs(np.asarray(a)), initial=0.0))


def normalize(m, axis: NormalizeAxis) -> tuple[np.ndarray, list[float]]:
    """Scale each row or column of ``m`` to unit L2 norm.

    Returns the normalised copy and the norms that were divided out.
    """
    arr = _inexact_copy(_matrix(m))
    lanes = arr if NormalizeAxis(axis) is NormalizeAxis.ROW else arr.T
    norms = []
    with np.errstate(divide="ignore", invalid="ignore"):
        for lane in lanes:
            n = norm_l2(lane)
            norms.append(n)
            lane /= n
    return arr, norms


def inner(a, b):
    """Inner product that conjugates the elements of ``a``."""
    a = np.asarray(a)
    b = np.asarray(b)
    if a.shape != b.shape:
        raise ValueError(f"length mismatch: {a.shape} and {b.shape}")
    return np.vdot(a, b)