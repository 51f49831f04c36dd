"""Inspect how a two-dimensional array is laid out in memory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ndlinalg.error import (
    IncompatibleShapeError,
    InvalidStrideError,
    MemoryNotContError,
    NotSquareError,
)


class UPLO(Enum):
    """Which triangle of a matrix holds the data."""

    UPPER = "U"
    LOWER = "L"


@dataclass(frozen=True)
class MatrixLayout:
    """Memory layout of a matrix: row-major ("C") or column-major ("F")."""

    order: str
    rows: int
    cols: int

    @property
    def lda(self) -> int:
        """Leading dimension of the matrix in memory."""
        return self.cols if self.order == "C" else self.rows

    def size(self) -> tuple[int, int]:
        """Return ``(rows, cols)``."""
        return self.rows, self.cols


def _matrix(a) -> np.ndarray:
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise IncompatibleShapeError(f"expected a 2-D array, got {arr.ndim}-D")
    return arr


def _inexact_copy(a) -> np.ndarray:
    """Return an owned floating-point or complex copy of ``a``."""
    arr = np.array(a)
    if not np.issubdtype(arr.dtype, np.inexact):
        arr = arr.astype(np.float64)
    return arr


def layout(a) -> MatrixLayout:
    """Return the layout of ``a`` or raise ``InvalidStrideError``."""
    arr = _matrix(a)
    rows, cols = arr.shape
    s0, s1 = (stride // arr.itemsize for stride in arr.strides)
    if rows == s1:
        return MatrixLayout("F", rows, cols)
    if cols == s0:
        return MatrixLayout("C", rows, cols)
    raise InvalidStrideError(s0, s1)


def square_layout(a) -> MatrixLayout:
    """Return the layout of ``a``, requiring it to be square."""
    found = layout(a)
    rows, cols = found.size()
    if rows != cols:
        raise NotSquareError(rows, cols)
    return found


def ensure_square(a) -> None:
    """Raise ``NotSquareError`` unless ``a`` is square."""
    rows, cols = _matrix(a).shape
    if rows != cols:
        raise NotSquareError(rows, cols)


def as_allocated(a) -> np.ndarray:
    """Return a flat view of ``a`` in memory order."""
    arr = _matrix(a)
    if arr.flags.c_contiguous:
        return arr.ravel(order="C")
    if arr.flags.f_contiguous:
        return arr.ravel(order="F")
    raise MemoryNotContError()