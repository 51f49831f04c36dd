"""Exceptions raised by the linear algebra routines."""

from __future__ import annotations


class LinalgError(Exception):
    """Base class of every error raised by this package."""


class NotSquareError(LinalgError):
    """The matrix is not square."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        super().__init__(f"Not square: rows({rows}) != cols({cols})")


class LapackError(LinalgError):
    """A LAPACK routine reported a failure."""

    def __init__(
        self, message: str = "LAPACK routine failed", return_code: int | None = None
    ) -> None:
        self.return_code = return_code
        super().__init__(message)


class InvalidStrideError(LinalgError):
    """The strides of the array cannot be handed to LAPACK."""

    def __init__(self, s0: int, s1: int) -> None:
        self.s0 = s0
        self.s1 = s1
        super().__init__(f"invalid stride: s0={s0}, s1={s1}")


class MemoryNotContError(LinalgError):
    """The array memory is not contiguous."""

    def __init__(self) -> None:
        super().__init__("Memroy is not continously")


class NotStandardShapeError(LinalgError):
    """An object cannot be built from a matrix of the given shape."""

    def __init__(self, obj: str, rows: int, cols: int) -> None:
        self.obj = obj
        self.rows = rows
        self.cols = cols
        super().__init__(f"{obj} cannot be made from a ({rows}, {cols}) matrix")


class IncompatibleShapeError(LinalgError, ValueError):
    """The shapes of the operands do not fit together."""

    def __init__(self, message: str = "incompatible shapes") -> None:
        super().__init__(message)