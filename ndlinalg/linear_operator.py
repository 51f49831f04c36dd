"""Linear operators acting on vectors and matrices."""

from __future__ import annotations

import numpy as np

from ndlinalg.generate import hstack


class LinearOperator:
    """A linear map applied to vectors and, column by column, to matrices.

    Subclasses override ``apply`` or ``apply_mut``; each default is written
    in terms of the other.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.apply is LinearOperator.apply and cls.apply_mut is LinearOperator.apply_mut:
            raise TypeError(f"{cls.__name__} must override apply or apply_mut")

    def apply(self, a) -> np.ndarray:
        """Return the operator applied to vector ``a``."""
        out = np.array(a)
        self.apply_mut(out)
        return out

    def apply_mut(self, a: np.ndarray) -> None:
        """Overwrite vector ``a`` with the operator applied to it."""
        a[...] = self.apply(a)

    def apply2(self, a) -> np.ndarray:
        """Return the operator applied to each column of ``a``."""
        return hstack([self.apply(col) for col in np.asarray(a).T])

    def apply2_mut(self, a: np.ndarray) -> None:
        """Apply the operator to each column of ``a`` in place."""
        for col in a.T:
            self.apply_mut(col)


class MatrixOperator(LinearOperator):
    """Operator given by a dense matrix."""

    def __init__(self, matrix) -> None:
        self.matrix = np.asarray(matrix)

    def apply(self, a) -> np.ndarray:
        return self.matrix @ np.asarray(a)