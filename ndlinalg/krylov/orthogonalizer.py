"""Common interface of iterative orthogonalizers and online QR decomposition."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import numpy as np


@dataclass(frozen=True, eq=False)
class AppendResult:
    """Coefficients of a vector against the basis, and whether it was dependent.

    The last coefficient is the norm of the residual.
    """

    coeff: np.ndarray
    is_dependent: bool = False

    def residual_norm(self) -> float:
        """Magnitude of the last coefficient."""
        return float(abs(self.coeff[-1]))


class Strategy(Enum):
    """What online QR does with a linearly dependent vector."""

    TERMINATE = "terminate"
    SKIP = "skip"
    FULL = "full"


class Orthogonalizer(ABC):
    """Builds an orthonormal basis from vectors appended one at a time."""

    @abstractmethod
    def dim(self) -> int:
        """Dimension of the input vectors."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of basis vectors held."""

    def is_full(self) -> bool:
        """Whether the basis spans the whole space."""
        return len(self) == self.dim()

    def is_empty(self) -> bool:
        """Whether no basis vector is held."""
        return len(self) == 0

    @abstractmethod
    def tolerance(self) -> float:
        """Residual norm below which a vector counts as dependent."""

    @abstractmethod
    def decompose(self, a: np.ndarray) -> np.ndarray:
        """Return coefficients of ``a`` and overwrite ``a`` with its residual."""

    @abstractmethod
    def coeff(self, a) -> np.ndarray:
        """Return coefficients of ``a`` against the current basis."""

    @abstractmethod
    def append(self, a) -> AppendResult:
        """Add ``a`` to the basis unless it is dependent."""

    @abstractmethod
    def div_append(self, a: np.ndarray) -> AppendResult:
        """Like :meth:`append`, overwriting ``a`` with what remains of it."""

    @abstractmethod
    def get_q(self) -> np.ndarray:
        """Matrix whose columns are the basis vectors."""


def qr(vectors: Iterable, ortho: Orthogonalizer, strategy: Strategy) -> tuple[np.ndarray, np.ndarray]:
    """Online QR decomposition of ``vectors`` using an empty orthogonalizer."""
    if len(ortho) != 0:
        raise ValueError("the orthogonalizer must start empty")
    strategy = Strategy(strategy)
    coefs = []
    for vector in vectors:
        result = ortho.append(vector)
        if not result.is_dependent:
            coefs.append(result.coeff)
        elif strategy is Strategy.TERMINATE:
            break
        elif strategy is Strategy.FULL:
            coefs.append(result.coeff)
    n = len(ortho)
    dtype = np.result_type(*coefs) if coefs else np.float64
    r = np.zeros((n, len(coefs)), dtype=dtype, order="F")
    for j, c in enumerate(coefs):
        k = min(n, c.size)
        r[:k, j] = c[:k]
    return ortho.get_q(), r