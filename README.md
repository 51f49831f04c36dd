# ndlinalg

Linear algebra routines for NumPy arrays, built on NumPy and SciPy.

## What it offers

- **Memory layout**: `ndlinalg.layout` reports whether a matrix is stored
  row-major or column-major (`layout`, `square_layout`, `MatrixLayout`),
  checks squareness (`ensure_square`) and gives a flat view in memory order
  (`as_allocated`). `UPLO` selects the upper or lower triangle.
- **Decompositions**: reduced QR and square QR (`ndlinalg.qr.qr`,
  `qr_square`); Hermitian eigendecomposition, generalized and values-only
  (`ndlinalg.eigh.eigh`, `eigh_generalized`, `eigvalsh`); the symmetric
  square root `ssqrt`. Eigenvalues come in ascending order.
- **Least squares**: `ndlinalg.least_squares.least_squares` solves `A x = b`
  for a vector or a matrix right-hand side with the divide-and-conquer SVD
  driver. It returns a `LeastSquaresResult` holding the solution, the
  singular values, the rank and the residual sum of squares (`None` unless
  `A` has at least as many rows as columns and full column rank).
  `least_squares_in_place` may use its floating-point inputs as workspace.
- **Norms**: vector norms (`norm`, `norm_l1`, `norm_l2`, `norm_max`),
  row or column normalisation (`normalize` with `NormalizeAxis`) and the
  conjugated inner product `inner`, all in `ndlinalg.norm`. Operator norms
  (`opnorm` with `NormType`, `opnorm_one`, `opnorm_inf`, `opnorm_fro`) and
  the norms of a tridiagonal matrix given by its three diagonals
  (`tridiagonal_opnorm`) are in `ndlinalg.opnorm`.
- **Random matrices for testing**: `ndlinalg.generate` has `random`,
  `random_unitary`, `random_regular`, `random_hermite` and `random_hpd`
  (none uniformly distributed), plus `conjugate`, `from_diag`, `hstack` and
  `vstack`.
- **Linear operators**: `ndlinalg.linear_operator.LinearOperator` applies a
  map to vectors and column by column to matrices; `MatrixOperator` wraps a
  dense matrix.
- **Krylov subspaces**: the incremental orthogonalizers `Householder`
  (`ndlinalg.krylov.householder`) and `MGS` (`ndlinalg.krylov.mgs`), which
  share the `Orthogonalizer` interface and return `AppendResult` values;
  online QR with a `Strategy` for dependent vectors (`householder`, `mgs`,
  `ndlinalg.krylov.orthogonalizer.qr`); and Arnoldi iteration
  (`ndlinalg.krylov.arnoldi.Arnoldi`, `arnoldi_householder`, `arnoldi_mgs`),
  which returns the basis `Q` and the Hessenberg matrix `H`.
- **LOBPCG**: `ndlinalg.lobpcg.solver.lobpcg` finds a few of the largest or
  smallest eigenpairs (`Order.LARGEST`, `Order.SMALLEST`) of a symmetric
  problem, with an optional preconditioner and constraints. It returns a
  `LobpcgResult` with the best pairs seen and the error, if any, that stopped
  the iteration. `TruncatedEig` (`ndlinalg.lobpcg.truncated_eig`) and
  `TruncatedSvd` (`ndlinalg.lobpcg.truncated_svd`) are builder-style front
  ends.

Failures raise subclasses of `ndlinalg.error.LinalgError`, such as
`NotSquareError`, `IncompatibleShapeError` and `LapackError`.

## Installation

```
pip install .
```

## Examples

Solve a least-squares problem:

```python
import numpy as np
from ndlinalg.least_squares import least_squares

a = np.array([[1., 1., 1.], [2., 3., 4.], [3., 5., 2.], [4., 2., 5.], [5., 4., 3.]])
b = np.array([-10., 12., 14., 16., 18.])
result = least_squares(a, b)
print(result.solution)   # approximately [2., 1., 1.]
print(result.rank)       # 3
```

Find the three largest eigenvalues of a symmetric matrix, one at a time:

```python
from itertools import islice

import numpy as np
from ndlinalg.lobpcg.solver import Order
from ndlinalg.lobpcg.truncated_eig import TruncatedEig

a = np.diag(np.arange(1.0, 21.0))
solver = TruncatedEig(a, Order.LARGEST).precision(1e-5).maxiter(500)
for values, vectors in islice(solver, 3):
    print(values)   # about 20, then 19, then 18
```

Build an orthonormal basis one vector at a time:

```python
import numpy as np
from ndlinalg.krylov.mgs import MGS

ortho = MGS(3, 1e-9)
ortho.append(np.array([0.0, 1.0, 0.0]))
ortho.append(np.array([1.0, 1.0, 0.0]))
result = ortho.append(np.array([1.0, 2.0, 0.0]))
print(result.is_dependent)      # True
print(result.residual_norm())   # close to 0
```

## Limitations

- There is no command-line tool; this is a library only.
- LOBPCG and its truncated front ends handle real-valued problems only.
- General linear solvers, matrix inverses, Cholesky and LU factorizations,
  general (non-Hermitian) eigendecomposition and the full SVD are not
  provided.

## Running the tests

```
pip install ".[test]"
pytest
```