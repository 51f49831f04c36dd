import numpy as np
import pytest

from ndlinalg.lobpcg.solver import Order
from ndlinalg.lobpcg.truncated_eig import TruncatedEig, TruncatedEigIterator


def _diag20():
    return np.diag(np.arange(1.0, 21.0))


def test_truncated_eig():
    teig = TruncatedEig(_diag20(), Order.LARGEST).precision(1e-5).maxiter(500)
    res = []
    for vals, _ in teig:
        res.extend(vals.tolist())
        if len(res) >= 3:
            break
    ground_truth = [20.0, 19.0, 18.0]
    assert len(res) == 3
    assert sum((x - y) ** 2 for x, y in zip(ground_truth, res)) < 0.01


def test_builder_returns_same_solver():
    teig = TruncatedEig(_diag20(), Order.LARGEST)
    assert teig.precision(1e-3) is teig
    assert teig.maxiter(10) is teig


def test_decompose_several():
    result = TruncatedEig(_diag20(), Order.SMALLEST).maxiter(500).decompose(3)
    np.testing.assert_allclose(result.eigvals, [1.0, 2.0, 3.0], atol=1e-3)


def test_orthogonal_to_skips_constrained_direction():
    constraint = np.zeros((20, 1))
    constraint[19, 0] = 1.0
    teig = TruncatedEig(_diag20(), Order.LARGEST).maxiter(500).orthogonal_to(constraint)
    result = teig.decompose(1)
    assert abs(result.eigvals[0] - 19.0) < 1e-3


def test_precondition_with_identity():
    teig = (
        TruncatedEig(_diag20(), Order.LARGEST)
        .maxiter(500)
        .precondition_with(np.eye(20))
    )
    result = teig.decompose(1)
    assert abs(result.eigvals[0] - 20.0) < 1e-3


def test_iteration_yields_all_pairs():
    teig = TruncatedEig(np.diag([1.0, 2.0, 3.0, 4.0, 5.0]), Order.LARGEST).maxiter(500)
    values = [float(vals[0]) for vals, _ in teig]
    assert len(values) == 5
    np.testing.assert_allclose(values, [5.0, 4.0, 3.0, 2.0, 1.0], atol=1e-3)


def test_iterator_does_not_modify_solver():
    teig = TruncatedEig(_diag20(), Order.LARGEST).maxiter(500)
    iterator = iter(teig)
    next(iterator)
    assert teig.constraints is None


def test_exhausted_iterator_stays_exhausted():
    iterator = TruncatedEigIterator(TruncatedEig(np.diag([2.0]), Order.LARGEST))
    vals, _ = next(iterator)
    assert abs(vals[0] - 2.0) < 1e-9
    with pytest.raises(StopIteration):
        next(iterator)
    with pytest.raises(StopIteration):
        next(iterator)