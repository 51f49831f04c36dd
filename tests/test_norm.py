import numpy as np
import pytest

from ndlinalg.norm import (
    NormalizeAxis,
    inner,
    norm,
    norm_l1,
    norm_l2,
    norm_max,
    normalize,
)


def test_norms_of_simple_vector():
    v = np.array([3.0, -4.0])
    assert norm_l1(v) == pytest.approx(7.0)
    assert norm_l2(v) == pytest.approx(5.0)
    assert norm_max(v) == pytest.approx(4.0)


def test_norm_is_l2():
    v = np.array([1.0 + 2.0j, -3.0, 0.5j])
    assert norm(v) == norm_l2(v)


def test_complex_l2_matches_numpy():
    rng = np.random.default_rng(1)
    v = rng.normal(size=5) + 1j * rng.normal(size=5)
    assert norm_l2(v) == pytest.approx(np.linalg.norm(v))


def test_norm_max_of_empty_is_zero():
    assert norm_max(np.array([])) == 0.0


def test_norms_on_matrix_cover_all_elements():
    m = np.arange(6.0).reshape(2, 3)
    assert norm_l1(m) == pytest.approx(m.sum())
    assert norm_l2(m) == pytest.approx(np.linalg.norm(m.ravel()))


@pytest.mark.parametrize("axis", [NormalizeAxis.ROW, NormalizeAxis.COLUMN])
def test_normalize_gives_unit_lanes(axis):
    rng = np.random.default_rng(2)
    m = rng.normal(size=(3, 4))
    out, norms = normalize(m, axis)
    lanes = out if axis is NormalizeAxis.ROW else out.T
    original = m if axis is NormalizeAxis.ROW else m.T
    assert len(norms) == len(lanes)
    for lane, n, orig in zip(lanes, norms, original):
        assert norm_l2(lane) == pytest.approx(1.0)
        np.testing.assert_allclose(lane * n, orig)


def test_normalize_does_not_touch_input():
    m = np.array([[2.0, 0.0], [0.0, 2.0]])
    normalize(m, NormalizeAxis.ROW)
    np.testing.assert_array_equal(m, [[2.0, 0.0], [0.0, 2.0]])


def test_inner_conjugates_left():
    a = np.array([1.0 + 1.0j, 2.0])
    b = np.array([3.0j, 1.0 - 1.0j])
    assert inner(a, b) == pytest.approx(np.conj(inner(b, a)))
    assert inner(a, a) == pytest.approx(norm_l2(a) ** 2)


def test_inner_length_mismatch():
    with pytest.raises(ValueError):
        inner(np.ones(2), np.ones(3))