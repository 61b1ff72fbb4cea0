import math

import pytest

from lensing.vector_utils import clamp, vec_add, vec_dist, vec_len, vec_norm, vec_scale, vec_sub


def test_basic_arithmetic():
    assert vec_add((1.0, 2.0), (3.0, -4.0)) == (4.0, -2.0)
    assert vec_sub((1.0, 2.0), (3.0, -4.0)) == (-2.0, 6.0)
    assert vec_scale((1.5, -2.0), 2.0) == (3.0, -4.0)


def test_length_and_distance():
    assert vec_len((3.0, 4.0)) == 5.0
    assert vec_len((0.0, 0.0)) == 0.0
    assert vec_dist((1.0, 1.0), (4.0, 5.0)) == 5.0


def test_normalize_unit_length():
    n = vec_norm((10.0, -10.0))
    assert vec_len(n) == pytest.approx(1.0)
    assert n[0] == pytest.approx(math.sqrt(0.5))
    assert n[1] == pytest.approx(-math.sqrt(0.5))


@pytest.mark.parametrize("v", [(0.0, 0.0), (1e-12, -1e-12)])
def test_normalize_zero_vector_is_zero(v):
    n = vec_norm(v)
    assert n == (0.0, 0.0)
    assert not any(math.isnan(c) for c in n)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2
