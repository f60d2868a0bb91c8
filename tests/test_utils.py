import numpy as np
import pytest

from knowhere.dataset import gen_dataset
from knowhere.utils import normalize, normalize_vec


def test_normalize_vec_gives_unit_norm():
    x = np.array([3.0, 4.0, 12.0], dtype=np.float32)
    out = normalize_vec(x)
    assert float(np.linalg.norm(out)) == pytest.approx(1.0, abs=1e-6)


def test_normalize_vec_is_in_place_for_float_arrays():
    x = np.array([2.0, 0.0], dtype=np.float32)
    out = normalize_vec(x)
    assert out is x
    assert x.tolist() == pytest.approx([1.0, 0.0])


def test_normalize_vec_keeps_direction():
    x = np.array([1.0, 2.0, -2.0], dtype=np.float32)
    original = x.copy()
    normalize_vec(x)
    ratio = x / original
    assert np.allclose(ratio, ratio[0])
    assert ratio[0] > 0


def test_normalize_vec_zero_vector_unchanged():
    x = np.zeros(4, dtype=np.float32)
    normalize_vec(x)
    assert x.tolist() == [0.0, 0.0, 0.0, 0.0]


def test_normalize_vec_unit_vector_untouched():
    x = np.array([0.6, 0.8], dtype=np.float32)
    before = x.copy()
    normalize_vec(x)
    assert np.array_equal(x, before)


def test_normalize_vec_accepts_list():
    out = normalize_vec([5.0, 0.0, 0.0])
    assert out.tolist() == pytest.approx([1.0, 0.0, 0.0])


def test_normalize_dataset_rows_in_place():
    rng = np.random.default_rng(3)
    data = rng.uniform(-5, 5, size=(6, 8)).astype(np.float32)
    ds = gen_dataset(6, 8, data)
    normalize(ds)
    assert ds.tensor is data
    norms = np.linalg.norm(data, axis=1)
    assert np.allclose(norms, 1.0, atol=1e-5)


def test_normalize_dataset_flat_tensor():
    data = np.array([3.0, 4.0, 0.0, 0.0], dtype=np.float32)
    ds = gen_dataset(2, 2, data)
    normalize(ds)
    assert data.tolist() == pytest.approx([0.6, 0.8, 0.0, 0.0])