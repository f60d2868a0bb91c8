import threading

import numpy as np

from knowhere.lru_cache import LruCache, hash_vec


def test_put_then_get_returns_value():
    cache = LruCache(4)
    cache.put("a", 1)
    assert cache.get("a") == 1
    assert "a" in cache
    assert len(cache) == 1


def test_missing_key_returns_default():
    cache = LruCache(4)
    assert cache.get("nope") is None
    assert cache.get("nope", -1) == -1
    assert "nope" not in cache


def test_eviction_drops_oldest():
    cache = LruCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("c", 3)
    assert len(cache) == 2
    assert "a" not in cache
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_get_refreshes_recency():
    cache = LruCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.get("a") == 1
    cache.put("c", 3)
    assert "a" in cache
    assert "b" not in cache


def test_put_existing_key_replaces_without_growing():
    cache = LruCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 10)
    assert len(cache) == 2
    assert cache.get("a") == 10
    cache.put("c", 3)
    assert "b" not in cache
    assert "a" in cache


def test_default_capacity():
    cache = LruCache()
    assert cache.capacity == LruCache.DEFAULT_SIZE


def test_concurrent_puts_respect_capacity():
    cache = LruCache(50)

    def worker(offset):
        for i in range(200):
            cache.put(offset * 1000 + i, i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(cache) == 50


def test_hash_vec_empty_is_zero():
    assert hash_vec([]) == 0


def test_hash_vec_single_value_is_bit_pattern():
    assert hash_vec([1.0]) == 1065353216


def test_hash_vec_equal_vectors_hash_equal():
    a = np.array([0.25, -3.5, 7.0], dtype=np.float32)
    assert hash_vec(a) == hash_vec(a.tolist())


def test_hash_vec_depends_on_order():
    assert hash_vec([1.0, 2.0]) != hash_vec([2.0, 1.0])
    assert hash_vec([1.0, 2.0]) == hash_vec([1.0, 2.0])


def test_hash_vec_fits_in_64_bits():
    h = hash_vec(np.full(64, 3.75, dtype=np.float32))
    assert 0 <= h < 2**64