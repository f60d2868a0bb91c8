from knowhere.heap import ResultMaxHeap


def test_keeps_k_smallest_and_pops_largest_first():
    heap = ResultMaxHeap(3)
    for idx, dis in enumerate([5.0, 1.0, 4.0, 2.0, 3.0]):
        heap.push(dis, idx)
    assert len(heap) == 3
    popped = [heap.pop() for _ in range(3)]
    assert popped == [(3.0, 4), (2.0, 3), (1.0, 1)]
    assert heap.pop() is None


def test_pop_on_empty_returns_none():
    assert ResultMaxHeap(2).pop() is None


def test_equal_distance_does_not_replace_when_full():
    heap = ResultMaxHeap(1)
    heap.push(1.0, 10)
    heap.push(1.0, 20)
    assert heap.pop() == (1.0, 10)


def test_ties_pop_by_larger_id_first():
    heap = ResultMaxHeap(3)
    heap.push(2.0, 1)
    heap.push(2.0, 5)
    heap.push(2.0, 3)
    assert [heap.pop() for _ in range(3)] == [(2.0, 5), (2.0, 3), (2.0, 1)]


def test_zero_capacity_keeps_nothing():
    heap = ResultMaxHeap(0)
    heap.push(1.0, 1)
    assert len(heap) == 0