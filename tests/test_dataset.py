import threading

from knowhere.dataset import (
    DataSet,
    gen_dataset,
    gen_ids_dataset,
    gen_json_result,
    gen_knn_result,
    gen_range_result,
    gen_tensor_result,
)


def test_defaults_of_empty_dataset():
    ds = DataSet()
    assert ds.rows == 0
    assert ds.dim == 0
    assert ds.tensor is None
    assert ds.ids is None
    assert ds.json_info == ""
    assert ds.is_owner is True


def test_gen_dataset_is_not_owner():
    xb = [1.0, 2.0, 3.0, 4.0]
    ds = gen_dataset(2, 2, xb)
    assert ds.rows == 2
    assert ds.dim == 2
    assert ds.tensor is xb
    assert ds.is_owner is False


def test_gen_ids_dataset():
    ds = gen_ids_dataset(3, [7, 8, 9])
    assert ds.rows == 3
    assert ds.ids == [7, 8, 9]
    assert ds.is_owner is False


def test_gen_knn_result_uses_topk_as_dim():
    ds = gen_knn_result(2, 5, [0] * 10, [0.5] * 10)
    assert (ds.rows, ds.dim) == (2, 5)
    assert ds.distance == [0.5] * 10
    assert ds.is_owner is True


def test_gen_range_result_and_tensor_result():
    ds = gen_range_result(2, [1, 2, 3], [0.1, 0.2, 0.3], [0, 1, 3])
    assert ds.lims == [0, 1, 3]
    assert ds.ids == [1, 2, 3]
    t = gen_tensor_result(1, 3, [1.0, 2.0, 3.0])
    assert t.tensor == [1.0, 2.0, 3.0]
    assert t.dim == 3


def test_gen_json_result():
    ds = gen_json_result('{"a": 1}', "[1]")
    assert ds.json_info == '{"a": 1}'
    assert ds.json_id_set == "[1]"
    assert ds.rows == 0


def test_generic_set_and_get():
    ds = DataSet()
    ds.set("extra", {"x": 1})
    assert ds.get("extra") == {"x": 1}
    assert ds.get("missing", 42) == 42
    assert "extra" in ds
    assert "missing" not in ds


def test_concurrent_writes_keep_all_keys():
    ds = DataSet()

    def writer(i):
        ds.set(f"k{i}", i)

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(ds.get(f"k{i}") == i for i in range(20))