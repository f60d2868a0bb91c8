"""A thread-safe bag of named values describing vectors or search results."""

from __future__ import annotations

import threading
from typing import Any

DISTANCE = "distance"
LIMS = "lims"
IDS = "ids"
TENSOR = "tensor"
ROWS = "rows"
DIM = "dim"
JSON_INFO = "json_info"
JSON_ID_SET = "json_id_set"


class _Slot:
    """Property stored in the dataset's shared map under a fixed key."""

    def __init__(self, key: str, default: Any) -> None:
        self.key = key
        self.default = default

    def __get__(self, obj: "DataSet | None", owner: type | None = None) -> Any:
        if obj is None:
            return self
        with obj._lock:
            return obj._data.get(self.key, self.default)

    def __set__(self, obj: "DataSet", value: Any) -> None:
        with obj._lock:
            obj._data[self.key] = value


class DataSet:
    """Named values such as rows, dim, tensor, ids, distances and lims."""

    distance = _Slot(DISTANCE, None)
    lims = _Slot(LIMS, None)
    ids = _Slot(IDS, None)
    tensor = _Slot(TENSOR, None)
    rows = _Slot(ROWS, 0)
    dim = _Slot(DIM, 0)
    json_info = _Slot(JSON_INFO, "")
    json_id_set = _Slot(JSON_ID_SET, "")

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[str, Any] = {}
        self.is_owner = True

    def set(self, key: str, value: Any) -> None:
        """Store an arbitrary value under ``key``."""
        with self._lock:
            self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value under ``key`` or ``default`` when absent."""
        with self._lock:
            return self._data.get(key, default)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data


def gen_dataset(nb: int, dim: int, xb: Any) -> DataSet:
    """Wrap input vectors that the dataset does not own."""
    ds = DataSet()
    ds.rows = nb
    ds.dim = dim
    ds.tensor = xb
    ds.is_owner = False
    return ds


def gen_ids_dataset(rows: int, ids: Any) -> DataSet:
    """Wrap a list of ids that the dataset does not own."""
    ds = DataSet()
    ds.rows = rows
    ds.ids = ids
    ds.is_owner = False
    return ds


def gen_tensor_result(rows: int, dim: int, tensor: Any) -> DataSet:
    """Result holding vectors."""
    ds = DataSet()
    ds.rows = rows
    ds.dim = dim
    ds.tensor = tensor
    return ds


def gen_knn_result(nq: int, topk: int, ids: Any, distances: Any) -> DataSet:
    """Result of a top-k search: ``nq`` rows of ``topk`` ids and distances."""
    ds = DataSet()
    ds.rows = nq
    ds.dim = topk
    ds.ids = ids
    ds.distance = distances
    return ds


def gen_range_result(nq: int, ids: Any, distances: Any, lims: Any) -> DataSet:
    """Result of a range search, rows delimited by ``lims``."""
    ds = DataSet()
    ds.rows = nq
    ds.ids = ids
    ds.distance = distances
    ds.lims = lims
    return ds


def gen_json_result(json_info: str, json_id_set: str) -> DataSet:
    """Result holding JSON descriptions."""
    ds = DataSet()
    ds.json_info = json_info
    ds.json_id_set = json_id_set
    return ds