"""Exhaustive top-k and range search of query vectors against base vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from knowhere.config import FieldType, format_and_check
from knowhere.dataset import DataSet, gen_knn_result, gen_range_result
from knowhere.errors import Status, StatusError
from knowhere.metric import FaissMetricType, Metric, is_metric_type, str_to_faiss_metric_type
from knowhere.range_util import filter_range_search_result_for_one_nq, merge_range_search_results
from knowhere.utils import normalize, normalize_vec

_FIELDS = {
    "metric_type": FieldType.STRING,
    "k": FieldType.INT,
    "dim": FieldType.INT,
    "radius": FieldType.FLOAT,
    "range_filter": FieldType.FLOAT,
}
_DEFAULT_K = 10
_NO_RANGE_FILTER = math.inf
_POPCOUNT = np.array([bin(i).count("1") for i in range(256)], dtype=np.int64)

_BINARY = frozenset(
    {
        FaissMetricType.METRIC_Hamming,
        FaissMetricType.METRIC_Jaccard,
        FaissMetricType.METRIC_Tanimoto,
        FaissMetricType.METRIC_Substructure,
        FaissMetricType.METRIC_Superstructure,
    }
)
_STRUCTURE = frozenset({FaissMetricType.METRIC_Substructure, FaissMetricType.METRIC_Superstructure})


@dataclass(frozen=True)
class _SearchConfig:
    metric_type: str
    k: int
    radius: float | None
    range_filter: float | None


@dataclass(frozen=True)
class _Prepared:
    metric: FaissMetricType
    queries: np.ndarray
    candidates: np.ndarray
    allowed: np.ndarray


def _load_config(config: Mapping[str, Any]) -> _SearchConfig:
    cfg = format_and_check(_FIELDS, dict(config))
    metric = cfg.get("metric_type")
    if not isinstance(metric, str):
        raise StatusError(Status.invalid_args, "metric_type is required")
    k = cfg.get("k", _DEFAULT_K)
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise StatusError(Status.invalid_args, "k must be a positive integer")
    radius = cfg.get("radius")
    range_filter = cfg.get("range_filter")
    return _SearchConfig(
        metric_type=metric,
        k=k,
        radius=None if radius is None else float(radius),
        range_filter=None if range_filter is None else float(range_filter),
    )


def _as_bytes(data: Any) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    return np.asarray(data, dtype=np.uint8).reshape(-1)


def _allowed_ids(bitset: Any, nb: int) -> np.ndarray:
    ids = np.arange(nb, dtype=np.int64)
    if bitset is None or len(bitset) == 0:
        return ids
    bits = np.unpackbits(_as_bytes(bitset), bitorder="little")
    blocked = np.zeros(nb, dtype=bool)
    n = min(nb, bits.size)
    blocked[:n] = bits[:n] == 1
    return ids[~blocked]


def _float_rows(tensor: Any, rows: int, dim: int) -> np.ndarray:
    return np.asarray(tensor, dtype=np.float32).reshape(-1)[: rows * dim].reshape(rows, dim)


def _code_rows(tensor: Any, rows: int, code_size: int) -> np.ndarray:
    return _as_bytes(tensor)[: rows * code_size].reshape(rows, code_size)


def _prepare(
    cfg: _SearchConfig, base_dataset: DataSet, query_dataset: DataSet, bitset: Any
) -> _Prepared:
    metric = str_to_faiss_metric_type(cfg.metric_type)
    is_cosine = is_metric_type(cfg.metric_type, Metric.COSINE)
    if is_cosine:
        normalize(base_dataset)

    nb, dim, nq = base_dataset.rows, base_dataset.dim, query_dataset.rows
    if metric in _BINARY:
        base = _code_rows(base_dataset.tensor, nb, dim // 8)
        queries = _code_rows(query_dataset.tensor, nq, dim // 8)
    else:
        base = _float_rows(base_dataset.tensor, nb, dim)
        queries = _float_rows(query_dataset.tensor, nq, dim)
        if is_cosine:
            for row in queries:
                normalize_vec(row)
    allowed = _allowed_ids(bitset, nb)
    return _Prepared(metric, queries, base[allowed], allowed)


def _jaccard(query: np.ndarray, base: np.ndarray) -> np.ndarray:
    inter = _POPCOUNT[base & query].sum(axis=1)
    union = _POPCOUNT[base | query].sum(axis=1)
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(union == 0, 0.0, 1.0 - inter / union).astype(np.float32)


def _jaccard_to_tanimoto(distances: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore"):
        return (-np.log2(1.0 - distances.astype(np.float64))).astype(np.float32)


def _distances(metric: FaissMetricType, query: np.ndarray, base: np.ndarray) -> np.ndarray:
    if metric is FaissMetricType.METRIC_L2:
        diff = base - query
        return np.einsum("ij,ij->i", diff, diff)
    if metric is FaissMetricType.METRIC_INNER_PRODUCT:
        return base @ query
    if metric is FaissMetricType.METRIC_Jaccard:
        return _jaccard(query, base)
    if metric is FaissMetricType.METRIC_Tanimoto:
        return _jaccard_to_tanimoto(_jaccard(query, base))
    if metric is FaissMetricType.METRIC_Hamming:
        return _POPCOUNT[base ^ query].sum(axis=1).astype(np.float32)
    raise StatusError(Status.invalid_metric_type, f"unsupported metric: {metric.name}")


def _structure_match(metric: FaissMetricType, query: np.ndarray, base: np.ndarray) -> np.ndarray:
    common = base & query
    if metric is FaissMetricType.METRIC_Substructure:
        return np.all(common == query, axis=1)
    return np.all(common == base, axis=1)


def _search_one(p: _Prepared, query: np.ndarray, k: int) -> tuple[np.ndarray, np.ndarray]:
    if p.metric in _STRUCTURE:
        matched = p.allowed[_structure_match(p.metric, query, p.candidates)][:k]
        return matched, np.zeros(len(matched), dtype=np.float32)
    row = _distances(p.metric, query, p.candidates)
    key = -row if p.metric is FaissMetricType.METRIC_INNER_PRODUCT else row
    order = np.argsort(key, kind="stable")[:k]
    return p.allowed[order], row[order]


def search(
    base_dataset: DataSet,
    query_dataset: DataSet,
    config: Mapping[str, Any],
    bitset: Any = None,
) -> DataSet:
    """Top-k search of every query against every allowed base vector.

    Returns ``ids`` and ``distance`` arrays of shape ``(nq, k)``, best first.
    Slots left empty hold id ``-1`` and the worst possible distance.
    Substructure and superstructure searches return the first ``k``
    matching vectors, with distance 0. Under the cosine metric the base and
    query vectors are normalised in place.
    """
    cfg = _load_config(config)
    p = _prepare(cfg, base_dataset, query_dataset, bitset)
    nq, k = len(p.queries), cfg.k

    worst = -np.inf if p.metric is FaissMetricType.METRIC_INNER_PRODUCT else np.inf
    ids = np.full((nq, k), -1, dtype=np.int64)
    distances = np.full((nq, k), worst, dtype=np.float32)
    for out_ids, out_dist, query in zip(ids, distances, p.queries):
        found_ids, found_dist = _search_one(p, query, k)
        out_ids[: len(found_ids)] = found_ids
        out_dist[: len(found_dist)] = found_dist
    return gen_knn_result(nq, k, ids, distances)


def range_search(
    base_dataset: DataSet,
    query_dataset: DataSet,
    config: Mapping[str, Any],
    bitset: Any = None,
) -> DataSet:
    """Find, for every query, the allowed base vectors within ``radius``.

    Closer than ``radius`` means a larger inner product, or a smaller
    distance for the other metrics. With ``range_filter`` given, results
    must also lie on the near side of it. Results of query ``i`` span
    ``lims[i]:lims[i+1]`` of the flat ``ids`` and ``distance`` arrays.
    """
    cfg = _load_config(config)
    if cfg.radius is None:
        raise StatusError(Status.invalid_args, "radius is required for range search")
    p = _prepare(cfg, base_dataset, query_dataset, bitset)
    if p.metric in _STRUCTURE:
        raise StatusError(Status.invalid_metric_type, f"range search does not support {p.metric.name}")

    is_ip = p.metric is FaissMetricType.METRIC_INNER_PRODUCT
    radius = cfg.radius
    range_filter = _NO_RANGE_FILTER if cfg.range_filter is None else cfg.range_filter
    apply_filter = range_filter != _NO_RANGE_FILTER

    dist_lists: list[np.ndarray] = []
    id_lists: list[np.ndarray] = []
    for query in p.queries:
        row = _distances(p.metric, query, p.candidates)
        if p.metric is FaissMetricType.METRIC_Hamming:
            keep = row < int(radius)
        elif is_ip:
            keep = row > np.float32(radius)
        else:
            keep = row < np.float32(radius)
        dists, labels = row[keep], p.allowed[keep]
        if apply_filter:
            dists, labels = filter_range_search_result_for_one_nq(
                dists, labels, is_ip, radius, range_filter
            )
        dist_lists.append(dists)
        id_lists.append(labels)

    nq = len(p.queries)
    distances, labels, lims = merge_range_search_results(
        dist_lists, id_lists, is_ip, nq, radius, range_filter
    )
    return gen_range_result(nq, labels, distances, lims)