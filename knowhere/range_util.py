"""Filtering and merging of range-search results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from knowhere.errors import throw_if_not
from knowhere.log import get_logger, module_prefix

RangeOutput = tuple[np.ndarray, np.ndarray, np.ndarray]


@dataclass
class RangeSearchResult:
    """Per-query results stored flat; query ``i`` spans ``lims[i]:lims[i+1]``."""

    nq: int
    lims: np.ndarray | None = None
    labels: np.ndarray | None = None
    distances: np.ndarray | None = None

    def __post_init__(self) -> None:
        if self.lims is None:
            self.lims = np.zeros(self.nq + 1, dtype=np.int64)
        else:
            self.lims = np.asarray(self.lims, dtype=np.int64)
        self.labels = np.asarray([] if self.labels is None else self.labels, dtype=np.int64)
        self.distances = np.asarray([] if self.distances is None else self.distances, dtype=np.float32)


def distance_in_range(dist: float, radius: float, range_filter: float, is_ip: bool) -> bool:
    """Whether ``dist`` lies in the range set by ``radius`` and ``range_filter``."""
    d = np.float32(dist)
    r = np.float32(radius)
    f = np.float32(range_filter)
    if is_ip:
        return bool(r < d and d <= f)
    return bool(f <= d and d < r)


def _in_range_mask(distances: Any, radius: float, range_filter: float, is_ip: bool) -> np.ndarray:
    d = np.asarray(distances, dtype=np.float32)
    r = np.float32(radius)
    f = np.float32(range_filter)
    if is_ip:
        return (r < d) & (d <= f)
    return (f <= d) & (d < r)


def _concat(parts: list[np.ndarray], dtype: type) -> np.ndarray:
    if not parts:
        return np.empty(0, dtype=dtype)
    return np.concatenate(parts).astype(dtype, copy=False)


def _lims_from_counts(counts: Sequence[int]) -> np.ndarray:
    lims = np.zeros(len(counts) + 1, dtype=np.int64)
    if counts:
        lims[1:] = np.cumsum(counts)
    return lims


def _bitset_empty(bitset: Any) -> bool:
    return bitset is None or len(bitset) == 0


def _bit_test(bitset: Any, id_: int) -> bool:
    return bool((int(bitset[id_ >> 3]) >> (id_ & 7)) & 1)


def _log_summary(is_ip: bool, radius: float, total: int, range_filter: float | None = None) -> None:
    text = f"Range search metric type: {'IP' if is_ip else 'L2'}, radius {radius}"
    if range_filter is not None:
        text += f", range_filter {range_filter}"
    text += f", total result num {total}"
    get_logger().debug(module_prefix("GetRangeSearchResult") + text)


def count_valid_range_search_result(
    res: RangeSearchResult, is_ip: bool, nq: int, radius: float, range_filter: float
) -> np.ndarray:
    """Offsets of the in-range results per query; the last entry is the total."""
    counts = [
        int(np.count_nonzero(_in_range_mask(res.distances[start:end], radius, range_filter, is_ip)))
        for start, end in zip(res.lims[:nq], res.lims[1 : nq + 1])
    ]
    return _lims_from_counts(counts)


def filter_range_search_result_for_one_nq(
    distances: Sequence[float],
    labels: Sequence[int],
    is_ip: bool,
    radius: float,
    range_filter: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Keep only the results of one query whose distance is in range."""
    throw_if_not(
        len(distances) == len(labels),
        "distances.size() == labels.size()",
        f"distances' size {len(distances)} not equal to labels' size {len(labels)}",
    )
    d = np.asarray(distances, dtype=np.float32)
    l = np.asarray(labels, dtype=np.int64)
    mask = _in_range_mask(d, radius, range_filter, is_ip)
    return d[mask], l[mask]


def get_range_search_result(
    res: RangeSearchResult,
    is_ip: bool,
    nq: int,
    radius: float,
    range_filter: float,
    bitset: Any = None,
) -> RangeOutput:
    """Filter ``res`` by range, returning ``(distances, labels, lims)``.

    ``bitset`` is a byte sequence where a set bit marks a filtered-out id;
    a result carrying such an id is an error.
    """
    lims = count_valid_range_search_result(res, is_ip, nq, radius, range_filter)
    _log_summary(is_ip, radius, int(lims[-1]), range_filter)

    dist_parts: list[np.ndarray] = []
    label_parts: list[np.ndarray] = []
    spans = zip(res.lims[:nq], res.lims[1 : nq + 1], lims[:-1], lims[1:])
    for start, end, out_start, out_end in spans:
        d = res.distances[start:end]
        l = res.labels[start:end]
        if not _bitset_empty(bitset):
            for id_ in l.tolist():
                throw_if_not(not _bit_test(bitset, id_), "bitset.empty() || !bitset.test(id)", "bitset invalid")
        mask = _in_range_mask(d, radius, range_filter, is_ip)
        kept = int(np.count_nonzero(mask))
        expected = int(out_end - out_start)
        throw_if_not(kept == expected, "num == o_size", f"{kept} not equal {expected}")
        dist_parts.append(d[mask])
        label_parts.append(l[mask])
    return _concat(dist_parts, np.float32), _concat(label_parts, np.int64), lims


def take_range_search_result(res: RangeSearchResult, is_ip: bool, nq: int, radius: float) -> RangeOutput:
    """Hand over the arrays of ``res`` unfiltered, leaving ``res`` empty."""
    distances, labels, lims = res.distances, res.labels, res.lims
    _log_summary(is_ip, radius, int(lims[nq]))
    res.distances = None
    res.labels = None
    res.lims = None
    return distances, labels, lims


def merge_range_search_results(
    result_distances: Sequence[Sequence[float]],
    result_labels: Sequence[Sequence[int]],
    is_ip: bool,
    nq: int,
    radius: float,
    range_filter: float,
) -> RangeOutput:
    """Concatenate per-query results into ``(distances, labels, lims)``."""
    throw_if_not(
        len(result_distances) == nq,
        "result_distances.size() == (size_t)nq",
        f"result distances size {len(result_distances)} not equal to {nq}",
    )
    throw_if_not(
        len(result_labels) == nq,
        "result_labels.size() == (size_t)nq",
        f"result labels size {len(result_labels)} not equal to {nq}",
    )
    lims = _lims_from_counts([len(d) for d in result_distances])
    _log_summary(is_ip, radius, int(lims[-1]), range_filter)

    dist_parts = [np.asarray(d, dtype=np.float32) for d in result_distances]
    label_parts = [
        np.asarray(l, dtype=np.int64)[: len(d)] for d, l in zip(result_distances, result_labels)
    ]
    return _concat(dist_parts, np.float32), _concat(label_parts, np.int64), lims