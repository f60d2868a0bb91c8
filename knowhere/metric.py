"""Metric names and their mapping to distance kernels."""

from __future__ import annotations

from enum import Enum, auto

from knowhere.errors import Status, StatusError


class Metric(str, Enum):
    """Metric names accepted in configurations."""

    L2 = "L2"
    IP = "IP"
    COSINE = "COSINE"
    HAMMING = "HAMMING"
    JACCARD = "JACCARD"
    TANIMOTO = "TANIMOTO"
    SUBSTRUCTURE = "SUBSTRUCTURE"
    SUPERSTRUCTURE = "SUPERSTRUCTURE"


class FaissMetricType(Enum):
    """Distance kernels of the CPU search back end."""

    METRIC_INNER_PRODUCT = auto()
    METRIC_L2 = auto()
    METRIC_Hamming = auto()
    METRIC_Jaccard = auto()
    METRIC_Tanimoto = auto()
    METRIC_Substructure = auto()
    METRIC_Superstructure = auto()


class RaftDistanceType(Enum):
    """Distance kernels of the GPU search back end."""

    L2Expanded = auto()
    InnerProduct = auto()
    HammingUnexpanded = auto()
    JaccardExpanded = auto()


_FAISS = {
    Metric.L2: FaissMetricType.METRIC_L2,
    Metric.IP: FaissMetricType.METRIC_INNER_PRODUCT,
    Metric.COSINE: FaissMetricType.METRIC_INNER_PRODUCT,
    Metric.HAMMING: FaissMetricType.METRIC_Hamming,
    Metric.JACCARD: FaissMetricType.METRIC_Jaccard,
    Metric.TANIMOTO: FaissMetricType.METRIC_Tanimoto,
    Metric.SUBSTRUCTURE: FaissMetricType.METRIC_Substructure,
    Metric.SUPERSTRUCTURE: FaissMetricType.METRIC_Superstructure,
}

_RAFT = {
    Metric.L2: RaftDistanceType.L2Expanded,
    Metric.IP: RaftDistanceType.InnerProduct,
    Metric.HAMMING: RaftDistanceType.HammingUnexpanded,
    Metric.JACCARD: RaftDistanceType.JaccardExpanded,
}


def _name(metric: str | Metric) -> str:
    return (metric.value if isinstance(metric, Metric) else str(metric)).upper()


def is_metric_type(name: str | Metric, metric: str | Metric) -> bool:
    """Case-insensitive comparison of two metric names."""
    return _name(name) == _name(metric)


def _lookup(metric: str | Metric, table: dict) -> Enum:
    try:
        return table[Metric(_name(metric))]
    except (ValueError, KeyError):
        raise StatusError(Status.invalid_metric_type, f"invalid metric type: {metric}") from None


def str_to_faiss_metric_type(metric: str | Metric) -> FaissMetricType:
    """Map a metric name to its CPU kernel; raises ``StatusError`` if unknown."""
    return _lookup(metric, _FAISS)


def str_to_raft_metric_type(metric: str | Metric) -> RaftDistanceType:
    """Map a metric name to its GPU kernel; raises ``StatusError`` if unsupported."""
    return _lookup(metric, _RAFT)