"""Interface every index implementation provides."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from knowhere.dataset import DataSet

BinarySet = Mapping[str, bytes]


class IndexNode(ABC):
    """An index over vectors.

    Operations that fail raise ``knowhere.errors.StatusError`` carrying the
    reason. ``cfg`` is the index's configuration object or JSON mapping and
    ``bitset`` a byte sequence whose set bits mark ids excluded from results.
    """

    @abstractmethod
    def build(self, dataset: DataSet, cfg: Any) -> None:
        """Train on and add the vectors of ``dataset``."""

    @abstractmethod
    def train(self, dataset: DataSet, cfg: Any) -> None:
        """Train the index on ``dataset``."""

    @abstractmethod
    def add(self, dataset: DataSet, cfg: Any) -> None:
        """Add the vectors of ``dataset`` to a trained index."""

    @abstractmethod
    def search(self, dataset: DataSet, cfg: Any, bitset: Any) -> DataSet:
        """Return the top-k neighbours of each query in ``dataset``."""

    @abstractmethod
    def range_search(self, dataset: DataSet, cfg: Any, bitset: Any) -> DataSet:
        """Return the neighbours within range of each query in ``dataset``."""

    @abstractmethod
    def get_vector_by_ids(self, dataset: DataSet, cfg: Any) -> DataSet:
        """Return the stored vectors whose ids are in ``dataset``."""

    @abstractmethod
    def has_raw_data(self, metric_type: str) -> bool:
        """Whether the original vectors can be recovered for ``metric_type``."""

    @abstractmethod
    def get_index_meta(self, cfg: Any) -> DataSet:
        """Return a JSON description of the index structure."""

    @abstractmethod
    def serialize(self) -> BinarySet:
        """Return the index as named binary blobs."""

    @abstractmethod
    def deserialize(self, binset: BinarySet) -> None:
        """Restore the index from named binary blobs."""

    @abstractmethod
    def deserialize_from_file(self, filename: str, config: Any) -> None:
        """Restore the index from a file."""

    @abstractmethod
    def create_config(self) -> Any:
        """Return a fresh configuration object for this index type."""

    @abstractmethod
    def dim(self) -> int:
        """Dimension of the indexed vectors."""

    @abstractmethod
    def size(self) -> int:
        """Memory footprint of the index in bytes."""

    @abstractmethod
    def count(self) -> int:
        """Number of indexed vectors."""

    @abstractmethod
    def type(self) -> str:
        """Name of the index type."""