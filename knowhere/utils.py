"""Vector normalisation helpers."""

from __future__ import annotations

from typing import Any

import numpy as np

from knowhere.dataset import DataSet
from knowhere.log import get_logger, module_prefix

FLOAT_ACCURACY = 0.00001


def normalize_vec(x: Any) -> np.ndarray:
    """Scale ``x`` to unit L2 norm, in place when it is a float array.

    Zero vectors and vectors already within ``FLOAT_ACCURACY`` of unit
    norm are left unchanged.
    """
    if isinstance(x, np.ndarray) and np.issubdtype(x.dtype, np.floating):
        arr = x
    else:
        arr = np.array(x, dtype=np.float32)
    norm_l2_sqr = float(np.dot(arr, arr))
    if norm_l2_sqr > 0 and abs(1.0 - norm_l2_sqr) > FLOAT_ACCURACY:
        arr /= arr.dtype.type(np.sqrt(norm_l2_sqr))
    return arr


def normalize(dataset: DataSet) -> None:
    """Normalise every row of the dataset's tensor in place."""
    rows = dataset.rows
    dim = dataset.dim
    get_logger().info(module_prefix("Normalize") + f"vector normalize, rows {rows}, dim {dim}")

    tensor = dataset.tensor
    if not (isinstance(tensor, np.ndarray) and np.issubdtype(tensor.dtype, np.floating)):
        tensor = np.array(tensor, dtype=np.float32)
        dataset.tensor = tensor
    flat = tensor.reshape(-1)
    for row in flat[: rows * dim].reshape(rows, dim):
        normalize_vec(row)