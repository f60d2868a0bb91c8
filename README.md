# knowhere

Building blocks for vector similarity search, built on NumPy.

## Modules

- `knowhere.dataset`: the thread-safe `DataSet` container. Its attributes are `rows`, `dim`, `tensor`, `ids`, `distance`, `lims`, `json_info` and `json_id_set`. It also has `set`/`get` for values under other keys. The helpers `gen_dataset`, `gen_ids_dataset`, `gen_tensor_result`, `gen_knn_result`, `gen_range_result` and `gen_json_result` fill it in.
- `knowhere.metric`: the metric names (`Metric`) and their mapping to distance kinds.
  - `str_to_faiss_metric_type` and `str_to_raft_metric_type` do the mapping. An unknown name raises `StatusError` with `Status.invalid_metric_type`.
  - `is_metric_type` compares two names without regard to case.
- `knowhere.brute_force`: exact `search` (top-k) and `range_search` of query vectors against base vectors, with an optional bitset of excluded ids.
  - Metrics: L2, IP, COSINE, HAMMING, JACCARD, TANIMOTO, SUBSTRUCTURE and SUPERSTRUCTURE.
  - Range search does not accept SUBSTRUCTURE or SUPERSTRUCTURE.
  - Under COSINE, the base and query vectors are normalised in place.
- `knowhere.range_util`: `distance_in_range`, plus filtering and merging of range-search results.
  - `filter_range_search_result_for_one_nq`, `get_range_search_result`, `take_range_search_result` and `merge_range_search_results` return flat `(distances, labels, lims)` arrays.
  - `RangeSearchResult` holds results in that same flat layout.
- `knowhere.heap`: `ResultMaxHeap`, which keeps the k smallest `(distance, id)` pairs and pops the largest first.
- `knowhere.lru_cache`: `LruCache`, a thread-safe least-recently-used cache, and `hash_vec`, a 64-bit hash over the float32 bits of a vector.
- `knowhere.utils`: `normalize_vec` scales one vector to unit length. `normalize` does the same for every row of a dataset.
- `knowhere.config`: `format_and_check` validates the keys of a JSON parameter dict. It converts string values to the declared `FieldType` (INT, FLOAT, BOOL).
- `knowhere.factory`: `IndexFactory`, a process-wide registry of index constructors (`instance`, `register`, `create`).
- `knowhere.index_node` and `knowhere.file_manager`: the abstract interfaces `IndexNode` and `FileManager`.
- `knowhere.errors`: the `Status` codes, the exceptions `KnowhereError` and `StatusError`, and `throw_if_not`.
- `knowhere.log`: the package logger, thread naming and log-line prefixes.

## Installation

```
pip install .
```

Install the test extra with `pip install .[test]`, then run the tests with `pytest`.

## Example

```python
import numpy as np
from knowhere.dataset import gen_dataset
from knowhere import brute_force

base = np.random.default_rng(0).random((1000, 16), dtype=np.float32)
queries = base[:5].copy()

result = brute_force.search(
    gen_dataset(len(base), 16, base),
    gen_dataset(len(queries), 16, queries),
    {"metric_type": "L2", "k": 3},
    None,
)
print(result.ids)       # shape (5, 3), nearest first
print(result.distance)  # squared L2 distances
```

`range_search` takes a `radius` and an optional `range_filter`. The results of query `i` are `ids[lims[i]:lims[i+1]]`.

The range test keeps a distance `d` as follows:

- For IP: `radius < d <= range_filter`.
- For the other metrics: `range_filter <= d < radius`.

```python
from knowhere.range_util import distance_in_range

distance_in_range(0.314, 1.0, 0.0, False)  # True
```

Errors are raised as `StatusError`. Its `status` attribute holds a `Status` value, for example `Status.invalid_metric_type`.

## What this package does not do

- It has no concrete index types. `IndexNode` and `FileManager` are interfaces only, and `IndexFactory` starts out empty; you register your own constructors.
- The only search that works out of the box is the exhaustive search in `knowhere.brute_force`.
- It does not store indexes on disk, and it provides no command-line tool.