"""Validation and normalisation of JSON configuration objects."""

from __future__ import annotations

import re
import struct
from enum import Enum, auto
from typing import Any, Mapping

from knowhere.errors import Status, StatusError
from knowhere.log import get_logger, module_prefix

EXT_LEGAL_JSON_KEYS = frozenset(
    {
        "metric_type",
        "dim",
        "nlist",
        "nprobe",
        "ssize",
        "nbits",
        "m",
        "M",
        "efConstruction",
        "ef",
        "level",
        "index_type",
        "index_mode",
        "collection_id",
        "partition_id",
        "segment_id",
        "field_id",
        "index_build_id",
        "index_id",
        "index_version",
        "pq_code_budget_gb_ratio",
        "num_build_thread_ratio",
        "search_cache_budget_gb_ratio",
        "num_load_thread_ratio",
        "beamwidth_ratio",
        "search_list",
        "num_build_thread",
        "num_load_thread",
        "index_files",
        "gpu_id",
        "num_threads",
    }
)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_WS = r"[ \t\n\v\f\r]*"
_INT_RE = re.compile(_WS + r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    _WS + r"([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class FieldType(Enum):
    """Declared type of a configuration field."""

    INT = auto()
    FLOAT = auto()
    BOOL = auto()
    STRING = auto()


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError("wrong data type in json")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise OverflowError("integer out of range")
    return value


def _parse_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ValueError("not a float")
    value = float(match.group(1))
    return struct.unpack("f", struct.pack("f", value))[0]


def format_and_check(fields: Mapping[str, FieldType], json_obj: dict[str, Any]) -> dict[str, Any]:
    """Check the keys of ``json_obj`` and convert string values to field types.

    Keys must be declared in ``fields`` or be among the extra legal keys;
    otherwise ``StatusError(invalid_param_in_json)`` is raised. String values
    of int, float and bool fields are converted in place; a value that cannot
    be converted raises ``StatusError(invalid_value_in_json)``.
    """
    for key in json_obj:
        if key not in fields and key not in EXT_LEGAL_JSON_KEYS:
            get_logger().error(module_prefix("FormatAndCheck") + f"invalid json key: {key}")
            raise StatusError(Status.invalid_param_in_json, f"invalid json key: {key}")

    try:
        for name, field_type in fields.items():
            value = json_obj.get(name)
            if not isinstance(value, str):
                continue
            if field_type is FieldType.INT:
                json_obj[name] = _parse_int(value)
            elif field_type is FieldType.FLOAT:
                json_obj[name] = _parse_float(value)
            elif field_type is FieldType.BOOL:
                if value == "true":
                    json_obj[name] = True
                elif value == "false":
                    json_obj[name] = False
    except (ValueError, OverflowError) as exc:
        raise StatusError(Status.invalid_value_in_json, str(exc)) from exc
    return json_obj