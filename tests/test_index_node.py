import pytest

from knowhere.index_node import IndexNode

OPERATIONS = [
    "build",
    "train",
    "add",
    "search",
    "range_search",
    "get_vector_by_ids",
    "has_raw_data",
    "get_index_meta",
    "serialize",
    "deserialize",
    "deserialize_from_file",
    "create_config",
    "dim",
    "size",
    "count",
    "type",
]


def test_interface_cannot_be_instantiated():
    with pytest.raises(TypeError, match="IndexNode"):
        IndexNode()


@pytest.mark.parametrize("name", OPERATIONS)
def test_instantiation_error_names_each_abstract_operation(name):
    with pytest.raises(TypeError, match=rf"\b{name}\b"):
        IndexNode()