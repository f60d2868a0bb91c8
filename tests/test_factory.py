import pytest

from knowhere.errors import KnowhereError
from knowhere.factory import IndexFactory


def test_instance_is_shared():
    IndexFactory.instance().register("TEST_SINGLETON", lambda obj: obj + 1)
    assert IndexFactory.instance().create("TEST_SINGLETON", 1) == 2


def test_register_and_create():
    factory = IndexFactory.instance()
    factory.register("TEST_ECHO", lambda obj: ("echo", obj))
    assert factory.create("TEST_ECHO", 42) == ("echo", 42)


def test_register_returns_factory_for_chaining():
    factory = IndexFactory.instance()
    returned = factory.register("TEST_A", lambda obj: "a").register("TEST_B", lambda obj: "b")
    assert returned is factory
    assert factory.create("TEST_A") == "a"
    assert factory.create("TEST_B") == "b"


def test_register_replaces_previous():
    factory = IndexFactory.instance()
    factory.register("TEST_REPLACE", lambda obj: 1)
    factory.register("TEST_REPLACE", lambda obj: 2)
    assert factory.create("TEST_REPLACE") == 2


def test_create_unknown_raises():
    with pytest.raises(KnowhereError, match="TEST_MISSING"):
        IndexFactory.instance().create("TEST_MISSING", None)


def test_registry_shared_between_factories():
    IndexFactory.instance().register("TEST_SHARED", lambda obj: obj * 2)
    assert IndexFactory().create("TEST_SHARED", 4) == 8