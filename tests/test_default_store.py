"""Tests for the process-wide store functions."""

import tempfile
from pathlib import Path

import pytest

import kvstore
from kvstore import default


@pytest.fixture(autouse=True)
def fresh_default_store(monkeypatch):
    monkeypatch.setattr(default, "_default_store", None)


def test_default_store_is_lazy_singleton():
    store = kvstore.get_default_store()
    assert store is kvstore.get_default_store()
    assert not store.is_initialized


def test_module_functions_before_init():
    with pytest.raises(kvstore.UninitializedError):
        kvstore.get("k")
    with pytest.raises(kvstore.UninitializedError):
        kvstore.remove("k")
    kvstore.set_int("k", 1)
    assert kvstore.get_int("k") is None


def test_module_functions_after_init(tmp_path):
    kvstore.init(str(tmp_path))
    kvstore.set_str("name", "kv")
    kvstore.set_int("count", 7)
    kvstore.set_float("ratio", 0.25)
    kvstore.set_bool("enabled", True)

    assert kvstore.get_str("name") == "kv"
    assert kvstore.get_int("count") == 7
    assert kvstore.get_float("ratio") == 0.25
    assert kvstore.get_bool("enabled") is True

    kvstore.set(kvstore.KeyValue("name", 1))
    assert kvstore.get("name").int_value == 1
    kvstore.remove("name")
    with pytest.raises(kvstore.NotFoundError):
        kvstore.get("name")


def run():
    for test in (test_default_store_is_lazy_singleton, test_module_functions_before_init):
        default._default_store = None
        test()
    default._default_store = None
    with tempfile.TemporaryDirectory() as tmpdir:
        test_module_functions_after_init(Path(tmpdir))
    default._default_store = None
    print("test_default_store: all checks passed.")


if __name__ == "__main__":
    run()
