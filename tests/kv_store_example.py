"""Lightweight example script exercising the process-wide KV store.

Run with: uv run tests/kv_store_example.py
"""

from __future__ import annotations

import logging
import tempfile

import kvstore


def run_example() -> None:
    logging.basicConfig(level=logging.INFO)
    with tempfile.TemporaryDirectory() as tmpdir:
        kvstore.init(tmpdir)

        kvstore.set_str("1", "hello")
        assert kvstore.get_str("1") == "hello"
        assert kvstore.get_str("2") is None

        # Writing another type replaces the whole record
        kvstore.set_bool("1", True)
        assert kvstore.get_bool("1") is True
        assert kvstore.get_str("1") is None

        kvstore.remove("1")
        assert kvstore.get_bool("1") is None

        kvstore.get_default_store().database.dispose()

    print("kvstore example finished successfully.")


if __name__ == "__main__":
    run_example()
