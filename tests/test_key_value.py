"""Tests for the KeyValue record."""

import pytest

from kvstore.key_value import VALUE_COLUMNS, KeyValue


def test_projections_follow_value_type():
    item = KeyValue("flag", True)
    assert item.kind == "bool"
    assert item.bool_value is True
    assert item.int_value is None
    assert item.str_value is None
    assert item.float_value is None

    item = KeyValue("count", 3)
    assert item.kind == "int"
    assert item.int_value == 3
    assert item.bool_value is None
    assert item.float_value is None


def test_empty_record_has_no_kind():
    item = KeyValue("empty")
    assert item.kind is None
    assert all(getattr(item, column) is None for column in VALUE_COLUMNS)


def test_rejects_bad_keys_and_values():
    with pytest.raises(ValueError):
        KeyValue("", "x")
    with pytest.raises(TypeError):
        KeyValue(1, "x")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        KeyValue("k", [1, 2])  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        KeyValue("k", 2**63)
    with pytest.raises(ValueError):
        KeyValue("k", float("nan"))
    assert KeyValue("k", float("inf")).float_value == float("inf")


def test_to_params_populates_only_tagged_column():
    params = KeyValue("ratio", 0.5).to_params()
    assert params == {
        "key": "ratio",
        "str_value": None,
        "int_value": None,
        "float_value": 0.5,
        "bool_value": None,
    }
    assert KeyValue("flag", False).to_params()["bool_value"] == 0


def test_from_row_decodes_integer_booleans():
    row = {"key": "flag", "str_value": None, "int_value": None, "float_value": None, "bool_value": 1}
    item = KeyValue.from_row(row)
    assert item.value is True
    assert item.kind == "bool"


def test_from_row_prefers_first_populated_column():
    row = {"key": "k", "str_value": "text", "int_value": 7, "float_value": None, "bool_value": None}
    assert KeyValue.from_row(row).value == "text"


def run():
    test_projections_follow_value_type()
    test_empty_record_has_no_kind()
    test_rejects_bad_keys_and_values()
    test_to_params_populates_only_tagged_column()
    test_from_row_decodes_integer_booleans()
    test_from_row_prefers_first_populated_column()
    print("test_key_value: all checks passed.")


if __name__ == "__main__":
    run()
