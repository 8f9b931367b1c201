from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple, Union

__all__ = [
    "TABLE_NAME",
    "KV_SQL",
    "KeyValue",
    "ScalarValue",
    "ValueKind",
    "VALUE_COLUMNS",
]

TABLE_NAME = "kv_table"

KV_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    key TEXT NOT NULL PRIMARY KEY,
    str_value TEXT,
    int_value BIGINT,
    float_value DOUBLE,
    bool_value BOOLEAN
);
"""

ScalarValue = Union[str, int, float, bool]
ValueKind = Literal["str", "int", "float", "bool"]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class _ColumnHandler:
    column: str
    matches: Callable[[Any], bool]
    decode: Callable[[Any], Any]


# Column order decides which value wins when a foreign row has several set.
_HANDLERS: Dict[ValueKind, _ColumnHandler] = {
    "str": _ColumnHandler(
        column="str_value",
        matches=lambda value: isinstance(value, str),
        decode=str,
    ),
    "int": _ColumnHandler(
        column="int_value",
        matches=lambda value: isinstance(value, int) and not isinstance(value, bool),
        decode=int,
    ),
    "float": _ColumnHandler(
        column="float_value",
        matches=lambda value: isinstance(value, float),
        decode=float,
    ),
    "bool": _ColumnHandler(
        column="bool_value",
        matches=lambda value: isinstance(value, bool),
        decode=bool,
    ),
}

VALUE_COLUMNS: Tuple[str, ...] = tuple(handler.column for handler in _HANDLERS.values())


def _kind_of(value: Any) -> ValueKind:
    # bool before int: True is an int too
    for kind in ("bool", "str", "int", "float"):
        if _HANDLERS[kind].matches(value):  # type: ignore[index]
            return kind  # type: ignore[return-value]
    raise TypeError(
        f"Unsupported value type {type(value).__name__}; expected str, int, float or bool"
    )


@dataclass(frozen=True)
class KeyValue:
    """A single stored setting: a key and at most one scalar value.

    The value's Python type is the tag that selects which of the four
    nullable columns it is persisted in. A record therefore never carries
    more than one populated field.
    """

    key: str
    value: Optional[ScalarValue] = None

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            raise TypeError("key must be a string")
        if not self.key:
            raise ValueError("key cannot be empty")
        if self.value is None:
            return
        kind = _kind_of(self.value)
        if kind == "int" and not _INT64_MIN <= self.value <= _INT64_MAX:  # type: ignore[operator]
            raise ValueError("INTEGER value must fit in a signed 64-bit integer")
        if kind == "float" and math.isnan(self.value):  # type: ignore[arg-type]
            # SQLite stores NaN as NULL
            raise ValueError("REAL value cannot be NaN")

    @property
    def kind(self) -> Optional[ValueKind]:
        if self.value is None:
            return None
        return _kind_of(self.value)

    @property
    def str_value(self) -> Optional[str]:
        return self._project("str")

    @property
    def int_value(self) -> Optional[int]:
        return self._project("int")

    @property
    def float_value(self) -> Optional[float]:
        return self._project("float")

    @property
    def bool_value(self) -> Optional[bool]:
        return self._project("bool")

    def _project(self, kind: ValueKind) -> Any:
        return self.value if self.kind == kind else None

    def to_params(self) -> Dict[str, Any]:
        """Bind parameters for the five ``kv_table`` columns."""
        params: Dict[str, Any] = {"key": self.key}
        kind = self.kind
        for handler_kind, handler in _HANDLERS.items():
            params[handler.column] = self.value if handler_kind == kind else None
        if kind == "bool":
            params["bool_value"] = 1 if self.value else 0
        return params

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "KeyValue":
        for handler in _HANDLERS.values():
            raw = row.get(handler.column)
            if raw is not None:
                return cls(key=row["key"], value=handler.decode(raw))
        return cls(key=row["key"])
