"""Row-to-dataclass mapping.

Converts raw database rows (dicts) into typed frozen dataclasses using
dataclass field introspection. Columns without a matching field are
ignored, so ``SELECT *`` works with narrower dataclasses.
"""

import dataclasses
from typing import Any, TypeVar

T = TypeVar("T")


def _field_names(cls: type) -> frozenset[str]:
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} is not a dataclass: furever.data requires frozen dataclasses"
        raise TypeError(msg)
    return frozenset(f.name for f in dataclasses.fields(cls))


def map_row(cls: type[T], row: dict[str, Any]) -> T:
    """Map a dict row to a dataclass instance.

    Raises ``TypeError`` if required fields are missing from the row.
    """
    names = _field_names(cls)
    return cls(**{k: v for k, v in row.items() if k in names})


def map_rows(cls: type[T], rows: list[dict[str, Any]]) -> list[T]:
    """Map a list of dict rows to dataclass instances."""
    names = _field_names(cls)
    return [cls(**{k: v for k, v in row.items() if k in names}) for row in rows]
