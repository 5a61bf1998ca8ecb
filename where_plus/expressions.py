"""Tagged values passed to the where helpers."""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union


@dataclass(frozen=True)
class Raw:
    """SQL text embedded literally, never bound."""
    sql: str

    def __str__(self) -> str:
        return self.sql


@dataclass(frozen=True)
class Bound:
    """A value sent to the driver as a bound parameter."""
    value: Any


Fallback = Union[Raw, Bound]


def as_fallback(value: Any) -> Fallback:
    """Wrap a plain value as Bound; Raw and Bound pass through."""
    if isinstance(value, (Raw, Bound)):
        return value
    return Bound(value)


@dataclass(frozen=True)
class Single:
    """One column name."""
    name: str


@dataclass(frozen=True)
class Batch:
    """Ordered (column, value) pairs."""
    pairs: Tuple[Tuple[str, Any], ...]


class ColumnSpec:
    """Resolve a column argument into Single or Batch."""

    @staticmethod
    def of(column: Union[str, Mapping[str, Any]]) -> Union[Single, Batch]:
        if isinstance(column, str):
            return Single(column)
        if isinstance(column, Mapping):
            return Batch(tuple(column.items()))
        raise TypeError(f'Column must be a str or mapping, not {type(column).__name__}')
