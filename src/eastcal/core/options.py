"""
eastcal.core.options
--------------------
Read-only attribute lookup consumed by the merger and resolvers.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional


class Leniency(Enum):
    STRICT = "strict"
    SMART = "smart"
    LAX = "lax"

    def is_strict(self) -> bool:
        return self is Leniency.STRICT

    def is_lax(self) -> bool:
        return self is Leniency.LAX


# recognized keys
TIMEZONE_ID = "timezone_id"
LENIENCY = "leniency"
START_OF_DAY = "start_of_day"

DEFAULT_LENIENCY = Leniency.SMART


class AttributeQuery(Mapping[str, Any]):
    """Immutable mapping of attribute keys to values."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))

    @classmethod
    def of(cls, **values: Any) -> "AttributeQuery":
        return cls({k: v for k, v in values.items() if v is not None})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def contains(self, key: str) -> bool:
        return key in self._values

    def leniency(self) -> Leniency:
        return self._values.get(LENIENCY, DEFAULT_LENIENCY)

    def with_value(self, key: str, value: Any) -> "AttributeQuery":
        values: Dict[str, Any] = dict(self._values)
        values[key] = value
        return AttributeQuery(values)

    def __repr__(self) -> str:
        return f"AttributeQuery({dict(self._values)!r})"


EMPTY = AttributeQuery()
