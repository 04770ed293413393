from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Any, Hashable, Mapping, Tuple

Variable = Hashable
Value = Hashable
Domain = AbstractSet[Value]
Domains = Mapping[Variable, Domain]

BOOLEAN_DOMAIN: Tuple[bool, bool] = (False, True)


class Bound(str, Enum):
    """How a cardinality count relates to its target."""
    EXACTLY = "exactly"
    AT_LEAST = "at_least"
    AT_MOST = "at_most"

    @property
    def has_upper(self) -> bool:
        return self is not Bound.AT_LEAST

    @property
    def has_lower(self) -> bool:
        return self is not Bound.AT_MOST


def order_key(item: Any) -> Tuple[str, Any]:
    """Deterministic sort key for variables and values.

    Items of one type sort naturally; mixed types are grouped by type name
    so that e.g. ``0`` and ``"a"`` can share a universe.
    """
    return (type(item).__name__, item)


def ordered(items) -> list:
    return sorted(items, key=order_key)


def ordered_items(pairs) -> list:
    """Sort ``(variable, value)`` pairs by variable."""
    return sorted(pairs, key=lambda pair: order_key(pair[0]))


def hashable(item: Any) -> Any:
    """Turn YAML sequences such as ``[x, y]`` coordinates into tuples."""
    if isinstance(item, list):
        return tuple(hashable(part) for part in item)
    return item
