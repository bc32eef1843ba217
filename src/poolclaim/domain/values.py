"""Deferred desired values.

A desired value may depend on something that has not been computed yet. Such
values are represented by the ``UNKNOWN`` sentinel, either in place of a whole
collection or of individual elements.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Final, TypeGuard, cast


class Unknown(Enum):
    """Marker for a value that cannot be evaluated yet."""

    TOKEN = "unknown"

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __str__(self) -> str:
        return "(known after apply)"


UNKNOWN: Final = Unknown.TOKEN

type Deferred[T] = T | Unknown
type Tokens = tuple[str | Unknown, ...]


def is_known[T](value: T | Unknown) -> TypeGuard[T]:
    """Return whether ``value`` and, for collections, each element is resolved."""

    if value is UNKNOWN:
        return False
    if isinstance(value, (tuple, list, frozenset, set)):
        items = cast("Iterable[object]", value)
        return all(item is not UNKNOWN for item in items)
    return True


def known_tokens(values: Deferred[Tokens]) -> tuple[str, ...] | None:
    """Return ``values`` narrowed to plain strings, or ``None`` when unresolved."""

    if not is_known(values):
        return None
    return tuple(item for item in values if isinstance(item, str))
