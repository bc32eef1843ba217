"""Order-preserving set helpers shared by the reconciliation engines.

Desired collections have set semantics but are iterated in first-seen order so
that repeated reconciliations over identical input produce identical output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def unique(values: Iterable[str]) -> tuple[str, ...]:
    """Collapse duplicates, keeping the first occurrence of each token."""

    return tuple(dict.fromkeys(values))


def difference(values: Iterable[str], excluded: Iterable[str]) -> list[str]:
    """Return ``values`` without members of ``excluded``, in original order."""

    excluded_set = set(excluded)
    return [value for value in values if value not in excluded_set]
