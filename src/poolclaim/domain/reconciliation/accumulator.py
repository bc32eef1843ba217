"""Monotonic accumulation: once in, always out."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .sets import unique

if TYPE_CHECKING:
    from collections.abc import Iterable


def accumulate(previous: Iterable[str] | None, desired: Iterable[str]) -> tuple[str, ...]:
    """Return ``previous`` extended by every desired token it does not hold yet."""

    output = list(unique(previous or ()))
    seen = set(output)
    for token in desired:
        if token in seen:
            continue
        output.append(token)
        seen.add(token)
    return tuple(output)
