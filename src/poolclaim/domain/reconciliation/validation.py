"""Capacity validation gating the stable assignment engine."""

from __future__ import annotations

from poolclaim.domain.errors import CapacityExceededError
from poolclaim.domain.values import Deferred, Tokens, known_tokens

from .sets import unique


def validate_capacity(pool: Deferred[Tokens], claimers: Deferred[Tokens]) -> None:
    """Raise ``CapacityExceededError`` when claimers outnumber pool items.

    Values that cannot be evaluated yet pass: they are checked again once they
    resolve, at the latest when the change is applied.
    """

    resolved_pool = known_tokens(pool)
    resolved_claimers = known_tokens(claimers)
    if resolved_pool is None or resolved_claimers is None:
        return

    pool_size = len(unique(resolved_pool))
    claimer_count = len(unique(resolved_claimers))
    if claimer_count > pool_size:
        raise CapacityExceededError(claimers=claimer_count, pool=pool_size)
