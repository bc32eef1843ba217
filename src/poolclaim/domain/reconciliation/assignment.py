"""Stable assignment of claimers to pool items.

The engine keeps every prior binding that is still valid and only allocates the
delta, so unchanged input never moves a claimer to a different item.

Steps:
1) prune bindings whose claimer or item is no longer desired
2) compute free items and unassigned claimers, both in desired order
3) bind unassigned claimers to free items pairwise
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from poolclaim.domain.errors import CapacityExceededError, StateIntegrityError

from .sets import difference, unique

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def prune_assignment(
    previous: Mapping[str, str],
    *,
    pool: Iterable[str],
    claimers: Iterable[str],
) -> dict[str, str]:
    """Drop bindings that reference a claimer or item outside the desired sets."""

    pool_members = set(pool)
    claimer_members = set(claimers)
    claimed: set[str] = set()
    surviving: dict[str, str] = {}
    for claimer, item in previous.items():
        if item in claimed:
            raise StateIntegrityError(f"Pool item '{item}' is claimed more than once")
        claimed.add(item)
        if claimer in claimer_members and item in pool_members:
            surviving[claimer] = item
    return surviving


def reconcile_assignment(
    previous: Mapping[str, str] | None,
    pool: Iterable[str],
    claimers: Iterable[str],
) -> dict[str, str]:
    """Return the new claimer -> item mapping for the desired pool and claimers."""

    desired_pool = unique(pool)
    desired_claimers = unique(claimers)

    assignment = prune_assignment(previous or {}, pool=desired_pool, claimers=desired_claimers)

    free_items = deque(difference(desired_pool, assignment.values()))
    for claimer in difference(desired_claimers, assignment):
        if not free_items:
            raise CapacityExceededError(claimers=len(desired_claimers), pool=len(desired_pool))
        assignment[claimer] = free_items.popleft()

    return assignment
