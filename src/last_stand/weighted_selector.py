"""Weighted random choice over (item, weight) pairs."""

import random
from dataclasses import dataclass
from typing import Generic, Iterable, Optional, TypeVar

T = TypeVar("T")

# Shared by every caller in the process; one draw per selection
_random = random.Random()


@dataclass(frozen=True)
class WeightedItem(Generic[T]):
    """An item paired with its relative likelihood of being chosen."""

    item: T
    weight: float


def select_weighted(
    items: Iterable[WeightedItem[T]], rng: Optional[random.Random] = None
) -> Optional[T]:
    """Pick one item with probability proportional to its weight.

    Non-positive weights still count toward the running total so that
    cumulative endpoints stay aligned with the input order; they simply
    contribute no probability mass.

    Args:
        items: Weighted items in selection order. Materialized once.
        rng: Random source, defaults to the module-wide generator.

    Returns:
        The chosen item, or None when there is nothing to choose from
        (no items, or total weight <= 0).
    """
    entries = list(items)
    if not entries:
        return None

    total_weight = sum(entry.weight for entry in entries)
    if total_weight <= 0:
        return None

    roll = (rng or _random).random() * total_weight
    cumulative = 0.0

    for entry in entries:
        cumulative += entry.weight
        if roll <= cumulative:
            return entry.item

    # Rounding drift can leave the roll just past the final endpoint
    return entries[-1].item
