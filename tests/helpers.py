"""Helpers shared across test modules."""

from collections import OrderedDict


class FixedRandom:
    """Random source that always returns the same draw in [0, 1)."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


def make_candidate_config(*specs):
    """Build an ordered reward mapping from (name, weight) pairs."""
    return OrderedDict(
        (name, {"spawn_reference": f"items/{name}", "weight": weight})
        for name, weight in specs
    )
