"""Round state data models - the single shared record of last stand status."""

import logging
import math
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

logger = logging.getLogger(__name__)


class MetricsError(ValueError):
    """Raised when round metrics from the host are impossible to evaluate."""


@dataclass(frozen=True)
class RewardCandidate:
    """A pity weapon that can be granted when last stand activates."""

    name: str
    spawn_reference: str  # Resource path or factory key understood by the host
    weight: float

    def __post_init__(self):
        if not isinstance(self.weight, (int, float)) or not math.isfinite(self.weight):
            raise ValueError(f"Reward '{self.name}' has non-finite weight {self.weight!r}")
        if self.weight < 0:
            raise ValueError(
                f"Reward '{self.name}' has negative weight ({self.weight})"
            )


@dataclass(frozen=True)
class RoundMetrics:
    """Read-only snapshot of round progress supplied by the host."""

    haul_goal: int
    extraction_point_count: int
    extraction_points_completed: int
    current_in_level_value: float

    @property
    def per_point_goal(self) -> int:
        """Share of the haul goal banked by each completed extraction point."""
        if self.extraction_point_count <= 0:
            raise MetricsError(
                f"extraction_point_count must be positive "
                f"(got {self.extraction_point_count})"
            )
        return self.haul_goal // self.extraction_point_count

    @property
    def extracted_value(self) -> int:
        return self.extraction_points_completed * self.per_point_goal


@dataclass
class RoundState:
    last_stand_active: bool = False
    candidates: List[RewardCandidate] = field(default_factory=list)


class RoundStateStore:
    """Owns the process-wide RoundState.

    Thread-safe: every read and write of the flag acquires self._lock, so
    activate() doubles as an atomic test-and-set for callers that need
    at-most-once behaviour.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._state = RoundState()

    def initialize(self, candidate_config: Mapping[str, Dict]) -> None:
        """Build the reward candidates and clear the last stand flag.

        Args:
            candidate_config: Ordered mapping of reward name to a dict with
                "spawn_reference" and "weight" keys. Iterated exactly once.

        Raises:
            ValueError: If an entry is missing a key or has a bad weight.
        """
        candidates = []
        for name, entry in candidate_config.items():
            try:
                candidates.append(
                    RewardCandidate(
                        name=name,
                        spawn_reference=entry["spawn_reference"],
                        weight=entry["weight"],
                    )
                )
            except KeyError as e:
                raise ValueError(f"Reward '{name}' is missing {e}") from e

        with self._lock:
            self._state = RoundState(last_stand_active=False, candidates=candidates)

        logger.info("Initialized round state with %d reward candidates", len(candidates))

    def reset(self) -> None:
        with self._lock:
            self._state.last_stand_active = False

    def activate(self) -> bool:
        """Set the last stand flag.

        Returns:
            True if this call flipped the flag, False if it was already set.
        """
        with self._lock:
            if self._state.last_stand_active:
                return False
            self._state.last_stand_active = True
            return True

    def is_active(self) -> bool:
        with self._lock:
            return self._state.last_stand_active

    def candidates(self) -> List[RewardCandidate]:
        """Reward candidates in configuration order (a copy)."""
        with self._lock:
            return list(self._state.candidates)
