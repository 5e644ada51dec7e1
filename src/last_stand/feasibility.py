"""Feasibility check - can the haul goal still be reached?"""

import logging
from dataclasses import dataclass

from src.last_stand.round_state import RoundMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeasibilityReport:
    """Intermediate values of a single feasibility check."""

    haul_goal: int
    per_point_goal: int
    extracted_value: int
    remaining_after_destruction: float
    projected_total: float

    @property
    def is_feasible(self) -> bool:
        return self.projected_total >= self.haul_goal


def assess_feasibility(destroyed_value: float, metrics: RoundMetrics) -> FeasibilityReport:
    """Project the best possible haul once a collectible is destroyed.

    ``metrics.current_in_level_value`` is sampled before the host removes the
    destroyed collectible, so its value is subtracted here explicitly.

    Args:
        destroyed_value: Current dollar value of the destroyed collectible.
        metrics: Round snapshot taken when the destruction event fired.

    Returns:
        FeasibilityReport; ``is_feasible`` is False when the goal is out of reach.

    Raises:
        MetricsError: If the round has no extraction points.
    """
    per_point_goal = metrics.per_point_goal
    extracted_value = metrics.extracted_value
    remaining = metrics.current_in_level_value - destroyed_value
    projected_total = remaining + extracted_value

    logger.debug(
        "Haul goal %d, per-point goal %d, extracted %d, remaining %.2f, projected %.2f",
        metrics.haul_goal,
        per_point_goal,
        extracted_value,
        remaining,
        projected_total,
    )

    return FeasibilityReport(
        haul_goal=metrics.haul_goal,
        per_point_goal=per_point_goal,
        extracted_value=extracted_value,
        remaining_after_destruction=remaining,
        projected_total=projected_total,
    )
