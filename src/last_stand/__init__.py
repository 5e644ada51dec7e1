from src.last_stand.evaluator import LastStandEvaluator, LastStandOutcome, OutcomeStatus
from src.last_stand.feasibility import FeasibilityReport, assess_feasibility
from src.last_stand.plugin import LastStandPlugin
from src.last_stand.reward_config import RewardConfigError, RewardConfigLoader
from src.last_stand.round_state import (
    MetricsError,
    RewardCandidate,
    RoundMetrics,
    RoundState,
    RoundStateStore,
)
from src.last_stand.weighted_selector import WeightedItem, select_weighted

__all__ = [
    "FeasibilityReport",
    "LastStandEvaluator",
    "LastStandOutcome",
    "LastStandPlugin",
    "MetricsError",
    "OutcomeStatus",
    "RewardCandidate",
    "RewardConfigError",
    "RewardConfigLoader",
    "RoundMetrics",
    "RoundState",
    "RoundStateStore",
    "WeightedItem",
    "assess_feasibility",
    "select_weighted",
]
