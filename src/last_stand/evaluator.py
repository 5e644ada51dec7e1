"""Last stand evaluator - reacts to destroyed collectibles and grants pity weapons."""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.last_stand.collaborators import (
    HostSession,
    PlayerLocator,
    PresentationSink,
    Rotation,
    RoundMetricsProvider,
    SpawnRequester,
    Vector3,
)
from src.last_stand.config import (
    ANNOUNCEMENT_DURATION,
    ANNOUNCEMENT_SUBTITLE,
    ANNOUNCEMENT_TITLE,
    FOCUS_TEXT_DURATION,
    FOCUS_TEXT_MESSAGE,
    RED,
    SHAKE_DISTANCE,
    SHAKE_DURATION,
    SHAKE_FALLOFF,
    SHAKE_INTENSITY,
)
from src.last_stand.feasibility import FeasibilityReport, assess_feasibility
from src.last_stand.round_state import RewardCandidate, RoundMetrics, RoundStateStore
from src.last_stand.weighted_selector import WeightedItem, select_weighted

logger = logging.getLogger(__name__)


class OutcomeStatus(Enum):
    ALREADY_ACTIVE = "already_active"
    FEASIBLE = "feasible"
    NO_REWARD = "no_reward"
    NOT_AUTHORITATIVE = "not_authoritative"
    SPAWNED = "spawned"


@dataclass
class LastStandOutcome:
    """What a single destruction event led to."""

    status: OutcomeStatus
    report: Optional[FeasibilityReport] = None
    reward: Optional[RewardCandidate] = None
    position: Optional[Vector3] = None
    rotation: Optional[Rotation] = None

    @property
    def activated(self) -> bool:
        """Whether this event is the one that started last stand."""
        return self.status in (
            OutcomeStatus.NO_REWARD,
            OutcomeStatus.NOT_AUTHORITATIVE,
            OutcomeStatus.SPAWNED,
        )


class LastStandEvaluator:
    """Decides when a round becomes unwinnable and arranges the pity reward.

    Coordinates between the feasibility check, RoundStateStore (flag and
    candidates), the weighted selector and the host collaborators. Announcing
    comes first; the reward is best effort and never rolls back the flag.
    """

    def __init__(
        self,
        state: RoundStateStore,
        metrics_provider: RoundMetricsProvider,
        session: HostSession,
        player: PlayerLocator,
        spawner: SpawnRequester,
        presentation: PresentationSink,
        rng: Optional[random.Random] = None,
    ):
        self.state = state
        self.metrics_provider = metrics_provider
        self.session = session
        self.player = player
        self.spawner = spawner
        self.presentation = presentation
        self.rng = rng

    def handle_collectible_destroyed(self, destroyed_value: float) -> Optional[LastStandOutcome]:
        """Entry point for the host's destruction event.

        Destruction outside a running level (menus, shop, lobby) is ignored.
        """
        if not self.session.is_level_running():
            return None
        return self.on_collectible_destroyed(destroyed_value, self.metrics_provider.snapshot())

    def on_collectible_destroyed(
        self, destroyed_value: float, metrics: RoundMetrics
    ) -> LastStandOutcome:
        """Evaluate the round after a collectible is destroyed.

        Args:
            destroyed_value: Dollar value of the collectible being destroyed.
            metrics: Snapshot sampled before the collectible leaves the level.

        Returns:
            LastStandOutcome describing what happened.

        Raises:
            MetricsError: If the metrics report zero extraction points.
        """
        if self.state.is_active():
            logger.debug("Last stand already active; ignoring destruction")
            return LastStandOutcome(OutcomeStatus.ALREADY_ACTIVE)

        report = assess_feasibility(destroyed_value, metrics)
        if report.is_feasible:
            logger.debug("Round is still completable")
            return LastStandOutcome(OutcomeStatus.FEASIBLE, report=report)

        if not self.state.activate():
            # Another evaluation flipped the flag between the guard and here
            return LastStandOutcome(OutcomeStatus.ALREADY_ACTIVE, report=report)

        logger.info(
            "Last stand activated! (projected %.2f < goal %d)",
            report.projected_total,
            report.haul_goal,
        )
        self._announce()

        reward = select_weighted(
            (WeightedItem(c, c.weight) for c in self.state.candidates()),
            rng=self.rng,
        )
        if reward is None:
            logger.error("Couldn't randomly select a pity weapon. Are probabilities all 0?")
            return LastStandOutcome(OutcomeStatus.NO_REWARD, report=report)

        logger.info('Rolled a "%s" as a pity weapon; Spawning...', reward.name)
        if not self.session.is_authoritative():
            logger.error('Failed to spawn "%s". You are not the host.', reward.name)
            return LastStandOutcome(
                OutcomeStatus.NOT_AUTHORITATIVE, report=report, reward=reward
            )

        position, rotation = self._spawn(reward)
        return LastStandOutcome(
            OutcomeStatus.SPAWNED,
            report=report,
            reward=reward,
            position=position,
            rotation=rotation,
        )

    def on_round_start(self, round_seed: Optional[int] = None) -> None:
        self.state.reset()
        logger.debug("Round started (seed=%s); last stand cleared", round_seed)

    def on_extraction_fully_completed(self) -> None:
        self.state.reset()
        logger.debug("All extraction points completed; last stand cleared")

    def _announce(self) -> None:
        self.presentation.big_message(
            ANNOUNCEMENT_TITLE, ANNOUNCEMENT_SUBTITLE, ANNOUNCEMENT_DURATION, RED
        )
        self.presentation.focus_text(FOCUS_TEXT_MESSAGE, RED, RED, FOCUS_TEXT_DURATION)

    def _spawn(self, reward: RewardCandidate):
        """Spawn the reward in front of the player and shake the camera there."""
        transform = self.player.player_transform()
        position = transform.point_in_front()
        rotation = transform.rotation

        if self.session.is_multiplayer():
            self.spawner.spawn_networked(reward.spawn_reference, position, rotation)
        else:
            self.spawner.spawn_local(reward.spawn_reference, position, rotation)

        shake = (SHAKE_INTENSITY, SHAKE_DISTANCE, SHAKE_DURATION, position, SHAKE_FALLOFF)
        self.presentation.camera_impact(*shake)
        self.presentation.camera_shake(*shake)

        logger.info("Spawned %s at %s", reward.name, position)
        return position, rotation
