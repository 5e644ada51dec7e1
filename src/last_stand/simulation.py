"""Play a round against an in-memory host.

Usage:
    python -m src.last_stand.simulation [seed] [config_file]

Examples:
    python -m src.last_stand.simulation 7
    python -m src.last_stand.simulation 7 /path/to/last_stand_rewards.csv
"""

import logging
import random
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from src.last_stand.collaborators import (
    HostSession,
    PlayerLocator,
    PlayerTransform,
    PresentationSink,
    RoundMetricsProvider,
    SpawnRequester,
    Vector3,
)
from src.last_stand.plugin import LastStandPlugin
from src.last_stand.round_state import RoundMetrics
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)

IDENTITY_ROTATION = (0.0, 0.0, 0.0, 1.0)


@dataclass
class SpawnRecord:
    spawn_reference: str
    position: Vector3
    rotation: Tuple[float, float, float, float]
    networked: bool


@dataclass
class SimulatedHost(
    RoundMetricsProvider, HostSession, PlayerLocator, SpawnRequester, PresentationSink
):
    """Implements every host collaborator in memory and records calls.

    ``collectibles`` holds the current dollar value of each live collectible.
    """

    haul_goal: int = 100
    extraction_point_count: int = 2
    extraction_points_completed: int = 0
    collectibles: List[float] = field(default_factory=list)
    level_running: bool = True
    authoritative: bool = True
    multiplayer: bool = False
    transform: PlayerTransform = PlayerTransform(
        position=Vector3(0.0, 0.0, 0.0),
        forward=Vector3(0.0, 0.0, 1.0),
        up=Vector3(0.0, 1.0, 0.0),
        rotation=IDENTITY_ROTATION,
    )
    on_destroy: Optional[Callable[[float], object]] = None

    big_messages: List[tuple] = field(default_factory=list)
    focus_texts: List[tuple] = field(default_factory=list)
    camera_impacts: List[tuple] = field(default_factory=list)
    camera_shakes: List[tuple] = field(default_factory=list)
    spawns: List[SpawnRecord] = field(default_factory=list)

    # RoundMetricsProvider

    def snapshot(self) -> RoundMetrics:
        return RoundMetrics(
            haul_goal=self.haul_goal,
            extraction_point_count=self.extraction_point_count,
            extraction_points_completed=self.extraction_points_completed,
            current_in_level_value=sum(self.collectibles),
        )

    # HostSession

    def is_level_running(self) -> bool:
        return self.level_running

    def is_authoritative(self) -> bool:
        return self.authoritative

    def is_multiplayer(self) -> bool:
        return self.multiplayer

    # PlayerLocator

    def player_transform(self) -> PlayerTransform:
        return self.transform

    # SpawnRequester

    def spawn_networked(self, spawn_reference, position, rotation):
        self.spawns.append(SpawnRecord(spawn_reference, position, rotation, networked=True))

    def spawn_local(self, spawn_reference, position, rotation):
        self.spawns.append(SpawnRecord(spawn_reference, position, rotation, networked=False))

    # PresentationSink

    def big_message(self, title, subtitle, duration, color):
        self.big_messages.append((title, subtitle, duration, color))

    def focus_text(self, message, color, flash_color, duration):
        self.focus_texts.append((message, color, flash_color, duration))

    def camera_impact(self, intensity, distance, duration, position, falloff):
        self.camera_impacts.append((intensity, distance, duration, position, falloff))

    def camera_shake(self, intensity, distance, duration, position, falloff):
        self.camera_shakes.append((intensity, distance, duration, position, falloff))

    # World actions

    def destroy_collectible(self, index: int):
        """Destroy a live collectible.

        The destruction event fires before the collectible leaves the level,
        matching the host's ordering.
        """
        value = self.collectibles[index]
        result = self.on_destroy(value) if self.on_destroy else None
        del self.collectibles[index]
        return result

    def complete_extraction_point(self, banked_indices: List[int]) -> None:
        """Bank the given collectibles at the next extraction point."""
        for index in sorted(banked_indices, reverse=True):
            del self.collectibles[index]
        self.extraction_points_completed += 1


def run_simulation(
    seed: int = 0,
    config_file: Optional[Path] = None,
    haul_goal: int = 1000,
    extraction_point_count: int = 3,
    collectible_count: int = 12,
    configure_logging: bool = False,
):
    """Break collectibles at random until last stand triggers or none remain.

    Returns:
        (SimulatedHost, list of LastStandOutcome) for inspection.
    """
    rng = random.Random(seed)
    host = SimulatedHost(
        haul_goal=haul_goal,
        extraction_point_count=extraction_point_count,
        collectibles=[float(rng.randint(50, 250)) for _ in range(collectible_count)],
    )
    plugin = LastStandPlugin(
        host, config_file=config_file, configure_logging=configure_logging, rng=rng
    )
    plugin.load()
    host.on_destroy = plugin.on_collectible_destroyed
    plugin.on_round_start(seed)

    logger.info(
        "Round %d: goal %d over %d extraction points, %.0f in level",
        seed,
        haul_goal,
        extraction_point_count,
        sum(host.collectibles),
    )

    outcomes = []
    while host.collectibles:
        outcome = host.destroy_collectible(rng.randrange(len(host.collectibles)))
        outcomes.append(outcome)
        if outcome is not None and outcome.activated:
            break

    return host, outcomes


if __name__ == "__main__":
    setup_logging()

    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 0
    config_file = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        host, outcomes = run_simulation(seed, config_file)
    except Exception:
        logger.exception("Simulation failed")
        sys.exit(1)

    last = outcomes[-1] if outcomes else None
    print(f"Destroyed {len(outcomes)} collectible(s)")
    if last is not None and last.activated:
        reward = last.reward.name if last.reward else "nothing"
        print(f"Last stand: {last.status.value}, reward: {reward}")
    else:
        print("Round stayed completable")
