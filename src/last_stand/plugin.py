"""Plugin bootstrap - wires config, round state and evaluator to a host."""

import logging
from pathlib import Path
from typing import Optional

from src.last_stand.config import LOG_DIR, LOG_FILE_NAME, PACKAGE_LOGGER
from src.last_stand.evaluator import LastStandEvaluator, LastStandOutcome
from src.last_stand.reward_config import RewardConfigLoader
from src.last_stand.round_state import RoundStateStore
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)

PLUGIN_GUID = "umbreon222.repo.laststand"
PLUGIN_NAME = "Last Stand"
PLUGIN_VERSION = "1.0.0"


class LastStandPlugin:
    """Entry point the host loads once per process.

    ``host`` must implement every collaborator interface (RoundMetricsProvider,
    HostSession, PlayerLocator, SpawnRequester, PresentationSink); the
    in-memory SimulatedHost is one such object.
    """

    def __init__(
        self,
        host,
        config_file: Optional[Path] = None,
        state: Optional[RoundStateStore] = None,
        configure_logging: bool = True,
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        rng=None,
    ):
        self.host = host
        self.config_loader = RewardConfigLoader(config_file)
        self.state = state or RoundStateStore()
        self.configure_logging = configure_logging
        self.log_level = log_level
        self.log_dir = log_dir or LOG_DIR
        self.rng = rng
        self.evaluator: Optional[LastStandEvaluator] = None

    def load(self) -> LastStandEvaluator:
        """Read the reward table once, reset round state, build the evaluator."""
        if self.configure_logging:
            setup_logging(
                self.log_level,
                log_dir=self.log_dir,
                log_file_name=LOG_FILE_NAME,
                package=PACKAGE_LOGGER,
            )

        self.state.initialize(self.config_loader.load())
        self.evaluator = LastStandEvaluator(
            state=self.state,
            metrics_provider=self.host,
            session=self.host,
            player=self.host,
            spawner=self.host,
            presentation=self.host,
            rng=self.rng,
        )

        logger.info("%s has loaded! (version %s)", PLUGIN_NAME, PLUGIN_VERSION)
        return self.evaluator

    # Host event hooks

    def on_collectible_destroyed(self, destroyed_value: float) -> Optional[LastStandOutcome]:
        return self._require_evaluator().handle_collectible_destroyed(destroyed_value)

    def on_round_start(self, round_seed: Optional[int] = None) -> None:
        self._require_evaluator().on_round_start(round_seed)

    def on_extraction_fully_completed(self) -> None:
        self._require_evaluator().on_extraction_fully_completed()

    def _require_evaluator(self) -> LastStandEvaluator:
        if self.evaluator is None:
            raise RuntimeError(f"{PLUGIN_NAME} received an event before load()")
        return self.evaluator
