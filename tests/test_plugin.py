"""Tests for plugin wiring and the in-memory round simulation."""

import logging
import logging.handlers
import random

import pytest

from src.last_stand.config import PACKAGE_LOGGER
from src.last_stand.evaluator import LastStandEvaluator, OutcomeStatus
from src.last_stand.plugin import LastStandPlugin
from src.last_stand.round_state import RoundStateStore
from src.last_stand.simulation import SimulatedHost, run_simulation
from src.logging_config import setup_logging


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "last_stand_rewards.csv"


def _make_plugin(config_file, **host_overrides):
    host_defaults = {
        "haul_goal": 100,
        "extraction_point_count": 2,
        "extraction_points_completed": 1,
        "collectibles": [10.0, 11.0, 39.0],
    }
    host_defaults.update(host_overrides)
    host = SimulatedHost(**host_defaults)
    plugin = LastStandPlugin(
        host, config_file=config_file, configure_logging=False, rng=random.Random(7)
    )
    return plugin, host


# ── Loading ──────────────────────────────────────────────────────────

class TestLoad:
    def test_returns_evaluator(self, config_file):
        plugin, _ = _make_plugin(config_file)
        evaluator = plugin.load()
        assert isinstance(evaluator, LastStandEvaluator)
        assert plugin.evaluator is evaluator

    def test_initializes_state_from_config(self, config_file):
        plugin, _ = _make_plugin(config_file)
        plugin.load()
        assert len(plugin.state.candidates()) == 13
        assert plugin.state.is_active() is False
        assert config_file.exists()

    def test_uses_injected_state(self, config_file):
        state = RoundStateStore()
        state.activate()
        host = SimulatedHost()
        plugin = LastStandPlugin(host, config_file=config_file, state=state, configure_logging=False)
        plugin.load()
        assert plugin.state is state
        assert state.is_active() is False

    def test_event_before_load(self, config_file):
        plugin, _ = _make_plugin(config_file)
        with pytest.raises(RuntimeError, match="before load"):
            plugin.on_collectible_destroyed(10)


# ── Event hooks ──────────────────────────────────────────────────────

class TestHooks:
    def test_destroy_hook_activates(self, config_file):
        plugin, host = _make_plugin(config_file)
        plugin.load()
        host.on_destroy = plugin.on_collectible_destroyed

        assert host.destroy_collectible(0).status is OutcomeStatus.FEASIBLE
        outcome = host.destroy_collectible(0)
        assert outcome.status is OutcomeStatus.SPAWNED
        assert len(host.spawns) == 1
        assert host.spawns[0].spawn_reference == outcome.reward.spawn_reference

    def test_round_hooks_reset(self, config_file):
        plugin, host = _make_plugin(config_file)
        plugin.load()
        host.on_destroy = plugin.on_collectible_destroyed

        host.destroy_collectible(1)
        assert plugin.state.is_active() is True
        plugin.on_round_start(99)
        assert plugin.state.is_active() is False

        plugin.state.activate()
        plugin.on_extraction_fully_completed()
        assert plugin.state.is_active() is False


# ── Simulation ───────────────────────────────────────────────────────

class TestSimulation:
    def test_round_ends_in_last_stand(self, config_file):
        host, outcomes = run_simulation(seed=3, config_file=config_file)

        assert outcomes
        assert outcomes[-1].activated is True
        assert all(not o.activated for o in outcomes[:-1])
        assert len(host.big_messages) == 1

    def test_spawns_weighted_reward(self, config_file):
        host, outcomes = run_simulation(seed=5, config_file=config_file)
        last = outcomes[-1]
        assert last.status is OutcomeStatus.SPAWNED
        assert host.spawns[0].spawn_reference == last.reward.spawn_reference

    def test_same_seed_same_round(self, config_file):
        _, first = run_simulation(seed=11, config_file=config_file)
        _, second = run_simulation(seed=11, config_file=config_file)
        assert len(first) == len(second)
        assert first[-1].reward == second[-1].reward

    def test_complete_extraction_point_banks_value(self):
        host = SimulatedHost(collectibles=[30.0, 40.0, 50.0])
        host.complete_extraction_point([0, 2])
        assert host.collectibles == [40.0]
        assert host.extraction_points_completed == 1
        assert host.snapshot().current_in_level_value == 40.0


# ── Logging ──────────────────────────────────────────────────────────

@pytest.fixture
def package_logger():
    """The plugin's package logger, restored to NOTSET afterwards."""
    pkg = logging.getLogger(PACKAGE_LOGGER)
    yield pkg
    pkg.setLevel(logging.NOTSET)


@pytest.fixture
def bare_root():
    """Root logger with its handlers detached for the duration of a test."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


class TestLoggingSetup:
    def test_installs_rotating_file_on_bare_root(self, tmp_path, bare_root, package_logger):
        log_file = setup_logging("DEBUG", log_dir=tmp_path / "logs")

        assert log_file == tmp_path / "logs" / "last_stand.log"
        assert log_file.parent.is_dir()
        kinds = {type(h) for h in bare_root.handlers}
        assert logging.handlers.RotatingFileHandler in kinds
        assert logging.StreamHandler in kinds

    def test_custom_file_name(self, tmp_path, bare_root, package_logger):
        log_file = setup_logging(log_dir=tmp_path, log_file_name="plugin.log")
        assert log_file.name == "plugin.log"

    def test_host_owned_root_left_alone(self, tmp_path, package_logger):
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            before = list(root.handlers)
            assert setup_logging(log_dir=tmp_path / "unused") is None
            assert root.handlers == before
            assert not (tmp_path / "unused").exists()
        finally:
            root.removeHandler(handler)

    def test_package_level_follows_request(self, tmp_path, package_logger):
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            setup_logging("DEBUG", log_dir=tmp_path)
            assert package_logger.level == logging.DEBUG
            setup_logging("warning", log_dir=tmp_path)
            assert package_logger.level == logging.WARNING
        finally:
            root.removeHandler(handler)

    def test_plugin_load_configures_package_level(self, config_file, tmp_path, package_logger):
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            plugin = LastStandPlugin(
                SimulatedHost(), config_file=config_file, log_level="DEBUG", log_dir=tmp_path
            )
            plugin.load()
            assert package_logger.level == logging.DEBUG
        finally:
            root.removeHandler(handler)

    def test_load_announces_plugin(self, config_file, caplog):
        plugin, _ = _make_plugin(config_file)
        with caplog.at_level(logging.INFO):
            plugin.load()
        assert "Last Stand has loaded!" in caplog.text
