"""Interfaces the host game implements for the last stand evaluator."""

from abc import ABC, abstractmethod
from typing import NamedTuple, Tuple

from src.last_stand.round_state import RoundMetrics

Color = Tuple[float, float, float, float]
Rotation = Tuple[float, float, float, float]  # Quaternion (x, y, z, w)


class Vector3(NamedTuple):
    x: float
    y: float
    z: float

    def __add__(self, other):
        return Vector3(self.x + other[0], self.y + other[1], self.z + other[2])


class PlayerTransform(NamedTuple):
    position: Vector3
    forward: Vector3
    up: Vector3
    rotation: Rotation

    def point_in_front(self) -> Vector3:
        """One unit up and one unit forward of the player."""
        return self.position + self.up + self.forward


class RoundMetricsProvider(ABC):
    @abstractmethod
    def snapshot(self) -> RoundMetrics:
        """Haul goal, extraction progress and live collectible value right now."""


class HostSession(ABC):
    @abstractmethod
    def is_level_running(self) -> bool:
        """False in menus, the shop and the lobby."""

    @abstractmethod
    def is_authoritative(self) -> bool:
        """True in single player, or for the hosting peer in multiplayer."""

    @abstractmethod
    def is_multiplayer(self) -> bool: ...


class PlayerLocator(ABC):
    @abstractmethod
    def player_transform(self) -> PlayerTransform: ...


class SpawnRequester(ABC):
    @abstractmethod
    def spawn_networked(self, spawn_reference: str, position: Vector3, rotation: Rotation):
        """Create the object replicated to every peer."""

    @abstractmethod
    def spawn_local(self, spawn_reference: str, position: Vector3, rotation: Rotation):
        """Create the object on this peer only."""


class PresentationSink(ABC):
    @abstractmethod
    def big_message(self, title: str, subtitle: str, duration: float, color: Color): ...

    @abstractmethod
    def focus_text(self, message: str, color: Color, flash_color: Color, duration: float): ...

    @abstractmethod
    def camera_impact(
        self, intensity: float, distance: float, duration: float,
        position: Vector3, falloff: float,
    ): ...

    @abstractmethod
    def camera_shake(
        self, intensity: float, distance: float, duration: float,
        position: Vector3, falloff: float,
    ): ...
