"""PathFollower - consumes waypoints through Arrive and Align."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from stride_steer import vec
from stride_steer.behaviors import Align, AlignConfig, Arrive, ArriveConfig, face
from stride_steer.kinematic import Kinematic, SteeringOutput, apply

from stride_nav.environment import Point


@dataclass(frozen=True)
class FollowerConfig:
    """Options for :class:`PathFollower`.

    Attributes:
        arrive: Linear steering toward the current waypoint.
        align: Angular steering toward the waypoint heading.
        waypoint_threshold: Distance at which a waypoint counts as reached.
        max_speed: Speed clamp after every update; defaults to
            ``arrive.max_speed``.
    """

    arrive: ArriveConfig = field(
        default_factory=lambda: ArriveConfig(
            max_acceleration=250.0, max_speed=175.0,
            target_radius=5.0, slow_radius=120.0, time_to_target=0.2,
        )
    )
    align: AlignConfig = field(
        default_factory=lambda: AlignConfig(
            max_angular_acceleration=15.0, max_rotation=200.0,
            target_radius=1.0, slow_radius=40.0, time_to_target=0.05,
        )
    )
    waypoint_threshold: float = 10.0
    max_speed: float | None = None

    def __post_init__(self) -> None:
        if self.waypoint_threshold <= 0:
            raise ValueError("waypoint_threshold must be positive")

    @property
    def speed_limit(self) -> float:
        return self.max_speed if self.max_speed is not None else self.arrive.max_speed


class PathFollower:
    """Steers a kinematic through a sequence of 2D waypoints.

    The follower does not own the kinematic; an agent hands in its own and
    the follower mutates it on :meth:`update`.
    """

    def __init__(self, kinematic: Kinematic, config: FollowerConfig | None = None) -> None:
        self.kinematic = kinematic
        self.config = config or FollowerConfig()
        self._arrive = Arrive(self.config.arrive)
        self._align = Align(self.config.align)
        self._path: list[Point] = []
        self._index = 0

    @property
    def path(self) -> tuple[Point, ...]:
        return tuple(self._path)

    @property
    def waypoint_index(self) -> int:
        return self._index

    @property
    def is_complete(self) -> bool:
        return self._index >= len(self._path)

    @property
    def current_target(self) -> Point | None:
        if self.is_complete:
            return None
        return self._path[self._index]

    def set_path(self, points: Sequence[Point]) -> None:
        self._path = [(float(x), float(y)) for x, y in points]
        self._index = 0

    def clear(self) -> None:
        self._path = []
        self._index = 0

    def steering(self) -> SteeringOutput:
        """Arrive + Align toward the current waypoint, without integrating."""
        target_point = self.current_target
        if target_point is None:
            return SteeringOutput.ZERO
        target = face(self.kinematic, target_point)
        linear = self._arrive.compute(self.kinematic, target).linear
        angular = self._align.compute(self.kinematic, target).angular
        return SteeringOutput(linear, angular)

    def update(self, dt: float) -> bool:
        """Advance one tick. Returns True once the path is complete."""
        if self.is_complete:
            return True
        apply(self.kinematic, self.steering(), dt, max_speed=self.config.speed_limit)
        self.advance_if_reached()
        return self.is_complete

    def advance_if_reached(self) -> bool:
        target_point = self.current_target
        if target_point is None:
            return False
        if vec.distance(self.kinematic.position, target_point) < self.config.waypoint_threshold:
            self._index += 1
            return True
        return False
