"""EnvironmentState - per-frame snapshot that decision conditions query."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from stride_steer import vec

if TYPE_CHECKING:
    from stride_nav.environment import Environment, Point
    from stride_steer.kinematic import Kinematic

# Unit probe directions: the four axes and the four diagonals.
_PROBES = tuple(
    (math.cos(math.radians(a)), math.sin(math.radians(a))) for a in range(0, 360, 45)
)


class EnvironmentState:
    """Caches one agent's kinematic state and answers condition queries.

    Call :meth:`update` once per frame before evaluating the decision tree.
    Timers advance only through ``dt``.
    """

    def __init__(
        self,
        kinematic: Kinematic,
        environment: Environment,
        idle_speed: float = 5.0,
    ) -> None:
        self._kinematic = kinematic
        self._environment = environment
        self.idle_speed = idle_speed
        self._position: Point = kinematic.position
        self._velocity: Point = kinematic.velocity
        self._speed = vec.magnitude(kinematic.velocity)
        self._idle_time = 0.0
        self._time_in_state = 0.0
        self._target: Point | None = None

    def update(self, dt: float) -> None:
        self._position = self._kinematic.position
        self._velocity = self._kinematic.velocity
        self._speed = vec.magnitude(self._velocity)
        if self._speed < self.idle_speed:
            self._idle_time += dt
        else:
            self._idle_time = 0.0
        self._time_in_state += dt

    @property
    def position(self) -> Point:
        return self._position

    @property
    def velocity(self) -> Point:
        return self._velocity

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def idle_time(self) -> float:
        return self._idle_time

    @property
    def time_in_state(self) -> float:
        return self._time_in_state

    def reset_state_timer(self) -> None:
        self._time_in_state = 0.0

    # --- Queries ---

    def distance_to(self, point: Point) -> float:
        return vec.distance(self._position, point)

    def is_near_obstacle(self, radius: float = 50.0) -> bool:
        """True if any of 8 probes at radius/2 or radius hits a blocked point."""
        x, y = self._position
        env = self._environment
        for dx, dy in _PROBES:
            for reach in (radius * 0.5, radius):
                if env.is_obstacle((x + dx * reach, y + dy * reach)):
                    return True
        return False

    def is_moving_fast(self, threshold: float = 100.0) -> bool:
        return self._speed > threshold

    def has_line_of_sight(self, point: Point) -> bool:
        return self._environment.has_line_of_sight(self._position, point)

    def is_idle_for_too_long(self, threshold: float = 3.0) -> bool:
        return self._idle_time >= threshold

    def room_index(self) -> int:
        return self._environment.room_index(self._position)

    def is_in_room(self, index: int) -> bool:
        return self.room_index() == index

    # --- Target tracking ---

    @property
    def target(self) -> Point | None:
        return self._target

    def set_target(self, point: Point | None) -> None:
        self._target = point

    def should_change_target(self, reach: float = 20.0, idle_threshold: float = 3.0) -> bool:
        """Idle too long, no target yet, or close enough to the current one."""
        if self.is_idle_for_too_long(idle_threshold):
            return True
        if self._target is None:
            return True
        return self.distance_to(self._target) < reach
