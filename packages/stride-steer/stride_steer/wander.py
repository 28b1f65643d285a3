"""Wander: temporally smoothed random heading via circle projection."""
from __future__ import annotations

import random
from dataclasses import dataclass

from stride_steer import vec
from stride_steer.behaviors import Align, AlignConfig, face
from stride_steer.kinematic import Kinematic, SteeringOutput


@dataclass(frozen=True)
class WanderConfig:
    """Options for :class:`Wander`.

    Attributes:
        wander_distance: How far ahead of the agent the circle sits.
        wander_radius: Radius of the projected circle.
        angle_smoothing: Largest per-tick change of the wander angle, degrees.
        max_acceleration: Seek acceleration toward the wander target.
    """

    wander_distance: float = 50.0
    wander_radius: float = 30.0
    angle_smoothing: float = 30.0
    max_acceleration: float = 100.0

    def __post_init__(self) -> None:
        if self.wander_radius < 0 or self.wander_distance < 0:
            raise ValueError("wander_radius and wander_distance must not be negative")
        if self.angle_smoothing < 0:
            raise ValueError("angle_smoothing must not be negative")


class Wander:
    """Seeks a point that drifts around a circle projected ahead of the agent.

    The RNG is injected and ``wander_angle`` lives on the instance.
    """

    def __init__(
        self,
        rng: random.Random,
        config: WanderConfig | None = None,
        align: AlignConfig | None = None,
    ) -> None:
        self.rng = rng
        self.config = config or WanderConfig()
        self.wander_angle = 0.0
        self._align = Align(align)

    def jitter(self) -> float:
        """Binomial jitter: ``(r1 - r2) * angle_smoothing`` with r in [0, 1)."""
        return (self.rng.random() - self.rng.random()) * self.config.angle_smoothing

    def circle_center(self, me: Kinematic) -> vec.Vec:
        direction = vec.normalize(me.velocity)
        if direction == (0.0, 0.0):
            direction = me.heading()
        return vec.add(me.position, vec.scale(direction, self.config.wander_distance))

    def wander_target(self, me: Kinematic) -> vec.Vec:
        """Advance the wander angle one step and return the new target point."""
        self.wander_angle += self.jitter()
        displacement = vec.scale(vec.from_angle(self.wander_angle), self.config.wander_radius)
        return vec.add(self.circle_center(me), displacement)

    def compute(self, me: Kinematic, target: Kinematic | None = None) -> SteeringOutput:
        point = self.wander_target(me)
        seek = vec.normalize(vec.sub(point, me.position))
        linear = vec.scale(seek, self.config.max_acceleration)
        turn = self._align.compute(me, face(me, point))
        return SteeringOutput(linear, turn.angular)

    def reset(self, angle: float = 0.0) -> None:
        self.wander_angle = angle
