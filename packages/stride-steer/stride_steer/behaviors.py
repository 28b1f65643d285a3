"""Steering behaviors: the matching primitives, Arrive, Align and Flee.

Every behavior exposes ``compute(me, target) -> SteeringOutput`` and is
configured by a frozen option record. Behaviors never mutate either
kinematic; integrating the output is the caller's job (see
:func:`stride_steer.kinematic.apply`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from stride_steer import vec
from stride_steer.kinematic import Kinematic, SteeringOutput


class SteeringBehavior(Protocol):
    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput: ...


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")


def _clamp_scalar(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


# --- Matching primitives ---


@dataclass(frozen=True)
class PositionMatching:
    """Raw seek: ``(target - me) * max_acceleration``.

    The offset is not normalized, so the output grows with distance. Callers
    that want a constant-magnitude seek normalize or clamp the result.
    """

    max_acceleration: float = 100.0

    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput:
        direction = vec.sub(target.position, me.position)
        return SteeringOutput(vec.scale(direction, self.max_acceleration), 0.0)


@dataclass(frozen=True)
class VelocityMatching:
    max_acceleration: float = 100.0
    time_to_target: float = 0.1

    def __post_init__(self) -> None:
        _require_positive(time_to_target=self.time_to_target)

    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput:
        linear = vec.scale(vec.sub(target.velocity, me.velocity), 1.0 / self.time_to_target)
        return SteeringOutput(vec.clamp_magnitude(linear, self.max_acceleration), 0.0)


@dataclass(frozen=True)
class OrientationMatching:
    """Full angular acceleration toward the target heading by the short way."""

    max_angular_acceleration: float = 180.0

    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput:
        arc = vec.shortest_arc(target.orientation - me.orientation)
        if arc == 0.0:
            return SteeringOutput.ZERO
        sign = 1.0 if arc > 0.0 else -1.0
        return SteeringOutput((0.0, 0.0), sign * self.max_angular_acceleration)


@dataclass(frozen=True)
class RotationMatching:
    max_angular_acceleration: float = 180.0
    time_to_target: float = 0.1

    def __post_init__(self) -> None:
        _require_positive(time_to_target=self.time_to_target)

    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput:
        angular = (target.rotation - me.rotation) / self.time_to_target
        return SteeringOutput((0.0, 0.0), _clamp_scalar(angular, self.max_angular_acceleration))


# --- Arrive / Align ---


@dataclass(frozen=True)
class ArriveConfig:
    """Options for :class:`Arrive`.

    Attributes:
        max_acceleration: Cap on the returned linear acceleration.
        max_speed: Desired speed outside ``slow_radius``.
        target_radius: Inside this distance the output is exactly zero.
        slow_radius: Inside this distance the desired speed scales down
            linearly with distance.
        time_to_target: Time over which to reach the desired velocity.
    """

    max_acceleration: float = 100.0
    max_speed: float = 200.0
    target_radius: float = 5.0
    slow_radius: float = 100.0
    time_to_target: float = 0.1

    def __post_init__(self) -> None:
        _require_positive(
            max_acceleration=self.max_acceleration,
            max_speed=self.max_speed,
            slow_radius=self.slow_radius,
            time_to_target=self.time_to_target,
        )
        if self.target_radius < 0:
            raise ValueError("target_radius must not be negative")


class Arrive:
    """Seek with smooth deceleration and an exact stop inside target_radius."""

    def __init__(self, config: ArriveConfig | None = None) -> None:
        self.config = config or ArriveConfig()

    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput:
        cfg = self.config
        offset = vec.sub(target.position, me.position)
        distance = vec.magnitude(offset)
        if distance < cfg.target_radius or distance <= vec.EPSILON:
            return SteeringOutput.ZERO

        if distance > cfg.slow_radius:
            target_speed = cfg.max_speed
        else:
            target_speed = cfg.max_speed * (distance / cfg.slow_radius)

        desired = vec.scale(offset, target_speed / distance)
        linear = vec.scale(vec.sub(desired, me.velocity), 1.0 / cfg.time_to_target)
        return SteeringOutput(vec.clamp_magnitude(linear, cfg.max_acceleration), 0.0)


@dataclass(frozen=True)
class AlignConfig:
    """Options for :class:`Align`; the angular analogue of ArriveConfig.

    Radii are in degrees, ``max_rotation`` in degrees/sec.
    """

    max_angular_acceleration: float = 200.0
    max_rotation: float = 120.0
    target_radius: float = 1.0
    slow_radius: float = 40.0
    time_to_target: float = 0.1

    def __post_init__(self) -> None:
        _require_positive(
            max_angular_acceleration=self.max_angular_acceleration,
            max_rotation=self.max_rotation,
            slow_radius=self.slow_radius,
            time_to_target=self.time_to_target,
        )
        if self.target_radius < 0:
            raise ValueError("target_radius must not be negative")


class Align:
    def __init__(self, config: AlignConfig | None = None) -> None:
        self.config = config or AlignConfig()

    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput:
        cfg = self.config
        rotation = vec.shortest_arc(target.orientation - me.orientation)
        size = abs(rotation)
        if size < cfg.target_radius or size == 0.0:
            return SteeringOutput.ZERO

        if size > cfg.slow_radius:
            target_rotation = cfg.max_rotation
        else:
            target_rotation = cfg.max_rotation * (size / cfg.slow_radius)
        target_rotation *= rotation / size

        angular = (target_rotation - me.rotation) / cfg.time_to_target
        return SteeringOutput((0.0, 0.0), _clamp_scalar(angular, cfg.max_angular_acceleration))


# --- Flee ---


@dataclass(frozen=True)
class Flee:
    """Full acceleration directly away from the target position."""

    max_acceleration: float = 100.0

    def compute(self, me: Kinematic, target: Kinematic) -> SteeringOutput:
        away = vec.normalize(vec.sub(me.position, target.position))
        return SteeringOutput(vec.scale(away, self.max_acceleration), 0.0)


def face(me: Kinematic, point: vec.Vec) -> Kinematic:
    """Target kinematic at ``point`` whose orientation looks at it from ``me``.

    When ``point`` coincides with ``me`` the current orientation is kept.
    """
    offset = vec.sub(point, me.position)
    if vec.magnitude(offset) <= vec.EPSILON:
        return Kinematic(position=point, orientation=me.orientation)
    return Kinematic(position=point, orientation=vec.to_angle(offset))
