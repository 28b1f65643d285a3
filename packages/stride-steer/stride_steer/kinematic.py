"""Point-mass state and the steering output value."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from stride_steer import vec
from stride_steer.vec import Vec


@dataclass
class Kinematic:
    """Position, velocity, orientation (degrees) and rotation (degrees/sec).

    Owned by one agent and mutated every frame. Velocity is never clamped
    here; the controlling behavior does that.
    """

    position: Vec = (0.0, 0.0)
    velocity: Vec = (0.0, 0.0)
    orientation: float = 0.0
    rotation: float = 0.0

    def update(self, dt: float) -> None:
        self.position = vec.add(self.position, vec.scale(self.velocity, dt))
        self.orientation = vec.wrap_degrees(self.orientation + self.rotation * dt)

    @property
    def speed(self) -> float:
        return vec.magnitude(self.velocity)

    def heading(self) -> Vec:
        return vec.from_angle(self.orientation)

    def copy(self) -> Kinematic:
        return Kinematic(self.position, self.velocity, self.orientation, self.rotation)


@dataclass(frozen=True)
class SteeringOutput:
    """Linear acceleration plus scalar angular acceleration for one tick."""

    linear: Vec = (0.0, 0.0)
    angular: float = 0.0

    ZERO: ClassVar[SteeringOutput]

    def __add__(self, other: SteeringOutput) -> SteeringOutput:
        return SteeringOutput(vec.add(self.linear, other.linear), self.angular + other.angular)


SteeringOutput.ZERO = SteeringOutput()


def apply(
    kinematic: Kinematic,
    steering: SteeringOutput,
    dt: float,
    max_speed: float | None = None,
) -> None:
    """Integrate ``steering`` into ``kinematic`` over ``dt``.

    Accelerations update velocity and rotation first, then the kinematic
    moves (semi-implicit Euler). ``max_speed`` clamps velocity before the move.
    """
    kinematic.velocity = vec.add(kinematic.velocity, vec.scale(steering.linear, dt))
    kinematic.rotation += steering.angular * dt
    if max_speed is not None:
        kinematic.velocity = vec.clamp_magnitude(kinematic.velocity, max_speed)
    kinematic.update(dt)
