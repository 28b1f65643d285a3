"""Flocking: separation, alignment and cohesion blended into one steer.

The three partial behaviors take the neighbor list in place of a single
target. :class:`Flock` blends them and steps a whole flock from one
snapshot, so every boid reads the positions other boids had at the start
of the frame.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from stride_steer import vec
from stride_steer.kinematic import Kinematic, SteeringOutput


@dataclass(frozen=True)
class FlockConfig:
    """Options for the flocking composite.

    Attributes:
        max_speed: Speed re-clamp applied after every step.
        max_force: Base steering magnitude, units/sec^2. The partial
            behaviors scale it (alignment 0.7, cohesion 0.6).
        separation_radius: Neighbors closer than this push away.
        alignment_radius: Neighbors inside this match headings.
        cohesion_radius: Neighbors inside this pull toward their center.
        separation_weight, alignment_weight, cohesion_weight: Blend weights.
        extent: (width, height) of the toroidal world.
    """

    max_speed: float = 100.0
    max_force: float = 300.0
    separation_radius: float = 25.0
    alignment_radius: float = 50.0
    cohesion_radius: float = 50.0
    separation_weight: float = 2.0
    alignment_weight: float = 0.9
    cohesion_weight: float = 0.8
    extent: tuple[float, float] = (800.0, 600.0)

    def __post_init__(self) -> None:
        if self.max_speed <= 0 or self.max_force <= 0:
            raise ValueError("max_speed and max_force must be positive")
        if self.extent[0] <= 0 or self.extent[1] <= 0:
            raise ValueError(f"extent must be positive, got {self.extent}")


def _within(me: Kinematic, others: Sequence[Kinematic], radius: float):
    for other in others:
        d = vec.distance(me.position, other.position)
        if 0.0 < d < radius:
            yield other, d


class Separation:
    def __init__(self, config: FlockConfig | None = None) -> None:
        self.config = config or FlockConfig()

    def compute(self, me: Kinematic, neighbors: Sequence[Kinematic]) -> SteeringOutput:
        radius = self.config.separation_radius
        total = (0.0, 0.0)
        count = 0
        for other, d in _within(me, neighbors, radius):
            # Closer neighbors push harder.
            weight = (radius - d) / radius
            push = vec.scale(vec.normalize(vec.sub(me.position, other.position)), weight)
            total = vec.add(total, push)
            count += 1
        if count == 0:
            return SteeringOutput.ZERO
        average = vec.scale(total, 1.0 / count)
        return SteeringOutput(vec.scale(vec.normalize(average), self.config.max_force), 0.0)


class Alignment:
    def __init__(self, config: FlockConfig | None = None) -> None:
        self.config = config or FlockConfig()

    def compute(self, me: Kinematic, neighbors: Sequence[Kinematic]) -> SteeringOutput:
        cfg = self.config
        total = (0.0, 0.0)
        count = 0
        for other, _ in _within(me, neighbors, cfg.alignment_radius):
            total = vec.add(total, other.velocity)
            count += 1
        if count == 0:
            return SteeringOutput.ZERO
        desired = vec.scale(vec.normalize(vec.scale(total, 1.0 / count)), cfg.max_speed * 0.8)
        steer = vec.sub(desired, me.velocity)
        return SteeringOutput(vec.clamp_magnitude(steer, cfg.max_force * 0.7), 0.0)


class Cohesion:
    def __init__(self, config: FlockConfig | None = None) -> None:
        self.config = config or FlockConfig()

    def compute(self, me: Kinematic, neighbors: Sequence[Kinematic]) -> SteeringOutput:
        cfg = self.config
        total = (0.0, 0.0)
        count = 0
        for other, _ in _within(me, neighbors, cfg.cohesion_radius):
            total = vec.add(total, other.position)
            count += 1
        if count == 0:
            return SteeringOutput.ZERO
        center = vec.scale(total, 1.0 / count)
        steer = vec.normalize(vec.sub(center, me.position))
        return SteeringOutput(vec.scale(steer, cfg.max_force * 0.6), 0.0)


class Flock:
    def __init__(self, config: FlockConfig | None = None) -> None:
        self.config = config or FlockConfig()
        self.separation = Separation(self.config)
        self.alignment = Alignment(self.config)
        self.cohesion = Cohesion(self.config)

    def steer(self, me: Kinematic, neighbors: Sequence[Kinematic]) -> SteeringOutput:
        """Weighted sum of the three partial behaviors."""
        cfg = self.config
        sep = self.separation.compute(me, neighbors).linear
        ali = self.alignment.compute(me, neighbors).linear
        coh = self.cohesion.compute(me, neighbors).linear
        linear = vec.add(
            vec.add(vec.scale(sep, cfg.separation_weight), vec.scale(ali, cfg.alignment_weight)),
            vec.scale(coh, cfg.cohesion_weight),
        )
        return SteeringOutput(linear, 0.0)

    def wrap(self, position: vec.Vec) -> vec.Vec:
        width, height = self.config.extent
        x = position[0] % width
        y = position[1] % height
        # % of a tiny negative can round up to exactly the extent
        if x >= width:
            x = 0.0
        if y >= height:
            y = 0.0
        return (x, y)

    def step(self, boids: Sequence[Kinematic], dt: float) -> None:
        """Advance every boid by ``dt`` using a pre-frame snapshot."""
        snapshot = [b.copy() for b in boids]
        accelerations = [self.steer(snapshot[i], snapshot) for i in range(len(boids))]
        for boid, steering in zip(boids, accelerations):
            boid.velocity = vec.clamp_magnitude(
                vec.add(boid.velocity, vec.scale(steering.linear, dt)),
                self.config.max_speed,
            )
            boid.position = self.wrap(vec.add(boid.position, vec.scale(boid.velocity, dt)))
            if vec.magnitude(boid.velocity) > vec.EPSILON:
                boid.orientation = vec.wrap_degrees(vec.to_angle(boid.velocity))
