"""stride-steer - Kinematic steering behaviors and flocking."""
from __future__ import annotations

from stride_steer import vec
from stride_steer.behaviors import (
    Align,
    AlignConfig,
    Arrive,
    ArriveConfig,
    Flee,
    OrientationMatching,
    PositionMatching,
    RotationMatching,
    SteeringBehavior,
    VelocityMatching,
    face,
)
from stride_steer.flocking import Alignment, Cohesion, Flock, FlockConfig, Separation
from stride_steer.kinematic import Kinematic, SteeringOutput, apply
from stride_steer.systems import Boid, Drift, make_flock_system, make_kinematic_system
from stride_steer.wander import Wander, WanderConfig

__all__ = [
    "Align",
    "AlignConfig",
    "Alignment",
    "Arrive",
    "ArriveConfig",
    "Boid",
    "Cohesion",
    "Drift",
    "Flee",
    "Flock",
    "FlockConfig",
    "Kinematic",
    "OrientationMatching",
    "PositionMatching",
    "RotationMatching",
    "Separation",
    "SteeringBehavior",
    "SteeringOutput",
    "VelocityMatching",
    "Wander",
    "WanderConfig",
    "apply",
    "face",
    "make_flock_system",
    "make_kinematic_system",
    "vec",
]
