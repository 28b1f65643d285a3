"""2D vector math helpers operating on tuple[float, float].

Angles are in degrees everywhere; conversion to radians stays inside this
module.
"""
from __future__ import annotations

import math

Vec = tuple[float, float]

EPSILON = 1e-6


def add(a: Vec, b: Vec) -> Vec:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec, b: Vec) -> Vec:
    return (a[0] - b[0], a[1] - b[1])


def scale(v: Vec, s: float) -> Vec:
    return (v[0] * s, v[1] * s)


def dot(a: Vec, b: Vec) -> float:
    return a[0] * b[0] + a[1] * b[1]


def magnitude_sq(v: Vec) -> float:
    return v[0] * v[0] + v[1] * v[1]


def magnitude(v: Vec) -> float:
    return math.hypot(v[0], v[1])


def normalize(v: Vec) -> Vec:
    """Unit vector along ``v``; the zero vector for tiny or NaN input."""
    mag = magnitude(v)
    if not mag > EPSILON:
        return (0.0, 0.0)
    return (v[0] / mag, v[1] / mag)


def distance_sq(a: Vec, b: Vec) -> float:
    return magnitude_sq(sub(a, b))


def distance(a: Vec, b: Vec) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def zero() -> Vec:
    return (0.0, 0.0)


def clamp_magnitude(v: Vec, max_mag: float) -> Vec:
    sq = magnitude_sq(v)
    if sq <= max_mag * max_mag:
        return v
    return scale(normalize(v), max_mag)


def from_angle(degrees: float) -> Vec:
    rad = math.radians(degrees)
    return (math.cos(rad), math.sin(rad))


def to_angle(v: Vec) -> float:
    """Heading of ``v`` in degrees, in (-180, 180]."""
    return math.degrees(math.atan2(v[1], v[0]))


def wrap_degrees(angle: float) -> float:
    """Reduce ``angle`` into [0, 360)."""
    wrapped = math.fmod(angle, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    # fmod of a tiny negative can round up to exactly 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def shortest_arc(delta: float) -> float:
    """Map any angular difference into (-180, 180]."""
    arc = math.fmod(delta, 360.0)
    if arc > 180.0:
        arc -= 360.0
    elif arc <= -180.0:
        arc += 360.0
    return arc
