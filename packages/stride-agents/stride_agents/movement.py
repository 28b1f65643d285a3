"""Collision-aware position updates."""
from __future__ import annotations

from typing import TYPE_CHECKING

from stride_steer import vec

if TYPE_CHECKING:
    from stride_nav.environment import Environment, Point

# Tried in order after the axis-aligned slides fail.
FRACTIONS = (0.75, 0.60, 0.45, 0.30, 0.15)
MIN_MOVE = 0.01


def find_valid_movement(environment: Environment, current: Point, proposed: Point) -> Point:
    """Best free position between ``current`` and a blocked ``proposed``.

    Slides along x, then along y, then shortens the move. Falls back to
    ``current`` when nothing is free or the move is shorter than MIN_MOVE.
    """
    move = vec.sub(proposed, current)
    if vec.magnitude(move) < MIN_MOVE:
        return current

    x_only = (proposed[0], current[1])
    if not environment.is_obstacle(x_only):
        return x_only

    y_only = (current[0], proposed[1])
    if not environment.is_obstacle(y_only):
        return y_only

    for fraction in FRACTIONS:
        candidate = vec.add(current, vec.scale(move, fraction))
        if not environment.is_obstacle(candidate):
            return candidate
    return current
