"""Rooms, obstacles, walkability and grid line-of-sight."""
from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, half-open on the right and bottom edges."""

    left: float
    top: float
    width: float
    height: float

    def contains(self, point: Point) -> bool:
        x, y = point
        return (
            self.left <= x < self.left + self.width
            and self.top <= y < self.top + self.height
        )

    @property
    def center(self) -> Point:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)


class Environment:
    """Walkable rooms and blocking obstacles inside a bounded area.

    A point is walkable iff it is in bounds, inside at least one room and
    inside no obstacle. Read-only once the level is authored.
    """

    def __init__(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"environment size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._rooms: list[Rect] = []
        self._obstacles: list[Rect] = []

    @property
    def rooms(self) -> tuple[Rect, ...]:
        return tuple(self._rooms)

    @property
    def obstacles(self) -> tuple[Rect, ...]:
        return tuple(self._obstacles)

    def add_room(self, room: Rect) -> None:
        self._rooms.append(room)

    def add_obstacle(self, obstacle: Rect) -> None:
        self._obstacles.append(obstacle)

    def in_bounds(self, point: Point) -> bool:
        x, y = point
        return 0.0 <= x < self.width and 0.0 <= y < self.height

    def is_obstacle(self, point: Point) -> bool:
        if not self.in_bounds(point):
            return True
        if any(o.contains(point) for o in self._obstacles):
            return True
        return not any(r.contains(point) for r in self._rooms)

    def is_walkable(self, point: Point) -> bool:
        return not self.is_obstacle(point)

    def room_index(self, point: Point) -> int:
        for i, room in enumerate(self._rooms):
            if room.contains(point):
                return i
        return -1

    def has_line_of_sight(self, start: Point, end: Point) -> bool:
        """Rasterize start -> end on the unit grid and test every cell visited.

        Integer error-accumulating walk: each step moves one unit along x or
        y depending on the running error term, for ``1 + |dx| + |dy|`` steps.
        """
        dx = abs(end[0] - start[0])
        dy = abs(end[1] - start[1])
        x = math.trunc(start[0])
        y = math.trunc(start[1])
        steps = 1 + int(dx + dy)
        x_step = 1 if end[0] > start[0] else -1
        y_step = 1 if end[1] > start[1] else -1
        error = dx - dy
        dx *= 2
        dy *= 2

        for _ in range(steps):
            if self.is_obstacle((float(x), float(y))):
                return False
            if error > 0:
                x += x_step
                error -= dy
            else:
                y += y_step
                error += dx
        return True
