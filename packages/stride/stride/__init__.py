"""stride - frame loop and agent registry for 2D game-AI experiments."""

from stride.clock import Clock
from stride.engine import Engine
from stride.types import DeadEntityError, EntityId, Point, System, TickContext
from stride.world import World

__all__ = [
    "Engine",
    "World",
    "Clock",
    "TickContext",
    "EntityId",
    "Point",
    "System",
    "DeadEntityError",
]
