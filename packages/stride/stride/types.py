"""Shared type aliases for the stride frame loop."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

EntityId = int
Point = tuple[float, float]


@dataclass(frozen=True, slots=True)
class TickContext:
    """Per-frame data handed to every system.

    ``dt`` is already clamped by the clock, so systems integrate it directly.
    """

    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random


class DeadEntityError(KeyError):
    """Raised when looking up an agent that has been despawned."""

    def __init__(self, entity_id: int, message: str) -> None:
        self.entity_id = entity_id
        super().__init__(message)


if TYPE_CHECKING:
    from stride.world import World

System = Callable[["World", TickContext], None]
