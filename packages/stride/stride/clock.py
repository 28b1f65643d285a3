"""Variable-timestep clock with a dt cap."""

import random
from typing import Callable

from stride.types import TickContext

DEFAULT_MAX_DT = 0.1


class Clock:
    """Counts frames and accumulates clamped frame time.

    Frame time arrives from the outside (a render loop or a test), so every
    value goes through :meth:`clamp` first. Large steps after a stall would
    otherwise push agents through walls.
    """

    def __init__(self, max_dt: float = DEFAULT_MAX_DT) -> None:
        if max_dt <= 0:
            raise ValueError("max_dt must be positive")
        self._max_dt = max_dt
        self._dt = 0.0
        self._elapsed = 0.0
        self._tick_number = 0

    @property
    def max_dt(self) -> float:
        return self._max_dt

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def clamp(self, dt: float) -> float:
        if dt != dt or dt < 0.0:
            return 0.0
        return min(dt, self._max_dt)

    def advance(self, dt: float) -> float:
        self._dt = self.clamp(dt)
        self._elapsed += self._dt
        self._tick_number += 1
        return self._dt

    def context(self, stop_fn: Callable[[], None], rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._elapsed,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self) -> None:
        self._dt = 0.0
        self._elapsed = 0.0
        self._tick_number = 0
