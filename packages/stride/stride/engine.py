"""Engine - frame loop, system ordering, and lifecycle hooks."""

import logging
import os
import random
from typing import Callable

from stride.clock import DEFAULT_MAX_DT, Clock
from stride.types import System, TickContext
from stride.world import World

logger = logging.getLogger(__name__)


class Engine:
    """Drives registered systems once per frame.

    The caller owns wall-clock pacing (a pygame loop, a test) and passes the
    measured frame time to :meth:`step`. Systems run in registration order and
    all see the same :class:`TickContext`.
    """

    def __init__(self, max_dt: float = DEFAULT_MAX_DT, seed: int | None = None) -> None:
        self._clock = Clock(max_dt)
        self._world = World()
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def world(self) -> World:
        return self._world

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[World, TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[World, TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self, dt: float) -> None:
        clamped = self._clock.advance(dt)
        if clamped < dt:
            logger.debug(f"Frame time {dt:.3f}s clamped to {clamped:.3f}s")
        ctx = self._clock.context(self._request_stop, self._rng)
        for system in self._systems:
            system(self._world, ctx)
            if self._stop_requested:
                break

    def step(self, dt: float) -> None:
        self._stop_requested = False
        self._tick(dt)

    def run(self, n: int, dt: float) -> None:
        """Run ``n`` frames of ``dt`` seconds with start and stop hooks."""
        self._stop_requested = False
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._start_hooks:
            hook(self._world, ctx)

        for _ in range(n):
            self._tick(dt)
            if self._stop_requested:
                break

        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._stop_hooks:
            hook(self._world, ctx)
