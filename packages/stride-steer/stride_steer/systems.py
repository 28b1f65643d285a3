"""System factories for kinematic integration and flocking."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from stride_steer.flocking import Flock
from stride_steer.kinematic import Kinematic

if TYPE_CHECKING:
    from stride import TickContext, World


@dataclass
class Boid:
    """Tag: this agent's Kinematic is stepped by the flock system."""

    flock: str = "default"


@dataclass
class Drift:
    """Tag: this agent's Kinematic integrates on its own each frame."""


def make_kinematic_system() -> Callable[["World", "TickContext"], None]:
    """Integrate every agent tagged with :class:`Drift`."""

    def kinematic_system(world: World, ctx: TickContext) -> None:
        for _, (kin, _) in world.query(Kinematic, Drift):
            kin.update(ctx.dt)

    return kinematic_system


def make_flock_system(
    flock: Flock, name: str = "default",
) -> Callable[["World", "TickContext"], None]:
    """Step all boids of one flock together from a single snapshot."""

    def flock_system(world: World, ctx: TickContext) -> None:
        members = [
            kin for _, (kin, boid) in world.query(Kinematic, Boid) if boid.flock == name
        ]
        if members:
            flock.step(members, ctx.dt)

    return flock_system
