"""Components binding a control policy to a steered monster."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stride_decide.tree import IDLE

if TYPE_CHECKING:
    from stride import EntityId
    from stride_nav.compiler import GridCompiler
    from stride_nav.environment import Environment, Point
    from stride_nav.graph import Graph
    from stride_steer.wander import Wander

TRAIL_LENGTH = 30


@dataclass
class Agent:
    """The action label an agent is running and how long it has run it.

    The control policy is whichever of ``BehaviorTree`` or
    ``DecisionPolicy`` is attached to the same agent.
    """

    action: str = IDLE
    time_in_action: float = 0.0


@dataclass
class Monster:
    """Per-monster action state. The monster's body is its Kinematic.

    Attributes:
        start: Position restored by ``reset_monster``.
        wander: This monster's wander behavior and its angle.
        path: Waypoints of the current plan, start cell first.
        waypoint_index: Index into ``path`` of the waypoint being steered to.
        goal_vertex: Graph vertex the current plan leads to, -1 for none.
        dance_anchor: Center of the running dance, None when not dancing.
        dance_time: Seconds spent in the running dance.
        dance_index: Ring waypoint the dance is steering to.
        caught: Whether the player was within catch distance last frame.
        obstacle_hits: Consecutive frames with an obstacle just ahead.
        since_dance: Seconds since the last dance was triggered.
        trail: Most recent positions, oldest first.
    """

    start: Point
    wander: Wander
    path: list[Point] = field(default_factory=list)
    waypoint_index: int = 0
    goal_vertex: int = -1
    dance_anchor: Point | None = None
    dance_time: float = 0.0
    dance_index: int = 0
    caught: bool = False
    obstacle_hits: int = 0
    since_dance: float = 0.0
    trail: deque[Point] = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))

    @property
    def is_dancing(self) -> bool:
        return self.dance_anchor is not None

    @property
    def current_waypoint(self) -> Point | None:
        if self.waypoint_index >= len(self.path):
            return None
        return self.path[self.waypoint_index]

    def clear_path(self) -> None:
        self.path = []
        self.waypoint_index = 0
        self.goal_vertex = -1

    def stop_dance(self) -> None:
        self.dance_anchor = None
        self.dance_time = 0.0
        self.dance_index = 0


@dataclass
class Target:
    """The agent this monster chases."""

    entity: EntityId


@dataclass
class Navigation:
    """Shared read-only level handles; one instance serves every monster."""

    environment: Environment
    graph: Graph
    compiler: GridCompiler


@dataclass
class Recorded:
    """Tag: this monster's state-action pairs go to the trace recorder."""
