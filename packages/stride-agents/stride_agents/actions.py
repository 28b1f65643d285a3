"""Monster action vocabulary and the dispatcher that runs one frame of it.

Every control policy, behavior tree or decision tree, ends in a call to
:meth:`ActionDispatcher.execute` with one of :data:`ACTIONS`.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable

from stride_decide.tree import IDLE
from stride_nav.pathfinders import Dijkstra
from stride_steer import vec
from stride_steer.behaviors import Align, Arrive, face
from stride_steer.kinematic import Kinematic

from stride_agents.components import Agent, Monster, Navigation
from stride_agents.config import MonsterConfig
from stride_agents.movement import find_valid_movement
from stride_agents.sensing import player_position

if TYPE_CHECKING:
    from stride import EntityId, TickContext, World
    from stride_nav.environment import Point

logger = logging.getLogger(__name__)

PATHFIND_TO_PLAYER = "PathfindToPlayer"
WANDER = "Wander"
FOLLOW_PATH = "FollowPath"
DANCE = "Dance"
FLEE = "Flee"

ACTIONS = (PATHFIND_TO_PLAYER, WANDER, FOLLOW_PATH, DANCE, FLEE, IDLE)

# Flee probes: 8 directions, every 10 units out to 100.
FLEE_PROBE_ANGLES = tuple(range(0, 360, 45))
FLEE_PROBE_REACHES = tuple(float(r) for r in range(10, 101, 10))

ActionFn = Callable[["World", "TickContext", int], bool]


def dance_ring(anchor: Point, radius: float, points: int) -> list[Point]:
    """Evenly spaced points on a circle around ``anchor``, starting at angle 0."""
    return [
        vec.add(anchor, vec.scale(vec.from_angle(360.0 * i / points), radius))
        for i in range(points)
    ]


class ActionDispatcher:
    """Runs monster actions by label.

    One dispatcher serves every monster; all per-monster state lives on the
    Agent and Monster components. :meth:`execute` returns True once the
    action has nothing left to do this activation: a finished dance, a
    consumed path, or any single-frame action.
    """

    def __init__(self, config: MonsterConfig | None = None) -> None:
        self.config = config or MonsterConfig()
        self.pathfinder = Dijkstra()
        self._arrive = Arrive(self.config.arrive)
        self._align = Align(self.config.align)
        self._handlers: dict[str, ActionFn] = {
            PATHFIND_TO_PLAYER: self.pathfind_to_player,
            WANDER: self.wander,
            FOLLOW_PATH: self.follow_path,
            DANCE: self.dance,
            FLEE: self.flee,
            IDLE: self.idle,
        }

    def execute(self, world: World, ctx: TickContext, eid: EntityId, label: str) -> bool:
        handler = self._handlers.get(label)
        if handler is None:
            logger.warning(f"Unknown action {label!r} for monster {eid}; running {IDLE}")
            label = IDLE
            handler = self.idle

        agent = world.get(eid, Agent)
        if label != agent.action:
            if agent.action == DANCE:
                self._end_dance(world, eid)
            agent.action = label
            agent.time_in_action = 0.0
        return handler(world, ctx, eid)

    # --- Planning ---

    def plan(self, world: World, eid: EntityId, goal: Point) -> list[Point]:
        """Replace the monster's path with the Dijkstra route to ``goal``.

        The first waypoint is the monster's own cell, so steering starts at
        the second one when there is one.
        """
        kin = world.get(eid, Kinematic)
        monster = world.get(eid, Monster)
        nav = world.get(eid, Navigation)
        start = nav.compiler.point_to_vertex(kin.position)
        goal_vertex = nav.compiler.point_to_vertex(goal)
        vertices = self.pathfinder.find_path(nav.graph, start, goal_vertex)
        if not vertices:
            logger.debug(f"Monster {eid}: no path from vertex {start} to {goal_vertex}")
        monster.path = [nav.graph.position(v) for v in vertices]
        monster.waypoint_index = 1 if len(monster.path) > 1 else 0
        monster.goal_vertex = goal_vertex
        return monster.path

    def _needs_plan(self, world: World, eid: EntityId, goal: Point) -> bool:
        monster = world.get(eid, Monster)
        if monster.current_waypoint is None:
            return True
        nav = world.get(eid, Navigation)
        return nav.compiler.point_to_vertex(goal) != monster.goal_vertex

    # --- Actions ---

    def pathfind_to_player(self, world: World, ctx: TickContext, eid: EntityId) -> bool:
        """Re-plan when the player changed cells or the path ran out, then follow."""
        player = player_position(world, eid)
        if player is None:
            return True
        if self._needs_plan(world, eid, player):
            self.plan(world, eid, player)
        return self.follow_path(world, ctx, eid)

    def follow_path(self, world: World, ctx: TickContext, eid: EntityId) -> bool:
        kin = world.get(eid, Kinematic)
        monster = world.get(eid, Monster)
        waypoint = monster.current_waypoint
        if waypoint is None:
            return True

        env = world.get(eid, Navigation).environment
        self._steer_to(kin, waypoint, ctx.dt)
        proposed = vec.add(kin.position, vec.scale(kin.velocity, ctx.dt))
        if env.is_obstacle(proposed):
            kin.velocity = (0.0, 0.0)
            player = player_position(world, eid)
            if player is not None:
                self.plan(world, eid, player)
            return False

        kin.update(ctx.dt)
        if vec.distance(kin.position, waypoint) < self.config.waypoint_threshold:
            monster.waypoint_index += 1
        return monster.current_waypoint is None

    def wander(self, world: World, ctx: TickContext, eid: EntityId) -> bool:
        cfg = self.config
        kin = world.get(eid, Kinematic)
        monster = world.get(eid, Monster)
        env = world.get(eid, Navigation).environment

        steering = monster.wander.compute(kin)
        kin.velocity = vec.clamp_magnitude(
            vec.add(kin.velocity, vec.scale(steering.linear, ctx.dt)), cfg.wander_speed
        )
        proposed = vec.add(kin.position, vec.scale(kin.velocity, ctx.dt))
        if not env.is_obstacle(proposed):
            kin.position = proposed
        else:
            valid = find_valid_movement(env, kin.position, proposed)
            if valid != kin.position:
                kin.position = valid
            else:
                # Boxed in: pick a fresh heading and restart the wander angle there.
                angle = ctx.random.uniform(0.0, 360.0)
                kin.velocity = vec.scale(vec.from_angle(angle), cfg.wander_speed)
                monster.wander.reset(angle)

        if kin.speed > 0.1:
            kin.orientation = vec.wrap_degrees(vec.to_angle(kin.velocity))
        return True

    def dance(self, world: World, ctx: TickContext, eid: EntityId) -> bool:
        """Walk the ring around where the dance began.

        Ends after the last ring point or ``dance_duration`` seconds,
        whichever comes first.
        """
        cfg = self.config
        kin = world.get(eid, Kinematic)
        monster = world.get(eid, Monster)
        if monster.dance_anchor is None:
            monster.dance_anchor = kin.position
            monster.dance_time = 0.0
            monster.dance_index = 0
            kin.velocity = (0.0, 0.0)

        monster.dance_time += ctx.dt
        ring = dance_ring(monster.dance_anchor, cfg.dance_radius, cfg.dance_points)
        if monster.dance_time >= cfg.dance_duration or monster.dance_index >= len(ring):
            self._end_dance(world, eid)
            return True

        waypoint = ring[monster.dance_index]
        env = world.get(eid, Navigation).environment
        self._steer_to(kin, waypoint, ctx.dt)
        proposed = vec.add(kin.position, vec.scale(kin.velocity, ctx.dt))
        if env.is_obstacle(proposed):
            # Blocked ring point: skip it.
            kin.velocity = (0.0, 0.0)
            monster.dance_index += 1
            return False

        kin.update(ctx.dt)
        if vec.distance(kin.position, waypoint) < cfg.waypoint_threshold:
            monster.dance_index += 1
        return False

    def flee(self, world: World, ctx: TickContext, eid: EntityId) -> bool:
        kin = world.get(eid, Kinematic)
        env = world.get(eid, Navigation).environment
        direction = self._flee_direction(world, ctx, eid)

        kin.velocity = vec.scale(direction, self.config.flee_speed)
        kin.orientation = vec.wrap_degrees(vec.to_angle(direction))
        proposed = vec.add(kin.position, vec.scale(kin.velocity, ctx.dt))
        if not env.is_obstacle(proposed):
            kin.update(ctx.dt)
        else:
            kin.position = find_valid_movement(env, kin.position, proposed)
        return True

    def idle(self, world: World, ctx: TickContext, eid: EntityId) -> bool:
        kin = world.get(eid, Kinematic)
        kin.velocity = (0.0, 0.0)
        kin.rotation = 0.0
        return True

    # --- Helpers ---

    def _steer_to(self, kin: Kinematic, point: Point, dt: float) -> None:
        """Arrive + Align toward ``point``; velocity and rotation only."""
        target = face(kin, point)
        linear = self._arrive.compute(kin, target).linear
        angular = self._align.compute(kin, target).angular
        kin.velocity = vec.clamp_magnitude(
            vec.add(kin.velocity, vec.scale(linear, dt)), self.config.arrive.max_speed
        )
        kin.rotation += angular * dt

    def _flee_direction(self, world: World, ctx: TickContext, eid: EntityId) -> Point:
        """Away from the nearest probed obstacle, else away from the player."""
        kin = world.get(eid, Kinematic)
        env = world.get(eid, Navigation).environment
        nearest = math.inf
        threat: Point | None = None
        for angle in FLEE_PROBE_ANGLES:
            ray = vec.from_angle(angle)
            for reach in FLEE_PROBE_REACHES:
                point = vec.add(kin.position, vec.scale(ray, reach))
                if env.is_obstacle(point):
                    if reach < nearest:
                        nearest = reach
                        threat = point
                    break

        if threat is None:
            threat = player_position(world, eid)
        if threat is not None:
            direction = vec.normalize(vec.sub(kin.position, threat))
            if direction != (0.0, 0.0):
                return direction
        return vec.from_angle(ctx.random.uniform(0.0, 360.0))

    def _end_dance(self, world: World, eid: EntityId) -> None:
        kin = world.get(eid, Kinematic)
        world.get(eid, Monster).stop_dance()
        kin.velocity = (0.0, 0.0)
        kin.rotation = 0.0
