"""What a monster perceives: the player, obstacles ahead, recorded features.

Condition functions here take ``(world, ctx, eid, config)`` and keep their
per-monster memory on the Monster component, so one registration serves
every monster.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from stride_decide.env_state import EnvironmentState
from stride_steer import vec
from stride_steer.kinematic import Kinematic

from stride_agents.components import Agent, Monster, Navigation, Target
from stride_agents.config import MonsterConfig

if TYPE_CHECKING:
    from stride import EntityId, TickContext, World
    from stride_nav.environment import Point

# Sensing below this speed ignores obstacles ahead.
MIN_PROBE_SPEED = 5.0
AHEAD_REACHES = (5.0, 10.0, 15.0, 20.0)
SIDE_REACHES = (5.0, 10.0, 15.0)
SIDE_ANGLES = (-45.0, -30.0, -15.0, 15.0, 30.0, 45.0)
OBSTACLE_HITS_TO_FLEE = 2


def player_kinematic(world: World, eid: EntityId) -> Kinematic | None:
    """Kinematic of the monster's Target, or None if it has none or it died."""
    target = world.find(eid, Target)
    if target is None:
        return None
    return world.find(target.entity, Kinematic)


def player_position(world: World, eid: EntityId) -> Point | None:
    kin = player_kinematic(world, eid)
    return None if kin is None else kin.position


def can_see_player(world: World, ctx: TickContext, eid: EntityId, config: MonsterConfig) -> bool:
    """Seen when very close, or in range, inside the view cone and unblocked."""
    player = player_position(world, eid)
    if player is None:
        return False
    me = world.get(eid, Kinematic)
    offset = vec.sub(player, me.position)
    distance = vec.magnitude(offset)
    if distance < config.close_range:
        return True
    if distance > config.sight_range:
        return False
    facing = vec.dot(me.heading(), vec.scale(offset, 1.0 / distance))
    if facing <= math.cos(math.radians(config.sight_cone)):
        return False
    nav = world.get(eid, Navigation)
    return nav.environment.has_line_of_sight(me.position, player)


def _obstacle_in_path(world: World, eid: EntityId) -> bool:
    me = world.get(eid, Kinematic)
    env = world.get(eid, Navigation).environment
    heading = vec.normalize(me.velocity)
    for reach in AHEAD_REACHES:
        if env.is_obstacle(vec.add(me.position, vec.scale(heading, reach))):
            return True
    base = vec.to_angle(heading)
    for offset in SIDE_ANGLES:
        ray = vec.from_angle(base + offset)
        for reach in SIDE_REACHES:
            if env.is_obstacle(vec.add(me.position, vec.scale(ray, reach))):
                return True
    return False


def is_near_obstacle(
    world: World, ctx: TickContext, eid: EntityId, config: MonsterConfig,
) -> bool:
    """An obstacle sits just ahead of a moving monster on consecutive frames.

    Needs OBSTACLE_HITS_TO_FLEE hits in a row. A slow monster or a clear
    frame resets the count.
    """
    me = world.get(eid, Kinematic)
    monster = world.get(eid, Monster)
    if me.speed < MIN_PROBE_SPEED or not _obstacle_in_path(world, eid):
        monster.obstacle_hits = 0
        return False
    monster.obstacle_hits += 1
    return monster.obstacle_hits >= OBSTACLE_HITS_TO_FLEE


def should_dance(world: World, ctx: TickContext, eid: EntityId, config: MonsterConfig) -> bool:
    """After the cooldown, dance with ``dance_chance`` per frame."""
    monster = world.get(eid, Monster)
    monster.since_dance += ctx.dt
    if monster.since_dance < config.dance_cooldown:
        return False
    if ctx.random.random() >= config.dance_chance:
        return False
    monster.since_dance = 0.0
    return True


def monster_features(
    world: World, eid: EntityId, config: MonsterConfig | None = None,
) -> tuple[float, float, float, bool, bool, int, float] | None:
    """Raw feature row in MONSTER_COLUMNS order, or None without a player.

    Distance to the player, player orientation relative to the monster's
    in (-180, 180], speed, line of sight, obstacle within the feature probe,
    length of the current path, and time in the current action.
    """
    config = config or MonsterConfig()
    player = player_kinematic(world, eid)
    if player is None:
        return None
    me = world.get(eid, Kinematic)
    monster = world.get(eid, Monster)
    agent = world.get(eid, Agent)
    env = world.get(eid, Navigation).environment

    return (
        vec.distance(me.position, player.position),
        vec.shortest_arc(player.orientation - me.orientation),
        me.speed,
        env.has_line_of_sight(me.position, player.position),
        EnvironmentState(me, env).is_near_obstacle(config.feature_probe),
        len(monster.path),
        agent.time_in_action,
    )
