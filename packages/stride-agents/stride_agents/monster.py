"""Spawning, resetting and catch testing for monsters."""
from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

from stride_bt.components import BehaviorTree
from stride_decide.tree import IDLE
from stride_steer import vec
from stride_steer.kinematic import Kinematic
from stride_steer.wander import Wander

from stride_agents.components import Agent, Monster, Navigation, Target
from stride_agents.config import MonsterConfig
from stride_agents.sensing import player_position

if TYPE_CHECKING:
    from stride import EntityId, World
    from stride_nav.environment import Point


def spawn_monster(
    world: World,
    start: Point,
    navigation: Navigation,
    player: EntityId,
    rng: random.Random,
    *policy: Any,
    config: MonsterConfig | None = None,
) -> EntityId:
    """Spawn a monster at ``start`` chasing ``player``.

    ``policy`` is the control component, a BehaviorTree or a
    DecisionPolicy. A monster with neither stands idle.
    """
    config = config or MonsterConfig()
    monster = Monster(start=start, wander=Wander(rng, config.wander, config.align))
    return world.spawn(
        Kinematic(position=start),
        Agent(),
        monster,
        navigation,
        Target(player),
        *policy,
    )


def reset_monster(world: World, eid: EntityId) -> None:
    """Back to the start position with no path, dance or tree progress."""
    kin = world.get(eid, Kinematic)
    monster = world.get(eid, Monster)
    agent = world.get(eid, Agent)

    kin.position = monster.start
    kin.velocity = (0.0, 0.0)
    kin.orientation = 0.0
    kin.rotation = 0.0

    monster.clear_path()
    monster.stop_dance()
    monster.caught = False
    monster.obstacle_hits = 0
    monster.since_dance = 0.0
    monster.trail.clear()
    monster.wander.reset()

    agent.action = IDLE
    agent.time_in_action = 0.0

    bt = world.find(eid, BehaviorTree)
    if bt is not None:
        bt.clear()


def has_caught(world: World, eid: EntityId, config: MonsterConfig | None = None) -> bool:
    """True while the player is strictly within ``catch_distance``."""
    config = config or MonsterConfig()
    player = player_position(world, eid)
    if player is None:
        return False
    me = world.get(eid, Kinematic)
    return vec.distance_sq(me.position, player) < config.catch_distance ** 2
