"""System factories for monsters and trace recording."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from stride_decide.recorder import TraceRecorder
from stride_steer.kinematic import Kinematic

from stride_agents.actions import ActionDispatcher
from stride_agents.components import Agent, Monster, Recorded
from stride_agents.config import MonsterConfig
from stride_agents.monster import has_caught
from stride_agents.policies import DecisionPolicy
from stride_agents.sensing import monster_features

if TYPE_CHECKING:
    from stride import TickContext, World

logger = logging.getLogger(__name__)


def make_monster_system(
    dispatcher: ActionDispatcher,
    on_caught: Callable[["World", "TickContext", int], None] | None = None,
) -> Callable[["World", "TickContext"], None]:
    """Return a system that finishes every monster's frame.

    Monsters with a DecisionPolicy decide and act here. Behavior-tree
    monsters acted earlier in the frame through ``make_bt_system``, so
    register that system first. Then, for every monster, the time in the
    current action grows by dt, the position joins the trail, and
    on_caught(world, ctx, eid) fires on the frame the player comes within
    catch distance.
    """

    def monster_system(world: World, ctx: TickContext) -> None:
        for eid, (agent, monster, kin) in list(world.query(Agent, Monster, Kinematic)):
            policy = world.find(eid, DecisionPolicy)
            if policy is not None:
                dispatcher.execute(world, ctx, eid, policy.decide(world, ctx, eid))

            agent.time_in_action += ctx.dt
            monster.trail.append(kin.position)

            caught = has_caught(world, eid, dispatcher.config)
            if caught and not monster.caught:
                logger.info(f"Monster {eid} caught the player at tick {ctx.tick_number}")
                if on_caught is not None:
                    on_caught(world, ctx, eid)
            monster.caught = caught

    return monster_system


def make_recorder_system(
    recorder: TraceRecorder,
    config: MonsterConfig | None = None,
) -> Callable[["World", "TickContext"], None]:
    """Append one row per frame for each monster tagged :class:`Recorded`.

    Register it after the monster system so the row pairs the frame's
    features with the action that was just taken.
    """

    def recorder_system(world: World, ctx: TickContext) -> None:
        for eid, (agent, _) in list(world.query(Agent, Recorded)):
            features = monster_features(world, eid, config)
            if features is None:
                continue
            if not recorder.record(features, agent.action):
                logger.debug(f"Trace recorder full at {recorder.frames} frames")

    return recorder_system
