"""The monster behavior tree: flee, chase, dance, else wander."""
from __future__ import annotations

from typing import TYPE_CHECKING

from stride_bt.manager import BehaviorManager
from stride_bt.nodes import Action, Condition, Selector, Sequence, Status

from stride_agents import sensing
from stride_agents.actions import DANCE, FLEE, PATHFIND_TO_PLAYER, WANDER, ActionDispatcher

if TYPE_CHECKING:
    from stride import EntityId, TickContext, World

MONSTER_TREE = "monster"


def _one_frame(dispatcher: ActionDispatcher, label: str):
    def action(world: World, ctx: TickContext, eid: EntityId) -> Status:
        dispatcher.execute(world, ctx, eid, label)
        return Status.SUCCESS

    return action


def _dance(dispatcher: ActionDispatcher):
    def action(world: World, ctx: TickContext, eid: EntityId) -> Status:
        if dispatcher.execute(world, ctx, eid, DANCE):
            return Status.SUCCESS
        return Status.RUNNING

    return action


def _sense(check, dispatcher: ActionDispatcher):
    def condition(world: World, ctx: TickContext, eid: EntityId) -> bool:
        return check(world, ctx, eid, dispatcher.config)

    return condition


def build_monster_tree(
    manager: BehaviorManager,
    dispatcher: ActionDispatcher,
    name: str = MONSTER_TREE,
) -> str:
    """Register the monster's actions, conditions and tree; return the tree name.

    Priority order: flee a wall just ahead, chase a visible player, dance
    now and then, wander. Dance stays RUNNING until the ring is done, so
    the root resumes it on later frames.
    """
    for label in (PATHFIND_TO_PLAYER, WANDER, FLEE):
        manager.register_action(label, _one_frame(dispatcher, label))
    manager.register_action(DANCE, _dance(dispatcher))

    manager.register_condition("IsNearObstacle", _sense(sensing.is_near_obstacle, dispatcher))
    manager.register_condition("CanSeePlayer", _sense(sensing.can_see_player, dispatcher))
    manager.register_condition("ShouldDance", _sense(sensing.should_dance, dispatcher))

    manager.define_tree(name, "root", {
        "root": Selector(id="root", children=("flee", "chase", "party", "wander")),
        "flee": Sequence(id="flee", children=("near_obstacle", "do_flee")),
        "near_obstacle": Condition(id="near_obstacle", condition="IsNearObstacle"),
        "do_flee": Action(id="do_flee", action=FLEE),
        "chase": Sequence(id="chase", children=("sees_player", "pathfind")),
        "sees_player": Condition(id="sees_player", condition="CanSeePlayer"),
        "pathfind": Action(id="pathfind", action=PATHFIND_TO_PLAYER),
        "party": Sequence(id="party", children=("wants_dance", "do_dance")),
        "wants_dance": Condition(id="wants_dance", condition="ShouldDance"),
        "do_dance": Action(id="do_dance", action=DANCE),
        "wander": Action(id="wander", action=WANDER),
    })
    return name
