"""System factory for behavior trees."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from stride_bt.components import BehaviorTree
from stride_bt.evaluator import evaluate, reset
from stride_bt.manager import BehaviorManager
from stride_bt.nodes import Status

if TYPE_CHECKING:
    from stride import TickContext, World


def make_bt_system(
    manager: BehaviorManager,
    on_status: Callable[["World", "TickContext", int, str], None] | None = None,
) -> Callable[["World", "TickContext"], None]:
    """Return a system that ticks every agent's behavior tree once per frame.

    After a terminal root status (SUCCESS or FAILURE) the agent's whole tree
    is reset so the next frame starts from the root, then
    on_status(world, ctx, eid, status_value) is called.
    """

    def bt_system(world: World, ctx: TickContext) -> None:
        for eid, (bt,) in list(world.query(BehaviorTree)):
            tree_def = manager.tree(bt.tree_name)
            if tree_def is None:
                continue
            root_id, nodes = tree_def
            status = evaluate(nodes, root_id, bt, manager, world, ctx, eid)
            bt.status = status.value
            if status == Status.RUNNING:
                continue
            reset(nodes, root_id, bt)
            if on_status is not None:
                on_status(world, ctx, eid, status.value)

    return bt_system
