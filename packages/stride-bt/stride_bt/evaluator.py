"""BT traversal engine - pure functions over shared node definitions.

Node dataclasses are immutable; the only thing a tick mutates is the
per-agent :class:`~stride_bt.components.BehaviorTree` state passed in.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stride_bt.nodes import (
    Action,
    Condition,
    Inverter,
    Node,
    Parallel,
    RandomSelector,
    Repeat,
    Selector,
    Sequence,
    Status,
    children_of,
)

if TYPE_CHECKING:
    from stride import TickContext, World

    from stride_bt.components import BehaviorTree
    from stride_bt.manager import BehaviorManager

logger = logging.getLogger(__name__)


def evaluate(
    nodes: dict[str, Node],
    root_id: str,
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    """Tick a behavior tree once for one agent and return the root status.

    Resumption state in ``state`` is read and updated in place. A terminal
    result does not clear state left in subtrees that were not ticked; call
    :func:`reset` before re-entering the tree from scratch.
    """
    return _eval_node(root_id, nodes, state, manager, world, ctx, eid)


def reset(nodes: dict[str, Node], node_id: str, state: BehaviorTree) -> None:
    """Clear resumption state for ``node_id`` and every descendant."""
    stack = [node_id]
    while stack:
        nid = stack.pop()
        state.cursors.pop(nid, None)
        state.repeat_counts.pop(nid, None)
        state.picks.pop(nid, None)
        state.child_status.pop(nid, None)
        node = nodes.get(nid)
        if node is not None:
            stack.extend(children_of(node))


def _eval_node(
    node_id: str,
    nodes: dict[str, Node],
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    """Evaluate a single node, dispatching by type."""
    node = nodes[node_id]

    if isinstance(node, Action):
        return _eval_action(node, manager, world, ctx, eid)
    if isinstance(node, Condition):
        return _eval_condition(node, manager, world, ctx, eid)
    if isinstance(node, Sequence):
        return _eval_sequence(node, nodes, state, manager, world, ctx, eid)
    if isinstance(node, Selector):
        return _eval_selector(node, nodes, state, manager, world, ctx, eid)
    if isinstance(node, RandomSelector):
        return _eval_random_selector(node, nodes, state, manager, world, ctx, eid)
    if isinstance(node, Parallel):
        return _eval_parallel(node, nodes, state, manager, world, ctx, eid)
    if isinstance(node, Inverter):
        return _eval_inverter(node, nodes, state, manager, world, ctx, eid)
    if isinstance(node, Repeat):
        return _eval_repeat(node, nodes, state, manager, world, ctx, eid)
    return Status.FAILURE


# --- Leaf evaluators ---


def _eval_action(
    node: Action, manager: BehaviorManager, world: World, ctx: TickContext, eid: int,
) -> Status:
    fn = manager.action(node.action)
    if fn is None:
        logger.debug(f"No action registered for '{node.action}' (node '{node.id}')")
        return Status.FAILURE
    return fn(world, ctx, eid)


def _eval_condition(
    node: Condition, manager: BehaviorManager, world: World, ctx: TickContext, eid: int,
) -> Status:
    fn = manager.condition(node.condition)
    if fn is None:
        logger.debug(f"No condition registered for '{node.condition}' (node '{node.id}')")
        return Status.FAILURE
    return Status.SUCCESS if fn(world, ctx, eid) else Status.FAILURE


# --- Composite evaluators ---


def _eval_sequence(
    node: Sequence,
    nodes: dict[str, Node],
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    index = state.cursors.get(node.id, 0)
    while index < len(node.children):
        status = _eval_node(node.children[index], nodes, state, manager, world, ctx, eid)
        if status == Status.RUNNING:
            state.cursors[node.id] = index
            return Status.RUNNING
        if status == Status.FAILURE:
            state.cursors.pop(node.id, None)
            return Status.FAILURE
        index += 1
    state.cursors.pop(node.id, None)
    return Status.SUCCESS


def _eval_selector(
    node: Selector,
    nodes: dict[str, Node],
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    index = state.cursors.get(node.id, 0)
    while index < len(node.children):
        status = _eval_node(node.children[index], nodes, state, manager, world, ctx, eid)
        if status == Status.RUNNING:
            state.cursors[node.id] = index
            return Status.RUNNING
        if status == Status.SUCCESS:
            state.cursors.pop(node.id, None)
            return Status.SUCCESS
        index += 1
    state.cursors.pop(node.id, None)
    return Status.FAILURE


def _eval_random_selector(
    node: RandomSelector,
    nodes: dict[str, Node],
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    if not node.children:
        return Status.FAILURE
    child_id = state.picks.get(node.id)
    if child_id is None:
        child_id = ctx.random.choice(node.children)
    status = _eval_node(child_id, nodes, state, manager, world, ctx, eid)
    if status == Status.RUNNING:
        state.picks[node.id] = child_id
    else:
        state.picks.pop(node.id, None)
    return status


def _eval_parallel(
    node: Parallel,
    nodes: dict[str, Node],
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    done = dict(state.child_status.get(node.id, {}))
    for child_id in node.children:
        if child_id in done:
            continue
        status = _eval_node(child_id, nodes, state, manager, world, ctx, eid)
        if status != Status.RUNNING:
            done[child_id] = status

    successes = sum(1 for s in done.values() if s == Status.SUCCESS)
    failures = len(done) - successes
    if successes >= node.success_threshold:
        result = Status.SUCCESS
    elif failures >= node.failure_threshold or len(done) == len(node.children):
        # Every child finished without reaching the success threshold.
        result = Status.FAILURE
    else:
        state.child_status[node.id] = done
        return Status.RUNNING

    for child_id in node.children:
        reset(nodes, child_id, state)
    state.child_status.pop(node.id, None)
    return result


# --- Decorator evaluators ---


def _eval_inverter(
    node: Inverter,
    nodes: dict[str, Node],
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    status = _eval_node(node.child, nodes, state, manager, world, ctx, eid)
    if status == Status.SUCCESS:
        return Status.FAILURE
    if status == Status.FAILURE:
        return Status.SUCCESS
    return Status.RUNNING


def _eval_repeat(
    node: Repeat,
    nodes: dict[str, Node],
    state: BehaviorTree,
    manager: BehaviorManager,
    world: World,
    ctx: TickContext,
    eid: int,
) -> Status:
    status = _eval_node(node.child, nodes, state, manager, world, ctx, eid)
    if status == Status.RUNNING:
        return Status.RUNNING

    reset(nodes, node.child, state)
    count = state.repeat_counts.get(node.id, 0) + 1
    if node.count > 0 and count >= node.count:
        state.repeat_counts.pop(node.id, None)
        return Status.SUCCESS

    state.repeat_counts[node.id] = count
    return Status.RUNNING
