"""BehaviorManager - central registry for trees, actions, and conditions."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from stride_bt.nodes import Node, Parallel, Repeat, children_of

if TYPE_CHECKING:
    from stride import TickContext, World

    from stride_bt.nodes import Status


ActionFn = Callable[["World", "TickContext", int], "Status"]
ConditionFn = Callable[["World", "TickContext", int], bool]


class BehaviorManager:
    """Holds behavior tree definitions plus the action and condition
    callbacks their leaves refer to by name.
    """

    def __init__(self) -> None:
        # name -> (root_id, nodes dict)
        self._trees: dict[str, tuple[str, dict[str, Node]]] = {}
        self._actions: dict[str, ActionFn] = {}
        self._conditions: dict[str, ConditionFn] = {}

    # --- Tree definitions ---

    def define_tree(
        self, name: str, root_id: str, nodes: dict[str, Node]
    ) -> None:
        """Register a behavior tree definition. Validates the node graph."""
        self._validate_tree(root_id, nodes)
        self._trees[name] = (root_id, dict(nodes))

    def tree(self, name: str) -> tuple[str, dict[str, Node]] | None:
        """Look up a tree definition by name."""
        return self._trees.get(name)

    # --- Action registration ---

    def register_action(self, name: str, fn: ActionFn) -> None:
        """Register an action callback: (World, TickContext, eid) -> Status."""
        self._actions[name] = fn

    def action(self, name: str) -> ActionFn | None:
        return self._actions.get(name)

    # --- Condition registration ---

    def register_condition(self, name: str, fn: ConditionFn) -> None:
        """Register a condition callback: (World, TickContext, eid) -> bool."""
        self._conditions[name] = fn

    def condition(self, name: str) -> ConditionFn | None:
        return self._conditions.get(name)

    # --- Validation ---

    def _validate_tree(
        self, root_id: str, nodes: dict[str, Node]
    ) -> None:
        if root_id not in nodes:
            raise ValueError(f"Root node '{root_id}' not found in nodes")
        for node_id, node in nodes.items():
            if node.id != node_id:
                raise ValueError(
                    f"Node key '{node_id}' does not match node.id '{node.id}'"
                )
            for child_id in children_of(node):
                if child_id not in nodes:
                    raise ValueError(
                        f"Node '{node_id}' references unknown child '{child_id}'"
                    )
            if isinstance(node, Parallel) and (
                node.success_threshold < 1 or node.failure_threshold < 1
            ):
                raise ValueError(
                    f"Parallel '{node_id}' thresholds must be at least 1"
                )
            if isinstance(node, Repeat) and node.count < 0:
                raise ValueError(
                    f"Repeat '{node_id}' count must not be negative"
                )
        _check_acyclic(root_id, nodes)


def _check_acyclic(root_id: str, nodes: dict[str, Node]) -> None:
    """Reject definitions where a node is its own ancestor."""
    # Stack of (node_id, path from root) pairs.
    stack: list[tuple[str, frozenset[str]]] = [(root_id, frozenset())]
    while stack:
        node_id, above = stack.pop()
        if node_id in above:
            raise ValueError(f"Node '{node_id}' is its own ancestor")
        path = above | {node_id}
        for child_id in children_of(nodes[node_id]):
            stack.append((child_id, path))
