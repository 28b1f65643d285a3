"""Hand-authored decision trees.

Each node answers :meth:`decide` with an action label. Conditions are
zero-argument callables, usually closures over an
:class:`~stride_decide.env_state.EnvironmentState`, so a tree is rebuilt per
agent rather than shared.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

IDLE = "Idle"

ConditionFn = Callable[[], bool]


class DecisionNode(Protocol):
    name: str

    def decide(self) -> str: ...


class ActionNode:
    def __init__(self, label: str) -> None:
        self.label = label
        self.name = f"Action: {label}"

    def decide(self) -> str:
        return self.label


class DecisionBranch:
    """Evaluates ``condition`` once and delegates to one of two children."""

    def __init__(
        self,
        condition: ConditionFn,
        if_true: DecisionNode,
        if_false: DecisionNode,
        name: str = "",
    ) -> None:
        self.condition = condition
        self.if_true = if_true
        self.if_false = if_false
        self.name = f"Decision: {name}" if name else "Decision"

    def decide(self) -> str:
        if self.condition():
            return self.if_true.decide()
        return self.if_false.decide()


class PriorityNode:
    """First child whose condition holds wins, in insertion order."""

    def __init__(self, name: str = "") -> None:
        self.name = f"Priority: {name}" if name else "Priority"
        self._entries: list[tuple[ConditionFn, DecisionNode, str]] = []

    @property
    def entries(self) -> tuple[tuple[ConditionFn, DecisionNode, str], ...]:
        return tuple(self._entries)

    def add(self, condition: ConditionFn, child: DecisionNode, name: str = "") -> PriorityNode:
        self._entries.append((condition, child, name))
        return self

    def decide(self) -> str:
        for condition, child, _ in self._entries:
            if condition():
                return child.decide()
        return IDLE


class RandomDecisionNode:
    """Weighted random choice between children.

    Draws ``r`` uniformly in ``[0, total_weight]`` and picks the first child
    whose cumulative weight reaches ``r``.
    """

    def __init__(self, rng: random.Random, name: str = "") -> None:
        self.rng = rng
        self.name = f"Random: {name}" if name else "Random"
        self._children: list[tuple[DecisionNode, float]] = []
        self._total = 0.0

    @property
    def children(self) -> tuple[tuple[DecisionNode, float], ...]:
        return tuple(self._children)

    def add(self, child: DecisionNode, weight: float = 1.0) -> RandomDecisionNode:
        if weight <= 0:
            raise ValueError(f"weight must be positive, got {weight}")
        self._children.append((child, weight))
        self._total += weight
        return self

    def decide(self) -> str:
        if not self._children:
            return IDLE
        r = self.rng.uniform(0.0, self._total)
        cumulative = 0.0
        for child, weight in self._children:
            cumulative += weight
            if r <= cumulative:
                return child.decide()
        return self._children[-1][0].decide()


class DecisionTree:
    def __init__(self, root: DecisionNode | None = None) -> None:
        self.root = root

    def make_decision(self) -> str:
        if self.root is None:
            logger.warning("Decision tree has no root node; defaulting to Idle")
            return IDLE
        return self.root.decide()

    def describe(self) -> str:
        """Indented outline of the tree, one node per line."""
        if self.root is None:
            return "(empty)"
        lines: list[str] = []
        _describe(self.root, 0, "", lines, set())
        return "\n".join(lines)


def _describe(
    node: DecisionNode, depth: int, edge: str, lines: list[str], seen: set[int],
) -> None:
    pad = "  " * depth
    prefix = f"{edge}: " if edge else ""
    # Subtrees may be shared between branches; print them in full once.
    if id(node) in seen and not isinstance(node, ActionNode):
        lines.append(f"{pad}{prefix}{node.name} (see above)")
        return
    seen.add(id(node))
    lines.append(f"{pad}{prefix}{node.name}")
    if isinstance(node, DecisionBranch):
        _describe(node.if_true, depth + 1, "yes", lines, seen)
        _describe(node.if_false, depth + 1, "no", lines, seen)
    elif isinstance(node, PriorityNode):
        for _, child, name in node.entries:
            _describe(child, depth + 1, name or "when", lines, seen)
    elif isinstance(node, RandomDecisionNode):
        for child, weight in node.children:
            _describe(child, depth + 1, f"w={weight:g}", lines, seen)
