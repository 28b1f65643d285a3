"""ID3 decision-tree learning over categorical attributes.

The learner splits on the attribute with the highest information gain,
stops on pure subsets, exhausted attributes, or a gain at or below
``min_gain``, and turns subsets smaller than ``min_examples`` into majority
leaves instead of splitting them further.
"""
from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class DataPoint:
    """One training row: categorical attribute values plus a label."""

    attributes: tuple[str, ...]
    label: str


@dataclass(frozen=True)
class Leaf:
    label: str


@dataclass(frozen=True)
class Internal:
    """Split on one attribute.

    ``children`` keeps values in sorted order; classification falls back to
    the first child when a value was never seen in training.
    """

    attribute: int
    name: str
    children: tuple[tuple[str, LearnedNode], ...] = field(default_factory=tuple)

    def child(self, value: str) -> LearnedNode | None:
        for v, node in self.children:
            if v == value:
                return node
        return None


LearnedNode = Leaf | Internal


def entropy(points: Sequence[DataPoint]) -> float:
    """Shannon entropy (bits) of the label distribution."""
    if not points:
        return 0.0
    total = len(points)
    result = 0.0
    for count in Counter(p.label for p in points).values():
        p = count / total
        result -= p * math.log2(p)
    return result


def information_gain(points: Sequence[DataPoint], attribute: int) -> float:
    if not points:
        return 0.0
    groups: dict[str, list[DataPoint]] = {}
    for point in points:
        groups.setdefault(point.attributes[attribute], []).append(point)
    total = len(points)
    after = sum(len(g) / total * entropy(g) for g in groups.values())
    return entropy(points) - after


def majority_label(points: Sequence[DataPoint]) -> str:
    """Most common label; ties go to the alphabetically first label."""
    if not points:
        return UNKNOWN
    counts = Counter(p.label for p in points)
    return min(counts, key=lambda label: (-counts[label], label))


def format_tree(node: LearnedNode, indent: int = 0) -> str:
    """Indented outline: ``LEAF: <label>`` or ``SPLIT ON: <attr>`` with
    ``<attr> = <value>:`` branch lines two spaces deeper and each subtree
    four spaces deeper.
    """
    pad = " " * indent
    if isinstance(node, Leaf):
        return f"{pad}LEAF: {node.label}"
    lines = [f"{pad}SPLIT ON: {node.name}"]
    for value, child in node.children:
        lines.append(f"{pad}  {node.name} = {value}:")
        lines.append(format_tree(child, indent + 4))
    return "\n".join(lines)


def classify(node: LearnedNode, values: Sequence[str]) -> str:
    while isinstance(node, Internal):
        value = values[node.attribute] if node.attribute < len(values) else None
        child = node.child(value) if value is not None else None
        if child is None:
            if not node.children:
                return UNKNOWN
            logger.debug(
                f"Unseen value {value!r} for {node.name}; using first branch"
            )
            child = node.children[0][1]
        node = child
    return node.label


class DecisionTreeLearner:
    """Learns a tree from :class:`DataPoint` rows and classifies new rows.

    Example::

        learner = DecisionTreeLearner()
        learner.learn(points, ["weather", "temp"])
        learner.classify(["sunny", "cool"])
    """

    def __init__(self, min_gain: float = 0.01, min_examples: int = 3) -> None:
        if min_gain < 0:
            raise ValueError("min_gain must not be negative")
        if min_examples < 1:
            raise ValueError("min_examples must be at least 1")
        self.min_gain = min_gain
        self.min_examples = min_examples
        self.attribute_names: list[str] = []
        self._root: LearnedNode | None = None

    @property
    def root(self) -> LearnedNode | None:
        return self._root

    @root.setter
    def root(self, node: LearnedNode | None) -> None:
        self._root = node

    def learn(
        self,
        points: Sequence[DataPoint],
        attribute_names: Sequence[str] | None = None,
    ) -> LearnedNode:
        if not points:
            raise ValueError("cannot learn from an empty dataset")
        width = len(points[0].attributes)
        for i, point in enumerate(points):
            if len(point.attributes) != width:
                raise ValueError(
                    f"row {i} has {len(point.attributes)} attributes, expected {width}"
                )
        if attribute_names is not None:
            if len(attribute_names) != width:
                raise ValueError(
                    f"got {len(attribute_names)} attribute names for {width} attributes"
                )
            self.attribute_names = list(attribute_names)
        elif len(self.attribute_names) != width:
            self.attribute_names = [f"Attribute {i}" for i in range(width)]

        self._root = self._build(list(points), list(range(width)), list(points))
        logger.info(
            f"Learned decision tree from {len(points)} rows "
            f"({len({p.label for p in points})} labels)"
        )
        return self._root

    def classify(self, values: Sequence[str]) -> str:
        if self._root is None:
            return UNKNOWN
        return classify(self._root, values)

    def _build(
        self,
        points: list[DataPoint],
        attributes: list[int],
        parent: list[DataPoint],
    ) -> LearnedNode:
        if not points:
            return Leaf(majority_label(parent))
        labels = {p.label for p in points}
        if len(labels) == 1:
            return Leaf(points[0].label)
        if not attributes:
            return Leaf(majority_label(points))

        best = -1
        best_gain = self.min_gain
        for attribute in attributes:
            gain = information_gain(points, attribute)
            if gain > best_gain:
                best, best_gain = attribute, gain
        if best < 0:
            return Leaf(majority_label(points))

        remaining = [a for a in attributes if a != best]
        groups: dict[str, list[DataPoint]] = {}
        for point in points:
            groups.setdefault(point.attributes[best], []).append(point)

        children: list[tuple[str, LearnedNode]] = []
        for value in sorted(groups):
            subset = groups[value]
            if len(subset) < self.min_examples:
                children.append((value, Leaf(majority_label(subset))))
            else:
                children.append((value, self._build(subset, remaining, points)))
        return Internal(best, self.attribute_names[best], tuple(children))
