"""BT node types and status enum."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Status(Enum):
    """Result of ticking a BT node."""

    SUCCESS = "success"
    FAILURE = "failure"
    RUNNING = "running"


# --- Leaf nodes ---


@dataclass(frozen=True)
class Action:
    """Leaf: calls a registered action callback -> Status."""

    id: str
    action: str


@dataclass(frozen=True)
class Condition:
    """Leaf: calls a registered guard -> SUCCESS or FAILURE."""

    id: str
    condition: str


# --- Composite nodes ---


@dataclass(frozen=True)
class Sequence:
    """All children must succeed; fails on first failure.

    Resumes at the child that last returned RUNNING.
    """

    id: str
    children: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Selector:
    """First child that succeeds wins; fallback chain.

    Resumes at the child that last returned RUNNING.
    """

    id: str
    children: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RandomSelector:
    """Ticks one uniformly picked child; keeps it while it is RUNNING."""

    id: str
    children: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Parallel:
    """Ticks every child that has not completed yet.

    SUCCESS once ``success_threshold`` children have succeeded, FAILURE once
    ``failure_threshold`` have failed, RUNNING otherwise.
    """

    id: str
    children: tuple[str, ...] = field(default_factory=tuple)
    success_threshold: int = 1
    failure_threshold: int = 1


# --- Decorator nodes ---


@dataclass(frozen=True)
class Inverter:
    """Flips SUCCESS <-> FAILURE. RUNNING passes through."""

    id: str
    child: str = ""


@dataclass(frozen=True)
class Repeat:
    """Re-ticks child until it has completed ``count`` times.

    Each completion resets the child. ``count == 0`` repeats forever.
    """

    id: str
    child: str = ""
    count: int = 1


Node = (
    Action
    | Condition
    | Sequence
    | Selector
    | RandomSelector
    | Parallel
    | Inverter
    | Repeat
)


def children_of(node: Node) -> tuple[str, ...]:
    """Extract child IDs from any node type."""
    if isinstance(node, (Action, Condition)):
        return ()
    if isinstance(node, (Sequence, Selector, RandomSelector, Parallel)):
        return node.children
    if isinstance(node, (Inverter, Repeat)):
        return (node.child,) if node.child else ()
    return ()
