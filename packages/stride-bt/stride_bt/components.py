"""Agent component holding per-agent behavior tree state."""
from __future__ import annotations

from dataclasses import dataclass, field

from stride_bt.nodes import Status


@dataclass
class BehaviorTree:
    """Assigns a behavior tree definition to an agent.

    Node definitions are shared between agents, so every piece of
    resumption state lives here, keyed by node id.

    Attributes:
        tree_name: Name the tree was registered under.
        cursors: Sequence/Selector id -> index of the child to resume at.
        repeat_counts: Repeat id -> completions so far.
        picks: RandomSelector id -> child id that is still RUNNING.
        child_status: Parallel id -> {child id: terminal status}.
        status: Value of the last root status, "" before the first tick.
    """

    tree_name: str
    cursors: dict[str, int] = field(default_factory=dict)
    repeat_counts: dict[str, int] = field(default_factory=dict)
    picks: dict[str, str] = field(default_factory=dict)
    child_status: dict[str, dict[str, Status]] = field(default_factory=dict)
    status: str = ""

    def is_fresh(self) -> bool:
        """True when no node holds resumption state."""
        return not (self.cursors or self.repeat_counts or self.picks or self.child_status)

    def clear(self) -> None:
        """Drop all resumption state so the next tick starts from the root."""
        self.cursors.clear()
        self.repeat_counts.clear()
        self.picks.clear()
        self.child_status.clear()
        self.status = ""
