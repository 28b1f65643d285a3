"""stride-bt - Resumable behavior trees driven by the stride frame loop."""
from __future__ import annotations

from stride_bt.components import BehaviorTree
from stride_bt.evaluator import evaluate, reset
from stride_bt.manager import BehaviorManager
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
)
from stride_bt.systems import make_bt_system

__all__ = [
    "Action",
    "BehaviorManager",
    "BehaviorTree",
    "Condition",
    "Inverter",
    "Node",
    "Parallel",
    "RandomSelector",
    "Repeat",
    "Selector",
    "Sequence",
    "Status",
    "evaluate",
    "make_bt_system",
    "reset",
]
