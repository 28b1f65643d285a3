"""stride-decide - Hand-authored and learned decision trees."""
from __future__ import annotations

from stride_decide.dataset import (
    LABEL_COLUMN,
    MONSTER_COLUMNS,
    MONSTER_POLICY,
    Bins,
    Dataset,
    DiscretizationPolicy,
    load_csv,
)
from stride_decide.env_state import EnvironmentState
from stride_decide.id3 import (
    DataPoint,
    DecisionTreeLearner,
    Internal,
    LearnedNode,
    Leaf,
    entropy,
    format_tree,
    information_gain,
    majority_label,
)
from stride_decide.persistence import (
    TreeFormatError,
    dump_tree,
    load_tree,
    parse_tree,
    save_tree,
)
from stride_decide.recorder import TraceRecorder
from stride_decide.tree import (
    IDLE,
    ActionNode,
    DecisionBranch,
    DecisionNode,
    DecisionTree,
    PriorityNode,
    RandomDecisionNode,
)

__all__ = [
    "IDLE",
    "LABEL_COLUMN",
    "MONSTER_COLUMNS",
    "MONSTER_POLICY",
    "ActionNode",
    "Bins",
    "DataPoint",
    "Dataset",
    "DecisionBranch",
    "DecisionNode",
    "DecisionTree",
    "DecisionTreeLearner",
    "DiscretizationPolicy",
    "EnvironmentState",
    "Internal",
    "LearnedNode",
    "Leaf",
    "PriorityNode",
    "RandomDecisionNode",
    "TraceRecorder",
    "TreeFormatError",
    "dump_tree",
    "entropy",
    "format_tree",
    "information_gain",
    "load_csv",
    "load_tree",
    "majority_label",
    "parse_tree",
    "save_tree",
]
