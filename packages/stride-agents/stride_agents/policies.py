"""Decision-tree control: the DecisionPolicy component and its trees."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from stride_decide.dataset import MONSTER_POLICY, DiscretizationPolicy, load_csv
from stride_decide.id3 import DecisionTreeLearner, LearnedNode, classify, format_tree
from stride_decide.recorder import format_feature
from stride_decide.tree import (
    IDLE,
    ActionNode,
    DecisionBranch,
    DecisionNode,
    DecisionTree,
    RandomDecisionNode,
)

from stride_agents.actions import DANCE, FLEE, WANDER
from stride_agents.config import MonsterConfig
from stride_agents.sensing import monster_features

if TYPE_CHECKING:
    from stride import EntityId, TickContext, World
    from stride_decide.env_state import EnvironmentState
    from stride_nav.environment import Point

logger = logging.getLogger(__name__)

PATHFIND_PREFIX = "PathfindTo_"

# Top-left, top-right, bottom-left and bottom-right rooms, then the center.
DEFAULT_TARGETS: tuple[Point, ...] = (
    (100.0, 100.0),
    (500.0, 100.0),
    (100.0, 350.0),
    (500.0, 350.0),
    (250.0, 250.0),
)


class LearnedPolicy:
    """Classifies the monster's live features with a learned ID3 tree.

    The raw features go through the same text formatting and
    discretization as recorded training rows.
    """

    def __init__(
        self,
        root: LearnedNode,
        policy: DiscretizationPolicy = MONSTER_POLICY,
        config: MonsterConfig | None = None,
    ) -> None:
        self.root = root
        self.policy = policy
        self.config = config or MonsterConfig()

    def decide(self, world: World, eid: EntityId) -> str:
        features = monster_features(world, eid, self.config)
        if features is None:
            return IDLE
        row = [format_feature(value) for value in features]
        return classify(self.root, self.policy.apply(row))


@dataclass
class DecisionPolicy:
    """Drives an agent from a decision tree once per frame.

    Attributes:
        tree: A hand-authored DecisionTree or a LearnedPolicy.
        state: Refreshed with the frame's dt before each hand-authored
            decision. Learned policies read the world directly.
    """

    tree: DecisionTree | LearnedPolicy
    state: EnvironmentState | None = None

    def decide(self, world: World, ctx: TickContext, eid: EntityId) -> str:
        if isinstance(self.tree, LearnedPolicy):
            return self.tree.decide(world, eid)
        if self.state is not None:
            self.state.update(ctx.dt)
        return self.tree.make_decision()


def learn_policy(
    path: str | Path,
    policy: DiscretizationPolicy = MONSTER_POLICY,
    config: MonsterConfig | None = None,
) -> LearnedPolicy | None:
    """Train on a recorded trace. Returns None if the file yields no rows."""
    data = load_csv(path, policy)
    if data is None:
        logger.warning(f"No training data in {path}")
        return None
    learner = DecisionTreeLearner()
    root = learner.learn(data.points, list(data.names))
    logger.info(f"Learned decision tree from {path}:\n{format_tree(root)}")
    return LearnedPolicy(root, policy, config)


# --- Autonomous character ---


def pathfind_label(point: Point) -> str:
    return f"{PATHFIND_PREFIX}{round(point[0])}_{round(point[1])}"


def parse_pathfind_label(label: str) -> Point | None:
    """Target point of a ``PathfindTo_<x>_<y>`` label, else None."""
    if not label.startswith(PATHFIND_PREFIX):
        return None
    parts = label[len(PATHFIND_PREFIX):].split("_")
    if len(parts) != 2:
        return None
    try:
        return (float(parts[0]), float(parts[1]))
    except ValueError:
        return None


def build_character_tree(
    state: EnvironmentState,
    targets: Sequence[Point] = DEFAULT_TARGETS,
    rng: random.Random | None = None,
    dance_chance: float = 0.02,
) -> DecisionTree:
    """Room-to-room wandering for an autonomous player character.

    ``targets`` holds one point per room (rooms 0 to 3) and a fallback
    center point last. A character in room i keeps heading to its room
    target until it should change target, then picks one of the two
    adjacent rooms (weight 10 each) or the center (weight 5).
    """
    if len(targets) != 5:
        raise ValueError(f"expected 4 room targets and a center, got {len(targets)}")
    rng = rng or random.Random()
    go = [ActionNode(pathfind_label(p)) for p in targets]
    center = go[4]

    def choose(index: int, a: int, b: int) -> RandomDecisionNode:
        return (
            RandomDecisionNode(rng, f"Choose new target {index + 1}")
            .add(go[a], 10.0)
            .add(go[b], 10.0)
            .add(center, 5.0)
        )

    # Room -> the two rooms it leads to.
    neighbors = ((1, 2), (0, 3), (0, 3), (1, 2))

    def in_room(index: int):
        return lambda: state.is_in_room(index)

    selection: DecisionNode = center
    for room in reversed(range(4)):
        stay_or_change = DecisionBranch(
            state.should_change_target,
            choose(room, *neighbors[room]),
            go[room],
            f"Should change target in room {room}?",
        )
        selection = DecisionBranch(in_room(room), stay_or_change, selection, f"In room {room}?")

    special = DecisionBranch(
        lambda: rng.random() < dance_chance, ActionNode(DANCE), selection, "Should dance?"
    )
    safety = DecisionBranch(
        lambda: state.is_near_obstacle(40.0), ActionNode(FLEE), special, "Near obstacle?"
    )
    idle_check = DecisionBranch(
        state.is_idle_for_too_long, ActionNode(WANDER), selection, "Idle too long?"
    )
    root = DecisionBranch(
        lambda: state.is_moving_fast(120.0), safety, idle_check, "Moving fast?"
    )
    return DecisionTree(root)
