"""stride-agents - Monsters driven by behavior trees or decision trees."""
from __future__ import annotations

from stride_agents.actions import ACTIONS, ActionDispatcher, dance_ring
from stride_agents.components import Agent, Monster, Navigation, Recorded, Target
from stride_agents.config import MonsterConfig
from stride_agents.monster import has_caught, reset_monster, spawn_monster
from stride_agents.monster_tree import MONSTER_TREE, build_monster_tree
from stride_agents.movement import find_valid_movement
from stride_agents.policies import (
    DEFAULT_TARGETS,
    DecisionPolicy,
    LearnedPolicy,
    build_character_tree,
    learn_policy,
    parse_pathfind_label,
    pathfind_label,
)
from stride_agents.sensing import monster_features
from stride_agents.systems import make_monster_system, make_recorder_system

__all__ = [
    "ACTIONS",
    "DEFAULT_TARGETS",
    "MONSTER_TREE",
    "ActionDispatcher",
    "Agent",
    "DecisionPolicy",
    "LearnedPolicy",
    "Monster",
    "MonsterConfig",
    "Navigation",
    "Recorded",
    "Target",
    "build_character_tree",
    "build_monster_tree",
    "dance_ring",
    "find_valid_movement",
    "has_caught",
    "learn_policy",
    "make_monster_system",
    "make_recorder_system",
    "monster_features",
    "parse_pathfind_label",
    "pathfind_label",
    "reset_monster",
    "spawn_monster",
]
