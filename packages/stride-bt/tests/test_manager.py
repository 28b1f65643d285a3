"""Tests for BehaviorManager."""
import pytest

from stride_bt.manager import BehaviorManager
from stride_bt.nodes import (
    Action,
    Condition,
    Parallel,
    Repeat,
    Selector,
    Sequence,
    Status,
)


class TestTreeDefinition:
    def test_define_and_lookup(self):
        manager = BehaviorManager()
        nodes = {
            "root": Sequence(id="root", children=("a", "b")),
            "a": Condition(id="a", condition="ready"),
            "b": Action(id="b", action="attack"),
        }
        manager.define_tree("seq_tree", "root", nodes)
        result = manager.tree("seq_tree")
        assert result is not None
        root_id, node_dict = result
        assert root_id == "root"
        assert node_dict == nodes

    def test_tree_not_found(self):
        assert BehaviorManager().tree("nonexistent") is None

    def test_definition_is_copied(self):
        manager = BehaviorManager()
        nodes = {"root": Action(id="root", action="a")}
        manager.define_tree("t", "root", nodes)
        nodes["extra"] = Action(id="extra", action="b")
        assert "extra" not in manager.tree("t")[1]


class TestTreeValidation:
    def test_root_not_in_nodes(self):
        with pytest.raises(ValueError, match="Root node"):
            BehaviorManager().define_tree("t", "missing", {"a": Action(id="a", action="x")})

    def test_key_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            BehaviorManager().define_tree("t", "root", {"root": Action(id="other", action="x")})

    def test_unknown_child(self):
        nodes = {"root": Selector(id="root", children=("ghost",))}
        with pytest.raises(ValueError, match="unknown child"):
            BehaviorManager().define_tree("t", "root", nodes)

    @pytest.mark.parametrize("success, failure", [(0, 1), (1, 0)])
    def test_parallel_thresholds(self, success, failure):
        nodes = {
            "root": Parallel(id="root", children=("a",),
                             success_threshold=success, failure_threshold=failure),
            "a": Action(id="a", action="x"),
        }
        with pytest.raises(ValueError, match="thresholds"):
            BehaviorManager().define_tree("t", "root", nodes)

    def test_negative_repeat(self):
        nodes = {"root": Repeat(id="root", child="a", count=-1), "a": Action(id="a", action="x")}
        with pytest.raises(ValueError, match="count"):
            BehaviorManager().define_tree("t", "root", nodes)

    def test_cycle_rejected(self):
        nodes = {
            "root": Sequence(id="root", children=("loop",)),
            "loop": Selector(id="loop", children=("root",)),
        }
        with pytest.raises(ValueError, match="own ancestor"):
            BehaviorManager().define_tree("t", "root", nodes)

    def test_shared_child_allowed(self):
        nodes = {
            "root": Sequence(id="root", children=("a", "a")),
            "a": Action(id="a", action="x"),
        }
        BehaviorManager().define_tree("t", "root", nodes)


class TestRegistration:
    def test_actions_and_conditions(self):
        manager = BehaviorManager()

        def act(w, c, e):
            return Status.SUCCESS

        def cond(w, c, e):
            return True

        manager.register_action("act", act)
        manager.register_condition("cond", cond)
        assert manager.action("act") is act
        assert manager.condition("cond") is cond
        assert manager.action("cond") is None
        assert manager.condition("act") is None
