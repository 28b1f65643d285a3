"""Tests for the saved decision tree format."""
import pytest

from stride_decide.dataset import MONSTER_COLUMNS, MONSTER_POLICY
from stride_decide.id3 import DataPoint, DecisionTreeLearner, Internal, Leaf
from stride_decide.persistence import (
    TreeFormatError,
    dump_tree,
    load_tree,
    parse_tree,
    save_tree,
)

TREE = Internal(3, "CanSeePlayer", (
    ("0", Leaf("Wander")),
    ("1", Internal(0, "DistanceToPlayer", (
        ("near", Leaf("PathfindToPlayer")),
        ("very_near", Leaf("FollowPath")),
    ))),
))


class TestDump:
    def test_layout(self):
        text = dump_tree(TREE, MONSTER_COLUMNS, MONSTER_POLICY)
        lines = text.splitlines()
        assert lines[0] == ",".join(MONSTER_COLUMNS)
        assert lines[1] == "# bins 0: very_near 30.0 near 80.0 medium 200.0 far"
        assert lines[2] == "# bins 1 abs: direct_front 30.0 front 90.0 side 150.0 behind"
        assert lines[4] == "# bins 5 int: none 1.0 very_few 3.0 few 7.0 medium 15.0 many"
        assert lines[6:] == [
            "SPLIT ON: CanSeePlayer",
            "  CanSeePlayer = 0:",
            "    LEAF: Wander",
            "  CanSeePlayer = 1:",
            "    SPLIT ON: DistanceToPlayer",
            "      DistanceToPlayer = near:",
            "        LEAF: PathfindToPlayer",
            "      DistanceToPlayer = very_near:",
            "        LEAF: FollowPath",
        ]


class TestRoundTrip:
    def test_parse_inverts_dump(self):
        root, names, policy = parse_tree(dump_tree(TREE, MONSTER_COLUMNS, MONSTER_POLICY))
        assert root == TREE
        assert names == list(MONSTER_COLUMNS)
        assert policy == MONSTER_POLICY

    def test_save_load_save_identical(self, tmp_path):
        first, second = tmp_path / "a.txt", tmp_path / "b.txt"
        assert save_tree(first, TREE, MONSTER_COLUMNS, MONSTER_POLICY)
        loaded = load_tree(first)
        assert loaded is not None
        assert save_tree(second, *loaded)
        assert first.read_bytes() == second.read_bytes()

    def test_learned_tree_classifies_the_same(self):
        points = [
            DataPoint(("sunny", "hot"), "No"),
            DataPoint(("sunny", "cool"), "Yes"),
            DataPoint(("rain", "hot"), "No"),
            DataPoint(("rain", "cool"), "Yes"),
        ]
        learner = DecisionTreeLearner()
        learner.learn(points, ["weather", "temp"])
        root, names, _ = parse_tree(dump_tree(learner.root, learner.attribute_names))
        restored = DecisionTreeLearner()
        restored.root = root
        for row in (["sunny", "cool"], ["rain", "hot"], ["fog", "mild"]):
            assert restored.classify(row) == learner.classify(row)

    def test_leaf_only_tree(self):
        root, names, policy = parse_tree(dump_tree(Leaf("Idle"), ["a"]))
        assert root == Leaf("Idle")
        assert names == ["a"]
        assert policy.columns == {}


class TestInvalid:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "a,b\n",
            "a,b\nSPLIT ON: c\n  c = x:\n    LEAF: Y\n",
            "a,b\nSPLIT ON: a\n",
            "a,b\nSPLIT ON: a\n  b = x:\n    LEAF: Y\n",
            "a,b\nSPLIT ON: a\n  a = x:\n  LEAF: Y\n",
            "a,b\nLEAF: Y\nLEAF: Z\n",
            "a,b\nMAYBE: Y\n",
            "a,b\n# bins 0: low 1.0\nLEAF: Y\n",
            "a,b\n# bins 0: low x high\nLEAF: Y\n",
            "a,b\n# bins 0 log: low 1.0 high\nLEAF: Y\n",
        ],
    )
    def test_rejected(self, text):
        with pytest.raises(TreeFormatError):
            parse_tree(text)

    def test_load_rejects(self, tmp_path, caplog):
        path = tmp_path / "bad.txt"
        path.write_text("a\nSPLIT ON: zzz\n")
        assert load_tree(path) is None
        assert "Rejected decision tree" in caplog.text

    def test_load_undecodable(self, tmp_path, caplog):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"a,b\nLEAF: \xff\n")
        assert load_tree(path) is None
        assert "Failed to open decision tree" in caplog.text

    def test_load_missing(self, tmp_path):
        assert load_tree(tmp_path / "missing.txt") is None
