"""Text format for learned decision trees.

Layout::

    DistanceToPlayer,RelativeOrientation,...
    # bins 0: very_near 30.0 near 80.0 medium 200.0 far
    # bins 1 abs: direct_front 30.0 front 90.0 side 150.0 behind
    SPLIT ON: CanSeePlayer
      CanSeePlayer = 0:
        LEAF: Wander
      CanSeePlayer = 1:
        LEAF: PathfindToPlayer

The first line names the attributes in column order. ``# bins`` lines record
the discretization each column went through, as alternating labels and
edges, so inference can repeat it. The rest is the tree outline from
:func:`stride_decide.id3.format_tree`.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from stride_decide.dataset import Bins, DiscretizationPolicy
from stride_decide.id3 import Internal, LearnedNode, Leaf, format_tree

logger = logging.getLogger(__name__)

_BINS_PREFIX = "# bins "
_LEAF = "LEAF: "
_SPLIT = "SPLIT ON: "


class TreeFormatError(ValueError):
    """Raised when tree text cannot be parsed back into a tree."""


def dump_tree(
    root: LearnedNode,
    names: Sequence[str],
    policy: DiscretizationPolicy | None = None,
) -> str:
    lines = [",".join(names)]
    if policy is not None:
        for column in sorted(policy.columns):
            lines.append(_format_bins(column, policy.columns[column]))
    lines.append(format_tree(root))
    return "\n".join(lines) + "\n"


def parse_tree(text: str) -> tuple[LearnedNode, list[str], DiscretizationPolicy]:
    raw = text.splitlines()
    if not raw:
        raise TreeFormatError("missing header line")
    names = raw[0].split(",") if raw[0] else []

    columns: dict[int, Bins] = {}
    body: list[tuple[int, str, int]] = []
    for line_no, line in enumerate(raw[1:], start=2):
        if not line.strip():
            continue
        if line.startswith(_BINS_PREFIX):
            column, bins = _parse_bins(line, names, line_no)
            columns[column] = bins
            continue
        if line.startswith("#"):
            continue
        stripped = line.lstrip(" ")
        body.append((len(line) - len(stripped), stripped, line_no))
    if not body:
        raise TreeFormatError("no tree body")

    root, pos = _parse_node(body, 0, 0, names)
    if pos != len(body):
        raise TreeFormatError(f"line {body[pos][2]}: unexpected content after tree")
    return root, names, DiscretizationPolicy(columns)


def save_tree(
    path: str | Path,
    root: LearnedNode,
    names: Sequence[str],
    policy: DiscretizationPolicy | None = None,
) -> bool:
    try:
        Path(path).write_text(dump_tree(root, names, policy), encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to save decision tree to {path}: {e}")
        return False
    logger.info(f"Saved decision tree to {path}")
    return True


def load_tree(
    path: str | Path,
) -> tuple[LearnedNode, list[str], DiscretizationPolicy] | None:
    """Load what :func:`save_tree` wrote; None on I/O or format errors."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to open decision tree {path}: {e}")
        return None
    try:
        return parse_tree(text)
    except TreeFormatError as e:
        logger.warning(f"Rejected decision tree {path}: {e}")
        return None


# --- Bins lines ---


def _format_bins(column: int, bins: Bins) -> str:
    flags = "".join(
        f" {flag}" for flag, on in (("abs", bins.absolute), ("int", bins.integer)) if on
    )
    parts = [bins.labels[0]]
    for edge, label in zip(bins.edges, bins.labels[1:]):
        parts.append(repr(float(edge)))
        parts.append(label)
    return f"{_BINS_PREFIX}{column}{flags}: {' '.join(parts)}"


def _parse_bins(line: str, names: list[str], line_no: int) -> tuple[int, Bins]:
    head, sep, tail = line[len(_BINS_PREFIX):].partition(":")
    head_parts = head.split()
    tokens = tail.split()
    if not sep or not head_parts or len(tokens) % 2 == 0:
        raise TreeFormatError(f"line {line_no}: malformed bins line")
    try:
        column = int(head_parts[0])
        edges = tuple(float(t) for t in tokens[1::2])
    except ValueError as e:
        raise TreeFormatError(f"line {line_no}: {e}") from None
    flags = set(head_parts[1:])
    if not flags <= {"abs", "int"}:
        raise TreeFormatError(f"line {line_no}: unknown flags {sorted(flags - {'abs', 'int'})}")
    name = names[column] if 0 <= column < len(names) else f"Attribute {column}"
    try:
        bins = Bins(name, edges, tuple(tokens[0::2]),
                    absolute="abs" in flags, integer="int" in flags)
    except ValueError as e:
        raise TreeFormatError(f"line {line_no}: {e}") from None
    return column, bins


# --- Tree body ---


def _parse_node(
    body: list[tuple[int, str, int]], pos: int, indent: int, names: list[str],
) -> tuple[LearnedNode, int]:
    if pos >= len(body):
        raise TreeFormatError("tree ends before a node")
    depth, text, line_no = body[pos]
    if depth != indent:
        raise TreeFormatError(f"line {line_no}: expected indent {indent}, got {depth}")

    if text.startswith(_LEAF):
        return Leaf(text[len(_LEAF):]), pos + 1
    if not text.startswith(_SPLIT):
        raise TreeFormatError(f"line {line_no}: expected LEAF or SPLIT ON")

    name = text[len(_SPLIT):]
    if name not in names:
        raise TreeFormatError(f"line {line_no}: unknown attribute {name!r}")
    prefix = f"{name} = "
    children: list[tuple[str, LearnedNode]] = []
    pos += 1
    while pos < len(body) and body[pos][0] == indent + 2:
        _, branch, branch_no = body[pos]
        if not (branch.startswith(prefix) and branch.endswith(":")):
            raise TreeFormatError(f"line {branch_no}: malformed branch for {name!r}")
        value = branch[len(prefix):-1]
        child, pos = _parse_node(body, pos + 1, indent + 4, names)
        children.append((value, child))
    if not children:
        raise TreeFormatError(f"line {line_no}: split on {name!r} has no branches")
    return Internal(names.index(name), name, tuple(children)), pos
