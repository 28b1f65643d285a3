"""Training CSV ingestion and per-column discretization.

A recorded CSV holds raw numbers. ID3 needs categories, so every numeric
column goes through a :class:`Bins` on load and again at inference time; the
same :class:`DiscretizationPolicy` must be used for both.
"""
from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from stride_decide.id3 import DataPoint

logger = logging.getLogger(__name__)

LABEL_COLUMN = "Action"

MONSTER_COLUMNS = (
    "DistanceToPlayer",
    "RelativeOrientation",
    "Speed",
    "CanSeePlayer",
    "IsNearObstacle",
    "PathCount",
    "TimeInCurrentAction",
)


@dataclass(frozen=True)
class Bins:
    """Maps a numeric value to the label of the first edge it falls below.

    ``labels`` has one more entry than ``edges``; the last label catches
    everything at or above the final edge. Values that do not parse as
    numbers pass through unchanged.

    Attributes:
        name: Column name, for documentation only.
        edges: Strictly increasing upper bounds (exclusive).
        labels: Category names, without whitespace.
        absolute: Bin ``abs(value)`` instead of the value.
        integer: Parse as an integer; fractional text passes through.
    """

    name: str
    edges: tuple[float, ...]
    labels: tuple[str, ...]
    absolute: bool = False
    integer: bool = False

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.edges) + 1:
            raise ValueError(
                f"{self.name}: {len(self.edges)} edges need {len(self.edges) + 1} labels"
            )
        if any(b <= a for a, b in zip(self.edges, self.edges[1:])):
            raise ValueError(f"{self.name}: edges must be strictly increasing")
        for label in self.labels:
            if not label or any(c.isspace() for c in label):
                raise ValueError(f"{self.name}: invalid label {label!r}")

    def discretize(self, raw: str) -> str:
        text = raw.strip()
        try:
            value: float = int(text) if self.integer else float(text)
        except ValueError:
            return raw
        if math.isnan(value):
            return raw
        if self.absolute:
            value = abs(value)
        for edge, label in zip(self.edges, self.labels):
            if value < edge:
                return label
        return self.labels[-1]


@dataclass(frozen=True)
class DiscretizationPolicy:
    """Column index -> :class:`Bins`. Columns without bins pass through."""

    columns: Mapping[int, Bins] = field(default_factory=dict)

    def apply(self, row: Sequence[str]) -> tuple[str, ...]:
        return tuple(
            self.columns[i].discretize(v) if i in self.columns else v
            for i, v in enumerate(row)
        )


MONSTER_POLICY = DiscretizationPolicy({
    0: Bins("DistanceToPlayer", (30.0, 80.0, 200.0),
            ("very_near", "near", "medium", "far")),
    1: Bins("RelativeOrientation", (30.0, 90.0, 150.0),
            ("direct_front", "front", "side", "behind"), absolute=True),
    2: Bins("Speed", (5.0, 50.0, 100.0, 150.0),
            ("stopped", "very_slow", "slow", "medium_speed", "fast")),
    5: Bins("PathCount", (1.0, 3.0, 7.0, 15.0),
            ("none", "very_few", "few", "medium", "many"), integer=True),
    6: Bins("TimeInCurrentAction", (0.5, 1.5, 3.0, 5.0),
            ("very_short", "short", "medium", "long", "very_long")),
})


@dataclass(frozen=True)
class Dataset:
    """Attribute names (label column excluded) and discretized rows."""

    names: tuple[str, ...]
    points: tuple[DataPoint, ...]

    def label_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for point in self.points:
            counts[point.label] = counts.get(point.label, 0) + 1
        return counts


def load_csv(
    path: str | Path,
    policy: DiscretizationPolicy | None = None,
) -> Dataset | None:
    """Read a header + rows CSV whose last column is the label.

    Empty lines are ignored and rows with the wrong number of fields are
    logged and skipped. Returns None if the file cannot be read or holds no
    usable rows.
    """
    policy = policy or DiscretizationPolicy()
    try:
        with open(path, newline="", encoding="utf-8") as f:
            rows = [row for row in csv.reader(f) if row and any(c.strip() for c in row)]
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read training data {path}: {e}")
        return None
    if not rows:
        logger.error(f"Training data {path} is empty")
        return None

    header = [c.strip() for c in rows[0]]
    if len(header) < 2:
        logger.error(f"Training data {path} needs at least one attribute and a label")
        return None
    width = len(header)
    points: list[DataPoint] = []
    for line_no, row in enumerate(rows[1:], start=2):
        if len(row) != width:
            logger.warning(
                f"{path}:{line_no}: expected {width} fields, got {len(row)}; skipped"
            )
            continue
        values = [c.strip() for c in row]
        label = values[-1]
        if not label:
            logger.warning(f"{path}:{line_no}: empty label; skipped")
            continue
        points.append(DataPoint(policy.apply(values[:-1]), label))

    if not points:
        logger.error(f"Training data {path} has no valid rows")
        return None
    dataset = Dataset(tuple(header[:-1]), tuple(points))
    summary = ", ".join(f"{k}={v}" for k, v in sorted(dataset.label_counts().items()))
    logger.info(f"Loaded {len(points)} rows from {path} ({summary})")
    return dataset
