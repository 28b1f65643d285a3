"""TraceRecorder - in-memory state/action rows written out as training CSV."""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Sequence

from stride_decide.dataset import LABEL_COLUMN, MONSTER_COLUMNS

logger = logging.getLogger(__name__)

DEFAULT_MAX_FRAMES = 10000

Feature = float | int | bool | str


def format_feature(value: Feature) -> str:
    """Booleans become ``1``/``0``; floats keep three decimals."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.3f}"
    return value


class TraceRecorder:
    """Collects one row per frame until ``max_frames`` rows are held."""

    def __init__(
        self,
        columns: Sequence[str] = MONSTER_COLUMNS,
        max_frames: int = DEFAULT_MAX_FRAMES,
    ) -> None:
        if max_frames < 1:
            raise ValueError("max_frames must be at least 1")
        self.columns = tuple(columns)
        self.max_frames = max_frames
        self._rows: list[list[str]] = []

    @property
    def rows(self) -> tuple[tuple[str, ...], ...]:
        return tuple(tuple(r) for r in self._rows)

    @property
    def frames(self) -> int:
        return len(self._rows)

    @property
    def is_full(self) -> bool:
        return len(self._rows) >= self.max_frames

    def record(self, features: Sequence[Feature], action: str) -> bool:
        """Append a row; False once the recorder is full."""
        if len(features) != len(self.columns):
            raise ValueError(
                f"expected {len(self.columns)} features, got {len(features)}"
            )
        if self.is_full:
            return False
        self._rows.append([format_feature(v) for v in features] + [action])
        if self.is_full:
            logger.info(f"Recording complete ({self.max_frames} frames)")
        return True

    def clear(self) -> None:
        self._rows.clear()

    def write(self, path: str | Path) -> bool:
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerow([*self.columns, LABEL_COLUMN])
                writer.writerows(self._rows)
        except OSError as e:
            logger.error(f"Failed to write recording to {path}: {e}")
            return False
        logger.info(f"Wrote {len(self._rows)} frames to {path}")
        return True
