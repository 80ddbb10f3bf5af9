"""In-memory datasets and a CSV loader with one-hot labels."""

from __future__ import annotations

import logging
import math
import random
import re
from dataclasses import dataclass, field
from os import PathLike

import numpy as np

logger = logging.getLogger(__name__)

_NUMBER = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


@dataclass
class Dataset:
    """Features and labels, one sample per row, read in ``indices`` order."""

    features: np.ndarray
    labels: np.ndarray
    indices: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.features = np.asarray(self.features, dtype=np.float32)
        self.labels = np.asarray(self.labels, dtype=np.float32)
        if not self.indices:
            self.indices = list(range(len(self)))

    def shuffle(self) -> None:
        """Shuffle the reading order in place."""
        random.shuffle(self.indices)

    def splice(self, start: int, end: int) -> tuple[np.ndarray, np.ndarray]:
        """Features and labels of positions ``start`` to ``end`` (exclusive)."""
        if start < 0 or end > len(self) or start >= end:
            raise IndexError("Dataset.splice indices out of bounds")
        rows = self.indices[start:end]
        return self.features[rows].copy(), self.labels[rows].copy()

    def __len__(self) -> int:
        return int(self.features.shape[0]) if self.features.ndim else 0


def _leading_float(cell: str) -> float | None:
    match = _NUMBER.match(cell)
    return float(match.group(1)) if match else None


def load_csv(
    path: str | PathLike[str],
    label_index: int,
    num_classes: int,
    scale: float = 1.0,
    skip_header: bool = True,
) -> Dataset:
    """Load a CSV of numbers; the label column is one-hot encoded.

    Feature values are divided by ``scale``. Cells that are not numbers are
    skipped, and rows whose feature count differs from the first row's are
    dropped.
    """
    x_rows: list[list[float]] = []
    y_rows: list[list[float]] = []
    expected_cols = 0
    dropped = 0

    logger.info("Loading %s...", path)
    with open(path, encoding="utf-8") as handle:
        if skip_header:
            handle.readline()
        for line in handle:
            line = line.rstrip("\n")
            if not line:
                continue
            row_x: list[float] = []
            row_y = [0.0] * num_classes
            col = 0
            for cell in line.split(","):
                value = _leading_float(cell.rstrip("\r"))
                if value is None:
                    continue
                if col == label_index:
                    if math.isfinite(value):
                        label = int(value)
                        if 0 <= label < num_classes:
                            row_y[label] = 1.0
                else:
                    row_x.append(value / scale)
                col += 1

            if not row_x:
                continue
            if not x_rows:
                expected_cols = len(row_x)
            elif len(row_x) != expected_cols:
                dropped += 1
                continue
            x_rows.append(row_x)
            y_rows.append(row_y)

    logger.info("Loaded %d samples.", len(x_rows))
    if dropped:
        logger.warning(
            "Dropped %d rows due to inconsistent column counts (jagged data).",
            dropped,
        )
    if not x_rows:
        raise ValueError("DataLoader: No valid data loaded.")

    labels = np.array(y_rows, dtype=np.float32).reshape(len(y_rows), num_classes)
    return Dataset(np.array(x_rows, dtype=np.float32), labels)