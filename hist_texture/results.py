"""
Tabular sink for texture statistics records.

Each processed image / region appends one row (label + the seven
descriptors) to a ``ResultsTable``; the table can be inspected column-wise
or written out as CSV.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, Iterable, List

import numpy as np

from .metrics.texture import COLUMNS, TextureStatistics

LABEL_COLUMN = "Label"


class ResultsTable:
    """Ordered collection of ``TextureStatistics`` rows."""

    def __init__(self, records: Iterable[TextureStatistics] = ()) -> None:
        self._records: List[TextureStatistics] = []
        for record in records:
            self.add(record)

    def add(self, record: TextureStatistics) -> int:
        """Append *record* as a new row and return its row index."""
        if not isinstance(record, TextureStatistics):
            raise TypeError(
                f"Expected TextureStatistics, got {type(record).__name__}"
            )
        self._records.append(record)
        return len(self._records) - 1

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    @property
    def records(self) -> List[TextureStatistics]:
        return list(self._records)

    @property
    def headings(self) -> List[str]:
        return [LABEL_COLUMN, *COLUMNS]

    def rows(self) -> List[Dict[str, object]]:
        """Rows as dicts, ``Label`` first, then the descriptor columns."""
        return [
            {LABEL_COLUMN: rec.label, **rec.as_row()} for rec in self._records
        ]

    def column(self, name: str) -> np.ndarray:
        """All values of descriptor column *name* as a float array."""
        if name not in COLUMNS:
            raise KeyError(f"Unknown column {name!r}; expected one of {COLUMNS}")
        return np.array([rec.as_row()[name] for rec in self._records], dtype=np.float64)

    def to_csv(self, path: str | Path) -> Path:
        """Write the table to *path* as CSV and return the resolved path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="") as fh:
            writer = csv.DictWriter(fh, fieldnames=self.headings)
            writer.writeheader()
            for row in self.rows():
                writer.writerow(row)
        return path.resolve()
