"""Tests for the results table."""

import csv

import numpy as np
import pytest

from hist_texture.buffer import RegionDescriptor
from hist_texture.metrics.texture import compute_texture_statistics
from hist_texture.results import ResultsTable


def test_rows_appended_in_order(bimodal_buffer, constant_buffer):
    table = ResultsTable()
    assert table.add(compute_texture_statistics(bimodal_buffer, label="b")) == 0
    assert table.add(compute_texture_statistics(constant_buffer, label="c")) == 1
    assert len(table) == 2
    rows = table.rows()
    assert [r["Label"] for r in rows] == ["b", "c"]
    assert list(rows[0])[0] == "Label"
    np.testing.assert_allclose(table.column("Mean"), [127.5, 77.0])


def test_unknown_column(bimodal_buffer):
    table = ResultsTable([compute_texture_statistics(bimodal_buffer)])
    with pytest.raises(KeyError):
        table.column("Median")


def test_rejects_non_record():
    with pytest.raises(TypeError):
        ResultsTable().add({"Mean": 1.0})


def test_to_csv(tmp_dir, bimodal_buffer, index_buffer):
    empty = RegionDescriptor(rect=(0, 0, 1, 1), mask=np.zeros((1, 1), dtype=np.uint8))
    table = ResultsTable([
        compute_texture_statistics(bimodal_buffer, label="bimodal"),
        compute_texture_statistics(index_buffer, empty, label="empty"),
    ])
    path = table.to_csv(tmp_dir / "out" / "results.csv")
    assert path.exists()

    with open(path, newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert rows[0]["Label"] == "bimodal"
    assert float(rows[0]["Uniformity"]) == pytest.approx(0.5)
    assert rows[1]["Entropy"] == "nan"
