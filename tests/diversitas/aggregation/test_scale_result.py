"""
Tests for ScaleResult.

Tests for diversitas/aggregation/data.py
"""

from __future__ import annotations

import pytest

from diversitas.aggregation import ScaleResult, aggregate
from diversitas.tables import RECORD_COLUMNS


@pytest.fixture
def result(two_group_collection) -> ScaleResult:
    return aggregate(two_group_collection, indices=["N", "S"])


class TestScaleResult:
    """Test ScaleResult accessors."""

    def test_records_order(self, result):
        scales = [r.scale for r in result.records()]

        assert scales == ["alpha"] * 12 + ["gamma"] * 4 + ["beta"] * 2

    def test_by_scale(self, result):
        assert result.by_scale("gamma") is result.gamma
        with pytest.raises(ValueError):
            result.by_scale("delta")

    def test_values_by_group(self, result):
        assert result.values("alpha", "N", "uninvaded") == [20.0, 20.0, 20.0]
        assert len(result.values("alpha", "N")) == 6

    def test_value_requires_single_match(self, result):
        with pytest.raises(KeyError):
            result.value("alpha", "N", "invaded")
        with pytest.raises(KeyError):
            result.value("beta", "N", "invaded")

    def test_groups(self, result):
        assert result.groups == ["invaded", "uninvaded"]

    def test_to_frame(self, result):
        frame = result.to_frame()

        assert list(frame.columns) == RECORD_COLUMNS
        assert len(frame) == 18
        assert frame.loc[frame["scale"] == "gamma", "value"].tolist() == [72.0, 5.0, 60.0, 6.0]

    def test_empty(self):
        result = ScaleResult()

        assert result.records() == []
        assert result.groups == []
        assert len(result.to_frame()) == 0

    def test_repr(self, result):
        assert "12 alpha" in repr(result)
