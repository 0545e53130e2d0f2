"""Tests for PieDiagram percentage bookkeeping."""

from __future__ import annotations

import pytest
from hypothesis import given

from diagramkit import DuplicateElementError, PieDiagram, Slice, deserialize
from tests.strategies import unique_slices


class TestPieDiagram:
    def test_percentages_recomputed_on_add(self) -> None:
        pie = PieDiagram(title="Pets")
        first = pie.add_slice(Slice(label="Dogs", value=3))
        assert first.percentage == 100.0
        pie.add_slice({"label": "Cats", "value": 1})
        assert pie.find_slice("Dogs").percentage == 75.0
        assert pie.find_slice("Cats").percentage == 25.0

    def test_rounded_to_two_places(self) -> None:
        pie = PieDiagram(slices=[{"label": "a", "value": 1}, {"label": "b", "value": 2}])
        assert pie.find_slice("a").percentage == 33.33
        assert pie.find_slice("b").percentage == 66.67

    def test_zero_total(self) -> None:
        pie = PieDiagram(slices=[{"label": "a", "value": 0}])
        assert pie.find_slice("a").percentage == 0.0

    def test_supplied_percentage_ignored(self) -> None:
        pie = PieDiagram(slices=[Slice(label="a", value=1, percentage=12.5)])
        assert pie.find_slice("a").percentage == 100.0

    def test_total_value(self) -> None:
        pie = PieDiagram(slices=[{"label": "a", "value": 1.5}, {"label": "b", "value": 2}])
        assert pie.total_value() == 3.5

    def test_duplicate_label(self) -> None:
        pie = PieDiagram(slices=[{"label": "a", "value": 1}])
        with pytest.raises(DuplicateElementError):
            pie.add_slice({"label": "a", "value": 2})

    def test_round_trip(self) -> None:
        pie = PieDiagram(title="Pets", slices=[{"label": "Dogs", "value": 3}, {"label": "Cats", "value": 1}])
        restored = deserialize(pie.to_json())
        assert restored == pie
        assert restored.slices == pie.slices

    def test_value_change_is_modified(self) -> None:
        old = PieDiagram(slices=[{"label": "a", "value": 1}])
        new = PieDiagram(slices=[{"label": "a", "value": 2}])
        assert len(old.diff(new)["slices"].modified) == 1

    @given(unique_slices)
    def test_percentages_sum_to_about_100(self, slices: list[Slice]) -> None:
        pie = PieDiagram(slices=slices)
        if pie.total_value() > 0:
            assert abs(sum(s.percentage for s in pie.slices) - 100.0) <= 0.01 * len(slices)
        else:
            assert all(s.percentage == 0.0 for s in pie.slices)
