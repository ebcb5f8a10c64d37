"""
Unit Tests for Diagram Bar Layout
"""

import pytest

from dashboard_builder.output.diagram import (
    AXIS_MARGIN,
    DIAGRAM_SERIES,
    VERTICAL_PADDING,
    axis_y,
    bar_layout,
)


class TestBarLayout:

    def test_bar_layout_when_default_series_then_one_bar_per_month(self):
        bars = bar_layout(300, 200)
        assert [b.label for b in bars] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul"]
        assert [b.value for b in bars] == [v for _, v in DIAGRAM_SERIES]

    def test_bar_layout_when_default_size_then_tallest_fills_usable_height(self):
        bars = bar_layout(300, 200)
        tallest = max(bars, key=lambda b: b.height)
        assert tallest.label == "Jun"
        assert tallest.height == pytest.approx(200 - VERTICAL_PADDING)

    def test_bar_layout_when_default_size_then_bars_sit_on_axis(self):
        bars = bar_layout(300, 200)
        for bar in bars:
            assert bar.y + bar.height == pytest.approx(axis_y(200))
        assert axis_y(200) == 200 - AXIS_MARGIN

    def test_bar_layout_when_default_size_then_bars_spaced_evenly(self):
        bars = bar_layout(350, 200)
        assert bars[0].x == pytest.approx(5)
        assert bars[0].width == pytest.approx(40)
        assert bars[1].x == pytest.approx(55)
        assert bars[-1].x + bars[-1].width <= 350

    def test_bar_layout_when_value_scaled_then_proportional(self):
        bars = {b.label: b for b in bar_layout(300, 200)}
        assert bars["Apr"].height == pytest.approx(bars["Jan"].height * 2)

    def test_bar_layout_when_empty_series_then_no_bars(self):
        assert bar_layout(300, 200, series=()) == []

    @pytest.mark.parametrize("width, height", [(70, 200), (300, 60), (0, 0)])
    def test_bar_layout_when_area_too_small_then_no_bars(self, width, height):
        assert bar_layout(width, height) == []

    def test_center_x_when_bar_then_middle_of_bar(self):
        bar = bar_layout(350, 200)[0]
        assert bar.center_x == pytest.approx(25)
