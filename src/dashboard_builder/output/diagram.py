"""
Module: output.diagram

Purpose:
    Geometry of the sample bar chart shown inside diagram blocks.
    Shared by the Qt painter and the PIL snapshot renderer so both draw
    the same chart.

Key Functions:
    - bar_layout(): Bar rectangles and label anchors for a block size

Dependencies:
    - dataclasses (std)

Used By:
    - dashboard_builder.output.snapshot
    - dashboard_builder.gui.widgets.block_canvas
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

# Monthly sample series
DIAGRAM_SERIES: Tuple[Tuple[str, int], ...] = (
    ("Jan", 400),
    ("Feb", 300),
    ("Mar", 600),
    ("Apr", 800),
    ("May", 500),
    ("Jun", 900),
    ("Jul", 700),
)

BAR_COLOR = "#8884d8"
LABEL_COLOR = "#333333"
AXIS_COLOR = "#cccccc"

# Space under the axis for month labels
AXIS_MARGIN = 30
# Combined space above the tallest bar and below the axis
VERTICAL_PADDING = 60
BAR_SPACING = 10


@dataclass(frozen=True)
class Bar:
    """
    One bar of the chart, in coordinates local to the chart area.

    Attributes:
        label: Category name drawn under the axis
        value: Value drawn above the bar
        x, y, width, height: Bar rectangle
    """

    label: str
    value: int
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


def bar_layout(
    width: float,
    height: float,
    series: Tuple[Tuple[str, int], ...] = DIAGRAM_SERIES,
) -> List[Bar]:
    """
    Lay out one bar per series entry inside a ``width`` x ``height`` area.

    Bars share the width with BAR_SPACING between them and are scaled so
    the tallest fills the height minus VERTICAL_PADDING. Returns an empty
    list when the area is too small to draw anything.

    Example:
        >>> bars = bar_layout(300, 200)
        >>> len(bars)
        7
        >>> max(b.height for b in bars) == 200 - 60
        True
    """
    if not series:
        return []
    bar_width = width / len(series) - BAR_SPACING
    usable_height = height - VERTICAL_PADDING
    if bar_width <= 0 or usable_height <= 0:
        return []

    max_value = max(value for _, value in series)
    ratio = usable_height / max_value
    bars = []
    for index, (label, value) in enumerate(series):
        bar_height = value * ratio
        bars.append(Bar(
            label=label,
            value=value,
            x=index * (bar_width + BAR_SPACING) + BAR_SPACING / 2,
            y=height - bar_height - AXIS_MARGIN,
            width=bar_width,
            height=bar_height,
        ))
    return bars


def axis_y(height: float) -> float:
    """Y of the horizontal axis line inside a chart of ``height``."""
    return height - AXIS_MARGIN
