"""
Module: board.gestures

Purpose:
    Translate raw pointer deltas into grid-aligned, canvas-clamped target
    geometry before it reaches the layout engine.

Key Functions:
    - snap_to_grid(): Round a coordinate to the gap grid
    - clamp_position(): Keep a dragged block inside the canvas margins
    - clamp_size(): Keep a resized block between the minimum size and the canvas edge
    - drag_target(): Position for a drag that started at a known origin
    - resize_target(): Size for a resize that started at a known size

Dependencies:
    - math (std)
    - dashboard_builder.core.models: Position, Size, CanvasBounds

Used By:
    - dashboard_builder.board.controller
    - dashboard_builder.gui.widgets.block_canvas
"""

from __future__ import annotations

import math
from typing import Tuple

from dashboard_builder.core.models import CanvasBounds, Position, Size


def snap_to_grid(value: float, gap: int) -> int:
    """
    Round ``value`` to the nearest multiple of ``gap``.

    Halves round up (towards +inf), so 30 snaps to 40 on a 20px grid.

    Example:
        >>> snap_to_grid(29, 20)
        20
        >>> snap_to_grid(30, 20)
        40
    """
    return int(math.floor(value / gap + 0.5)) * gap


def clamp_position(position: Position, size: Size, bounds: CanvasBounds, gap: int) -> Position:
    """Clamp a top-left corner so the block keeps ``gap`` from every edge."""
    x = max(gap, min(position.x, bounds.width - size.width - gap))
    y = max(gap, min(position.y, bounds.height - size.height - gap))
    return Position(x, y)


def clamp_size(
    size: Size,
    position: Position,
    bounds: CanvasBounds,
    gap: int,
    min_units: int = 5,
) -> Size:
    """
    Clamp a size between ``min_units`` grid units and the canvas edge margin.

    The minimum wins when the block is too close to the edge for it.
    """
    min_size = gap * min_units
    width = max(min_size, min(size.width, bounds.width - position.x - gap))
    height = max(min_size, min(size.height, bounds.height - position.y - gap))
    return Size(width, height)


def drag_target(
    origin: Position,
    delta: Tuple[float, float],
    size: Size,
    bounds: CanvasBounds,
    gap: int,
) -> Position:
    """
    Target position for a drag.

    Args:
        origin: Block position when the drag started
        delta: Pointer movement (dx, dy) since the drag started
        size: Block size
        bounds: Canvas bounds
        gap: Grid quantum and edge margin

    Returns:
        Snapped and clamped position
    """
    dx, dy = delta
    snapped = Position(snap_to_grid(origin.x + dx, gap), snap_to_grid(origin.y + dy, gap))
    return clamp_position(snapped, size, bounds, gap)


def resize_target(
    start_size: Size,
    delta: Tuple[float, float],
    position: Position,
    bounds: CanvasBounds,
    gap: int,
    min_units: int = 5,
    *,
    horizontal: bool = True,
    vertical: bool = True,
) -> Size:
    """
    Target size for a resize dragged from the bottom/right handles.

    Args:
        start_size: Block size when the resize started
        delta: Pointer movement (dx, dy) since the resize started
        position: Block position (fixed during a resize)
        bounds: Canvas bounds
        gap: Grid quantum and edge margin
        min_units: Minimum side length in grid units
        horizontal: False for the bottom-edge handle (width unchanged)
        vertical: False for the right-edge handle (height unchanged)
    """
    dx, dy = delta
    width = snap_to_grid(start_size.width + dx, gap) if horizontal else start_size.width
    height = snap_to_grid(start_size.height + dy, gap) if vertical else start_size.height
    return clamp_size(Size(width, height), position, bounds, gap, min_units)
