"""
Module: layout.placement

Purpose:
    Find a free top-left position for a newly inserted block.

Key Functions:
    - find_free_position(): Main entry point

Algorithm:
    Row-major grid scan with local nudging, a rough skyline packing that
    favours the top-left so new blocks appear near the top:
    1. Empty canvas -> (gap, gap)
    2. Scan candidates on the gap grid, row by row
    3. Nudge each candidate below any block just above it and right of
       any block just left of it
    4. Accept the first nudged candidate that collides with nothing
    5. If the scan fails, grow the canvas to fit one more row and rescan
    6. If that fails too, stack below everything at x = gap

Dependencies:
    - layout.overlap: Collision predicates
    - layout.models: PlacementResult

Used By:
    - dashboard_builder.board.controller: add_block()
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from dashboard_builder.core.models import CanvasBounds, Position, Rect, Size

from .models import PlacementResult
from .overlap import RectSet, as_rect_map, collides_with_any, max_occupied_y

logger = logging.getLogger(__name__)

# Id used for the probe rectangle during scans; never returned to callers
_PROBE_ID = "__placement_probe__"


def find_free_position(
    existing: RectSet,
    new_size: Size,
    bounds: CanvasBounds,
    gap: int,
) -> PlacementResult:
    """
    Find a free position for a rectangle of ``new_size``.

    Never fails: when no slot exists on the current canvas it grows the
    canvas height and, as a last resort, stacks the rectangle below all
    occupied space.

    Args:
        existing: Current rectangles (mapping or iterable); not mutated
        new_size: Size of the rectangle to place
        bounds: Current canvas bounds
        gap: Clearance and grid quantum

    Returns:
        PlacementResult with the position and the (possibly grown) bounds

    Example:
        >>> find_free_position([], Size(300, 200), CanvasBounds(800, 600), 20).position
        Position(x=20, y=20)
    """
    rects = list(as_rect_map(existing).values())
    if not rects:
        return PlacementResult(
            Position(gap, gap),
            bounds.grown_to_fit(gap + new_size.height, gap),
        )

    highest_occupied_y = max_occupied_y(rects)

    position = _scan(rects, new_size, bounds, gap)
    if position is not None:
        return PlacementResult(position, bounds)

    needed_height = highest_occupied_y + new_size.height + 2 * gap
    if needed_height > bounds.height:
        logger.info(
            f"No free slot for {new_size.width}x{new_size.height}; "
            f"growing canvas height {bounds.height} -> {needed_height}"
        )
        bounds = bounds.with_height(needed_height)
        position = _scan(rects, new_size, bounds, gap)
        if position is not None:
            return PlacementResult(position, bounds)

    position = Position(gap, highest_occupied_y + gap)
    logger.warning(
        f"Grid scan exhausted; stacking {new_size.width}x{new_size.height} "
        f"block at ({position.x}, {position.y})"
    )
    return PlacementResult(
        position,
        bounds.grown_to_fit(position.y + new_size.height, gap),
    )


def _scan(
    rects: List[Rect],
    size: Size,
    bounds: CanvasBounds,
    gap: int,
) -> Optional[Position]:
    """Row-major grid scan; first collision-free nudged candidate wins."""
    max_x = bounds.width - size.width - gap
    max_y = bounds.height - size.height - gap

    for y in range(gap, max_y + 1, gap):
        for x in range(gap, max_x + 1, gap):
            nx, ny = _nudge(rects, x, y, size, gap)
            if nx > max_x or ny > max_y:
                continue
            candidate = Rect(_PROBE_ID, nx, ny, size.width, size.height)
            if not collides_with_any(candidate, rects, gap):
                return Position(nx, ny)
    return None


def _nudge(rects: List[Rect], x: int, y: int, size: Size, gap: int) -> Tuple[int, int]:
    """
    Push a candidate clear of blocks sitting just above or just left of it.

    A block is "just above" when its bottom edge lies within ``gap`` above
    y and it shares horizontal span with the candidate; "just left" is the
    same on the other axis. Pushes accumulate across blocks.
    """
    for r in rects:
        spans_x = r.x < x + size.width and r.right > x
        if spans_x and y - gap < r.bottom <= y:
            y = r.bottom + gap
        spans_y = r.y < y + size.height and r.bottom > y
        if spans_y and x - gap < r.right <= x:
            x = r.right + gap
    return x, y
