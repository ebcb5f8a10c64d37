"""
Module: layout.resolver

Purpose:
    Cascade position/size adjustments after one block moves or is resized
    so that no two blocks collide and every block stays on the canvas.

Key Functions:
    - resolve(): Main entry point (generic changed rectangle)
    - resolve_move(): Convenience wrapper for a drag-move
    - resolve_resize(): Convenience wrapper for a drag-resize
    - determine_direction(): Pick the side to push an affected block to
    - calculate_new_position(): Compute the affected block's new geometry
    - try_swap(): Explicit swap check between two blocks

Algorithm:
    Breadth-first cascade over the rectangle set:
    1. Replace the changed rectangle in a working copy
    2. Queue every rectangle colliding with it
    3. For each queued rectangle (each id at most once):
       a. Choose a push direction from the directed overlap depths,
          preferring the active block's travel direction on moves
       b. Swap into the active block's old slot if that is clean,
          otherwise push adjacent to the active block
       c. Off-canvas pushes shrink (rightward only), else fall back to
          the top-left anchor, else stack below everything
       d. Queue rectangles the relocated block now collides with
    4. Return the working copy and the possibly grown canvas bounds

    Overlaps already present between untouched blocks before the call are
    not repaired; they are reported in ResolveResult.residual_overlaps.

Dependencies:
    - layout.overlap: Collision predicates
    - layout.models: Direction, ChangeKind, ResolveResult

Used By:
    - dashboard_builder.board.controller: move_block(), resize_block()
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Set, Tuple

from dashboard_builder.core.models import CanvasBounds, Position, Rect, Size

from .config import MIN_SHRINK_WIDTH
from .models import ChangeKind, Direction, ResolveResult
from .overlap import (
    RectSet,
    as_rect_map,
    clamp_rect,
    collides_with_any,
    find_overlapping_pairs,
    fits_horizontally,
    fits_vertically,
    is_within_bounds,
    max_occupied_y,
    overlapping_ids,
    overlaps,
)

logger = logging.getLogger(__name__)

# Tie-break order when two directions need the same displacement
_DIRECTION_ORDER = (Direction.RIGHT, Direction.BELOW, Direction.LEFT, Direction.ABOVE)


def resolve(
    existing: RectSet,
    changed_id: str,
    changed_rect: Rect,
    bounds: CanvasBounds,
    gap: int,
    *,
    kind: ChangeKind = ChangeKind.MOVE,
    min_shrink_width: int = MIN_SHRINK_WIDTH,
) -> ResolveResult:
    """
    Relocate every rectangle transitively displaced by a change.

    Args:
        existing: Current rectangles (mapping or iterable); not mutated
        changed_id: Id of the rectangle the user moved or resized
        changed_rect: Its new geometry; clamped to the canvas margins
        bounds: Current canvas bounds
        gap: Clearance and grid quantum
        kind: MOVE prefers pushing along the drag direction; RESIZE
            always pushes along the minimum overlap
        min_shrink_width: Narrowest width the shrink fallback may produce

    Returns:
        ResolveResult with the new rectangle set and canvas bounds

    Example:
        >>> rects = {"a": Rect("a", 20, 20, 300, 200), "b": Rect("b", 340, 20, 300, 200)}
        >>> result = resolve(rects, "a", Rect("a", 340, 20, 300, 200), CanvasBounds(800, 600), 20)
        >>> result.rects["b"].position
        Position(x=20, y=20)
    """
    working = as_rect_map(existing)
    original = working.get(changed_id)

    if changed_rect.id != changed_id:
        changed_rect = Rect(changed_id, changed_rect.x, changed_rect.y,
                            changed_rect.width, changed_rect.height)
    changed_rect, bounds = clamp_rect(changed_rect, bounds, gap)
    working[changed_id] = changed_rect

    # The user's drag vector steers every wave of a move cascade
    travel: Optional[Tuple[int, int]] = None
    if kind is ChangeKind.MOVE and original is not None:
        travel = (changed_rect.x - original.x, changed_rect.y - original.y)

    # Geometry each rectangle had before this call moved it
    previous: Dict[str, Rect] = {changed_id: original if original is not None else changed_rect}
    # Most recent rectangle to push each queued id
    displacer: Dict[str, str] = {}
    processed: Set[str] = {changed_id}
    queue: Deque[str] = deque()
    displaced: List[str] = []

    for rect_id in overlapping_ids(changed_rect, working.values(), gap):
        displacer[rect_id] = changed_id
        queue.append(rect_id)

    while queue:
        affected_id = queue.popleft()
        if affected_id in processed:
            continue
        processed.add(affected_id)

        affected = working[affected_id]
        active = working[displacer[affected_id]]
        if not overlaps(active, affected, gap):
            continue

        active_previous = previous.get(active.id)
        direction = determine_direction(active, affected, bounds, gap, travel=travel)
        new_rect, bounds = calculate_new_position(
            active,
            affected,
            direction,
            working,
            bounds,
            gap,
            active_previous=active_previous,
            settled=processed,
            min_shrink_width=min_shrink_width,
        )
        logger.debug(
            f"Cascade: {active.id} pushes {affected_id} {direction.value} "
            f"({affected.x},{affected.y}) -> ({new_rect.x},{new_rect.y}) "
            f"{new_rect.width}x{new_rect.height}"
        )

        if new_rect != affected:
            previous[affected_id] = affected
            working[affected_id] = new_rect
            displaced.append(affected_id)

        for rect_id in overlapping_ids(new_rect, working.values(), gap, exclude=processed):
            displacer[rect_id] = affected_id
            queue.append(rect_id)

    residual = find_overlapping_pairs(working, gap)
    if residual:
        logger.warning(f"Cascade from {changed_id} left {len(residual)} overlapping pair(s): {residual}")

    return ResolveResult(
        rects=working,
        bounds=bounds,
        displaced=tuple(displaced),
        residual_overlaps=tuple(residual),
    )


def resolve_move(
    existing: RectSet,
    rect_id: str,
    position: Position,
    bounds: CanvasBounds,
    gap: int,
    **kwargs,
) -> ResolveResult:
    """Resolve after ``rect_id`` was dragged to ``position``."""
    rects = as_rect_map(existing)
    current = rects[rect_id]
    moved = Rect(rect_id, max(0, position.x), max(0, position.y), current.width, current.height)
    return resolve(rects, rect_id, moved, bounds, gap, kind=ChangeKind.MOVE, **kwargs)


def resolve_resize(
    existing: RectSet,
    rect_id: str,
    size: Size,
    bounds: CanvasBounds,
    gap: int,
    **kwargs,
) -> ResolveResult:
    """Resolve after ``rect_id`` was resized to ``size`` (top-left fixed)."""
    rects = as_rect_map(existing)
    resized = rects[rect_id].resized_to(size.width, size.height)
    return resolve(rects, rect_id, resized, bounds, gap, kind=ChangeKind.RESIZE, **kwargs)


# ─────────────────────────────────────────────────────────────────────────────
# Direction selection
# ─────────────────────────────────────────────────────────────────────────────


def directed_overlaps(active: Rect, affected: Rect) -> Dict[Direction, int]:
    """
    How far ``active`` reaches into ``affected`` from each side.

    Each value is the displacement (before the gap) that would clear the
    pair by pushing ``affected`` towards that side.
    """
    return {
        Direction.RIGHT: active.right - affected.x,
        Direction.BELOW: active.bottom - affected.y,
        Direction.LEFT: affected.right - active.x,
        Direction.ABOVE: affected.bottom - active.y,
    }


def is_edge_blocked(
    active: Rect,
    affected: Rect,
    direction: Direction,
    bounds: CanvasBounds,
    gap: int,
) -> bool:
    """
    True if pushing ``affected`` towards ``direction`` runs into the canvas edge.

    Blocked when ``affected`` already sits against that edge or when the
    pushed position would cross the edge margin.
    """
    if direction is Direction.RIGHT:
        return (
            bounds.width - affected.right <= gap
            or active.right + gap + affected.width > bounds.width - gap
        )
    if direction is Direction.LEFT:
        return affected.x <= gap or active.x - gap - affected.width < gap
    if direction is Direction.BELOW:
        return (
            bounds.height - affected.bottom <= gap
            or active.bottom + gap + affected.height > bounds.height - gap
        )
    if direction is Direction.ABOVE:
        return affected.y <= gap or active.y - gap - affected.height < gap
    return True


def determine_direction(
    active: Rect,
    affected: Rect,
    bounds: CanvasBounds,
    gap: int,
    travel: Optional[Tuple[int, int]] = None,
) -> Direction:
    """
    Choose the side ``affected`` should be pushed to.

    Order of preference:
    1. The active block's travel direction (larger axis first), when it
       has overlap and is not edge-blocked
    2. The smallest overlap among directions that are not edge-blocked
    3. The smallest overlap regardless of edges

    Overlap counts the gap buffer: a colliding pair has depth + gap > 0
    on every side, so a pair that is merely too close is still pushed.

    Args:
        active: Rectangle causing the displacement
        affected: Rectangle being displaced
        bounds: Canvas bounds
        gap: Clearance
        travel: (dx, dy) of the user's drag; None on resize

    Returns:
        Chosen Direction (NONE if the pair does not collide)
    """
    if not overlaps(active, affected, gap):
        return Direction.NONE
    depths = directed_overlaps(active, affected)
    candidates = [d for d in _DIRECTION_ORDER if depths[d] + gap > 0]

    for direction in _travel_directions(travel):
        if direction in candidates and not is_edge_blocked(active, affected, direction, bounds, gap):
            return direction

    open_directions = [
        d for d in candidates if not is_edge_blocked(active, affected, d, bounds, gap)
    ]
    pool = open_directions or candidates
    # min() keeps the first of equal depths, i.e. _DIRECTION_ORDER breaks ties
    return min(pool, key=lambda d: depths[d])


def _travel_directions(travel: Optional[Tuple[int, int]]) -> List[Direction]:
    """Directions matching a travel vector, dominant axis first."""
    if travel is None:
        return []
    dx, dy = travel
    ranked: List[Tuple[int, Direction]] = []
    if dx:
        ranked.append((abs(dx), Direction.RIGHT if dx > 0 else Direction.LEFT))
    if dy:
        ranked.append((abs(dy), Direction.BELOW if dy > 0 else Direction.ABOVE))
    ranked.sort(key=lambda item: -item[0])
    return [direction for _, direction in ranked]


# ─────────────────────────────────────────────────────────────────────────────
# New geometry
# ─────────────────────────────────────────────────────────────────────────────


def try_swap(
    active: Rect,
    affected: Rect,
    active_previous: Optional[Rect],
    rects: Iterable[Rect],
    bounds: CanvasBounds,
    gap: int,
) -> Optional[Rect]:
    """
    Try moving ``affected`` into the slot ``active`` just vacated.

    The swap is accepted only if, at the vacated slot, ``affected``
    clears ``active``, stays inside the canvas margins and collides with
    no third rectangle.

    Args:
        active: Rectangle causing the displacement (new geometry)
        affected: Rectangle being displaced
        active_previous: Geometry ``active`` had before it moved
        rects: Every rectangle in the working set
        bounds: Canvas bounds
        gap: Clearance

    Returns:
        ``affected`` at the vacated position, or None if the swap fails
    """
    if active_previous is None or active_previous.position == active.position:
        return None

    candidate = affected.moved_to(active_previous.x, active_previous.y)
    if overlaps(candidate, active, gap):
        return None
    if not is_within_bounds(candidate, bounds, gap):
        return None
    if collides_with_any(candidate, rects, gap, exclude=(active.id, affected.id)):
        return None
    return candidate


def calculate_new_position(
    active: Rect,
    affected: Rect,
    direction: Direction,
    rects: Dict[str, Rect],
    bounds: CanvasBounds,
    gap: int,
    *,
    active_previous: Optional[Rect] = None,
    settled: Optional[Set[str]] = None,
    min_shrink_width: int = MIN_SHRINK_WIDTH,
) -> Tuple[Rect, CanvasBounds]:
    """
    Compute where ``affected`` goes once ``active`` pushes it.

    Args:
        active: Rectangle causing the displacement
        affected: Rectangle being displaced
        direction: Side chosen by determine_direction()
        rects: Working rectangle set by id
        bounds: Canvas bounds
        gap: Clearance
        active_previous: Geometry ``active`` had before this cascade moved it
        settled: Ids the cascade will not revisit; a placement colliding
            with one of these is replaced by the stack-below fallback.
            None means every rectangle counts as settled.
        min_shrink_width: Narrowest width the shrink fallback may produce

    Returns:
        (new rectangle for ``affected``, possibly grown bounds)
    """
    swapped = try_swap(active, affected, active_previous, rects.values(), bounds, gap)
    if swapped is not None:
        logger.debug(f"Swapping {affected.id} into the slot vacated by {active.id}")
        return swapped, bounds

    candidate = _displace(active, affected, direction, bounds, gap, rects, min_shrink_width)

    others = [
        r for r in rects.values()
        if r.id not in (active.id, affected.id) and (settled is None or r.id in settled)
    ]
    if collides_with_any(candidate, others, gap):
        candidate = _stack_below(affected, rects.values(), gap)
        logger.debug(f"{affected.id} would land on a settled block; stacking below at y={candidate.y}")

    grown = bounds.grown_to_fit(candidate.bottom, gap)
    if grown.height != bounds.height:
        logger.info(f"Growing canvas height {bounds.height} -> {grown.height} to fit {affected.id}")
    return candidate, grown


def _displace(
    active: Rect,
    affected: Rect,
    direction: Direction,
    bounds: CanvasBounds,
    gap: int,
    rects: Dict[str, Rect],
    min_shrink_width: int,
) -> Rect:
    """Push adjacent to ``active``; shrink or fall back when that leaves the canvas."""
    x, y = affected.x, affected.y
    if direction is Direction.RIGHT:
        x = active.right + gap
    elif direction is Direction.LEFT:
        x = active.x - gap - affected.width
    elif direction is Direction.BELOW:
        y = active.bottom + gap
    elif direction is Direction.ABOVE:
        y = active.y - gap - affected.height
    else:
        return _stack_below(affected, rects.values(), gap)

    if direction.is_horizontal:
        on_canvas = x >= gap and x + affected.width <= bounds.width - gap
    else:
        on_canvas = y >= gap and y + affected.height <= bounds.height - gap
    if on_canvas:
        return affected.moved_to(x, y)

    if direction is Direction.RIGHT:
        fitting_width = bounds.width - gap - x
        if fitting_width >= min_shrink_width:
            logger.debug(f"Shrinking {affected.id} to width {fitting_width} at x={x}")
            return Rect(affected.id, x, y, fitting_width, affected.height)

    return _fallback(affected, rects, bounds, gap)


def _fallback(
    affected: Rect,
    rects: Dict[str, Rect],
    bounds: CanvasBounds,
    gap: int,
) -> Rect:
    """Top-left anchor if it is free, otherwise below every other block."""
    anchor = affected.moved_to(gap, gap)
    if (
        fits_horizontally(anchor, bounds, gap)
        and fits_vertically(anchor, bounds, gap)
        and not collides_with_any(anchor, rects.values(), gap)
    ):
        logger.debug(f"Moving {affected.id} to the top-left anchor")
        return anchor
    stacked = _stack_below(affected, rects.values(), gap)
    logger.debug(f"No room for {affected.id}; stacking below at y={stacked.y}")
    return stacked


def _stack_below(affected: Rect, rects: Iterable[Rect], gap: int) -> Rect:
    return affected.moved_to(gap, max_occupied_y(rects, exclude=affected.id) + gap)
