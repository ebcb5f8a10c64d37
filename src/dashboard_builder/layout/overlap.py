"""
Module: layout.overlap

Purpose:
    Geometry predicates shared by the placement finder and the collision
    resolver. All tests are gap-inflated: two rectangles closer than the
    gap on both axes count as colliding even when they do not intersect.

Key Functions:
    - overlaps(): Buffer-zone collision test between two rectangles
    - overlapping_ids(): Ids of rectangles colliding with a probe
    - find_overlapping_pairs(): Every colliding pair in a set
    - is_within_bounds(): Edge-margin test against the canvas
    - max_occupied_y(): Lowest bottom edge in a set
    - clamp_rect(): Pull a rectangle inside the canvas margins

Dependencies:
    - dashboard_builder.core.models: Rect, CanvasBounds

Used By:
    - dashboard_builder.layout.placement
    - dashboard_builder.layout.resolver
"""

from __future__ import annotations

from typing import Collection, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from dashboard_builder.core.models import CanvasBounds, Rect

RectSet = Union[Mapping[str, Rect], Iterable[Rect]]


def as_rect_map(rects: RectSet) -> Dict[str, Rect]:
    """Copy a mapping or iterable of rectangles into a new id -> Rect dict."""
    if isinstance(rects, Mapping):
        return dict(rects)
    return {r.id: r for r in rects}


def overlaps(a: Rect, b: Rect, gap: int) -> bool:
    """
    Check whether two gap-inflated rectangles intersect on both axes.

    Args:
        a: First rectangle
        b: Second rectangle
        gap: Required clearance

    Returns:
        True if a and b are closer than ``gap`` horizontally AND vertically

    Example:
        >>> overlaps(Rect("a", 20, 20, 300, 200), Rect("b", 340, 20, 300, 200), 20)
        False
        >>> overlaps(Rect("a", 20, 20, 300, 200), Rect("b", 330, 20, 300, 200), 20)
        True
    """
    return (
        a.x < b.x + b.width + gap
        and a.x + a.width + gap > b.x
        and a.y < b.y + b.height + gap
        and a.y + a.height + gap > b.y
    )


def overlapping_ids(
    probe: Rect,
    rects: Iterable[Rect],
    gap: int,
    exclude: Collection[str] = (),
) -> List[str]:
    """Ids of rectangles in ``rects`` that collide with ``probe``, in order."""
    return [
        r.id
        for r in rects
        if r.id != probe.id and r.id not in exclude and overlaps(probe, r, gap)
    ]


def collides_with_any(
    probe: Rect,
    rects: Iterable[Rect],
    gap: int,
    exclude: Collection[str] = (),
) -> bool:
    return any(
        r.id != probe.id and r.id not in exclude and overlaps(probe, r, gap)
        for r in rects
    )


def find_overlapping_pairs(rects: RectSet, gap: int) -> List[Tuple[str, str]]:
    """
    Find every pair of rectangles violating the clearance rule.

    Args:
        rects: Rectangle set to check
        gap: Required clearance

    Returns:
        List of (id_a, id_b) pairs, a before b in set order. Empty for a
        consistent layout.
    """
    items = list(as_rect_map(rects).values())
    pairs: List[Tuple[str, str]] = []
    for i, a in enumerate(items):
        for b in items[i + 1:]:
            if overlaps(a, b, gap):
                pairs.append((a.id, b.id))
    return pairs


def is_within_bounds(rect: Rect, bounds: CanvasBounds, gap: int) -> bool:
    """True if ``rect`` keeps at least ``gap`` from every canvas edge."""
    return (
        rect.x >= gap
        and rect.y >= gap
        and rect.right <= bounds.width - gap
        and rect.bottom <= bounds.height - gap
    )


def fits_horizontally(rect: Rect, bounds: CanvasBounds, gap: int) -> bool:
    return rect.x >= gap and rect.right <= bounds.width - gap


def fits_vertically(rect: Rect, bounds: CanvasBounds, gap: int) -> bool:
    return rect.y >= gap and rect.bottom <= bounds.height - gap


def max_occupied_y(rects: Iterable[Rect], exclude: Optional[str] = None) -> int:
    """
    Lowest bottom edge among ``rects`` (0 for an empty set).

    Args:
        rects: Rectangles to scan
        exclude: Id to leave out (typically the rectangle being moved)
    """
    return max((r.bottom for r in rects if r.id != exclude), default=0)


def clamp_rect(rect: Rect, bounds: CanvasBounds, gap: int) -> Tuple[Rect, CanvasBounds]:
    """
    Pull a rectangle inside the canvas margins.

    x is clamped into [gap, width - rect.width - gap] and y to at least
    gap. A bottom edge past the canvas grows the canvas instead of moving
    the rectangle up.

    Returns:
        (clamped rectangle, possibly grown bounds)
    """
    max_x = max(gap, bounds.width - rect.width - gap)
    x = max(gap, min(rect.x, max_x))
    y = max(gap, rect.y)
    clamped = rect if (x, y) == (rect.x, rect.y) else rect.moved_to(x, y)
    return clamped, bounds.grown_to_fit(clamped.bottom, gap)
