"""
Module: layout

Purpose:
    Spatial layout engine for the dashboard canvas.
    Seats new blocks and resolves collisions after moves and resizes.
    Every function is pure: rectangles in, new rectangles out.

Key Functions:
    - find_free_position(): Placement finder for new blocks
    - resolve(): Collision resolver after a change
    - resolve_move() / resolve_resize(): Gesture-specific wrappers
    - overlaps(): Gap-inflated collision predicate

Key Classes:
    - LayoutConfig: Gap and block-size configuration
    - PlacementResult: Position plus possibly grown canvas bounds
    - ResolveResult: Rectangle set plus possibly grown canvas bounds

Dependencies:
    - dashboard_builder.core.models: Rect, Position, Size, CanvasBounds

Used By:
    - dashboard_builder.board.controller
"""

from .config import LayoutConfig
from .models import ChangeKind, Direction, PlacementResult, ResolveResult
from .overlap import find_overlapping_pairs, is_within_bounds, overlaps
from .placement import find_free_position
from .resolver import (
    calculate_new_position,
    determine_direction,
    resolve,
    resolve_move,
    resolve_resize,
    try_swap,
)

__all__ = [
    # Config
    "LayoutConfig",
    # Models
    "ChangeKind",
    "Direction",
    "PlacementResult",
    "ResolveResult",
    # Predicates
    "overlaps",
    "find_overlapping_pairs",
    "is_within_bounds",
    # Functions
    "find_free_position",
    "resolve",
    "resolve_move",
    "resolve_resize",
    "determine_direction",
    "calculate_new_position",
    "try_swap",
]
