"""
Module: layout.models

Purpose:
    Result types and enums for the layout engine.
    Engine calls return new values; nothing the caller passed in is mutated.

Key Classes:
    - Direction: Side a displaced block is pushed towards
    - ChangeKind: Whether a resolve call follows a move or a resize
    - PlacementResult: Output of find_free_position
    - ResolveResult: Output of resolve

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - dashboard_builder.layout.placement
    - dashboard_builder.layout.resolver
    - dashboard_builder.board.controller
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from dashboard_builder.core.models import CanvasBounds, Position, Rect


class Direction(str, Enum):
    """Side of the active rectangle an affected rectangle is pushed to."""

    NONE = "none"
    RIGHT = "right"
    BELOW = "below"
    LEFT = "left"
    ABOVE = "above"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.RIGHT, Direction.LEFT)


class ChangeKind(str, Enum):
    """What the user did to the changed rectangle."""

    MOVE = "move"
    RESIZE = "resize"


@dataclass(frozen=True)
class PlacementResult:
    """
    Where a new rectangle goes (immutable).

    Attributes:
        position: Top-left corner for the new rectangle
        bounds: Canvas bounds after placement (taller if the canvas grew)
    """

    position: Position
    bounds: CanvasBounds


@dataclass(frozen=True)
class ResolveResult:
    """
    Rectangle set after a cascade (immutable).

    Attributes:
        rects: Every rectangle by id, in the caller's original order
        bounds: Canvas bounds after the cascade (taller if the canvas grew)
        displaced: Ids relocated or shrunk by the cascade, in visit order
        residual_overlaps: Pairs still overlapping after the cascade

    Example:
        >>> result = resolve_move(rects, "a", Position(340, 20), bounds, 20)
        >>> result.is_consistent
        True
    """

    rects: Dict[str, Rect]
    bounds: CanvasBounds
    displaced: Tuple[str, ...] = ()
    residual_overlaps: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def is_consistent(self) -> bool:
        """True when no pair of rectangles overlaps."""
        return not self.residual_overlaps
