"""
Module: geometry

Purpose:
    Value types for block geometry. A Rect is the only entity the layout
    engine manipulates; Position, Size and CanvasBounds are the small
    tuples it reads and returns.

Key Classes:
    - Position: Top-left coordinate (x, y)
    - Size: Extent (width, height)
    - Rect: Identified axis-aligned rectangle
    - CanvasBounds: Size of the container the rectangles live in

Dependencies:
    - dataclasses (std)

Used By:
    - dashboard_builder.layout: Placement and collision resolution
    - dashboard_builder.board: Canonical block collection
    - dashboard_builder.output: Snapshot rendering
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Position:
    """Top-left coordinate of a rectangle in canvas pixels."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Size:
    """
    Width and height of a rectangle in canvas pixels.

    Example:
        >>> Size(300, 200).width
        300
    """

    width: int
    height: int


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Identified axis-aligned rectangle (immutable).

    The region is [x, x + width) x [y, y + height). Relocation produces a
    new Rect carrying the same id.

    Attributes:
        id: Opaque stable identifier, unique within the active set
        x: Left edge
        y: Top edge
        width: Horizontal extent (> 0)
        height: Vertical extent (> 0)

    Invariants:
        - x >= 0, y >= 0
        - width > 0, height > 0

    Example:
        >>> r = Rect("a", 20, 20, 300, 200)
        >>> r.right, r.bottom
        (320, 220)
        >>> r.moved_to(340, 20).x
        340
    """

    id: str
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be > 0: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be > 0: {self.height}")
        if self.x < 0:
            raise ValueError(f"x must be >= 0: {self.x}")
        if self.y < 0:
            raise ValueError(f"y must be >= 0: {self.y}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    # ─────────────────────────────────────────────────────────────────────────
    # Copies
    # ─────────────────────────────────────────────────────────────────────────

    def moved_to(self, x: int, y: int) -> Rect:
        """Return a copy at a new top-left position."""
        return replace(self, x=x, y=y)

    def resized_to(self, width: int, height: int) -> Rect:
        """Return a copy with a new size, keeping the top-left corner."""
        return replace(self, width=width, height=height)

    @classmethod
    def from_parts(cls, rect_id: str, position: Position, size: Size) -> Rect:
        return cls(rect_id, position.x, position.y, size.width, size.height)


@dataclass(frozen=True, slots=True)
class CanvasBounds:
    """
    Size of the container area all rectangles must fit in.

    Not itself a rectangle. The layout engine may return a copy with a
    larger height when space runs out; the width never changes.
    """

    width: int
    height: int

    def with_height(self, height: int) -> CanvasBounds:
        """Return a copy with a different height."""
        return CanvasBounds(self.width, height)

    def grown_to_fit(self, bottom: int, gap: int) -> CanvasBounds:
        """
        Return bounds tall enough for an edge at ``bottom`` plus the margin.

        Returns self unchanged when the edge already fits.
        """
        needed = bottom + gap
        if needed <= self.height:
            return self
        return self.with_height(needed)
