"""
Module: layout.config

Purpose:
    Configuration for the layout engine and the board that drives it.
    Defines the gap/grid quantum, default block size and the size floors
    used by the resize clamp and the shrink fallback.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - dashboard_builder.board.controller: Block defaults and clamping
    - dashboard_builder.gui: Canvas setup
"""

from __future__ import annotations

from dataclasses import dataclass

from dashboard_builder.core.models import Size


DEFAULT_GAP = 20
DEFAULT_BLOCK_WIDTH = 300
DEFAULT_BLOCK_HEIGHT = 200
# Narrowest width a block may be shrunk to instead of being relocated
MIN_SHRINK_WIDTH = 100


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for board layout (immutable).

    Attributes:
        gap: Clearance between blocks and to the canvas edge, also the
            grid quantum positions and sizes snap to
        default_block_width: Width of newly added blocks
        default_block_height: Height of newly added blocks
        min_shrink_width: Smallest width the resolver may shrink a block to
        min_size_units: Minimum block side while resizing, in grid units

    Example:
        >>> config = LayoutConfig()
        >>> config.min_block_size
        100
    """

    gap: int = DEFAULT_GAP
    default_block_width: int = DEFAULT_BLOCK_WIDTH
    default_block_height: int = DEFAULT_BLOCK_HEIGHT
    min_shrink_width: int = MIN_SHRINK_WIDTH
    min_size_units: int = 5

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.gap <= 0:
            raise ValueError(f"gap must be positive: {self.gap}")
        if self.default_block_width <= 0 or self.default_block_height <= 0:
            raise ValueError(
                f"default block size must be positive: "
                f"{self.default_block_width}x{self.default_block_height}"
            )
        if self.min_shrink_width <= 0:
            raise ValueError(f"min_shrink_width must be positive: {self.min_shrink_width}")
        if self.min_size_units < 1:
            raise ValueError(f"min_size_units must be >= 1: {self.min_size_units}")

    @property
    def min_block_size(self) -> int:
        """Smallest width/height a resize gesture may produce (px)."""
        return self.gap * self.min_size_units

    @property
    def default_block_size(self) -> Size:
        return Size(self.default_block_width, self.default_block_height)
