"""
Module: board.controller

Purpose:
    Own the canonical block collection and drive the layout engine.
    Add → place; move/resize → clamp → resolve → adopt.

Key Classes:
    - DashboardBoard: Canonical blocks plus canvas bounds
    - BoardError: Base exception for board operations
    - BlockNotFoundError: Unknown block id

Dependencies:
    - dashboard_builder.layout: Placement finder and collision resolver
    - board.gestures: Position/size clamping

Used By:
    - dashboard_builder.gui.widgets.block_canvas
    - dashboard_builder.gui.main_window
"""

from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional

from dashboard_builder.core.models import (
    Block,
    BlockType,
    CanvasBounds,
    Position,
    Rect,
    Size,
)
from dashboard_builder.layout import (
    LayoutConfig,
    ResolveResult,
    find_free_position,
    resolve_move,
    resolve_resize,
)

from .gestures import clamp_position, clamp_size

logger = logging.getLogger(__name__)


class BoardError(Exception):
    """Error during a board operation."""
    pass


class BlockNotFoundError(BoardError, KeyError):
    """Raised when an operation names a block that is not on the board."""

    def __init__(self, block_id: str):
        super().__init__(f"No block with id {block_id!r}")
        self.block_id = block_id

    def __str__(self) -> str:
        return self.args[0]


class DashboardBoard:
    """
    Canonical block collection for one canvas.

    The board is the only owner of block state. Every layout call receives
    a snapshot of the current rectangles and the board adopts the returned
    set wholesale, never merging.

    Attributes:
        config: Layout configuration (gap, default sizes)
        bounds: Current canvas bounds (height may grow during layout)

    Example:
        >>> board = DashboardBoard(LayoutConfig(), CanvasBounds(800, 600))
        >>> a = board.add_block(BlockType.IMAGE)
        >>> a.rect.position
        Position(x=20, y=20)
        >>> b = board.add_block(BlockType.DIAGRAM)
        >>> b.rect.position
        Position(x=340, y=20)
    """

    def __init__(self, config: Optional[LayoutConfig] = None, bounds: Optional[CanvasBounds] = None):
        self.config = config or LayoutConfig()
        self.bounds = bounds or CanvasBounds(1200, 800)
        self._blocks: Dict[str, Block] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def blocks(self) -> List[Block]:
        """Blocks in insertion order."""
        return list(self._blocks.values())

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def get_block(self, block_id: str) -> Block:
        try:
            return self._blocks[block_id]
        except KeyError:
            raise BlockNotFoundError(block_id) from None

    def rects(self) -> Dict[str, Rect]:
        """Current geometry of every block by id."""
        return {block_id: block.rect for block_id, block in self._blocks.items()}

    def occupied_height(self) -> int:
        """Lowest block edge plus the bottom margin (just the margin when empty)."""
        return max((b.rect.bottom for b in self._blocks.values()), default=0) + self.config.gap

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def add_block(
        self,
        block_type: BlockType,
        content: str = "",
        size: Optional[Size] = None,
        block_id: Optional[str] = None,
    ) -> Block:
        """
        Seat a new block at the first free position and add it.

        Args:
            block_type: IMAGE or DIAGRAM
            content: Image URL/path (ignored for diagrams)
            size: Block size (defaults to config.default_block_size)
            block_id: Explicit id; generated when omitted

        Returns:
            The inserted Block

        Raises:
            BoardError: If block_id is already on the board
        """
        size = size or self.config.default_block_size
        block_id = block_id or uuid.uuid4().hex[:12]
        if block_id in self._blocks:
            raise BoardError(f"Block id already in use: {block_id!r}")

        placement = find_free_position(self.rects(), size, self.bounds, self.config.gap)
        self._adopt_bounds(placement.bounds)

        rect = Rect.from_parts(block_id, placement.position, size)
        block = Block(id=block_id, block_type=BlockType(block_type), content=content, rect=rect)
        self._blocks[block_id] = block

        logger.info(
            f"Added {block.block_type.value} block {block_id} at "
            f"({rect.x}, {rect.y}) size {rect.width}x{rect.height}"
        )
        return block

    def remove_block(self, block_id: str) -> Block:
        """Remove a block; the engine is not involved."""
        block = self.get_block(block_id)
        del self._blocks[block_id]
        logger.info(f"Removed block {block_id}")
        return block

    def clear(self) -> None:
        self._blocks.clear()
        logger.info("Cleared board")

    def move_block(self, block_id: str, x: int, y: int) -> ResolveResult:
        """
        Move a block and cascade any displacement.

        The target is clamped to the canvas margins before resolving.

        Returns:
            The ResolveResult the board adopted
        """
        block = self.get_block(block_id)
        gap = self.config.gap
        target = clamp_position(Position(x, y), block.rect.size, self.bounds, gap)
        result = resolve_move(
            self.rects(), block_id, target, self.bounds, gap,
            min_shrink_width=self.config.min_shrink_width,
        )
        self._adopt(result)
        logger.info(
            f"Moved block {block_id} to ({target.x}, {target.y}); "
            f"displaced {len(result.displaced)} block(s)"
        )
        return result

    def resize_block(self, block_id: str, width: int, height: int) -> ResolveResult:
        """
        Resize a block (top-left fixed) and cascade any displacement.

        The size is clamped between config.min_block_size and the canvas edge.

        Returns:
            The ResolveResult the board adopted
        """
        block = self.get_block(block_id)
        gap = self.config.gap
        target = clamp_size(
            Size(width, height), block.rect.position, self.bounds, gap,
            self.config.min_size_units,
        )
        result = resolve_resize(
            self.rects(), block_id, target, self.bounds, gap,
            min_shrink_width=self.config.min_shrink_width,
        )
        self._adopt(result)
        logger.debug(
            f"Resized block {block_id} to {target.width}x{target.height}; "
            f"displaced {len(result.displaced)} block(s)"
        )
        return result

    def set_canvas_size(self, width: int, height: int) -> None:
        """
        Update the bounds reported by the container.

        The height never drops below what the blocks occupy.
        """
        height = max(height, self.occupied_height())
        new_bounds = CanvasBounds(width, height)
        if new_bounds != self.bounds:
            logger.debug(f"Canvas bounds {self.bounds.width}x{self.bounds.height} -> {width}x{height}")
            self.bounds = new_bounds

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _adopt(self, result: ResolveResult) -> None:
        """Replace every block's geometry with the resolver's output."""
        self._blocks = {
            block_id: block.with_rect(result.rects[block_id])
            for block_id, block in self._blocks.items()
        }
        self._adopt_bounds(result.bounds)

    def _adopt_bounds(self, bounds: CanvasBounds) -> None:
        if bounds.height > self.bounds.height:
            logger.info(f"Canvas height grew {self.bounds.height} -> {bounds.height}")
        self.bounds = bounds
