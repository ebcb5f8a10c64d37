"""
Module: blocks

Purpose:
    Board entries. A Block pairs a content description (image or diagram)
    with the Rect the layout engine positions.

Key Classes:
    - BlockType: Kind of content a block shows
    - Block: Content plus geometry

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - dashboard_builder.board.controller
    - dashboard_builder.output.snapshot
    - dashboard_builder.gui.widgets.block_canvas
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .geometry import Rect


class BlockType(str, Enum):
    """Kind of content shown inside a block."""

    IMAGE = "image"
    DIAGRAM = "diagram"


@dataclass(frozen=True)
class Block:
    """
    Board entry (immutable).

    Attributes:
        id: Stable identifier, same as rect.id
        block_type: IMAGE or DIAGRAM
        content: Image URL or file path (empty string = placeholder).
            Unused for diagrams.
        rect: Current geometry
    """

    id: str
    block_type: BlockType
    content: str
    rect: Rect

    def __post_init__(self) -> None:
        if self.rect.id != self.id:
            raise ValueError(f"rect id {self.rect.id!r} does not match block id {self.id!r}")

    def with_rect(self, rect: Rect) -> Block:
        """Return a copy carrying new geometry."""
        return replace(self, rect=rect)

    @property
    def is_placeholder(self) -> bool:
        """True for image blocks with no content set."""
        return self.block_type is BlockType.IMAGE and not self.content.strip()
