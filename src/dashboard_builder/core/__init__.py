"""
Dashboard Builder Core Package

Shared data models used by every other subpackage.
"""

from .models import Position, Size, Rect, CanvasBounds, BlockType, Block

__all__ = [
    "Position",
    "Size",
    "Rect",
    "CanvasBounds",
    "BlockType",
    "Block",
]
