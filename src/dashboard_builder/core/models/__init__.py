"""
Core Models Package

Immutable, validated data models shared by the layout engine, the board
controller and the GUI. All models are frozen dataclasses; any change
produces a new instance.
"""

from .geometry import Position, Size, Rect, CanvasBounds
from .blocks import BlockType, Block

__all__ = [
    "Position",
    "Size",
    "Rect",
    "CanvasBounds",
    "BlockType",
    "Block",
]
