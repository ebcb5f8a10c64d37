"""
Module: board

Purpose:
    Caller side of the layout engine: the canonical block collection and
    the pointer-to-geometry helpers that feed it.

Key Classes:
    - DashboardBoard: Owns blocks and canvas bounds
    - BoardError / BlockNotFoundError: Board failures

Key Functions:
    - snap_to_grid(), clamp_position(), clamp_size()
    - drag_target(), resize_target()
"""

from .controller import BlockNotFoundError, BoardError, DashboardBoard
from .gestures import (
    clamp_position,
    clamp_size,
    drag_target,
    resize_target,
    snap_to_grid,
)

__all__ = [
    "DashboardBoard",
    "BoardError",
    "BlockNotFoundError",
    "snap_to_grid",
    "clamp_position",
    "clamp_size",
    "drag_target",
    "resize_target",
]
