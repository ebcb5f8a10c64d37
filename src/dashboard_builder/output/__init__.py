"""
Module: output

Purpose:
    Board rendering outside the GUI: PNG snapshots and the diagram
    geometry shared with the Qt painter.
"""

from .diagram import DIAGRAM_SERIES, Bar, bar_layout
from .snapshot import SnapshotError, render_board, save_snapshot

__all__ = [
    "DIAGRAM_SERIES",
    "Bar",
    "bar_layout",
    "SnapshotError",
    "render_board",
    "save_snapshot",
]
