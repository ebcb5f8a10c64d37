"""
Block canvas widget.

Paints the board's blocks and turns mouse gestures into board operations:

- Dragging a block body previews the snapped, clamped target and commits
  it with ``DashboardBoard.move_block`` on release.
- Dragging a resize handle (bottom-right corner, bottom edge, right edge)
  calls ``DashboardBoard.resize_block`` on every move so neighbours make
  room live.
- The "×" button in the top-right corner removes the block.

The widget height follows the board bounds so a scroll area can show
canvas growth.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, Signal, QRectF, QPointF
from PySide6.QtGui import QPainter, QColor, QPen, QBrush, QPixmap, QFont

from dashboard_builder.board import DashboardBoard, BoardError, drag_target, resize_target
from dashboard_builder.core.models import Block, BlockType, Position, Rect
from dashboard_builder.output.diagram import (
    AXIS_COLOR, BAR_COLOR, LABEL_COLOR, axis_y, bar_layout
)
from dashboard_builder.gui.styles.theme import get_colors

logger = logging.getLogger(__name__)

HANDLE_SIZE = 12
EDGE_GRAB = 6
REMOVE_BUTTON_SIZE = 20
CARD_RADIUS = 8.0
DIAGRAM_PADDING = 16

# Hit-test results
HIT_REMOVE = "remove"
HIT_RESIZE_CORNER = "resize_corner"
HIT_RESIZE_BOTTOM = "resize_bottom"
HIT_RESIZE_RIGHT = "resize_right"
HIT_BODY = "body"

_RESIZE_AXES = {
    HIT_RESIZE_CORNER: (True, True),
    HIT_RESIZE_BOTTOM: (False, True),
    HIT_RESIZE_RIGHT: (True, False),
}


@dataclass
class _Gesture:
    """In-flight drag or resize."""

    block_id: str
    kind: str
    press: QPointF
    origin: Rect
    preview: Optional[Position] = None


def remove_button_rect(rect: Rect) -> QRectF:
    return QRectF(
        rect.right - REMOVE_BUTTON_SIZE - 6, rect.y + 6,
        REMOVE_BUTTON_SIZE, REMOVE_BUTTON_SIZE,
    )


def hit_test(rect: Rect, x: float, y: float) -> Optional[str]:
    """Which part of a block (if any) is under the point."""
    if not (rect.x <= x <= rect.right and rect.y <= y <= rect.bottom):
        return None
    if remove_button_rect(rect).contains(QPointF(x, y)):
        return HIT_REMOVE
    near_right = x >= rect.right - EDGE_GRAB
    near_bottom = y >= rect.bottom - EDGE_GRAB
    if x >= rect.right - HANDLE_SIZE and y >= rect.bottom - HANDLE_SIZE:
        return HIT_RESIZE_CORNER
    if near_bottom:
        return HIT_RESIZE_BOTTOM
    if near_right:
        return HIT_RESIZE_RIGHT
    return HIT_BODY


class BlockCanvas(QWidget):
    """Interactive view of a DashboardBoard."""

    blockMoved = Signal(str)
    blockResized = Signal(str)
    blockRemoved = Signal(str)
    layoutChanged = Signal()

    def __init__(self, board: DashboardBoard, parent=None):
        super().__init__(parent)
        self.board = board
        self.selected_id: Optional[str] = None
        self._gesture: Optional[_Gesture] = None
        self._pixmaps: Dict[str, Optional[QPixmap]] = {}

        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.update_theme()
        self.sync_to_board()

    # ─────────────────────────────────────────────────────────────────────────
    # Board sync
    # ─────────────────────────────────────────────────────────────────────────

    def sync_to_board(self):
        """
        Fit the widget height to the occupied area and repaint.

        The minimum tracks the blocks, not the board bounds, so the canvas
        shrinks back to its viewport once blocks are removed.
        """
        required = self.board.occupied_height()
        self.setMinimumHeight(required)
        viewport = self.parentWidget()
        if viewport is not None:
            height = max(required, viewport.height())
            if self.height() != height:
                self.resize(self.width(), height)
            self.board.set_canvas_size(self.board.bounds.width, height)
        if self.selected_id is not None and self.selected_id not in self.board:
            self.selected_id = None
        self.update()

    def block_at(self, x: float, y: float) -> Optional[Block]:
        # Later blocks paint on top
        for block in reversed(self.board.blocks):
            if hit_test(block.rect, x, y) is not None:
                return block
        return None

    def remove_block(self, block_id: str):
        try:
            self.board.remove_block(block_id)
        except BoardError as e:
            logger.warning(f"Could not remove block: {e}")
            return
        self._pixmaps.pop(block_id, None)
        self.sync_to_board()
        self.blockRemoved.emit(block_id)
        self.layoutChanged.emit()

    def preview_position(self) -> Optional[Position]:
        """Drag preview of the current gesture, if any."""
        return self._gesture.preview if self._gesture else None

    # ─────────────────────────────────────────────────────────────────────────
    # Mouse
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)
        pos = event.position()
        block = self.block_at(pos.x(), pos.y())
        if block is None:
            self.selected_id = None
            self.update()
            return

        part = hit_test(block.rect, pos.x(), pos.y())
        if part == HIT_REMOVE:
            self.remove_block(block.id)
            return

        self.selected_id = block.id
        self._gesture = _Gesture(block_id=block.id, kind=part, press=pos, origin=block.rect)
        self.update()

    def mouseMoveEvent(self, event):
        pos = event.position()
        gesture = self._gesture
        if gesture is None:
            self._update_cursor(pos)
            return

        delta = (pos.x() - gesture.press.x(), pos.y() - gesture.press.y())
        cfg = self.board.config
        if gesture.kind == HIT_BODY:
            gesture.preview = drag_target(
                gesture.origin.position, delta, gesture.origin.size,
                self.board.bounds, cfg.gap,
            )
            self.update()
            return

        horizontal, vertical = _RESIZE_AXES[gesture.kind]
        current = self.board.get_block(gesture.block_id).rect
        target = resize_target(
            gesture.origin.size, delta, current.position, self.board.bounds,
            cfg.gap, cfg.min_size_units, horizontal=horizontal, vertical=vertical,
        )
        if target != current.size:
            self.board.resize_block(gesture.block_id, target.width, target.height)
            self.sync_to_board()
            self.blockResized.emit(gesture.block_id)

    def mouseReleaseEvent(self, event):
        gesture = self._gesture
        self._gesture = None
        if gesture is None or event.button() != Qt.MouseButton.LeftButton:
            return super().mouseReleaseEvent(event)

        if gesture.kind == HIT_BODY:
            preview = gesture.preview
            if preview is not None and preview != gesture.origin.position:
                self.board.move_block(gesture.block_id, preview.x, preview.y)
                self.blockMoved.emit(gesture.block_id)
                self.layoutChanged.emit()
        else:
            self.layoutChanged.emit()
        self.sync_to_board()

    def _update_cursor(self, pos: QPointF):
        block = self.block_at(pos.x(), pos.y())
        part = hit_test(block.rect, pos.x(), pos.y()) if block else None
        cursor = {
            HIT_REMOVE: Qt.CursorShape.PointingHandCursor,
            HIT_RESIZE_CORNER: Qt.CursorShape.SizeFDiagCursor,
            HIT_RESIZE_BOTTOM: Qt.CursorShape.SizeVerCursor,
            HIT_RESIZE_RIGHT: Qt.CursorShape.SizeHorCursor,
            HIT_BODY: Qt.CursorShape.OpenHandCursor,
        }.get(part, Qt.CursorShape.ArrowCursor)
        self.setCursor(cursor)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.board.set_canvas_size(self.width(), self.height())

    # ─────────────────────────────────────────────────────────────────────────
    # Painting
    # ─────────────────────────────────────────────────────────────────────────

    def update_theme(self):
        self._colors = get_colors()
        self.update()

    def paintEvent(self, event):
        C = self._colors
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(C.CANVAS))
        self._paint_grid(painter)

        for block in self.board.blocks:
            self._paint_block(painter, block)

        preview = self.preview_position()
        if preview is not None:
            size = self._gesture.origin.size
            pen = QPen(QColor(C.PRIMARY), 2, Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRoundedRect(
                QRectF(preview.x, preview.y, size.width, size.height), CARD_RADIUS, CARD_RADIUS
            )
        painter.end()

    def _paint_grid(self, painter: QPainter):
        gap = self.board.config.gap
        painter.setPen(QPen(QColor(self._colors.GRID), 1))
        for x in range(gap, self.width(), gap):
            for y in range(gap, self.height(), gap):
                painter.drawPoint(x, y)

    def _paint_block(self, painter: QPainter, block: Block):
        C = self._colors
        rect = block.rect
        area = QRectF(rect.x, rect.y, rect.width, rect.height)
        selected = block.id == self.selected_id

        painter.setPen(QPen(QColor(C.PRIMARY if selected else C.BORDER), 2 if selected else 1))
        painter.setBrush(QBrush(QColor(C.SURFACE)))
        painter.drawRoundedRect(area, CARD_RADIUS, CARD_RADIUS)

        if block.block_type is BlockType.DIAGRAM:
            self._paint_diagram(painter, rect)
        else:
            self._paint_image(painter, block)

        # Remove button
        button = remove_button_rect(rect)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(C.ERROR)))
        painter.drawEllipse(button)
        painter.setPen(QPen(QColor(C.TEXT_ON_PRIMARY), 2))
        inset = button.adjusted(6, 6, -6, -6)
        painter.drawLine(inset.topLeft(), inset.bottomRight())
        painter.drawLine(inset.topRight(), inset.bottomLeft())

        # Resize handles
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(C.HANDLE)))
        painter.drawRect(QRectF(rect.right - HANDLE_SIZE, rect.bottom - HANDLE_SIZE, HANDLE_SIZE, HANDLE_SIZE))
        if selected:
            painter.drawRect(QRectF(rect.x + rect.width / 2 - 10, rect.bottom - 3, 20, 3))
            painter.drawRect(QRectF(rect.right - 3, rect.y + rect.height / 2 - 10, 3, 20))

    def _paint_image(self, painter: QPainter, block: Block):
        C = self._colors
        rect = block.rect
        inner = QRectF(rect.x + 1, rect.y + 1, rect.width - 2, rect.height - 2)
        pixmap = self._pixmap_for(block)
        if pixmap is not None:
            scaled = pixmap.scaled(
                int(inner.width()), int(inner.height()),
                Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                Qt.TransformationMode.SmoothTransformation,
            )
            sx = (scaled.width() - inner.width()) / 2
            sy = (scaled.height() - inner.height()) / 2
            painter.drawPixmap(inner, scaled, QRectF(sx, sy, inner.width(), inner.height()))
            return

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(C.PLACEHOLDER)))
        painter.drawRoundedRect(inner, CARD_RADIUS, CARD_RADIUS)
        painter.setPen(QColor(C.PLACEHOLDER_TEXT))
        label = "Image Placeholder" if block.is_placeholder else "Image"
        painter.drawText(inner, Qt.AlignmentFlag.AlignCenter, label)

    def _paint_diagram(self, painter: QPainter, rect: Rect):
        left = rect.x + DIAGRAM_PADDING
        top = rect.y + DIAGRAM_PADDING
        width = rect.width - 2 * DIAGRAM_PADDING
        height = rect.height - 2 * DIAGRAM_PADDING
        bars = bar_layout(width, height)
        if not bars:
            return

        font = QFont(self.font())
        font.setPointSize(8)
        painter.setFont(font)

        painter.setPen(QPen(QColor(AXIS_COLOR), 1))
        base = top + axis_y(height)
        painter.drawLine(QPointF(left, base), QPointF(left + width, base))

        for bar in bars:
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(QColor(BAR_COLOR)))
            painter.drawRect(QRectF(left + bar.x, top + bar.y, bar.width, bar.height))
            painter.setPen(QColor(LABEL_COLOR))
            label_box = QRectF(left + bar.center_x - 20, base + 2, 40, 14)
            painter.drawText(label_box, Qt.AlignmentFlag.AlignCenter, bar.label)
            value_box = QRectF(left + bar.center_x - 20, top + bar.y - 16, 40, 14)
            painter.drawText(value_box, Qt.AlignmentFlag.AlignCenter, str(bar.value))

    def _pixmap_for(self, block: Block) -> Optional[QPixmap]:
        """Local images are loaded once; URLs and bad paths stay placeholders."""
        if block.id in self._pixmaps:
            return self._pixmaps[block.id]
        pixmap = None
        content = block.content.strip()
        if content and "://" not in content and Path(content).is_file():
            loaded = QPixmap(content)
            if loaded.isNull():
                logger.warning(f"Could not load image for block {block.id}: {content}")
            else:
                pixmap = loaded
        self._pixmaps[block.id] = pixmap
        return pixmap

