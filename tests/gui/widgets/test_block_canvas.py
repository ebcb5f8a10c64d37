"""Unit tests for BlockCanvas gestures and painting."""

import pytest
from PySide6.QtCore import Qt, QEvent, QPointF
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QWidget

from dashboard_builder.board import DashboardBoard
from dashboard_builder.core.models import BlockType, CanvasBounds, Position, Rect, Size
from dashboard_builder.gui.widgets.block_canvas import (
    BlockCanvas,
    HIT_BODY,
    HIT_REMOVE,
    HIT_RESIZE_BOTTOM,
    HIT_RESIZE_CORNER,
    HIT_RESIZE_RIGHT,
    hit_test,
)
from dashboard_builder.layout import LayoutConfig


def _mouse(kind, x, y, button=Qt.MouseButton.LeftButton):
    pos = QPointF(x, y)
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseButtonRelease else button
    return QMouseEvent(kind, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


def _press(canvas, x, y):
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, x, y))


def _move(canvas, x, y):
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, x, y))


def _release(canvas, x, y):
    canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, x, y))


@pytest.fixture
def board():
    board = DashboardBoard(LayoutConfig(), CanvasBounds(800, 600))
    board.add_block(BlockType.IMAGE, block_id="a")
    board.add_block(BlockType.DIAGRAM, block_id="b")
    return board


@pytest.fixture
def canvas(qtbot, board):
    widget = BlockCanvas(board)
    qtbot.addWidget(widget)
    return widget


class TestHitTest:
    """Tests for the block hit-test zones."""

    RECT = Rect("a", 20, 20, 300, 200)

    @pytest.mark.parametrize("x, y, expected", [
        (100, 100, HIT_BODY),
        (304, 36, HIT_REMOVE),
        (315, 215, HIT_RESIZE_CORNER),
        (150, 217, HIT_RESIZE_BOTTOM),
        (317, 120, HIT_RESIZE_RIGHT),
        (10, 10, None),
        (400, 100, None),
    ])
    def test_hit_test_zones(self, x, y, expected):
        assert hit_test(self.RECT, x, y) == expected


class TestDrag:
    """Drag previews locally and commits on release."""

    def test_drag_when_moving_then_board_unchanged_until_release(self, canvas, board):
        _press(canvas, 100, 100)
        _move(canvas, 420, 100)

        assert canvas.preview_position() == Position(340, 20)
        assert board.get_block("a").rect.position == Position(20, 20)

    def test_drag_when_released_then_board_resolves_and_signals(self, canvas, board):
        moved = []
        changed = []
        canvas.blockMoved.connect(moved.append)
        canvas.layoutChanged.connect(lambda: changed.append(True))

        _press(canvas, 100, 100)
        _move(canvas, 420, 100)
        _release(canvas, 420, 100)

        assert board.get_block("a").rect.position == Position(340, 20)
        assert board.get_block("b").rect.position == Position(20, 20)
        assert moved == ["a"]
        assert changed == [True]
        assert canvas.preview_position() is None

    def test_drag_when_released_in_place_then_no_move(self, canvas, board):
        moved = []
        canvas.blockMoved.connect(moved.append)

        _press(canvas, 100, 100)
        _move(canvas, 105, 104)
        _release(canvas, 105, 104)

        assert moved == []
        assert board.get_block("a").rect.position == Position(20, 20)

    def test_press_selects_block(self, canvas):
        _press(canvas, 100, 100)
        assert canvas.selected_id == "a"

    def test_press_on_empty_space_clears_selection(self, canvas):
        _press(canvas, 100, 100)
        _release(canvas, 100, 100)
        _press(canvas, 700, 500)
        assert canvas.selected_id is None


class TestResize:
    """Resize resolves live on every move."""

    def test_resize_when_dragging_corner_then_neighbour_pushed_live(self, canvas, board):
        resized = []
        canvas.blockResized.connect(resized.append)

        _press(canvas, 315, 215)
        _move(canvas, 375, 215)

        assert board.get_block("a").rect.size == Size(360, 200)
        assert board.get_block("b").rect.position == Position(400, 20)
        assert resized == ["a"]

        _release(canvas, 375, 215)
        assert board.get_block("a").rect.size == Size(360, 200)

    def test_resize_when_bottom_edge_then_width_kept(self, canvas, board):
        _press(canvas, 150, 217)
        _move(canvas, 150, 277)
        _release(canvas, 150, 277)

        assert board.get_block("a").rect.size == Size(300, 260)

    def test_resize_when_below_minimum_then_clamped(self, canvas, board):
        _press(canvas, 315, 215)
        _move(canvas, 0, 0)
        _release(canvas, 0, 0)

        assert board.get_block("a").rect.size == Size(100, 100)


class TestRemoveAndSync:

    def test_remove_button_when_clicked_then_block_removed(self, canvas, board):
        removed = []
        canvas.blockRemoved.connect(removed.append)

        _press(canvas, 304, 36)

        assert "a" not in board
        assert removed == ["a"]

    def test_sync_when_board_grows_then_minimum_height_follows(self, canvas, board):
        for _ in range(3):
            board.add_block(BlockType.IMAGE)
        canvas.sync_to_board()
        assert board.bounds.height == 680
        assert canvas.minimumHeight() == 680

    def test_sync_when_blocks_removed_then_canvas_shrinks_to_viewport(self, qtbot):
        viewport = QWidget()
        viewport.resize(800, 600)
        qtbot.addWidget(viewport)
        board = DashboardBoard(LayoutConfig(), CanvasBounds(800, 600))
        canvas = BlockCanvas(board, viewport)
        ids = [board.add_block(BlockType.IMAGE).id for _ in range(5)]
        canvas.sync_to_board()
        assert board.bounds.height == 680
        assert canvas.height() == 680

        for block_id in ids[2:]:
            canvas.remove_block(block_id)

        assert board.bounds == CanvasBounds(800, 600)
        assert canvas.height() == 600
        assert canvas.minimumHeight() == 240

    def test_paint_when_blocks_present_then_renders(self, canvas, board, sample_image):
        board.add_block(BlockType.IMAGE, str(sample_image), block_id="pic")
        canvas.resize(800, 900)
        _press(canvas, 100, 100)
        _move(canvas, 200, 150)
        pixmap = canvas.grab()
        assert not pixmap.isNull()
