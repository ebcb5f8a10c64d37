"""
Unit Tests for DashboardBoard

Tests for adding, removing, moving and resizing blocks through the board.
"""

import logging

import pytest

from dashboard_builder.board import BlockNotFoundError, BoardError, DashboardBoard
from dashboard_builder.core.models import BlockType, CanvasBounds, Position, Size
from dashboard_builder.layout import LayoutConfig, find_overlapping_pairs


@pytest.fixture
def board():
    return DashboardBoard(LayoutConfig(), CanvasBounds(800, 600))


class TestAddRemove:
    """Tests for block insertion and removal."""

    def test_add_when_empty_then_top_left(self, board):
        block = board.add_block(BlockType.IMAGE)
        assert block.rect.position == Position(20, 20)
        assert block.rect.size == Size(300, 200)
        assert len(board) == 1

    def test_add_when_canvas_too_short_then_board_bounds_grow(self):
        board = DashboardBoard(LayoutConfig(), CanvasBounds(800, 150))
        block = board.add_block(BlockType.IMAGE)
        assert block.rect.bottom == 220
        assert board.bounds == CanvasBounds(800, 240)

    def test_add_when_row_has_room_then_next_to_previous(self, board):
        board.add_block(BlockType.IMAGE)
        second = board.add_block(BlockType.DIAGRAM)
        assert second.rect.position == Position(340, 20)

    def test_add_when_many_then_no_overlaps(self, board):
        for _ in range(8):
            board.add_block(BlockType.IMAGE)
        assert find_overlapping_pairs(board.rects(), board.config.gap) == []
        assert board.bounds.width == 800
        assert board.bounds.height >= max(b.rect.bottom for b in board.blocks) + 20

    def test_add_when_explicit_id_then_used(self, board):
        block = board.add_block(BlockType.IMAGE, "cat.png", block_id="hero")
        assert block.id == "hero"
        assert board.get_block("hero").content == "cat.png"

    def test_add_when_duplicate_id_then_raises_error(self, board):
        board.add_block(BlockType.IMAGE, block_id="x")
        with pytest.raises(BoardError, match="already in use"):
            board.add_block(BlockType.IMAGE, block_id="x")

    def test_add_when_string_type_then_coerced(self, board):
        block = board.add_block("diagram")
        assert block.block_type is BlockType.DIAGRAM

    def test_add_when_custom_size_then_used(self, board):
        block = board.add_block(BlockType.IMAGE, size=Size(120, 100))
        assert block.rect.size == Size(120, 100)

    def test_remove_when_present_then_gone_and_others_untouched(self, board):
        a = board.add_block(BlockType.IMAGE)
        b = board.add_block(BlockType.IMAGE)
        board.remove_block(a.id)
        assert a.id not in board
        assert board.get_block(b.id).rect == b.rect

    def test_remove_when_missing_then_raises_not_found(self, board):
        with pytest.raises(BlockNotFoundError) as excinfo:
            board.remove_block("nope")
        assert excinfo.value.block_id == "nope"
        assert "nope" in str(excinfo.value)

    def test_not_found_is_key_error(self, board):
        with pytest.raises(KeyError):
            board.get_block("nope")

    def test_clear_when_called_then_empty(self, board):
        board.add_block(BlockType.IMAGE)
        board.clear()
        assert len(board) == 0
        assert board.blocks == []


class TestMoveResize:
    """Tests for move/resize driving the resolver."""

    def test_move_when_onto_neighbour_then_neighbour_swaps(self, board):
        a = board.add_block(BlockType.IMAGE, block_id="a")
        b = board.add_block(BlockType.IMAGE, block_id="b")
        result = board.move_block(a.id, 340, 20)
        assert board.get_block("a").rect.position == Position(340, 20)
        assert board.get_block("b").rect.position == Position(20, 20)
        assert result.displaced == (b.id,)

    def test_move_when_off_canvas_then_clamped(self, board):
        board.add_block(BlockType.IMAGE, block_id="a")
        board.move_block("a", 1000, 1000)
        assert board.get_block("a").rect.position == Position(480, 380)

    def test_move_when_missing_then_raises_not_found(self, board):
        with pytest.raises(BlockNotFoundError):
            board.move_block("ghost", 0, 0)

    def test_move_keeps_insertion_order(self, board):
        board.add_block(BlockType.IMAGE, block_id="a")
        board.add_block(BlockType.IMAGE, block_id="b")
        board.move_block("a", 340, 20)
        assert [blk.id for blk in board.blocks] == ["a", "b"]

    def test_resize_when_below_minimum_then_clamped(self, board):
        board.add_block(BlockType.IMAGE, block_id="a")
        board.resize_block("a", 10, 10)
        assert board.get_block("a").rect.size == Size(100, 100)

    def test_resize_when_growing_into_neighbour_then_neighbour_pushed(self):
        board = DashboardBoard(LayoutConfig(), CanvasBounds(1200, 800))
        board.add_block(BlockType.IMAGE, block_id="a")
        board.add_block(BlockType.IMAGE, block_id="b")
        board.resize_block("a", 400, 200)
        assert board.get_block("a").rect.size == Size(400, 200)
        assert board.get_block("b").rect.position == Position(440, 20)
        assert find_overlapping_pairs(board.rects(), 20) == []

    def test_resize_keeps_content(self, board):
        board.add_block(BlockType.IMAGE, "cat.png", block_id="a")
        board.resize_block("a", 200, 200)
        assert board.get_block("a").content == "cat.png"


class TestCanvasSize:
    """Tests for set_canvas_size."""

    def test_set_canvas_size_when_larger_then_adopted(self, board):
        board.set_canvas_size(1000, 900)
        assert board.bounds == CanvasBounds(1000, 900)

    def test_set_canvas_size_when_shorter_than_blocks_then_height_kept_for_blocks(self, board):
        board.add_block(BlockType.IMAGE, block_id="a")
        board.move_block("a", 20, 380)
        board.set_canvas_size(800, 100)
        assert board.bounds == CanvasBounds(800, 600)

    def test_add_when_canvas_grows_then_logs_growth(self, caplog):
        board = DashboardBoard(LayoutConfig(), CanvasBounds(400, 500))
        board.add_block(BlockType.IMAGE)
        board.add_block(BlockType.IMAGE)
        with caplog.at_level(logging.INFO, logger="dashboard_builder"):
            third = board.add_block(BlockType.IMAGE)
        assert third.rect.position == Position(20, 460)
        assert board.bounds.height == 680
        assert "grew" in caplog.text
