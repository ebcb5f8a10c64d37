"""
Unit Tests for Geometry and Block Models

Tests for Rect, CanvasBounds and Block value types.
"""

import dataclasses

import pytest

from dashboard_builder.core.models import (
    Block,
    BlockType,
    CanvasBounds,
    Position,
    Rect,
    Size,
)


class TestRect:
    """Tests for Rect dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_valid_then_creates_rect(self):
        r = Rect("a", 20, 40, 300, 200)
        assert (r.id, r.x, r.y, r.width, r.height) == ("a", 20, 40, 300, 200)

    def test_init_when_zero_width_then_raises_error(self):
        with pytest.raises(ValueError, match="width must be > 0"):
            Rect("a", 0, 0, 0, 10)

    def test_init_when_negative_height_then_raises_error(self):
        with pytest.raises(ValueError, match="height must be > 0"):
            Rect("a", 0, 0, 10, -5)

    def test_init_when_negative_x_then_raises_error(self):
        with pytest.raises(ValueError, match="x must be >= 0"):
            Rect("a", -1, 0, 10, 10)

    def test_init_when_negative_y_then_raises_error(self):
        with pytest.raises(ValueError, match="y must be >= 0"):
            Rect("a", 0, -1, 10, 10)

    def test_rect_is_immutable(self):
        r = Rect("a", 0, 0, 10, 10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.x = 5

    # ─────────────────────────────────────────────────────────────────────────
    # Property Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_edges_when_valid_then_exclusive_right_and_bottom(self):
        r = Rect("a", 20, 20, 300, 200)
        assert r.right == 320
        assert r.bottom == 220

    def test_position_and_size_when_read_then_match_fields(self):
        r = Rect("a", 20, 40, 300, 200)
        assert r.position == Position(20, 40)
        assert r.size == Size(300, 200)

    # ─────────────────────────────────────────────────────────────────────────
    # Copy Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_moved_to_when_called_then_keeps_id_and_size(self):
        r = Rect("a", 20, 20, 300, 200)
        moved = r.moved_to(340, 60)
        assert moved == Rect("a", 340, 60, 300, 200)
        assert r.x == 20

    def test_resized_to_when_called_then_keeps_top_left(self):
        r = Rect("a", 20, 20, 300, 200)
        assert r.resized_to(100, 120) == Rect("a", 20, 20, 100, 120)

    def test_from_parts_when_called_then_builds_rect(self):
        r = Rect.from_parts("z", Position(1, 2), Size(3, 4))
        assert r == Rect("z", 1, 2, 3, 4)


class TestCanvasBounds:
    """Tests for CanvasBounds."""

    def test_grown_to_fit_when_edge_fits_then_returns_same_bounds(self):
        b = CanvasBounds(800, 600)
        assert b.grown_to_fit(580, 20) is b

    def test_grown_to_fit_when_edge_past_margin_then_grows_height_only(self):
        b = CanvasBounds(800, 600)
        grown = b.grown_to_fit(700, 20)
        assert grown == CanvasBounds(800, 720)

    def test_with_height_when_called_then_keeps_width(self):
        assert CanvasBounds(800, 600).with_height(900) == CanvasBounds(800, 900)


class TestBlock:
    """Tests for Block."""

    def test_init_when_rect_id_mismatch_then_raises_error(self):
        with pytest.raises(ValueError, match="does not match"):
            Block("a", BlockType.IMAGE, "", Rect("b", 0, 0, 10, 10))

    def test_with_rect_when_called_then_keeps_content(self):
        block = Block("a", BlockType.IMAGE, "pic.png", Rect("a", 0, 0, 10, 10))
        moved = block.with_rect(Rect("a", 20, 20, 10, 10))
        assert moved.content == "pic.png"
        assert moved.rect.position == Position(20, 20)

    def test_is_placeholder_when_image_without_content_then_true(self):
        block = Block("a", BlockType.IMAGE, "  ", Rect("a", 0, 0, 10, 10))
        assert block.is_placeholder

    def test_is_placeholder_when_diagram_then_false(self):
        block = Block("a", BlockType.DIAGRAM, "", Rect("a", 0, 0, 10, 10))
        assert not block.is_placeholder

    def test_block_type_when_built_from_string_then_matches_enum(self):
        assert BlockType("diagram") is BlockType.DIAGRAM
