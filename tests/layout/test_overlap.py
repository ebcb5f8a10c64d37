"""
Unit Tests for Overlap Predicates

Tests for the gap-inflated collision test and its helpers.
"""

import pytest

from dashboard_builder.core.models import CanvasBounds, Rect
from dashboard_builder.layout.overlap import (
    as_rect_map,
    clamp_rect,
    find_overlapping_pairs,
    is_within_bounds,
    max_occupied_y,
    overlapping_ids,
    overlaps,
)

GAP = 20


class TestOverlaps:
    """Tests for the buffer-zone overlap predicate."""

    def test_overlaps_when_exactly_gap_apart_then_false(self):
        a = Rect("a", 20, 20, 300, 200)
        b = Rect("b", 340, 20, 300, 200)
        assert not overlaps(a, b, GAP)

    def test_overlaps_when_closer_than_gap_then_true(self):
        a = Rect("a", 20, 20, 300, 200)
        b = Rect("b", 339, 20, 300, 200)
        assert overlaps(a, b, GAP)

    def test_overlaps_when_intersecting_then_true(self):
        a = Rect("a", 20, 20, 300, 200)
        b = Rect("b", 100, 100, 300, 200)
        assert overlaps(a, b, GAP)

    def test_overlaps_when_close_on_one_axis_only_then_false(self):
        a = Rect("a", 20, 20, 300, 200)
        b = Rect("b", 330, 400, 300, 200)
        assert not overlaps(a, b, GAP)

    @pytest.mark.parametrize("b", [
        Rect("b", 340, 20, 300, 200),
        Rect("b", 100, 100, 50, 50),
        Rect("b", 0, 230, 10, 10),
    ])
    def test_overlaps_is_symmetric(self, b):
        a = Rect("a", 20, 20, 300, 200)
        assert overlaps(a, b, GAP) == overlaps(b, a, GAP)

    def test_overlaps_when_zero_gap_then_touching_edges_do_not_collide(self):
        a = Rect("a", 0, 0, 10, 10)
        b = Rect("b", 10, 0, 10, 10)
        assert not overlaps(a, b, 0)


class TestCollections:
    """Tests for set-level helpers."""

    def test_overlapping_ids_when_probe_in_set_then_skips_itself(self):
        rects = [Rect("a", 20, 20, 100, 100), Rect("b", 50, 50, 100, 100)]
        assert overlapping_ids(rects[0], rects, GAP) == ["b"]

    def test_overlapping_ids_when_excluded_then_skipped(self):
        rects = [Rect("a", 20, 20, 100, 100), Rect("b", 50, 50, 100, 100)]
        assert overlapping_ids(rects[0], rects, GAP, exclude={"b"}) == []

    def test_find_overlapping_pairs_when_consistent_then_empty(self, side_by_side):
        assert find_overlapping_pairs(side_by_side, GAP) == []

    def test_find_overlapping_pairs_when_colliding_then_lists_pair_in_order(self):
        rects = [
            Rect("a", 20, 20, 300, 200),
            Rect("b", 700, 20, 50, 50),
            Rect("c", 100, 100, 300, 200),
        ]
        assert find_overlapping_pairs(rects, GAP) == [("a", "c")]

    def test_as_rect_map_when_given_list_then_keys_by_id(self):
        rects = [Rect("x", 0, 0, 1, 1), Rect("y", 5, 5, 1, 1)]
        assert list(as_rect_map(rects)) == ["x", "y"]

    def test_as_rect_map_when_given_mapping_then_returns_copy(self, side_by_side):
        copy = as_rect_map(side_by_side)
        copy["c"] = Rect("c", 0, 0, 1, 1)
        assert "c" not in side_by_side

    def test_max_occupied_y_when_empty_then_zero(self):
        assert max_occupied_y([]) == 0

    def test_max_occupied_y_when_excluding_lowest_then_uses_next(self):
        rects = [Rect("a", 20, 20, 100, 100), Rect("b", 20, 300, 100, 100)]
        assert max_occupied_y(rects) == 400
        assert max_occupied_y(rects, exclude="b") == 120


class TestBoundsHelpers:
    """Tests for canvas margin helpers."""

    def test_is_within_bounds_when_on_margin_then_true(self):
        bounds = CanvasBounds(800, 600)
        assert is_within_bounds(Rect("a", 20, 20, 760, 560), bounds, GAP)

    def test_is_within_bounds_when_past_right_margin_then_false(self):
        bounds = CanvasBounds(800, 600)
        assert not is_within_bounds(Rect("a", 500, 20, 300, 200), bounds, GAP)

    def test_clamp_rect_when_past_right_edge_then_pulls_back(self):
        bounds = CanvasBounds(800, 600)
        clamped, new_bounds = clamp_rect(Rect("a", 700, 20, 300, 200), bounds, GAP)
        assert (clamped.x, clamped.y) == (480, 20)
        assert new_bounds == bounds

    def test_clamp_rect_when_above_margin_then_moves_to_gap(self):
        bounds = CanvasBounds(800, 600)
        clamped, _ = clamp_rect(Rect("a", 0, 0, 300, 200), bounds, GAP)
        assert (clamped.x, clamped.y) == (20, 20)

    def test_clamp_rect_when_past_bottom_then_grows_canvas(self):
        bounds = CanvasBounds(800, 600)
        clamped, new_bounds = clamp_rect(Rect("a", 20, 500, 300, 200), bounds, GAP)
        assert clamped.y == 500
        assert new_bounds == CanvasBounds(800, 720)
