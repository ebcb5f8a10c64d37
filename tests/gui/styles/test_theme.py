"""Unit tests for theme palettes and stylesheet generation."""

import pytest

from dashboard_builder.gui.styles.theme import (
    Colors,
    ColorsDark,
    GLOBAL_STYLESHEET,
    GLOBAL_STYLESHEET_DARK,
    build_stylesheet,
    get_colors,
    set_dark_mode,
)

PALETTE_KEYS = [
    "PRIMARY", "BACKGROUND", "SURFACE", "CANVAS", "TEXT_PRIMARY", "TEXT_SECONDARY",
    "BORDER", "GRID", "ERROR", "SUCCESS", "WARNING", "PLACEHOLDER", "PLACEHOLDER_TEXT", "HANDLE",
]


class TestPalettes:

    @pytest.mark.parametrize("key", PALETTE_KEYS)
    def test_both_palettes_define_key(self, key):
        assert getattr(Colors, key).startswith("#")
        assert getattr(ColorsDark, key).startswith("#")

    def test_get_colors_follows_dark_mode(self):
        set_dark_mode(True)
        try:
            assert get_colors() is ColorsDark
        finally:
            set_dark_mode(False)
        assert get_colors() is Colors


class TestStylesheet:

    def test_stylesheet_uses_palette_colors(self):
        qss = build_stylesheet(ColorsDark)
        assert ColorsDark.BACKGROUND in qss
        assert "QPushButton#primaryButton" in qss

    def test_global_stylesheets_differ(self):
        assert GLOBAL_STYLESHEET != GLOBAL_STYLESHEET_DARK
