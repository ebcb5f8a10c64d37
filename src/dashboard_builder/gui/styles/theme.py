"""
Theme definitions for the Dashboard Builder GUI.
"""


class Colors:
    # Primary Colors
    PRIMARY = "#0364B8"
    PRIMARY_HOVER = "#0A2767"

    # Backgrounds
    BACKGROUND = "#f5f5f5"
    SURFACE = "#ffffff"
    CANVAS = "#fafafa"
    HOVER = "#f0f0f0"
    DISABLED_BG = "#e0e0e0"

    # Text
    TEXT_PRIMARY = "#1f1f1f"
    TEXT_SECONDARY = "#666666"
    TEXT_ON_PRIMARY = "#ffffff"

    # Borders & Dividers
    BORDER = "#e0e0e0"
    GRID = "#ececec"

    # Status
    ERROR = "#d32f2f"
    SUCCESS = "#388e3c"
    WARNING = "#f57c00"

    # Blocks
    PLACEHOLDER = "#e5e7eb"
    PLACEHOLDER_TEXT = "#9ca3af"
    HANDLE = "#0364B8"


class ColorsDark:
    """Dark theme color palette."""

    PRIMARY = "#3794FF"
    PRIMARY_HOVER = "#4FA3FF"

    BACKGROUND = "#1e1e1e"
    SURFACE = "#252526"
    CANVAS = "#1b1b1c"
    HOVER = "#21262D"
    DISABLED_BG = "#3D444D"

    TEXT_PRIMARY = "#E6EDF3"
    TEXT_SECONDARY = "#8B949E"
    TEXT_ON_PRIMARY = "#FFFFFF"

    BORDER = "#30363D"
    GRID = "#2a2a2b"

    ERROR = "#F85149"
    SUCCESS = "#3FB950"
    WARNING = "#D29922"

    PLACEHOLDER = "#2f3338"
    PLACEHOLDER_TEXT = "#6e7681"
    HANDLE = "#3794FF"


class Fonts:
    UI_FONT = "-apple-system, 'SF Pro Text', 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"
    MONO_FONT = "Consolas, Monaco, Menlo, 'Courier New', monospace"

    H1 = "18pt"
    BODY = "13pt"
    CONSOLE = "12pt"

    WEIGHT_MEDIUM = "500"
    WEIGHT_BOLD = "600"


def build_stylesheet(colors) -> str:
    """Global QSS for a palette."""
    return f"""
        QMainWindow, QDialog {{
            background-color: {colors.BACKGROUND};
            color: {colors.TEXT_PRIMARY};
        }}
        QWidget#mainHeader {{
            background-color: {colors.SURFACE};
            border-bottom: 1px solid {colors.BORDER};
        }}
        QLabel#headerTitle {{
            font-size: {Fonts.H1};
            font-weight: {Fonts.WEIGHT_BOLD};
            color: {colors.TEXT_PRIMARY};
        }}
        QLabel#headerWelcome {{
            font-weight: {Fonts.WEIGHT_MEDIUM};
            color: {colors.TEXT_SECONDARY};
        }}
        QPushButton {{
            background-color: {colors.SURFACE};
            color: {colors.TEXT_PRIMARY};
            border: 1px solid {colors.BORDER};
            border-radius: 6px;
            padding: 6px 14px;
        }}
        QPushButton:hover {{
            background-color: {colors.HOVER};
        }}
        QPushButton#primaryButton {{
            background-color: {colors.PRIMARY};
            color: {colors.TEXT_ON_PRIMARY};
            border: none;
            font-weight: {Fonts.WEIGHT_MEDIUM};
        }}
        QPushButton#primaryButton:hover {{
            background-color: {colors.PRIMARY_HOVER};
        }}
        QLineEdit, QSpinBox {{
            background-color: {colors.SURFACE};
            color: {colors.TEXT_PRIMARY};
            border: 1px solid {colors.BORDER};
            border-radius: 4px;
            padding: 4px 6px;
        }}
        QScrollArea {{
            border: none;
            background-color: {colors.BACKGROUND};
        }}
    """


GLOBAL_STYLESHEET = build_stylesheet(Colors)
GLOBAL_STYLESHEET_DARK = build_stylesheet(ColorsDark)


def apply_theme(app, is_dark: bool = False) -> None:
    """
    Apply the appropriate stylesheet (light or dark) to the QApplication.
    """
    set_dark_mode(is_dark)
    app.setStyleSheet(GLOBAL_STYLESHEET_DARK if is_dark else GLOBAL_STYLESHEET)


# Module-level dark mode state (set explicitly when theme changes)
_is_dark_mode = False


def set_dark_mode(is_dark: bool):
    """Explicitly set the dark mode state. Called by apply_theme."""
    global _is_dark_mode
    _is_dark_mode = is_dark


def get_colors():
    """Get the appropriate color palette based on current theme."""
    return ColorsDark if _is_dark_mode else Colors
