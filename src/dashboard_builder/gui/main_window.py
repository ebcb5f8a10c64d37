"""
Main Window for the Dashboard Builder GUI.
"""
import getpass
import logging
import queue
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel,
    QScrollArea, QSplitter, QApplication, QMessageBox, QFileDialog
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence

from dashboard_builder import __version__
from dashboard_builder.board import DashboardBoard
from dashboard_builder.core.models import CanvasBounds, Size
from dashboard_builder.layout import LayoutConfig
from dashboard_builder.output import SnapshotError, save_snapshot
from dashboard_builder.gui.models.settings import SettingsStore
from dashboard_builder.gui.styles.theme import apply_theme, set_dark_mode
from dashboard_builder.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler
from dashboard_builder.gui.utils.paths import get_default_export_dir, get_settings_path
from dashboard_builder.gui.widgets.add_block_dialog import AddBlockDialog
from dashboard_builder.gui.widgets.block_canvas import BlockCanvas
from dashboard_builder.gui.widgets.block_size_dialog import BlockSizeDialog
from dashboard_builder.gui.widgets.console_widget import ConsoleWidget

logger = logging.getLogger(__name__)

# Engine and board loggers forwarded to the console
APP_LOGGER = "dashboard_builder"


def _current_username() -> str:
    """Login name of the current user, or a generic greeting if unknown."""
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return "User"


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[SettingsStore] = None, username: Optional[str] = None):
        super().__init__()
        self.username = username or _current_username()

        self.setWindowTitle("Dashboard Builder")
        self.resize(1280, 860)
        self.setMinimumSize(800, 600)

        self.settings = settings or SettingsStore(get_settings_path())
        # Set dark mode state BEFORE creating widgets (so they initialize with correct colors)
        set_dark_mode(self.settings.get_dark_mode())

        default_size = self.settings.get_default_block_size()
        config = LayoutConfig(
            default_block_width=default_size.width,
            default_block_height=default_size.height,
        )
        self.board = DashboardBoard(config, CanvasBounds(1200, 800))

        self._build_menus()

        # --- Logging ---
        self.log_queue = queue.Queue()
        self.log_handler = attach_queue_handler(self.log_queue, APP_LOGGER)
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(100)

        # --- Central widget ---
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.header = QWidget()
        self.header.setObjectName("mainHeader")
        self.header.setFixedHeight(64)
        header_layout = QHBoxLayout(self.header)
        header_layout.setContentsMargins(24, 10, 24, 10)
        title = QLabel("Dashboard Builder")
        title.setObjectName("headerTitle")
        header_layout.addWidget(title)
        header_layout.addStretch()
        self.welcome_label = QLabel(f"Welcome, {self.username}")
        self.welcome_label.setObjectName("headerWelcome")
        header_layout.addWidget(self.welcome_label)
        header_layout.addSpacing(16)
        self.add_button = QPushButton("Add Block")
        self.add_button.setObjectName("primaryButton")
        self.add_button.clicked.connect(self._on_add_block)
        header_layout.addWidget(self.add_button)
        main_layout.addWidget(self.header)

        self.canvas = BlockCanvas(self.board)
        self.canvas.layoutChanged.connect(self._update_status)
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setWidget(self.canvas)

        self.console = ConsoleWidget()

        self.splitter = QSplitter(Qt.Orientation.Vertical)
        self.splitter.setChildrenCollapsible(False)
        self.splitter.addWidget(self.scroll)
        self.splitter.addWidget(self.console)
        self.splitter.setStretchFactor(0, 5)
        self.splitter.setStretchFactor(1, 1)
        main_layout.addWidget(self.splitter)

        self.status_bar = self.statusBar()
        self._update_status()

        geometry = self.settings.get_window_geometry()
        if geometry:
            self.restoreGeometry(bytes.fromhex(geometry))

        self.console.append_log("INFO", f"Dashboard Builder {__version__} ready")

    def _build_menus(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("File")
        add_action = QAction("Add Block...", self)
        add_action.setShortcut(QKeySequence("Ctrl+N"))
        add_action.triggered.connect(self._on_add_block)
        file_menu.addAction(add_action)

        export_action = QAction("Export PNG...", self)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self._export_png)
        file_menu.addAction(export_action)

        clear_action = QAction("Clear Board", self)
        clear_action.triggered.connect(self._clear_board)
        file_menu.addAction(clear_action)

        file_menu.addSeparator()
        exit_action = QAction("Quit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        settings_menu = menu_bar.addMenu("Settings")
        self.dark_mode_action = QAction("Dark Mode", self)
        self.dark_mode_action.setCheckable(True)
        self.dark_mode_action.setChecked(self.settings.get_dark_mode())
        self.dark_mode_action.triggered.connect(self._toggle_theme)
        settings_menu.addAction(self.dark_mode_action)

        size_action = QAction("Default Block Size...", self)
        size_action.triggered.connect(self._on_default_block_size)
        settings_menu.addAction(size_action)

        settings_menu.addSeparator()
        reset_action = QAction("Reset Settings", self)
        reset_action.triggered.connect(self._on_reset_settings)
        settings_menu.addAction(reset_action)

    # ─────────────────────────────────────────────────────────────────────────
    # Actions
    # ─────────────────────────────────────────────────────────────────────────

    def _on_add_block(self):
        choice = AddBlockDialog.ask(self)
        if choice is None:
            return
        block_type, content = choice
        self.add_block(block_type, content)

    def add_block(self, block_type, content: str = ""):
        """Add a block to the board and scroll it into view."""
        block = self.board.add_block(block_type, content)
        self.canvas.sync_to_board()
        self.scroll.ensureVisible(block.rect.x, block.rect.bottom, 0, self.board.config.gap)
        self._update_status()
        return block

    def _clear_board(self):
        if not len(self.board):
            return
        answer = QMessageBox.question(
            self, "Clear Board", "Remove every block from the dashboard?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.board.clear()
            self.canvas.sync_to_board()
            self._update_status()

    def _export_png(self):
        export_dir = get_default_export_dir()
        filename, _ = QFileDialog.getSaveFileName(
            self, "Export Dashboard", str(export_dir / "dashboard.png"), "PNG Images (*.png)"
        )
        if not filename:
            return
        self.export_png(Path(filename))

    def export_png(self, path: Path) -> bool:
        """Write a snapshot of the board; errors are reported, not raised."""
        try:
            written = save_snapshot(self.board.blocks, self.board.bounds, path)
        except SnapshotError as e:
            logger.error(f"Export failed: {e}")
            QMessageBox.critical(self, "Export Failed", str(e))
            return False
        self.console.append_log("SUCCESS", f"Exported dashboard to {written}")
        return True

    def _toggle_theme(self, checked: bool):
        """Handle dark mode toggle."""
        self._apply_theme(checked)
        self.settings.set_dark_mode(checked)

    def _on_default_block_size(self):
        config = self.board.config
        size = BlockSizeDialog.ask(
            config.default_block_size, config.min_block_size, config.gap, self
        )
        if size is not None:
            self.set_default_block_size(size)

    def set_default_block_size(self, size: Size):
        """Use ``size`` for new blocks and persist it."""
        self._apply_default_block_size(size)
        self.settings.set_default_block_size(size)
        logger.info(f"Default block size set to {size.width}x{size.height}")

    def _apply_default_block_size(self, size: Size):
        self.board.config = replace(
            self.board.config,
            default_block_width=size.width,
            default_block_height=size.height,
        )

    def _on_reset_settings(self):
        answer = QMessageBox.question(
            self, "Reset Settings", "Restore every preference to its default?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.reset_settings()

    def reset_settings(self):
        """Drop stored preferences and apply the defaults to the open window."""
        self.settings.reset()
        self._apply_default_block_size(self.settings.get_default_block_size())
        self.dark_mode_action.setChecked(False)
        self._apply_theme(False)
        self.console.append_log("INFO", "Settings reset to defaults")

    def _apply_theme(self, is_dark: bool):
        app = QApplication.instance()
        if app is not None:
            apply_theme(app, is_dark)
        else:
            set_dark_mode(is_dark)
        self.canvas.update_theme()
        self.console.update_theme()

        if sys.platform == "darwin":
            try:
                from AppKit import NSApplication, NSAppearance, NSAppearanceNameDarkAqua, NSAppearanceNameAqua
                ns_app = NSApplication.sharedApplication()
                appearance_name = NSAppearanceNameDarkAqua if is_dark else NSAppearanceNameAqua
                ns_app.setAppearance_(NSAppearance.appearanceNamed_(appearance_name))
            except ImportError:
                pass

    def _update_status(self):
        bounds = self.board.bounds
        self.status_bar.showMessage(
            f"{len(self.board)} block(s) | canvas {bounds.width} x {bounds.height}"
        )

    def _drain_log_queue(self):
        while True:
            try:
                msg = self.log_queue.get_nowait()
                if isinstance(msg, tuple) and len(msg) == 2:
                    text, level = msg
                    self.console.append_log(level, text)
                else:
                    self.console.append_log("INFO", str(msg))
                self.log_queue.task_done()
            except queue.Empty:
                break

    def closeEvent(self, event):
        """Save UI state on close."""
        self.log_timer.stop()
        detach_queue_handler(self.log_handler, APP_LOGGER)
        self.settings.set_window_geometry(self.saveGeometry().toHex().data().decode())
        super().closeEvent(event)
