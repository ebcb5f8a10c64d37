"""
Settings persistence model for the GUI.

Handles persistent GUI preferences (theme, default block size, window
geometry) with robust error handling. Any malformed data falls back to
defaults. Block layouts are never stored here.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QObject, Signal

from dashboard_builder.core.models import Size
from dashboard_builder.layout.config import DEFAULT_BLOCK_HEIGHT, DEFAULT_BLOCK_WIDTH

logger = logging.getLogger(__name__)


class SettingsStore(QObject):
    """Lightweight JSON-backed store for persisting GUI preferences."""

    darkModeChanged = Signal(bool)
    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path
        self.data: Dict[str, object] = {}
        self._load_error: Optional[str] = None

        if self.path.exists():
            try:
                self.data = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                self._load_error = f"Settings file is corrupted:\n{e}"
                self.data = {}
            except OSError as e:
                self._load_error = f"Failed to read settings:\n{e}"
                self.data = {}

        # Ensure version is set for new files
        if "version" not in self._get_dict():
            self.data["version"] = self.CURRENT_VERSION

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    def check_load_error(self) -> bool:
        """
        Check if there was an error loading settings and prompt user to reset.

        Returns True if app should continue, False if app should exit.
        Call this after QApplication is created.
        """
        if not self._load_error:
            return True

        from PySide6.QtWidgets import QMessageBox

        msg = QMessageBox()
        msg.setIcon(QMessageBox.Icon.Warning)
        msg.setWindowTitle("Settings Error")
        msg.setText("Your GUI settings file could not be loaded.")
        msg.setInformativeText(
            f"{self._load_error}\n\n"
            "Would you like to reset settings to defaults and continue?"
        )
        msg.setStandardButtons(
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        msg.setDefaultButton(QMessageBox.StandardButton.Yes)

        if msg.exec() == QMessageBox.StandardButton.Yes:
            # Reset was already done by setting self.data = {}
            self._save()
            self._load_error = None
            return True
        return False

    # ─────────────────────────────────────────────────────────────────────────
    # Preferences
    # ─────────────────────────────────────────────────────────────────────────

    def get_dark_mode(self) -> bool:
        ui = self._get_dict().setdefault("ui", {})  # type: ignore[assignment]
        if not isinstance(ui, dict):
            return False
        return bool(ui.get("dark_mode", False))

    def set_dark_mode(self, enabled: bool) -> None:
        ui = self._get_dict().setdefault("ui", {})  # type: ignore[assignment]
        if not isinstance(ui, dict):
            ui = self.data["ui"] = {}
        ui["dark_mode"] = enabled
        self._save()
        self.darkModeChanged.emit(enabled)

    def get_default_block_size(self) -> Size:
        """Size for new blocks; invalid values fall back to the layout defaults."""
        raw = self._get_dict().get("default_block_size")
        if isinstance(raw, dict):
            width = self._safe_int(raw.get("width"), DEFAULT_BLOCK_WIDTH)
            height = self._safe_int(raw.get("height"), DEFAULT_BLOCK_HEIGHT)
            if width > 0 and height > 0:
                return Size(width, height)
            logger.warning("Non-positive default block size in settings, ignoring")
        return Size(DEFAULT_BLOCK_WIDTH, DEFAULT_BLOCK_HEIGHT)

    def set_default_block_size(self, size: Size) -> None:
        self._get_dict()["default_block_size"] = {"width": size.width, "height": size.height}
        self._save()

    def get_window_geometry(self) -> Optional[str]:
        """Get saved window geometry with hex validation.

        Returns None if geometry is missing or invalid hex.
        """
        geo = self._get_dict().get("window_geometry")
        if not isinstance(geo, str):
            return None
        try:
            bytes.fromhex(geo)
            return geo
        except (ValueError, TypeError):
            logger.warning("Invalid geometry string in settings, ignoring")
            return None

    def set_window_geometry(self, geometry: str) -> None:
        state = self._get_dict()
        state["window_geometry"] = geometry
        self._save()

    def reset(self) -> None:
        """Drop every preference and persist the empty store."""
        self.data = {"version": self.CURRENT_VERSION}
        self._save()

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _safe_int(value: object, default: int) -> int:
        try:
            return int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return default

    def _get_dict(self) -> Dict[str, object]:
        if not isinstance(self.data, dict):
            self.data = {}
        return self.data

    def _save(self) -> None:
        """Safely write settings with atomic replacement.

        Uses a temp file to prevent corruption if write is interrupted.
        """
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            temp_path = self.path.with_suffix('.tmp')
            temp_path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")

            # Atomic rename (overwrites existing)
            temp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")
            if temp_path is not None and temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass
