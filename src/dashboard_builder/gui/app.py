"""
Entry point for the Dashboard Builder GUI.
"""
import logging
import sys


def _set_macos_app_name(name: str):
    """
    Set the application name in the macOS menu bar.
    This requires pyobjc-framework-Cocoa.
    """
    if sys.platform != "darwin":
        return

    try:
        from Foundation import NSBundle
        bundle = NSBundle.mainBundle()
        info = bundle.localizedInfoDictionary() or bundle.infoDictionary()
        if info:
            info["CFBundleName"] = name
    except ImportError:
        pass


def run():
    """
    Main entry point for the GUI application.
    """
    from PySide6.QtWidgets import QApplication
    from dashboard_builder.gui.main_window import MainWindow
    from dashboard_builder.gui.models.settings import SettingsStore
    from dashboard_builder.gui.styles.theme import apply_theme
    from dashboard_builder.gui.utils.paths import get_settings_path

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    _set_macos_app_name("Dashboard Builder")
    app = QApplication(sys.argv)
    app.setApplicationName("Dashboard Builder")
    app.setApplicationDisplayName("Dashboard Builder")
    app.setOrganizationName("Dashboard Builder")

    settings = SettingsStore(get_settings_path())

    # Check for malformed settings and prompt user to reset if needed
    if not settings.check_load_error():
        sys.exit(1)

    apply_theme(app, settings.get_dark_mode())

    window = MainWindow(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
