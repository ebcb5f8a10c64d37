"""
Default block size dialog.

Edits the width and height given to newly added blocks. Values step by
the grid gap and never go below the resize minimum.
"""
from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout, QLabel, QPushButton, QSpinBox
)

from dashboard_builder.core.models import Size
from dashboard_builder.gui.styles.theme import get_colors

MAX_BLOCK_SIDE = 2000


class BlockSizeDialog(QDialog):
    """Modal dialog returning the default size for new blocks."""

    def __init__(self, current: Size, minimum: int = 100, step: int = 20, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Default Block Size")
        self.setModal(True)

        C = get_colors()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        description = QLabel("Size used for blocks added from now on.")
        description.setStyleSheet(f"color: {C.TEXT_SECONDARY};")
        layout.addWidget(description)

        form = QFormLayout()
        self.width_spin = self._spin_box(current.width, minimum, step)
        self.height_spin = self._spin_box(current.height, minimum, step)
        form.addRow("Width", self.width_spin)
        form.addRow("Height", self.height_spin)
        layout.addLayout(form)

        buttons = QHBoxLayout()
        buttons.addStretch()
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        self.save_button = QPushButton("Save")
        self.save_button.setObjectName("primaryButton")
        self.save_button.setDefault(True)
        self.save_button.clicked.connect(self.accept)
        buttons.addWidget(cancel_button)
        buttons.addWidget(self.save_button)
        layout.addLayout(buttons)

    @staticmethod
    def _spin_box(value: int, minimum: int, step: int) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(minimum, MAX_BLOCK_SIDE)
        spin.setSingleStep(step)
        spin.setSuffix(" px")
        spin.setValue(value)
        return spin

    @property
    def size_value(self) -> Size:
        return Size(self.width_spin.value(), self.height_spin.value())

    @classmethod
    def ask(cls, current: Size, minimum: int = 100, step: int = 20, parent=None) -> Optional[Size]:
        """Run the dialog; returns the chosen Size or None if cancelled."""
        dialog = cls(current, minimum, step, parent)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            return dialog.size_value
        return None
