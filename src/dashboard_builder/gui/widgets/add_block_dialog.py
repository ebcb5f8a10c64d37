"""
Add Block dialog.

Lets the user choose between an image block (with an optional image URL
or file path) and a sample diagram block.
"""
from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QTabWidget, QWidget, QFileDialog
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap

from dashboard_builder.core.models import BlockType
from dashboard_builder.gui.styles.theme import get_colors

# Tab order matches BlockType order shown to the user
_TAB_TYPES = (BlockType.IMAGE, BlockType.DIAGRAM)


class AddBlockDialog(QDialog):
    """Modal dialog returning the type and content of a new block."""

    def __init__(self, parent=None, block_type: BlockType = BlockType.IMAGE):
        super().__init__(parent)
        self.setWindowTitle("Add New Block")
        self.setModal(True)
        self.setMinimumWidth(440)

        C = get_colors()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        description = QLabel("Choose the type of block you want to add to your dashboard.")
        description.setWordWrap(True)
        description.setStyleSheet(f"color: {C.TEXT_SECONDARY};")
        layout.addWidget(description)

        self.tabs = QTabWidget()
        self.tabs.addTab(self._build_image_tab(), "Image")
        self.tabs.addTab(self._build_diagram_tab(), "Diagram")
        self.tabs.setCurrentIndex(_TAB_TYPES.index(BlockType(block_type)))
        layout.addWidget(self.tabs)

        buttons = QHBoxLayout()
        buttons.addStretch()
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)
        self.add_button = QPushButton("Add Block")
        self.add_button.setObjectName("primaryButton")
        self.add_button.setDefault(True)
        self.add_button.clicked.connect(self.accept)
        buttons.addWidget(self.cancel_button)
        buttons.addWidget(self.add_button)
        layout.addLayout(buttons)

    # ─────────────────────────────────────────────────────────────────────────
    # Tabs
    # ─────────────────────────────────────────────────────────────────────────

    def _build_image_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        layout.setSpacing(8)

        layout.addWidget(QLabel("Image URL"))
        row = QHBoxLayout()
        self.url_edit = QLineEdit()
        self.url_edit.setPlaceholderText("Enter image URL or leave empty for placeholder")
        self.url_edit.textChanged.connect(self._update_preview)
        row.addWidget(self.url_edit)
        browse = QPushButton("Browse...")
        browse.clicked.connect(self._browse_image)
        row.addWidget(browse)
        layout.addLayout(row)

        self.preview = QLabel()
        self.preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview.setFixedHeight(160)
        self.preview.hide()
        layout.addWidget(self.preview)
        layout.addStretch()
        return tab

    def _build_diagram_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        note = QLabel("A sample diagram will be added to your dashboard.")
        note.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addStretch()
        layout.addWidget(note)
        layout.addStretch()
        return tab

    # ─────────────────────────────────────────────────────────────────────────
    # Slots
    # ─────────────────────────────────────────────────────────────────────────

    def _browse_image(self):
        filename, _ = QFileDialog.getOpenFileName(
            self, "Choose Image", "", "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp);;All Files (*)"
        )
        if filename:
            self.url_edit.setText(filename)

    def _update_preview(self, text: str):
        """Show local images inline; remote URLs and bad paths show nothing."""
        pixmap = QPixmap(text.strip()) if text.strip() else QPixmap()
        if pixmap.isNull():
            self.preview.clear()
            self.preview.setVisible(bool(text.strip()))
            if text.strip():
                self.preview.setText("No preview available")
            return
        self.preview.setPixmap(pixmap.scaledToHeight(150, Qt.TransformationMode.SmoothTransformation))
        self.preview.show()

    # ─────────────────────────────────────────────────────────────────────────
    # Result
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def block_type(self) -> BlockType:
        return _TAB_TYPES[self.tabs.currentIndex()]

    @property
    def content(self) -> str:
        """Image URL/path for image blocks; empty for diagrams."""
        if self.block_type is BlockType.DIAGRAM:
            return ""
        return self.url_edit.text().strip()

    @classmethod
    def ask(cls, parent=None) -> Optional[tuple]:
        """Run the dialog; returns (block_type, content) or None if cancelled."""
        dialog = cls(parent)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            return dialog.block_type, dialog.content
        return None
