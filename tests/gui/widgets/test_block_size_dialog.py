"""Unit tests for BlockSizeDialog."""

from unittest.mock import patch

from PySide6.QtWidgets import QDialog

from dashboard_builder.core.models import Size
from dashboard_builder.gui.widgets.block_size_dialog import MAX_BLOCK_SIDE, BlockSizeDialog


class TestBlockSizeDialog:

    def test_initial_values_match_current_size(self, qtbot):
        dialog = BlockSizeDialog(Size(300, 200))
        qtbot.addWidget(dialog)
        assert dialog.size_value == Size(300, 200)
        assert dialog.width_spin.singleStep() == 20

    def test_values_when_below_minimum_then_clamped(self, qtbot):
        dialog = BlockSizeDialog(Size(300, 200), minimum=100)
        qtbot.addWidget(dialog)
        dialog.width_spin.setValue(40)
        dialog.height_spin.setValue(MAX_BLOCK_SIDE + 500)
        assert dialog.size_value == Size(100, MAX_BLOCK_SIDE)

    def test_ask_when_cancelled_then_none(self, qtbot):
        with patch.object(BlockSizeDialog, "exec", return_value=QDialog.DialogCode.Rejected):
            assert BlockSizeDialog.ask(Size(300, 200)) is None

    def test_ask_when_accepted_then_size(self, qtbot):
        with patch.object(BlockSizeDialog, "exec", return_value=QDialog.DialogCode.Accepted):
            assert BlockSizeDialog.ask(Size(240, 160)) == Size(240, 160)
