import os
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtCore = pytest.importorskip("PyQt5.QtCore")
QtWidgets = pytest.importorskip("PyQt5.QtWidgets")

from asset_receiving.business_logic.asset_receipt_manager import AssetReceiptManager
from asset_receiving.business_logic.permission_policy import ReceiptPermissionPolicy
from asset_receiving.business_logic.view_modes import EditMode
from asset_receiving.presentation.asset_receipts_ui import AssetReceiptTableModel, AssetReceiptsUI
from conftest import StubSession, make_receipt


@pytest.fixture(scope="module")
def qt_app():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


def test_rows_show_resolved_asset_name_and_fallbacks(qt_app, reference_data):
    reference_data.load_all()
    model = AssetReceiptTableModel(reference_data=reference_data)
    model.update_data([
        make_receipt(1, asset_id=10, tag_no="T-100", quantity=4),
        make_receipt(2, asset_id=99, received_by=""),
    ])

    display = QtCore.Qt.ItemDataRole.DisplayRole
    assert model.rowCount() == 2
    assert model.columnCount() == 6
    assert model.data(model.index(0, 1), display) == "Dell Laptop"
    assert model.data(model.index(0, 3), display) == "4"
    assert model.data(model.index(0, 4), display) == "T-100"
    assert model.data(model.index(0, 5), display) == "2024-05-01"
    assert model.data(model.index(1, 1), display) == "Asset #99"
    assert model.data(model.index(1, 2), display) == "-"
    # no flattened quantity: summed over locations
    assert model.data(model.index(1, 3), display) == "2"
    assert model.get_receipt_at_row(1).id == 2
    assert model.get_receipt_at_row(5) is None


@pytest.fixture
def receipts_ui(qt_app, reference_data):
    receipts_repo = MagicMock()
    receipts_repo.get_all.return_value = [make_receipt(1), make_receipt(2)]
    manager = AssetReceiptManager(
        receipts_repository=receipts_repo,
        reference_data=reference_data,
        permission_policy=ReceiptPermissionPolicy(StubSession(["manage_asset_receipts"])),
        notifier=lambda level, message: None,
    )
    ui = AssetReceiptsUI(manager)
    yield ui
    ui.deleteLater()


def test_edit_button_opens_the_editor_without_arguments(receipts_ui):
    receipts_ui._open_edit_receipt_dialog = MagicMock()

    receipts_ui.edit_button.clicked.emit(False)

    receipts_ui._open_edit_receipt_dialog.assert_called_once_with()


def test_edit_button_edits_the_selected_receipt(receipts_ui):
    receipts_ui._run_form_dialog = MagicMock()
    receipts_ui.receipt_table_view.selectRow(1)

    receipts_ui.edit_button.click()

    assert receipts_ui.receipt_manager.mode == EditMode(2)
    receipts_ui._run_form_dialog.assert_called_once_with()
