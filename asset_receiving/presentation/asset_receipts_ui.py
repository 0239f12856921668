# asset_receiving/presentation/asset_receipts_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QTableView, QPushButton, QHBoxLayout,
    QMessageBox, QDialog, QLineEdit, QComboBox, QFormLayout, QGroupBox,
    QDialogButtonBox, QAbstractItemView, QTextEdit, QSpinBox, QScrollArea,
    QHeaderView, QGridLayout
)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex, pyqtSignal

from typing import Any, Dict, List, Optional, Sequence

from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.business_logic.entities.receipt_location_entity import ReceiptLocationEntity
from asset_receiving.business_logic.asset_receipt_manager import AssetReceiptManager
from asset_receiving.business_logic.receipt_form_state import ReceiptFormState
from asset_receiving.business_logic.receipt_validator import location_error_key
from asset_receiving.business_logic.reference_data_manager import ReferenceDataManager, Option
from asset_receiving.business_logic.view_modes import EditMode, ListMode
from asset_receiving.config import PAGE_SIZE_OPTIONS
from asset_receiving.constants import NotificationLevel
from asset_receiving.utils import date_converter
from .custom_widgets import OptionalDateEdit, SlotListEditor
import logging

logger = logging.getLogger(__name__)

ERROR_STYLE = "color: #c0392b; font-size: 11px;"


def _fill_combo(combo: QComboBox, options: Sequence[Option], placeholder: str):
    combo.blockSignals(True)
    combo.clear()
    combo.addItem(placeholder, None)
    for value, label in options:
        combo.addItem(label, value)
    combo.blockSignals(False)


def _select_combo_value(combo: QComboBox, value: Optional[Any]):
    combo.blockSignals(True)
    idx = combo.findData(None if value is None else str(value))
    combo.setCurrentIndex(idx if idx != -1 else 0)
    combo.blockSignals(False)


def _error_label(parent=None) -> QLabel:
    label = QLabel("", parent)
    label.setStyleSheet(ERROR_STYLE)
    label.setVisible(False)
    return label


def _show_error(label: QLabel, message: str):
    label.setText(message)
    label.setVisible(bool(message))


# --- Table Model for the current page of receipts ---
class AssetReceiptTableModel(QAbstractTableModel):
    def __init__(self, reference_data: Optional[ReferenceDataManager] = None, parent=None):
        super().__init__(parent)
        self._data: List[AssetReceiptEntity] = []
        self._reference_data = reference_data
        self._headers = ["ID", "Asset", "Received By", "Quantity", "Tag No", "Created"]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    @staticmethod
    def _quantity(receipt: AssetReceiptEntity) -> str:
        if receipt.quantity is not None:
            return str(receipt.quantity)
        total = sum(loc.quantity or 0 for loc in receipt.locations)
        return str(total) if receipt.locations else "-"

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid(): return QVariant()
        row, col = index.row(), index.column()
        if not (0 <= row < len(self._data)): return QVariant()

        receipt = self._data[row]

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return str(receipt.id)
            elif col == 1:
                if self._reference_data:
                    return self._reference_data.asset_name(receipt.asset_id)
                return f"Asset #{receipt.asset_id}"
            elif col == 2: return receipt.received_by or "-"
            elif col == 3: return self._quantity(receipt)
            elif col == 4: return receipt.tag_no or "-"
            elif col == 5: return date_converter.to_display_str(receipt.created_at)

        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in [0, 3]: return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers): return self._headers[section]
        return QVariant()

    def update_data(self, new_data: Sequence[AssetReceiptEntity]):
        self.beginResetModel()
        self._data = list(new_data)
        self.endResetModel()

    def get_receipt_at_row(self, row: int) -> Optional[AssetReceiptEntity]:
        if 0 <= row < len(self._data): return self._data[row]
        return None


# --- One location card inside the receipt form ---
class ReceiptLocationWidget(QGroupBox):
    """Edits one location of the draft in place. `structureChanged` asks the dialog to re-render."""
    structureChanged = pyqtSignal()

    def __init__(self, form_state: ReceiptFormState, reference_data: ReferenceDataManager,
                 index: int, parent=None):
        super().__init__(parent)
        self.form_state = form_state
        self.reference_data = reference_data
        self.index = index
        self._setup_ui()

    def _setup_ui(self):
        layout = QGridLayout(self)

        self.location_combo = QComboBox(self)
        _fill_combo(self.location_combo, self.reference_data.location_options(), "-- Select location --")
        self.location_error = _error_label(self)

        self.quantity_spinbox = QSpinBox(self)
        self.quantity_spinbox.setRange(0, 999999) # 0 is reachable so the validator can reject it
        self.quantity_error = _error_label(self)

        self.licence_plate_edit = QLineEdit(self)
        self.manufacture_date_edit = OptionalDateEdit(parent=self)

        self.condition_combo = QComboBox(self)
        _fill_combo(self.condition_combo, self.reference_data.condition_options(), "-- Select condition --")
        self.status_combo = QComboBox(self)
        _fill_combo(self.status_combo, self.reference_data.status_options(), "-- Select status --")

        self.remarks_edit = QLineEdit(self)

        self.serials_editor = SlotListEditor("Serial Numbers", "Serial number", self)
        self.tags_editor = SlotListEditor("Tag Numbers", "Tag number", self)

        self.remove_button = QPushButton("Remove location", self)

        layout.addWidget(QLabel("Location *"), 0, 0)
        layout.addWidget(self.location_combo, 0, 1)
        layout.addWidget(self.location_error, 1, 1)
        layout.addWidget(QLabel("Quantity *"), 0, 2)
        layout.addWidget(self.quantity_spinbox, 0, 3)
        layout.addWidget(self.quantity_error, 1, 3)
        layout.addWidget(QLabel("Licence Plate"), 2, 0)
        layout.addWidget(self.licence_plate_edit, 2, 1)
        layout.addWidget(QLabel("Manufacture Date"), 2, 2)
        layout.addWidget(self.manufacture_date_edit, 2, 3)
        layout.addWidget(QLabel("Condition"), 3, 0)
        layout.addWidget(self.condition_combo, 3, 1)
        layout.addWidget(QLabel("Operational Status"), 3, 2)
        layout.addWidget(self.status_combo, 3, 3)
        layout.addWidget(QLabel("Remarks"), 4, 0)
        layout.addWidget(self.remarks_edit, 4, 1, 1, 3)
        layout.addWidget(self.serials_editor, 5, 0, 1, 2)
        layout.addWidget(self.tags_editor, 5, 2, 1, 2)
        layout.addWidget(self.remove_button, 6, 3)

        self.location_combo.currentIndexChanged.connect(
            lambda _: self._set_field("location_id", self.location_combo.currentData()))
        self.quantity_spinbox.valueChanged.connect(lambda value: self._set_field("quantity", value))
        self.licence_plate_edit.textEdited.connect(lambda text: self._set_field("licence_plate", text))
        self.manufacture_date_edit.dateChanged.connect(lambda d: self._set_field("manufacture_date", d))
        self.condition_combo.currentIndexChanged.connect(
            lambda _: self._set_field("condition_id", self.condition_combo.currentData()))
        self.status_combo.currentIndexChanged.connect(
            lambda _: self._set_field("operational_status_id", self.status_combo.currentData()))
        self.remarks_edit.textEdited.connect(lambda text: self._set_field("remarks", text))

        self.serials_editor.slotAdded.connect(lambda: self._change_slots(self.form_state.add_serial_slot, self.index))
        self.serials_editor.slotRemoved.connect(
            lambda slot: self._change_slots(self.form_state.remove_serial_slot, self.index, slot))
        self.serials_editor.slotEdited.connect(lambda slot, text: self.form_state.set_serial(self.index, slot, text))
        self.tags_editor.slotAdded.connect(lambda: self._change_slots(self.form_state.add_tag_slot, self.index))
        self.tags_editor.slotRemoved.connect(
            lambda slot: self._change_slots(self.form_state.remove_tag_slot, self.index, slot))
        self.tags_editor.slotEdited.connect(lambda slot, text: self.form_state.set_tag(self.index, slot, text))

        self.remove_button.clicked.connect(self._remove_self)

    def _set_field(self, name: str, value: Any):
        self.form_state.set_location_field(self.index, name, value)

    def _change_slots(self, operation, *args):
        operation(*args)
        self.structureChanged.emit()

    def _remove_self(self):
        self.form_state.remove_location(self.index)
        self.structureChanged.emit()

    def load(self, location: ReceiptLocationEntity, errors: Dict[str, str], can_remove: bool):
        """Shows `location` without echoing the values back into the form state."""
        self.setTitle(f"Location {self.index + 1}")
        _select_combo_value(self.location_combo, location.location_id)
        self.quantity_spinbox.blockSignals(True)
        self.quantity_spinbox.setValue(location.quantity or 0)
        self.quantity_spinbox.blockSignals(False)
        if self.licence_plate_edit.text() != location.licence_plate:
            self.licence_plate_edit.setText(location.licence_plate)
        self.manufacture_date_edit.setDate(location.manufacture_date, emit=False)
        _select_combo_value(self.condition_combo, location.condition_id)
        _select_combo_value(self.status_combo, location.operational_status_id)
        if self.remarks_edit.text() != location.remarks:
            self.remarks_edit.setText(location.remarks)
        self.serials_editor.set_values(location.serial_numbers)
        self.tags_editor.set_values(location.tag_numbers)
        self.remove_button.setVisible(can_remove)

        _show_error(self.location_error, errors.get(location_error_key(self.index, "location_id"), ""))
        _show_error(self.quantity_error, errors.get(location_error_key(self.index, "quantity"), ""))


# --- Dialog for creating or editing a receipt ---
class AssetReceiptDialog(QDialog):
    def __init__(self, receipt_manager: AssetReceiptManager, parent=None):
        super().__init__(parent)
        self.receipt_manager = receipt_manager
        self.form_state = receipt_manager.form_state
        self.reference_data = receipt_manager.reference_data
        self.is_edit_mode = isinstance(receipt_manager.mode, EditMode)
        self._location_widgets: List[ReceiptLocationWidget] = []

        title = "New Asset Receipt"
        if self.is_edit_mode:
            title = f"Edit Asset Receipt #{receipt_manager.mode.receipt_id}"
        self.setWindowTitle(title)
        self.setMinimumSize(760, 600)

        self._setup_ui()
        self._refresh()

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        form_layout = QFormLayout()

        self.asset_combo = QComboBox(self)
        _fill_combo(self.asset_combo, self.reference_data.asset_options(), "-- Select asset --")
        self.asset_error = _error_label(self)

        self.receipt_date_edit = OptionalDateEdit(parent=self)
        self.receipt_date_error = _error_label(self)

        self.received_by_edit = QLineEdit(self)
        self.received_by_error = _error_label(self)

        self.remarks_edit = QTextEdit(self)
        self.remarks_edit.setFixedHeight(60)

        form_layout.addRow("Asset *", self.asset_combo)
        form_layout.addRow("", self.asset_error)
        form_layout.addRow("Receipt Date *", self.receipt_date_edit)
        form_layout.addRow("", self.receipt_date_error)
        form_layout.addRow("Received By *", self.received_by_edit)
        form_layout.addRow("", self.received_by_error)
        form_layout.addRow("Remarks", self.remarks_edit)
        main_layout.addLayout(form_layout)

        locations_header = QHBoxLayout()
        locations_header.addWidget(QLabel("<b>Locations</b>"))
        locations_header.addStretch()
        self.add_location_button = QPushButton("+ Add location", self)
        locations_header.addWidget(self.add_location_button)
        main_layout.addLayout(locations_header)

        self.locations_container = QWidget(self)
        self.locations_layout = QVBoxLayout(self.locations_container)
        self.locations_layout.addStretch()
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.locations_container)
        main_layout.addWidget(scroll, 1)

        buttons = QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        self.button_box = QDialogButtonBox(buttons, Qt.Orientation.Horizontal, self) # type: ignore
        self.ok_button = self.button_box.button(QDialogButtonBox.StandardButton.Ok)
        if self.ok_button:
            self.ok_button.setText("Update Receipt" if self.is_edit_mode else "Create Receipt")
        main_layout.addWidget(self.button_box)

        self.asset_combo.currentIndexChanged.connect(
            lambda _: self._set_field("asset_id", self.asset_combo.currentData()))
        self.receipt_date_edit.dateChanged.connect(lambda d: self._set_field("receipt_date", d))
        self.received_by_edit.textEdited.connect(lambda text: self._set_field("received_by", text))
        self.remarks_edit.textChanged.connect(
            lambda: self.form_state.set_field("remarks", self.remarks_edit.toPlainText()))
        self.add_location_button.clicked.connect(self._add_location)
        self.button_box.accepted.connect(self._submit)
        self.button_box.rejected.connect(self.reject)

    def _set_field(self, name: str, value: Any):
        self.form_state.set_field(name, value)
        self._refresh_receipt_errors()

    def _add_location(self):
        self.form_state.add_location()
        self._refresh()

    def _refresh_receipt_errors(self):
        _show_error(self.asset_error, self.form_state.error_for("asset_id"))
        _show_error(self.receipt_date_error, self.form_state.error_for("receipt_date"))
        _show_error(self.received_by_error, self.form_state.error_for("received_by"))

    def _refresh(self):
        """Re-renders the whole form from the current draft and errors."""
        draft = self.form_state.draft
        errors = self.form_state.errors

        _select_combo_value(self.asset_combo, draft.asset_id)
        self.receipt_date_edit.setDate(draft.receipt_date, emit=False)
        if self.received_by_edit.text() != draft.received_by:
            self.received_by_edit.setText(draft.received_by)
        if self.remarks_edit.toPlainText() != draft.remarks:
            self.remarks_edit.blockSignals(True)
            self.remarks_edit.setPlainText(draft.remarks)
            self.remarks_edit.blockSignals(False)
        self._refresh_receipt_errors()

        while len(self._location_widgets) > len(draft.locations):
            widget = self._location_widgets.pop()
            self.locations_layout.removeWidget(widget)
            widget.setParent(None)
            widget.deleteLater()
        while len(self._location_widgets) < len(draft.locations):
            widget = ReceiptLocationWidget(self.form_state, self.reference_data,
                                           len(self._location_widgets), self.locations_container)
            widget.structureChanged.connect(self._refresh)
            # keep the trailing stretch last
            self.locations_layout.insertWidget(self.locations_layout.count() - 1, widget)
            self._location_widgets.append(widget)

        can_remove = len(draft.locations) > 1
        for widget, location in zip(self._location_widgets, draft.locations):
            widget.load(location, errors, can_remove)

    def _submit(self):
        if self.ok_button: self.ok_button.setEnabled(False)
        try:
            saved = self.receipt_manager.submit()
        finally:
            if self.ok_button: self.ok_button.setEnabled(True)
        if saved:
            self.accept()
        else:
            self._refresh()

    def reject(self):
        if not isinstance(self.receipt_manager.mode, ListMode):
            self.receipt_manager.cancel()
        super().reject()


# --- Read-only details of one receipt ---
class AssetReceiptDetailsDialog(QDialog):
    def __init__(self, receipt_manager: AssetReceiptManager, receipt: AssetReceiptEntity, parent=None):
        super().__init__(parent)
        self.receipt_manager = receipt_manager
        self.receipt = receipt
        self.edit_requested = False
        ref = receipt_manager.reference_data

        self.setWindowTitle(f"Asset Receipt #{receipt.id}")
        self.setMinimumSize(600, 450)
        main_layout = QVBoxLayout(self)

        form_layout = QFormLayout()
        form_layout.addRow("Asset:", QLabel(ref.asset_name(receipt.asset_id)))
        form_layout.addRow("Receipt Date:", QLabel(date_converter.to_display_str(receipt.display_date)))
        form_layout.addRow("Received By:", QLabel(receipt.received_by or "-"))
        form_layout.addRow("Remarks:", QLabel(receipt.remarks or "-"))
        form_layout.addRow("Created:", QLabel(date_converter.to_display_str(receipt.created_at)))
        main_layout.addLayout(form_layout)

        container = QWidget(self)
        locations_layout = QVBoxLayout(container)
        if not receipt.locations:
            locations_layout.addWidget(QLabel("No locations recorded."))
        for i, loc in enumerate(receipt.locations):
            box = QGroupBox(f"Location {i + 1}", container)
            box_layout = QFormLayout(box)
            box_layout.addRow("Location:", QLabel(ref.location_name(loc.location_id)))
            box_layout.addRow("Quantity:", QLabel(str(loc.quantity) if loc.quantity is not None else "-"))
            box_layout.addRow("Licence Plate:", QLabel(loc.licence_plate or "-"))
            box_layout.addRow("Manufacture Date:", QLabel(date_converter.to_display_str(loc.manufacture_date)))
            box_layout.addRow("Condition:", QLabel(ref.condition_name(loc.condition_id)))
            box_layout.addRow("Operational Status:", QLabel(ref.status_name(loc.operational_status_id)))
            box_layout.addRow("Remarks:", QLabel(loc.remarks or "-"))
            box_layout.addRow("Serial Numbers:", QLabel(", ".join(s for s in loc.serial_numbers if s) or "-"))
            box_layout.addRow("Tag Numbers:", QLabel(", ".join(t for t in loc.tag_numbers if t) or "-"))
            locations_layout.addWidget(box)
        locations_layout.addStretch()
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(container)
        main_layout.addWidget(scroll, 1)

        button_layout = QHBoxLayout()
        button_layout.addStretch()
        self.edit_button = QPushButton("Edit", self)
        self.edit_button.setVisible(receipt_manager.permission_policy.can_edit(receipt))
        self.close_button = QPushButton("Back to list", self)
        button_layout.addWidget(self.edit_button)
        button_layout.addWidget(self.close_button)
        main_layout.addLayout(button_layout)

        self.edit_button.clicked.connect(self._request_edit)
        self.close_button.clicked.connect(self.reject)

    def _request_edit(self):
        self.edit_requested = True
        self.accept()


class AssetReceiptsUI(QWidget):
    def __init__(self, receipt_manager: AssetReceiptManager, parent=None, load_on_init: bool = True):
        super().__init__(parent)
        self.receipt_manager = receipt_manager
        if self.receipt_manager.notifier is None:
            self.receipt_manager.notifier = self.show_notification

        self.table_model = AssetReceiptTableModel(reference_data=self.receipt_manager.reference_data)
        self._init_ui()
        if load_on_init:
            self.load_receipts_data()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        list_view = self.receipt_manager.list_view

        # Search and filters
        filter_layout = QHBoxLayout()
        self.search_edit = QLineEdit(self)
        self.search_edit.setPlaceholderText("Search by ID, asset, tag or receiver...")
        self.asset_filter_combo = QComboBox(self)
        self.date_filter_edit = OptionalDateEdit(parent=self)
        self.clear_filters_button = QPushButton("Clear filters", self)
        self.add_button = QPushButton("New receipt", self)

        filter_layout.addWidget(self.search_edit, 2)
        filter_layout.addWidget(QLabel("Asset:"))
        filter_layout.addWidget(self.asset_filter_combo, 1)
        filter_layout.addWidget(QLabel("Created on:"))
        filter_layout.addWidget(self.date_filter_edit)
        filter_layout.addWidget(self.clear_filters_button)
        filter_layout.addStretch()
        filter_layout.addWidget(self.add_button)
        main_layout.addLayout(filter_layout)

        self.receipt_table_view = QTableView()
        self.receipt_table_view.setModel(self.table_model)
        self.receipt_table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.receipt_table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.receipt_table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.receipt_table_view.setAlternatingRowColors(True)
        header = self.receipt_table_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        main_layout.addWidget(self.receipt_table_view)

        # Actions
        button_layout = QHBoxLayout()
        self.view_button = QPushButton("View")
        self.edit_button = QPushButton("Edit")
        self.delete_button = QPushButton("Delete")
        self.refresh_button = QPushButton("Refresh")
        button_layout.addWidget(self.view_button)
        button_layout.addWidget(self.edit_button)
        button_layout.addWidget(self.delete_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)

        # Pager
        pager_layout = QHBoxLayout()
        self.showing_label = QLabel("")
        self.page_size_combo = QComboBox(self)
        for size in PAGE_SIZE_OPTIONS:
            self.page_size_combo.addItem(str(size), size)
        self.page_size_combo.setCurrentIndex(max(0, self.page_size_combo.findData(list_view.paginator.page_size)))
        self.first_button = QPushButton("«")
        self.previous_button = QPushButton("‹")
        self.page_label = QLabel("")
        self.next_button = QPushButton("›")
        self.last_button = QPushButton("»")
        pager_layout.addWidget(self.showing_label)
        pager_layout.addStretch()
        pager_layout.addWidget(QLabel("Rows per page:"))
        pager_layout.addWidget(self.page_size_combo)
        for w in (self.first_button, self.previous_button, self.page_label, self.next_button, self.last_button):
            pager_layout.addWidget(w)
        main_layout.addLayout(pager_layout)

        self.search_edit.textChanged.connect(self._on_search_changed)
        self.asset_filter_combo.currentIndexChanged.connect(self._on_asset_filter_changed)
        self.date_filter_edit.dateChanged.connect(self._on_date_filter_changed)
        self.clear_filters_button.clicked.connect(self._clear_filters)
        self.page_size_combo.currentIndexChanged.connect(self._on_page_size_changed)
        self.first_button.clicked.connect(lambda: self._show_page(list_view.first_page()))
        self.previous_button.clicked.connect(lambda: self._show_page(list_view.previous_page()))
        self.next_button.clicked.connect(lambda: self._show_page(list_view.next_page()))
        self.last_button.clicked.connect(lambda: self._show_page(list_view.last_page()))

        self.add_button.clicked.connect(self._open_add_receipt_dialog)
        self.view_button.clicked.connect(self._open_view_dialog)
        self.edit_button.clicked.connect(lambda: self._open_edit_receipt_dialog())
        self.delete_button.clicked.connect(self._delete_selected_receipt)
        self.refresh_button.clicked.connect(self.load_receipts_data)
        self.receipt_table_view.doubleClicked.connect(lambda _: self._open_view_dialog())
        self.receipt_table_view.selectionModel().selectionChanged.connect(lambda *_: self._update_action_buttons())

        self._update_action_buttons()
        logger.info("AssetReceiptsUI initialized.")

    # --- notifications ---

    def show_notification(self, level: NotificationLevel, message: str):
        if level == NotificationLevel.SUCCESS:
            QMessageBox.information(self, "Success", message)
        else:
            QMessageBox.warning(self, "Error", message)

    # --- data ---

    def load_receipts_data(self):
        logger.debug("Loading asset receipts and reference data...")
        self.receipt_manager.load_all()
        _fill_combo(self.asset_filter_combo, self.receipt_manager.reference_data.asset_options(), "All assets")
        _select_combo_value(self.asset_filter_combo, self.receipt_manager.list_view.filters.asset or None)
        self._refresh_table()

    def _refresh_table(self):
        self._show_page(self.receipt_manager.current_page())

    def _show_page(self, page_view):
        self.table_model.update_data(page_view.items)
        self.showing_label.setText(
            f"Showing {page_view.first_item_number} to {page_view.last_item_number} of {page_view.total_count}")
        self.page_label.setText(f"Page {page_view.page} of {page_view.display_total_pages}")
        for w in (self.first_button, self.previous_button, self.page_label, self.next_button, self.last_button):
            w.setVisible(page_view.show_controls)
        self.first_button.setEnabled(page_view.has_previous)
        self.previous_button.setEnabled(page_view.has_previous)
        self.next_button.setEnabled(page_view.has_next)
        self.last_button.setEnabled(page_view.has_next)
        self._update_action_buttons()

    def _on_search_changed(self, text: str):
        self.receipt_manager.list_view.set_search_term(text)
        self._refresh_table()

    def _on_asset_filter_changed(self, _index: int):
        self.receipt_manager.list_view.set_asset_filter(self.asset_filter_combo.currentData())
        self._refresh_table()

    def _on_date_filter_changed(self, value):
        self.receipt_manager.list_view.set_date_filter(date_converter.to_iso_str(value))
        self._refresh_table()

    def _on_page_size_changed(self, _index: int):
        size = self.page_size_combo.currentData()
        if size:
            self.receipt_manager.list_view.set_page_size(int(size))
            self._refresh_table()

    def _clear_filters(self):
        for w in (self.search_edit, self.asset_filter_combo, self.date_filter_edit):
            w.blockSignals(True)
        self.search_edit.clear()
        self.asset_filter_combo.setCurrentIndex(0)
        self.date_filter_edit.setDate(None, emit=False)
        for w in (self.search_edit, self.asset_filter_combo, self.date_filter_edit):
            w.blockSignals(False)
        self.receipt_manager.list_view.clear_filters()
        self._refresh_table()

    # --- actions ---

    def _selected_receipt(self) -> Optional[AssetReceiptEntity]:
        selection_model = self.receipt_table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            return None
        return self.table_model.get_receipt_at_row(selection_model.selectedRows()[0].row())

    def _update_action_buttons(self):
        policy = self.receipt_manager.permission_policy
        receipt = self._selected_receipt()
        self.add_button.setVisible(policy.can_create())
        self.view_button.setEnabled(receipt is not None and policy.can_view())
        self.edit_button.setEnabled(receipt is not None and policy.can_edit(receipt))
        self.delete_button.setEnabled(receipt is not None and policy.can_delete(receipt))

    def _run_form_dialog(self):
        dialog = AssetReceiptDialog(self.receipt_manager, parent=self)
        dialog.exec_()
        if not isinstance(self.receipt_manager.mode, ListMode):
            self.receipt_manager.cancel()
        self._refresh_table()

    def _open_add_receipt_dialog(self):
        try:
            self.receipt_manager.start_create()
        except PermissionError as pe:
            QMessageBox.warning(self, "Not allowed", str(pe))
            return
        logger.debug("Opening create receipt dialog.")
        self._run_form_dialog()

    def _open_edit_receipt_dialog(self, receipt: Optional[AssetReceiptEntity] = None):
        receipt = receipt or self._selected_receipt()
        if receipt is None:
            QMessageBox.information(self, "No selection", "Please select a receipt to edit.")
            return
        try:
            self.receipt_manager.start_edit(receipt)
        except (PermissionError, ValueError) as e:
            QMessageBox.warning(self, "Not allowed", str(e))
            return
        logger.debug(f"Opening edit dialog for receipt {receipt.id}.")
        self._run_form_dialog()

    def _open_view_dialog(self):
        receipt = self._selected_receipt()
        if receipt is None:
            QMessageBox.information(self, "No selection", "Please select a receipt to view.")
            return
        try:
            self.receipt_manager.start_view(receipt)
        except PermissionError as pe:
            QMessageBox.warning(self, "Not allowed", str(pe))
            return
        dialog = AssetReceiptDetailsDialog(self.receipt_manager, receipt, parent=self)
        dialog.exec_()
        self.receipt_manager.back_to_list()
        if dialog.edit_requested:
            self._open_edit_receipt_dialog(receipt)

    def _delete_selected_receipt(self):
        receipt = self._selected_receipt()
        if receipt is None:
            QMessageBox.information(self, "No selection", "Please select a receipt to delete.")
            return
        try:
            self.receipt_manager.request_delete(receipt)
        except (PermissionError, ValueError, RuntimeError) as e:
            QMessageBox.warning(self, "Not allowed", str(e))
            return

        # Stay in the confirmation loop until the delete succeeds or the user backs out
        while self.receipt_manager.pending_delete is not None:
            reply = QMessageBox.question(
                self, "Delete receipt",
                f"Are you sure you want to delete asset receipt #{receipt.id}? This action cannot be undone.",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No)
            if reply != QMessageBox.StandardButton.Yes:
                self.receipt_manager.cancel_delete()
                break
            self.receipt_manager.confirm_delete()
        self._refresh_table()
