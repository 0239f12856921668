# asset_receiving/presentation/custom_widgets.py

from PyQt5.QtWidgets import (
    QWidget, QLineEdit, QPushButton, QHBoxLayout, QCalendarWidget, QDialog,
    QVBoxLayout, QLabel, QDialogButtonBox
)
from PyQt5.QtCore import Qt, pyqtSignal
from datetime import date
from typing import List, Optional, Sequence
import logging

from asset_receiving.utils import date_converter

logger = logging.getLogger(__name__)


class CalendarDialog(QDialog):
    """Modal month calendar; emits the picked day as a python date."""
    dateSelected = pyqtSignal(date)

    def __init__(self, initial_date: Optional[date] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Select date")
        self.setModal(True)
        layout = QVBoxLayout(self)

        self.calendar = QCalendarWidget(self)
        self.calendar.setGridVisible(True)
        self.calendar.setSelectedDate(date_converter.to_qdate(initial_date))
        layout.addWidget(self.calendar)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel, self)
        layout.addWidget(buttons)

        self.calendar.activated.connect(self._emit_and_close)
        buttons.accepted.connect(self._emit_and_close)
        buttons.rejected.connect(self.reject)

    def _emit_and_close(self, *_):
        self.dateSelected.emit(date_converter.from_qdate(self.calendar.selectedDate()))
        self.accept()


class OptionalDateEdit(QWidget):
    """
    Date field that may be left empty, unlike QDateEdit.
    The text is shown in the configured display calendar; `date()` is always Gregorian.
    """
    dateChanged = pyqtSignal(object) # date or None

    def __init__(self, initial_date: Optional[date] = None, allow_clear: bool = True, parent=None):
        super().__init__(parent)
        self._gregorian_date: Optional[date] = None

        self.main_layout = QHBoxLayout(self)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

        self.line_edit = QLineEdit(self)
        self.line_edit.setReadOnly(True)
        self.line_edit.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.line_edit.setPlaceholderText("Not set")

        self.calendar_button = QPushButton("📅", self)
        self.calendar_button.setFixedWidth(40)
        self.clear_button = QPushButton("✕", self)
        self.clear_button.setFixedWidth(30)
        self.clear_button.setVisible(allow_clear)

        self.main_layout.addWidget(self.line_edit)
        self.main_layout.addWidget(self.calendar_button)
        self.main_layout.addWidget(self.clear_button)

        self.calendar_button.clicked.connect(self.open_calendar)
        self.clear_button.clicked.connect(lambda: self.setDate(None))

        self.setDate(initial_date, emit=False)

    def open_calendar(self):
        dialog = CalendarDialog(initial_date=self._gregorian_date, parent=self)
        dialog.dateSelected.connect(self.setDate)
        dialog.exec_()

    def setDate(self, gregorian_date: Optional[date], emit: bool = True):
        if gregorian_date is not None and not isinstance(gregorian_date, date):
            logger.warning(f"OptionalDateEdit ignoring non-date value: {gregorian_date!r}")
            return
        self._gregorian_date = gregorian_date
        self.line_edit.setText(date_converter.to_display_str(gregorian_date) if gregorian_date else "")
        if emit:
            self.dateChanged.emit(self._gregorian_date)

    def date(self) -> Optional[date]:
        return self._gregorian_date

    def setReadOnly(self, read_only: bool):
        self.calendar_button.setEnabled(not read_only)
        self.clear_button.setEnabled(not read_only)


class SlotListEditor(QWidget):
    """
    A titled, variable-length list of line edits (serial numbers, tag numbers).
    The widget only reports user intent; the owner updates its model and calls
    `set_values` when the number of slots changes.
    """
    slotAdded = pyqtSignal()
    slotRemoved = pyqtSignal(int)
    slotEdited = pyqtSignal(int, str)

    def __init__(self, title: str, placeholder: str = "", parent=None):
        super().__init__(parent)
        self._placeholder = placeholder
        self._edits: List[QLineEdit] = []

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

        header = QHBoxLayout()
        self.title_label = QLabel(title, self)
        self.title_label.setStyleSheet("font-weight: bold;")
        self.add_button = QPushButton("+ Add", self)
        self.add_button.clicked.connect(self.slotAdded.emit)
        header.addWidget(self.title_label)
        header.addStretch()
        header.addWidget(self.add_button)
        self.main_layout.addLayout(header)

        self.rows_layout = QVBoxLayout()
        self.main_layout.addLayout(self.rows_layout)

    def values(self) -> List[str]:
        return [edit.text() for edit in self._edits]

    def set_values(self, values: Sequence[str]):
        if [v or "" for v in values] == self.values():
            return
        while self.rows_layout.count():
            item = self.rows_layout.takeAt(0)
            row_widget = item.widget()
            if row_widget is not None:
                row_widget.setParent(None)
                row_widget.deleteLater()
        self._edits = []

        for slot_index, value in enumerate(values):
            row = QWidget(self)
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)

            edit = QLineEdit(value or "", row)
            edit.setPlaceholderText(self._placeholder)
            edit.textEdited.connect(lambda text, i=slot_index: self.slotEdited.emit(i, text))
            remove_button = QPushButton("−", row)
            remove_button.setFixedWidth(30)
            remove_button.clicked.connect(lambda _checked=False, i=slot_index: self.slotRemoved.emit(i))

            row_layout.addWidget(edit)
            row_layout.addWidget(remove_button)
            self.rows_layout.addWidget(row)
            self._edits.append(edit)

    def setReadOnly(self, read_only: bool):
        self.add_button.setVisible(not read_only)
        for edit in self._edits:
            edit.setReadOnly(read_only)
