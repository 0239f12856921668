# asset_receiving/presentation/login_dialog.py

from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QLabel, QDialogButtonBox, QMessageBox
)
from PyQt5.QtCore import Qt

from asset_receiving.business_logic.session_manager import SessionManager
import logging

logger = logging.getLogger(__name__)


class LoginDialog(QDialog):
    """Email/password prompt. Accepted only once the backend issued a token."""

    def __init__(self, session_manager: SessionManager, message: str = "", parent=None):
        super().__init__(parent)
        self.session_manager = session_manager
        self.setWindowTitle("Sign in")
        self.setModal(True)
        self.setMinimumWidth(360)

        main_layout = QVBoxLayout(self)
        self.info_label = QLabel(message, self)
        self.info_label.setWordWrap(True)
        self.info_label.setVisible(bool(message))
        main_layout.addWidget(self.info_label)

        form_layout = QFormLayout()
        self.email_edit = QLineEdit(self)
        self.password_edit = QLineEdit(self)
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        form_layout.addRow("Email:", self.email_edit)
        form_layout.addRow("Password:", self.password_edit)
        main_layout.addLayout(form_layout)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
            Qt.Orientation.Horizontal, self)
        ok_button = self.button_box.button(QDialogButtonBox.StandardButton.Ok)
        if ok_button: ok_button.setText("Sign in")
        main_layout.addWidget(self.button_box)

        self.button_box.accepted.connect(self._try_login)
        self.button_box.rejected.connect(self.reject)

    def _try_login(self):
        email = self.email_edit.text().strip()
        password = self.password_edit.text()
        if not email or not password:
            QMessageBox.warning(self, "Sign in", "Please enter your email and password.")
            return

        success, error = self.session_manager.login(email, password)
        if success:
            logger.info(f"Signed in as {email}.")
            self.accept()
            return
        self.password_edit.clear()
        QMessageBox.warning(self, "Sign in", error or "Login failed")
