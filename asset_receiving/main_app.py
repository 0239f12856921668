# asset_receiving/main_app.py
import sys
import logging
import logging.config
from PyQt5.QtWidgets import QApplication, QMainWindow, QTabWidget, QMessageBox, QAction, QDialog
from PyQt5.QtCore import QLocale, QTimer

# --- Configuration ---
from asset_receiving.config import DATABASE_PATH, API_BASE_URL, LOGGING_CONFIG

# --- Data Access Layer (DAL) ---
from asset_receiving.data_access.database_manager import DatabaseManager
from asset_receiving.data_access.settings_repository import SettingsRepository
from asset_receiving.data_access.api_client import ApiClient
from asset_receiving.data_access.asset_receipts_repository import AssetReceiptsRepository
from asset_receiving.data_access.assets_repository import AssetsRepository
from asset_receiving.data_access.reference_repositories import (
    LocationsRepository, ConditionsRepository, OperationalStatusesRepository
)

# --- Business Logic Layer (BLL) ---
from asset_receiving.business_logic.session_manager import SessionManager
from asset_receiving.business_logic.permission_policy import ReceiptPermissionPolicy
from asset_receiving.business_logic.reference_data_manager import ReferenceDataManager
from asset_receiving.business_logic.asset_receipt_manager import AssetReceiptManager

# --- Presentation Layer ---
from asset_receiving.presentation.asset_receipts_ui import AssetReceiptsUI
from asset_receiving.presentation.login_dialog import LoginDialog

logger = logging.getLogger(__name__)

class MainWindow(QMainWindow):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Asset Receiving")
        self.setGeometry(100, 100, 1200, 760)

        logger.info("Initializing local session store...")
        self.db_manager = DatabaseManager(DATABASE_PATH)
        try:
            self.db_manager.create_tables()
        except Exception as e:
            logger.error(f"FATAL: Could not initialize local database: {e}", exc_info=True)
            QMessageBox.critical(self, "Database error", f"Could not open the local session store: {e}")
            sys.exit(1)

        logger.info(f"Initializing API client for {API_BASE_URL}...")
        self.settings_repo = SettingsRepository(self.db_manager)
        self.api_client = ApiClient(API_BASE_URL)
        self.session_manager = SessionManager(self.settings_repo, self.api_client)
        self.session_manager.add_cleared_listener(self._on_session_cleared)
        self._relogin_pending = False

        logger.info("Initializing Repositories...")
        self.receipts_repo = AssetReceiptsRepository(self.api_client)
        self.assets_repo = AssetsRepository(self.api_client)
        self.locations_repo = LocationsRepository(self.api_client)
        self.conditions_repo = ConditionsRepository(self.api_client)
        self.statuses_repo = OperationalStatusesRepository(self.api_client)

        logger.info("Initializing Managers...")
        self.reference_data = ReferenceDataManager(
            assets_repository=self.assets_repo,
            locations_repository=self.locations_repo,
            conditions_repository=self.conditions_repo,
            statuses_repository=self.statuses_repo
        )
        self.permission_policy = ReceiptPermissionPolicy(self.session_manager)
        self.receipt_manager = AssetReceiptManager(
            receipts_repository=self.receipts_repo,
            reference_data=self.reference_data,
            permission_policy=self.permission_policy
        )

        logger.info("Setting up UI...")
        self._setup_ui()
        logger.info("MainWindow initialized and UI setup complete.")

    def _setup_ui(self):
        self.tabs = QTabWidget()
        self.asset_receipts_tab = AssetReceiptsUI(self.receipt_manager, parent=self, load_on_init=False)
        self.tabs.addTab(self.asset_receipts_tab, "Asset Receipts")
        self.setCentralWidget(self.tabs)

        account_menu = self.menuBar().addMenu("Account")
        logout_action = QAction("Log out", self)
        logout_action.triggered.connect(self.session_manager.logout)
        account_menu.addAction(logout_action)

    def ensure_logged_in(self, message: str = "") -> bool:
        if self.session_manager.is_authenticated:
            return True
        dialog = LoginDialog(self.session_manager, message=message, parent=self)
        return dialog.exec_() == QDialog.DialogCode.Accepted

    def start(self) -> bool:
        """Restores or asks for a session, then loads the receipt screen."""
        self.session_manager.load()
        if not self.ensure_logged_in():
            return False
        self.asset_receipts_tab.load_receipts_data()
        return True

    def _on_session_cleared(self):
        # Runs inside a failing request; prompt once the call stack has unwound
        if self._relogin_pending:
            return
        self._relogin_pending = True
        QTimer.singleShot(0, self._prompt_relogin)

    def _prompt_relogin(self):
        self._relogin_pending = False
        if self.ensure_logged_in("Your session has ended. Please sign in again."):
            self.asset_receipts_tab.load_receipts_data()
        else:
            logger.info("Login cancelled; closing application.")
            self.close()

def main():
    logging.config.dictConfig(LOGGING_CONFIG)
    logger.info("Application starting...")
    app = QApplication(sys.argv)
    english_locale = QLocale(QLocale.Language.English, QLocale.Country.UnitedStates)
    QLocale.setDefault(english_locale)

    main_window = MainWindow()
    main_window.show()
    if not main_window.start():
        logger.info("No session established; exiting.")
        sys.exit(0)
    logger.info("Application started successfully. Main window shown.")
    sys.exit(app.exec_())

if __name__ == '__main__':
    main()
