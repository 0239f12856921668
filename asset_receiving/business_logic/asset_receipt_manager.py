# asset_receiving/business_logic/asset_receipt_manager.py

from datetime import date
from typing import Callable, List, Optional
import logging

from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.business_logic.paginator import PageView
from asset_receiving.business_logic.permission_policy import ReceiptPermissionPolicy
from asset_receiving.business_logic.receipt_form_state import ReceiptFormState, new_empty_draft, hydrate_draft
from asset_receiving.business_logic.receipt_list_view import ReceiptListView
from asset_receiving.business_logic.receipt_validator import validate_receipt
from asset_receiving.business_logic.reference_data_manager import ReferenceDataManager
from asset_receiving.business_logic.view_modes import (
    ListMode, CreateMode, EditMode, ViewMode, ReceiptScreenMode
)
from asset_receiving.constants import (
    NotificationLevel, MSG_FIX_VALIDATION_ERRORS, MSG_RECEIPT_CREATED, MSG_RECEIPT_UPDATED,
    MSG_RECEIPT_DELETED, MSG_SAVE_FAILED, MSG_DELETE_FAILED
)
from asset_receiving.data_access.api_client import ApiError
from asset_receiving.data_access.asset_receipts_repository import AssetReceiptsRepository

logger = logging.getLogger(__name__)

Notifier = Callable[[NotificationLevel, str], None]


class AssetReceiptManager:
    """
    Drives the receipt screen: list, create, edit and view modes, plus the
    delete confirmation. Owns the form draft and the list view; everything
    the user is told goes through `notifier(level, message)`.
    """

    def __init__(self,
                 receipts_repository: AssetReceiptsRepository,
                 reference_data: ReferenceDataManager,
                 permission_policy: ReceiptPermissionPolicy,
                 notifier: Optional[Notifier] = None,
                 list_view: Optional[ReceiptListView] = None,
                 today_provider: Callable[[], date] = date.today):
        if receipts_repository is None: raise ValueError("receipts_repository cannot be None")
        if reference_data is None: raise ValueError("reference_data cannot be None")
        if permission_policy is None: raise ValueError("permission_policy cannot be None")

        self.receipts_repository = receipts_repository
        self.reference_data = reference_data
        self.permission_policy = permission_policy
        self.notifier = notifier
        self.list_view = list_view if list_view is not None else ReceiptListView()
        self._today = today_provider

        self.form_state = ReceiptFormState(new_empty_draft(self._today()))
        self._mode: ReceiptScreenMode = ListMode()
        self._pending_delete: Optional[AssetReceiptEntity] = None
        self._busy = False

    @property
    def mode(self) -> ReceiptScreenMode:
        return self._mode

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def pending_delete(self) -> Optional[AssetReceiptEntity]:
        return self._pending_delete

    @property
    def selected_receipt(self) -> Optional[AssetReceiptEntity]:
        return self._mode.receipt if isinstance(self._mode, ViewMode) else None

    def _notify(self, level: NotificationLevel, message: str) -> None:
        if self.notifier is not None:
            self.notifier(level, message)

    # --- loading ---

    def load_all(self) -> None:
        self.reference_data.load_all()
        self.list_view.set_assets(self.reference_data.assets)
        self.refresh_receipts()

    def refresh_receipts(self) -> List[AssetReceiptEntity]:
        receipts = self.receipts_repository.get_all()
        self.list_view.set_receipts(receipts)
        logger.debug(f"{len(receipts)} receipts in list.")
        return receipts

    def current_page(self) -> PageView[AssetReceiptEntity]:
        return self.list_view.current_page()

    # --- mode transitions ---

    def start_create(self) -> None:
        if not self.permission_policy.can_create():
            raise PermissionError("You are not allowed to create asset receipts.")
        self.form_state.reset(new_empty_draft(self._today()))
        self._mode = CreateMode()
        logger.debug("Entered create mode.")

    def start_edit(self, receipt: AssetReceiptEntity) -> None:
        if receipt is None or receipt.id is None:
            raise ValueError("Only stored receipts can be edited.")
        if not self.permission_policy.can_edit(receipt):
            raise PermissionError("You are not allowed to edit this asset receipt.")
        self.form_state.reset(hydrate_draft(receipt))
        self._mode = EditMode(receipt.id)
        logger.debug(f"Entered edit mode for receipt {receipt.id}.")

    def start_view(self, receipt: AssetReceiptEntity) -> None:
        if not self.permission_policy.can_view():
            raise PermissionError("You are not allowed to view asset receipts.")
        self._mode = ViewMode(receipt)

    def cancel(self) -> None:
        """Leaves the form (or the details view) without saving."""
        if isinstance(self._mode, (CreateMode, EditMode)):
            self.form_state.reset(new_empty_draft(self._today()))
        self._mode = ListMode()

    def back_to_list(self) -> None:
        self._mode = ListMode()

    # --- submit ---

    def submit(self) -> bool:
        """
        Validates the draft and, if clean, sends it as a create or update.
        Returns True when the receipt was saved and the screen is back on the list.
        """
        if not isinstance(self._mode, (CreateMode, EditMode)):
            raise RuntimeError("submit is only available while creating or editing a receipt.")
        if self._busy:
            logger.warning("Submit ignored; a request is already in flight.")
            return False

        draft = self.form_state.draft
        errors = validate_receipt(draft)
        if errors:
            self.form_state.replace_errors(errors)
            logger.info(f"Receipt draft rejected with {len(errors)} validation error(s).")
            self._notify(NotificationLevel.ERROR, MSG_FIX_VALIDATION_ERRORS)
            return False
        self.form_state.clear_errors()

        self._busy = True
        try:
            if isinstance(self._mode, EditMode):
                self.receipts_repository.update(self._mode.receipt_id, draft)
                logger.info(f"Receipt {self._mode.receipt_id} updated.")
                message = MSG_RECEIPT_UPDATED
            else:
                self.receipts_repository.add(draft)
                logger.info("Receipt created.")
                message = MSG_RECEIPT_CREATED
        except ApiError as e:
            logger.error(f"Error saving receipt: {e}", exc_info=True)
            self._notify(NotificationLevel.ERROR, e.message or MSG_SAVE_FAILED)
            return False
        finally:
            self._busy = False

        self._notify(NotificationLevel.SUCCESS, message)
        self.refresh_receipts()
        self.form_state.reset(new_empty_draft(self._today()))
        self._mode = ListMode()
        return True

    # --- delete ---

    def request_delete(self, receipt: AssetReceiptEntity) -> None:
        if not isinstance(self._mode, ListMode):
            raise RuntimeError("Receipts can only be deleted from the list.")
        if receipt is None or receipt.id is None:
            raise ValueError("Only stored receipts can be deleted.")
        if not self.permission_policy.can_delete(receipt):
            raise PermissionError("You are not allowed to delete this asset receipt.")
        self._pending_delete = receipt

    def cancel_delete(self) -> None:
        self._pending_delete = None

    def confirm_delete(self) -> bool:
        """Deletes the pending receipt. On failure it stays pending so the user can retry or cancel."""
        receipt = self._pending_delete
        if receipt is None or receipt.id is None:
            return False
        if self._busy:
            logger.warning("Delete ignored; a request is already in flight.")
            return False

        self._busy = True
        try:
            self.receipts_repository.delete(receipt.id)
        except ApiError as e:
            logger.error(f"Error deleting receipt {receipt.id}: {e}", exc_info=True)
            self._notify(NotificationLevel.ERROR, e.message or MSG_DELETE_FAILED)
            return False
        finally:
            self._busy = False

        logger.info(f"Receipt {receipt.id} deleted.")
        self._pending_delete = None
        self._notify(NotificationLevel.SUCCESS, MSG_RECEIPT_DELETED)
        self.refresh_receipts()
        return True
