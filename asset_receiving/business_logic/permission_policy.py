# asset_receiving/business_logic/permission_policy.py

from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.constants import Permission


class ReceiptPermissionPolicy:
    """Which receipt actions the logged-in user may take. `session` only needs has_permission and current_user."""

    def __init__(self, session):
        if session is None:
            raise ValueError("session cannot be None")
        self.session = session

    def _any(self, *permissions: Permission) -> bool:
        return any(self.session.has_permission(p.value) for p in permissions)

    def can_create(self) -> bool:
        return self._any(Permission.CREATE_ASSET_RECEIPT, Permission.MANAGE_ASSET_RECEIPTS)

    def can_view(self) -> bool:
        return self._any(Permission.VIEW_ASSET_RECEIPT, Permission.MANAGE_ASSET_RECEIPTS)

    def can_edit(self, receipt: AssetReceiptEntity) -> bool:
        if self._any(Permission.EDIT_ASSET_RECEIPT, Permission.MANAGE_ASSET_RECEIPTS):
            return True
        # A receiver may always correct their own receipts
        user = self.session.current_user
        return user is not None and bool(user.name) and receipt.received_by == user.name

    def can_delete(self, receipt: AssetReceiptEntity) -> bool:
        return self._any(Permission.DELETE_ASSET_RECEIPT, Permission.MANAGE_ASSET_RECEIPTS)
