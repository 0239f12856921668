# asset_receiving/business_logic/__init__.py
from .receipt_form_state import ReceiptFormState, new_empty_draft, new_empty_location, hydrate_draft
from .receipt_validator import validate_receipt, location_error_key
from .receipt_list_filter import ReceiptFilters, filter_receipts
from .paginator import Paginator, PageView, paginate
from .receipt_list_view import ReceiptListView
from .view_modes import ListMode, CreateMode, EditMode, ViewMode
from .permission_policy import ReceiptPermissionPolicy

# Managers that talk to data_access (SessionManager, ReferenceDataManager,
# AssetReceiptManager) are imported from their modules directly.
