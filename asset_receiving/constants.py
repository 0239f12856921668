# asset_receiving/constants.py

from enum import Enum

# General
DATE_FORMAT = "%Y-%m-%d"

class Permission(Enum):
    CREATE_ASSET_RECEIPT = "create_asset_receipt"
    VIEW_ASSET_RECEIPT = "view_asset_receipt"
    EDIT_ASSET_RECEIPT = "edit_asset_receipt"
    DELETE_ASSET_RECEIPT = "delete_asset_receipt"
    MANAGE_ASSET_RECEIPTS = "manage_asset_receipts" # grants all of the above

class ScreenMode(Enum):
    LIST = "list"
    CREATE = "create"
    EDIT = "edit"
    VIEW = "view"

class NotificationLevel(Enum):
    SUCCESS = "success"
    ERROR = "error"

class ResourcePath(Enum):
    ASSET_RECEIPTS = "/store-asset-receipt"
    ASSETS = "/assets"
    LOCATIONS = "/locations"
    CONDITIONS = "/conditions"
    OPERATIONAL_STATUSES = "/operational-statuses"


# --- Validation messages ---
MSG_ASSET_REQUIRED = "Asset is required"
MSG_RECEIPT_DATE_REQUIRED = "Receipt date is required"
MSG_RECEIVED_BY_REQUIRED = "Received by is required"
MSG_LOCATION_REQUIRED = "Location is required"
MSG_QUANTITY_MIN = "Quantity must be at least 1"

# --- Notifications ---
MSG_FIX_VALIDATION_ERRORS = "Please fix the validation errors"
MSG_RECEIPT_CREATED = "Asset receipt created successfully"
MSG_RECEIPT_UPDATED = "Asset receipt updated successfully"
MSG_RECEIPT_DELETED = "Asset receipt deleted successfully"
MSG_SAVE_FAILED = "Failed to save asset receipt"
MSG_DELETE_FAILED = "Failed to delete asset receipt"
MSG_LOGIN_FAILED = "Login failed"
