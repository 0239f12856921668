# asset_receiving/business_logic/receipt_validator.py

from typing import Dict

from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.constants import (
    MSG_ASSET_REQUIRED, MSG_RECEIPT_DATE_REQUIRED, MSG_RECEIVED_BY_REQUIRED,
    MSG_LOCATION_REQUIRED, MSG_QUANTITY_MIN,
)


def location_error_key(index: int, field_name: str) -> str:
    return f"location_{index}_{field_name}"


def validate_receipt(draft: AssetReceiptEntity) -> Dict[str, str]:
    """
    Returns field key -> message for every rule the draft breaks; an empty
    dict means the draft may be submitted.

    Serial and tag slots are not checked: blank or repeated entries are sent
    to the backend as they are.
    """
    errors: Dict[str, str] = {}

    if draft.asset_id in (None, ""):
        errors["asset_id"] = MSG_ASSET_REQUIRED
    if not draft.receipt_date:
        errors["receipt_date"] = MSG_RECEIPT_DATE_REQUIRED
    if not (draft.received_by or "").strip():
        errors["received_by"] = MSG_RECEIVED_BY_REQUIRED

    for idx, loc in enumerate(draft.locations):
        if loc.location_id in (None, ""):
            errors[location_error_key(idx, "location_id")] = MSG_LOCATION_REQUIRED
        if loc.quantity is None or loc.quantity < 1:
            errors[location_error_key(idx, "quantity")] = MSG_QUANTITY_MIN

    return errors
