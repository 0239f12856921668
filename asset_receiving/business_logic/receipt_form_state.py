# asset_receiving/business_logic/receipt_form_state.py

from dataclasses import replace
from datetime import date
from typing import Any, Callable, Dict, Optional, Tuple

from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.business_logic.entities.receipt_location_entity import ReceiptLocationEntity
from asset_receiving.utils.date_converter import parse_date
import logging

logger = logging.getLogger(__name__)

RECEIPT_FIELDS = ("asset_id", "receipt_date", "received_by", "remarks")
LOCATION_FIELDS = (
    "location_id", "quantity", "licence_plate", "manufacture_date",
    "condition_id", "operational_status_id", "remarks",
)
_ID_FIELDS = ("asset_id", "location_id", "condition_id", "operational_status_id")
_DATE_FIELDS = ("receipt_date", "manufacture_date")


def new_empty_location() -> ReceiptLocationEntity:
    return ReceiptLocationEntity(quantity=1, serial_numbers=("",), tag_numbers=("",))


def new_empty_draft(today: Optional[date] = None) -> AssetReceiptEntity:
    """Create-mode default: today's date and a single blank location."""
    return AssetReceiptEntity(
        asset_id=None,
        receipt_date=today or date.today(),
        received_by="",
        remarks="",
        locations=(new_empty_location(),),
    )


def hydrate_draft(record: AssetReceiptEntity) -> AssetReceiptEntity:
    """
    Builds an edit draft from a persisted receipt. The draft carries no id;
    the controller remembers which record is being edited.
    """
    return AssetReceiptEntity(
        asset_id=record.asset_id,
        receipt_date=record.display_date,
        received_by=record.received_by or "",
        remarks=record.remarks or "",
        locations=tuple(record.locations) if record.locations else (new_empty_location(),),
    )


def _to_optional_int(name: str, value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid value for '{name}': {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"Invalid value for '{name}': {value!r}")


def _to_quantity(value: Any) -> Optional[int]:
    # An unparsable quantity is kept as "absent" so validation reports it
    try:
        return _to_optional_int("quantity", value)
    except ValueError:
        return None


def _coerce(name: str, value: Any) -> Any:
    if name == "quantity":
        return _to_quantity(value)
    if name in _ID_FIELDS:
        return _to_optional_int(name, value)
    if name in _DATE_FIELDS:
        return parse_date(value)
    return "" if value is None else str(value)


class ReceiptFormState:
    """
    Owns the draft of one asset receipt and its field errors.

    Every edit builds a new draft: the changed location (and the tuple that
    holds it) are fresh objects, every other location keeps its identity.
    """

    def __init__(self, draft: Optional[AssetReceiptEntity] = None):
        self._draft: AssetReceiptEntity = draft if draft is not None else new_empty_draft()
        self._errors: Dict[str, str] = {}

    @property
    def draft(self) -> AssetReceiptEntity:
        return self._draft

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    def error_for(self, key: str) -> str:
        return self._errors.get(key, "")

    def reset(self, draft: Optional[AssetReceiptEntity] = None) -> AssetReceiptEntity:
        self._draft = draft if draft is not None else new_empty_draft()
        self._errors = {}
        return self._draft

    def replace_errors(self, errors: Dict[str, str]) -> None:
        self._errors = dict(errors)

    def clear_errors(self) -> None:
        self._errors = {}

    # --- receipt level ---

    def set_field(self, name: str, value: Any) -> AssetReceiptEntity:
        if name not in RECEIPT_FIELDS:
            raise ValueError(f"'{name}' is not an editable receipt field.")
        self._draft = replace(self._draft, **{name: _coerce(name, value)})
        if name in self._errors:
            # Advisory only; the field is checked again on submit
            del self._errors[name]
        return self._draft

    def set_asset_reference(self, asset_id: Optional[Any]) -> AssetReceiptEntity:
        return self.set_field("asset_id", asset_id)

    # --- locations ---

    def add_location(self) -> AssetReceiptEntity:
        self._draft = replace(self._draft, locations=self._draft.locations + (new_empty_location(),))
        logger.debug(f"Location added to draft. Count: {len(self._draft.locations)}")
        return self._draft

    def remove_location(self, index: int) -> AssetReceiptEntity:
        locations = self._draft.locations
        self._check_location_index(index)
        if len(locations) <= 1:
            logger.debug("Ignoring removal of the only location on the draft.")
            return self._draft
        self._draft = replace(self._draft, locations=locations[:index] + locations[index + 1:])
        return self._draft

    def set_location_field(self, index: int, name: str, value: Any) -> AssetReceiptEntity:
        if name not in LOCATION_FIELDS:
            raise ValueError(f"'{name}' is not an editable location field.")
        return self._update_location(index, lambda loc: replace(loc, **{name: _coerce(name, value)}))

    # --- serial number slots ---

    def add_serial_slot(self, index: int) -> AssetReceiptEntity:
        return self._update_slots(index, "serial_numbers", lambda slots: slots + ("",))

    def remove_serial_slot(self, index: int, slot_index: int) -> AssetReceiptEntity:
        return self._update_slots(index, "serial_numbers", lambda slots: _without(slots, slot_index))

    def set_serial(self, index: int, slot_index: int, value: str) -> AssetReceiptEntity:
        return self._update_slots(index, "serial_numbers", lambda slots: _with(slots, slot_index, value))

    # --- tag number slots ---

    def add_tag_slot(self, index: int) -> AssetReceiptEntity:
        return self._update_slots(index, "tag_numbers", lambda slots: slots + ("",))

    def remove_tag_slot(self, index: int, slot_index: int) -> AssetReceiptEntity:
        return self._update_slots(index, "tag_numbers", lambda slots: _without(slots, slot_index))

    def set_tag(self, index: int, slot_index: int, value: str) -> AssetReceiptEntity:
        return self._update_slots(index, "tag_numbers", lambda slots: _with(slots, slot_index, value))

    # --- helpers ---

    def _check_location_index(self, index: int) -> None:
        if not 0 <= index < len(self._draft.locations):
            raise IndexError(f"Location index {index} out of range (0..{len(self._draft.locations) - 1}).")

    def _update_location(self, index: int,
                         change: Callable[[ReceiptLocationEntity], ReceiptLocationEntity]) -> AssetReceiptEntity:
        self._check_location_index(index)
        locations = self._draft.locations
        updated = change(locations[index])
        self._draft = replace(self._draft, locations=locations[:index] + (updated,) + locations[index + 1:])
        return self._draft

    def _update_slots(self, index: int, attr: str,
                      change: Callable[[Tuple[str, ...]], Tuple[str, ...]]) -> AssetReceiptEntity:
        return self._update_location(index, lambda loc: replace(loc, **{attr: change(getattr(loc, attr))}))


def _check_slot_index(slots: Tuple[str, ...], slot_index: int) -> None:
    if not 0 <= slot_index < len(slots):
        raise IndexError(f"Slot index {slot_index} out of range for {len(slots)} slot(s).")


def _without(slots: Tuple[str, ...], slot_index: int) -> Tuple[str, ...]:
    _check_slot_index(slots, slot_index)
    return slots[:slot_index] + slots[slot_index + 1:]


def _with(slots: Tuple[str, ...], slot_index: int, value: str) -> Tuple[str, ...]:
    _check_slot_index(slots, slot_index)
    return slots[:slot_index] + ("" if value is None else str(value),) + slots[slot_index + 1:]
