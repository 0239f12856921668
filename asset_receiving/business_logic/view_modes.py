# asset_receiving/business_logic/view_modes.py

from dataclasses import dataclass
from typing import Union

from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.constants import ScreenMode

# One class per screen state; only edit and view carry data.

@dataclass(frozen=True)
class ListMode:
    kind = ScreenMode.LIST

@dataclass(frozen=True)
class CreateMode:
    kind = ScreenMode.CREATE

@dataclass(frozen=True)
class EditMode:
    receipt_id: int
    kind = ScreenMode.EDIT

    def __post_init__(self):
        if self.receipt_id is None:
            raise ValueError("EditMode requires the id of the receipt being edited.")

@dataclass(frozen=True)
class ViewMode:
    receipt: AssetReceiptEntity
    kind = ScreenMode.VIEW

    def __post_init__(self):
        if self.receipt is None:
            raise ValueError("ViewMode requires the selected receipt.")

ReceiptScreenMode = Union[ListMode, CreateMode, EditMode, ViewMode]
