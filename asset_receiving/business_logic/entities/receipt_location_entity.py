# asset_receiving/business_logic/entities/receipt_location_entity.py
from dataclasses import dataclass, field
from typing import Optional, Tuple
from datetime import date
from .base_entity import BaseEntity

@dataclass(frozen=True)
class ReceiptLocationEntity(BaseEntity):
    location_id: Optional[int] = field(default=None) # FK to LocationEntity, required on submit
    quantity: Optional[int] = field(default=1) # None while the input holds a non-number
    licence_plate: str = field(default="")
    manufacture_date: Optional[date] = field(default=None)
    condition_id: Optional[int] = field(default=None) # FK to ConditionEntity
    operational_status_id: Optional[int] = field(default=None) # FK to OperationalStatusEntity
    remarks: str = field(default="")
    # Slots may hold blank strings until the user types into them
    serial_numbers: Tuple[str, ...] = field(default=("",))
    tag_numbers: Tuple[str, ...] = field(default=("",))
