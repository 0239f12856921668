# asset_receiving/business_logic/entities/asset_receipt_entity.py
from dataclasses import dataclass, field
from typing import Optional, Tuple
from datetime import date, datetime
from .base_entity import BaseEntity
from .receipt_location_entity import ReceiptLocationEntity

@dataclass(frozen=True)
class AssetReceiptEntity(BaseEntity):
    asset_id: Optional[int] = field(default=None) # FK to AssetEntity, required on submit
    receipt_date: Optional[date] = field(default=None)
    received_by: str = field(default="")
    remarks: str = field(default="")
    locations: Tuple[ReceiptLocationEntity, ...] = field(default_factory=lambda: (ReceiptLocationEntity(),))

    # Server-assigned, read only
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    # Flattened single-location fields the backend sends for the list view only
    quantity: Optional[int] = field(default=None)
    tag_no: Optional[str] = field(default=None)
    location_id: Optional[int] = field(default=None)

    @property
    def display_date(self) -> Optional[date]:
        """Receipt date, or the date the record was created when the backend sent none."""
        if self.receipt_date is not None:
            return self.receipt_date
        if self.created_at is not None:
            return self.created_at.date()
        return None
