# asset_receiving/data_access/asset_receipts_repository.py

from dataclasses import replace
from typing import Dict, Any, List, Optional
import logging

from asset_receiving.data_access.api_client import ApiClient
from asset_receiving.data_access.base_repository import BaseRepository, entity_from_row
from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.business_logic.entities.receipt_location_entity import ReceiptLocationEntity
from asset_receiving.constants import ResourcePath
from asset_receiving.utils.date_converter import to_iso_str

logger = logging.getLogger(__name__)

class AssetReceiptsRepository(BaseRepository[AssetReceiptEntity]):
    def __init__(self, api_client: ApiClient):
        super().__init__(api_client=api_client,
                         model_type=AssetReceiptEntity,
                         resource_path=ResourcePath.ASSET_RECEIPTS.value)

    @staticmethod
    def _slots_from_row(values: Any) -> tuple:
        if not isinstance(values, list):
            return ()
        return tuple("" if v is None else str(v) for v in values)

    @staticmethod
    def _quantity_from_row(value: Any) -> Optional[int]:
        # Absent or unreadable stays None so the editor reports it instead of assuming 1
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    def _location_from_row(self, row: Dict[str, Any]) -> ReceiptLocationEntity:
        location = entity_from_row(ReceiptLocationEntity, row)
        # Missing lists mean "no slots", not the one-blank-slot editor default
        return replace(location,
                       quantity=self._quantity_from_row(row.get("quantity")),
                       serial_numbers=self._slots_from_row(row.get("serial_numbers")),
                       tag_numbers=self._slots_from_row(row.get("tag_numbers")))

    def _entity_from_row(self, row: Dict[str, Any]) -> AssetReceiptEntity:
        if row is None:
            raise ValueError("Input row cannot be None for AssetReceiptEntity")
        scalar_row = {k: v for k, v in row.items() if k != "locations"}
        receipt = entity_from_row(AssetReceiptEntity, scalar_row)
        location_rows = row.get("locations") or []
        locations = tuple(self._location_from_row(loc) for loc in location_rows if isinstance(loc, dict))
        return replace(receipt, locations=locations)

    @staticmethod
    def _location_to_dict(location: ReceiptLocationEntity) -> Dict[str, Any]:
        return {
            "location_id": location.location_id,
            "quantity": location.quantity,
            "licence_plate": location.licence_plate or "",
            "manufacture_date": to_iso_str(location.manufacture_date) or None,
            "condition_id": location.condition_id,
            "operational_status_id": location.operational_status_id,
            "remarks": location.remarks or "",
            "serial_numbers": list(location.serial_numbers),
            "tag_numbers": list(location.tag_numbers),
        }

    def _entity_to_dict_for_api(self, entity: AssetReceiptEntity) -> Dict[str, Any]:
        # Whole aggregate; server-assigned and list-only display fields are never sent
        return {
            "asset_id": entity.asset_id,
            "receipt_date": to_iso_str(entity.receipt_date) or None,
            "received_by": entity.received_by,
            "remarks": entity.remarks or "",
            "locations": [self._location_to_dict(loc) for loc in entity.locations],
        }

    def get_by_asset_id(self, asset_id: int) -> List[AssetReceiptEntity]:
        return self.get_all({"asset_id": asset_id})
