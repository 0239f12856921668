# asset_receiving/business_logic/receipt_list_filter.py

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from asset_receiving.business_logic.entities.asset_entity import AssetEntity
from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.utils.date_converter import date_part


@dataclass(frozen=True)
class ReceiptFilters:
    asset: str = field(default="") # asset id as string, "" = any
    date: str = field(default="")  # YYYY-MM-DD matched against created_at, "" = any

    @property
    def is_empty(self) -> bool:
        return not self.asset and not self.date


def _asset_names(assets: Iterable[AssetEntity]) -> Dict[int, str]:
    return {a.id: (a.item_name or "") for a in assets if a is not None and a.id is not None}


def _matches_search(receipt: AssetReceiptEntity, term: str, asset_names: Dict[int, str]) -> bool:
    asset_name = asset_names.get(receipt.asset_id, "").lower() if receipt.asset_id is not None else ""
    return (
        (receipt.id is not None and term in str(receipt.id))
        or term in asset_name
        or term in (receipt.tag_no or "").lower()
        or term in (receipt.received_by or "").lower()
    )


def filter_receipts(receipts: Sequence[AssetReceiptEntity],
                    search_term: str = "",
                    filters: Optional[ReceiptFilters] = None,
                    assets: Iterable[AssetEntity] = ()) -> List[AssetReceiptEntity]:
    """
    Applies the free-text search and the asset/date filters (AND-ed) and
    keeps the original order. Blank inputs do not restrict the result.
    """
    filters = filters or ReceiptFilters()
    term = (search_term or "").lower()
    asset_names = _asset_names(assets) if term else {}

    result = []
    for receipt in receipts:
        if term and not _matches_search(receipt, term, asset_names):
            continue
        if filters.asset and str(receipt.asset_id if receipt.asset_id is not None else "") != filters.asset:
            continue
        if filters.date and date_part(receipt.created_at) != filters.date:
            continue
        result.append(receipt)
    return result
