# asset_receiving/business_logic/receipt_list_view.py

from dataclasses import replace
from typing import List, Optional, Sequence

from asset_receiving.business_logic.entities.asset_entity import AssetEntity
from asset_receiving.business_logic.entities.asset_receipt_entity import AssetReceiptEntity
from asset_receiving.business_logic.paginator import Paginator, PageView
from asset_receiving.business_logic.receipt_list_filter import ReceiptFilters, filter_receipts
from asset_receiving.config import DEFAULT_PAGE_SIZE
import logging

logger = logging.getLogger(__name__)


class ReceiptListView:
    """
    Search, filters and pagination over the fetched receipts.
    Any change to what is shown sends the list back to page 1.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self._receipts: List[AssetReceiptEntity] = []
        self._assets: List[AssetEntity] = []
        self._search_term = ""
        self._filters = ReceiptFilters()
        self.paginator = Paginator(page_size)

    @property
    def receipts(self) -> List[AssetReceiptEntity]:
        return list(self._receipts)

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def filters(self) -> ReceiptFilters:
        return self._filters

    def set_receipts(self, receipts: Sequence[AssetReceiptEntity]) -> None:
        self._receipts = list(receipts)
        self.paginator.set_total_count(len(self.filtered()))

    def set_assets(self, assets: Sequence[AssetEntity]) -> None:
        self._assets = list(assets)

    def set_search_term(self, term: str) -> None:
        self._search_term = term or ""
        self.paginator.reset()

    def set_asset_filter(self, asset: Optional[str]) -> None:
        self._filters = replace(self._filters, asset=asset or "")
        self.paginator.reset()

    def set_date_filter(self, value: Optional[str]) -> None:
        self._filters = replace(self._filters, date=value or "")
        self.paginator.reset()

    def set_page_size(self, page_size: int) -> None:
        self.paginator.set_page_size(page_size)

    def clear_filters(self) -> None:
        self._search_term = ""
        self._filters = ReceiptFilters()
        self.paginator.reset()

    def filtered(self) -> List[AssetReceiptEntity]:
        return filter_receipts(self._receipts, self._search_term, self._filters, self._assets)

    def current_page(self) -> PageView[AssetReceiptEntity]:
        return self.paginator.view(self.filtered())

    # Navigation; each returns the page now shown

    def first_page(self) -> PageView[AssetReceiptEntity]:
        self.paginator.set_total_count(len(self.filtered()))
        self.paginator.first()
        return self.current_page()

    def previous_page(self) -> PageView[AssetReceiptEntity]:
        self.paginator.set_total_count(len(self.filtered()))
        self.paginator.previous()
        return self.current_page()

    def next_page(self) -> PageView[AssetReceiptEntity]:
        self.paginator.set_total_count(len(self.filtered()))
        self.paginator.next()
        return self.current_page()

    def last_page(self) -> PageView[AssetReceiptEntity]:
        self.paginator.set_total_count(len(self.filtered()))
        self.paginator.last()
        return self.current_page()
