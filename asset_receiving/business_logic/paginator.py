# asset_receiving/business_logic/paginator.py

import math
from dataclasses import dataclass, field
from typing import Generic, List, Sequence, TypeVar

from asset_receiving.config import DEFAULT_PAGE_SIZE
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class PageView(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total_count: int
    total_pages: int # 0 when there is nothing to show
    start_index: int = field(default=0)

    @property
    def display_total_pages(self) -> int:
        # An empty list is shown as "page 1 of 1"
        return max(1, self.total_pages)

    @property
    def first_item_number(self) -> int:
        return self.start_index + 1 if self.total_count else 0

    @property
    def last_item_number(self) -> int:
        return min(self.start_index + self.page_size, self.total_count)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.display_total_pages

    @property
    def show_controls(self) -> bool:
        return self.total_pages > 1


def total_pages_for(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1.")
    return math.ceil(count / page_size)


def paginate(items: Sequence[T], page_size: int, page: int) -> PageView[T]:
    """Returns the 1-based page `page` of `items`; the page number is not clamped here."""
    total_pages = total_pages_for(len(items), page_size)
    start = (page - 1) * page_size
    visible = list(items[start:start + page_size]) if start >= 0 else []
    return PageView(
        items=visible,
        page=page,
        page_size=page_size,
        total_count=len(items),
        total_pages=total_pages,
        start_index=start,
    )


class Paginator:
    """Current page and page size for one list; navigation is clamped to the known page count."""

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1.")
        self._page_size = page_size
        self._page = 1
        self._total_count = 0

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_pages(self) -> int:
        return total_pages_for(self._total_count, self._page_size)

    @property
    def last_page(self) -> int:
        return max(1, self.total_pages)

    def set_total_count(self, count: int) -> None:
        """Updates the item count and pulls the current page back into range."""
        self._total_count = max(0, count)
        if self._page > self.last_page:
            self._page = self.last_page

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1.")
        self._page_size = page_size
        self._page = 1

    def reset(self) -> None:
        self._page = 1

    def go_to(self, page: int) -> int:
        self._page = min(max(1, page), self.last_page)
        return self._page

    def first(self) -> int:
        return self.go_to(1)

    def previous(self) -> int:
        return self.go_to(self._page - 1)

    def next(self) -> int:
        return self.go_to(self._page + 1)

    def last(self) -> int:
        return self.go_to(self.last_page)

    def view(self, items: Sequence[T]) -> PageView[T]:
        self.set_total_count(len(items))
        return paginate(items, self._page_size, self._page)
