from asset_receiving.business_logic.receipt_list_view import ReceiptListView
from conftest import make_receipt


def _list_view(count=25, page_size=10, assets=()):
    view = ReceiptListView(page_size)
    view.set_assets(assets)
    view.set_receipts([make_receipt(i, received_by="Ali" if i % 5 == 0 else "Sara") for i in range(1, count + 1)])
    return view


def test_default_page_is_first():
    page = _list_view().current_page()
    assert page.page == 1
    assert [r.id for r in page.items] == list(range(1, 11))
    assert page.display_total_pages == 3


def test_search_change_returns_to_page_one():
    view = _list_view()
    assert view.next_page().page == 2

    view.set_search_term("ali")

    page = view.current_page()
    assert page.page == 1
    assert [r.id for r in page.items] == [5, 10, 15, 20, 25]
    assert not page.show_controls


def test_filter_and_page_size_changes_return_to_page_one(assets):
    view = _list_view(assets=assets)
    view.last_page()
    view.set_asset_filter("10")
    assert view.current_page().page == 1

    view.last_page()
    view.set_page_size(5)
    assert view.current_page().page == 1
    assert view.current_page().display_total_pages == 5


def test_clear_filters_restores_full_list():
    view = _list_view()
    view.set_search_term("ali")
    view.set_date_filter("2024-05-01")

    view.clear_filters()

    assert view.search_term == ""
    assert view.filters.is_empty
    assert view.current_page().total_count == 25


def test_refetch_with_fewer_receipts_clamps_page():
    view = _list_view()
    view.last_page()

    view.set_receipts([make_receipt(1)])

    assert view.current_page().page == 1
    assert view.current_page().total_count == 1


def test_navigation_does_not_go_past_ends():
    view = _list_view(count=5)
    assert view.next_page().page == 1
    assert view.previous_page().page == 1
    assert view.first_page().page == 1
