"""Row conversion and wire shape of the HTTP repositories (ApiClient mocked)."""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from asset_receiving.business_logic.entities import AssetReceiptEntity, ReceiptLocationEntity
from asset_receiving.business_logic.receipt_form_state import hydrate_draft
from asset_receiving.business_logic.receipt_validator import validate_receipt
from asset_receiving.data_access.api_client import ApiError
from asset_receiving.data_access.asset_receipts_repository import AssetReceiptsRepository
from asset_receiving.data_access.assets_repository import AssetsRepository
from asset_receiving.data_access.reference_repositories import LocationsRepository

RECEIPT_ROW = {
    "id": "5",
    "asset_id": "10",
    "receipt_date": "2024-05-01",
    "received_by": "Ali Hassan",
    "remarks": None,
    "created_at": "2024-05-01T10:00:00.000000Z",
    "quantity": 2,
    "tag_no": "T-100",
    "locations": [
        {"id": 1, "location_id": "3", "quantity": "2", "licence_plate": None,
         "manufacture_date": "2023-01-15", "condition_id": 1, "operational_status_id": None,
         "serial_numbers": ["SN-1", None], "remarks": ""},
    ],
}


def test_get_all_unwraps_data_envelope_and_converts_nested_rows():
    api = MagicMock()
    api.get.return_value = {"data": [RECEIPT_ROW]}

    receipts = AssetReceiptsRepository(api).get_all()

    path, = api.get.call_args.args
    assert path == "/store-asset-receipt"
    assert "t" in api.get.call_args.kwargs["params"]

    receipt = receipts[0]
    assert receipt.id == 5
    assert receipt.asset_id == 10
    assert receipt.receipt_date == date(2024, 5, 1)
    assert receipt.remarks == ""
    assert receipt.created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert receipt.tag_no == "T-100"

    loc = receipt.locations[0]
    assert loc.location_id == 3
    assert loc.quantity == 2
    assert loc.licence_plate == ""
    assert loc.manufacture_date == date(2023, 1, 15)
    assert loc.operational_status_id is None
    assert loc.serial_numbers == ("SN-1", "")
    assert loc.tag_numbers == ()


def test_get_all_accepts_bare_list_and_skips_non_objects():
    api = MagicMock()
    api.get.return_value = [{"id": 1, "name": "Main Store"}, "garbage", None]

    locations = LocationsRepository(api).get_all()

    assert [(l.id, l.name) for l in locations] == [(1, "Main Store")]
    assert api.get.call_args.args == ("/locations",)


def test_get_all_degrades_to_empty_list_on_failure():
    api = MagicMock()
    api.get.side_effect = ApiError("Server Error", status_code=500)

    assert AssetsRepository(api).get_all() == []


def test_get_all_with_unexpected_payload_is_empty():
    api = MagicMock()
    api.get.return_value = {"message": "ok"}
    assert AssetsRepository(api).get_all() == []


def test_add_sends_whole_aggregate_in_wire_shape():
    api = MagicMock()
    api.post.return_value = {"data": {"id": 42, "asset_id": 10, "received_by": "Ali"}}
    draft = AssetReceiptEntity(
        asset_id=10,
        receipt_date=date(2024, 5, 1),
        received_by="Ali",
        remarks="",
        locations=(ReceiptLocationEntity(location_id=3, quantity=2, manufacture_date=None,
                                         serial_numbers=("SN-1", ""), tag_numbers=()),),
    )

    created = AssetReceiptsRepository(api).add(draft)

    api.post.assert_called_once_with("/store-asset-receipt", json={
        "asset_id": 10,
        "receipt_date": "2024-05-01",
        "received_by": "Ali",
        "remarks": "",
        "locations": [{
            "location_id": 3,
            "quantity": 2,
            "licence_plate": "",
            "manufacture_date": None,
            "condition_id": None,
            "operational_status_id": None,
            "remarks": "",
            "serial_numbers": ["SN-1", ""],
            "tag_numbers": [],
        }],
    })
    assert created.id == 42


def test_add_tolerates_empty_response_body():
    api = MagicMock()
    api.post.return_value = None
    assert AssetReceiptsRepository(api).add(AssetReceiptEntity(asset_id=1)) is None


def test_update_and_delete_target_the_record_path():
    api = MagicMock()
    api.put.return_value = {"message": "updated"}
    repo = AssetReceiptsRepository(api)

    repo.update(5, AssetReceiptEntity(asset_id=1, received_by="Sara"))
    repo.delete(5)

    assert api.put.call_args.args == ("/store-asset-receipt/5",)
    assert api.put.call_args.kwargs["json"]["received_by"] == "Sara"
    api.delete.assert_called_once_with("/store-asset-receipt/5")


def test_write_errors_propagate():
    api = MagicMock()
    api.delete.side_effect = ApiError("Not found", status_code=404)
    repo = AssetReceiptsRepository(api)

    try:
        repo.delete(9)
    except ApiError as e:
        assert e.status_code == 404
    else:
        raise AssertionError("ApiError was not raised")


def test_get_by_asset_id_passes_filter_param():
    api = MagicMock()
    api.get.return_value = []

    AssetReceiptsRepository(api).get_by_asset_id(10)

    assert api.get.call_args.kwargs["params"]["asset_id"] == 10


@pytest.mark.parametrize("quantity", [None, "2.0", "many"])
def test_unreadable_location_quantity_is_absent_and_blocks_resubmit(quantity):
    api = MagicMock()
    api.get.return_value = {"data": [{
        "id": 8, "asset_id": 10, "receipt_date": "2024-05-01", "received_by": "Ali",
        "locations": [{"location_id": "3", "quantity": quantity}],
    }]}

    receipt, = AssetReceiptsRepository(api).get_all()

    assert receipt.locations[0].quantity is None
    assert set(validate_receipt(hydrate_draft(receipt))) == {"location_0_quantity"}


def test_location_without_quantity_key_is_absent():
    api = MagicMock()
    api.get.return_value = [{"id": 8, "asset_id": 10, "received_by": "Ali",
                             "locations": [{"location_id": 3}]}]

    receipt, = AssetReceiptsRepository(api).get_all()

    assert receipt.locations[0].quantity is None


def test_get_by_id_reads_one_record_from_the_record_path():
    api = MagicMock()
    api.get.return_value = {"data": RECEIPT_ROW}

    receipt = AssetReceiptsRepository(api).get_by_id(5)

    api.get.assert_called_once_with("/store-asset-receipt/5")
    assert receipt.id == 5
    assert receipt.locations[0].quantity == 2


def test_get_by_id_without_a_record_is_none():
    api = MagicMock()
    api.get.return_value = {"message": "Not found"}

    assert AssetsRepository(api).get_by_id(3) is None
