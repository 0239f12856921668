"""Draft editing: structural sharing, coercion, error clearing."""

from datetime import date, datetime

import pytest

from asset_receiving.business_logic.entities import AssetReceiptEntity
from asset_receiving.business_logic.receipt_form_state import (
    ReceiptFormState, new_empty_draft, new_empty_location, hydrate_draft,
)
from conftest import make_receipt


def test_new_draft_has_today_and_one_blank_location():
    draft = new_empty_draft(date(2024, 6, 1))

    assert draft.receipt_date == date(2024, 6, 1)
    assert draft.asset_id is None
    assert draft.received_by == ""
    assert len(draft.locations) == 1
    loc = draft.locations[0]
    assert loc.quantity == 1
    assert loc.serial_numbers == ("",)
    assert loc.tag_numbers == ("",)
    assert loc.location_id is None


def test_set_field_clears_only_that_error():
    state = ReceiptFormState(new_empty_draft())
    state.replace_errors({"received_by": "Received by is required", "asset_id": "Asset is required"})

    state.set_field("received_by", "Ali")

    assert state.draft.received_by == "Ali"
    assert "received_by" not in state.errors
    assert state.errors["asset_id"] == "Asset is required"


def test_set_field_rejects_structural_and_server_fields():
    state = ReceiptFormState()
    for name in ("locations", "id", "created_at", "nonsense"):
        with pytest.raises(ValueError):
            state.set_field(name, "x")


def test_asset_reference_is_coerced_from_widget_values():
    state = ReceiptFormState()
    state.replace_errors({"asset_id": "Asset is required"})

    state.set_asset_reference("7")
    assert state.draft.asset_id == 7
    assert state.error_for("asset_id") == ""

    state.set_asset_reference("")
    assert state.draft.asset_id is None

    with pytest.raises(ValueError):
        state.set_asset_reference("seven")


def test_receipt_date_accepts_iso_strings():
    state = ReceiptFormState()
    state.set_field("receipt_date", "2024-02-29")
    assert state.draft.receipt_date == date(2024, 2, 29)
    state.set_field("receipt_date", None)
    assert state.draft.receipt_date is None


def test_add_location_appends_fresh_default_and_keeps_existing_identity():
    state = ReceiptFormState()
    state.set_location_field(0, "location_id", 3)
    first = state.draft.locations[0]

    draft = state.add_location()

    assert len(draft.locations) == 2
    assert draft.locations[0] is first
    assert draft.locations[1] == new_empty_location()


def test_set_location_field_replaces_only_the_target_location():
    state = ReceiptFormState()
    state.add_location()
    before = state.draft
    untouched = before.locations[0]

    after = state.set_location_field(1, "location_id", "4")

    assert after is not before
    assert after.locations[0] is untouched
    assert after.locations[1].location_id == 4
    assert before.locations[1].location_id is None


def test_non_numeric_quantity_becomes_absent():
    state = ReceiptFormState()
    state.set_location_field(0, "quantity", "abc")
    assert state.draft.locations[0].quantity is None
    state.set_location_field(0, "quantity", "5")
    assert state.draft.locations[0].quantity == 5


def test_location_field_edit_leaves_location_errors_until_next_submit():
    state = ReceiptFormState()
    state.replace_errors({"location_0_location_id": "Location is required"})

    state.set_location_field(0, "location_id", 3)

    assert state.error_for("location_0_location_id") == "Location is required"


def test_unknown_location_field_raises():
    state = ReceiptFormState()
    with pytest.raises(ValueError):
        state.set_location_field(0, "serial_numbers", ["x"])


def test_remove_only_location_is_a_noop():
    state = ReceiptFormState()
    before = state.draft

    after = state.remove_location(0)

    assert after is before
    assert len(after.locations) == 1


def test_remove_location_by_index():
    state = ReceiptFormState()
    state.add_location()
    state.set_location_field(1, "location_id", 4)

    state.remove_location(0)

    assert len(state.draft.locations) == 1
    assert state.draft.locations[0].location_id == 4


def test_out_of_range_location_index_raises():
    state = ReceiptFormState()
    state.add_location()
    with pytest.raises(IndexError):
        state.remove_location(5)
    with pytest.raises(IndexError):
        state.set_location_field(2, "remarks", "x")


def test_serial_slots_can_grow_edit_and_shrink_to_empty():
    state = ReceiptFormState()
    state.add_serial_slot(0)
    state.set_serial(0, 0, "SN-1")
    state.set_serial(0, 1, "SN-2")
    assert state.draft.locations[0].serial_numbers == ("SN-1", "SN-2")

    state.remove_serial_slot(0, 0)
    assert state.draft.locations[0].serial_numbers == ("SN-2",)
    state.remove_serial_slot(0, 0)
    assert state.draft.locations[0].serial_numbers == ()

    with pytest.raises(IndexError):
        state.set_serial(0, 0, "SN-3")


def test_tag_slots_are_independent_from_serials():
    state = ReceiptFormState()
    state.add_tag_slot(0)
    state.set_tag(0, 1, "TG-9")

    loc = state.draft.locations[0]
    assert loc.tag_numbers == ("", "TG-9")
    assert loc.serial_numbers == ("",)

    state.remove_tag_slot(0, 0)
    assert state.draft.locations[0].tag_numbers == ("TG-9",)


def test_adding_then_removing_last_serial_slot_restores_list():
    state = ReceiptFormState()
    state.set_serial(0, 0, "SN-1")
    state.add_serial_slot(0)
    state.set_serial(0, 1, "SN-2")
    before = state.draft.locations[0].serial_numbers

    state.add_serial_slot(0)
    state.remove_serial_slot(0, len(state.draft.locations[0].serial_numbers) - 1)

    assert state.draft.locations[0].serial_numbers == before == ("SN-1", "SN-2")


def test_adding_then_removing_last_tag_slot_restores_list():
    state = ReceiptFormState()
    state.set_tag(0, 0, "TG-1")
    before = state.draft.locations[0].tag_numbers

    state.add_tag_slot(0)
    state.remove_tag_slot(0, len(state.draft.locations[0].tag_numbers) - 1)

    assert state.draft.locations[0].tag_numbers == before == ("TG-1",)


def test_slot_edit_in_one_location_keeps_other_location_identity():
    state = ReceiptFormState()
    state.add_location()
    other = state.draft.locations[1]

    state.set_serial(0, 0, "ABC")

    assert state.draft.locations[1] is other


def test_reset_drops_errors():
    state = ReceiptFormState()
    state.replace_errors({"asset_id": "Asset is required"})
    state.reset()
    assert state.errors == {}


def test_hydrate_uses_created_at_when_receipt_date_missing():
    record = make_receipt(receipt_id=5, receipt_date=None,
                          created_at=datetime(2024, 3, 5, 14, 0))

    draft = hydrate_draft(record)

    assert draft.id is None
    assert draft.receipt_date == date(2024, 3, 5)
    assert draft.asset_id == record.asset_id
    assert draft.locations == record.locations


def test_hydrate_gives_one_blank_location_when_record_has_none():
    record = AssetReceiptEntity(id=9, asset_id=1, received_by="Sara", locations=())
    draft = hydrate_draft(record)
    assert draft.locations == (new_empty_location(),)
