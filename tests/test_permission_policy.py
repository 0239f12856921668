import pytest

from asset_receiving.business_logic.entities import UserEntity
from asset_receiving.business_logic.permission_policy import ReceiptPermissionPolicy
from conftest import StubSession, make_receipt


def test_no_permissions_denies_everything():
    policy = ReceiptPermissionPolicy(StubSession())
    receipt = make_receipt(received_by="Sara")

    assert not policy.can_create()
    assert not policy.can_view()
    assert not policy.can_edit(receipt)
    assert not policy.can_delete(receipt)


@pytest.mark.parametrize("permission, allowed", [
    ("create_asset_receipt", {"create"}),
    ("view_asset_receipt", {"view"}),
    ("edit_asset_receipt", {"edit"}),
    ("delete_asset_receipt", {"delete"}),
    ("manage_asset_receipts", {"create", "view", "edit", "delete"}),
])
def test_each_permission_grants_its_action(permission, allowed):
    policy = ReceiptPermissionPolicy(StubSession([permission]))
    receipt = make_receipt(received_by="Sara")

    granted = {
        name for name, ok in (
            ("create", policy.can_create()),
            ("view", policy.can_view()),
            ("edit", policy.can_edit(receipt)),
            ("delete", policy.can_delete(receipt)),
        ) if ok
    }
    assert granted == allowed


def test_receiver_may_edit_own_receipt_but_not_delete_it():
    policy = ReceiptPermissionPolicy(StubSession(user_name="Ali Hassan"))

    assert policy.can_edit(make_receipt(received_by="Ali Hassan"))
    assert not policy.can_edit(make_receipt(received_by="Sara"))
    assert not policy.can_delete(make_receipt(received_by="Ali Hassan"))


def test_blank_user_name_does_not_match_blank_receiver():
    session = StubSession()
    session.current_user = UserEntity(id=1, name="")
    policy = ReceiptPermissionPolicy(session)
    assert not policy.can_edit(make_receipt(received_by=""))


def test_session_is_required():
    with pytest.raises(ValueError):
        ReceiptPermissionPolicy(None)
