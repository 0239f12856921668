"""Shared fixtures for the asset receiving tests."""

from datetime import date, datetime
from typing import Iterable, Optional
from unittest.mock import MagicMock

import pytest

from asset_receiving.business_logic.entities import (
    AssetEntity, AssetReceiptEntity, ReceiptLocationEntity, UserEntity,
    LocationEntity, ConditionEntity, OperationalStatusEntity,
)
from asset_receiving.business_logic.reference_data_manager import ReferenceDataManager


class StubSession:
    """Just enough of SessionManager for the permission policy."""

    def __init__(self, permissions: Iterable[str] = (), user_name: Optional[str] = None):
        self.permissions = set(permissions)
        self.current_user = UserEntity(id=1, name=user_name) if user_name else None

    def has_permission(self, name: str) -> bool:
        return name in self.permissions


def make_receipt(receipt_id: int = 1, asset_id: Optional[int] = 10, received_by: str = "Ali Hassan",
                 created: str = "2024-05-01", tag_no: Optional[str] = None, **kwargs) -> AssetReceiptEntity:
    defaults = dict(
        receipt_date=date.fromisoformat(created),
        remarks="",
        locations=(ReceiptLocationEntity(id=100 + receipt_id, location_id=3, quantity=2,
                                         serial_numbers=("SN-1",), tag_numbers=("TG-1",)),),
        created_at=datetime.fromisoformat(f"{created}T09:30:00"),
    )
    defaults.update(kwargs)
    return AssetReceiptEntity(id=receipt_id, asset_id=asset_id, received_by=received_by,
                              tag_no=tag_no, **defaults)


@pytest.fixture
def assets():
    return [
        AssetEntity(id=10, item_name="Dell Laptop"),
        AssetEntity(id=11, item_name="Forklift"),
        AssetEntity(id=12, item_name=None),
    ]


@pytest.fixture
def reference_data(assets):
    assets_repo = MagicMock()
    assets_repo.get_all.return_value = assets
    locations_repo = MagicMock()
    locations_repo.get_all.return_value = [LocationEntity(id=3, name="Main Store"), LocationEntity(id=4, name="Yard")]
    conditions_repo = MagicMock()
    conditions_repo.get_all.return_value = [ConditionEntity(id=1, name="New")]
    statuses_repo = MagicMock()
    statuses_repo.get_all.return_value = [OperationalStatusEntity(id=1, name="Operational")]
    return ReferenceDataManager(assets_repo, locations_repo, conditions_repo, statuses_repo)
