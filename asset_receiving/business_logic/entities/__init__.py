# asset_receiving/business_logic/entities/__init__.py
from .base_entity import BaseEntity
from .receipt_location_entity import ReceiptLocationEntity
from .asset_receipt_entity import AssetReceiptEntity
from .asset_entity import AssetEntity
from .reference_entities import LocationEntity, ConditionEntity, OperationalStatusEntity
from .user_entity import UserEntity
from .setting_entity import SettingEntity

__all__ = [
    "BaseEntity", "ReceiptLocationEntity", "AssetReceiptEntity", "AssetEntity",
    "LocationEntity", "ConditionEntity", "OperationalStatusEntity",
    "UserEntity", "SettingEntity",
]
