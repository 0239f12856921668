# asset_receiving/business_logic/entities/asset_entity.py
from dataclasses import dataclass, field
from typing import Optional
from .base_entity import BaseEntity

@dataclass(frozen=True)
class AssetEntity(BaseEntity):
    item_name: Optional[str] = field(default=None)
