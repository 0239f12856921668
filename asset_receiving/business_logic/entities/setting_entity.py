# asset_receiving/business_logic/entities/setting_entity.py
from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class SettingEntity:
    """One row of the local key/value store. The key is the identity."""
    key: str
    value: Optional[str] = None
