# asset_receiving/business_logic/entities/base_entity.py
from dataclasses import dataclass, field
from typing import Optional

@dataclass(frozen=True)
class BaseEntity:
    # None until the backend has assigned one
    id: Optional[int] = field(default=None, kw_only=True)
