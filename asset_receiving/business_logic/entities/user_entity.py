# asset_receiving/business_logic/entities/user_entity.py
from dataclasses import dataclass, field
from typing import Tuple
from .base_entity import BaseEntity
from .reference_entities import LocationEntity

@dataclass(frozen=True)
class UserEntity(BaseEntity):
    name: str = field(default="")
    email: str = field(default="")
    locations: Tuple[LocationEntity, ...] = field(default=()) # locations the user is assigned to
