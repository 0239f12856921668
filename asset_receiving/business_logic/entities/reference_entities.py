# asset_receiving/business_logic/entities/reference_entities.py
from dataclasses import dataclass, field
from .base_entity import BaseEntity

# Lookup records fetched once per screen and never edited by this client

@dataclass(frozen=True)
class LocationEntity(BaseEntity):
    name: str = field(default="")

@dataclass(frozen=True)
class ConditionEntity(BaseEntity):
    name: str = field(default="")

@dataclass(frozen=True)
class OperationalStatusEntity(BaseEntity):
    name: str = field(default="")
