# asset_receiving/business_logic/reference_data_manager.py

from typing import Dict, List, Optional, Tuple
import logging

from asset_receiving.business_logic.entities.asset_entity import AssetEntity
from asset_receiving.business_logic.entities.reference_entities import (
    LocationEntity, ConditionEntity, OperationalStatusEntity
)
from asset_receiving.data_access.assets_repository import AssetsRepository
from asset_receiving.data_access.reference_repositories import (
    LocationsRepository, ConditionsRepository, OperationalStatusesRepository
)

logger = logging.getLogger(__name__)

Option = Tuple[str, str] # (value, label) for selection widgets


class ReferenceDataManager:
    """Read-only lookups (assets, locations, conditions, statuses) used to fill selectors and resolve names."""

    def __init__(self,
                 assets_repository: AssetsRepository,
                 locations_repository: LocationsRepository,
                 conditions_repository: ConditionsRepository,
                 statuses_repository: OperationalStatusesRepository):
        if assets_repository is None: raise ValueError("assets_repository cannot be None")
        if locations_repository is None: raise ValueError("locations_repository cannot be None")
        if conditions_repository is None: raise ValueError("conditions_repository cannot be None")
        if statuses_repository is None: raise ValueError("statuses_repository cannot be None")

        self.assets_repository = assets_repository
        self.locations_repository = locations_repository
        self.conditions_repository = conditions_repository
        self.statuses_repository = statuses_repository

        self.assets: List[AssetEntity] = []
        self.locations: List[LocationEntity] = []
        self.conditions: List[ConditionEntity] = []
        self.operational_statuses: List[OperationalStatusEntity] = []

    def load_all(self) -> None:
        # Each repository already degrades to [] on failure
        self.assets = self.assets_repository.get_all()
        self.locations = self.locations_repository.get_all()
        self.conditions = self.conditions_repository.get_all()
        self.operational_statuses = self.statuses_repository.get_all()
        logger.info(f"Reference data loaded: {len(self.assets)} assets, {len(self.locations)} locations, "
                    f"{len(self.conditions)} conditions, {len(self.operational_statuses)} statuses.")

    @staticmethod
    def _names(records) -> Dict[int, str]:
        return {r.id: r.name for r in records if r.id is not None}

    def asset_name(self, asset_id: Optional[int]) -> str:
        for asset in self.assets:
            if asset.id is not None and asset.id == asset_id and asset.item_name:
                return asset.item_name
        return f"Asset #{asset_id}"

    def location_name(self, location_id: Optional[int]) -> str:
        return self._names(self.locations).get(location_id) or "-"

    def condition_name(self, condition_id: Optional[int]) -> str:
        return self._names(self.conditions).get(condition_id) or "-"

    def status_name(self, status_id: Optional[int]) -> str:
        return self._names(self.operational_statuses).get(status_id) or "-"

    def asset_options(self) -> List[Option]:
        return [(str(a.id), a.item_name or f"Asset #{a.id}") for a in self.assets if a is not None and a.id is not None]

    def location_options(self) -> List[Option]:
        return [(str(l.id), l.name) for l in self.locations if l.id is not None]

    def condition_options(self) -> List[Option]:
        return [(str(c.id), c.name) for c in self.conditions if c.id is not None]

    def status_options(self) -> List[Option]:
        return [(str(s.id), s.name) for s in self.operational_statuses if s.id is not None]
