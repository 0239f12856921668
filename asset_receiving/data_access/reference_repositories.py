# asset_receiving/data_access/reference_repositories.py

from asset_receiving.data_access.api_client import ApiClient
from asset_receiving.data_access.base_repository import BaseRepository
from asset_receiving.business_logic.entities.reference_entities import (
    LocationEntity, ConditionEntity, OperationalStatusEntity
)
from asset_receiving.constants import ResourcePath

class LocationsRepository(BaseRepository[LocationEntity]):
    def __init__(self, api_client: ApiClient):
        super().__init__(api_client=api_client, model_type=LocationEntity,
                         resource_path=ResourcePath.LOCATIONS.value)

class ConditionsRepository(BaseRepository[ConditionEntity]):
    def __init__(self, api_client: ApiClient):
        super().__init__(api_client=api_client, model_type=ConditionEntity,
                         resource_path=ResourcePath.CONDITIONS.value)

class OperationalStatusesRepository(BaseRepository[OperationalStatusEntity]):
    def __init__(self, api_client: ApiClient):
        super().__init__(api_client=api_client, model_type=OperationalStatusEntity,
                         resource_path=ResourcePath.OPERATIONAL_STATUSES.value)
