# asset_receiving/data_access/assets_repository.py

from asset_receiving.data_access.api_client import ApiClient
from asset_receiving.data_access.base_repository import BaseRepository
from asset_receiving.business_logic.entities.asset_entity import AssetEntity
from asset_receiving.constants import ResourcePath

class AssetsRepository(BaseRepository[AssetEntity]):
    def __init__(self, api_client: ApiClient):
        super().__init__(api_client=api_client,
                         model_type=AssetEntity,
                         resource_path=ResourcePath.ASSETS.value)
