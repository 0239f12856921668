# asset_receiving/data_access/__init__.py

from .database_manager import DatabaseManager
from .api_client import ApiClient, ApiError, UnauthorizedError
from .base_repository import BaseRepository

from .settings_repository import SettingsRepository
from .asset_receipts_repository import AssetReceiptsRepository
from .assets_repository import AssetsRepository
from .reference_repositories import LocationsRepository, ConditionsRepository, OperationalStatusesRepository
