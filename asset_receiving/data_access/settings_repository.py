# asset_receiving/data_access/settings_repository.py

from typing import Dict, Any, Iterable, Optional
from asset_receiving.data_access.database_manager import DatabaseManager
from asset_receiving.business_logic.entities.setting_entity import SettingEntity
import logging

logger = logging.getLogger(__name__)

class SettingsRepository:
    """Key/value rows in the local `settings` table (session token, cached user, ...)."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.table_name = "settings"

    def _entity_from_row(self, row: Dict[str, Any]) -> SettingEntity:
        if row is None:
            raise ValueError("Input row cannot be None for SettingEntity")
        try:
            return SettingEntity(key=row['key'], value=row['value'])
        except KeyError as e:
            logger.error(f"KeyError when creating SettingEntity from row: {e}. Row: {row}")
            raise

    def get_setting(self, key: str) -> Optional[SettingEntity]:
        row = self.db_manager.fetch_one(f"SELECT * FROM {self.table_name} WHERE key = ?", (key,))
        return self._entity_from_row(dict(row)) if row else None

    def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        setting = self.get_setting(key)
        return setting.value if setting is not None else default

    def set_setting(self, setting: SettingEntity) -> SettingEntity:
        # INSERT OR REPLACE gives upsert behaviour on the key
        query = f"INSERT OR REPLACE INTO {self.table_name} (key, value) VALUES (?, ?)"
        self.db_manager.execute_query(query, (setting.key, setting.value))
        return setting

    def set_value(self, key: str, value: str) -> None:
        self.set_setting(SettingEntity(key=key, value=value))

    def delete_keys(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        placeholders = ", ".join("?" * len(keys))
        self.db_manager.execute_query(f"DELETE FROM {self.table_name} WHERE key IN ({placeholders})", tuple(keys))
        logger.debug(f"Deleted settings: {keys}")
