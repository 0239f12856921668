# asset_receiving/data_access/base_repository.py

import time
from dataclasses import fields, MISSING
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar, Union, TYPE_CHECKING, get_args, get_origin
import logging

from asset_receiving.data_access.api_client import ApiClient, ApiError
from asset_receiving.utils.date_converter import parse_date, parse_datetime

if TYPE_CHECKING:
    from ..business_logic.entities.base_entity import BaseEntity

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='BaseEntity')
E = TypeVar('E')


def _unwrap_optional(field_type: Any) -> Tuple[Any, bool]:
    if get_origin(field_type) is Union:
        args = [arg for arg in get_args(field_type) if arg is not type(None)]
        return (args[0] if args else Any), True
    return field_type, False


def _convert_value(field_type: Any, value: Any) -> Any:
    if field_type is int:
        return int(value)
    if field_type is datetime:
        return parse_datetime(value)
    if field_type is date:
        return parse_date(value)
    if field_type is str:
        return str(value)
    if isinstance(field_type, type) and issubclass(field_type, Enum):
        return field_type(value)
    if get_origin(field_type) is tuple:
        return tuple(value)
    return value


def entity_from_row(model_type: Type[E], row: Dict[str, Any]) -> E:
    """
    Builds a dataclass entity from a JSON object. Unknown keys are ignored,
    nulls fall back to the field default, and numeric strings become ints.
    """
    if row is None:
        raise ValueError(f"Input row cannot be None for {model_type.__name__}")
    entity_data = {}

    for f in fields(model_type):
        if not f.init:
            continue
        value = row.get(f.name)
        has_default = f.default is not MISSING or f.default_factory is not MISSING

        if value is None or value == "":
            if not has_default:
                raise ValueError(f"Missing value for required field '{f.name}' of {model_type.__name__}: {row}")
            if value == "" and _unwrap_optional(f.type)[0] is str:
                entity_data[f.name] = ""
            continue

        actual_type, _ = _unwrap_optional(f.type)
        try:
            entity_data[f.name] = _convert_value(actual_type, value)
        except (ValueError, TypeError) as e:
            logger.warning(f"Type conversion failed for field '{f.name}' with value '{value}'. Using default. Error: {e}")
            if not has_default:
                raise

    return model_type(**entity_data)


class BaseRepository(Generic[T]):
    """CRUD for one REST resource kind, returning frozen entities."""

    def __init__(self, api_client: ApiClient, model_type: Type[T], resource_path: str):
        self.api_client = api_client
        self.model_type = model_type
        self._resource_path = resource_path
        logger.debug(f"BaseRepository for {self._resource_path} initialized.")

    @staticmethod
    def _unwrap_list(payload: Any) -> List[Dict[str, Any]]:
        # Backend answers either [...] or {"data": [...]}
        if isinstance(payload, dict):
            payload = payload.get("data")
        if isinstance(payload, list):
            return [row for row in payload if isinstance(row, dict)]
        return []

    @staticmethod
    def _unwrap_one(payload: Any) -> Optional[Dict[str, Any]]:
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            return payload["data"]
        return payload if isinstance(payload, dict) else None

    def _entity_from_row(self, row: Dict[str, Any]) -> T:
        return entity_from_row(self.model_type, row)

    def _entity_to_dict_for_api(self, entity: T) -> Dict[str, Any]:
        data_to_send = {}
        for f in fields(entity):
            if not f.init or f.name == "id":
                continue
            v = getattr(entity, f.name)
            if isinstance(v, Enum): v = v.value
            elif isinstance(v, (datetime, date)): v = v.isoformat()
            elif isinstance(v, tuple): v = list(v)
            data_to_send[f.name] = v
        return data_to_send

    def get_all(self, params: Optional[Dict[str, Any]] = None) -> List[T]:
        """
        Lists the resource. Any failure is logged and yields an empty list so
        the rest of the screen stays usable.
        """
        query = {"t": int(time.time() * 1000)} # cache buster
        query.update(params or {})
        try:
            payload = self.api_client.get(self._resource_path, params=query)
        except ApiError as e:
            logger.error(f"Error fetching {self._resource_path}: {e}", exc_info=True)
            return []

        entities = []
        for row in self._unwrap_list(payload):
            try:
                entities.append(self._entity_from_row(row))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed row from {self._resource_path}: {e}. Row: {row}")
        logger.debug(f"{len(entities)} rows loaded from {self._resource_path}.")
        return entities

    def get_by_id(self, entity_id: int) -> Optional[T]:
        row = self._unwrap_one(self.api_client.get(f"{self._resource_path}/{entity_id}"))
        return self._entity_from_row(row) if row else None

    def add(self, entity: T) -> Optional[T]:
        logger.debug(f"BaseRepository.add: {type(entity).__name__} to '{self._resource_path}'.")
        row = self._unwrap_one(self.api_client.post(self._resource_path, json=self._entity_to_dict_for_api(entity)))
        return self._created_or_none(row)

    def update(self, entity_id: int, entity: Union[T, Dict[str, Any]]) -> Optional[T]:
        data = entity if isinstance(entity, dict) else self._entity_to_dict_for_api(entity)
        logger.debug(f"BaseRepository.update: {self._resource_path}/{entity_id} with keys {list(data)}")
        row = self._unwrap_one(self.api_client.put(f"{self._resource_path}/{entity_id}", json=data))
        logger.info(f"{self._resource_path}/{entity_id} updated.")
        return self._created_or_none(row)

    def delete(self, entity_id: int) -> Any:
        ack = self.api_client.delete(f"{self._resource_path}/{entity_id}")
        logger.info(f"{self._resource_path}/{entity_id} deleted.")
        return ack

    def _created_or_none(self, row: Optional[Dict[str, Any]]) -> Optional[T]:
        # The write already succeeded; an unexpected body shape is not an error
        if not row:
            return None
        try:
            return self._entity_from_row(row)
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Could not read entity returned by {self._resource_path}: {e}")
            return None
