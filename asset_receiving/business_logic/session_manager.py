# asset_receiving/business_logic/session_manager.py

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import logging

from asset_receiving.business_logic.entities.reference_entities import LocationEntity
from asset_receiving.business_logic.entities.user_entity import UserEntity
from asset_receiving.config import LOGIN_ENDPOINT
from asset_receiving.constants import Permission, MSG_LOGIN_FAILED
from asset_receiving.data_access.api_client import ApiClient, ApiError
from asset_receiving.data_access.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)

KEY_TOKEN = "session.token"
KEY_USER = "session.user"
KEY_ROLES = "session.roles"
KEY_PERMISSIONS = "session.permissions"
SESSION_KEYS = (KEY_TOKEN, KEY_USER, KEY_ROLES, KEY_PERMISSIONS)


def user_from_dict(data: Dict[str, Any]) -> UserEntity:
    locations = tuple(
        LocationEntity(id=loc.get("id"), name=loc.get("name") or "")
        for loc in (data.get("locations") or []) if isinstance(loc, dict)
    )
    return UserEntity(id=data.get("id"), name=data.get("name") or "",
                      email=data.get("email") or "", locations=locations)


def user_to_dict(user: UserEntity) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "locations": [{"id": loc.id, "name": loc.name} for loc in user.locations],
    }


class SessionManager:
    """
    Process-wide login state: token, user, roles and permissions.

    `load()` restores a persisted session at startup; `logout()` and
    `handle_unauthorized()` wipe both memory and the local store.
    """

    def __init__(self, settings_repository: SettingsRepository, api_client: Optional[ApiClient] = None):
        if settings_repository is None:
            raise ValueError("settings_repository cannot be None")
        self.settings_repository = settings_repository
        self.api_client = api_client
        self._token: Optional[str] = None
        self._user: Optional[UserEntity] = None
        self._roles: List[str] = []
        self._permissions: List[str] = []
        self._cleared_listeners: List[Callable[[], None]] = []

        if self.api_client is not None:
            self.api_client.set_token_provider(lambda: self._token)
            self.api_client.add_unauthorized_handler(self.handle_unauthorized)

    # --- read-only interface used by the receipt screen ---

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def current_user(self) -> Optional[UserEntity]:
        return self._user

    @property
    def roles(self) -> List[str]:
        return list(self._roles)

    @property
    def permissions(self) -> List[str]:
        return list(self._permissions)

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token) and self._user is not None

    def has_permission(self, permission: Union[str, Permission]) -> bool:
        name = permission.value if isinstance(permission, Permission) else permission
        return name in self._permissions

    def has_role(self, role: str) -> bool:
        return role in self._roles

    def add_cleared_listener(self, listener: Callable[[], None]) -> None:
        self._cleared_listeners.append(listener)

    # --- lifecycle ---

    def load(self) -> bool:
        """Restores the stored session; returns True when a usable session was found."""
        token = self.settings_repository.get_value(KEY_TOKEN)
        stored_user = self.settings_repository.get_value(KEY_USER)
        if not token or not stored_user:
            logger.debug("No stored session found.")
            return False

        try:
            user = user_from_dict(json.loads(stored_user))
            roles = list(json.loads(self.settings_repository.get_value(KEY_ROLES) or "[]"))
            permissions = list(json.loads(self.settings_repository.get_value(KEY_PERMISSIONS) or "[]"))
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Error parsing stored auth data: {e}", exc_info=True)
            return False

        self._token = token
        self._user = user
        self._roles = roles
        self._permissions = permissions
        logger.info(f"Session restored for user {user.email}.")
        return self.is_authenticated

    def login(self, email: str, password: str) -> Tuple[bool, Optional[str]]:
        if self.api_client is None:
            raise ValueError("login requires an api_client")
        try:
            data = self.api_client.post(LOGIN_ENDPOINT, params={"email": email, "password": password},
                                        authenticated=False) or {}
        except ApiError as e:
            message = e.message or MSG_LOGIN_FAILED
            logger.warning(f"Login failed for {email}: {message}")
            return False, message

        token = data.get("token")
        if not token or not isinstance(data.get("user"), dict):
            logger.error(f"Login response for {email} has no token or user.")
            return False, MSG_LOGIN_FAILED

        self._token = token
        self._user = user_from_dict(data["user"])
        self._roles = list(data.get("roles") or [])
        self._permissions = list(data.get("permissions") or [])
        self._persist()
        logger.info(f"User {email} logged in with {len(self._permissions)} permission(s).")
        return True, None

    def logout(self) -> None:
        self._clear()
        logger.info("User logged out.")

    def handle_unauthorized(self) -> None:
        logger.warning("Backend rejected the session token; clearing session.")
        self._clear()

    def _persist(self) -> None:
        self.settings_repository.set_value(KEY_TOKEN, self._token or "")
        self.settings_repository.set_value(KEY_USER, json.dumps(user_to_dict(self._user)) if self._user else "")
        self.settings_repository.set_value(KEY_ROLES, json.dumps(self._roles))
        self.settings_repository.set_value(KEY_PERMISSIONS, json.dumps(self._permissions))

    def _clear(self) -> None:
        self._token = None
        self._user = None
        self._roles = []
        self._permissions = []
        self.settings_repository.delete_keys(SESSION_KEYS)
        for listener in list(self._cleared_listeners):
            listener()
