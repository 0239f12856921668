# asset_receiving/data_access/api_client.py

from typing import Any, Callable, Dict, List, Optional
import logging

import requests

from asset_receiving.config import API_BASE_URL

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the backend failed; `message` is the backend's own message when it sent one."""

    def __init__(self, message: Optional[str], status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message or f"Request failed (status {status_code})")
        self.message = message
        self.status_code = status_code
        self.payload = payload


class UnauthorizedError(ApiError):
    pass


class ApiClient:
    """
    Thin JSON-over-HTTP client for the inventory backend.

    Requests are sent once, without timeout or retry. A 401 on an
    authenticated request runs the registered unauthorized handlers
    (session teardown) before UnauthorizedError is raised.
    """

    def __init__(self,
                 base_url: str = API_BASE_URL,
                 token_provider: Optional[Callable[[], Optional[str]]] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })
        self._token_provider = token_provider
        self._unauthorized_handlers: List[Callable[[], None]] = []

    def set_token_provider(self, token_provider: Callable[[], Optional[str]]) -> None:
        self._token_provider = token_provider

    def add_unauthorized_handler(self, handler: Callable[[], None]) -> None:
        self._unauthorized_handlers.append(handler)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _json_or_none(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning(f"Response from {response.url} is not JSON.")
            return None

    @classmethod
    def _error_message(cls, response: requests.Response) -> Optional[str]:
        body = cls._json_or_none(response)
        if isinstance(body, dict):
            message = body.get("message")
            if message:
                return str(message)
        return None

    def request(self, method: str, path: str,
                params: Optional[Dict[str, Any]] = None,
                json: Any = None,
                authenticated: bool = True) -> Any:
        url = self._url(path)
        headers = {}
        if authenticated and self._token_provider is not None:
            token = self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        logger.debug(f"{method} {url} params={params}")
        try:
            response = self.session.request(method, url, params=params, json=json, headers=headers)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(str(e)) from e

        if response.status_code == 401 and authenticated:
            logger.warning(f"{method} {url} returned 401; clearing session.")
            for handler in list(self._unauthorized_handlers):
                handler()
            raise UnauthorizedError(self._error_message(response) or "Unauthenticated.", status_code=401)

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(f"{method} {url} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=self._json_or_none(response))

        return self._json_or_none(response)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.request("POST", path, params=params, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)
