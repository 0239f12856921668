from unittest.mock import MagicMock

import pytest
import requests

from asset_receiving.data_access.api_client import ApiClient, ApiError, UnauthorizedError


def _response(status_code=200, body=None, content=b"{}"):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.json.return_value = body
    response.url = "https://api.test/x"
    return response


@pytest.fixture
def http():
    session = MagicMock()
    session.headers = {}
    return session


def test_sends_json_headers_and_bearer_token(http):
    http.request.return_value = _response(body={"data": []})
    client = ApiClient("https://api.test/", token_provider=lambda: "tok", session=http)

    result = client.get("/assets", params={"t": 1})

    assert result == {"data": []}
    assert http.headers["Accept"] == "application/json"
    http.request.assert_called_once_with(
        "GET", "https://api.test/assets", params={"t": 1}, json=None,
        headers={"Authorization": "Bearer tok"})


def test_unauthenticated_request_sends_no_token(http):
    http.request.return_value = _response(body={"token": "x"})
    client = ApiClient("https://api.test", token_provider=lambda: "tok", session=http)

    client.post("/auth/login", params={"email": "a"}, authenticated=False)

    assert http.request.call_args.kwargs["headers"] == {}


def test_empty_body_is_none(http):
    http.request.return_value = _response(status_code=204, content=b"")
    client = ApiClient("https://api.test", session=http)

    assert client.delete("/store-asset-receipt/1") is None


def test_401_runs_unauthorized_handlers_then_raises(http):
    http.request.return_value = _response(status_code=401, body={"message": "Unauthenticated."})
    client = ApiClient("https://api.test", token_provider=lambda: "old", session=http)
    handler = MagicMock()
    client.add_unauthorized_handler(handler)

    with pytest.raises(UnauthorizedError) as exc_info:
        client.get("/store-asset-receipt")

    handler.assert_called_once_with()
    assert exc_info.value.status_code == 401


def test_401_on_login_is_a_plain_error(http):
    http.request.return_value = _response(status_code=401, body={"message": "Invalid credentials"})
    client = ApiClient("https://api.test", session=http)
    handler = MagicMock()
    client.add_unauthorized_handler(handler)

    with pytest.raises(ApiError) as exc_info:
        client.post("/auth/login", authenticated=False)

    assert not isinstance(exc_info.value, UnauthorizedError)
    assert exc_info.value.message == "Invalid credentials"
    handler.assert_not_called()


def test_error_status_carries_backend_message(http):
    http.request.return_value = _response(status_code=422, body={"message": "The asset id field is required."})
    client = ApiClient("https://api.test", session=http)

    with pytest.raises(ApiError) as exc_info:
        client.post("/store-asset-receipt", json={})

    assert exc_info.value.status_code == 422
    assert exc_info.value.message == "The asset id field is required."


def test_error_without_message_has_none_message(http):
    response = _response(status_code=500)
    response.json.side_effect = ValueError("no json")
    http.request.return_value = response
    client = ApiClient("https://api.test", session=http)

    with pytest.raises(ApiError) as exc_info:
        client.put("/store-asset-receipt/1", json={})

    assert exc_info.value.message is None
    assert "500" in str(exc_info.value)


def test_transport_failure_becomes_api_error(http):
    http.request.side_effect = requests.ConnectionError("connection refused")
    client = ApiClient("https://api.test", session=http)

    with pytest.raises(ApiError) as exc_info:
        client.get("/assets")

    assert "connection refused" in exc_info.value.message
