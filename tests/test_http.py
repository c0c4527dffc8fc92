"""Tests for the HTTP client module."""

import json
from unittest.mock import MagicMock

import httpx
import pytest
from pydantic import BaseModel

from box_client.http import (
    BoxHTTPClient,
    TokenAuthProvider,
)
from box_client.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BoxClientError,
    ConnectionError as ClientConnectionError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestBuildError,
    ServerError,
    TimeoutError as ClientTimeoutError,
    ValidationError,
)

from conftest import BASE_URL, box_error


class Payload(BaseModel):
    name: str
    role: str | None = None


class TestTokenAuthProvider:
    """Tests for the TokenAuthProvider class."""

    def test_initialization_without_tokens(self):
        """Test creating provider without tokens."""
        provider = TokenAuthProvider()
        assert not provider.is_authenticated()

    def test_initialization_with_tokens(self):
        """Test creating provider with tokens."""
        provider = TokenAuthProvider(
            access_token="test-access",
            refresh_token="test-refresh",
        )
        assert provider.is_authenticated()
        assert provider.get_access_token() == "test-access"

    def test_set_and_clear_tokens(self):
        """Test setting then clearing tokens."""
        provider = TokenAuthProvider()
        provider.set_tokens("new-access", "new-refresh")
        assert provider.is_authenticated()

        provider.clear_tokens()
        assert not provider.is_authenticated()

    def test_refresh_token_with_callback(self):
        """Test refreshing token with callback."""
        provider = TokenAuthProvider(
            access_token="old-token",
            refresh_token="refresh-token",
        )
        seen = []

        def refresh(refresh_token):
            seen.append(refresh_token)
            return {"access_token": "new-token", "refresh_token": "new-refresh"}

        provider.set_refresh_callback(refresh)

        assert provider.refresh_token() == "new-token"
        assert provider.get_access_token() == "new-token"
        assert seen == ["refresh-token"]

    def test_refresh_token_without_callback(self):
        """Test refreshing token without callback returns None."""
        provider = TokenAuthProvider(refresh_token="refresh")
        assert provider.refresh_token() is None

    def test_refresh_callback_failure(self):
        """A callback returning None leaves the old token in place."""
        provider = TokenAuthProvider(access_token="old", refresh_token="r")
        provider.set_refresh_callback(lambda token: None)

        assert provider.refresh_token() is None
        assert provider.get_access_token() == "old"


class TestBoxHTTPClient:
    """Tests for client setup and request building."""

    @pytest.fixture
    def client(self):
        """Create a client for testing."""
        client = BoxHTTPClient(base_url=BASE_URL)
        yield client
        client.close()

    def test_initialization(self, client):
        """Test client initialization."""
        assert client.base_url == BASE_URL
        assert client.timeout == 30.0
        assert client.max_retries == 1

    def test_initialization_with_trailing_slash(self):
        """Test that trailing slashes are stripped from base_url."""
        client = BoxHTTPClient(base_url=BASE_URL + "/")
        assert client.base_url == BASE_URL

    def test_max_retries_at_least_one(self):
        """A non-positive retry count still allows one attempt."""
        assert BoxHTTPClient(max_retries=0).max_retries == 1

    def test_context_manager(self):
        """Test client as context manager."""
        with BoxHTTPClient(base_url=BASE_URL) as client:
            assert client._client is not None
        assert client._client is None

    def test_build_headers_with_extra(self, client):
        """Test building headers with extra headers."""
        headers = client._build_headers({"X-Custom": "value"})
        assert headers["Accept"] == "application/json"
        assert headers["X-Custom"] == "value"

    def test_add_auth_header(self, client):
        """Test adding authentication header."""
        client.auth_provider.set_tokens("test-token")
        headers = client._add_auth_header({})
        assert headers["Authorization"] == "Bearer test-token"

    def test_add_auth_header_when_not_authenticated(self, client):
        """Test that no auth header is added when not authenticated."""
        headers = client._add_auth_header({})
        assert "Authorization" not in headers

    def test_build_request_joins_path(self, client):
        """Paths are resolved below the base URL."""
        request = client.build_request("GET", "/groups/42/memberships")
        assert str(request.url) == f"{BASE_URL}/groups/42/memberships"

    def test_build_request_absolute_url(self, client):
        """Absolute URLs bypass the base URL."""
        request = client.build_request("POST", "https://api.box.com/oauth2/token", data={"a": "b"})
        assert str(request.url) == "https://api.box.com/oauth2/token"

    def test_build_request_drops_none_params(self, client):
        """None query parameters are not sent."""
        request = client.build_request("GET", "/groups", params={"offset": 0, "filter": None})
        assert dict(request.url.params) == {"offset": "0"}

    def test_build_request_dumps_model_without_none(self, client):
        """Pydantic payloads are serialized without unset optional keys."""
        request = client.build_request("POST", "/groups", json_data=Payload(name="x"))
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.read()) == {"name": "x"}

    def test_build_request_unserializable_body(self, client):
        """A body that cannot be encoded raises RequestBuildError."""
        with pytest.raises(RequestBuildError):
            client.build_request("POST", "/groups", json_data={"name": object()})

    def test_build_request_sends_bearer(self, client):
        """The bearer header is injected only for authenticated requests."""
        client.auth_provider.set_tokens("tok")
        assert client.build_request("GET", "/groups").headers["Authorization"] == "Bearer tok"
        unauth = client.build_request("GET", "/groups", authenticated=False)
        assert "Authorization" not in unauth.headers


class TestErrorResponses:
    """Tests for translating error responses."""

    @pytest.fixture
    def client(self):
        return BoxHTTPClient(base_url=BASE_URL)

    def make_response(self, status_code, json_data=None, text="", headers=None):
        response = MagicMock(spec=httpx.Response)
        response.status_code = status_code
        response.text = text
        response.headers = headers or {}
        if json_data is not None:
            response.json.return_value = json_data
        else:
            response.json.side_effect = ValueError("No JSON content")
        return response

    @pytest.mark.parametrize("status_code,exception_class", [
        (400, ValidationError),
        (401, AuthenticationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (500, ServerError),
        (502, ServerError),
        (418, BoxClientError),
    ])
    def test_status_mapping(self, client, status_code, exception_class):
        """Each status maps to its exception class."""
        response = self.make_response(status_code, box_error(status_code, "code", "msg"))

        with pytest.raises(exception_class) as exc_info:
            client._handle_error_response(response)

        assert exc_info.value.status_code == status_code

    def test_box_error_body(self, client):
        """Code, message and request_id are taken from the Box error body."""
        response = self.make_response(404, box_error(404, "not_found", "Not Found"))

        with pytest.raises(NotFoundError) as exc_info:
            client._handle_error_response(response)

        error = exc_info.value
        assert error.message == "Not Found"
        assert error.error_code == "not_found"
        assert error.request_id == "abcdef123456"

    def test_retry_after_header(self, client):
        """Retry-After is exposed on rate limit errors."""
        response = self.make_response(
            429, box_error(429, "rate_limit_exceeded", "Slow down"), headers={"Retry-After": "7"}
        )

        with pytest.raises(RateLimitError) as exc_info:
            client._handle_error_response(response)

        assert exc_info.value.retry_after == 7

    def test_non_json_error_body(self, client):
        """Test handling error when JSON parsing fails."""
        response = self.make_response(500, text="Internal Server Error")

        with pytest.raises(ServerError) as exc_info:
            client._handle_error_response(response)

        assert "Internal Server Error" in str(exc_info.value)


class TestExecute:
    """Tests for sending requests through respx."""

    @pytest.fixture
    def client(self):
        client = BoxHTTPClient(
            base_url=BASE_URL,
            auth_provider=TokenAuthProvider(access_token="old", refresh_token="refresh"),
        )
        yield client
        client.close()

    def test_success(self, client, respx_mock):
        """A 2xx response is returned as is."""
        respx_mock.get(f"{BASE_URL}/groups").respond(200, json={"total_count": 0})

        response = client.get("/groups")

        assert response.status_code == 200
        assert response.json() == {"total_count": 0}

    def test_refresh_on_401(self, client, respx_mock):
        """A 401 triggers one refresh and a resend with the new token."""
        client.auth_provider.set_refresh_callback(lambda token: {"access_token": "new"})
        route = respx_mock.get(f"{BASE_URL}/groups").mock(
            side_effect=[
                httpx.Response(401, json=box_error(401, "unauthorized", "expired")),
                httpx.Response(200, json={}),
            ]
        )

        response = client.get("/groups")

        assert response.status_code == 200
        assert route.calls[0].request.headers["Authorization"] == "Bearer old"
        assert route.calls[1].request.headers["Authorization"] == "Bearer new"

    def test_401_without_refresh(self, client, respx_mock):
        """Without a refresh hook a 401 raises AuthenticationError."""
        route = respx_mock.get(f"{BASE_URL}/groups").respond(
            401, json=box_error(401, "unauthorized", "expired")
        )

        with pytest.raises(AuthenticationError):
            client.get("/groups")

        assert route.call_count == 1

    def test_timeout(self, client, respx_mock):
        """Timeouts map to TimeoutError."""
        respx_mock.get(f"{BASE_URL}/groups").mock(side_effect=httpx.ReadTimeout)

        with pytest.raises(ClientTimeoutError):
            client.get("/groups")

    def test_connect_error(self, client, respx_mock):
        """Connection failures map to ConnectionError, a NetworkError."""
        respx_mock.get(f"{BASE_URL}/groups").mock(side_effect=httpx.ConnectError)

        with pytest.raises(ClientConnectionError) as exc_info:
            client.get("/groups")

        assert isinstance(exc_info.value, NetworkError)

    def test_single_attempt_by_default(self, client, respx_mock):
        """Transport failures are not retried unless configured."""
        route = respx_mock.get(f"{BASE_URL}/groups").mock(side_effect=httpx.ConnectError)

        with pytest.raises(NetworkError):
            client.get("/groups")

        assert route.call_count == 1

    def test_configured_retries(self, respx_mock):
        """With max_retries a transient failure is retried."""
        client = BoxHTTPClient(base_url=BASE_URL, max_retries=2)
        route = respx_mock.get(f"{BASE_URL}/groups").mock(
            side_effect=[httpx.ConnectError("down"), httpx.Response(200, json={})]
        )

        response = client.get("/groups")

        assert response.status_code == 200
        assert route.call_count == 2
        client.close()
