"""
HTTP transport for the Box API.

This module provides a synchronous HTTP client built on httpx with:
- Bearer token authentication
- Token refresh on a first 401
- Request/response logging
- Translation of Box error bodies into typed exceptions
- Timeout configuration

Building and executing a request are separate steps (build_request and
execute) so endpoint services can hold the client and drive both.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Union
import logging

import httpx
from pydantic import BaseModel

from box_client.exceptions import (
    BoxClientError,
    NetworkError,
    ConnectionError as ClientConnectionError,
    RequestBuildError,
    TimeoutError as ClientTimeoutError,
    exception_from_response,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.box.com/2.0"

RefreshCallback = Callable[[str], Optional[Dict[str, str]]]


class AuthProvider(ABC):
    """Abstract base class for authentication providers."""

    @abstractmethod
    def get_access_token(self) -> Optional[str]:
        """Get the current access token."""
        ...

    @abstractmethod
    def refresh_token(self) -> Optional[str]:
        """Refresh the access token and return the new one."""
        ...

    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check if currently authenticated."""
        ...


class TokenAuthProvider(AuthProvider):
    """Simple token-based authentication provider."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ):
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._refresh_callback: Optional[RefreshCallback] = None

    def get_access_token(self) -> Optional[str]:
        return self._access_token

    def refresh_token(self) -> Optional[str]:
        if self._refresh_callback and self._refresh_token:
            new_tokens = self._refresh_callback(self._refresh_token)
            if new_tokens:
                self._access_token = new_tokens.get("access_token")
                if "refresh_token" in new_tokens:
                    self._refresh_token = new_tokens["refresh_token"]
                return self._access_token
        return None

    def is_authenticated(self) -> bool:
        return self._access_token is not None

    def set_tokens(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
    ) -> None:
        """Set authentication tokens."""
        self._access_token = access_token
        if refresh_token is not None:
            self._refresh_token = refresh_token

    def clear_tokens(self) -> None:
        """Clear authentication tokens."""
        self._access_token = None
        self._refresh_token = None

    def set_refresh_callback(self, callback: RefreshCallback) -> None:
        """Set the callback function for token refresh."""
        self._refresh_callback = callback


class BoxHTTPClient:
    """
    HTTP client for Box API requests.

    This client handles:
    - Base URL management
    - Authentication header injection
    - Response parsing and error handling
    - Optional re-attempts on transport failures
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        auth_provider: Optional[AuthProvider] = None,
        timeout: float = 30.0,
        max_retries: int = 1,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            base_url: Base URL for the API (e.g., "https://api.box.com/2.0")
            auth_provider: Authentication provider for token management
            timeout: Request timeout in seconds
            max_retries: Number of attempts for requests that fail at the
                transport level. 1 means a single attempt.
            headers: Additional headers to include in all requests
            transport: Custom httpx transport (mostly for tests)
        """
        self.base_url = base_url.rstrip("/")
        self.auth_provider = auth_provider or TokenAuthProvider()
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._default_headers = headers or {}
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """Get or create the underlying httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url + "/",
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
        self._client = None

    def __enter__(self) -> "BoxHTTPClient":
        self._get_client()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _build_headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Build request headers."""
        headers = {
            "Accept": "application/json",
            **self._default_headers,
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _add_auth_header(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Add authentication header if available."""
        if self.auth_provider and self.auth_provider.is_authenticated():
            token = self.auth_provider.get_access_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Convert an HTTP error response to the matching exception and raise it."""
        status_code = response.status_code
        details: Dict[str, Any] = {}

        # Box error bodies: {"type": "error", "status", "code", "message", "request_id"}
        try:
            error_data = response.json()
            detail = error_data.get("message") or error_data.get("detail") or str(error_data)
            error_code = error_data.get("code")
            if error_data.get("request_id"):
                details["request_id"] = error_data["request_id"]
            if error_data.get("context_info"):
                details["context_info"] = error_data["context_info"]
        except Exception:
            detail = response.text or f"HTTP {status_code}"
            error_code = None

        retry_after = response.headers.get("Retry-After")
        raise exception_from_response(
            status_code,
            detail,
            error_code=error_code,
            details=details,
            retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
        )

    def build_request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Request:
        """
        Build a transport-ready request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Request path, relative to base_url, or an absolute URL
            params: Query parameters, None values are dropped
            json_data: JSON body data (can be dict or Pydantic model)
            data: Form data
            headers: Additional headers
            authenticated: Whether to include auth header

        Raises:
            RequestBuildError: If the URL or body cannot be built
        """
        client = self._get_client()

        request_headers = self._build_headers(headers)
        if authenticated:
            request_headers = self._add_auth_header(request_headers)

        if json_data is not None and isinstance(json_data, BaseModel):
            json_data = json_data.model_dump(mode="json", exclude_none=True)

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        url = path if path.startswith(("http://", "https://")) else path.lstrip("/")

        try:
            return client.build_request(
                method=method,
                url=url,
                params=params or None,
                json=json_data,
                data=data,
                headers=request_headers,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestBuildError(
                f"Cannot build {method} {path}: {e}",
                details={"method": method, "path": path},
            ) from e

    @staticmethod
    def _with_token(request: httpx.Request, token: str) -> httpx.Request:
        """Copy of request carrying a different bearer token."""
        headers = request.headers.copy()
        headers["Authorization"] = f"Bearer {token}"
        return httpx.Request(
            request.method,
            request.url,
            headers=headers,
            content=request.read(),
            extensions=request.extensions,
        )

    def execute(
        self,
        request: httpx.Request,
        *,
        authenticated: bool = True,
    ) -> httpx.Response:
        """
        Send a request built by build_request.

        Returns:
            httpx.Response object for any 2xx status

        Raises:
            BoxClientError: On HTTP errors
            NetworkError: On connection failures
            TimeoutError: On request timeout
        """
        client = self._get_client()
        refreshed = False
        last_exception: Optional[BoxClientError] = None

        for attempt in range(self.max_retries):
            try:
                logger.debug(f"{request.method} {request.url}")
                response = client.send(request)
                logger.debug(f"{request.method} {request.url} -> {response.status_code}")

                if response.status_code == 401 and authenticated and not refreshed:
                    refreshed = True
                    new_token = self.auth_provider.refresh_token()
                    if new_token:
                        logger.debug("Retrying request with refreshed access token")
                        request = self._with_token(request, new_token)
                        response = client.send(request)

                if response.is_success:
                    return response

                self._handle_error_response(response)

            except httpx.TimeoutException as e:
                last_exception = ClientTimeoutError(f"Request timed out: {e}")
            except httpx.ConnectError as e:
                last_exception = ClientConnectionError(f"Connection failed: {e}")
            except httpx.TransportError as e:
                last_exception = NetworkError(f"Request failed: {e}")

            if attempt < self.max_retries - 1:
                logger.warning(f"{request.method} {request.url} failed ({last_exception}), retrying")

        if last_exception:
            raise last_exception
        raise NetworkError("Request failed after retries")

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        request = self.build_request(
            method,
            path,
            params=params,
            json_data=json_data,
            data=data,
            headers=headers,
            authenticated=authenticated,
        )
        return self.execute(request, authenticated=authenticated)

    def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a GET request."""
        return self._request(
            "GET",
            path,
            params=params,
            headers=headers,
            authenticated=authenticated,
        )

    def post(
        self,
        path: str,
        *,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a POST request."""
        return self._request(
            "POST",
            path,
            json_data=json_data,
            data=data,
            params=params,
            headers=headers,
            authenticated=authenticated,
        )
