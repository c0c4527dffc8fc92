"""
Main Box API client.

This module provides the BoxClient class, the entry point for the groups
API. It owns the HTTP client and the token provider and hands the shared
transport to the endpoint services it creates.
"""

from typing import Any, Dict, Optional, Type, TypeVar
import logging

from box_client.config import BoxClientConfig
from box_client.endpoints.groups import GroupService
from box_client.exceptions import BoxClientError
from box_client.http import DEFAULT_BASE_URL, BoxHTTPClient, TokenAuthProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOKEN_URL = "https://api.box.com/oauth2/token"


class BoxClient:
    """
    Main client for the Box groups API.

    Example usage:
        ```python
        with BoxClient(access_token="...") as client:
            response, group = client.groups.create_group("Engineering")
            client.groups.add_user_to_group("11446498", group.id, role="admin")
            for g in client.groups.list_groups():
                print(g.name)
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 1,
        headers: Optional[Dict[str, str]] = None,
        token_url: str = TOKEN_URL,
    ):
        """
        Initialize the Box client.

        Args:
            base_url: Base URL for the API
            access_token: OAuth2 access token or developer token
            refresh_token: OAuth2 refresh token (optional)
            client_id: OAuth2 client ID, enables token refresh
            client_secret: OAuth2 client secret, enables token refresh
            timeout: Request timeout in seconds
            max_retries: Attempts per request on transport failures
            headers: Additional headers to include in all requests
            token_url: OAuth2 token endpoint used for refresh
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url

        self._auth_provider = TokenAuthProvider(
            access_token=access_token,
            refresh_token=refresh_token,
        )

        self._http = BoxHTTPClient(
            base_url=self._base_url,
            auth_provider=self._auth_provider,
            timeout=timeout,
            max_retries=max_retries,
            headers=headers,
        )

        if client_id and client_secret:
            self._auth_provider.set_refresh_callback(self._refresh_token)

        self._endpoint_clients: Dict[str, Any] = {}

    @classmethod
    def from_config(cls, config: BoxClientConfig, **kwargs: Any) -> "BoxClient":
        return cls(
            config.base_url,
            access_token=config.access_token,
            refresh_token=config.refresh_token,
            client_id=config.client_id,
            client_secret=config.client_secret,
            timeout=config.timeout,
            max_retries=config.max_retries,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        """Get the base URL for the API."""
        return self._base_url

    @property
    def is_authenticated(self) -> bool:
        """Check if the client holds an access token."""
        return self._auth_provider.is_authenticated()

    @property
    def http(self) -> BoxHTTPClient:
        """Get the underlying HTTP client for custom requests."""
        return self._http

    # =========================================================================
    # Authentication
    # =========================================================================

    def _refresh_token(self, refresh_token: str) -> Optional[Dict[str, str]]:
        """
        Exchange the refresh token for a new token pair.

        Called by the token provider when a request returns 401. Box rotates
        refresh tokens, so the new one replaces the old.
        """
        try:
            response = self._http.post(
                self._token_url,
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": refresh_token,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                authenticated=False,
            )
            data = response.json()

            logger.debug("Successfully refreshed access token")
            return {
                "access_token": data["access_token"],
                "refresh_token": data.get("refresh_token", refresh_token),
            }

        except (BoxClientError, KeyError, ValueError) as e:
            logger.warning(f"Token refresh failed: {e}")
            return None

    def set_token(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
    ) -> None:
        """Set authentication tokens directly."""
        self._auth_provider.set_tokens(access_token, refresh_token)
        logger.debug("Authentication tokens set")

    def clear_tokens(self) -> None:
        """Clear authentication tokens."""
        self._auth_provider.clear_tokens()
        logger.debug("Authentication tokens cleared")

    # =========================================================================
    # Endpoint Clients
    # =========================================================================

    def _get_endpoint_client(self, client_class: Type[T]) -> T:
        """Get or create an endpoint client instance."""
        class_name = client_class.__name__
        if class_name not in self._endpoint_clients:
            self._endpoint_clients[class_name] = client_class(self._http)
        return self._endpoint_clients[class_name]

    @property
    def groups(self) -> GroupService:
        return self._get_endpoint_client(GroupService)

    # =========================================================================
    # Lifecycle Management
    # =========================================================================

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()
        self._endpoint_clients.clear()
        logger.debug("Client closed")

    def __enter__(self) -> "BoxClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        auth_status = "authenticated" if self.is_authenticated else "not authenticated"
        return f"BoxClient(base_url={self._base_url!r}, {auth_status})"
