"""
Box Groups Client Library.

A typed HTTP client for the groups and group membership endpoints of the
Box Content API.

Example usage:
    ```python
    from box_client import BoxClient

    with BoxClient(access_token="...") as client:
        groups = client.groups.list_groups(filter="Eng")

        response, membership = client.groups.add_user_to_group(
            user_id="11446498",
            group_id=groups[0].id,
            role="member",
        )

        response, deleted = client.groups.delete_group(groups[0].id)
    ```
"""

__version__ = "0.1.0"

# Main client
from box_client.client import BoxClient

# Configuration
from box_client.config import BoxClientConfig, load_config

# HTTP client components (for advanced usage)
from box_client.http import (
    DEFAULT_BASE_URL,
    BoxHTTPClient,
    AuthProvider,
    TokenAuthProvider,
)

# Endpoint services
from box_client.base import BaseEndpointClient
from box_client.endpoints.groups import GroupService

# Exceptions
from box_client.exceptions import (
    BoxClientError,
    MissingFieldError,
    RequestBuildError,
    DecodeError,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    NetworkError,
    TimeoutError,
    ConnectionError,
    exception_from_response,
)

__all__ = [
    "__version__",
    "BoxClient",
    "BoxClientConfig",
    "load_config",
    "DEFAULT_BASE_URL",
    "BoxHTTPClient",
    "AuthProvider",
    "TokenAuthProvider",
    "BaseEndpointClient",
    "GroupService",
    "BoxClientError",
    "MissingFieldError",
    "RequestBuildError",
    "DecodeError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "exception_from_response",
]
