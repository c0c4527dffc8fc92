"""Pytest configuration and fixtures for box-groups tests."""

import pytest

from box_client.endpoints.groups import GroupService
from box_client.http import BoxHTTPClient, TokenAuthProvider

BASE_URL = "https://api.box.com/2.0"


# ============================================================================
# Response Bodies
# ============================================================================


def group_data(id: str = "11446498", name: str = "Support") -> dict:
    return {
        "type": "group",
        "id": id,
        "name": name,
        "created_at": "2012-12-12T10:53:43-08:00",
        "modified_at": "2012-12-12T11:15:04-08:00",
    }


def group_page(entries: list, total_count: int, offset: int = 0, limit: int = 100) -> dict:
    return {
        "total_count": total_count,
        "entries": entries,
        "offset": offset,
        "limit": limit,
    }


def membership_data(id: str = "1560354", role: str = "member") -> dict:
    return {
        "type": "group_membership",
        "id": id,
        "user": {
            "type": "user",
            "id": "13130406",
            "name": "Alice",
            "login": "alice@example.com",
        },
        "group": {
            "type": "group",
            "id": "119720",
            "name": "family",
        },
        "role": role,
    }


def box_error(status: int, code: str, message: str) -> dict:
    return {
        "type": "error",
        "status": status,
        "code": code,
        "message": message,
        "request_id": "abcdef123456",
    }


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def base_url():
    """Default base URL for testing."""
    return BASE_URL


@pytest.fixture
def http_client(base_url):
    """HTTP client holding a static access token."""
    client = BoxHTTPClient(
        base_url=base_url,
        auth_provider=TokenAuthProvider(access_token="test-access-token"),
    )
    yield client
    client.close()


@pytest.fixture
def groups(http_client):
    """Group service bound to the test HTTP client."""
    return GroupService(http_client)
