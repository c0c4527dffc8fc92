"""Endpoint services."""

from box_client.endpoints.groups import GroupService

__all__ = [
    "GroupService",
]
