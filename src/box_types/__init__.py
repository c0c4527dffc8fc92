"""
Data models for the Box groups and group membership API.

Response records are frozen pydantic models; request payloads are plain
models dumped with exclude_none so optional keys stay off the wire.
"""

from box_types.base import (
    BoxEntity,
    CollectionInfo,
    BoxCollection,
    EntityReference,
    PageQuery,
)
from box_types.users import UserMini
from box_types.groups import (
    GroupRole,
    Group,
    GroupCollection,
    GroupCreate,
    GroupUpdate,
    GroupListQuery,
    Membership,
    MembershipCollection,
    MembershipCreate,
    MembershipUpdate,
)
from box_types.collaborations import (
    Collaboration,
    CollaborationCollection,
)

__all__ = [
    "BoxEntity",
    "CollectionInfo",
    "BoxCollection",
    "EntityReference",
    "PageQuery",
    "UserMini",
    "GroupRole",
    "Group",
    "GroupCollection",
    "GroupCreate",
    "GroupUpdate",
    "GroupListQuery",
    "Membership",
    "MembershipCollection",
    "MembershipCreate",
    "MembershipUpdate",
    "Collaboration",
    "CollaborationCollection",
]
