from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from box_types.base import BoxCollection, BoxEntity, EntityReference, PageQuery
from box_types.users import UserMini


class GroupRole(str, Enum):
    member = "member"
    admin = "admin"


class Group(BoxEntity):
    type: Optional[str] = Field(None, description="Always 'group'")
    id: Optional[str] = Field(None, description="Group ID")
    name: Optional[str] = Field(None, description="Group name")
    created_at: Optional[str] = Field(None, description="Creation timestamp as sent by the API")
    modified_at: Optional[str] = Field(None, description="Last modification timestamp as sent by the API")

    def __str__(self) -> str:
        return f"{self.name}<{self.id}>"


class GroupCollection(BoxCollection):
    entries: List[Group] = Field(default_factory=list)


class GroupCreate(BaseModel):
    name: str = Field(min_length=1, description="Name of the new group")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Group name cannot be empty or only whitespace')
        return v


class GroupUpdate(BaseModel):
    name: str = Field(description="New group name")


class GroupListQuery(PageQuery):
    filter: Optional[str] = Field(None, description="Only return groups whose name starts with this value")
    offset: int = Field(0, ge=0)


class Membership(BoxEntity):
    type: Optional[str] = Field(None, description="Always 'group_membership'")
    id: Optional[str] = Field(None, description="Membership ID")
    user: Optional[UserMini] = None
    group: Optional[Group] = None
    role: Optional[str] = Field(None, description="Role of the user in the group")


class MembershipCollection(BoxCollection):
    entries: List[Membership] = Field(default_factory=list)


class MembershipCreate(BaseModel):
    user: EntityReference
    group: EntityReference
    role: Optional[GroupRole | str] = Field(None, description="Omitted from the body when not set")

    @field_validator('role', mode='before')
    @classmethod
    def empty_role_is_unset(cls, v):
        return v or None

    model_config = ConfigDict(use_enum_values=True)


class MembershipUpdate(BaseModel):
    role: GroupRole | str

    model_config = ConfigDict(use_enum_values=True)
