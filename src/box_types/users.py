from typing import Optional
from pydantic import Field

from box_types.base import BoxEntity


class UserMini(BoxEntity):
    """Abbreviated user record embedded in memberships and collaborations."""
    type: Optional[str] = Field(None, description="Always 'user'")
    id: Optional[str] = Field(None, description="User ID")
    name: Optional[str] = Field(None, description="Display name")
    login: Optional[str] = Field(None, description="Primary login email")
