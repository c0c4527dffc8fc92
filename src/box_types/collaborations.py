from typing import Any, Dict, List, Optional
from pydantic import ConfigDict, Field

from box_types.base import BoxCollection, BoxEntity


class Collaboration(BoxEntity):
    """
    A grant of access on a file or folder.

    Only the common keys are typed, everything else the API returns is kept
    as extra attributes and survives model_dump().
    """
    type: Optional[str] = None
    id: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    created_by: Optional[Dict[str, Any]] = None
    accessible_by: Optional[Dict[str, Any]] = None
    item: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="allow")


class CollaborationCollection(BoxCollection):
    entries: List[Collaboration] = Field(default_factory=list)
