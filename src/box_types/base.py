from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class BoxEntity(BaseModel):
    """
    Base for records decoded from Box API responses.

    Decoded records are value objects: they are frozen and unknown keys
    returned by the API are ignored.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")


class CollectionInfo(BoxEntity):
    total_count: int = Field(0, description="Size of the full remote collection")
    offset: int = Field(0, description="Offset of the first entry in this page")
    limit: int = Field(0, description="Maximum number of entries in a page")


class BoxCollection(CollectionInfo):
    """Page header plus entries. Subclasses narrow the entry type."""

    @model_validator(mode="after")
    def check_page_size(self):
        entries = getattr(self, "entries", None) or []
        if self.limit > 0 and len(entries) > self.limit:
            raise ValueError(
                f"page holds {len(entries)} entries but limit is {self.limit}"
            )
        return self


class EntityReference(BaseModel):
    """Reference to another resource by ID, as used in request bodies."""
    id: str = Field(min_length=1, description="Referenced resource ID")


class PageQuery(BaseModel):
    offset: Optional[int] = Field(None, ge=0)
    limit: Optional[int] = Field(None, gt=0)
