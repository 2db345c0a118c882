"""
Site content models.

Site content comes in two variants, tagged by `kind`:

- SiteContent: statically typed content. Subclasses declare one attribute
  per region, typed as a region model, a list (collection regions) or a
  plain value (single-field regions).
- DynamicSiteContent: regions held in a dict keyed by region id, shaped
  entirely by the registered SiteType.

The content factory dispatches on `kind` to pick the initialization path.
"""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

STATIC = "static"
DYNAMIC = "dynamic"


class SiteContentBase(BaseModel):
    """Fields shared by every site content variant."""

    id: UUID | None = Field(default=None, description="Id of the site owning the content")
    type_id: str | None = Field(default=None, max_length=64)
    title: str | None = Field(default=None, max_length=128)
    kind: str


class SiteContent(SiteContentBase):
    """Base class for statically typed site content."""

    kind: Literal["static"] = STATIC


class DynamicSiteContent(SiteContentBase):
    """Site content whose regions are defined only by its site type."""

    kind: Literal["dynamic"] = DYNAMIC
    regions: dict[str, Any] = Field(default_factory=dict)
