"""
Content type definitions for site content.
"""

from pydantic import BaseModel, Field


class FieldType(BaseModel):
    """A single field inside a region."""

    id: str
    title: str | None = None
    type: str = Field(default="string", description="Field type name, e.g. string, html, checkbox")


class RegionType(BaseModel):
    """A named region of site content made of one or more fields."""

    id: str
    title: str | None = None
    collection: bool = False
    fields: list[FieldType] = Field(default_factory=list)


class SiteType(BaseModel):
    """Content type describing the regions of a site's content."""

    id: str = Field(..., min_length=1, max_length=64)
    title: str | None = None
    description: str | None = None
    regions: list[RegionType] = Field(default_factory=list)

    def region(self, region_id: str) -> RegionType | None:
        for region in self.regions:
            if region.id == region_id:
                return region
        return None
