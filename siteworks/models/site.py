"""
Site models.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

# The all-zero id doubles as "no id assigned yet" and as the default-site cache sentinel.
NIL_ID = UUID(int=0)


def is_empty_id(value: UUID | None) -> bool:
    return value is None or value == NIL_ID


class Site(BaseModel):
    """A site; exactly one site in a collection is the default."""

    id: UUID | None = None
    type_id: str | None = Field(default=None, max_length=64)
    internal_id: str | None = Field(default=None, max_length=64)
    title: str = Field(default="", min_length=1, max_length=128)
    description: str | None = Field(default=None, max_length=256)
    hostnames: str | None = Field(default=None, max_length=256, description="Comma-separated hostnames")
    culture: str | None = Field(default=None, max_length=6)
    is_default: bool = False
    created: datetime | None = None
    last_modified: datetime | None = None
    content_last_modified: datetime | None = None

    def hostname_list(self) -> list[str]:
        """The normalized hostnames this site answers to."""
        return split_hostnames(self.hostnames)


class SiteMapping(BaseModel):
    """Cached `{id, hostnames}` projection used for hostname resolution."""

    id: UUID
    hostnames: str

    def matches(self, hostname: str) -> bool:
        return hostname in split_hostnames(self.hostnames)


def split_hostnames(hostnames: str | None) -> list[str]:
    if not hostnames:
        return []
    return [host.strip().lower() for host in hostnames.split(",")]
