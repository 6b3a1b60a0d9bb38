from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Scalar = Union[str, int, float, bool, None]


class BuiltPage(BaseModel):
    """One page from the generator's full list of built pages."""

    id: str = ""
    path: str


class ContentRecord(BaseModel):
    """Unified internal model for one content item fetched from a query source."""

    slug: str
    path: Optional[str] = None
    metadata: Dict[str, Scalar] = Field(default_factory=dict)


class SitemapEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    record: ContentRecord


class SitemapBucket(BaseModel):
    name: str
    entries: List[SitemapEntry] = Field(default_factory=list)
