from typing import List, Optional

from pydantic import BaseModel


class WriteResult(BaseModel):
    path: str
    ok: bool
    error: Optional[str] = None


class SitemapFile(BaseModel):
    name: str
    bucket: str
    url: str
    url_count: int


class BuildResponse(BaseModel):
    site_url: str
    index_url: str
    sitemaps: List[SitemapFile]
    files: List[WriteResult]

    @property
    def failures(self) -> List[WriteResult]:
        """Files that could not be written."""
        return [f for f in self.files if not f.ok]
