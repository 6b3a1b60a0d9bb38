"""Build options for the sitemap generator."""

import os
from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SourceKind = Literal["markdown", "generic"]

# Source that carries Markdown nodes (slug under ``fields``, dates under ``frontmatter``)
MARKDOWN_SOURCE = "allMarkdownRemark"

DEFAULT_QUERY = """{
  allSitePage {
    edges {
      node {
        id
        slug: path
        url: path
      }
    }
  }
  site {
    siteMetadata {
      siteUrl
    }
  }
}"""

DEFAULT_EXCLUDE = [
    "/dev-404-page",
    "/404",
    "/404.html",
    "/offline-plugin-app-shell-fallback",
]

# Names end up in output file names (`sitemap-<name>.xml`)
SITEMAP_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"


class SourceMapping(BaseModel):
    """Where the records of one query source end up."""

    sitemap: str = Field(
        pattern=SITEMAP_NAME_PATTERN,
        description="Name of the bucket the source's records are added to.",
    )
    name: Optional[str] = Field(
        default=None,
        pattern=SITEMAP_NAME_PATTERN,
        description="Display name used for the sitemap file; defaults to *sitemap*.",
    )
    kind: Optional[SourceKind] = Field(
        default=None,
        description="Record shape of the source. Derived from the source name when omitted.",
    )
    priority: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @property
    def display_name(self) -> str:
        return self.name or self.sitemap


DEFAULT_MAPPING: Dict[str, SourceMapping] = {
    "allSitePage": SourceMapping(sitemap="pages"),
}


class SitemapOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = Field(
        default=None,
        description="Custom GraphQL query; only used together with *mapping*.",
    )
    mapping: Optional[Dict[str, SourceMapping]] = None
    exclude: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    create_link_in_head: bool = Field(default=True, alias="createLinkInHead")


def source_kind(source: str, mapping: Optional[SourceMapping] = None) -> SourceKind:
    """Return the normalization strategy for the query source named *source*."""
    if mapping is not None and mapping.kind:
        return mapping.kind
    return "markdown" if source == MARKDOWN_SOURCE else "generic"


def load_options(path: str | os.PathLike[str]) -> SitemapOptions:
    """Read :class:`SitemapOptions` from a JSON file."""
    return SitemapOptions.model_validate_json(Path(path).read_text(encoding="utf-8"))
