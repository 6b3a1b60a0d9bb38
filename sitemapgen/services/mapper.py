"""Source mapping: which sitemap files are generated and which bucket feeds each."""

from typing import Dict, List

from pydantic import BaseModel

from sitemapgen.models.options import SourceMapping
from sitemapgen.services.errors import ConfigurationError


class SitemapSource(BaseModel):
    name: str  # display name, used in the file name and the index
    sitemap: str  # bucket the entries come from
    priority: float | None = None


def serialize_sources(mapping: Dict[str, SourceMapping]) -> List[SitemapSource]:
    """Return one :class:`SitemapSource` per unique display name.

    Several query sources may feed the same bucket; the first occurrence of a
    display name wins.

    Raises:
        ConfigurationError: when one display name is mapped to two different
            buckets, since one of them would silently get no sitemap file.
    """
    sources: List[SitemapSource] = []
    seen: Dict[str, SitemapSource] = {}

    for source_name, source in mapping.items():
        name = source.display_name
        existing = seen.get(name)
        if existing is not None:
            if existing.sitemap != source.sitemap:
                raise ConfigurationError(
                    f"Sitemap name '{name}' is mapped to both '{existing.sitemap}' "
                    f"and '{source.sitemap}' (source '{source_name}')"
                )
            continue

        entry = SitemapSource(name=name, sitemap=source.sitemap, priority=source.priority)
        seen[name] = entry
        sources.append(entry)

    return sources
