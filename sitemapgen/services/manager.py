"""Sitemap XML assembly: one ``<urlset>`` per bucket plus a ``<sitemapindex>``."""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from urllib.parse import urljoin
from xml.etree.ElementTree import Element, SubElement, tostring

from sitemapgen.models.records import SitemapEntry
from sitemapgen.services.mapper import SitemapSource

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"

STYLESHEET_FILE = "sitemap.xsl"

# Metadata fields checked, in order, for a URL's last modification date
_LASTMOD_FIELDS = ("updated_at", "published_at", "created_at")


def _parse_date(value) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Ignoring unparseable date %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def entry_lastmod(entry: SitemapEntry) -> Optional[datetime]:
    """Return the first parseable date among the entry's lastmod fields."""
    for field in _LASTMOD_FIELDS:
        parsed = _parse_date(entry.record.metadata.get(field))
        if parsed is not None:
            return parsed
    return None


class SitemapManager:
    """Collects sitemap entries per bucket and renders them as XML."""

    def __init__(self, site_url: str, index_output: str, resources_output: str) -> None:
        self.site_url = site_url
        self.index_output = index_output
        self.resources_output = resources_output
        self._buckets: Dict[str, List[SitemapEntry]] = {}

    def add_urls(self, bucket: str, entry: SitemapEntry) -> None:
        self._buckets.setdefault(bucket, []).append(entry)

    def entries(self, bucket: str) -> List[SitemapEntry]:
        return list(self._buckets.get(bucket, []))

    @property
    def index_url(self) -> str:
        return urljoin(self.site_url, self.index_output)

    def resource_url(self, name: str) -> str:
        """Absolute URL of the sitemap file generated for display *name*."""
        return urljoin(self.site_url, self.resources_output.replace(":resource", name))

    def _declarations(self) -> str:
        stylesheet = urljoin(self.site_url, STYLESHEET_FILE)
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            f'<?xml-stylesheet type="text/xsl" href="{stylesheet}"?>'
        )

    def get_sitemap_xml(self, bucket: str, source: Optional[SitemapSource] = None) -> str:
        """Render the ``<urlset>`` document for *bucket*.

        *source* supplies per-sitemap options; its ``priority`` is written on
        every URL when set.  An unknown bucket renders an empty ``<urlset>``.
        """
        urlset = Element("urlset", {"xmlns": SITEMAP_NS, "xmlns:image": IMAGE_NS})
        priority = source.priority if source is not None else None

        for entry in self._buckets.get(bucket, []):
            url_el = SubElement(urlset, "url")
            SubElement(url_el, "loc").text = entry.url

            lastmod = entry_lastmod(entry)
            if lastmod is not None:
                SubElement(url_el, "lastmod").text = _format_date(lastmod)

            if priority is not None:
                SubElement(url_el, "priority").text = f"{priority:.1f}"

            image = entry.record.metadata.get("feature_image")
            if isinstance(image, str) and image:
                image_el = SubElement(url_el, "image:image")
                SubElement(image_el, "image:loc").text = urljoin(self.site_url, image)

        return self._declarations() + tostring(urlset, encoding="unicode")

    def get_index_xml(self, sources: Iterable[SitemapSource]) -> str:
        """Render the ``<sitemapindex>`` listing one sitemap file per source."""
        index = Element("sitemapindex", {"xmlns": SITEMAP_NS})

        for source in sources:
            sitemap_el = SubElement(index, "sitemap")
            SubElement(sitemap_el, "loc").text = self.resource_url(source.name)

            dates = [d for d in map(entry_lastmod, self._buckets.get(source.sitemap, [])) if d]
            if dates:
                SubElement(sitemap_el, "lastmod").text = _format_date(max(dates))

        return self._declarations() + tostring(index, encoding="unicode")
