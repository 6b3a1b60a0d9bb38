"""Aggregation of query results into named sitemap buckets.

Every configured query source is filtered, normalised and path-resolved,
and its records are appended to the bucket its mapping names.  Built pages
that no source claimed are then added to the default ``pages`` bucket, so
every page the generator produced ends up in exactly one sitemap.
"""

import logging
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple
from urllib.parse import urljoin

from sitemapgen.models.options import SourceMapping, source_kind
from sitemapgen.models.records import BuiltPage, ContentRecord, SitemapBucket, SitemapEntry
from sitemapgen.services.errors import ConfigurationError
from sitemapgen.services.exclusion import is_kept
from sitemapgen.services.normalizer import normalize
from sitemapgen.services.resolver import resolve_path

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "pages"

# Source holding the generator's full page list in the default query
BUILT_PAGES_SOURCE = "allSitePage"


class AggregationContext(NamedTuple):
    site_url: str
    built_pages: List[BuiltPage]
    mapping: Dict[str, SourceMapping]
    path_prefix: str = ""
    exclude: Tuple[str, ...] = ()


def site_url_from(data: Optional[dict]) -> str:
    """Return ``site.siteMetadata.siteUrl`` from default query results.

    Raises:
        ConfigurationError: when the URL is missing, since no absolute
            sitemap URL could be built without it.
    """
    site = (data or {}).get("site") or {}
    site_url = (site.get("siteMetadata") or {}).get("siteUrl")
    if not site_url:
        raise ConfigurationError("`siteMetadata.siteUrl` is required to build sitemap URLs")
    return site_url


def built_pages_from(data: Optional[dict], exclude: Sequence[str] = ()) -> List[BuiltPage]:
    """Extract the built-page list from default query results, minus excluded paths."""
    source = (data or {}).get(BUILT_PAGES_SOURCE) or {}
    pages: List[BuiltPage] = []
    for edge in source.get("edges") or []:
        node = (edge or {}).get("node")
        if not node or not node.get("url"):
            continue
        if not is_kept(node, "generic", exclude):
            continue
        pages.append(BuiltPage(id=str(node.get("id") or ""), path=node["url"]))
    return pages


def build_context(
    default_data: Optional[dict],
    mapping: Dict[str, SourceMapping],
    path_prefix: str = "",
    exclude: Optional[Sequence[str]] = None,
) -> AggregationContext:
    exclude = tuple(exclude or ())
    return AggregationContext(
        site_url=site_url_from(default_data),
        built_pages=built_pages_from(default_data, exclude),
        mapping=mapping,
        path_prefix=path_prefix,
        exclude=exclude,
    )


def _collect_source(
    source_name: str,
    source: dict,
    context: AggregationContext,
) -> List[SitemapEntry]:
    kind = source_kind(source_name, context.mapping[source_name])
    entries: List[SitemapEntry] = []

    for edge in source.get("edges") or []:
        node = (edge or {}).get("node")
        if not node:
            continue
        if not is_kept(node, kind, context.exclude):
            continue

        record = normalize(node, kind)
        record = resolve_path(record, context.built_pages, context.path_prefix)
        entries.append(SitemapEntry(url=urljoin(context.site_url, record.path), record=record))

    return entries


def _uncaught_pages(claimed_paths: set, context: AggregationContext) -> List[SitemapEntry]:
    entries: List[SitemapEntry] = []
    for page in context.built_pages:
        if page.path in claimed_paths:
            continue
        record = ContentRecord(slug=page.path, path=page.path, metadata={"id": page.id})
        entries.append(SitemapEntry(url=urljoin(context.site_url, page.path), record=record))
    return entries


def aggregate(sources: Optional[dict], context: AggregationContext) -> Dict[str, SitemapBucket]:
    """Group query *sources* into sitemap buckets keyed by bucket name.

    Sources are processed in result order and edges in query order; that
    order is kept in each bucket.  Sources without a mapping are ignored.

    Raises:
        MissingSlugError: when a record of any mapped source has no slug.
    """
    if not context.site_url:
        raise ConfigurationError("`siteMetadata.siteUrl` is required to build sitemap URLs")

    buckets: Dict[str, SitemapBucket] = {}

    for source_name, source in (sources or {}).items():
        mapping = context.mapping.get(source_name)
        if mapping is None or not mapping.sitemap:
            continue
        if not source:
            continue

        bucket = buckets.setdefault(mapping.sitemap, SitemapBucket(name=mapping.sitemap))
        entries = _collect_source(source_name, source, context)
        bucket.entries.extend(entries)
        logger.debug("Source '%s' added %d entries to '%s'", source_name, len(entries), bucket.name)

    claimed = {entry.record.path for bucket in buckets.values() for entry in bucket.entries}
    uncaught = _uncaught_pages(claimed, context)
    default_bucket = buckets.setdefault(DEFAULT_BUCKET, SitemapBucket(name=DEFAULT_BUCKET))
    default_bucket.entries.extend(uncaught)

    logger.info(
        "Aggregated %d sitemap entries (%d uncaught pages)",
        sum(len(b.entries) for b in buckets.values()),
        len(uncaught),
        extra={"buckets": list(buckets)},
    )
    return buckets
