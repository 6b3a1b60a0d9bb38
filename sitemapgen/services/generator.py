"""Post-build orchestration: query, aggregate, render and write all sitemap files."""

import logging
from pathlib import Path
from typing import Dict

from sitemapgen.models.build_response import BuildResponse, SitemapFile
from sitemapgen.models.options import DEFAULT_MAPPING, DEFAULT_QUERY, SitemapOptions, SourceMapping
from sitemapgen.services.aggregator import DEFAULT_BUCKET, aggregate, build_context
from sitemapgen.services.manager import STYLESHEET_FILE, SitemapManager
from sitemapgen.services.mapper import serialize_sources
from sitemapgen.services.query import QueryRunner, run_query
from sitemapgen.services.stylesheet import render_stylesheet
from sitemapgen.services.writer import write_files

logger = logging.getLogger(__name__)

PUBLIC_PATH = Path("public")
INDEX_FILE = "/sitemap.xml"
RESOURCES_FILE = "/sitemap-:resource.xml"

# Mapping key for the default bucket when the configured mapping has none.
# GraphQL reserves names starting with "__", so no query source can use it.
UNCAUGHT_PAGES_KEY = "__uncaughtPages"


def _with_default_bucket(mapping: Dict[str, SourceMapping]) -> Dict[str, SourceMapping]:
    """Make sure the bucket that receives uncaught pages gets a sitemap file."""
    if any(m.sitemap == DEFAULT_BUCKET for m in mapping.values()):
        return mapping
    return {**mapping, UNCAUGHT_PAGES_KEY: SourceMapping(sitemap=DEFAULT_BUCKET)}


async def generate_sitemaps(
    runner: QueryRunner,
    options: SitemapOptions,
    path_prefix: str = "",
    public_path: Path = PUBLIC_PATH,
) -> BuildResponse:
    """Build and write the sitemap index, one sitemap per source and the stylesheet.

    Steps:
    1. Query the built-page list and the site URL.
    2. Query the custom sources when both ``query`` and ``mapping`` are set.
    3. Aggregate records into buckets and render the XML documents.
    4. Write all files concurrently.

    Raises:
        QueryError: when a query returns errors.
        MissingSlugError: when a content record has no slug.
        ConfigurationError: when the site URL is missing or the mapping is
            inconsistent.

    File write failures do not raise; they are reported in the returned
    :attr:`BuildResponse.files`.
    """
    # ── 1. Default query ──────────────────────────────────────────────────────
    default_data = await run_query(runner, DEFAULT_QUERY)

    # ── 2. Custom query ───────────────────────────────────────────────────────
    sources = None
    if options.query and options.mapping:
        sources = await run_query(runner, options.query)
        mapping = options.mapping
    else:
        mapping = options.mapping or DEFAULT_MAPPING
    mapping = _with_default_bucket(mapping)

    # ── 3. Aggregate and render ───────────────────────────────────────────────
    context = build_context(default_data, mapping, path_prefix, options.exclude)
    sitemap_sources = serialize_sources(mapping)
    buckets = aggregate(sources, context)

    manager = SitemapManager(context.site_url, INDEX_FILE, RESOURCES_FILE)
    for bucket in buckets.values():
        for entry in bucket.entries:
            manager.add_urls(bucket.name, entry)

    files: Dict[Path, str] = {
        public_path / INDEX_FILE.lstrip("/"): manager.get_index_xml(sitemap_sources),
        public_path / STYLESHEET_FILE: render_stylesheet(context.site_url, INDEX_FILE),
    }
    sitemaps = []
    for source in sitemap_sources:
        file_name = RESOURCES_FILE.replace(":resource", source.name).lstrip("/")
        files[public_path / file_name] = manager.get_sitemap_xml(source.sitemap, source)
        sitemaps.append(
            SitemapFile(
                name=source.name,
                bucket=source.sitemap,
                url=manager.resource_url(source.name),
                url_count=len(manager.entries(source.sitemap)),
            )
        )

    # ── 4. Write ──────────────────────────────────────────────────────────────
    results = await write_files(files)

    response = BuildResponse(
        site_url=context.site_url,
        index_url=manager.index_url,
        sitemaps=sitemaps,
        files=results,
    )
    if response.failures:
        logger.error(
            "Sitemap build finished with %d failed file write(s)",
            len(response.failures),
            extra={"failed": [f.path for f in response.failures]},
        )
    else:
        logger.info("Sitemap build finished: %d sitemap(s) written", len(sitemaps))
    return response
