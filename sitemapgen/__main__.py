"""Command-line entry point: ``python -m sitemapgen --graphql-url URL``."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from sitemapgen.models.options import SitemapOptions, load_options
from sitemapgen.services.errors import SitemapError
from sitemapgen.services.generator import PUBLIC_PATH, generate_sitemaps
from sitemapgen.services.query import GraphQLClient

logger = logging.getLogger("sitemapgen")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate sitemap files for a built site")
    parser.add_argument("--graphql-url", required=True, help="GraphQL endpoint of the site build")
    parser.add_argument("--options", help="JSON file with sitemap options")
    parser.add_argument("--path-prefix", default="", help="Path prefix of the site")
    parser.add_argument("--public", default=str(PUBLIC_PATH), help="Public output directory")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    options = load_options(args.options) if args.options else SitemapOptions()

    try:
        result = asyncio.run(
            generate_sitemaps(
                GraphQLClient(args.graphql_url),
                options,
                path_prefix=args.path_prefix,
                public_path=Path(args.public),
            )
        )
    except (SitemapError, httpx.HTTPError) as exc:
        logger.error("Sitemap build failed: %s", exc)
        return 1

    if result.failures:
        return 2
    print(f"Generated {len(result.sitemaps)} sitemap(s) → {result.index_url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
