"""Build hook endpoint: regenerates all sitemap files after a site build."""

import logging

import httpx
from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from sitemapgen.models.build_request import BuildRequest
from sitemapgen.models.build_response import BuildResponse
from sitemapgen.services.errors import ConfigurationError, MissingSlugError, QueryError
from sitemapgen.services.generator import generate_sitemaps
from sitemapgen.services.query import GraphQLClient

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/sitemaps",
    response_model=BuildResponse,
    summary="Generate the sitemap index and resource sitemaps",
    description=(
        "Queries the site generator's GraphQL endpoint for built pages and the "
        "configured content sources, then writes `sitemap.xml`, one "
        "`sitemap-<name>.xml` per mapped sitemap and `sitemap.xsl` to the "
        "public directory.\n\n"
        "Files that could not be written are listed in `files` with `ok: false`; "
        "the remaining files are still written."
    ),
)
@limiter.limit("2/minute")
async def build_sitemaps(request: Request, body: BuildRequest) -> BuildResponse:
    """Run the post-build sitemap generation for the site behind *graphql_url*."""
    graphql_url = str(body.graphql_url)
    logger.info(
        "Sitemap build requested",
        extra={"graphql_url": graphql_url, "path_prefix": body.path_prefix},
    )

    try:
        return await generate_sitemaps(
            GraphQLClient(graphql_url),
            body.options,
            path_prefix=body.path_prefix,
        )
    except (MissingSlugError, ConfigurationError) as exc:
        logger.warning("Sitemap build rejected: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    except QueryError as exc:
        logger.error("GraphQL query failed for %s: %s", graphql_url, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    except httpx.HTTPError as exc:
        logger.error("Error querying %s: %s", graphql_url, exc)
        raise HTTPException(status_code=502, detail=str(exc))
