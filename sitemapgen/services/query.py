"""GraphQL query execution against the site generator's data layer."""

import logging
from typing import Any, Awaitable, Callable, Dict

import httpx

from sitemapgen.services.errors import QueryError

logger = logging.getLogger(__name__)

_GRAPHQL_TIMEOUT = 30

QueryRunner = Callable[[str], Awaitable[Dict[str, Any]]]


class GraphQLClient:
    """Posts GraphQL queries to *endpoint* and returns the decoded response body.

    Instances are callables matching :data:`QueryRunner`, so any coroutine
    function with the same signature can be used in their place.
    """

    def __init__(self, endpoint: str, timeout: float = _GRAPHQL_TIMEOUT) -> None:
        self.endpoint = endpoint
        self.timeout = timeout

    async def __call__(self, query: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(self.endpoint, json={"query": query})
            resp.raise_for_status()
            return resp.json()


async def run_query(runner: QueryRunner, query: str) -> Dict[str, Any]:
    """Run *query* and return its ``data``.

    Raises:
        QueryError: when the response carries a non-empty ``errors`` list.
        httpx.HTTPError: on network or HTTP errors from :class:`GraphQLClient`.
    """
    result = await runner(query)
    errors = result.get("errors")
    if errors:
        logger.error("Query returned %d error(s)", len(errors))
        raise QueryError(errors)
    return result.get("data") or {}
