"""Resolution of a record's real output path against the built-page list."""

import re
from typing import Iterable

from sitemapgen.models.records import BuiltPage, ContentRecord


def join_path(prefix: str, slug: str) -> str:
    """Join *prefix* and *slug* with single ``/`` separators.

    Unlike :func:`posixpath.join` an absolute *slug* does not discard the
    prefix, and a trailing separator on *slug* is preserved.
    """
    joined = "/".join(part for part in (prefix, slug) if part)
    return re.sub(r"/{2,}", "/", joined)


def resolve_path(
    record: ContentRecord,
    built_pages: Iterable[BuiltPage],
    path_prefix: str = "",
) -> ContentRecord:
    """Return a copy of *record* with ``path`` set.

    The first built page whose path (trailing ``/`` removed) ends with the
    record's slug (trailing ``/`` removed) wins, matched case-insensitively.
    Without a match the path falls back to ``path_prefix`` joined with the slug.
    """
    stem = record.slug.rstrip("/")
    # A root slug would otherwise match every page
    pattern = re.escape(stem) + "$" if stem else "^$"
    matcher = re.compile(pattern, re.IGNORECASE)

    path = join_path(path_prefix, record.slug)
    for page in built_pages:
        if page.path and matcher.search(page.path.rstrip("/")):
            path = page.path
            break

    return record.model_copy(update={"path": path})
