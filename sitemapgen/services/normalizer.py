"""Record normalisation: one strategy per source kind."""

import copy
import logging
from typing import Callable, Dict

from sitemapgen.models.options import SourceKind
from sitemapgen.models.records import ContentRecord
from sitemapgen.services.errors import MissingSlugError

logger = logging.getLogger(__name__)

# Front-matter fields lifted to top-level metadata for Markdown records
_PROMOTED_FRONTMATTER = ("published_at", "feature_image")

_SCALAR_TYPES = (str, int, float, bool)


def _scalar_metadata(node: dict, skip: tuple = ()) -> dict:
    """Keep the flat scalar fields of *node*; nested structures are dropped."""
    return {
        key: value
        for key, value in node.items()
        if key not in skip and (value is None or isinstance(value, _SCALAR_TYPES))
    }


def _normalize_markdown(node: dict) -> ContentRecord:
    fields = node.get("fields") or {}
    slug = fields.get("slug")
    if not slug:
        raise MissingSlugError("`slug` is a required field")

    metadata = _scalar_metadata(node, skip=("slug", "path"))
    frontmatter = node.get("frontmatter")
    if frontmatter:
        for key in _PROMOTED_FRONTMATTER:
            value = frontmatter.pop(key, None)
            if isinstance(value, dict):
                # File nodes, e.g. `feature_image { publicURL }`
                value = value.get("publicURL")
            if not value:
                continue
            if not isinstance(value, _SCALAR_TYPES):
                logger.warning("Skipping non-scalar front matter %s on %s", key, slug)
                continue
            metadata[key] = value

    return ContentRecord(slug=slug, metadata=metadata)


def _normalize_generic(node: dict) -> ContentRecord:
    slug = node.get("slug")
    if not slug:
        raise MissingSlugError(f"`slug` is a required field (node {node.get('id', '?')})")
    return ContentRecord(
        slug=slug,
        path=slug,
        metadata=_scalar_metadata(node, skip=("slug", "path", "url")),
    )


_NORMALIZERS: Dict[str, Callable[[dict], ContentRecord]] = {
    "markdown": _normalize_markdown,
    "generic": _normalize_generic,
}


def normalize(node: dict, kind: SourceKind) -> ContentRecord:
    """Convert a raw query node into a :class:`ContentRecord`.

    The node is copied first; query results are never modified.

    Raises:
        MissingSlugError: when the node carries no slug.
    """
    return _NORMALIZERS[kind](copy.deepcopy(node))
