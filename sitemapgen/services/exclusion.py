"""Removal of records whose slug contains an excluded path fragment."""

from typing import Iterable, Optional

from sitemapgen.models.options import SourceKind


def _strip_separators(value: str) -> str:
    return value.strip("/")


def record_slug(node: dict, kind: SourceKind) -> Optional[str]:
    """Return the raw slug of *node*, read from where its source kind keeps it."""
    if kind == "markdown":
        return (node.get("fields") or {}).get("slug")
    return node.get("slug")


def is_kept(node: dict, kind: SourceKind, patterns: Iterable[str]) -> bool:
    """Return *True* unless the node's slug contains one of *patterns*.

    Leading and trailing ``/`` are ignored on both sides and the comparison is
    a case-sensitive substring match.  A node without a slug is kept so the
    normalizer can report it.
    """
    slug = record_slug(node, kind)
    if not slug:
        return True
    slug = _strip_separators(slug)
    for pattern in patterns:
        fragment = _strip_separators(pattern)
        if fragment and fragment in slug:
            return False
    return True
