"""XSL stylesheet rendering for human-readable sitemaps."""

from pathlib import Path
from urllib.parse import urljoin

XSL_TEMPLATE = Path(__file__).resolve().parent.parent / "static" / "sitemap.xsl"

SITE_TOKEN = "{{blog-url}}"


def render_stylesheet(site_url: str, index_output: str, template: Path = XSL_TEMPLATE) -> str:
    """Return the stylesheet with every ``{{blog-url}}`` replaced by the index URL."""
    data = template.read_text(encoding="utf-8")
    return data.replace(SITE_TOKEN, urljoin(site_url, index_output))
