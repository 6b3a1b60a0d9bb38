"""Writing generated files to the public directory."""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List

from sitemapgen.models.build_response import WriteResult

logger = logging.getLogger(__name__)


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def write_file(path: Path, content: str) -> WriteResult:
    """Write *content* to *path*; an ``OSError`` is logged and reported, not raised."""
    try:
        await asyncio.to_thread(_write_file, path, content)
    except OSError as exc:
        logger.error("Failed to write %s: %s", path, exc)
        return WriteResult(path=str(path), ok=False, error=str(exc))
    logger.info("Wrote %s", path)
    return WriteResult(path=str(path), ok=True)


async def write_files(files: Dict[Path, str]) -> List[WriteResult]:
    """Write every file concurrently and return one result per file, in input order."""
    return list(await asyncio.gather(*(write_file(path, content) for path, content in files.items())))
