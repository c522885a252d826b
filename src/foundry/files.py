"""FoundryVTT asset path handling.

Scene documents reference images by paths relative to the server's data
root (e.g. "worlds/my-world/maps/castle.webp"). These helpers turn such
paths into absolute URLs or, when a local copy of the Data directory is
available, into file paths.
"""

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urljoin, urlparse

logger = logging.getLogger(__name__)

_REMOTE_SCHEMES = ("http", "https")


def is_remote(src: str) -> bool:
    """Return True for absolute http(s) URLs."""
    return urlparse(src).scheme in _REMOTE_SCHEMES


def is_data_uri(src: str) -> bool:
    return src.startswith("data:")


def resolve_asset_url(src: str, base_url: str) -> str:
    """
    Resolve an asset path against the FoundryVTT base URL.

    Absolute URLs are returned unchanged.

    Args:
        src: Asset path as stored on the document
        base_url: FoundryVTT URL (e.g., http://localhost:30000)

    Returns:
        Absolute URL

    Example:
        >>> resolve_asset_url("worlds/test/maps/cave.webp", "http://localhost:30000")
        'http://localhost:30000/worlds/test/maps/cave.webp'
    """
    if is_remote(src) or is_data_uri(src):
        return src
    if not base_url.endswith("/"):
        base_url = base_url + "/"
    return urljoin(base_url, src)


def local_asset_path(src: str, data_path: Optional[Path]) -> Optional[Path]:
    """
    Locate an asset inside a local FoundryVTT Data directory.

    Returns:
        Path to the file if it exists locally, None otherwise
    """
    if data_path is None or is_remote(src) or is_data_uri(src):
        return None

    candidate = Path(data_path) / unquote(src.lstrip("/"))
    if candidate.is_file():
        logger.debug(f"Resolved {src} to local file {candidate}")
        return candidate
    return None
