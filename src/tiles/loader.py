"""Asynchronous tile image loading."""

import asyncio
import base64
import logging
from io import BytesIO
from pathlib import Path
from typing import Optional
from urllib.parse import unquote_to_bytes

import httpx
from PIL import Image, UnidentifiedImageError

from foundry.files import is_data_uri, local_asset_path, resolve_asset_url
from exceptions import ImageLoadError

logger = logging.getLogger(__name__)


def decode_image(data: bytes, src: str) -> Image.Image:
    """
    Decode image bytes to an RGBA image.

    Raises:
        ImageLoadError: If the bytes are not a readable image
    """
    if not data:
        raise ImageLoadError(f"Empty image data for {src}")
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageLoadError(f"Could not decode image {src}: {e}") from e
    return image.convert("RGBA")


def decode_data_uri(src: str) -> bytes:
    """
    Decode a data: URI payload.

    Raises:
        ImageLoadError: If the URI is malformed
    """
    header, sep, payload = src.partition(",")
    if not sep:
        raise ImageLoadError("Malformed data URI")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except ValueError as e:
            raise ImageLoadError(f"Malformed base64 data URI: {e}") from e
    return unquote_to_bytes(payload)


class TileImageLoader:
    """Loads tile images from data URIs, a local Data directory, or the server."""

    def __init__(
        self,
        base_url: str,
        data_path: Optional[Path] = None,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            base_url: FoundryVTT URL used for relative asset paths
            data_path: Local FoundryVTT Data directory checked before the network
            timeout: Seconds to wait for each image download
            client: Shared httpx client; a short-lived one is opened per fetch if omitted
        """
        self.base_url = base_url
        self.data_path = Path(data_path) if data_path else None
        self.timeout = timeout
        self.client = client

    async def load(self, src: str) -> Image.Image:
        """
        Load one tile image.

        Raises:
            ImageLoadError: If the image cannot be read, fetched or decoded
        """
        if is_data_uri(src):
            return decode_image(decode_data_uri(src), "data URI")

        try:
            local = local_asset_path(src, self.data_path) or self._absolute_file(src)
            url = None if local is not None else resolve_asset_url(src, self.base_url)
        except ValueError as e:
            raise ImageLoadError(f"Invalid image source {src}: {e}") from e

        if local is not None:
            try:
                data = await asyncio.to_thread(local.read_bytes)
            except OSError as e:
                raise ImageLoadError(f"Could not read {local}: {e}") from e
            return decode_image(data, str(local))

        data = await self._fetch(url)
        return decode_image(data, url)

    @staticmethod
    def _absolute_file(src: str) -> Optional[Path]:
        path = Path(src)
        if path.is_absolute() and path.is_file():
            return path
        return None

    async def _fetch(self, url: str) -> bytes:
        logger.debug(f"Fetching tile image {url}")
        try:
            if self.client is not None:
                response = await self.client.get(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageLoadError(f"Failed to fetch {url}: {e}") from e
        return response.content
