"""Locate the image behind a tile document.

The image path has moved between FoundryVTT data model versions, and
tiles may arrive either as plain documents or wrapped in a placeable
object with a nested ``document``. Each known location gets an accessor;
they are tried in order and the first non-empty path wins.
"""

from typing import Any, Callable, Dict, Optional, Tuple

TileDocument = Dict[str, Any]


def _nested(tile: TileDocument, *keys: str) -> Any:
    value: Any = tile
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def texture_src(tile: TileDocument) -> Optional[str]:
    return _nested(tile, "texture", "src")


def document_texture_src(tile: TileDocument) -> Optional[str]:
    return _nested(tile, "document", "texture", "src")


def img(tile: TileDocument) -> Optional[str]:
    return _nested(tile, "img")


def document_img(tile: TileDocument) -> Optional[str]:
    return _nested(tile, "document", "img")


IMAGE_SOURCE_ACCESSORS: Tuple[Callable[[TileDocument], Optional[str]], ...] = (
    texture_src,
    document_texture_src,
    img,
    document_img,
)


def resolve_image_source(tile: TileDocument) -> Optional[str]:
    """Return the first non-empty image path, or None if the tile has none."""
    for accessor in IMAGE_SOURCE_ACCESSORS:
        src = accessor(tile)
        if isinstance(src, str) and src.strip():
            return src
    return None
