"""Tile compositing."""

from .models import CompositeBounds, CompositeResult, DrawSummary, TileRecord
from .compositor import TileCompositor, allocate_canvas, compute_bounds, draw_tiles, encode
from .loader import TileImageLoader
from .sources import resolve_image_source

__all__ = [
    "CompositeBounds",
    "CompositeResult",
    "DrawSummary",
    "TileRecord",
    "TileCompositor",
    "TileImageLoader",
    "allocate_canvas",
    "compute_bounds",
    "draw_tiles",
    "encode",
    "resolve_image_source",
]
