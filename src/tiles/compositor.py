"""Composite a scene's tiles into a single PNG.

Pipeline:
1. Build TileRecords from the scene's tile documents
2. Compute the bounds covering every tile
3. Allocate a transparent canvas (refusing oversized ones up front)
4. Load and draw each tile in collection order, so later tiles paint over
   earlier ones; a tile that fails is counted and skipped
5. Encode the canvas as PNG
"""

import logging
from io import BytesIO
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from PIL import Image
from pydantic import ValidationError

from config import MAX_CANVAS_DIMENSION
from exceptions import EncodeError, ImageLoadError, SizeLimitError
from tiles.models import CompositeBounds, CompositeResult, DrawSummary, TileRecord

logger = logging.getLogger(__name__)


def build_tile_records(documents: Iterable[Dict[str, Any]]) -> Tuple[List[TileRecord], List[str]]:
    """
    Convert tile documents to records.

    Returns:
        (records, failures) where failures describes documents with invalid geometry
    """
    records: List[TileRecord] = []
    failures: List[str] = []

    for index, document in enumerate(documents):
        try:
            records.append(TileRecord.from_document(document))
        except (ValidationError, AttributeError) as e:
            label = document.get("_id") if isinstance(document, dict) else None
            message = f"{label or f'tile {index}'}: invalid tile geometry"
            logger.warning(f"{message} ({e})")
            failures.append(message)

    return records, failures


def compute_bounds(tiles: Sequence[TileRecord]) -> CompositeBounds:
    """
    Tightest rectangle covering every tile.

    An empty or zero-extent tile set yields at least a 1x1 region.
    """
    if not tiles:
        return CompositeBounds(min_x=0, min_y=0, max_x=1, max_y=1)

    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")

    for tile in tiles:
        min_x = min(min_x, tile.x)
        min_y = min(min_y, tile.y)
        max_x = max(max_x, tile.x + tile.width)
        max_y = max(max_y, tile.y + tile.height)

    if max_x - min_x <= 0:
        max_x = min_x + 1
    if max_y - min_y <= 0:
        max_y = min_y + 1

    return CompositeBounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)


def allocate_canvas(bounds: CompositeBounds, max_dimension: int = MAX_CANVAS_DIMENSION) -> Image.Image:
    """
    Create a transparent canvas covering the bounds.

    Raises:
        SizeLimitError: If either side exceeds max_dimension (checked before allocating)
    """
    width, height = bounds.canvas_size
    if width > max_dimension or height > max_dimension:
        raise SizeLimitError(
            f"Composite would be {width}x{height} pixels; the limit is {max_dimension} per side"
        )

    logger.debug(f"Allocating {width}x{height} canvas")
    return Image.new("RGBA", (width, height), (0, 0, 0, 0))


def _draw(canvas: Image.Image, image: Image.Image, tile: TileRecord, bounds: CompositeBounds) -> None:
    width, height = round(tile.width), round(tile.height)
    if width < 1 or height < 1:
        return

    if image.size != (width, height):
        image = image.resize((width, height), Image.Resampling.LANCZOS)
    if image.mode != "RGBA":
        image = image.convert("RGBA")

    dx, dy = bounds.offset_of(tile)
    visible_width = min(width, canvas.width - dx)
    visible_height = min(height, canvas.height - dy)
    if visible_width < 1 or visible_height < 1:
        return

    logger.debug(f"Drawing {tile.label} at ({dx}, {dy}) size {width}x{height}")
    canvas.alpha_composite(image, dest=(dx, dy), source=(0, 0, visible_width, visible_height))


async def draw_tiles(
    tiles: Sequence[TileRecord],
    canvas: Image.Image,
    bounds: CompositeBounds,
    loader
) -> DrawSummary:
    """
    Load and draw tiles one at a time, in order.

    Args:
        tiles: Tiles in scene order
        canvas: Canvas from allocate_canvas()
        bounds: Bounds the canvas was allocated for
        loader: Object with ``async load(src) -> PIL.Image``

    Returns:
        DrawSummary with succeeded/failed counts
    """
    summary = DrawSummary()

    def fail(tile: TileRecord, reason: str) -> None:
        message = f"{tile.label}: {reason}"
        logger.warning(f"Tile failed: {message}")
        summary.failed += 1
        summary.failures.append(message)

    for tile in tiles:
        if not tile.src:
            fail(tile, "no image source")
            continue

        try:
            image = await loader.load(tile.src)
        except ImageLoadError as e:
            fail(tile, str(e))
            continue

        try:
            _draw(canvas, image, tile, bounds)
        except (ValueError, OSError) as e:
            fail(tile, f"draw failed: {e}")
            continue

        summary.succeeded += 1

    return summary


def encode(canvas: Image.Image) -> bytes:
    """
    Encode the canvas as PNG.

    Raises:
        EncodeError: If encoding fails or produces no data
    """
    buffer = BytesIO()
    try:
        canvas.save(buffer, "PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode composite: {e}") from e

    data = buffer.getvalue()
    if not data:
        raise EncodeError("Failed to encode composite: no data produced")
    return data


class TileCompositor:
    """Composites tile documents into one PNG."""

    def __init__(self, loader, max_dimension: int = MAX_CANVAS_DIMENSION):
        self.loader = loader
        self.max_dimension = max_dimension

    async def composite(self, tile_documents: Iterable[Dict[str, Any]]) -> CompositeResult:
        """
        Run the full compositing pipeline.

        Raises:
            SizeLimitError: If the composite would be too large
            EncodeError: If the canvas cannot be encoded
        """
        tiles, invalid = build_tile_records(tile_documents)
        bounds = compute_bounds(tiles)
        canvas = allocate_canvas(bounds, self.max_dimension)

        logger.info(f"Compositing {len(tiles)} tiles onto {canvas.width}x{canvas.height} canvas")
        summary = await draw_tiles(tiles, canvas, bounds, self.loader)

        image = encode(canvas)
        failed = summary.failed + len(invalid)
        logger.info(f"Composite complete: {summary.succeeded} drawn, {failed} failed")

        return CompositeResult(
            image=image,
            width=canvas.width,
            height=canvas.height,
            succeeded=summary.succeeded,
            failed=failed,
            failures=invalid + summary.failures,
        )
