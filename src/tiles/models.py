"""Data models for tile compositing."""

import math
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from tiles.sources import resolve_image_source


class TileRecord(BaseModel):
    """One positioned, sized, image-backed tile."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    x: float = 0
    y: float = 0
    width: float = Field(default=0, ge=0)
    height: float = Field(default=0, ge=0)
    src: Optional[str] = None  # Resolved image path, None if the tile has none

    @classmethod
    def from_document(cls, tile: Dict[str, Any]) -> "TileRecord":
        """
        Build a record from a raw tile document.

        Geometry is read from the tile itself, falling back to a nested
        ``document`` for placeable-style payloads.

        Raises:
            pydantic.ValidationError: If the geometry is invalid
        """
        nested = tile.get("document") if isinstance(tile.get("document"), dict) else {}

        def field(name: str, default: Any = 0) -> Any:
            value = tile.get(name)
            if value is None:
                value = nested.get(name)
            return default if value is None else value

        return cls(
            id=field("_id", None),
            x=field("x"),
            y=field("y"),
            width=field("width"),
            height=field("height"),
            src=resolve_image_source(tile),
        )

    @property
    def label(self) -> str:
        return self.id or self.src or "tile"


class CompositeBounds(BaseModel):
    """Tightest axis-aligned rectangle covering a set of tiles."""

    model_config = ConfigDict(frozen=True)

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """Pixel size of a canvas covering these bounds."""
        return math.ceil(self.width), math.ceil(self.height)

    def offset_of(self, tile: TileRecord) -> Tuple[int, int]:
        """Canvas position of a tile's top-left corner."""
        return round(tile.x - self.min_x), round(tile.y - self.min_y)


class DrawSummary(BaseModel):
    """Outcome of drawing tiles onto a canvas."""

    succeeded: int = 0
    failed: int = 0
    failures: List[str] = Field(default_factory=list)


class CompositeResult(BaseModel):
    """Result from TileCompositor.composite()."""

    image: bytes  # PNG data
    width: int
    height: int
    succeeded: int
    failed: int
    failures: List[str] = Field(default_factory=list)

    @property
    def partial_failure(self) -> bool:
        return self.failed > 0
