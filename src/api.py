"""
Public API for scene wall transfer and tile export.

This module provides the interface used by the CLI (and any other front
end) to run the six user-facing operations:

- import walls from the clipboard or a JSON file
- export walls to the clipboard or a JSON file
- copy the viewed scene's background image URL
- export the viewed scene's tiles as one PNG

Each operation is independent and never raises: every failure is caught
at the operation boundary, reported through the Notifier as a single
message, and returned as an OperationResult.

Example usage:
    from api import SceneBundler
    from foundry.host import SceneContext
    from host_io.prompts import confirm_padding

    bundler = SceneBundler.from_config(
        SceneContext.from_file("goblin_cave.json"),
        confirm=confirm_padding
    )
    result = asyncio.run(bundler.export_walls_to_file("exports"))
    print(result.message)
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from config import (
    get_data_path,
    get_foundry_url,
    get_max_canvas_dimension,
    get_wall_batch_size,
    get_wall_failure_policy,
)
from exceptions import (
    ClipboardError,
    NoActiveContextError,
    PreconditionDeclinedError,
    SceneBundlerError,
    WallImportError,
)
from foundry.files import resolve_asset_url
from foundry.host import SceneContext
from host_io.clipboard import Clipboard
from host_io.notifications import Notifier
from host_io.storage import read_text_file, save_data_to_file, scene_export_filename
from tiles.compositor import TileCompositor
from tiles.loader import TileImageLoader
from walls.sync import WallSyncEngine

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Result of one user-facing operation.

    Attributes:
        success: Whether the operation completed (possibly with warnings)
        level: Notification level shown to the user: info, warning or error
        message: The notification text
        data: Operation details (counts, saved path, copied URL)
    """
    success: bool
    level: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


class SceneBundler:
    """Runs wall import/export, background URL copy and tile export."""

    def __init__(
        self,
        context: SceneContext,
        engine: WallSyncEngine,
        compositor: TileCompositor,
        clipboard: Optional[Clipboard] = None,
        notifier: Optional[Notifier] = None,
        foundry_url: Optional[str] = None
    ):
        self.context = context
        self.engine = engine
        self.compositor = compositor
        self.clipboard = clipboard or Clipboard()
        self.notifier = notifier or Notifier()
        self.foundry_url = foundry_url or get_foundry_url()

    @classmethod
    def from_config(
        cls,
        context: SceneContext,
        confirm: Callable[[str], bool],
        clipboard: Optional[Clipboard] = None,
        notifier: Optional[Notifier] = None
    ) -> "SceneBundler":
        """Build a bundler whose engine, loader and limits come from the environment."""
        notifier = notifier or Notifier()
        foundry_url = get_foundry_url()

        engine = WallSyncEngine(
            confirm=confirm,
            batch_size=get_wall_batch_size(),
            failure_policy=get_wall_failure_policy(),
            progress=notifier.info
        )
        loader = TileImageLoader(base_url=foundry_url, data_path=get_data_path())
        compositor = TileCompositor(loader, max_dimension=get_max_canvas_dimension())

        return cls(
            context=context,
            engine=engine,
            compositor=compositor,
            clipboard=clipboard,
            notifier=notifier,
            foundry_url=foundry_url
        )

    # Result helpers

    def _done(self, message: str, **data: Any) -> OperationResult:
        self.notifier.info(message)
        return OperationResult(success=True, level="info", message=message, data=data)

    def _warn(self, message: str, success: bool = True, **data: Any) -> OperationResult:
        self.notifier.warn(message)
        return OperationResult(success=success, level="warning", message=message, data=data)

    def _fail(self, message: str, **data: Any) -> OperationResult:
        self.notifier.error(message)
        return OperationResult(success=False, level="error", message=message, data=data)

    # Wall import

    async def import_walls_from_clipboard(self) -> OperationResult:
        """Import walls from JSON text on the clipboard into the current scene."""
        self.notifier.info("Reading wall data from clipboard...")
        try:
            text = await asyncio.to_thread(self.clipboard.read_text)
        except ClipboardError as e:
            logger.error(f"Clipboard read error: {e}")
            return self._fail(str(e))

        return await self._process_wall_import(text)

    async def import_walls_from_file(self, path: Union[str, Path]) -> OperationResult:
        """Import walls from a JSON file into the current scene."""
        try:
            text = await asyncio.to_thread(read_text_file, path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Wall file read error: {e}")
            return self._fail(f"Failed to read file: {e}")

        return await self._process_wall_import(text)

    async def _process_wall_import(self, text: str) -> OperationResult:
        try:
            scene = await asyncio.to_thread(self.context.require_current)
            result = await self.engine.import_walls(text, scene)
        except PreconditionDeclinedError as e:
            return self._warn(str(e), success=False)
        except WallImportError as e:
            logger.error(f"Wall import error: {e}")
            return self._fail(
                f"Error processing walls: {e}. "
                f"{e.created_count} walls were created before the failure.",
                created=e.created_count,
                total=e.total
            )
        except SceneBundlerError as e:
            logger.error(f"Wall import error: {e}")
            return self._fail(f"Error processing walls: {e}")
        except Exception as e:
            logger.exception("Unexpected wall import error")
            return self._fail(f"Error processing walls: {e}")

        data = result.model_dump()
        if result.partial_failure:
            return self._warn(
                f"Created {result.created} of {result.total} walls; "
                f"{result.failed} walls in rejected batches were skipped.",
                **data
            )
        return self._done(f"Successfully created {result.created} walls!", **data)

    # Wall export

    async def _walls_json(self) -> str:
        scene = await asyncio.to_thread(self.context.require_current)
        return self.engine.export_walls(scene)

    async def export_walls_to_clipboard(self) -> OperationResult:
        """Copy the current scene's walls to the clipboard as JSON."""
        try:
            text = await self._walls_json()
            await asyncio.to_thread(self.clipboard.write_text, text)
        except PreconditionDeclinedError as e:
            return self._warn(str(e), success=False)
        except SceneBundlerError as e:
            logger.error(f"Clipboard write error: {e}")
            return self._fail(f"Failed to copy walls to clipboard: {e}")
        except Exception as e:
            logger.exception("Unexpected wall export error")
            return self._fail(f"Failed to copy walls to clipboard: {e}")

        return self._done("Walls copied to clipboard successfully.", characters=len(text))

    async def export_walls_to_file(self, directory: Optional[Union[str, Path]] = None) -> OperationResult:
        """Save the current scene's walls as <scene>_walls.json."""
        try:
            scene = await asyncio.to_thread(self.context.require_current)
            if not scene.name:
                raise NoActiveContextError("No active scene found.")

            text = self.engine.export_walls(scene)
            filename = scene_export_filename(scene.name, "walls.json")
            path = await asyncio.to_thread(save_data_to_file, text, filename, directory)
        except PreconditionDeclinedError as e:
            return self._warn(str(e), success=False)
        except (SceneBundlerError, OSError) as e:
            logger.error(f"Wall export error: {e}")
            return self._fail(f"Failed to export walls: {e}")
        except Exception as e:
            logger.exception("Unexpected wall export error")
            return self._fail(f"Failed to export walls: {e}")

        return self._done("Walls exported successfully.", path=str(path), walls=len(scene.walls))

    # Viewed scene

    async def copy_scene_image_url(self) -> OperationResult:
        """Copy the absolute URL of the viewed scene's background image."""
        try:
            scene = await asyncio.to_thread(self.context.require_viewed)
        except NoActiveContextError as e:
            return self._warn(str(e), success=False)
        except Exception as e:
            logger.exception("Error loading viewed scene")
            return self._fail(f"Error copying image URL: {e}")

        src = scene.background_src
        if not src:
            return self._warn("The current scene has no background image.", success=False)

        try:
            url = resolve_asset_url(src, self.foundry_url)
            await asyncio.to_thread(self.clipboard.write_text, url)
        except Exception as e:
            logger.error(f"Error copying scene image URL: {e}")
            return self._fail(f"Error copying image URL: {e}")

        return self._done(f"Copied scene background URL: {url}", url=url)

    async def export_tiles_as_image(self, directory: Optional[Union[str, Path]] = None) -> OperationResult:
        """Composite the viewed scene's tiles and save them as <scene>_tiles.png."""
        try:
            scene = await asyncio.to_thread(self.context.require_viewed)
        except NoActiveContextError as e:
            return self._warn(str(e), success=False)
        except Exception as e:
            logger.exception("Error loading viewed scene")
            return self._fail(f"Failed to export tiles: {e}")

        try:
            result = await self.compositor.composite(scene.tiles)
            filename = scene_export_filename(scene.name or "scene", "tiles.png")
            path = await asyncio.to_thread(save_data_to_file, result.image, filename, directory)
        except (SceneBundlerError, OSError) as e:
            logger.error(f"Tile export error: {e}")
            return self._fail(f"Failed to export tiles: {e}")
        except Exception as e:
            logger.exception("Unexpected tile export error")
            return self._fail(f"Failed to export tiles: {e}")

        data = {
            "path": str(path),
            "width": result.width,
            "height": result.height,
            "succeeded": result.succeeded,
            "failed": result.failed,
            "failures": result.failures,
        }
        if result.partial_failure:
            total = result.succeeded + result.failed
            return self._warn(
                f"Exported tiles to {path}, but {result.failed} of {total} tiles failed to load.",
                **data
            )
        return self._done(
            f"Exported {result.succeeded} tiles to {path} ({result.width}x{result.height}).",
            **data
        )
