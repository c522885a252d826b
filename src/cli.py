#!/usr/bin/env python3
"""Command line entry point for scene wall transfer and tile export.

Examples:
    # Work on an exported scene file
    scene-bundler --scene-file goblin_cave.json export-walls --output exports/
    scene-bundler --scene-file goblin_cave.json import-walls --file other_walls.json

    # Work on a live world through the REST relay
    scene-bundler --scene Scene.abc123 export-walls --clipboard
    scene-bundler --viewed-scene Scene.abc123 export-tiles --output exports/
    scene-bundler --viewed-scene Scene.abc123 copy-background-url
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from api import OperationResult, SceneBundler
from config import get_current_scene_uuid, get_log_level, get_viewed_scene_uuid
from exceptions import SceneBundlerError
from foundry.client import FoundryClient
from foundry.host import SceneContext
from host_io.prompts import always_confirm, confirm_padding
from logging_config import parse_log_level, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scene-bundler",
        description="Move FoundryVTT scene walls through JSON and export tiles as one image"
    )
    parser.add_argument("--scene-file", help="Exported scene JSON to operate on instead of the relay")
    parser.add_argument("--scene", help="UUID of the current scene (default: FOUNDRY_SCENE_UUID)")
    parser.add_argument(
        "--viewed-scene",
        help="UUID of the viewed scene (default: FOUNDRY_VIEWED_SCENE_UUID)"
    )
    parser.add_argument("--yes", "-y", action="store_true", help="Skip the scene padding confirmation")
    parser.add_argument("--log-level", help="0-3 or debug/info/warn/error (default: LOG_LEVEL or warn)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import-walls", help="Create walls in the current scene")
    source = import_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--clipboard", action="store_true", help="Read wall JSON from the clipboard")
    source.add_argument("--file", help="Read wall JSON from a file")

    export_parser = subparsers.add_parser("export-walls", help="Export walls of the current scene")
    target = export_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--clipboard", action="store_true", help="Copy wall JSON to the clipboard")
    target.add_argument("--output", help="Directory for <scene>_walls.json")

    subparsers.add_parser("copy-background-url", help="Copy the viewed scene's background image URL")

    tiles_parser = subparsers.add_parser("export-tiles", help="Save the viewed scene's tiles as one PNG")
    tiles_parser.add_argument("--output", help="Directory for <scene>_tiles.png (default: current directory)")

    return parser


def build_context(args: argparse.Namespace) -> SceneContext:
    """Scene context from --scene-file, or from the relay."""
    if args.scene_file:
        return SceneContext.from_file(args.scene_file)

    current_uuid = args.scene or get_current_scene_uuid()
    viewed_uuid = args.viewed_scene or get_viewed_scene_uuid()
    return SceneContext.from_relay(FoundryClient(), current_uuid, viewed_uuid)


async def run_command(bundler: SceneBundler, args: argparse.Namespace) -> OperationResult:
    if args.command == "import-walls":
        if args.clipboard:
            return await bundler.import_walls_from_clipboard()
        return await bundler.import_walls_from_file(args.file)

    if args.command == "export-walls":
        if args.clipboard:
            return await bundler.export_walls_to_clipboard()
        return await bundler.export_walls_to_file(args.output)

    if args.command == "copy-background-url":
        return await bundler.copy_scene_image_url()

    return await bundler.export_tiles_as_image(args.output)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = parse_log_level(args.log_level or get_log_level())
    except ValueError as e:
        parser.error(str(e))
    # Configure the root logger so every module's logger inherits it
    setup_logging("", level=level)

    try:
        context = build_context(args)
        confirm = always_confirm if args.yes else confirm_padding
        bundler = SceneBundler.from_config(context, confirm=confirm)
    except (SceneBundlerError, OSError) as e:
        logging.getLogger(__name__).error(f"Setup failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    result = asyncio.run(run_command(bundler, args))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
