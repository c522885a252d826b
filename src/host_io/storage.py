"""Local file reading and saving for imports and exports."""

import logging
import re
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

_UNSAFE_NAME = re.compile(r"[\s/\\]+")


def scene_export_filename(scene_name: str, suffix: str) -> str:
    """
    Build the suggested filename for a scene export.

    Example:
        >>> scene_export_filename("Goblin  Cave", "walls.json")
        'Goblin_Cave_walls.json'
    """
    return f"{_UNSAFE_NAME.sub('_', scene_name)}_{suffix}"


def read_text_file(path: Union[str, Path]) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    logger.debug(f"Reading {path}")
    return path.read_text(encoding="utf-8")


def save_data_to_file(
    data: Union[str, bytes],
    filename: str,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Save export data, like the browser's save-as for a generated file.

    Args:
        data: Text (written as UTF-8) or binary data
        filename: Suggested filename
        directory: Target directory (default: current directory)

    Returns:
        Path of the written file
    """
    target_dir = Path(directory) if directory else Path.cwd()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / filename

    if isinstance(data, bytes):
        path.write_bytes(data)
    else:
        path.write_text(data, encoding="utf-8")

    logger.info(f"Saved {path}")
    return path
