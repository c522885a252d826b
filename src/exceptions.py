"""Centralized exception hierarchy for the scene bundler.

Usage:
    from exceptions import FormatError, SizeLimitError

    raise FormatError("Invalid wall data format. Expected an array of walls.")
    raise SizeLimitError("Composite would be 20000x300 pixels")
"""

from typing import Optional


class SceneBundlerError(Exception):
    """Base exception for all scene bundler errors."""
    pass


class FormatError(SceneBundlerError):
    """Raised when an import payload cannot be used.

    Examples:
        - Clipboard text is not JSON
        - Top-level JSON value is not an array
    """
    pass


class NoActiveContextError(SceneBundlerError):
    """Raised when there is no current or viewed scene to operate on."""
    pass


class PreconditionDeclinedError(SceneBundlerError):
    """Raised when the user declines the scene padding warning."""
    pass


class SizeLimitError(SceneBundlerError):
    """Raised when a tile composite would exceed the canvas dimension ceiling."""
    pass


class EncodeError(SceneBundlerError):
    """Raised when a canvas cannot be encoded to image bytes."""
    pass


class ImageLoadError(SceneBundlerError):
    """Raised when a tile image cannot be fetched or decoded."""
    pass


class ClipboardError(SceneBundlerError):
    """Raised when the system clipboard cannot be read or written."""
    pass


class FoundryError(SceneBundlerError):
    """Raised when FoundryVTT operations fail.

    Examples:
        - Relay request failure
        - Scene retrieval failure
        - Embedded document validation failure
    """
    pass


class WallImportError(FoundryError):
    """Raised when a wall creation batch fails part way through an import.

    Batches committed before the failure are not rolled back;
    ``created_count`` says how many walls exist in the scene because of
    this import.
    """

    def __init__(self, message: str, created_count: int = 0, total: Optional[int] = None):
        super().__init__(message)
        self.created_count = created_count
        self.total = total


class ConfigurationError(SceneBundlerError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Missing relay API key
        - Unknown batch failure policy
    """
    pass
