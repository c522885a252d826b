"""FoundryVTT API integration module."""

from .client import FoundryClient
from .host import HostScene, RelayScene, SceneContext, SceneFile
from .scenes import SceneManager

__all__ = [
    "FoundryClient",
    "HostScene",
    "RelayScene",
    "SceneContext",
    "SceneFile",
    "SceneManager",
]
