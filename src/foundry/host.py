"""Host scene context: the current and viewed scenes the bundler operates on.

Two backings are provided:

- ``RelayScene``: a scene in a running world, reached through the REST relay.
- ``SceneFile``: a scene exported from FoundryVTT ("Export Data") as JSON on
  disk. Created documents are written back to the file after every call.

``SceneContext`` keeps the *current* scene (the target of wall edits) and
the *viewed* scene (the one on screen, used for background and tile
exports) as separate slots, even when both resolve to the same document.
"""

import json
import logging
import secrets
import string
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from exceptions import FoundryError, FormatError, NoActiveContextError

logger = logging.getLogger(__name__)

# FoundryVTT's own default when a scene document omits padding
DEFAULT_SCENE_PADDING = 0.25

# Embedded document type -> collection key on the scene document
EMBEDDED_COLLECTIONS = {
    "Wall": "walls",
}

_ID_ALPHABET = string.ascii_letters + string.digits


def random_id(length: int = 16) -> str:
    """Generate a document identifier in FoundryVTT's randomID format."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def _collection_key(document_type: str) -> str:
    try:
        return EMBEDDED_COLLECTIONS[document_type]
    except KeyError:
        raise FoundryError(f"Unsupported embedded document type: {document_type}") from None


class HostScene(ABC):
    """A scene document plus the host's bulk creation call."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    @property
    def uuid(self) -> str:
        if self.data.get("uuid"):
            return self.data["uuid"]
        return f"Scene.{self.data.get('_id', '')}"

    @property
    def name(self) -> str:
        return self.data.get("name") or ""

    @property
    def padding(self) -> float:
        padding = self.data.get("padding")
        return DEFAULT_SCENE_PADDING if padding is None else padding

    @property
    def walls(self) -> List[Dict[str, Any]]:
        return self.data.get("walls") or []

    @property
    def tiles(self) -> List[Dict[str, Any]]:
        return self.data.get("tiles") or []

    @property
    def background_src(self) -> Optional[str]:
        """Background image path; ``img`` is the pre-v10 location."""
        background = self.data.get("background")
        if isinstance(background, dict) and background.get("src"):
            return background["src"]
        return self.data.get("img") or None

    @abstractmethod
    def create_embedded_documents(
        self,
        document_type: str,
        records: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Create embedded documents in this scene.

        Returns:
            The created documents, each with a host-assigned ``_id``

        Raises:
            FoundryError: If the host rejects the records
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.uuid!r}, name={self.name!r})"


class RelayScene(HostScene):
    """Scene in a running world, mutated through the REST relay."""

    def __init__(self, client, data: Dict[str, Any]):
        super().__init__(data)
        self.client = client

    def create_embedded_documents(
        self,
        document_type: str,
        records: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        key = _collection_key(document_type)
        created = self.client.create_embedded_documents(self.uuid, document_type, records)
        # Keep the local snapshot in step with the world
        self.data.setdefault(key, []).extend(created)
        return created


class SceneFile(HostScene):
    """Scene exported from FoundryVTT as a JSON document."""

    def __init__(self, path: Path, data: Dict[str, Any]):
        super().__init__(data)
        self.path = Path(path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SceneFile":
        """
        Load an exported scene.

        Raises:
            FileNotFoundError: If the file does not exist
            FormatError: If the file is not a JSON object
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Scene file not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise FormatError(f"Scene file is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FormatError("Scene file must contain a JSON object")

        logger.debug(f"Loaded scene file {path} ({data.get('name', 'Unknown')})")
        return cls(path, data)

    def save(self) -> None:
        self.path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")

    def create_embedded_documents(
        self,
        document_type: str,
        records: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        key = _collection_key(document_type)

        # Validate the whole call before touching the document, like the host does
        for index, record in enumerate(records):
            _validate_record(document_type, record, index)

        created = [{**record, "_id": random_id()} for record in records]
        self.data.setdefault(key, []).extend(created)
        self.save()

        logger.debug(f"Wrote {len(created)} {document_type} document(s) to {self.path}")
        return [dict(doc) for doc in created]


def _validate_record(document_type: str, record: Any, index: int) -> None:
    if not isinstance(record, dict):
        raise FoundryError(f"{document_type} record {index} is not an object")

    if document_type == "Wall":
        coords = record.get("c")
        if (
            not isinstance(coords, list)
            or len(coords) != 4
            or not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in coords)
        ):
            raise FoundryError(
                f"Wall record {index} validation failed: c must be an array of 4 numbers"
            )


SceneSource = Union[HostScene, Callable[[], HostScene], None]


class SceneContext:
    """Holds the current and viewed scenes, resolving each on first use."""

    def __init__(self, current: SceneSource = None, viewed: SceneSource = None):
        self._current = current
        self._viewed = viewed

    @staticmethod
    def _resolve(source: SceneSource) -> Optional[HostScene]:
        if source is None or isinstance(source, HostScene):
            return source
        return source()

    def require_current(self) -> HostScene:
        """
        Scene targeted by wall import and export.

        Raises:
            NoActiveContextError: If there is no current scene
        """
        self._current = self._resolve(self._current)
        if self._current is None:
            raise NoActiveContextError("No active scene")
        return self._current

    def require_viewed(self) -> HostScene:
        """
        Scene currently displayed, used by background and tile exports.

        Raises:
            NoActiveContextError: If no scene is viewed
        """
        self._viewed = self._resolve(self._viewed)
        if self._viewed is None:
            raise NoActiveContextError("No scene is currently viewed.")
        return self._viewed

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SceneContext":
        """An exported scene file is both the current and the viewed scene."""
        scene = SceneFile.load(path)
        return cls(current=scene, viewed=scene)

    @classmethod
    def from_relay(
        cls,
        client,
        current_uuid: Optional[str],
        viewed_uuid: Optional[str]
    ) -> "SceneContext":
        """
        Build a context whose scenes are fetched from the relay when first needed.

        Missing UUIDs leave that slot empty.
        """
        cache: Dict[str, RelayScene] = {}

        def loader(uuid: Optional[str]) -> Optional[Callable[[], HostScene]]:
            if not uuid:
                return None

            def load() -> HostScene:
                if uuid not in cache:
                    data = client.get_scene(uuid)
                    data.setdefault("uuid", uuid)
                    cache[uuid] = RelayScene(client, data)
                return cache[uuid]

            return load

        return cls(current=loader(current_uuid), viewed=loader(viewed_uuid))
