"""
Shared pytest fixtures for scene bundler tests.
"""

import json
import os
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from PIL import Image


def pytest_addoption(parser):
    """Add --full flag to run entire test suite"""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite (skip smoke-only mode)"
    )


def pytest_configure(config):
    """Configure test run based on flags"""
    if config.getoption("--full"):
        # Only clear default marker if no explicit -m flag was provided
        if config.option.markexpr == "smoke or (not integration and not slow)":
            config.option.markexpr = ""


# Project root
PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="function")
def test_output_dir(tmp_path):
    """Return a clean output directory for each test."""
    output_dir = tmp_path / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


@pytest.fixture(scope="session")
def check_foundry_credentials():
    """Check if FoundryVTT relay credentials are available."""
    from dotenv import load_dotenv
    load_dotenv(PROJECT_ROOT / ".env")

    relay_url = os.getenv("FOUNDRY_RELAY_URL")
    api_key = os.getenv("FOUNDRY_API_KEY")
    client_id = os.getenv("FOUNDRY_CLIENT_ID")
    scene_uuid = os.getenv("FOUNDRY_SCENE_UUID")

    if not all([relay_url, api_key, client_id, scene_uuid]):
        pytest.skip(
            "FoundryVTT credentials not found. Set FOUNDRY_RELAY_URL, FOUNDRY_API_KEY, "
            "FOUNDRY_CLIENT_ID and FOUNDRY_SCENE_UUID in .env file."
        )

    return {
        "relay_url": relay_url,
        "api_key": api_key,
        "client_id": client_id,
        "scene_uuid": scene_uuid,
    }


def make_wall(index: int, with_id: bool = True) -> Dict[str, Any]:
    """A wall record shaped like FoundryVTT's Wall#toObject()."""
    wall = {
        "c": [index * 10, 0, index * 10 + 10, 100],
        "light": 20,
        "move": 20,
        "sight": 20,
        "sound": 20,
        "dir": 0,
        "door": 1 if index % 5 == 0 else 0,
        "ds": 0,
        "threshold": {"light": None, "sight": None, "sound": None, "attenuation": False},
        "flags": {},
    }
    if with_id:
        wall["_id"] = f"wall{index:012d}"
    return wall


@pytest.fixture
def sample_walls():
    """Three host-native walls with identities."""
    return [make_wall(i) for i in range(3)]


@pytest.fixture
def wall_factory():
    """Build N walls: wall_factory(250)."""
    def factory(count: int, with_id: bool = True) -> List[Dict[str, Any]]:
        return [make_wall(i, with_id=with_id) for i in range(count)]
    return factory


@pytest.fixture
def make_scene():
    """
    Factory for in-memory host scenes.

    The returned scene records every create_embedded_documents call in
    ``calls`` and raises on the call numbers listed in ``fail_on_calls``
    (1-based).
    """
    from exceptions import FoundryError
    from foundry.host import HostScene, random_id

    class MemoryScene(HostScene):
        def __init__(self, data, fail_on_calls=()):
            super().__init__(data)
            self.calls: List[List[Dict[str, Any]]] = []
            self.fail_on_calls = set(fail_on_calls)

        def create_embedded_documents(self, document_type, records):
            self.calls.append([dict(r) for r in records])
            if len(self.calls) in self.fail_on_calls:
                raise FoundryError(f"Wall validation failed in call {len(self.calls)}")
            created = [{**record, "_id": random_id()} for record in records]
            self.data.setdefault("walls", []).extend(created)
            return created

    def factory(
        name: str = "Goblin Cave",
        padding: Optional[float] = 0,
        walls: Optional[List[Dict[str, Any]]] = None,
        tiles: Optional[List[Dict[str, Any]]] = None,
        background: Optional[str] = "worlds/test/maps/goblin-cave.webp",
        fail_on_calls=()
    ):
        data = {
            "_id": "scene0000000001",
            "name": name,
            "padding": padding,
            "walls": list(walls or []),
            "tiles": list(tiles or []),
        }
        if background:
            data["background"] = {"src": background}
        return MemoryScene(data, fail_on_calls=fail_on_calls)

    return factory


@pytest.fixture
def scene_file(tmp_path, sample_walls):
    """An exported scene JSON document on disk."""
    data = {
        "_id": "sceneFile000001",
        "name": "Goblin Cave",
        "padding": 0,
        "background": {"src": "worlds/test/maps/goblin-cave.webp"},
        "walls": sample_walls,
        "tiles": [],
    }
    path = tmp_path / "goblin_cave.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def png_bytes(color=(255, 0, 0, 255), size=(4, 4)) -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", size, color).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def make_png():
    """Encode a solid-color PNG: make_png((0, 255, 0, 255), (8, 8))."""
    return png_bytes


class StubLoader:
    """Tile image loader serving solid colors keyed by source path."""

    def __init__(self, colors: Dict[str, tuple], delays: Optional[Dict[str, float]] = None):
        self.colors = colors
        self.delays = delays or {}
        self.loaded: List[str] = []

    async def load(self, src):
        import asyncio
        from exceptions import ImageLoadError

        await asyncio.sleep(self.delays.get(src, 0))
        self.loaded.append(src)
        if src not in self.colors:
            raise ImageLoadError(f"404 for {src}")
        return Image.new("RGBA", (2, 2), self.colors[src])


@pytest.fixture
def stub_loader():
    """Factory for StubLoader(colors, delays)."""
    return StubLoader
