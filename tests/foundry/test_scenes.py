"""Tests for SceneManager - scene operations via the REST relay."""

import pytest
import requests
from unittest.mock import patch, MagicMock


@pytest.fixture
def manager():
    """Create a SceneManager instance."""
    from foundry.scenes import SceneManager
    return SceneManager(
        relay_url="https://relay.example.com",
        foundry_url="http://localhost:30000",
        api_key="test-key",
        client_id="client-1"
    )


class TestSceneManagerInit:
    """Tests for SceneManager initialization."""

    def test_scene_manager_initialization(self, manager):
        """SceneManager keeps its relay settings."""
        assert manager.relay_url == "https://relay.example.com"
        assert manager.client_id == "client-1"
        assert manager.timeout == 30


@pytest.mark.unit
class TestGetScene:
    """Tests for SceneManager.get_scene."""

    def test_get_scene_unwraps_envelope(self, manager):
        """Scene data is returned from the response envelope."""
        with patch('foundry.scenes.requests.get') as mock_get:
            mock_get.return_value = MagicMock(
                status_code=200,
                json=lambda: {"data": {"name": "Cave", "walls": [], "padding": 0}}
            )

            scene = manager.get_scene("Scene.abc123")

            assert scene["name"] == "Cave"
            url = mock_get.call_args[0][0]
            assert url == "https://relay.example.com/get?clientId=client-1&uuid=Scene.abc123"
            assert mock_get.call_args[1]["headers"]["x-api-key"] == "test-key"

    def test_get_scene_non_200_raises(self, manager):
        """Relay errors raise FoundryError."""
        from exceptions import FoundryError

        with patch('foundry.scenes.requests.get') as mock_get:
            mock_get.return_value = MagicMock(status_code=404, text="not found")

            with pytest.raises(FoundryError, match="404"):
                manager.get_scene("Scene.missing")

    def test_get_scene_connection_error(self, manager):
        """Network errors raise FoundryError."""
        from exceptions import FoundryError

        with patch('foundry.scenes.requests.get', side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(FoundryError, match="down"):
                manager.get_scene("Scene.abc123")


@pytest.mark.unit
class TestCreateEmbeddedDocuments:
    """Tests for SceneManager.create_embedded_documents."""

    def test_payload_structure(self, manager):
        """Walls are posted with the parent scene UUID."""
        records = [{"c": [0, 0, 10, 10]}, {"c": [10, 10, 20, 20]}]

        with patch('foundry.scenes.requests.post') as mock_post:
            mock_post.return_value = MagicMock(
                status_code=200,
                json=lambda: {"entities": [{"_id": "w1"}, {"_id": "w2"}]}
            )

            created = manager.create_embedded_documents("Scene.abc123", "Wall", records)

            payload = mock_post.call_args[1]["json"]
            assert payload == {"entityType": "Wall", "parentUuid": "Scene.abc123", "data": records}
            assert mock_post.call_args[0][0] == "https://relay.example.com/create?clientId=client-1"
            assert created == [{"_id": "w1"}, {"_id": "w2"}]

    def test_list_response(self, manager):
        """A bare list response is accepted."""
        with patch('foundry.scenes.requests.post') as mock_post:
            mock_post.return_value = MagicMock(status_code=200, json=lambda: [{"_id": "w1"}])

            assert manager.create_embedded_documents("Scene.a", "Wall", [{}]) == [{"_id": "w1"}]

    def test_validation_error_response(self, manager):
        """An error body raises FoundryError."""
        from exceptions import FoundryError

        with patch('foundry.scenes.requests.post') as mock_post:
            mock_post.return_value = MagicMock(
                status_code=200,
                json=lambda: {"error": "Wall validation errors: c: must be an array of 4 numbers"}
            )

            with pytest.raises(FoundryError, match="validation"):
                manager.create_embedded_documents("Scene.a", "Wall", [{"c": None}])

    def test_http_failure(self, manager):
        """Non-200 raises FoundryError."""
        from exceptions import FoundryError

        with patch('foundry.scenes.requests.post') as mock_post:
            mock_post.return_value = MagicMock(status_code=500, text="boom")

            with pytest.raises(FoundryError, match="500"):
                manager.create_embedded_documents("Scene.a", "Wall", [{}])

