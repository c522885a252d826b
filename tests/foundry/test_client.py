"""Tests for FoundryVTT API client."""

import pytest
from unittest.mock import patch


class TestFoundryClientInit:
    """Tests for FoundryClient initialization."""

    def test_client_initialization_with_env_vars(self, monkeypatch):
        """Test client initializes with environment variables."""
        from foundry.client import FoundryClient

        monkeypatch.setenv("FOUNDRY_URL", "http://localhost:30000")
        monkeypatch.setenv("FOUNDRY_API_KEY", "test-api-key")
        monkeypatch.setenv("FOUNDRY_CLIENT_ID", "test-client-id")
        monkeypatch.setenv("FOUNDRY_RELAY_URL", "https://relay.example.com")

        client = FoundryClient()

        assert client.foundry_url == "http://localhost:30000"
        assert client.api_key == "test-api-key"
        assert client.client_id == "test-client-id"
        assert client.relay_url == "https://relay.example.com"
        assert client.scenes.relay_url == "https://relay.example.com"

    def test_explicit_arguments_skip_environment(self, monkeypatch):
        """Explicit settings do not need the environment."""
        from foundry.client import FoundryClient

        monkeypatch.delenv("FOUNDRY_RELAY_URL", raising=False)

        client = FoundryClient(
            relay_url="https://relay.example.com",
            foundry_url="http://localhost:30000",
            api_key="key",
            client_id="client"
        )

        assert client.api_key == "key"

    def test_client_raises_on_missing_env_vars(self, monkeypatch):
        """Test client raises ConfigurationError when required env vars missing."""
        from exceptions import ConfigurationError
        from foundry.client import FoundryClient

        monkeypatch.delenv("FOUNDRY_RELAY_URL", raising=False)
        monkeypatch.delenv("FOUNDRY_API_KEY", raising=False)
        monkeypatch.delenv("FOUNDRY_CLIENT_ID", raising=False)

        with pytest.raises(ConfigurationError, match="FOUNDRY_RELAY_URL not set"):
            FoundryClient()


@pytest.mark.unit
class TestSceneDelegation:
    """Tests for scene operation delegation."""

    @pytest.fixture
    def client(self):
        from foundry.client import FoundryClient
        return FoundryClient(
            relay_url="https://relay.example.com",
            foundry_url="http://localhost:30000",
            api_key="key",
            client_id="client"
        )

    def test_get_scene_delegates(self, client):
        """get_scene delegates to SceneManager."""
        with patch.object(client.scenes, "get_scene", return_value={"name": "Cave"}) as mock_get:
            assert client.get_scene("Scene.1") == {"name": "Cave"}
            mock_get.assert_called_once_with("Scene.1")

    def test_create_embedded_documents_delegates(self, client):
        """create_embedded_documents delegates to SceneManager."""
        with patch.object(client.scenes, "create_embedded_documents", return_value=[]) as mock_create:
            client.create_embedded_documents("Scene.1", "Wall", [{"c": [0, 0, 1, 1]}])
            mock_create.assert_called_once_with("Scene.1", "Wall", [{"c": [0, 0, 1, 1]}])


@pytest.mark.integration
@pytest.mark.requires_foundry
class TestRelayRoundTrip:
    """Live relay checks (run with --full and credentials in .env)."""

    def test_get_current_scene(self, check_foundry_credentials):
        """The configured scene can be fetched."""
        from foundry.client import FoundryClient

        client = FoundryClient()
        scene = client.get_scene(check_foundry_credentials["scene_uuid"])

        assert "walls" in scene
