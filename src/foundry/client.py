"""FoundryVTT REST API client."""

import logging
from typing import Dict, Any, List, Optional

from config import get_relay_settings
from .scenes import SceneManager

logger = logging.getLogger(__name__)


class FoundryClient:
    """Client for interacting with FoundryVTT via REST API."""

    def __init__(
        self,
        relay_url: Optional[str] = None,
        foundry_url: Optional[str] = None,
        api_key: Optional[str] = None,
        client_id: Optional[str] = None
    ):
        """
        Initialize FoundryVTT API client.

        Explicit arguments win; anything omitted is read from the environment.

        Raises:
            ConfigurationError: If required environment variables are not set
        """
        if not all([relay_url, foundry_url, api_key, client_id]):
            settings = get_relay_settings()
            relay_url = relay_url or settings["relay_url"]
            foundry_url = foundry_url or settings["foundry_url"]
            api_key = api_key or settings["api_key"]
            client_id = client_id or settings["client_id"]

        self.relay_url = relay_url
        self.foundry_url = foundry_url
        self.api_key = api_key
        self.client_id = client_id

        self.scenes = SceneManager(
            relay_url=self.relay_url,
            foundry_url=self.foundry_url,
            api_key=self.api_key,
            client_id=self.client_id
        )

        logger.info(f"Initialized FoundryClient at {self.foundry_url}")

    # Scene operations (delegated to SceneManager)

    def get_scene(self, scene_uuid: str) -> Dict[str, Any]:
        """Get a scene by UUID."""
        return self.scenes.get_scene(scene_uuid)

    def create_embedded_documents(
        self,
        scene_uuid: str,
        document_type: str,
        records: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """Create embedded documents inside a scene."""
        return self.scenes.create_embedded_documents(scene_uuid, document_type, records)
