"""FoundryVTT Scene operations."""

import logging
import requests
from typing import Dict, Any, List

from exceptions import FoundryError

logger = logging.getLogger(__name__)


class SceneManager:
    """Manages scene operations for FoundryVTT via the REST relay."""

    def __init__(
        self,
        relay_url: str,
        foundry_url: str,
        api_key: str,
        client_id: str,
        timeout: float = 30
    ):
        """
        Initialize scene manager.

        Args:
            relay_url: URL of the relay server
            foundry_url: URL of the FoundryVTT instance
            api_key: API key for authentication
            client_id: Client ID for the FoundryVTT instance
            timeout: Seconds to wait for each relay request
        """
        self.relay_url = relay_url
        self.foundry_url = foundry_url
        self.api_key = api_key
        self.client_id = client_id
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "Content-Type": "application/json"
        }

    def get_scene(self, scene_uuid: str) -> Dict[str, Any]:
        """
        Retrieve a Scene by UUID.

        Args:
            scene_uuid: UUID of the scene to retrieve (format: Scene.{id})

        Returns:
            Complete scene data as dict, including embedded walls and tiles

        Raises:
            FoundryError: If retrieval fails
        """
        url = f"{self.relay_url}/get?clientId={self.client_id}&uuid={scene_uuid}"

        logger.debug(f"Retrieving scene: {scene_uuid}")

        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)

            if response.status_code != 200:
                logger.error(f"Failed to retrieve scene: {response.status_code} - {response.text}")
                raise FoundryError(
                    f"Failed to retrieve scene: {response.status_code} - {response.text}"
                )

            response_data = response.json()

            # Extract scene data from response envelope
            scene_data = response_data.get("data", response_data)

            scene_name = scene_data.get("name", "Unknown")
            logger.info(f"Retrieved scene: {scene_name} (UUID: {scene_uuid})")
            return scene_data

        except requests.exceptions.RequestException as e:
            logger.error(f"Scene retrieval request failed: {e}")
            raise FoundryError(f"Failed to retrieve scene: {e}") from e

    def create_embedded_documents(
        self,
        scene_uuid: str,
        document_type: str,
        records: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Create embedded documents (e.g. walls) inside a scene in one call.

        The host validates every record; a single invalid record fails the
        whole call.

        Args:
            scene_uuid: UUID of the parent scene (format: Scene.{id})
            document_type: Embedded collection name, e.g. "Wall"
            records: Plain document data without _id

        Returns:
            Created documents as returned by FoundryVTT (with new _id values)

        Raises:
            FoundryError: If the relay rejects the request
        """
        url = f"{self.relay_url}/create?clientId={self.client_id}"

        payload = {
            "entityType": document_type,
            "parentUuid": scene_uuid,
            "data": records
        }

        logger.debug(f"Creating {len(records)} {document_type} document(s) in {scene_uuid}")

        try:
            response = requests.post(url, json=payload, headers=self._headers(), timeout=self.timeout)

            if response.status_code != 200:
                logger.error(
                    f"Failed to create {document_type} documents: {response.status_code} - {response.text}"
                )
                raise FoundryError(
                    f"Failed to create {document_type} documents: {response.status_code} - {response.text}"
                )

            result = response.json()

            if isinstance(result, dict) and result.get("error"):
                raise FoundryError(f"Failed to create {document_type} documents: {result['error']}")

            # Handle both list and envelope response formats
            if isinstance(result, list):
                created = result
            else:
                created = result.get("entities", result.get("data", []))
            if isinstance(created, dict):
                created = [created]

            logger.debug(f"Created {len(created)} {document_type} document(s)")
            return created

        except requests.exceptions.RequestException as e:
            logger.error(f"{document_type} creation request failed: {e}")
            raise FoundryError(f"Failed to create {document_type} documents: {e}") from e
