"""Wall import/export between scenes through a portable JSON array.

Export copies every wall of the current scene, ``_id`` included. Import
parses the array, drops ``_id`` from every record (identifiers from another
scene mean nothing in this one) and creates the walls in fixed-size
batches, one host call at a time.

Both directions first check the scene padding: wall coordinates are
absolute, so walls moved between scenes with different padding land in
the wrong place. A non-zero padding asks the user before continuing.
"""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from config import WALL_BATCH_SIZE, BatchFailurePolicy
from exceptions import FormatError, PreconditionDeclinedError, WallImportError
from walls.models import WallImportResult

logger = logging.getLogger(__name__)

IDENTITY_FIELD = "_id"


class WallSyncEngine:
    """Serializes a scene's walls and creates walls from a bundle."""

    def __init__(
        self,
        confirm: Callable[[str], bool],
        batch_size: int = WALL_BATCH_SIZE,
        failure_policy: BatchFailurePolicy = BatchFailurePolicy.ABORT,
        progress: Optional[Callable[[str], None]] = None
    ):
        """
        Args:
            confirm: Blocking yes/no prompt, called with "import" or "export"
                when the scene has non-zero padding
            batch_size: Walls per creation call
            failure_policy: Whether a rejected batch stops the import
            progress: Receives user-facing progress messages
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.confirm = confirm
        self.batch_size = batch_size
        self.failure_policy = BatchFailurePolicy(failure_policy)
        self.progress = progress

    def _report(self, message: str) -> None:
        logger.info(message)
        if self.progress:
            self.progress(message)

    @staticmethod
    def serialize(walls: List[Dict[str, Any]]) -> str:
        """Pretty-print every wall as a JSON array."""
        return json.dumps([dict(wall) for wall in walls], indent=2)

    @staticmethod
    def validate_import_payload(text: str) -> List[Any]:
        """
        Parse an import payload.

        Individual records are not checked; the host validates them on creation.

        Raises:
            FormatError: If the text is not JSON or not a JSON array
        """
        try:
            walls = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise FormatError(f"Wall data is not valid JSON: {e}") from e

        if not isinstance(walls, list):
            raise FormatError("Invalid wall data format. Expected an array of walls.")

        return walls

    @staticmethod
    def strip_identity(record: Any) -> Any:
        """Return a copy of the record without its _id."""
        if not isinstance(record, dict):
            return record
        return {key: value for key, value in record.items() if key != IDENTITY_FIELD}

    def check_padding_precondition(self, scene, direction: str) -> bool:
        """
        Ask the user whether to continue when the scene has padding.

        Returns:
            True if the operation may proceed
        """
        if scene.padding == 0:
            return True

        logger.warning(f"Scene '{scene.name}' has padding {scene.padding}; asking before {direction}")
        proceed = bool(self.confirm(direction))
        if not proceed:
            logger.info(f"Wall {direction} declined because of scene padding")
        return proceed

    def export_walls(self, scene) -> str:
        """
        Serialize the scene's walls after the padding check.

        Raises:
            PreconditionDeclinedError: If the user declines the padding warning
        """
        if not self.check_padding_precondition(scene, "export"):
            raise PreconditionDeclinedError("Wall export cancelled.")

        logger.debug(f"Exporting {len(scene.walls)} walls from {scene.name}")
        return self.serialize(scene.walls)

    async def import_walls(self, text: str, scene) -> WallImportResult:
        """
        Validate, check padding, strip identities and create walls.

        Raises:
            FormatError: If the payload is not a JSON array
            PreconditionDeclinedError: If the user declines the padding warning
            WallImportError: If a batch fails under the abort policy
        """
        walls = self.validate_import_payload(text)

        if not self.check_padding_precondition(scene, "import"):
            raise PreconditionDeclinedError("Wall import cancelled.")

        records = [self.strip_identity(wall) for wall in walls]
        return await self.apply_import(records, scene)

    async def apply_import(self, records: List[Dict[str, Any]], scene) -> WallImportResult:
        """
        Create walls in sequential batches.

        Batches that succeeded are never rolled back.

        Raises:
            WallImportError: On the first rejected batch under the abort
                policy; ``created_count`` holds the walls already committed
        """
        total = len(records)
        result = WallImportResult(total=total)

        self._report(f"Creating {total} walls...")

        for start in range(0, total, self.batch_size):
            batch = records[start:start + self.batch_size]
            result.batches += 1
            logger.debug(f"Submitting batch {result.batches} ({len(batch)} walls)")

            try:
                await asyncio.to_thread(scene.create_embedded_documents, "Wall", batch)
            except Exception as e:
                if self.failure_policy is BatchFailurePolicy.ABORT:
                    raise WallImportError(
                        f"Wall creation failed after {result.created} of {total} walls: {e}",
                        created_count=result.created,
                        total=total
                    ) from e

                logger.warning(f"Skipping batch {result.batches} ({len(batch)} walls): {e}")
                result.failed += len(batch)
                result.errors.append(str(e))
                continue

            result.created += len(batch)

            if start + self.batch_size < total:
                self._report(f"Created {result.created} of {total} walls...")

        return result
