"""Data models for wall import/export."""

from typing import List
from pydantic import BaseModel, Field


class WallImportResult(BaseModel):
    """Result from WallSyncEngine.apply_import()."""

    total: int  # Records submitted
    created: int = 0  # Records the host accepted
    failed: int = 0  # Records in batches the host rejected (continue policy only)
    batches: int = 0  # Creation calls issued
    errors: List[str] = Field(default_factory=list)  # One message per rejected batch

    @property
    def partial_failure(self) -> bool:
        return self.failed > 0
