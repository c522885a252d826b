"""Wall import and export."""

from .models import WallImportResult
from .sync import WallSyncEngine

__all__ = [
    "WallImportResult",
    "WallSyncEngine",
]
