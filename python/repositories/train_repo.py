"""
Train repository - handles the train table.

Each row is one training sample: the stored file it came from, the label it
was trained under, and the detector's response as JSON meta. For remote
detectors ``meta.id`` is the backend asset created for the sample.
"""

import json
from typing import Any, Dict, List, Optional

from core.config import settings
from repositories.base import BaseRepository


class TrainRepository(BaseRepository):
    """Local train records."""

    table_name = "train"

    def ensure_schema(self) -> None:
        self._conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS train (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                fileId TEXT NOT NULL,
                name TEXT NOT NULL,
                meta JSON,
                createdAt TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE INDEX IF NOT EXISTS idx_train_file_id ON train(fileId);
            """
        )

    def add(
        self,
        file_id: str,
        name: str,
        meta: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._execute(
            "add",
            "INSERT INTO train (fileId, name, meta) VALUES (?, ?, ?)",
            (file_id, name, json.dumps(meta or {})),
        )

    def asset_ids(self, file_ids: Optional[List[str]] = None) -> List[str]:
        """
        Remote asset IDs recorded in train meta.

        Args:
            file_ids: Restrict to these file IDs; None or empty means all records

        Returns:
            Asset IDs in insertion order, records without one skipped
        """
        query = "SELECT json_extract(meta, '$.id') AS assetId FROM train"
        params: List[str] = []
        if file_ids:
            query += f" WHERE fileId IN ({self._placeholders(file_ids)})"
            params = list(file_ids)
        query += " ORDER BY id"

        rows = self._fetch("asset_ids", query, params)
        return [str(row["assetId"]) for row in rows if row["assetId"] is not None]


# Global instance
_train_repository: Optional[TrainRepository] = None


def get_train_repository() -> TrainRepository:
    """Get singleton TrainRepository instance."""
    global _train_repository
    if _train_repository is None:
        _train_repository = TrainRepository(settings.storage_path)
    return _train_repository
