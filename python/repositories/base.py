"""
Base repository with common functionality.
"""

import os
import sqlite3
import threading
from typing import Any, Dict, Iterable, List, Optional

from core.exceptions import DatabaseError
from core.logging import get_logger


class BaseRepository:
    """
    Base repository over a SQLite database file.

    Subclasses should:
    - Set `table_name` class attribute
    - Implement `ensure_schema()` and domain-specific queries
    """

    table_name: str = None

    def __init__(self, db_path: str):
        """
        Initialize repository.

        Args:
            db_path: SQLite database file (":memory:" for tests)
        """
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None
        # One connection per repository; every statement runs under this lock
        self._lock = threading.RLock()
        self.logger = get_logger(f"repo.{self.__class__.__name__}")

    @property
    def conn(self) -> sqlite3.Connection:
        """Lazily opened connection."""
        with self._lock:
            return self._open()

    def _open(self) -> sqlite3.Connection:
        if self._conn is None:
            if self.db_path != ":memory:":
                directory = os.path.dirname(self.db_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self.ensure_schema()
        return self._conn

    def close(self):
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def ensure_schema(self) -> None:
        raise NotImplementedError

    # ============================================================
    # Helper Methods
    # ============================================================

    def _fetch(self, operation: str, query: str, params: Iterable[Any] = ()) -> List[Dict[str, Any]]:
        try:
            with self._lock:
                rows = self.conn.execute(query, tuple(params)).fetchall()
            return [dict(row) for row in rows]
        except sqlite3.Error as e:
            self._handle_error(operation, e)

    def _execute(self, operation: str, query: str, params: Iterable[Any] = ()) -> None:
        try:
            with self._lock, self.conn as conn:
                conn.execute(query, tuple(params))
        except sqlite3.Error as e:
            self._handle_error(operation, e)

    @staticmethod
    def _placeholders(values: List[Any]) -> str:
        return ", ".join("?" for _ in values)

    def _handle_error(self, operation: str, error: Exception):
        """
        Handle database error with logging.
        """
        self.logger.error(f"{operation} failed: {error}")
        raise DatabaseError(str(error), operation=f"{self.table_name}.{operation}") from error
