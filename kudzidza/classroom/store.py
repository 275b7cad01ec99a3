"""
Progress stores - Key/value persistence for the serialized UserProgress blob.

Stores hold opaque bytes under a named key:
- SqliteProgressStore: ~/.kudzidza/progress.db on local disk
- MemoryProgressStore: in-process dict for tests and throwaway sessions

Write failures are reported as False and logged, never raised. The tracker
keeps its in-memory state either way.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol


logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".kudzidza"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
DEFAULT_PROGRESS_KEY = "userProgress"


class ProgressStore(Protocol):
    """Persistence contract consumed by ProgressTracker."""

    def load(self, key: str) -> Optional[bytes]:
        """Return the blob stored under key, or None if absent."""
        ...

    def save(self, key: str, data: bytes) -> bool:
        """Overwrite the blob under key. Return False on failure."""
        ...


class MemoryProgressStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def load(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def save(self, key: str, data: bytes) -> bool:
        self._data[key] = bytes(data)
        return True

    def keys(self) -> list[str]:
        return sorted(self._data)


class SqliteProgressStore:
    """
    Store progress blobs in a SQLite key/value table.

    Progress is stored separately from course content so that:
    - Content can be updated without losing progress
    - Progress is user-specific, content is shared
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.kudzidza/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def load(self, key: str) -> Optional[bytes]:
        """Return the blob stored under key, or None if absent or unreadable."""
        try:
            conn = self._get_connection()
            try:
                cursor = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                )
                row = cursor.fetchone()
                return bytes(row["value"]) if row else None
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Could not read '{key}' from {self.db_path}: {e}")
            return None

    def save(self, key: str, data: bytes) -> bool:
        """Overwrite the blob under key. Returns False if the write failed."""
        try:
            conn = self._get_connection()
            try:
                now = datetime.now().isoformat()
                conn.execute(
                    """INSERT INTO kv_store (key, value, updated_at)
                       VALUES (?, ?, ?)
                       ON CONFLICT(key) DO UPDATE SET
                         value = excluded.value,
                         updated_at = excluded.updated_at""",
                    (key, sqlite3.Binary(data), now)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Could not save '{key}' to {self.db_path}: {e}")
            return False
        return True

    def keys(self) -> list[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT key FROM kv_store ORDER BY key")
            return [row["key"] for row in cursor.fetchall()]
        finally:
            conn.close()
