"""SQLite-backed history store and local credential storage."""

import json
import logging
import shutil
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator, Optional

from config.exceptions import DatabaseError, InvalidParamsError
from models.creation import Creation, now_ms

logger = logging.getLogger(__name__)

_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS creations (
    id TEXT PRIMARY KEY,
    name TEXT DEFAULT '',
    creation_type TEXT NOT NULL,
    record TEXT NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS credentials (
    name TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

_MIGRATION_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_creations_created ON creations(created_at)",
]

_API_KEY_NAME = "anthropic_api_key"


class HistoryStore:
    """Persisted history of creations, keyed by creation id.

    The store contract is upsert-by-id and delete-by-id. Listing returns
    newest creations first; updating a record keeps its original position.
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @contextmanager
    def _get_conn(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success and always close it."""
        with closing(sqlite3.connect(str(self.db_path))) as conn:
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn

    def _init_db(self):
        with self._get_conn() as conn:
            conn.executescript(_CREATE_TABLES_SQL)
        self._migrate()

    def _migrate(self):
        with self._get_conn() as conn:
            for sql in _MIGRATION_SQL:
                try:
                    conn.execute(sql)
                except sqlite3.OperationalError as e:
                    logger.debug("Migration skipped (already applied): %s", e)

    def backup(self, target_path: str | Path) -> Path:
        target = Path(target_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(str(self.db_path), str(target))
        logger.info("History backed up to %s", target)
        return target

    # ---- Creation CRUD ----

    def upsert(self, creation: Creation) -> Creation:
        """Insert a new creation or overwrite the record with the same id."""
        creation.updated_at = now_ms()
        record = json.dumps(creation.to_record(), ensure_ascii=False)
        try:
            with self._get_conn() as conn:
                conn.execute(
                    "INSERT INTO creations (id, name, creation_type, record, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?) "
                    "ON CONFLICT(id) DO UPDATE SET name=excluded.name, "
                    "creation_type=excluded.creation_type, record=excluded.record, "
                    "updated_at=excluded.updated_at",
                    (creation.id, creation.params.name, creation.params.creation_type.value,
                     record, creation.created_at, creation.updated_at),
                )
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to save creation: {e}", {"id": creation.id}) from e
        logger.debug("Upserted creation %s", creation.id)
        return creation

    def get(self, creation_id: str) -> Optional[Creation]:
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT record FROM creations WHERE id = ?", (creation_id,)
            ).fetchone()
        if not row:
            return None
        return self._row_to_creation(row)

    def list_creations(self) -> list[Creation]:
        """Return every readable creation, newest first. Corrupted rows are skipped."""
        with self._get_conn() as conn:
            rows = conn.execute(
                "SELECT id, record FROM creations ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        creations = []
        for row in rows:
            try:
                creations.append(self._row_to_creation(row))
            except DatabaseError as e:
                logger.warning("Skipping history record %s: %s", row["id"], e)
        return creations

    def delete(self, creation_id: str) -> bool:
        """Delete a creation. Returns True when a record was removed."""
        with self._get_conn() as conn:
            cursor = conn.execute("DELETE FROM creations WHERE id = ?", (creation_id,))
            removed = cursor.rowcount > 0
        if removed:
            logger.info("Deleted creation %s", creation_id)
        return removed

    @staticmethod
    def _row_to_creation(row: sqlite3.Row) -> Creation:
        try:
            return Creation.from_record(json.loads(row["record"]))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, InvalidParamsError) as e:
            raise DatabaseError(f"Corrupted history record: {e}") from e

    # ---- Credentials ----

    def get_api_key(self) -> Optional[str]:
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT value FROM credentials WHERE name = ?", (_API_KEY_NAME,)
            ).fetchone()
        return row["value"] if row else None

    def save_api_key(self, api_key: str) -> None:
        key = (api_key or "").strip()
        if not key:
            raise DatabaseError("The API key cannot be empty.")
        with self._get_conn() as conn:
            conn.execute(
                "INSERT INTO credentials (name, value) VALUES (?, ?) "
                "ON CONFLICT(name) DO UPDATE SET value=excluded.value, "
                "updated_at=CURRENT_TIMESTAMP",
                (_API_KEY_NAME, key),
            )
        logger.info("API key saved")

    def delete_api_key(self) -> None:
        with self._get_conn() as conn:
            conn.execute("DELETE FROM credentials WHERE name = ?", (_API_KEY_NAME,))
        logger.info("API key removed")
