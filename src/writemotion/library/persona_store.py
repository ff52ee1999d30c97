"""SQLite store for the user's saved persona library."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from writemotion.models.persona import ReferenceAuthor

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".writemotion" / "personas.db"


class PersonaStore(Protocol):
    def load(self) -> list[ReferenceAuthor]: ...

    def save(self, authors: Sequence[ReferenceAuthor]) -> bool: ...


class SQLitePersonaStore:
    """Persist custom personas; ``save`` replaces the whole library."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS personas (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    author_json TEXT NOT NULL,
                    saved_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def load(self) -> list[ReferenceAuthor]:
        """Return saved personas in library order, skipping corrupt rows."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, author_json FROM personas ORDER BY position"
            ).fetchall()

        authors = []
        for author_id, author_json in rows:
            try:
                authors.append(ReferenceAuthor(**json.loads(author_json)))
            except (json.JSONDecodeError, ValidationError):
                logger.warning("Skipping unreadable persona row %s", author_id)
        return authors

    def save(self, authors: Sequence[ReferenceAuthor]) -> bool:
        """Replace the stored library. Returns False if the write failed."""
        now = time.time()
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM personas")
                conn.executemany(
                    """INSERT OR REPLACE INTO personas
                       (id, position, author_json, saved_at)
                       VALUES (?, ?, ?, ?)""",
                    [
                        (a.id, i, a.model_dump_json(by_alias=True), now)
                        for i, a in enumerate(authors)
                    ],
                )
        except sqlite3.Error:
            logger.exception("Failed to save persona library to %s", self.db_path)
            return False
        return True

    def clear(self) -> int:
        """Delete all saved personas. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM personas")
            return cursor.rowcount
