"""SQLite store of per-document index fields."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from sourcelens.models import Genre, Hit


class IndexCorruptionError(Exception):
    """A hit document could not be read from the index."""


class HitStore:
    """Persistence layer for the stored fields of indexed documents."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._ensure_schema()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _ensure_schema(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id INTEGER PRIMARY KEY,
                    path TEXT,
                    genre TEXT,
                    date TEXT,
                    tags BLOB,
                    scopes BLOB,
                    positions BLOB
                )
                """
            )
            conn.execute(
                """CREATE INDEX IF NOT EXISTS idx_documents_path
                    ON documents(path)
                """
            )

    def add_document(
        self,
        path: Optional[str],
        genre: Genre,
        *,
        date: Optional[str] = None,
        tags: Optional[bytes] = None,
        scopes: Optional[bytes] = None,
        positions: Optional[bytes] = None,
    ) -> int:
        """Store the fields of one document and return its id."""
        with self.transaction() as conn:
            return conn.execute(
                """
                INSERT INTO documents(path, genre, date, tags, scopes, positions)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    path,
                    genre.value,
                    date,
                    None if tags is None else sqlite3.Binary(tags),
                    None if scopes is None else sqlite3.Binary(scopes),
                    None if positions is None else sqlite3.Binary(positions),
                ),
            ).lastrowid

    def get_document(self, doc_id: int) -> Hit:
        """Read the stored fields of ``doc_id``.

        Raises:
            IndexCorruptionError: the row is missing or the database is unreadable.
        """
        try:
            row = self._conn.execute(
                "SELECT id, path, genre, date, tags, scopes, positions FROM documents WHERE id = ?",
                (doc_id,),
            ).fetchone()
        except sqlite3.DatabaseError as exc:
            raise IndexCorruptionError(f"Unable to read document {doc_id}: {exc}") from exc
        if row is None:
            raise IndexCorruptionError(f"Document {doc_id} is missing from the index")
        return Hit(
            doc_id=row["id"],
            path=row["path"],
            genre=Genre.get(row["genre"]),
            date=row["date"],
            tags=_blob(row["tags"]),
            scopes=_blob(row["scopes"]),
            positions=_blob(row["positions"]),
        )

    def list_documents(self) -> List[Hit]:
        rows = self._conn.execute("SELECT id FROM documents ORDER BY path, id").fetchall()
        return [self.get_document(row["id"]) for row in rows]

    def get_stats(self) -> dict:
        row = self._conn.execute(
            "SELECT COUNT(*) AS documents, COUNT(path) AS with_path FROM documents"
        ).fetchone()
        return {
            "document_count": row["documents"],
            "missing_path_count": row["documents"] - row["with_path"],
        }


def _blob(value: Optional[bytes]) -> Optional[bytes]:
    return None if value is None else bytes(value)
