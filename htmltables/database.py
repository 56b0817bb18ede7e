"""Database module for extracted HTML tables.

Manages SQLite database creation, migrations, and storage of extracted
tables. Column names and row values are stored as JSON arrays so that
tables of any shape share one schema.
"""

import json
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from htmltables.models import Table


DEFAULT_DB_PATH = Path("data/htmltables.db")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    source_name TEXT NOT NULL,
    location TEXT NOT NULL,
    source_hash TEXT,
    table_count INTEGER DEFAULT 0,
    extracted_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS extracted_tables (
    id TEXT PRIMARY KEY,
    document_id TEXT REFERENCES documents(id) ON DELETE CASCADE,
    table_index INTEGER NOT NULL,
    columns_json TEXT NOT NULL,
    row_count INTEGER NOT NULL,
    UNIQUE(document_id, table_index)
);

CREATE TABLE IF NOT EXISTS table_rows (
    id TEXT PRIMARY KEY,
    table_id TEXT REFERENCES extracted_tables(id) ON DELETE CASCADE,
    row_index INTEGER NOT NULL,
    values_json TEXT NOT NULL,
    UNIQUE(table_id, row_index)
);

CREATE INDEX IF NOT EXISTS idx_documents_source ON documents(source_name);
"""


def generate_id() -> str:
    """Generate a UUID for use as a primary key."""
    return str(uuid.uuid4())


class Database:
    """SQLite database manager for extracted tables."""

    def __init__(self, db_path: Optional[str | Path] = None):
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA foreign_keys=ON")
        return self._conn

    def close(self):
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def migrate(self):
        """Create all tables if they don't exist. Safe to run repeatedly."""
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()

    # ---- Documents ----

    def record_document(self, source_name: str, location: str, source_hash: Optional[str] = None) -> str:
        """Insert a document record and return its ID."""
        with self.conn:
            return self._insert_document(source_name, location, source_hash)

    def save_document(self, source_name: str, location: str, source_hash: Optional[str],
                      tables: list[Table]) -> str:
        """Insert a document and all of its tables in a single transaction.

        Nothing is stored if any insert fails, so a failed save never leaves
        a hash behind that would make the next run skip the document.

        Returns:
            The new document ID.
        """
        with self.conn:
            doc_id = self._insert_document(source_name, location, source_hash)
            self._insert_tables(doc_id, tables)
        return doc_id

    def _insert_document(self, source_name: str, location: str, source_hash: Optional[str]) -> str:
        doc_id = generate_id()
        now = datetime.now(timezone.utc).isoformat()
        self.conn.execute(
            """INSERT INTO documents (id, source_name, location, source_hash, extracted_at)
            VALUES (?, ?, ?, ?, ?)""",
            (doc_id, source_name, location, source_hash, now),
        )
        return doc_id

    def get_last_document(self, source_name: str) -> Optional[dict]:
        """Get the most recently extracted document for a source."""
        row = self.conn.execute(
            """SELECT * FROM documents WHERE source_name = ?
            ORDER BY extracted_at DESC, rowid DESC LIMIT 1""",
            (source_name,),
        ).fetchone()
        return dict(row) if row else None

    def list_documents(self) -> list[dict]:
        rows = self.conn.execute(
            "SELECT * FROM documents ORDER BY extracted_at, rowid"
        ).fetchall()
        return [dict(r) for r in rows]

    # ---- Tables ----

    def save_tables(self, document_id: str, tables: list[Table]) -> int:
        """Store every table (and its rows) for a document.

        Returns:
            Number of tables stored.
        """
        with self.conn:
            self._insert_tables(document_id, tables)
        return len(tables)

    def _insert_tables(self, document_id: str, tables: list[Table]):
        for table_index, table in enumerate(tables):
            table_id = generate_id()
            self.conn.execute(
                """INSERT INTO extracted_tables (id, document_id, table_index, columns_json, row_count)
                VALUES (?, ?, ?, ?, ?)""",
                (table_id, document_id, table_index, json.dumps(list(table.columns)), table.row_count),
            )
            self.conn.executemany(
                """INSERT INTO table_rows (id, table_id, row_index, values_json)
                VALUES (?, ?, ?, ?)""",
                [
                    (generate_id(), table_id, row_index, json.dumps(list(row)))
                    for row_index, row in enumerate(table.rows)
                ],
            )
        self.conn.execute(
            "UPDATE documents SET table_count = ? WHERE id = ?",
            (len(tables), document_id),
        )

    def load_tables(self, document_id: str) -> list[Table]:
        """Rebuild the Tables stored for a document, in table order."""
        table_rows = self.conn.execute(
            """SELECT id, columns_json FROM extracted_tables
            WHERE document_id = ? ORDER BY table_index""",
            (document_id,),
        ).fetchall()

        tables = []
        for t in table_rows:
            rows = self.conn.execute(
                "SELECT values_json FROM table_rows WHERE table_id = ? ORDER BY row_index",
                (t["id"],),
            ).fetchall()
            tables.append(Table(
                columns=tuple(json.loads(t["columns_json"])),
                rows=tuple(tuple(json.loads(r["values_json"])) for r in rows),
            ))
        return tables

    def count_tables(self, source_name: Optional[str] = None) -> int:
        if source_name is None:
            row = self.conn.execute("SELECT COUNT(*) FROM extracted_tables").fetchone()
        else:
            row = self.conn.execute(
                """SELECT COUNT(*) FROM extracted_tables t
                JOIN documents d ON t.document_id = d.id
                WHERE d.source_name = ?""",
                (source_name,),
            ).fetchone()
        return row[0]
