"""Database connection, DDL, and low-level helpers for wordnet-dict."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TypeVar

from wordnet_dict.exceptions import DatabaseError

SCHEMA_VERSION = "1.0"

INSERT_BATCH_SIZE = 1000
DELETE_BATCH_SIZE = 500
LOOKUP_BATCH_SIZE = 500

TABLES = ("words", "synsets", "word_synsets", "examples", "relations")

_T = TypeVar("_T")

# ---------------------------------------------------------------------------
# DDL statements
# ---------------------------------------------------------------------------

# "offset" is an SQL keyword and is always quoted.
_DDL = """
-- Meta table
CREATE TABLE IF NOT EXISTS meta (
    key TEXT NOT NULL,
    value TEXT,
    UNIQUE (key)
);

-- Words
CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY,
    lemma TEXT NOT NULL,
    pos TEXT NOT NULL CHECK( pos IN ('n', 'v', 'a', 's', 'r') ),
    UNIQUE (lemma, pos)
);
CREATE INDEX IF NOT EXISTS words_lemma_index ON words (lemma);

-- Synsets
CREATE TABLE IF NOT EXISTS synsets (
    id INTEGER PRIMARY KEY,
    "offset" TEXT NOT NULL,
    pos TEXT NOT NULL CHECK( pos IN ('n', 'v', 'a', 's', 'r') ),
    definition TEXT NOT NULL,
    sense_key TEXT,
    UNIQUE ("offset", pos)
);
CREATE INDEX IF NOT EXISTS synsets_offset_index ON synsets ("offset");

-- Membership
CREATE TABLE IF NOT EXISTS word_synsets (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL REFERENCES words (id) ON DELETE CASCADE,
    synset_id INTEGER NOT NULL REFERENCES synsets (id) ON DELETE CASCADE,
    UNIQUE (word_id, synset_id)
);
CREATE INDEX IF NOT EXISTS word_synsets_word_id_index ON word_synsets (word_id);
CREATE INDEX IF NOT EXISTS word_synsets_synset_id_index ON word_synsets (synset_id);

-- Examples
CREATE TABLE IF NOT EXISTS examples (
    id INTEGER PRIMARY KEY,
    synset_id INTEGER NOT NULL REFERENCES synsets (id) ON DELETE CASCADE,
    text TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS examples_synset_id_index ON examples (synset_id);

-- Relations (target identified by offset only)
CREATE TABLE IF NOT EXISTS relations (
    id INTEGER PRIMARY KEY,
    synset_id INTEGER NOT NULL REFERENCES synsets (id) ON DELETE CASCADE,
    relation_type TEXT NOT NULL,
    target_offset TEXT NOT NULL,
    target_pos TEXT
);
CREATE INDEX IF NOT EXISTS relations_synset_id_index ON relations (synset_id);
CREATE INDEX IF NOT EXISTS relations_type_index ON relations (relation_type);
"""


def connect(db_path: str | Path = ":memory:") -> sqlite3.Connection:
    """Open a database connection with wordnet-dict PRAGMA settings."""
    db_path_str = str(db_path)
    conn = sqlite3.connect(db_path_str)
    conn.execute("PRAGMA foreign_keys = ON")
    if db_path_str != ":memory:":
        conn.execute("PRAGMA journal_mode = WAL")
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Initialize all tables if they don't exist. Set schema version."""
    conn.executescript(_DDL)
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) VALUES ('schema_version', ?)",
        (SCHEMA_VERSION,),
    )
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) "
        "VALUES ('created_at', strftime('%Y-%m-%dT%H:%M:%f', 'now'))",
    )
    conn.commit()


def check_schema_version(conn: sqlite3.Connection) -> None:
    """Verify the database schema version is compatible."""
    try:
        row = conn.execute(
            "SELECT value FROM meta WHERE key = 'schema_version'"
        ).fetchone()
    except sqlite3.OperationalError:
        # meta table doesn't exist - uninitialized DB
        return
    if row is None:
        return
    version = row[0]
    if version != SCHEMA_VERSION:
        raise DatabaseError(
            f"Incompatible schema version: {version} "
            f"(expected {SCHEMA_VERSION})"
        )


def open_database(db_path: str | Path = ":memory:") -> sqlite3.Connection:
    """Connect, verify the schema version and create missing tables."""
    try:
        conn = connect(db_path)
    except sqlite3.Error as e:
        raise DatabaseError(f"Cannot open database {str(db_path)!r}: {e}") from e
    try:
        check_schema_version(conn)
        init_db(conn)
    except BaseException:
        conn.close()
        raise
    return conn


# ---------------------------------------------------------------------------
# Chunking helpers
# ---------------------------------------------------------------------------

def chunked(items: Sequence[_T], size: int) -> Iterator[Sequence[_T]]:
    """Yield consecutive slices of at most ``size`` items."""
    for i in range(0, len(items), size):
        yield items[i:i + size]


def placeholders(count: int) -> str:
    """Return ``?, ?, ...`` for an ``IN`` clause of ``count`` values."""
    return ", ".join("?" * count)


def insert_rows(
    conn: sqlite3.Connection,
    sql: str,
    rows: Sequence[tuple],
) -> None:
    """Run ``sql`` for every row, ``INSERT_BATCH_SIZE`` rows per call."""
    for batch in chunked(rows, INSERT_BATCH_SIZE):
        conn.executemany(sql, batch)


def delete_by_synset_ids(
    conn: sqlite3.Connection,
    table: str,
    synset_ids: Sequence[int],
) -> None:
    """Delete every row of ``table`` owned by one of ``synset_ids``."""
    if table not in ("examples", "relations"):
        raise ValueError(f"Cannot delete by synset id from {table!r}")
    for batch in chunked(synset_ids, DELETE_BATCH_SIZE):
        conn.execute(
            f"DELETE FROM {table} WHERE synset_id IN ({placeholders(len(batch))})",
            tuple(batch),
        )


# ---------------------------------------------------------------------------
# Read helpers
# ---------------------------------------------------------------------------

def table_counts(conn: sqlite3.Connection) -> dict[str, int]:
    """Return the row count of every wordnet-dict table."""
    return {
        table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        for table in TABLES
    }


def get_word_id(conn: sqlite3.Connection, lemma: str, pos: str) -> int | None:
    """Get the id of a word by lemma and part of speech, or None."""
    row = conn.execute(
        "SELECT id FROM words WHERE lemma = ? AND pos = ?",
        (lemma, pos),
    ).fetchone()
    return row[0] if row else None


def get_synset_row(conn: sqlite3.Connection, offset: str, pos: str) -> sqlite3.Row | None:
    """Get a full synset row by offset and part of speech."""
    return conn.execute(
        'SELECT * FROM synsets WHERE "offset" = ? AND pos = ?',
        (offset, pos),
    ).fetchone()
