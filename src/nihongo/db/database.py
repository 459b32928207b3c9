"""SQLite database connection and schema management.

Provides connection management, schema initialization and the additive
column patches applied to databases created by older releases.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

from nihongo.core.errors import StorageError

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/nihongo.db")

# Current database (module-level, set once by init_db)
_db_path: Path | None = None
_timeout: float = 5.0

# Columns added after the first release: (table, column, declaration)
_COLUMN_PATCHES: list[tuple[str, str, str]] = [
    ("vocabularies", "image_url", "TEXT"),
    ("grammar_patterns", "image_urls", "TEXT NOT NULL DEFAULT '[]'"),
    ("grammar_patterns", "sort_order", "INTEGER"),
    ("quizzes", "answer_summary", "TEXT"),
    ("listening_exercises", "description", "TEXT"),
    ("listening_exercises", "image_url", "TEXT"),
    ("listening_exercises", "audio_urls", "TEXT NOT NULL DEFAULT '[]'"),
    ("listening_exercises", "script", "TEXT"),
]


def init_db(db_path: Path | None = None, timeout: float = 5.0) -> None:
    """Initialize database with schema.

    Creates the database file and all required tables if they don't exist,
    then applies column patches. Safe to run on every startup.

    Args:
        db_path: Path to database file. Defaults to db/nihongo.db
        timeout: Seconds to wait on a locked database
    """
    global _db_path, _timeout
    _db_path = db_path or DEFAULT_DB_PATH
    _timeout = timeout

    _db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db() as conn:
        _create_schema(conn)
        patched = _apply_column_patches(conn)
        _create_indexes(conn)
        backfilled = _backfill_sort_order(conn)

    logger.info(
        "database.initialized",
        path=str(_db_path),
        columns_patched=patched,
        sort_order_backfilled=backfilled,
    )


def get_db_path() -> Path:
    """Path of the database currently in use."""
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Every block is one transaction: committed when the block exits
    normally, rolled back when it raises. Driver errors, and integers too
    large to bind as SQLite INTEGER, are re-raised as StorageError
    carrying the original message.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM chapters").fetchall()
    """
    db_path = get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(db_path, timeout=_timeout)
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as e:
        raise StorageError(str(e)) from e

    conn.row_factory = sqlite3.Row

    try:
        yield conn
        conn.commit()
    except (sqlite3.Error, OverflowError) as e:
        conn.rollback()
        logger.warning("database.error", error=str(e))
        raise StorageError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency. Children reference their owner
    with ON DELETE CASCADE.
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS chapters (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT
        );

        CREATE TABLE IF NOT EXISTS vocabularies (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            chapter_id INTEGER NOT NULL REFERENCES chapters(id) ON DELETE CASCADE,
            term TEXT NOT NULL,
            meaning TEXT NOT NULL,
            image_url TEXT
        );

        CREATE TABLE IF NOT EXISTS grammar_patterns (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            chapter_id INTEGER NOT NULL REFERENCES chapters(id) ON DELETE CASCADE,
            pattern TEXT,
            explanation TEXT,
            example TEXT,
            image_urls TEXT NOT NULL DEFAULT '[]',
            sort_order INTEGER
        );

        CREATE TABLE IF NOT EXISTS quizzes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            chapter_id INTEGER NOT NULL REFERENCES chapters(id) ON DELETE CASCADE,
            question TEXT,
            option_a TEXT,
            option_b TEXT,
            option_c TEXT,
            option_d TEXT,
            correct_answer TEXT CHECK(correct_answer IN ('a', 'b', 'c', 'd')),
            answer_summary TEXT
        );

        CREATE TABLE IF NOT EXISTS reading_passages (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            chapter_id INTEGER NOT NULL REFERENCES chapters(id) ON DELETE CASCADE,
            passage_content TEXT
        );

        CREATE TABLE IF NOT EXISTS reading_questions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            passage_id INTEGER NOT NULL REFERENCES reading_passages(id) ON DELETE CASCADE,
            question_text TEXT,
            option_a TEXT,
            option_b TEXT,
            option_c TEXT,
            option_d TEXT,
            correct_answer TEXT CHECK(correct_answer IN ('a', 'b', 'c', 'd'))
        );

        CREATE TABLE IF NOT EXISTS listening_exercises (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            chapter_id INTEGER NOT NULL REFERENCES chapters(id) ON DELETE CASCADE,
            title TEXT,
            description TEXT,
            image_url TEXT,
            audio_urls TEXT NOT NULL DEFAULT '[]',
            script TEXT
        );
        """
    )


def _create_indexes(conn: sqlite3.Connection) -> None:
    """Create indexes once every patched column exists."""
    conn.executescript(
        """
        CREATE INDEX IF NOT EXISTS idx_vocabularies_chapter ON vocabularies(chapter_id);
        CREATE INDEX IF NOT EXISTS idx_grammar_chapter_order ON grammar_patterns(chapter_id, sort_order);
        CREATE INDEX IF NOT EXISTS idx_quizzes_chapter ON quizzes(chapter_id);
        CREATE INDEX IF NOT EXISTS idx_passages_chapter ON reading_passages(chapter_id);
        CREATE INDEX IF NOT EXISTS idx_questions_passage ON reading_questions(passage_id);
        CREATE INDEX IF NOT EXISTS idx_listening_chapter ON listening_exercises(chapter_id);
        """
    )


def _table_columns(conn: sqlite3.Connection, table: str) -> set[str]:
    return {row["name"] for row in conn.execute(f"PRAGMA table_info({table})")}


def _apply_column_patches(conn: sqlite3.Connection) -> int:
    """Add columns missing from tables created by older schemas.

    Returns:
        Number of columns added
    """
    added = 0
    for table, column, declaration in _COLUMN_PATCHES:
        if column in _table_columns(conn, table):
            continue
        conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {declaration}")
        logger.info("database.column_added", table=table, column=column)
        added += 1
    return added


def _backfill_sort_order(conn: sqlite3.Connection) -> int:
    """Give every grammar pattern without a sort_order one after its chapter's max.

    Patterns are appended in id order so existing positions are kept.

    Returns:
        Number of patterns updated
    """
    rows = conn.execute(
        "SELECT id, chapter_id FROM grammar_patterns WHERE sort_order IS NULL ORDER BY id ASC"
    ).fetchall()

    for row in rows:
        conn.execute(
            """
            UPDATE grammar_patterns SET sort_order = (
                SELECT COALESCE(MAX(sort_order), -1) + 1
                FROM grammar_patterns WHERE chapter_id = ?
            )
            WHERE id = ?
            """,
            (row["chapter_id"], row["id"]),
        )

    return len(rows)
