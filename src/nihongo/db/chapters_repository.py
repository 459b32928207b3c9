"""Repository functions for chapters table.

Chapters are the root of all content: deleting one cascades to its
vocabulary, grammar patterns, quizzes, reading passages and listening
exercises.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from nihongo.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class ChapterRecord:
    """Chapter record from database."""

    id: int
    title: str
    description: str | None


def list_chapters() -> list[ChapterRecord]:
    """Get all chapters in id order."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM chapters ORDER BY id ASC").fetchall()

    return [_row_to_record(row) for row in rows]


def get_chapter(chapter_id: int) -> ChapterRecord | None:
    """Get chapter by ID.

    Returns:
        ChapterRecord if found, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM chapters WHERE id = ?", (chapter_id,)
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def insert_chapter(title: str, description: str | None = None) -> ChapterRecord:
    """Insert a new chapter and return it."""
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO chapters (title, description) VALUES (?, ?)",
            (title, description),
        )
        row = conn.execute(
            "SELECT * FROM chapters WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.debug("chapters.inserted", chapter_id=row["id"])
    return _row_to_record(row)


def update_chapter(
    chapter_id: int, title: str, description: str | None = None
) -> ChapterRecord | None:
    """Update a chapter.

    Returns:
        The updated ChapterRecord, None if the chapter does not exist
    """
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE chapters SET title = ?, description = ? WHERE id = ?",
            (title, description, chapter_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute(
            "SELECT * FROM chapters WHERE id = ?", (chapter_id,)
        ).fetchone()

    logger.debug("chapters.updated", chapter_id=chapter_id)
    return _row_to_record(row)


def delete_chapter(chapter_id: int) -> bool:
    """Delete chapter and, through the foreign keys, all of its content.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM chapters WHERE id = ?", (chapter_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.info("chapters.deleted", chapter_id=chapter_id)

    return deleted


def _row_to_record(row) -> ChapterRecord:
    """Convert database row to ChapterRecord."""
    return ChapterRecord(
        id=row["id"],
        title=row["title"],
        description=row["description"],
    )
