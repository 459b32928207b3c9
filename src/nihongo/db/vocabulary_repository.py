"""Repository functions for vocabularies table."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from nihongo.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class VocabularyRecord:
    """Vocabulary item from database."""

    id: int
    chapter_id: int
    term: str
    meaning: str
    image_url: str | None


def list_vocabulary(chapter_id: int) -> list[VocabularyRecord]:
    """Get all vocabulary items of a chapter in id order."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM vocabularies WHERE chapter_id = ? ORDER BY id ASC",
            (chapter_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def get_vocabulary(vocabulary_id: int) -> VocabularyRecord | None:
    """Get vocabulary item by ID, None if missing."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM vocabularies WHERE id = ?", (vocabulary_id,)
        ).fetchone()

    return _row_to_record(row) if row is not None else None


def insert_vocabulary(
    chapter_id: int,
    term: str,
    meaning: str,
    image_url: str | None = None,
) -> VocabularyRecord:
    """Insert a vocabulary item.

    Raises:
        StorageError: If chapter_id does not reference an existing chapter
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO vocabularies (chapter_id, term, meaning, image_url)
            VALUES (?, ?, ?, ?)
            """,
            (chapter_id, term, meaning, image_url or None),
        )
        row = conn.execute(
            "SELECT * FROM vocabularies WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.debug("vocabulary.inserted", vocabulary_id=row["id"], chapter_id=chapter_id)
    return _row_to_record(row)


def update_vocabulary(
    vocabulary_id: int,
    term: str,
    meaning: str,
    image_url: str | None = None,
) -> VocabularyRecord | None:
    """Update a vocabulary item, None if it does not exist."""
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE vocabularies SET term = ?, meaning = ?, image_url = ? WHERE id = ?",
            (term, meaning, image_url or None, vocabulary_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute(
            "SELECT * FROM vocabularies WHERE id = ?", (vocabulary_id,)
        ).fetchone()

    logger.debug("vocabulary.updated", vocabulary_id=vocabulary_id)
    return _row_to_record(row)


def delete_vocabulary(vocabulary_id: int) -> bool:
    """Delete vocabulary item. True if a row was removed."""
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM vocabularies WHERE id = ?", (vocabulary_id,))

    return cursor.rowcount > 0


def _row_to_record(row) -> VocabularyRecord:
    return VocabularyRecord(
        id=row["id"],
        chapter_id=row["chapter_id"],
        term=row["term"],
        meaning=row["meaning"],
        image_url=row["image_url"],
    )
