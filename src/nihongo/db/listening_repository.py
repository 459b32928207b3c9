"""Repository functions for listening_exercises table."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import structlog

from nihongo.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class ListeningRecord:
    """Listening exercise from database."""

    id: int
    chapter_id: int
    title: str | None
    description: str | None
    image_url: str | None
    audio_urls: list[str] = field(default_factory=list)
    script: str | None = None


def list_listening(chapter_id: int) -> list[ListeningRecord]:
    """Get all listening exercises of a chapter in id order."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM listening_exercises WHERE chapter_id = ? ORDER BY id ASC",
            (chapter_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def get_listening(exercise_id: int) -> ListeningRecord | None:
    """Get listening exercise by ID, None if missing."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM listening_exercises WHERE id = ?", (exercise_id,)
        ).fetchone()

    return _row_to_record(row) if row is not None else None


def insert_listening(
    chapter_id: int,
    title: str | None,
    description: str | None = None,
    image_url: str | None = None,
    audio_urls: list[str] | None = None,
    script: str | None = None,
) -> ListeningRecord:
    """Insert a listening exercise.

    Raises:
        StorageError: If chapter_id does not reference an existing chapter
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO listening_exercises (
                chapter_id, title, description, image_url, audio_urls, script
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                chapter_id,
                title,
                description,
                image_url or None,
                json.dumps(audio_urls or []),
                script,
            ),
        )
        row = conn.execute(
            "SELECT * FROM listening_exercises WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.debug("listening.inserted", exercise_id=row["id"], chapter_id=chapter_id)
    return _row_to_record(row)


def update_listening(
    exercise_id: int,
    title: str | None,
    description: str | None = None,
    image_url: str | None = None,
    audio_urls: list[str] | None = None,
    script: str | None = None,
) -> ListeningRecord | None:
    """Update a listening exercise, None if it does not exist."""
    with get_db() as conn:
        cursor = conn.execute(
            """
            UPDATE listening_exercises SET
                title = ?,
                description = ?,
                image_url = ?,
                audio_urls = ?,
                script = ?
            WHERE id = ?
            """,
            (
                title,
                description,
                image_url or None,
                json.dumps(audio_urls or []),
                script,
                exercise_id,
            ),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute(
            "SELECT * FROM listening_exercises WHERE id = ?", (exercise_id,)
        ).fetchone()

    logger.debug("listening.updated", exercise_id=exercise_id)
    return _row_to_record(row)


def delete_listening(exercise_id: int) -> bool:
    """Delete listening exercise. True if a row was removed."""
    with get_db() as conn:
        cursor = conn.execute(
            "DELETE FROM listening_exercises WHERE id = ?", (exercise_id,)
        )

    return cursor.rowcount > 0


def _row_to_record(row) -> ListeningRecord:
    return ListeningRecord(
        id=row["id"],
        chapter_id=row["chapter_id"],
        title=row["title"],
        description=row["description"],
        image_url=row["image_url"],
        audio_urls=json.loads(row["audio_urls"]) if row["audio_urls"] else [],
        script=row["script"],
    )
