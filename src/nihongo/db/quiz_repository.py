"""Repository functions for quizzes table.

Records always carry correct_answer; redaction for public endpoints happens
in the response schemas.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from nihongo.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class QuizRecord:
    """Quiz question from database."""

    id: int
    chapter_id: int
    question: str | None
    option_a: str | None
    option_b: str | None
    option_c: str | None
    option_d: str | None
    correct_answer: str | None
    answer_summary: str | None = None


def list_quizzes(chapter_id: int) -> list[QuizRecord]:
    """Get all quiz questions of a chapter in id order."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM quizzes WHERE chapter_id = ? ORDER BY id ASC",
            (chapter_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def get_quiz(quiz_id: int) -> QuizRecord | None:
    """Get quiz question by ID, None if missing."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM quizzes WHERE id = ?", (quiz_id,)).fetchone()

    return _row_to_record(row) if row is not None else None


def get_answer_key(chapter_id: int) -> dict[int, str | None]:
    """Map every quiz question id of a chapter to its correct answer."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT id, correct_answer FROM quizzes WHERE chapter_id = ? ORDER BY id ASC",
            (chapter_id,),
        ).fetchall()

    return {row["id"]: row["correct_answer"] for row in rows}


def insert_quiz(
    chapter_id: int,
    question: str | None,
    option_a: str | None,
    option_b: str | None,
    option_c: str | None,
    option_d: str | None,
    correct_answer: str,
    answer_summary: str | None = None,
) -> QuizRecord:
    """Insert a quiz question.

    Raises:
        StorageError: If chapter_id does not reference an existing chapter
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO quizzes (
                chapter_id, question, option_a, option_b, option_c, option_d,
                correct_answer, answer_summary
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                chapter_id,
                question,
                option_a,
                option_b,
                option_c,
                option_d,
                correct_answer,
                answer_summary,
            ),
        )
        row = conn.execute(
            "SELECT * FROM quizzes WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.debug("quizzes.inserted", quiz_id=row["id"], chapter_id=chapter_id)
    return _row_to_record(row)


def update_quiz(
    quiz_id: int,
    question: str | None,
    option_a: str | None,
    option_b: str | None,
    option_c: str | None,
    option_d: str | None,
    correct_answer: str,
    answer_summary: str | None = None,
) -> QuizRecord | None:
    """Update a quiz question, None if it does not exist."""
    with get_db() as conn:
        cursor = conn.execute(
            """
            UPDATE quizzes SET
                question = ?,
                option_a = ?,
                option_b = ?,
                option_c = ?,
                option_d = ?,
                correct_answer = ?,
                answer_summary = ?
            WHERE id = ?
            """,
            (
                question,
                option_a,
                option_b,
                option_c,
                option_d,
                correct_answer,
                answer_summary,
                quiz_id,
            ),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM quizzes WHERE id = ?", (quiz_id,)).fetchone()

    logger.debug("quizzes.updated", quiz_id=quiz_id)
    return _row_to_record(row)


def delete_quiz(quiz_id: int) -> bool:
    """Delete quiz question. True if a row was removed."""
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM quizzes WHERE id = ?", (quiz_id,))

    return cursor.rowcount > 0


def _row_to_record(row) -> QuizRecord:
    return QuizRecord(
        id=row["id"],
        chapter_id=row["chapter_id"],
        question=row["question"],
        option_a=row["option_a"],
        option_b=row["option_b"],
        option_c=row["option_c"],
        option_d=row["option_d"],
        correct_answer=row["correct_answer"],
        answer_summary=row["answer_summary"],
    )
