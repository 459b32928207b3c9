"""Repository functions for reading_passages and reading_questions tables.

A passage owns its questions: they are deleted with it, and saving a
passage replaces its whole question set.

Passage trees are assembled with a fixed number of queries: one for the
passages, one for all of their questions, grouped in memory. A passage
without questions gets an explicit empty list.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field

import structlog

from nihongo.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class QuestionDraft:
    """A reading question as supplied by the client, before it has an id."""

    question_text: str | None
    option_a: str | None
    option_b: str | None
    option_c: str | None
    option_d: str | None
    correct_answer: str


@dataclass
class ReadingQuestionRecord:
    """Reading question from database."""

    id: int
    passage_id: int
    question_text: str | None
    option_a: str | None
    option_b: str | None
    option_c: str | None
    option_d: str | None
    correct_answer: str | None


@dataclass
class PassageRecord:
    """Reading passage with its questions, sorted by id."""

    id: int
    chapter_id: int
    passage_content: str | None
    questions: list[ReadingQuestionRecord] = field(default_factory=list)


def list_passages(chapter_id: int) -> list[PassageRecord]:
    """Get every passage of a chapter, in id order, with its questions."""
    with get_db() as conn:
        return _load_passages(conn, "p.chapter_id = ?", (chapter_id,))


def get_passage(passage_id: int) -> PassageRecord | None:
    """Get a single passage with its questions, None if missing."""
    with get_db() as conn:
        passages = _load_passages(conn, "p.id = ?", (passage_id,))

    return passages[0] if passages else None


def get_answer_key(chapter_id: int) -> dict[int, str | None]:
    """Map every reading question id of a chapter to its correct answer."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT q.id, q.correct_answer
            FROM reading_questions q
            JOIN reading_passages p ON q.passage_id = p.id
            WHERE p.chapter_id = ?
            ORDER BY q.id ASC
            """,
            (chapter_id,),
        ).fetchall()

    return {row["id"]: row["correct_answer"] for row in rows}


def create_passage(
    chapter_id: int,
    passage_content: str | None,
    questions: list[QuestionDraft],
) -> PassageRecord:
    """Insert a passage and all of its questions in one transaction.

    Raises:
        StorageError: If chapter_id does not reference an existing chapter
            or any question is rejected; nothing is written in that case
    """
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO reading_passages (chapter_id, passage_content) VALUES (?, ?)",
            (chapter_id, passage_content),
        )
        passage_id = cursor.lastrowid
        _insert_questions(conn, passage_id, questions)
        passage = _load_passages(conn, "p.id = ?", (passage_id,))[0]

    logger.info(
        "reading.passage_created",
        passage_id=passage_id,
        chapter_id=chapter_id,
        questions=len(questions),
    )
    return passage


def replace_passage(
    passage_id: int,
    passage_content: str | None,
    questions: list[QuestionDraft],
) -> PassageRecord | None:
    """Update a passage's content and replace its question set wholesale.

    Content update, deletion of the old questions and insertion of the new
    ones share one transaction.

    Returns:
        The updated PassageRecord, None if the passage does not exist
    """
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE reading_passages SET passage_content = ? WHERE id = ?",
            (passage_content, passage_id),
        )
        if cursor.rowcount == 0:
            return None
        conn.execute("DELETE FROM reading_questions WHERE passage_id = ?", (passage_id,))
        _insert_questions(conn, passage_id, questions)
        passage = _load_passages(conn, "p.id = ?", (passage_id,))[0]

    logger.info(
        "reading.passage_replaced",
        passage_id=passage_id,
        questions=len(questions),
    )
    return passage


def delete_passage(passage_id: int) -> bool:
    """Delete a passage and, through the foreign key, its questions."""
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM reading_passages WHERE id = ?", (passage_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.info("reading.passage_deleted", passage_id=passage_id)

    return deleted


def _insert_questions(
    conn: sqlite3.Connection, passage_id: int, questions: list[QuestionDraft]
) -> None:
    conn.executemany(
        """
        INSERT INTO reading_questions (
            passage_id, question_text, option_a, option_b, option_c, option_d,
            correct_answer
        ) VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                passage_id,
                q.question_text,
                q.option_a,
                q.option_b,
                q.option_c,
                q.option_d,
                q.correct_answer,
            )
            for q in questions
        ],
    )


def _load_passages(
    conn: sqlite3.Connection, where: str, params: tuple
) -> list[PassageRecord]:
    """Load passages matching `where` (aliased p) and attach their questions."""
    passage_rows = conn.execute(
        f"SELECT p.* FROM reading_passages p WHERE {where} ORDER BY p.id ASC",
        params,
    ).fetchall()

    passages = {
        row["id"]: PassageRecord(
            id=row["id"],
            chapter_id=row["chapter_id"],
            passage_content=row["passage_content"],
        )
        for row in passage_rows
    }
    if not passages:
        return []

    question_rows = conn.execute(
        f"""
        SELECT q.* FROM reading_questions q
        JOIN reading_passages p ON q.passage_id = p.id
        WHERE {where}
        ORDER BY q.id ASC
        """,
        params,
    ).fetchall()

    for row in question_rows:
        passages[row["passage_id"]].questions.append(_row_to_question(row))

    return list(passages.values())


def _row_to_question(row) -> ReadingQuestionRecord:
    return ReadingQuestionRecord(
        id=row["id"],
        passage_id=row["passage_id"],
        question_text=row["question_text"],
        option_a=row["option_a"],
        option_b=row["option_b"],
        option_c=row["option_c"],
        option_d=row["option_d"],
        correct_answer=row["correct_answer"],
    )
