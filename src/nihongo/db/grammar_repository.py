"""Repository functions for grammar_patterns table.

Grammar patterns are the only rows with a system-maintained field:
sort_order, the display position inside a chapter.

- insert_grammar_pattern appends: the new row gets the chapter's
  max(sort_order) + 1, or 0 for an empty chapter. The position is computed
  inside the INSERT statement itself.
- reorder_grammar_patterns rewrites sort_order = index for a full ordered
  id list inside one transaction. Ids belonging to another chapter are
  left untouched.

Lists are ordered by sort_order, then id.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import structlog

from nihongo.core.errors import InvalidArgument
from nihongo.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class GrammarPatternRecord:
    """Grammar pattern from database."""

    id: int
    chapter_id: int
    pattern: str | None
    explanation: str | None
    example: str | None
    image_urls: list[str] = field(default_factory=list)
    sort_order: int = 0


def list_grammar_patterns(chapter_id: int) -> list[GrammarPatternRecord]:
    """Get the patterns of a chapter in display order."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT * FROM grammar_patterns
            WHERE chapter_id = ?
            ORDER BY sort_order ASC, id ASC
            """,
            (chapter_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def get_grammar_pattern(pattern_id: int) -> GrammarPatternRecord | None:
    """Get grammar pattern by ID, None if missing."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM grammar_patterns WHERE id = ?", (pattern_id,)
        ).fetchone()

    return _row_to_record(row) if row is not None else None


def insert_grammar_pattern(
    chapter_id: int,
    pattern: str | None,
    explanation: str | None,
    example: str | None,
    image_urls: list[str] | None = None,
) -> GrammarPatternRecord:
    """Append a grammar pattern at the end of its chapter.

    Raises:
        StorageError: If chapter_id does not reference an existing chapter
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO grammar_patterns (
                chapter_id, pattern, explanation, example, image_urls, sort_order
            ) VALUES (
                ?, ?, ?, ?, ?,
                (SELECT COALESCE(MAX(sort_order), -1) + 1
                 FROM grammar_patterns WHERE chapter_id = ?)
            )
            """,
            (
                chapter_id,
                pattern,
                explanation,
                example,
                json.dumps(image_urls or []),
                chapter_id,
            ),
        )
        row = conn.execute(
            "SELECT * FROM grammar_patterns WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.debug(
        "grammar.inserted",
        pattern_id=row["id"],
        chapter_id=chapter_id,
        sort_order=row["sort_order"],
    )
    return _row_to_record(row)


def update_grammar_pattern(
    pattern_id: int,
    pattern: str | None,
    explanation: str | None,
    example: str | None,
    image_urls: list[str] | None = None,
) -> GrammarPatternRecord | None:
    """Update a grammar pattern's content. sort_order is not touched."""
    with get_db() as conn:
        cursor = conn.execute(
            """
            UPDATE grammar_patterns
            SET pattern = ?, explanation = ?, example = ?, image_urls = ?
            WHERE id = ?
            """,
            (pattern, explanation, example, json.dumps(image_urls or []), pattern_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute(
            "SELECT * FROM grammar_patterns WHERE id = ?", (pattern_id,)
        ).fetchone()

    logger.debug("grammar.updated", pattern_id=pattern_id)
    return _row_to_record(row)


def reorder_grammar_patterns(chapter_id: int, ordered_ids: list[int]) -> int:
    """Assign sort_order = position in ordered_ids for a chapter's patterns.

    All updates run in one transaction: a failure on any of them leaves
    every sort_order as it was.

    Args:
        chapter_id: Chapter whose patterns are reordered
        ordered_ids: Pattern ids in their new display order

    Returns:
        Number of patterns actually updated

    Raises:
        InvalidArgument: If chapter_id is missing or ordered_ids is empty
    """
    if not chapter_id or not ordered_ids:
        raise InvalidArgument("chapterId and a non-empty orderedIds list are required")

    updated = 0
    with get_db() as conn:
        for position, pattern_id in enumerate(ordered_ids):
            cursor = conn.execute(
                "UPDATE grammar_patterns SET sort_order = ? WHERE id = ? AND chapter_id = ?",
                (position, pattern_id, chapter_id),
            )
            updated += cursor.rowcount

    logger.info(
        "grammar.reordered",
        chapter_id=chapter_id,
        requested=len(ordered_ids),
        updated=updated,
    )
    return updated


def delete_grammar_pattern(pattern_id: int) -> bool:
    """Delete grammar pattern. True if a row was removed."""
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM grammar_patterns WHERE id = ?", (pattern_id,))

    return cursor.rowcount > 0


def _row_to_record(row) -> GrammarPatternRecord:
    return GrammarPatternRecord(
        id=row["id"],
        chapter_id=row["chapter_id"],
        pattern=row["pattern"],
        explanation=row["explanation"],
        example=row["example"],
        image_urls=json.loads(row["image_urls"]) if row["image_urls"] else [],
        sort_order=row["sort_order"],
    )
