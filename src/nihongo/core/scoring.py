"""Scoring of quiz and reading submissions.

Responsibilities:
- Load the authoritative answer key of a chapter (quizzes or reading
  questions reached through the chapter's passages)
- Compare each submitted answer with the key, case-sensitively
- Report score, total and per-question correctness

Nothing is persisted: scoring is a read followed by a pure computation.

Rules:
- An answer whose question id is not in the chapter's key is skipped: it
  appears in no result and does not change the score.
- total is the number of questions in the key, not the number of answers
  submitted.
- results keep the submission order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

import structlog

from nihongo.db import quiz_repository, reading_repository

logger = structlog.get_logger(__name__)


@dataclass
class SubmittedAnswer:
    """One answer sent by the client."""

    question_id: int
    answer: str | None


@dataclass
class QuestionResult:
    """Correctness of one answered question."""

    question_id: int
    is_correct: bool
    correct_answer: str | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape returned by the API."""
        return {
            "questionId": self.question_id,
            "isCorrect": self.is_correct,
            "correctAnswer": self.correct_answer,
        }


@dataclass
class ScoreReport:
    """Outcome of scoring a submission."""

    score: int
    total: int
    results: list[QuestionResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "total": self.total,
            "results": [r.to_dict() for r in self.results],
        }


def score_answers(
    answer_key: dict[int, str | None], answers: Iterable[SubmittedAnswer]
) -> ScoreReport:
    """Score answers against an answer key.

    Args:
        answer_key: Question id -> correct option letter
        answers: Submitted answers, in submission order

    Returns:
        ScoreReport with one result per answer whose question is in the key
    """
    score = 0
    results: list[QuestionResult] = []

    for submitted in answers:
        if submitted.question_id not in answer_key:
            continue
        correct = answer_key[submitted.question_id]

        is_correct = submitted.answer == correct
        if is_correct:
            score += 1
        results.append(
            QuestionResult(
                question_id=submitted.question_id,
                is_correct=is_correct,
                correct_answer=correct,
            )
        )

    return ScoreReport(score=score, total=len(answer_key), results=results)


def score_quiz(chapter_id: int, answers: list[SubmittedAnswer]) -> ScoreReport:
    """Score a quiz submission for a chapter."""
    report = score_answers(quiz_repository.get_answer_key(chapter_id), answers)
    logger.info(
        "scoring.quiz",
        chapter_id=chapter_id,
        submitted=len(answers),
        score=report.score,
        total=report.total,
    )
    return report


def score_reading(chapter_id: int, answers: list[SubmittedAnswer]) -> ScoreReport:
    """Score a reading comprehension submission for a chapter."""
    report = score_answers(reading_repository.get_answer_key(chapter_id), answers)
    logger.info(
        "scoring.reading",
        chapter_id=chapter_id,
        submitted=len(answers),
        score=report.score,
        total=report.total,
    )
    return report
