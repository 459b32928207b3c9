"""Quiz endpoints.

Learner routes (chapter list, submission) never expose correct_answer;
the admin list and entry routes do.
"""

from fastapi import APIRouter, Depends, status

from nihongo.core.errors import NotFound
from nihongo.core.scoring import SubmittedAnswer, score_quiz
from nihongo.db import quiz_repository
from nihongo.web.auth import require_session_for_api
from nihongo.web.schemas import (
    AckResponse,
    QuizCreate,
    QuizPublicResponse,
    QuizResponse,
    QuizUpdate,
    ScoreResponse,
    SubmissionRequest,
)

router = APIRouter(prefix="/api", tags=["quizzes"])


@router.get("/quizzes/{chapter_id}", response_model=list[QuizPublicResponse])
def list_quizzes(chapter_id: int) -> list[QuizPublicResponse]:
    """List a chapter's quiz questions without answers."""
    return [
        QuizPublicResponse.model_validate(q)
        for q in quiz_repository.list_quizzes(chapter_id)
    ]


@router.get(
    "/admin/quizzes/{chapter_id}",
    response_model=list[QuizResponse],
    dependencies=[Depends(require_session_for_api)],
)
def list_quizzes_admin(chapter_id: int) -> list[QuizResponse]:
    """List a chapter's quiz questions with answers."""
    return [QuizResponse.model_validate(q) for q in quiz_repository.list_quizzes(chapter_id)]


@router.get(
    "/quiz/entry/{quiz_id}",
    response_model=QuizResponse,
    dependencies=[Depends(require_session_for_api)],
)
def get_quiz(quiz_id: int) -> QuizResponse:
    """Get one quiz question for editing."""
    record = quiz_repository.get_quiz(quiz_id)
    if record is None:
        raise NotFound("Quiz", quiz_id)
    return QuizResponse.model_validate(record)


@router.post(
    "/quizzes",
    response_model=QuizResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session_for_api)],
)
def create_quiz(data: QuizCreate) -> QuizResponse:
    """Add a quiz question to a chapter."""
    record = quiz_repository.insert_quiz(
        chapter_id=data.chapter_id,
        question=data.question,
        option_a=data.option_a,
        option_b=data.option_b,
        option_c=data.option_c,
        option_d=data.option_d,
        correct_answer=data.correct_answer,
        answer_summary=data.answer_summary,
    )
    return QuizResponse.model_validate(record)


@router.put(
    "/quizzes/{quiz_id}",
    response_model=QuizResponse,
    dependencies=[Depends(require_session_for_api)],
)
def update_quiz(quiz_id: int, data: QuizUpdate) -> QuizResponse:
    """Update a quiz question."""
    record = quiz_repository.update_quiz(
        quiz_id,
        question=data.question,
        option_a=data.option_a,
        option_b=data.option_b,
        option_c=data.option_c,
        option_d=data.option_d,
        correct_answer=data.correct_answer,
        answer_summary=data.answer_summary,
    )
    if record is None:
        raise NotFound("Quiz", quiz_id)
    return QuizResponse.model_validate(record)


@router.delete(
    "/quizzes/{quiz_id}",
    response_model=AckResponse,
    dependencies=[Depends(require_session_for_api)],
)
def delete_quiz(quiz_id: int) -> AckResponse:
    """Delete a quiz question."""
    quiz_repository.delete_quiz(quiz_id)
    return AckResponse(message="Quiz question deleted")


@router.post("/submit-quiz/{chapter_id}", response_model=ScoreResponse)
def submit_quiz(chapter_id: int, submission: SubmissionRequest) -> ScoreResponse:
    """Score a learner's quiz answers for a chapter."""
    answers = [
        SubmittedAnswer(question_id=a.question_id, answer=a.answer)
        for a in submission.answers
    ]
    report = score_quiz(chapter_id, answers)
    return ScoreResponse.model_validate(report.to_dict())
