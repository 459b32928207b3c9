"""Reading (passage + questions) endpoints.

Saving a passage replaces its whole question set in one transaction.
"""

from fastapi import APIRouter, Depends, status

from nihongo.core.errors import NotFound
from nihongo.core.scoring import SubmittedAnswer, score_reading
from nihongo.db import reading_repository
from nihongo.db.reading_repository import QuestionDraft
from nihongo.web.auth import require_session_for_api
from nihongo.web.schemas import (
    AckResponse,
    PassageCreate,
    PassagePublicResponse,
    PassageResponse,
    PassageUpdate,
    ReadingQuestionCreate,
    ScoreResponse,
    SubmissionRequest,
)

router = APIRouter(prefix="/api", tags=["reading"])


def _to_drafts(questions: list[ReadingQuestionCreate]) -> list[QuestionDraft]:
    return [
        QuestionDraft(
            question_text=q.question_text,
            option_a=q.option_a,
            option_b=q.option_b,
            option_c=q.option_c,
            option_d=q.option_d,
            correct_answer=q.correct_answer,
        )
        for q in questions
    ]


@router.get("/reading/{chapter_id}", response_model=list[PassagePublicResponse])
def list_passages(chapter_id: int) -> list[PassagePublicResponse]:
    """List a chapter's passages with questions, without answers."""
    return [
        PassagePublicResponse.model_validate(p)
        for p in reading_repository.list_passages(chapter_id)
    ]


@router.get(
    "/admin/reading/{chapter_id}",
    response_model=list[PassageResponse],
    dependencies=[Depends(require_session_for_api)],
)
def list_passages_admin(chapter_id: int) -> list[PassageResponse]:
    """List a chapter's passages with full questions."""
    return [
        PassageResponse.model_validate(p)
        for p in reading_repository.list_passages(chapter_id)
    ]


@router.post(
    "/reading/passage",
    response_model=PassageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session_for_api)],
)
def create_passage(data: PassageCreate) -> PassageResponse:
    """Create a passage together with its questions."""
    passage = reading_repository.create_passage(
        chapter_id=data.chapter_id,
        passage_content=data.passage_content,
        questions=_to_drafts(data.questions),
    )
    return PassageResponse.model_validate(passage)


@router.get(
    "/reading/passage/{passage_id}",
    response_model=PassageResponse,
    dependencies=[Depends(require_session_for_api)],
)
def get_passage(passage_id: int) -> PassageResponse:
    """Get one passage with its questions for editing."""
    passage = reading_repository.get_passage(passage_id)
    if passage is None:
        raise NotFound("Passage", passage_id)
    return PassageResponse.model_validate(passage)


@router.put(
    "/reading/passage/{passage_id}",
    response_model=PassageResponse,
    dependencies=[Depends(require_session_for_api)],
)
def update_passage(passage_id: int, data: PassageUpdate) -> PassageResponse:
    """Replace a passage's content and question set."""
    passage = reading_repository.replace_passage(
        passage_id,
        passage_content=data.passage_content,
        questions=_to_drafts(data.questions),
    )
    if passage is None:
        raise NotFound("Passage", passage_id)
    return PassageResponse.model_validate(passage)


@router.delete(
    "/reading/passage/{passage_id}",
    response_model=AckResponse,
    dependencies=[Depends(require_session_for_api)],
)
def delete_passage(passage_id: int) -> AckResponse:
    """Delete a passage and its questions."""
    reading_repository.delete_passage(passage_id)
    return AckResponse(message="Passage and its questions deleted")


@router.post("/submit-reading/{chapter_id}", response_model=ScoreResponse)
def submit_reading(chapter_id: int, submission: SubmissionRequest) -> ScoreResponse:
    """Score a learner's reading answers for a chapter."""
    answers = [
        SubmittedAnswer(question_id=a.question_id, answer=a.answer)
        for a in submission.answers
    ]
    report = score_reading(chapter_id, answers)
    return ScoreResponse.model_validate(report.to_dict())
