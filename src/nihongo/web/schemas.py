"""Pydantic schemas for Web API.

Request bodies and response models for every resource. Public and admin
variants of quiz and reading models differ only in the answer fields:
response_model filtering guarantees the public surface never carries
correct_answer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AnswerLetter = Literal["a", "b", "c", "d"]


# =============================================================================
# AUTH SCHEMAS
# =============================================================================


class LoginRequest(BaseModel):
    """Admin credentials."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Outcome of a login attempt."""

    success: bool
    message: str = ""


class AckResponse(BaseModel):
    """Acknowledgement for operations without a row to return."""

    success: bool = True
    message: str = ""


# =============================================================================
# CHAPTER SCHEMAS
# =============================================================================


class ChapterCreate(BaseModel):
    """Request body for creating or updating a chapter."""

    title: str = Field(..., min_length=1)
    description: str | None = None


class ChapterResponse(BaseModel):
    """Response for a chapter."""

    id: int
    title: str
    description: str | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# VOCABULARY SCHEMAS
# =============================================================================


class VocabularyCreate(BaseModel):
    """Request body for creating a vocabulary item."""

    chapter_id: int
    term: str
    meaning: str
    image_url: str | None = None


class VocabularyUpdate(BaseModel):
    """Request body for updating a vocabulary item."""

    term: str
    meaning: str
    image_url: str | None = None


class VocabularyResponse(BaseModel):
    """Response for a vocabulary item."""

    id: int
    chapter_id: int
    term: str
    meaning: str
    image_url: str | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# GRAMMAR SCHEMAS
# =============================================================================


class GrammarPatternUpdate(BaseModel):
    """Request body for updating a grammar pattern."""

    pattern: str | None = None
    explanation: str | None = None
    example: str | None = None
    image_urls: list[str] = Field(default_factory=list)


class GrammarPatternCreate(GrammarPatternUpdate):
    """Request body for appending a grammar pattern to a chapter."""

    chapter_id: int


class GrammarPatternResponse(BaseModel):
    """Response for a grammar pattern."""

    id: int
    chapter_id: int
    pattern: str | None = None
    explanation: str | None = None
    example: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    sort_order: int

    model_config = {"from_attributes": True}


class GrammarReorderRequest(BaseModel):
    """New display order of a chapter's grammar patterns."""

    model_config = ConfigDict(populate_by_name=True)

    chapter_id: int | None = Field(default=None, alias="chapterId")
    ordered_ids: list[int] = Field(default_factory=list, alias="orderedIds")


class GrammarReorderResponse(AckResponse):
    """Acknowledgement for a reorder, with the number of rows moved."""

    updated: int = 0


# =============================================================================
# QUIZ SCHEMAS
# =============================================================================


class QuizUpdate(BaseModel):
    """Request body for updating a quiz question."""

    question: str | None = None
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None
    correct_answer: AnswerLetter
    answer_summary: str | None = None


class QuizCreate(QuizUpdate):
    """Request body for creating a quiz question."""

    chapter_id: int


class QuizPublicResponse(BaseModel):
    """Quiz question as shown to learners: no answer fields."""

    id: int
    chapter_id: int
    question: str | None = None
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None

    model_config = {"from_attributes": True}


class QuizResponse(QuizPublicResponse):
    """Quiz question with its answer, for admin views."""

    correct_answer: str | None = None
    answer_summary: str | None = None


# =============================================================================
# READING SCHEMAS
# =============================================================================


class ReadingQuestionCreate(BaseModel):
    """A question supplied with a passage."""

    question_text: str | None = None
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None
    correct_answer: AnswerLetter


class PassageUpdate(BaseModel):
    """Request body for replacing a passage and its question set."""

    passage_content: str | None = None
    questions: list[ReadingQuestionCreate] = Field(default_factory=list)


class PassageCreate(PassageUpdate):
    """Request body for creating a passage with its questions."""

    chapter_id: int


class ReadingQuestionPublicResponse(BaseModel):
    """Reading question as shown to learners."""

    id: int
    question_text: str | None = None
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None

    model_config = {"from_attributes": True}


class ReadingQuestionResponse(ReadingQuestionPublicResponse):
    """Reading question with owner and answer, for admin views."""

    passage_id: int
    correct_answer: str | None = None


class PassagePublicResponse(BaseModel):
    """Passage with learner-facing questions."""

    id: int
    chapter_id: int
    passage_content: str | None = None
    questions: list[ReadingQuestionPublicResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PassageResponse(BaseModel):
    """Passage with full questions, for admin views."""

    id: int
    chapter_id: int
    passage_content: str | None = None
    questions: list[ReadingQuestionResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


# =============================================================================
# LISTENING SCHEMAS
# =============================================================================


class ListeningUpdate(BaseModel):
    """Request body for updating a listening exercise."""

    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    audio_urls: list[str] = Field(default_factory=list)
    script: str | None = None


class ListeningCreate(ListeningUpdate):
    """Request body for creating a listening exercise."""

    chapter_id: int


class ListeningResponse(BaseModel):
    """Response for a listening exercise."""

    id: int
    chapter_id: int
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    audio_urls: list[str] = Field(default_factory=list)
    script: str | None = None

    model_config = {"from_attributes": True}


# =============================================================================
# SCORING SCHEMAS
# =============================================================================


class SubmittedAnswerRequest(BaseModel):
    """One answer of a submission."""

    model_config = ConfigDict(populate_by_name=True)

    question_id: int = Field(..., alias="questionId")
    answer: str | None = None


class SubmissionRequest(BaseModel):
    """Answers submitted for a chapter's quiz or reading section."""

    answers: list[SubmittedAnswerRequest] = Field(default_factory=list)


class QuestionResultResponse(BaseModel):
    """Correctness of one answered question."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    question_id: int = Field(..., alias="questionId")
    is_correct: bool = Field(..., alias="isCorrect")
    correct_answer: str | None = Field(default=None, alias="correctAnswer")


class ScoreResponse(BaseModel):
    """Score of a submission."""

    score: int
    total: int
    results: list[QuestionResultResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
