"""Grammar pattern endpoints, including the reorder operation."""

from fastapi import APIRouter, Depends, status

from nihongo.core.errors import NotFound
from nihongo.db import grammar_repository
from nihongo.web.auth import require_session_for_api
from nihongo.web.schemas import (
    AckResponse,
    GrammarPatternCreate,
    GrammarPatternResponse,
    GrammarPatternUpdate,
    GrammarReorderRequest,
    GrammarReorderResponse,
)

router = APIRouter(prefix="/api/grammar", tags=["grammar"])


@router.post(
    "",
    response_model=GrammarPatternResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session_for_api)],
)
def create_grammar_pattern(data: GrammarPatternCreate) -> GrammarPatternResponse:
    """Append a grammar pattern at the end of its chapter."""
    record = grammar_repository.insert_grammar_pattern(
        chapter_id=data.chapter_id,
        pattern=data.pattern,
        explanation=data.explanation,
        example=data.example,
        image_urls=data.image_urls,
    )
    return GrammarPatternResponse.model_validate(record)


@router.post(
    "/reorder",
    response_model=GrammarReorderResponse,
    dependencies=[Depends(require_session_for_api)],
)
def reorder_grammar_patterns(data: GrammarReorderRequest) -> GrammarReorderResponse:
    """Save a new display order for a chapter's grammar patterns."""
    updated = grammar_repository.reorder_grammar_patterns(data.chapter_id, data.ordered_ids)
    return GrammarReorderResponse(message="Order saved", updated=updated)


@router.get(
    "/entry/{pattern_id}",
    response_model=GrammarPatternResponse,
    dependencies=[Depends(require_session_for_api)],
)
def get_grammar_pattern(pattern_id: int) -> GrammarPatternResponse:
    """Get one grammar pattern for editing."""
    record = grammar_repository.get_grammar_pattern(pattern_id)
    if record is None:
        raise NotFound("Grammar pattern", pattern_id)
    return GrammarPatternResponse.model_validate(record)


@router.get("/{chapter_id}", response_model=list[GrammarPatternResponse])
def list_grammar_patterns(chapter_id: int) -> list[GrammarPatternResponse]:
    """List a chapter's grammar patterns in display order."""
    return [
        GrammarPatternResponse.model_validate(p)
        for p in grammar_repository.list_grammar_patterns(chapter_id)
    ]


@router.put(
    "/{pattern_id}",
    response_model=GrammarPatternResponse,
    dependencies=[Depends(require_session_for_api)],
)
def update_grammar_pattern(
    pattern_id: int, data: GrammarPatternUpdate
) -> GrammarPatternResponse:
    """Update a grammar pattern; its position is kept."""
    record = grammar_repository.update_grammar_pattern(
        pattern_id,
        pattern=data.pattern,
        explanation=data.explanation,
        example=data.example,
        image_urls=data.image_urls,
    )
    if record is None:
        raise NotFound("Grammar pattern", pattern_id)
    return GrammarPatternResponse.model_validate(record)


@router.delete(
    "/{pattern_id}",
    response_model=AckResponse,
    dependencies=[Depends(require_session_for_api)],
)
def delete_grammar_pattern(pattern_id: int) -> AckResponse:
    """Delete a grammar pattern."""
    grammar_repository.delete_grammar_pattern(pattern_id)
    return AckResponse(message="Grammar pattern deleted")
