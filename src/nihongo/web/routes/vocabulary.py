"""Vocabulary endpoints."""

from fastapi import APIRouter, Depends, status

from nihongo.core.errors import NotFound
from nihongo.db import vocabulary_repository
from nihongo.web.auth import require_session_for_api
from nihongo.web.schemas import (
    AckResponse,
    VocabularyCreate,
    VocabularyResponse,
    VocabularyUpdate,
)

router = APIRouter(prefix="/api", tags=["vocabulary"])


@router.get("/vocabularies/{chapter_id}", response_model=list[VocabularyResponse])
def list_vocabulary(chapter_id: int) -> list[VocabularyResponse]:
    """List the vocabulary of a chapter."""
    return [
        VocabularyResponse.model_validate(v)
        for v in vocabulary_repository.list_vocabulary(chapter_id)
    ]


@router.get(
    "/vocabulary/{vocabulary_id}",
    response_model=VocabularyResponse,
    dependencies=[Depends(require_session_for_api)],
)
def get_vocabulary(vocabulary_id: int) -> VocabularyResponse:
    """Get one vocabulary item for editing."""
    item = vocabulary_repository.get_vocabulary(vocabulary_id)
    if item is None:
        raise NotFound("Vocabulary", vocabulary_id)
    return VocabularyResponse.model_validate(item)


@router.post(
    "/vocabularies",
    response_model=VocabularyResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session_for_api)],
)
def create_vocabulary(data: VocabularyCreate) -> VocabularyResponse:
    """Add a vocabulary item to a chapter."""
    item = vocabulary_repository.insert_vocabulary(
        chapter_id=data.chapter_id,
        term=data.term,
        meaning=data.meaning,
        image_url=data.image_url,
    )
    return VocabularyResponse.model_validate(item)


@router.put(
    "/vocabularies/{vocabulary_id}",
    response_model=VocabularyResponse,
    dependencies=[Depends(require_session_for_api)],
)
def update_vocabulary(vocabulary_id: int, data: VocabularyUpdate) -> VocabularyResponse:
    """Update a vocabulary item."""
    item = vocabulary_repository.update_vocabulary(
        vocabulary_id,
        term=data.term,
        meaning=data.meaning,
        image_url=data.image_url,
    )
    if item is None:
        raise NotFound("Vocabulary", vocabulary_id)
    return VocabularyResponse.model_validate(item)


@router.delete(
    "/vocabularies/{vocabulary_id}",
    response_model=AckResponse,
    dependencies=[Depends(require_session_for_api)],
)
def delete_vocabulary(vocabulary_id: int) -> AckResponse:
    """Delete a vocabulary item."""
    vocabulary_repository.delete_vocabulary(vocabulary_id)
    return AckResponse(message="Vocabulary deleted")
