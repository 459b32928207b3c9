"""Listening exercise endpoints."""

from fastapi import APIRouter, Depends, status

from nihongo.core.errors import NotFound
from nihongo.db import listening_repository
from nihongo.web.auth import require_session_for_api
from nihongo.web.schemas import (
    AckResponse,
    ListeningCreate,
    ListeningResponse,
    ListeningUpdate,
)

router = APIRouter(prefix="/api", tags=["listening"])


@router.post(
    "/listening",
    response_model=ListeningResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session_for_api)],
)
def create_listening(data: ListeningCreate) -> ListeningResponse:
    """Add a listening exercise to a chapter."""
    record = listening_repository.insert_listening(
        chapter_id=data.chapter_id,
        title=data.title,
        description=data.description,
        image_url=data.image_url,
        audio_urls=data.audio_urls,
        script=data.script,
    )
    return ListeningResponse.model_validate(record)


@router.put(
    "/listening/{exercise_id}",
    response_model=ListeningResponse,
    dependencies=[Depends(require_session_for_api)],
)
def update_listening(exercise_id: int, data: ListeningUpdate) -> ListeningResponse:
    """Update a listening exercise."""
    record = listening_repository.update_listening(
        exercise_id,
        title=data.title,
        description=data.description,
        image_url=data.image_url,
        audio_urls=data.audio_urls,
        script=data.script,
    )
    if record is None:
        raise NotFound("Listening exercise", exercise_id)
    return ListeningResponse.model_validate(record)


@router.get("/listening/{chapter_id}", response_model=list[ListeningResponse])
def list_listening(chapter_id: int) -> list[ListeningResponse]:
    """List a chapter's listening exercises."""
    return [
        ListeningResponse.model_validate(e)
        for e in listening_repository.list_listening(chapter_id)
    ]


@router.get(
    "/admin/listening/{chapter_id}",
    response_model=list[ListeningResponse],
    dependencies=[Depends(require_session_for_api)],
)
def list_listening_admin(chapter_id: int) -> list[ListeningResponse]:
    """Admin listing of a chapter's listening exercises."""
    return list_listening(chapter_id)


@router.get(
    "/listening/entry/{exercise_id}",
    response_model=ListeningResponse,
    dependencies=[Depends(require_session_for_api)],
)
def get_listening(exercise_id: int) -> ListeningResponse:
    """Get one listening exercise for editing."""
    record = listening_repository.get_listening(exercise_id)
    if record is None:
        raise NotFound("Listening exercise", exercise_id)
    return ListeningResponse.model_validate(record)


@router.delete(
    "/listening/{exercise_id}",
    response_model=AckResponse,
    dependencies=[Depends(require_session_for_api)],
)
def delete_listening(exercise_id: int) -> AckResponse:
    """Delete a listening exercise."""
    listening_repository.delete_listening(exercise_id)
    return AckResponse(message="Listening exercise deleted")
