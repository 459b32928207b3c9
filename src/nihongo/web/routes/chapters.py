"""Chapter endpoints."""

from fastapi import APIRouter, Depends, status

from nihongo.core.errors import NotFound
from nihongo.db import chapters_repository
from nihongo.web.auth import require_session_for_api
from nihongo.web.schemas import AckResponse, ChapterCreate, ChapterResponse

router = APIRouter(prefix="/api/chapters", tags=["chapters"])


@router.get("", response_model=list[ChapterResponse])
def list_chapters() -> list[ChapterResponse]:
    """List all chapters."""
    return [
        ChapterResponse.model_validate(c) for c in chapters_repository.list_chapters()
    ]


@router.get("/{chapter_id}", response_model=ChapterResponse)
def get_chapter(chapter_id: int) -> ChapterResponse:
    """Get a specific chapter by ID."""
    chapter = chapters_repository.get_chapter(chapter_id)
    if chapter is None:
        raise NotFound("Chapter", chapter_id)
    return ChapterResponse.model_validate(chapter)


@router.post(
    "",
    response_model=ChapterResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session_for_api)],
)
def create_chapter(data: ChapterCreate) -> ChapterResponse:
    """Create a new chapter."""
    chapter = chapters_repository.insert_chapter(data.title, data.description)
    return ChapterResponse.model_validate(chapter)


@router.put(
    "/{chapter_id}",
    response_model=ChapterResponse,
    dependencies=[Depends(require_session_for_api)],
)
def update_chapter(chapter_id: int, data: ChapterCreate) -> ChapterResponse:
    """Update a chapter's title and description."""
    chapter = chapters_repository.update_chapter(chapter_id, data.title, data.description)
    if chapter is None:
        raise NotFound("Chapter", chapter_id)
    return ChapterResponse.model_validate(chapter)


@router.delete(
    "/{chapter_id}",
    response_model=AckResponse,
    dependencies=[Depends(require_session_for_api)],
)
def delete_chapter(chapter_id: int) -> AckResponse:
    """Delete a chapter together with all of its content."""
    chapters_repository.delete_chapter(chapter_id)
    return AckResponse(message="Chapter deleted")
