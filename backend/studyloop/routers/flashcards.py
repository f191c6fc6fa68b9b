"""Flashcards API router."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from studyloop.auth import CurrentUser, get_current_user
from studyloop.models import (
    FlashcardCreate,
    FlashcardListResponse,
    FlashcardResponse,
    FlashcardUpdate,
)
from studyloop.repositories import FlashcardNotFoundError, get_flashcard_repository

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


def _not_found(flashcard_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Flashcard with ID {flashcard_id} not found",
    )


@router.get("", response_model=FlashcardListResponse)
async def list_flashcards(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    documentId: str | None = None,
) -> FlashcardListResponse:
    """List the current user's flashcards."""
    repo = get_flashcard_repository()
    flashcards = repo.list_by_user(user.user_id, document_id=documentId)
    return FlashcardListResponse(
        flashcards=[FlashcardResponse(**card.model_dump()) for card in flashcards],
        count=len(flashcards),
    )


@router.get("/{flashcard_id}", response_model=FlashcardResponse)
async def get_flashcard(
    flashcard_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> FlashcardResponse:
    """Get a specific flashcard by ID."""
    repo = get_flashcard_repository()
    try:
        flashcard = repo.get_by_id(flashcard_id, user.user_id)
    except FlashcardNotFoundError:
        raise _not_found(flashcard_id)
    return FlashcardResponse(**flashcard.model_dump())


@router.post("", response_model=FlashcardResponse, status_code=status.HTTP_201_CREATED)
async def create_flashcard(
    flashcard_create: FlashcardCreate, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> FlashcardResponse:
    """Create a new flashcard, due for review immediately."""
    repo = get_flashcard_repository()
    flashcard = repo.create(user.user_id, flashcard_create)
    return FlashcardResponse(**flashcard.model_dump())


@router.put("/{flashcard_id}", response_model=FlashcardResponse)
async def update_flashcard(
    flashcard_id: str,
    flashcard_update: FlashcardUpdate,
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FlashcardResponse:
    """Update a flashcard's question or answer. Review state is untouched."""
    repo = get_flashcard_repository()
    try:
        flashcard = repo.update(flashcard_id, user.user_id, flashcard_update)
    except FlashcardNotFoundError:
        raise _not_found(flashcard_id)
    return FlashcardResponse(**flashcard.model_dump())


@router.delete("/{flashcard_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_flashcard(
    flashcard_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> None:
    """Delete a flashcard."""
    repo = get_flashcard_repository()
    try:
        repo.delete(flashcard_id, user.user_id)
    except FlashcardNotFoundError:
        raise _not_found(flashcard_id)
