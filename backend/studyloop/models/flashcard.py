"""Flashcard models for API requests and responses."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from studyloop.srs.sm2 import DEFAULT_EASINESS_FACTOR, DEFAULT_INTERVAL_DAYS
from studyloop.srs.time import utc_now_iso


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


class FlashcardBase(BaseModel):
    """Base flashcard model with common fields."""

    question: str = Field(..., min_length=1, max_length=2000, description="Prompt side of the card")
    answer: str = Field(..., min_length=1, max_length=2000, description="Answer side of the card")


class FlashcardCreate(FlashcardBase):
    """Model for creating a new flashcard."""

    documentId: str | None = Field(None, description="Source document the card was generated from")


class FlashcardUpdate(BaseModel):
    """Model for updating an existing flashcard."""

    question: str | None = Field(None, min_length=1, max_length=2000)
    answer: str | None = Field(None, min_length=1, max_length=2000)

    @field_validator("question", "answer")
    @classmethod
    def reject_null(cls, value: str | None) -> str | None:
        """Omit a field to leave it unchanged; an explicit null is not a valid card side."""
        if value is None:
            raise ValueError("must not be null")
        return value


class Flashcard(FlashcardBase):
    """Full flashcard model as stored in the database."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    userId: str = Field(..., description="Owner user ID (partition key)")
    documentId: str | None = Field(None, description="Source document ID")
    createdAt: str = Field(default_factory=utc_now_iso, description="Creation timestamp")
    updatedAt: str = Field(default_factory=utc_now_iso, description="Last update timestamp")

    # Review state (persisted)
    repetition: int = Field(0, ge=0, description="Consecutive passing reviews since the last lapse")
    easinessFactor: float = Field(DEFAULT_EASINESS_FACTOR, description="SM-2 easiness factor (min 1.3)")
    intervalDays: int = Field(DEFAULT_INTERVAL_DAYS, description="Days until the next review")
    nextReviewDate: str | None = Field(
        None, description="Midnight UTC of the due day; null means new and due now"
    )
    lastReviewedAt: str | None = Field(None, description="Last review timestamp (UTC ISO Z)")
    timesReviewed: int = Field(0, ge=0, description="Total number of reviews")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174001",
                "userId": "user-001",
                "documentId": "123e4567-e89b-12d3-a456-426614174000",
                "question": "What does SM-2 stand for?",
                "answer": "SuperMemo 2",
                "createdAt": "2025-01-01T00:00:00Z",
                "updatedAt": "2025-01-01T00:00:00Z",
                "repetition": 0,
                "easinessFactor": 2.5,
                "intervalDays": 1,
                "nextReviewDate": None,
            }
        }
    )


class FlashcardResponse(FlashcardBase):
    """Flashcard response model returned by API."""

    id: str
    userId: str
    documentId: str | None
    createdAt: str
    updatedAt: str

    repetition: int
    easinessFactor: float
    intervalDays: int
    nextReviewDate: str | None
    lastReviewedAt: str | None
    timesReviewed: int


class FlashcardListResponse(BaseModel):
    """Response containing a list of flashcards."""

    flashcards: list[FlashcardResponse]
    count: int
