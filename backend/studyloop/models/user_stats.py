"""Per-user study totals."""

from pydantic import BaseModel, Field

from studyloop.srs.streak import StreakTotals
from studyloop.srs.time import to_date, utc_now_iso


class UserStudyStats(BaseModel):
    """Aggregated study progress, one document per user (id == userId)."""

    id: str
    userId: str
    totalReviews: int = 0
    cardsMastered: int = 0
    currentStreakDays: int = 0
    longestStreakDays: int = 0
    lastReviewDate: str | None = Field(None, description="UTC calendar day of the last review (YYYY-MM-DD)")
    totalStudyTimeSeconds: int = 0
    createdAt: str = Field(default_factory=utc_now_iso)
    updatedAt: str = Field(default_factory=utc_now_iso)

    @classmethod
    def empty(cls, user_id: str) -> "UserStudyStats":
        return cls(id=user_id, userId=user_id)

    def to_totals(self) -> StreakTotals:
        return StreakTotals(
            total_reviews=self.totalReviews,
            cards_mastered=self.cardsMastered,
            current_streak_days=self.currentStreakDays,
            longest_streak_days=self.longestStreakDays,
            last_review_date=to_date(self.lastReviewDate) if self.lastReviewDate else None,
            total_study_time_seconds=self.totalStudyTimeSeconds,
        )

    def with_totals(self, totals: StreakTotals) -> "UserStudyStats":
        """Return a copy carrying the given totals and a fresh updatedAt."""
        return self.model_copy(
            update={
                "totalReviews": totals.total_reviews,
                "cardsMastered": totals.cards_mastered,
                "currentStreakDays": totals.current_streak_days,
                "longestStreakDays": totals.longest_streak_days,
                "lastReviewDate": (
                    totals.last_review_date.isoformat() if totals.last_review_date else None
                ),
                "totalStudyTimeSeconds": totals.total_study_time_seconds,
                "updatedAt": utc_now_iso(),
            }
        )
