"""Tests for /analytics endpoints (auth disabled, stubbed repos)."""

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

os.environ["AUTH_ENABLED"] = "false"

from studyloop.main import app
from studyloop.models import Flashcard, ReviewEvent, UserStudyStats

USER_ID = "test-user"
NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def event(review_date: str, quality: int = 4, time_spent: int | None = 10) -> ReviewEvent:
    return ReviewEvent(
        userId=USER_ID,
        flashcardId="card-1",
        quality=quality,
        reviewDate=review_date,
        timeSpentSeconds=time_spent,
        previousInterval=1,
        newInterval=1,
        previousEasiness=2.5,
        newEasiness=2.5,
    )


@dataclass
class StubReviewRepo:
    events: list[ReviewEvent] = field(default_factory=list)

    def list_since(self, user_id: str, since_iso: str) -> list[ReviewEvent]:
        return [e for e in self.events if e.reviewDate >= since_iso]

    def list_review_dates(self, user_id: str, limit: int = 365) -> list[str]:
        return sorted((e.reviewDate for e in self.events), reverse=True)[:limit]

    def count(self, user_id: str) -> int:
        return len(self.events)


@dataclass
class StubFlashcardRepo:
    cards: list[Flashcard] = field(default_factory=list)

    def list_by_user(self, user_id: str, document_id: str | None = None) -> list[Flashcard]:
        return [c for c in self.cards if c.userId == user_id]


def flashcard(repetition: int, document_id: str | None = None) -> Flashcard:
    return Flashcard(userId=USER_ID, question="q", answer="a", repetition=repetition, documentId=document_id)


@dataclass
class StubUserStatsRepo:
    stats: UserStudyStats | None = None

    def get(self, user_id: str) -> UserStudyStats | None:
        return self.stats


@pytest.fixture
def repos(monkeypatch):
    from studyloop.routers import analytics as analytics_router

    review_repo = StubReviewRepo(
        events=[
            event("2026-01-01T08:00:00Z", quality=5, time_spent=6),
            event("2025-12-31T20:00:00Z", quality=1, time_spent=14),
            event("2025-12-31T21:00:00Z", quality=4, time_spent=None),
            event("2025-10-01T20:00:00Z", quality=0),
        ]
    )
    stats_repo = StubUserStatsRepo()
    monkeypatch.setattr(analytics_router, "get_review_repository", lambda: review_repo)
    monkeypatch.setattr(analytics_router, "get_user_stats_repository", lambda: stats_repo)
    monkeypatch.setattr(analytics_router, "utc_now", lambda: NOW)
    return review_repo, stats_repo


@pytest.fixture
def card_repo(monkeypatch):
    from studyloop.routers import analytics as analytics_router

    stub = StubFlashcardRepo()
    monkeypatch.setattr(analytics_router, "get_flashcard_repository", lambda: stub)
    return stub


@pytest.fixture
def client():
    return TestClient(app)


def test_performance_last_30_days(repos, client):
    resp = client.get("/analytics/performance", headers={"X-User-Id": USER_ID})

    assert resp.status_code == 200
    assert resp.json() == {
        "averageQuality": 3.33,
        "averageTime": 7,
        "totalReviews": 3,
        "accuracy": 67,
    }


def test_activity_counts_per_day(repos, client):
    resp = client.get("/analytics/activity?days=365", headers={"X-User-Id": USER_ID})

    assert resp.json() == [
        {"date": "2025-10-01", "count": 1},
        {"date": "2025-12-31", "count": 2},
        {"date": "2026-01-01", "count": 1},
    ]


def test_streak_uses_history_and_stored_longest(repos, client):
    _, stats_repo = repos
    stats_repo.stats = UserStudyStats(id=USER_ID, userId=USER_ID, longestStreakDays=9)

    data = client.get("/analytics/streak", headers={"X-User-Id": USER_ID}).json()

    assert data == {
        "currentStreak": 2,
        "longestStreak": 9,
        "lastReviewDate": "2026-01-01T08:00:00Z",
    }


def test_streak_without_reviews(repos, client):
    review_repo, _ = repos
    review_repo.events = []

    data = client.get("/analytics/streak", headers={"X-User-Id": USER_ID}).json()

    assert data == {"currentStreak": 0, "longestStreak": 0, "lastReviewDate": None}


def test_overview_counts_and_streaks(repos, card_repo, client):
    _, stats_repo = repos
    stats_repo.stats = UserStudyStats(id=USER_ID, userId=USER_ID, longestStreakDays=1, totalStudyTimeSeconds=300)
    card_repo.cards = [flashcard(0, "doc-1"), flashcard(4, "doc-1"), flashcard(2)]

    resp = client.get("/analytics/overview", headers={"X-User-Id": USER_ID})

    assert resp.status_code == 200
    assert resp.json() == {
        "documents": 1,
        "flashcards": 3,
        "reviews": 4,
        "masteredCards": 1,
        "totalStudyTime": 300,
        "currentStreak": 2,
        "longestStreak": 2,
    }


def test_overview_for_new_user(repos, card_repo, client):
    review_repo, _ = repos
    review_repo.events = []

    data = client.get("/analytics/overview", headers={"X-User-Id": USER_ID}).json()

    assert data["flashcards"] == 0
    assert data["reviews"] == 0
    assert data["totalStudyTime"] == 0
    assert data["currentStreak"] == 0


def test_study_time_minutes_per_day(repos, client):
    review_repo, _ = repos
    review_repo.events.append(event("2025-12-30T09:00:00Z", time_spent=150))

    resp = client.get("/analytics/study-time?days=3", headers={"X-User-Id": USER_ID})

    assert resp.status_code == 200
    assert resp.json() == [
        {"date": "2025-12-30", "minutes": 3},
        {"date": "2025-12-31", "minutes": 0},
        {"date": "2026-01-01", "minutes": 0},
    ]


def test_study_time_defaults_to_30_days(repos, client):
    data = client.get("/analytics/study-time", headers={"X-User-Id": USER_ID}).json()

    assert len(data) == 30
    assert data[0]["date"] == "2025-12-03"
    assert data[-1]["date"] == "2026-01-01"


def test_mastery_progress(card_repo, client):
    card_repo.cards = [flashcard(0), flashcard(1), flashcard(2), flashcard(3), flashcard(7)]

    resp = client.get("/analytics/mastery-progress", headers={"X-User-Id": USER_ID})

    assert resp.status_code == 200
    assert resp.json() == {"new": 1, "learning": 1, "familiar": 1, "mastered": 2}
