"""
Pytest configuration and fixtures for tests.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from datetime import date
from typing import Optional

from flashlearn.models.flashcard import Flashcard


@pytest.fixture
def mock_settings():
    """Mock settings for tests."""
    settings = MagicMock()
    settings.COSMOS_DB_ENDPOINT = "https://test.documents.azure.com"
    settings.COSMOS_DB_KEY = "test-cosmos-key"
    settings.COSMOS_DB_DATABASE_NAME = "test_db"
    settings.DISTRACTOR_COUNT = 3
    settings.DISTRACTOR_SIMILARITY_THRESHOLD = 3
    settings.WIDGET_TIMEZONE = None
    settings.WIDGET_EXHAUSTED_MESSAGE = "You have seen all the suitable words for widgets."
    return settings


@pytest.fixture
def mock_cosmos_service():
    """Mock Cosmos DB service."""
    service = AsyncMock()
    service.get_flashcard.return_value = None
    service.get_topic_flashcards.return_value = []
    service.get_flashcard_progress.return_value = None
    service.get_daily_session.return_value = None
    service.query_eligible_spotlight_candidate.return_value = None
    service.get_user_streak.return_value = None
    service.get_widget_history.return_value = []
    return service


def make_card(card_id: str, word: str, part_of_speech: str = "NOUN", **extra) -> Flashcard:
    """Build a flashcard with sensible defaults."""
    return Flashcard(
        id=card_id,
        topic_id=extra.pop("topic_id", "topic_1"),
        word=word,
        part_of_speech=part_of_speech,
        definition=extra.pop("definition", f"Definition of {word}"),
        example_sentence=extra.pop("example_sentence", f"The {word} is here."),
        **extra
    )


def card_document(card: Flashcard) -> dict:
    """Stored (camelCase) form of a flashcard."""
    return {
        "id": card.id,
        "topicId": card.topic_id,
        "word": card.word,
        "ipa": card.ipa,
        "partOfSpeech": card.part_of_speech,
        "definition": card.definition,
        "exampleSentence": card.example_sentence,
        "pronunciationUrl": card.pronunciation_url,
        "synonyms": list(card.synonyms)
    }


@pytest.fixture
def sample_flashcard():
    """Sample flashcard being quizzed."""
    return make_card("card_cat", "cat", definition="A small domesticated feline",
                     example_sentence="The cat sat on the mat.")


@pytest.fixture
def sample_pool():
    """Sample pool of flashcards from the same topic."""
    return [
        make_card("card_cat", "cat"),
        make_card("card_bat", "bat"),
        make_card("card_hat", "hat"),
        make_card("card_run", "run", "VERB"),
        make_card("card_elephant", "elephant"),
        make_card("card_dog", "dog"),
        make_card("card_quickly", "quickly", "ADVERB"),
    ]


class InMemoryStorage:
    """
    Async in-memory stand-in for CosmosDBService.

    Eligible spotlight candidates are picked in insertion order so the
    widget scenarios are deterministic.
    """

    def __init__(self):
        self.flashcards: dict[str, dict] = {}
        self.mastered: dict[str, list[str]] = {}
        self.sessions: dict[str, dict] = {}
        self.history: dict[str, dict] = {}
        self.streaks: dict[str, dict] = {}
        self.session_writes = 0
        self.history_writes = 0
        self.streak_writes = 0

    def add_card(self, card: Flashcard, mastered_by: Optional[str] = None):
        self.flashcards[card.id] = card_document(card)
        if mastered_by:
            self.mastered.setdefault(mastered_by, []).append(card.id)

    def session(self, user_id: str, day: str) -> Optional[dict]:
        return self.sessions.get(f"{user_id}_{day}")

    async def get_flashcard(self, flashcard_id: str) -> Optional[dict]:
        data = self.flashcards.get(flashcard_id)
        return dict(data) if data else None

    async def query_eligible_spotlight_candidate(self, user_id: str, exclude_ids: list[str]) -> Optional[dict]:
        correct = {r["flashcardId"] for r in self.history.values()
                   if r["userId"] == user_id and r["isCorrect"]}
        for flashcard_id in self.mastered.get(user_id, []):
            if flashcard_id in exclude_ids or flashcard_id in correct:
                continue
            if flashcard_id in self.flashcards:
                return dict(self.flashcards[flashcard_id])
        return None

    async def get_daily_session(self, user_id: str, date: str) -> Optional[dict]:
        data = self.session(user_id, date)
        return dict(data) if data else None

    async def upsert_daily_session(self, session_data: dict) -> dict:
        self.session_writes += 1
        self.sessions[session_data["id"]] = dict(session_data)
        return session_data

    async def upsert_widget_history_correct(self, user_id: str, flashcard_id: str, date: str) -> dict:
        self.history_writes += 1
        item_id = f"{user_id}_{flashcard_id}"
        existing = self.history.get(item_id)
        record = {
            "id": item_id,
            "userId": user_id,
            "flashcardId": flashcard_id,
            "firstShownDate": existing["firstShownDate"] if existing else date,
            "lastShownDate": date,
            "shownCount": existing["shownCount"] + 1 if existing else 1,
            "isCorrect": True
        }
        self.history[item_id] = record
        return record

    async def get_widget_history(self, user_id: str, from_date=None, to_date=None) -> list:
        records = [r for r in self.history.values() if r["userId"] == user_id and r["isCorrect"]]
        if from_date:
            records = [r for r in records if r["lastShownDate"] >= from_date]
        if to_date:
            records = [r for r in records if r["lastShownDate"] <= to_date]
        return sorted(records, key=lambda r: r["lastShownDate"], reverse=True)

    async def get_user_streak(self, user_id: str) -> Optional[dict]:
        data = self.streaks.get(user_id)
        return dict(data) if data else None

    async def upsert_user_streak(self, streak_data: dict) -> dict:
        self.streak_writes += 1
        self.streaks[streak_data["userId"]] = dict(streak_data)
        return streak_data


@pytest.fixture
def storage():
    """Empty in-memory storage."""
    return InMemoryStorage()


class MutableClock:
    """Clock whose current day can be moved by tests."""

    def __init__(self, day: date):
        self.day = day

    def __call__(self) -> date:
        return self.day


@pytest.fixture
def clock():
    return MutableClock(date(2024, 5, 10))


@pytest.fixture
def make_flashcard():
    """Factory for flashcards."""
    return make_card
