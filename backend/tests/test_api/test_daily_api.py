"""
Tests for Daily Widget API endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from flashlearn.core.dependencies import get_daily_widget_engine
from flashlearn.engine.daily_widget_engine import DailyWidgetEngine
from flashlearn.main import app


client = TestClient(app)

USER = "user_1"


@pytest.fixture
def widget_storage(storage, make_flashcard):
    """In-memory storage with two mastered flashcards."""
    storage.add_card(make_flashcard("card_1", "ephemeral", "ADJECTIVE"), mastered_by=USER)
    storage.add_card(make_flashcard("card_2", "ubiquitous", "ADJECTIVE"), mastered_by=USER)
    return storage


@pytest.fixture
def override_engine(mock_settings, clock):
    """Serve requests with an engine on the given storage and user."""
    def _override(db_service, user_id=USER):
        async def identity_provider():
            return user_id

        engine = DailyWidgetEngine(
            settings=mock_settings,
            db_service=db_service,
            identity_provider=identity_provider,
            clock=clock
        )
        app.dependency_overrides[get_daily_widget_engine] = lambda: engine
        return engine

    yield _override
    app.dependency_overrides.pop(get_daily_widget_engine, None)


class TestWidgetStateEndpoints:
    """Tests for /daily/state, /reveal, /missed, /got-it"""

    def test_signed_out_without_token(self):
        response = client.get("/api/v1/daily/state")

        assert response.status_code == 200
        assert response.json() == {"state": "signed_out"}

    def test_state_assigns_hidden_card(self, override_engine, widget_storage):
        override_engine(widget_storage)

        response = client.get("/api/v1/daily/state")

        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "card_hidden"
        assert data["date"] == "2024-05-10"
        assert data["flashcard"]["word"] == "ephemeral"

    def test_reveal(self, override_engine, widget_storage):
        override_engine(widget_storage)
        client.get("/api/v1/daily/state")

        response = client.post("/api/v1/daily/reveal")

        assert response.json()["state"] == "card_revealed"

    def test_missed_then_exhausted(self, override_engine, widget_storage):
        override_engine(widget_storage)
        client.get("/api/v1/daily/state")

        first = client.post("/api/v1/daily/missed").json()
        second = client.post("/api/v1/daily/missed").json()

        assert first["state"] == "card_hidden"
        assert first["flashcard"]["id"] == "card_2"
        assert second["state"] == "exhausted"
        assert second["message"] == "You have seen all the suitable words for widgets."

    def test_got_it(self, override_engine, widget_storage):
        override_engine(widget_storage)
        client.get("/api/v1/daily/state")

        response = client.post("/api/v1/daily/got-it")

        assert response.json() == {
            "state": "done_today",
            "date": "2024-05-10",
            "streak_current": 1,
            "streak_best": 1
        }

    def test_engine_error_returns_500(self, override_engine, mock_cosmos_service):
        mock_cosmos_service.get_daily_session.side_effect = RuntimeError("cosmos down")
        override_engine(mock_cosmos_service)

        response = client.get("/api/v1/daily/state")

        assert response.status_code == 500


class TestArchiveEndpoint:
    """Tests for GET /daily/archive"""

    def test_archive_after_got_it(self, override_engine, widget_storage):
        override_engine(widget_storage)
        client.get("/api/v1/daily/state")
        client.post("/api/v1/daily/got-it")

        response = client.get("/api/v1/daily/archive")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["word"] == "ephemeral"
        assert data["items"][0]["date"] == "2024-05-10"

    def test_archive_range_filter(self, override_engine, widget_storage):
        override_engine(widget_storage)
        client.get("/api/v1/daily/state")
        client.post("/api/v1/daily/got-it")

        response = client.get("/api/v1/daily/archive", params={"from_date": "2024-05-11"})

        assert response.json() == {"items": [], "total": 0}

    def test_archive_signed_out(self, override_engine, widget_storage):
        override_engine(widget_storage, user_id=None)

        response = client.get("/api/v1/daily/archive")

        assert response.json()["total"] == 0


class TestStreakEndpoints:
    """Tests for GET /daily/streak and POST /daily/activity"""

    def test_streak_without_history(self, override_engine, widget_storage):
        override_engine(widget_storage)

        response = client.get("/api/v1/daily/streak")

        assert response.json() == {
            "current": 0,
            "best": 0,
            "effective_current": 0,
            "last_active_date": None
        }

    def test_lapsed_streak_shows_zero(self, override_engine, widget_storage):
        widget_storage.streaks[USER] = {
            "id": USER,
            "userId": USER,
            "current": 5,
            "best": 8,
            "lastActiveDate": "2024-05-01"
        }
        override_engine(widget_storage)

        data = client.get("/api/v1/daily/streak").json()

        assert data["current"] == 5
        assert data["best"] == 8
        assert data["effective_current"] == 0

    def test_record_activity(self, override_engine, widget_storage):
        override_engine(widget_storage)

        response = client.post("/api/v1/daily/activity")

        assert response.status_code == 200
        assert response.json()["current"] == 1
        assert widget_storage.streaks[USER]["lastActiveDate"] == "2024-05-10"

    def test_record_activity_requires_user(self, override_engine, widget_storage):
        override_engine(widget_storage, user_id=None)

        response = client.post("/api/v1/daily/activity")

        assert response.status_code == 401


class TestHealthEndpoints:

    def test_root(self):
        data = client.get("/").json()

        assert data["status"] == "healthy"
        assert data["app"] == "FlashLearn Adaptive Learning Engine"

    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["services"]["api"] == "up"
