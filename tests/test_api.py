"""HTTP-level tests for the matching and mood routers.

The database dependency is overridden with a mocked ``AsyncSession`` so the
routes run their real service logic without a Postgres instance.
"""
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from kindred.api.router import router
from kindred.database import get_db


def _companion_row(**overrides):
    row = {
        "id": uuid.uuid4(),
        "name": "Companion",
        "age": 30,
        "gender": "female",
        "bio": "",
        "hobbies": None,
        "personality": None,
        "likes": None,
        "dislikes": None,
        "image_url": None,
        "location": None,
    }
    row.update(overrides)
    return SimpleNamespace(**row)


@pytest.fixture
def db_session():
    session = MagicMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def client(db_session):
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)


class TestMatchEndpoint:
    """POST /api/v1/match"""

    def test_ranks_catalogue(self, client, db_session):
        rows = [
            _companion_row(name="Marcus", gender="male", hobbies=["gaming"]),
            _companion_row(
                name="Sofia",
                age=27,
                hobbies=["painting", "hiking"],
                personality=["warm", "creative"],
                location="Barcelona, Spain",
                bio="Passionate painter",
            ),
        ]
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        db_session.execute.return_value = result

        response = client.post(
            "/api/v1/match",
            json={
                "companion_type": "romantic",
                "gender": "female",
                "age_range": "26-35",
                "hobbies": ["hiking"],
                "personality": ["warm"],
                "relationship_goals": "romantic",
                "name": "Alex",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert [m["name"] for m in body["matches"]] == ["Sofia"]
        assert 0.0 <= body["matches"][0]["compatibility_score"] <= 1.0
        assert len(body["matches"][0]["match_reasons"]) <= 3
        assert "Your top match is Sofia" in body["summary"]

    def test_null_columns_are_tolerated(self, client, db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [_companion_row(name="Kai")]
        db_session.execute.return_value = result

        response = client.post("/api/v1/match", json={"age_range": "26-35"})

        assert response.status_code == 200
        match = response.json()["matches"][0]
        assert match["hobbies"] == []
        assert match["location"] == ""
        assert match["match_reasons"] == ["Perfect age match at 30"]

    def test_empty_catalogue(self, client, db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        db_session.execute.return_value = result

        response = client.post("/api/v1/match", json={"companion_type": "casual"})

        assert response.status_code == 200
        assert response.json() == {
            "matches": [],
            "summary": (
                "We're still learning about your preferences. "
                "Browse all companions to find your perfect match!"
            ),
        }


class TestMatchPreviewEndpoint:
    """POST /api/v1/match/preview"""

    def test_preview_does_not_touch_store(self, client, db_session):
        candidates = [
            {"id": str(uuid.uuid4()), "name": f"c{i}", "age": 30, "gender": "male"}
            for i in range(8)
        ]
        response = client.post(
            "/api/v1/match/preview",
            json={"questionnaire": {"age_range": "26-35"}, "candidates": candidates},
        )

        assert response.status_code == 200
        names = [m["name"] for m in response.json()["matches"]]
        assert names == ["c0", "c1", "c2", "c3", "c4", "c5"]
        db_session.execute.assert_not_awaited()

    def test_invalid_candidate_rejected(self, client):
        response = client.post(
            "/api/v1/match/preview",
            json={"questionnaire": {}, "candidates": [{"name": "no id"}]},
        )
        assert response.status_code == 422


class TestMoodEndpoints:
    """/api/v1/mood/*"""

    def test_detect(self, client):
        response = client.post("/api/v1/mood/detect", json={"text": "I am SO happy!!!"})
        assert response.status_code == 200
        assert response.json() == {"mood": "happy", "intensity": 8}

    def test_detect_empty_text(self, client):
        response = client.post("/api/v1/mood/detect", json={"text": ""})
        assert response.json() == {"mood": "neutral", "intensity": 5}

    def test_track_persists_detection(self, client, db_session):
        async def _refresh(entry):
            entry.id = uuid.uuid4()
            entry.created_at = datetime.now(timezone.utc)

        db_session.refresh.side_effect = _refresh

        response = client.post(
            "/api/v1/mood/track",
            json={
                "user_id": str(uuid.uuid4()),
                "companion_id": str(uuid.uuid4()),
                "user_companion_id": str(uuid.uuid4()),
                "text": "I feel so lonely tonight",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["mood_type"] == "lonely"
        assert body["intensity"] == 7
        assert body["message_context"] == "I feel so lonely tonight"
        assert body["detected_automatically"] is True
        db_session.add.assert_called_once()

    def test_recent(self, client, db_session):
        entry = SimpleNamespace(
            id=uuid.uuid4(),
            mood_type="calm",
            intensity=5,
            message_context="so relaxed",
            detected_automatically=True,
            created_at=datetime.now(timezone.utc),
        )
        result = MagicMock()
        result.scalars.return_value.all.return_value = [entry]
        db_session.execute.return_value = result

        response = client.get(f"/api/v1/mood/{uuid.uuid4()}/{uuid.uuid4()}/recent?limit=5")

        assert response.status_code == 200
        assert [e["mood_type"] for e in response.json()] == ["calm"]

    def test_recent_rejects_bad_limit(self, client):
        response = client.get(f"/api/v1/mood/{uuid.uuid4()}/{uuid.uuid4()}/recent?limit=0")
        assert response.status_code == 422

    def test_trends(self, client, db_session):
        result = MagicMock()
        result.all.return_value = [
            SimpleNamespace(mood_type="happy", entry_count=3, avg_intensity=7.5),
        ]
        db_session.execute.return_value = result

        response = client.get(f"/api/v1/mood/{uuid.uuid4()}/{uuid.uuid4()}/trends?days=14")

        assert response.status_code == 200
        assert response.json() == [
            {"mood_type": "happy", "count": 3, "avg_intensity": 7.5}
        ]
