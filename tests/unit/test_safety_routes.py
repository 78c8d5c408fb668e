"""Tests for the safety HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.safety.intervention_store import InterventionStore
from app.safety.pipeline import SafetyPipeline, get_safety_pipeline


@pytest.fixture
def pipeline(no_redis, clock):
    return SafetyPipeline(store=InterventionStore(ttl=60), clock=clock)


@pytest.fixture
def client(pipeline):
    """Test client with an isolated pipeline."""
    app.dependency_overrides[get_safety_pipeline] = lambda: pipeline
    yield TestClient(app)
    app.dependency_overrides.clear()


HEADERS = {"X-Session-ID": "sess-api"}


class TestScreenText:
    """Test POST /safety/screen/text"""

    def test_severe_text(self, client):
        response = client.post(
            "/safety/screen/text",
            json={"text": "I want to die"},
            headers={**HEADERS, "Accept-Language": "en-GB,en;q=0.8"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["level"] == "severe"
        assert data["action"] == "immediate"
        assert data["matched_count"] == 1
        intervention = data["intervention"]
        assert intervention["variant"] == "crisis"
        assert intervention["priority"] == "high"
        assert [r["name"] for r in intervention["resources"]] == [
            "Samaritans",
            "International Crisis Lines",
        ]

    def test_neutral_text(self, client):
        response = client.post("/safety/screen/text", json={"text": "I like tea"}, headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["level"] is None
        assert data["intervention"] is None
        assert data["matched_count"] == 0

    def test_missing_text_is_no_signal(self, client):
        response = client.post("/safety/screen/text", json={}, headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["intervention"] is None

    def test_long_text_is_screened(self, client):
        """Long answers are classified in full, not rejected."""
        text = "x " * 2600 + "I want to kill myself"

        response = client.post("/safety/screen/text", json={"text": text}, headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["level"] == "severe"
        assert data["intervention"]["variant"] == "crisis"

    def test_session_header_required(self, client):
        response = client.post("/safety/screen/text", json={"text": "I want to die"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Validation error"
        assert "I want to die" not in response.text


class TestScreenScores:
    """Test POST /safety/screen/scores"""

    def test_flags_in_order(self, client):
        response = client.post(
            "/safety/screen/scores",
            json={"adhd_probability": 0.85, "autism_probability": 0.9, "anxiety_score": 3},
            headers=HEADERS,
        )

        assert response.status_code == 200
        data = response.json()
        assert [f["type"] for f in data["flags"]] == ["adhd", "autism"]
        assert data["flags"][0]["confidence"] == 0.85
        assert len(data["interventions"]) == 2

    def test_no_flags(self, client):
        response = client.post("/safety/screen/scores", json={}, headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["flags"] == []
        assert response.json()["interventions"] == []


class TestFollowUp:
    """Test GET /safety/follow-up and session cleanup."""

    def test_banner_after_cooldown(self, client, clock):
        client.post("/safety/screen/text", json={"text": "I want to die"}, headers=HEADERS)

        assert client.get("/safety/follow-up", headers=HEADERS).json()["banner"] is None

        clock.advance(minutes=11)
        banner = client.get("/safety/follow-up", headers=HEADERS).json()["banner"]

        assert banner["message"] == "How are you feeling? Remember, support is always available."
        assert banner["dismiss_label"] == "I'm OK"

    def test_end_session_clears_record(self, client, clock):
        client.post("/safety/screen/text", json={"text": "I want to die"}, headers=HEADERS)

        response = client.delete("/safety/session/sess-api")
        clock.advance(minutes=11)

        assert response.status_code == 204
        assert client.get("/safety/follow-up", headers=HEADERS).json()["banner"] is None
