"""
Tests for the HTTP API.
"""

import datetime

import pytest
from fastapi.testclient import TestClient

from treasury_matcher import main
from treasury_matcher.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _movement(**overrides):
    payload = {
        "id": "mov1",
        "date": "2024-06-10",
        "concept": "TRANSF FACT A-0001-00005678",
        "amount": 1000.00,
        "direction": "credit",
    }
    payload.update(overrides)
    return payload


def _candidate(**overrides):
    payload = {
        "id": "pay1",
        "number": "0001-00005678",
        "date": "2024-06-11",
        "amount": 1000.00,
        "counterparty_name": "Acme SA",
        "counterparty_id": "acme",
        "type": "client",
    }
    payload.update(overrides)
    return payload


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_timestamp_is_timezone_aware(self, client):
        timestamp = client.get("/health").json()["timestamp"]
        assert datetime.datetime.fromisoformat(timestamp).tzinfo is not None


class TestLifespan:
    def test_logging_configured_on_startup(self, monkeypatch):
        calls = []
        monkeypatch.setattr(main, "setup_logging", lambda settings=None: calls.append(settings))

        assert calls == []
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

        assert len(calls) == 1


class TestSuggestionsEndpoint:
    """POST /api/reconciliation/suggestions"""

    def test_document_match(self, client):
        response = client.post("/api/reconciliation/suggestions", json={
            "movements": [_movement()],
            "candidates": [_candidate()],
        })

        assert response.status_code == 200
        body = response.json()
        assert len(body["suggestions"]) == 1

        match = body["suggestions"][0]["matches"][0]
        assert match["payment_id"] == "pay1"
        assert match["match_score"] == 90
        assert match["confidence"] == "high"
        assert match["match_type"] == "exact"
        assert body["suggestions"][0]["auto_reconcileable"] is False
        assert body["stats"]["total"] == 1
        assert body["stats"]["high"] == 1

    def test_patterns_in_request(self, client):
        response = client.post("/api/reconciliation/suggestions", json={
            "movements": [_movement()],
            "candidates": [_candidate()],
            "patterns": {"transf fact a N N": "acme"},
        })

        suggestion = response.json()["suggestions"][0]
        assert suggestion["matches"][0]["match_score"] == 100
        assert suggestion["auto_reconcileable"] is True

    def test_include_unmatched(self, client):
        response = client.post("/api/reconciliation/suggestions", json={
            "movements": [_movement(amount=5.0, concept="COMISION")],
            "candidates": [_candidate()],
            "include_unmatched": True,
        })

        body = response.json()
        assert body["suggestions"][0]["matches"] == []
        assert body["stats"]["no_matches"] == 1

    def test_timestamps_are_truncated_to_days(self, client):
        response = client.post("/api/reconciliation/suggestions", json={
            "movements": [_movement(date="2024-06-10T15:30:00")],
            "candidates": [_candidate(date="2024-06-14T08:00:00")],
        })

        assert response.status_code == 200
        match = response.json()["suggestions"][0]["matches"][0]
        assert match["date_difference_days"] == 4
        assert "close date (4 days apart)" in match["reasoning"]
        assert match["match_score"] == 80

    def test_negative_amount_rejected(self, client):
        response = client.post("/api/reconciliation/suggestions", json={
            "movements": [_movement(amount=-10.0)],
            "candidates": [],
        })
        assert response.status_code == 422

    def test_oversized_reference_rejected(self, client):
        response = client.post("/api/reconciliation/suggestions", json={
            "movements": [_movement(reference="9" * 101)],
            "candidates": [],
        })
        assert response.status_code == 422


class TestPatternsEndpoint:
    """POST /api/patterns/learn"""

    def test_learn(self, client):
        response = client.post("/api/patterns/learn", json={
            "concept": "TRANSFERENCIA 001234 ACME",
            "counterparty_id": "client-42",
            "patterns": {"deposito N": "client-1"},
        })

        assert response.status_code == 200
        body = response.json()
        assert body["pattern_key"] == "transferencia N acme"
        assert body["patterns"] == {
            "deposito N": "client-1",
            "transferencia N acme": "client-42",
        }

    def test_unlearnable_concept(self, client):
        response = client.post("/api/patterns/learn", json={
            "concept": "!!!",
            "counterparty_id": "client-42",
        })
        assert response.status_code == 400


class TestStatsEndpoint:
    """POST /api/reconciliation/stats"""

    def test_stats_of_generated_suggestions(self, client):
        generated = client.post("/api/reconciliation/suggestions", json={
            "movements": [_movement()],
            "candidates": [_candidate()],
        }).json()

        response = client.post("/api/reconciliation/stats", json={
            "suggestions": generated["suggestions"],
        })

        assert response.status_code == 200
        assert response.json() == generated["stats"]

    def test_empty(self, client):
        response = client.post("/api/reconciliation/stats", json={"suggestions": []})
        assert response.json()["total"] == 0
        assert response.json()["avg_top_score"] == 0


class TestSettingsEndpoint:
    def test_settings(self, client):
        body = client.get("/settings").json()
        assert body["min_suggestion_score"] == 50
        assert body["auto_reconcile_score"] == 95
        assert body["max_matches_per_movement"] == 5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
