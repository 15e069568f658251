"""
HTTP tests for the ranking endpoints.

The Motor-backed fetch functions are patched, so the engine runs on
in-memory snapshots.
"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from core.dependencies import get_current_user
from main import app
from tests.conftest import ALICE, BOB, make_review


@pytest.fixture
def client(user):
    app.dependency_overrides[get_current_user] = lambda: user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def snapshot(pizzeria, sushi, trattoria):
    reviews = [
        make_review(pizzeria, ALICE, 5, 5, 5),
        make_review(pizzeria, BOB, 1, 1, 1),
        make_review(sushi, ALICE, 4, 5, 4),
        make_review(trattoria, BOB, 2, 2, 3),
    ]
    restaurants = {r.id: r for r in (pizzeria, sushi, trattoria)}
    return reviews, restaurants


def _patch_global(reviews, restaurants):
    return (
        patch("services.ranking_service.fetch_all_reviews", AsyncMock(return_value=reviews)),
        patch("services.ranking_service.fetch_all_restaurants", AsyncMock(return_value=restaurants)),
    )


def _patch_user(reviews, restaurants):
    return (
        patch("services.ranking_service.fetch_reviews_by_user", AsyncMock(return_value=reviews)),
        patch("services.ranking_service.fetch_restaurants_by_ids", AsyncMock(return_value=restaurants)),
    )


class TestGlobalRankingsRoute:

    def test_returns_rankings_envelope(self, client, snapshot, sushi, pizzeria):
        p_reviews, p_restaurants = _patch_global(*snapshot)
        with p_reviews, p_restaurants:
            resp = client.get("/rankings")

        assert resp.status_code == 200
        body = resp.json()
        assert list(body.keys()) == ["rankings"]
        rankings = body["rankings"]
        assert [r["restaurant_id"] for r in rankings][:2] == [sushi.id, pizzeria.id]
        assert rankings[1]["average_rating"] == 3.0
        assert rankings[1]["review_count"] == 2

    def test_cuisine_filter(self, client, snapshot):
        p_reviews, p_restaurants = _patch_global(*snapshot)
        with p_reviews, p_restaurants:
            resp = client.get("/rankings", params={"cuisine": "Pizzeria"})

        rankings = resp.json()["rankings"]
        assert len(rankings) == 1
        assert rankings[0]["cuisine"] == "Pizzeria"

    def test_limit_truncates(self, client, snapshot):
        p_reviews, p_restaurants = _patch_global(*snapshot)
        with p_reviews, p_restaurants:
            resp = client.get("/rankings", params={"limit": 2})

        assert len(resp.json()["rankings"]) == 2

    def test_database_failure_is_500(self, client):
        failing = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        with patch("services.ranking_service.fetch_all_reviews", failing):
            resp = client.get("/rankings")

        assert resp.status_code == 500
        assert resp.json()["detail"] == "Database error"

    def test_requires_authentication(self):
        app.dependency_overrides.clear()
        resp = TestClient(app).get("/rankings")
        assert resp.status_code == 401


class TestUserRankingsRoute:

    def test_returns_only_that_users_reviews(self, client, snapshot):
        reviews, restaurants = snapshot
        alice_reviews = [r for r in reviews if r.user_id == ALICE]
        p_reviews, p_restaurants = _patch_user(alice_reviews, restaurants)
        with p_reviews, p_restaurants:
            resp = client.get(f"/rankings/users/{ALICE}")

        assert resp.status_code == 200
        rankings = resp.json()["rankings"]
        assert len(rankings) == 2
        assert rankings[0]["average_rating"] == 5.0
        assert rankings[1]["average_rating"] == 4.33
        assert {"service_rating", "price_rating", "menu_rating", "comment", "created_at"} <= rankings[0].keys()

    def test_user_without_reviews_is_empty_success(self, client):
        p_reviews, p_restaurants = _patch_user([], {})
        with p_reviews, p_restaurants:
            resp = client.get(f"/rankings/users/{BOB}")

        assert resp.status_code == 200
        assert resp.json() == {"rankings": []}

    def test_invalid_user_id_is_400(self, client):
        fetch = AsyncMock(return_value=[])
        with patch("services.ranking_service.fetch_reviews_by_user", fetch):
            resp = client.get("/rankings/users/not-a-valid-id")

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid user id"
        fetch.assert_not_called()

    def test_upper_case_user_id_matches_stored_reviews(self, client, snapshot):
        reviews, restaurants = snapshot
        alice_reviews = [r for r in reviews if r.user_id == ALICE]
        fetch = AsyncMock(return_value=alice_reviews)
        with patch("services.ranking_service.fetch_reviews_by_user", fetch), \
                patch("services.ranking_service.fetch_restaurants_by_ids", AsyncMock(return_value=restaurants)):
            resp = client.get(f"/rankings/users/{ALICE.upper()}")

        assert resp.status_code == 200
        assert len(resp.json()["rankings"]) == 2
        fetch.assert_awaited_once_with(ALICE)

    def test_exclude_cuisine(self, client, snapshot):
        reviews, restaurants = snapshot
        alice_reviews = [r for r in reviews if r.user_id == ALICE]
        p_reviews, p_restaurants = _patch_user(alice_reviews, restaurants)
        with p_reviews, p_restaurants:
            resp = client.get(f"/rankings/users/{ALICE}", params={"exclude_cuisine": "Pizzeria"})

        rankings = resp.json()["rankings"]
        assert [r["cuisine"] for r in rankings] == ["Japanese"]
