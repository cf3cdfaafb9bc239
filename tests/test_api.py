"""HTTP tests for the likes, history and users routers."""

from datetime import datetime, timedelta

import pytest

from conftest import auth_headers, quality
from goodwill.models import Like, User

SENDER = "15550000001"
RECIPIENT = "15550000002"


def like_payload(from_phone=SENDER, to_phone=RECIPIENT, **overrides):
    payload = {
        "from_phone_number": from_phone,
        "to_phone_number": to_phone,
        "qualities": [{"value": "Kind", "category": "💛"}],
        "used_search": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def sender(make_user):
    return make_user(SENDER)


@pytest.fixture
def headers(sender):
    return auth_headers(SENDER)


def send_like(client, headers, **overrides):
    return client.post("/api/v1/likes", json=like_payload(**overrides), headers=headers)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestLikes:
    def test_create_like(self, client, db, headers):
        response = send_like(client, headers)

        assert response.status_code == 201
        body = response.json()
        assert body["ok"] is True
        like = body["data"]["like"]
        assert like["from_phone_number"] == SENDER
        assert like["is_notified"] is False
        assert like["qualities"] == [{"value": "Kind", "category": "💛", "is_default": True}]

        placeholder = db.query(User).filter(User.phone_number == RECIPIENT).one()
        assert placeholder.is_active is False

    def test_cannot_like_on_behalf_of_someone_else(self, client, make_user, headers):
        make_user(RECIPIENT)

        response = send_like(client, headers, from_phone=RECIPIENT, to_phone=SENDER)

        assert response.status_code == 403

    def test_rejects_empty_qualities(self, client, headers):
        response = send_like(client, headers, qualities=[])

        assert response.status_code == 422

    def test_quota_exceeded(self, client, db, headers):
        for index in range(3):
            assert send_like(client, headers, to_phone=f"1555000010{index}").status_code == 201

        response = send_like(client, headers, to_phone="15550000199")

        assert response.status_code == 429
        assert response.json() == {"ok": False, "error": "Monthly like limit reached"}
        assert db.query(Like).count() == 3

    def test_remaining_likes(self, client, headers):
        send_like(client, headers)

        response = client.get("/api/v1/likes/remaining", headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["remaining_likes"] == 2
        assert response.json()["data"]["likes_refreshed_at"]

    def test_received_likes(self, client, make_user, make_like, headers):
        make_like(RECIPIENT, SENDER)
        make_like(SENDER, RECIPIENT)

        response = client.get("/api/v1/likes/received", headers=headers)

        data = response.json()["data"]
        assert [like["to_phone_number"] for like in data] == [SENDER]

    def test_unlike_by_id(self, client, headers):
        like_id = send_like(client, headers).json()["data"]["like"]["id"]

        response = client.delete(f"/api/v1/likes/{like_id}", headers=headers)

        assert response.status_code == 200
        assert client.delete(f"/api/v1/likes/{like_id}", headers=headers).status_code == 404

    def test_unlike_missing_returns_error_envelope(self, client, headers):
        response = client.delete("/api/v1/likes/missing", headers=headers)

        assert response.status_code == 404
        assert response.json() == {"ok": False, "error": "Like not found"}

    def test_unlike_by_pair(self, client, db, headers):
        send_like(client, headers)

        response = client.delete(f"/api/v1/likes/{SENDER}/{RECIPIENT}", headers=headers)

        assert response.status_code == 200
        assert db.query(Like).count() == 0

    def test_endorse_and_unendorse_by_id(self, client, headers):
        like_id = send_like(client, headers).json()["data"]["like"]["id"]

        endorsed = client.put(f"/api/v1/likes/{like_id}/endorse", headers=headers)
        assert endorsed.status_code == 200
        assert endorsed.json()["data"]["is_endorsed"] is True

        removed = client.delete(f"/api/v1/likes/{like_id}/endorse", headers=headers)
        assert removed.status_code == 200
        assert removed.json()["data"]["is_endorsed"] is False

    def test_endorse_and_unendorse_by_pair(self, client, db, headers):
        send_like(client, headers)

        response = client.put(f"/api/v1/likes/{SENDER}/{RECIPIENT}/endorse", headers=headers)
        assert response.status_code == 200
        like = db.query(Like).one()
        db.refresh(like)
        assert like.is_endorsed is True

        response = client.delete(f"/api/v1/likes/{SENDER}/{RECIPIENT}/endorse", headers=headers)
        assert response.status_code == 200
        db.refresh(like)
        assert like.is_endorsed is False

    def test_only_sender_can_change_a_like(self, client, db, make_user, headers):
        like_id = send_like(client, headers).json()["data"]["like"]["id"]
        make_user("15550000003")
        other = auth_headers("15550000003")

        assert client.delete(f"/api/v1/likes/{like_id}", headers=other).status_code == 403
        assert client.put(f"/api/v1/likes/{like_id}/endorse", headers=other).status_code == 403
        assert client.delete(f"/api/v1/likes/{like_id}/endorse", headers=other).status_code == 403
        assert client.delete(f"/api/v1/likes/{SENDER}/{RECIPIENT}", headers=other).status_code == 403
        assert client.put(f"/api/v1/likes/{SENDER}/{RECIPIENT}/endorse", headers=other).status_code == 403
        assert client.delete(f"/api/v1/likes/{SENDER}/{RECIPIENT}/endorse", headers=other).status_code == 403

        like = db.query(Like).one()
        db.refresh(like)
        assert like.is_endorsed is False

    def test_endorse_by_pair_returns_oldest_like(self, client, make_like, headers):
        oldest = make_like(SENDER, RECIPIENT, created_at=datetime.utcnow() - timedelta(days=2))
        make_like(SENDER, RECIPIENT)

        response = client.put(f"/api/v1/likes/{SENDER}/{RECIPIENT}/endorse", headers=headers)

        assert response.json()["data"]["id"] == oldest.id
        assert response.json()["data"]["is_endorsed"] is True

    def test_endorse_missing_pair(self, client, headers):
        response = client.put(f"/api/v1/likes/{SENDER}/{RECIPIENT}/endorse", headers=headers)

        assert response.status_code == 404

    def test_invalid_token(self, client):
        response = client.get(
            "/api/v1/likes/received",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    def test_placeholder_cannot_act(self, client, make_user):
        make_user(RECIPIENT, is_active=False)

        response = client.get("/api/v1/likes/received", headers=auth_headers(RECIPIENT))

        assert response.status_code == 403


class TestHistory:
    def test_sent_history_is_paginated(self, client, make_user, headers):
        make_user(SENDER + "9", age=timedelta(hours=1))
        new_headers = auth_headers(SENDER + "9")
        for index in range(5):
            send_like(client, new_headers, from_phone=SENDER + "9", to_phone=f"1555000020{index}")

        response = client.get(
            f"/api/v1/likes/history/sent/{SENDER}9?page=2&per_page=2", headers=headers
        )

        body = response.json()
        assert response.status_code == 200
        assert len(body["data"]) == 2
        assert body["meta"] == {
            "current_page": 2,
            "per_page": 2,
            "total": 5,
            "total_pages": 3,
            "has_next": True,
            "has_prev": True,
        }
        assert [entry["to_phone_number"] for entry in body["data"]] == ["15550000202", "15550000201"]

    def test_received_history_only_lists_likes(self, client, headers):
        like_id = send_like(client, headers).json()["data"]["like"]["id"]
        client.put(f"/api/v1/likes/{like_id}/endorse", headers=headers)
        client.delete(f"/api/v1/likes/{like_id}", headers=headers)

        response = client.get(f"/api/v1/likes/history/received/{RECIPIENT}", headers=headers)

        assert [entry["action"] for entry in response.json()["data"]] == ["LIKE"]

    def test_history_between_users(self, client, make_user, headers):
        like_id = send_like(client, headers).json()["data"]["like"]["id"]
        client.put(f"/api/v1/likes/{like_id}/endorse", headers=headers)

        response = client.get(
            f"/api/v1/likes/history/between/{RECIPIENT}/{SENDER}", headers=headers
        )

        assert [entry["action"] for entry in response.json()["data"]] == ["ENDORSE", "LIKE"]


class TestUsers:
    def test_register(self, client):
        response = client.post("/api/v1/users", json={"phone_number": RECIPIENT, "full_name": "Ana"})

        assert response.status_code == 201
        assert response.json()["data"]["is_active"] is True

    def test_register_twice_conflicts(self, client, sender):
        response = client.post("/api/v1/users", json={"phone_number": SENDER})

        assert response.status_code == 409
        assert response.json() == {"ok": False, "error": "Phone number already registered"}

    def test_register_activates_placeholder(self, client, db, headers):
        send_like(client, headers)

        response = client.post("/api/v1/users", json={"phone_number": RECIPIENT})

        assert response.status_code == 201
        assert db.query(User).filter(User.phone_number == RECIPIENT).count() == 1
        received = client.get("/api/v1/likes/received", headers=auth_headers(RECIPIENT))
        assert len(received.json()["data"]) == 1

    def test_my_profile_includes_quota(self, client, headers):
        response = client.get("/api/v1/users/me", headers=headers)

        data = response.json()["data"]
        assert data["phone_number"] == SENDER
        assert data["remaining_likes"] == 3
        assert data["goodwill"] == {"score": 0.0, "level": "Developing"}

    def test_profile_of_other_user_hides_quota(self, client, make_user, make_like, headers):
        make_user(RECIPIENT)
        make_like(SENDER, RECIPIENT, [quality("Kind")], is_endorsed=True)

        response = client.get(f"/api/v1/users/{RECIPIENT}", headers=headers)

        data = response.json()["data"]
        assert data["remaining_likes"] is None
        assert data["goodwill"]["score"] == pytest.approx(6.0)
        assert [q["value"] for q in data["top_three_qualities"]] == ["Kind"]

    def test_goodwill(self, client, make_user, make_like, headers):
        make_user(RECIPIENT)
        make_like(SENDER, RECIPIENT, [quality("Kind")], used_search=False)

        response = client.get(f"/api/v1/users/{RECIPIENT}/goodwill", headers=headers)

        data = response.json()["data"]
        assert data["score"] == pytest.approx(1.4)
        assert data["level"] == "Developing"
        assert data["breakdown"]["penalties"]["no_search_penalty"] == pytest.approx(0.42)
        assert data["quality_scores"][0]["score"] == pytest.approx(1.4)

    def test_qualities(self, client, make_user, make_like, headers):
        make_user(RECIPIENT)
        make_like(SENDER, RECIPIENT, [quality("Kind"), quality("Calm")])

        response = client.get(f"/api/v1/users/{RECIPIENT}/qualities", headers=headers)

        assert [q["value"] for q in response.json()["data"]] == ["Kind", "Calm"]

    def test_unknown_user(self, client, headers):
        response = client.get("/api/v1/users/15559999999/goodwill", headers=headers)

        assert response.status_code == 404

    def test_batch_profiles(self, client, make_user, make_like, headers):
        make_user(RECIPIENT)
        make_like(SENDER, RECIPIENT, [quality("Kind")])

        response = client.get(
            f"/api/v1/users?phone_numbers={SENDER},{RECIPIENT}", headers=headers
        )

        profiles = {p["phone_number"]: p for p in response.json()["data"]}
        assert set(profiles) == {SENDER, RECIPIENT}
        assert profiles[SENDER]["top_three_qualities"] == []
        assert profiles[RECIPIENT]["top_three_qualities"][0]["value"] == "Kind"

    def test_batch_profiles_follow_request_order(self, client, make_user, headers):
        make_user(RECIPIENT)

        response = client.get(
            f"/api/v1/users?phone_numbers={RECIPIENT},15559999999,{SENDER},{RECIPIENT}",
            headers=headers,
        )

        assert [p["phone_number"] for p in response.json()["data"]] == [RECIPIENT, SENDER]
