"""HTTP adapter: status codes and payloads of the /api routes."""

from datetime import datetime, timedelta, timezone

import pytest


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def polka(key="test-polka-key"):
    return {"Authorization": f"ApiKey {key}"}


def test_healthz(client):
    resp = client.get("/api/healthz")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


# ─── Users ────────────────────────────────────────────────────────────────────
def test_create_user(client):
    resp = client.post("/api/users", json={"email": "a@x.com", "password": "secret"})
    assert resp.status_code == 201
    assert resp.get_json() == {"id": 1, "email": "a@x.com", "is_upgraded": False}


def test_create_user_duplicate_email(client):
    client.post("/api/users", json={"email": "a@x.com", "password": "secret"})
    resp = client.post("/api/users", json={"email": "a@x.com", "password": "secret"})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "CONFLICT"


@pytest.mark.parametrize("body", [{}, {"email": "a@x.com"}, {"password": "x"}, {"email": "nope", "password": "x"}])
def test_create_user_validation(client, body):
    resp = client.post("/api/users", json=body)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "VALIDATION_ERROR"


def test_update_user(client, registered_user, auth_headers):
    resp = client.put(
        "/api/users",
        json={"email": "heisenberg@breakingbad.com", "password": "654321"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.get_json()["email"] == "heisenberg@breakingbad.com"
    assert resp.get_json()["id"] == registered_user["id"]

    resp = client.post("/api/login", json={"email": "heisenberg@breakingbad.com", "password": "654321"})
    assert resp.status_code == 200


def test_update_user_requires_session_token(client, registered_user):
    body = {"email": "x@x.com", "password": "y"}
    assert client.put("/api/users", json=body).status_code == 401
    assert client.put("/api/users", json=body, headers=bearer("garbage")).status_code == 401
    # A refresh token is not a session token
    resp = client.put("/api/users", json=body, headers=bearer(registered_user["refresh_token"]))
    assert resp.status_code == 401


# ─── Auth ─────────────────────────────────────────────────────────────────────
def test_login_returns_tokens(registered_user):
    assert registered_user["id"] == 1
    assert registered_user["email"] == "walt@breakingbad.com"
    assert registered_user["is_upgraded"] is False
    assert registered_user["token"].count(".") == 2
    assert len(registered_user["refresh_token"]) == 64
    assert "password" not in registered_user


def test_login_failures_are_vague(client, registered_user):
    wrong = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "bad"})
    unknown = client.post("/api/login", json={"email": "nobody@x.com", "password": "bad"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json()["message"] == unknown.get_json()["message"]


def test_refresh_and_revoke(client, registered_user):
    refresh_token = registered_user["refresh_token"]

    resp = client.post("/api/refresh", headers=bearer(refresh_token))
    assert resp.status_code == 200
    session = resp.get_json()["token"]
    assert client.post("/api/chirps", json={"body": "fresh"}, headers=bearer(session)).status_code == 201

    assert client.post("/api/revoke", headers=bearer(refresh_token)).status_code == 204
    assert client.post("/api/refresh", headers=bearer(refresh_token)).status_code == 401
    # Revoking twice is still a 204
    assert client.post("/api/revoke", headers=bearer(refresh_token)).status_code == 204


def test_refresh_requires_header(client):
    assert client.post("/api/refresh").status_code == 401


def test_new_login_supersedes_old_refresh_token(client, registered_user):
    client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "123456"})
    resp = client.post("/api/refresh", headers=bearer(registered_user["refresh_token"]))
    assert resp.status_code == 401


def test_expired_refresh_token(app, client, registered_user):
    tokens = app.extensions["chirpy.tokens"]
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    tokens.upsert(registered_user["id"], "d" * 64, past)

    resp = client.post("/api/refresh", headers=bearer("d" * 64))
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "UNAUTHENTICATED"


# ─── Chirps ───────────────────────────────────────────────────────────────────
def test_create_chirp(client, registered_user, auth_headers):
    resp = client.post("/api/chirps", json={"body": "I had a Kerfuffle"}, headers=auth_headers)
    assert resp.status_code == 201
    assert resp.get_json() == {"id": 1, "body": "I had a ****", "author_id": registered_user["id"]}


def test_create_chirp_requires_auth(client):
    assert client.post("/api/chirps", json={"body": "hi"}).status_code == 401


def test_create_chirp_too_long(client, auth_headers):
    resp = client.post("/api/chirps", json={"body": "a" * 141}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Chirp is too long"


def test_create_chirp_without_body(client, auth_headers):
    assert client.post("/api/chirps", json={}, headers=auth_headers).status_code == 400


def test_list_and_get_chirps(client, auth_headers):
    for body in ("first", "second", "third"):
        client.post("/api/chirps", json={"body": body}, headers=auth_headers)

    resp = client.get("/api/chirps")
    assert resp.status_code == 200
    assert [c["body"] for c in resp.get_json()] == ["first", "second", "third"]

    resp = client.get("/api/chirps?sort=desc")
    assert [c["id"] for c in resp.get_json()] == [3, 2, 1]

    assert client.get("/api/chirps?author_id=1").get_json()[0]["author_id"] == 1
    assert client.get("/api/chirps?author_id=2").get_json() == []
    assert client.get("/api/chirps?author_id=abc").status_code == 400
    assert client.get("/api/chirps?sort=random").status_code == 400

    resp = client.get("/api/chirps/2")
    assert resp.status_code == 200
    assert resp.get_json()["body"] == "second"
    assert client.get("/api/chirps/99").status_code == 404


def test_list_chirps_empty(client):
    resp = client.get("/api/chirps")
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_delete_chirp(client, auth_headers):
    client.post("/api/chirps", json={"body": "mine"}, headers=auth_headers)

    client.post("/api/users", json={"email": "jesse@breakingbad.com", "password": "yo"})
    other = client.post("/api/login", json={"email": "jesse@breakingbad.com", "password": "yo"}).get_json()

    resp = client.delete("/api/chirps/1", headers=bearer(other["token"]))
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "UNAUTHORIZED"

    assert client.delete("/api/chirps/1", headers=auth_headers).status_code == 204
    assert client.get("/api/chirps/1").status_code == 404
    assert client.delete("/api/chirps/1", headers=auth_headers).status_code == 404


# ─── Webhooks ─────────────────────────────────────────────────────────────────
def test_polka_upgrades_user(app, client, registered_user):
    resp = client.post(
        "/api/polka/webhooks",
        json={"event": "user.upgraded", "data": {"user_id": registered_user["id"]}},
        headers=polka(),
    )
    assert resp.status_code == 204

    login = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "123456"})
    assert login.get_json()["is_upgraded"] is True


def test_polka_ignores_other_events(client, registered_user):
    resp = client.post(
        "/api/polka/webhooks",
        json={"event": "user.payment_failed", "data": {"user_id": registered_user["id"]}},
        headers=polka(),
    )
    assert resp.status_code == 204


def test_polka_unknown_user(client):
    resp = client.post("/api/polka/webhooks", json={"event": "user.upgraded", "data": {"user_id": 77}}, headers=polka())
    assert resp.status_code == 404


@pytest.mark.parametrize("headers", [{}, {"Authorization": "ApiKey wrong"}, {"Authorization": "Bearer test-polka-key"}])
def test_polka_requires_api_key(client, headers):
    resp = client.post("/api/polka/webhooks", json={"event": "user.upgraded", "data": {"user_id": 1}}, headers=headers)
    assert resp.status_code == 401


# ─── Storage failures ─────────────────────────────────────────────────────────
def test_corrupt_document_is_a_500(app, client):
    with open(app.config["DB_PATH"], "w") as f:
        f.write("{broken")
    resp = client.get("/api/chirps")
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "STORAGE_FAILURE"
