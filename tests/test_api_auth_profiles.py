from __future__ import annotations

from datetime import timedelta

from friendzone.core.security import create_access_token

PASSWORD = "correct-horse"


def test_register_returns_token_and_profile(api_client, register) -> None:
    alice = register("alice")

    me = api_client.get("/api/v1/auth/me", headers=alice["headers"])
    assert me.status_code == 200
    assert me.json()["id"] == alice["id"]
    assert me.json()["username"] == "alice"
    assert me.json()["full_name"] == "Alice"


def test_register_rejects_taken_email_and_username(api_client, register) -> None:
    register("alice")

    resp = api_client.post(
        "/api/v1/auth/register",
        json={"email": "alice@example.com", "password": PASSWORD, "username": "alice2"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already registered"

    resp = api_client.post(
        "/api/v1/auth/register",
        json={"email": "other@example.com", "password": PASSWORD, "username": "alice"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already taken"


def test_register_validates_input(api_client) -> None:
    resp = api_client.post(
        "/api/v1/auth/register",
        json={"email": "not-an-email", "password": "123", "username": "a b"},
    )
    assert resp.status_code == 422


def test_login(api_client, register) -> None:
    register("alice")

    ok = api_client.post(
        "/api/v1/auth/login",
        data={"username": "Alice@Example.com", "password": PASSWORD},
    )
    assert ok.status_code == 200
    token = ok.json()["access_token"]
    assert ok.json()["token_type"] == "bearer"

    me = api_client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["username"] == "alice"

    bad = api_client.post(
        "/api/v1/auth/login",
        data={"username": "alice@example.com", "password": "wrong-password"},
    )
    assert bad.status_code == 401
    assert bad.headers["WWW-Authenticate"] == "Bearer"


def test_requests_without_valid_token_are_unauthorized(api_client) -> None:
    assert api_client.get("/api/v1/profiles/me").status_code == 401
    resp = api_client.get("/api/v1/posts", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401


def test_update_my_profile(api_client, register) -> None:
    alice = register("alice")

    resp = api_client.put(
        "/api/v1/profiles/me",
        json={"bio": "Poet of numbers", "avatar_url": "https://cdn.example.com/a.png"},
        headers=alice["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["bio"] == "Poet of numbers"
    assert resp.json()["username"] == "alice"

    bad_url = api_client.put("/api/v1/profiles/me", json={"avatar_url": "ftp://x"}, headers=alice["headers"])
    assert bad_url.status_code == 422


def test_profile_fields_cannot_be_cleared_with_null(api_client, register) -> None:
    alice = register("alice")

    for field in ("username", "full_name", "bio", "avatar_url"):
        resp = api_client.put("/api/v1/profiles/me", json={field: None}, headers=alice["headers"])
        assert resp.status_code == 422, field

    me = api_client.get("/api/v1/auth/me", headers=alice["headers"]).json()
    assert (me["username"], me["full_name"]) == ("alice", "Alice")


def test_taken_username_update_fails_generically(api_client, register) -> None:
    register("alice")
    bob = register("bob")

    resp = api_client.put("/api/v1/profiles/me", json={"username": "alice"}, headers=bob["headers"])
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Operation failed"}


def test_lookup_and_discover(api_client, register) -> None:
    alice = register("alice")
    bob = register("bob")
    register("carol")

    by_id = api_client.get(f"/api/v1/profiles/{bob['id']}", headers=alice["headers"])
    assert by_id.status_code == 200
    assert by_id.json()["username"] == "bob"

    by_name = api_client.get("/api/v1/profiles/by-username/carol", headers=alice["headers"])
    assert by_name.status_code == 200

    missing = api_client.get("/api/v1/profiles/by-username/nobody", headers=alice["headers"])
    assert missing.status_code == 404

    discover = api_client.get("/api/v1/profiles/discover", headers=alice["headers"])
    assert discover.status_code == 200
    assert sorted(p["username"] for p in discover.json()) == ["bob", "carol"]


def test_delete_my_profile_removes_content(api_client, register) -> None:
    alice = register("alice")
    bob = register("bob")
    post = api_client.post("/api/v1/posts", json={"content": "bye soon"}, headers=alice["headers"]).json()

    resp = api_client.delete("/api/v1/profiles/me", headers=alice["headers"])
    assert resp.status_code == 200

    assert api_client.get("/api/v1/profiles/me", headers=alice["headers"]).status_code == 404
    assert api_client.get(f"/api/v1/posts/{post['id']}", headers=bob["headers"]).status_code == 404


def test_health(api_client) -> None:
    assert api_client.get("/health").json() == {"status": "healthy"}


def test_expired_or_orphaned_tokens_are_unauthorized(api_client, register) -> None:
    alice = register("alice")

    expired = create_access_token(alice["id"], expires_delta=timedelta(seconds=-5))
    resp = api_client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401

    orphan = create_access_token("no-such-user")
    resp = api_client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {orphan}"})
    assert resp.status_code == 401
