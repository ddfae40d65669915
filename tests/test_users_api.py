from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def _register(email: str = "alice@example.com", password: str = "Secret123"):
    return client.post(
        "/api/users/register",
        json={"name": "Alice", "email": email, "password": password, "phone_number": "+15551234567"},
    )


def _login(email: str = "alice@example.com", password: str = "Secret123"):
    return client.post("/api/users/login", json={"email": email, "password": password})


def _bearer(response) -> dict[str, str]:
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_register_and_login() -> None:
    response = _register()
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "alice@example.com"
    assert "password" not in data and "password_hash" not in data

    login = _login()
    assert login.status_code == 200
    body = login.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] > 0
    assert body["user"]["id"] == data["id"]


def test_register_rejects_duplicate_email() -> None:
    assert _register().status_code == 201
    assert _register().status_code == 409


def test_register_rejects_weak_password() -> None:
    assert _register(password="short").status_code == 422
    assert _register(password="alllowercase1").status_code == 422


def test_login_with_wrong_password_is_unauthorized() -> None:
    _register()

    response = _login(password="Wrong1234")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_protected_routes_require_a_token() -> None:
    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_me_returns_the_caller() -> None:
    _register()
    response = client.get("/api/users/me", headers=_bearer(_login()))

    assert response.status_code == 200
    assert response.json()["name"] == "Alice"


def test_profile_edit_requires_current_password() -> None:
    _register()
    headers = _bearer(_login())

    rejected = client.put(
        "/api/users/me",
        json={"name": "Mallory", "password": "Wrong1234", "password_confirmation": "Wrong1234"},
        headers=headers,
    )
    assert rejected.status_code == 403
    assert client.get("/api/users/me", headers=headers).json()["name"] == "Alice"

    accepted = client.put(
        "/api/users/me",
        json={"name": "Alice Smith", "password": "Secret123", "password_confirmation": "Secret123"},
        headers=headers,
    )
    assert accepted.status_code == 200
    assert accepted.json()["name"] == "Alice Smith"


def test_profile_edit_rejects_mismatched_confirmation() -> None:
    _register()
    response = client.put(
        "/api/users/me",
        json={"name": "Alice", "password": "Secret123", "password_confirmation": "Secret124"},
        headers=_bearer(_login()),
    )

    assert response.status_code == 422


def test_change_password() -> None:
    _register()
    headers = _bearer(_login())

    rejected = client.put(
        "/api/users/me/password",
        json={"old_password": "Wrong1234", "new_password": "Newpass123", "new_password_confirmation": "Newpass123"},
        headers=headers,
    )
    assert rejected.status_code == 403

    accepted = client.put(
        "/api/users/me/password",
        json={"old_password": "Secret123", "new_password": "Newpass123", "new_password_confirmation": "Newpass123"},
        headers=headers,
    )
    assert accepted.status_code == 200
    assert _login().status_code == 401
    assert _login(password="Newpass123").status_code == 200


def test_delete_account_revokes_access() -> None:
    _register()
    headers = _bearer(_login())

    rejected = client.request("DELETE", "/api/users/me", json={"password": "Wrong1234"}, headers=headers)
    assert rejected.status_code == 403

    deleted = client.request("DELETE", "/api/users/me", json={"password": "Secret123"}, headers=headers)
    assert deleted.status_code == 200
    assert client.get("/api/users/me", headers=headers).status_code == 401
    assert _login().status_code == 401
