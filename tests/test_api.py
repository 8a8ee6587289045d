"""API endpoint tests for health and authentication."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from src.config import get_settings
from src.services.auth import create_access_token


def test_root_banner(client):
    """Test the plain-text banner at the root."""
    response = client.get("/")
    assert response.status_code == 200
    assert "HomeworkHub" in response.text


def test_health_check(client, auth_headers):
    """Test health check endpoint reports record counts."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["users"] == 1
    assert data["assignments"] == 0


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"username": "newuser", "email": "newuser@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["username"] == "newuser"
    assert data["user"]["email"] == "newuser@example.com"
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails regardless of other fields."""
    response = client.post(
        "/api/auth/register",
        json={"username": "someone else", "email": auth_headers.email, "password": "different1"},
    )
    assert response.status_code == 400
    assert "already registered" in response.json()["detail"]


def test_register_duplicate_email_is_case_insensitive(client, auth_headers):
    """Test that email uniqueness ignores case."""
    response = client.post(
        "/api/auth/register",
        json={"username": "shouty", "email": "TEST@EXAMPLE.COM", "password": "password123"},
    )
    assert response.status_code == 400


def test_register_missing_fields(client):
    """Test registration without a username is rejected."""
    response = client.post(
        "/api/auth/register",
        json={"email": "nouser@example.com", "password": "password123"},
    )
    assert response.status_code == 400


def test_register_blank_username(client):
    """Test registration with a whitespace-only username is rejected."""
    response = client.post(
        "/api/auth/register",
        json={"username": "   ", "email": "blank@example.com", "password": "password123"},
    )
    assert response.status_code == 400


def test_login(client, auth_headers):
    """Test login resolves to the same user as registration."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == auth_headers.user_id

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == auth_headers.user_id


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_login_unknown_email(client):
    """Test login does not create accounts for unknown emails."""
    response = client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "whatever1"}
    )
    assert response.status_code == 401

    health = client.get("/api/health")
    assert health.json()["users"] == 0


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email


def test_missing_token(client):
    """Test that protected endpoints require a token."""
    response = client.get("/api/assignments")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


def test_raw_token_without_bearer_scheme(client, auth_headers):
    """Test that a bare token is rejected as malformed."""
    raw_token = auth_headers["Authorization"].removeprefix("Bearer ")
    response = client.get("/api/assignments", headers={"Authorization": raw_token})
    assert response.status_code == 401
    assert "Bearer" in response.json()["detail"]


def test_garbage_token(client):
    """Test that an undecodable token is rejected."""
    response = client.get("/api/assignments", headers={"Authorization": "Bearer jwt_token_123"})
    assert response.status_code == 401


def test_token_for_unknown_user(client):
    """Test that a validly signed token for a missing user is rejected."""
    token = create_access_token("00000000-0000-0000-0000-000000000000")
    response = client.get("/api/assignments", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"


def test_expired_token(client, auth_headers):
    """Test that an expired token is rejected."""
    settings = get_settings()
    token = jwt.encode(
        {"sub": auth_headers.user_id, "exp": datetime.now(UTC) - timedelta(minutes=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    response = client.get("/api/assignments", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_token_signed_with_wrong_secret(client, auth_headers):
    """Test that a forged token is rejected."""
    token = jwt.encode(
        {"sub": auth_headers.user_id, "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "not-the-secret",
        algorithm="HS256",
    )
    response = client.get("/api/assignments", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_register_password_over_bcrypt_limit(client):
    """Test that passwords bcrypt would truncate are rejected."""
    response = client.post(
        "/api/auth/register",
        json={"username": "long", "email": "long@example.com", "password": "é" * 37},
    )
    assert response.status_code == 400

    health = client.get("/api/health")
    assert health.json()["users"] == 0
