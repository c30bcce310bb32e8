from datetime import datetime, timedelta, timezone

import jwt
import pytest

from medsales.core.config import settings
from medsales.core.exceptions import ValidationError
from medsales.core.security.jwt import ALGORITHM
from medsales.core.security.password import hash_password
from medsales.models.user import User, UserRole

API = "/api/auth"
PASSWORD = "Sup3r-secret"


def login(client, username, password):
    return client.post(f"{API}/login", json={"username": username, "password": password})


def test_login(client, db):
    User.ensure(db, "admin", PASSWORD)

    response = login(client, "admin", PASSWORD)
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["tokenType"] == "Bearer"
    assert data["user"]["username"] == "admin"
    assert data["user"]["role"] == "admin"
    assert data["expiresAt"] > datetime.now(timezone.utc).timestamp()

    claims = jwt.decode(data["token"], settings.SECRET_KEY, algorithms=[ALGORITHM])
    assert claims["username"] == "admin"


def test_password_is_stored_hashed(db):
    user = User.ensure(db, "editor", PASSWORD, UserRole.editor)
    assert user.password != PASSWORD
    assert user.password.startswith("$2")


def test_login_rejects_bad_credentials(client, db):
    User.ensure(db, "admin", PASSWORD)

    for username, password in (("admin", "wrong"), ("nobody", PASSWORD)):
        response = login(client, username, password)
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}


def test_login_requires_both_fields(client):
    response = login(client, "admin", "")
    assert response.status_code == 400
    assert response.json()["error"] == "Username and password are required"


def test_inactive_user_cannot_login(client, db):
    user = User.ensure(db, "former", PASSWORD, UserRole.editor)
    user.is_active = False
    user.save(db)

    response = login(client, "former", PASSWORD)
    assert response.status_code == 401
    assert response.json()["error"] == "Inactive user"


def test_oauth2_form_login(client, db):
    User.ensure(db, "admin", PASSWORD)

    response = client.post(
        f"{API}/login/oauth2", data={"username": "admin", "password": PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert response.json()["access_token"]


def test_verify(client, editor_headers):
    response = client.post(f"{API}/verify", headers=editor_headers)
    assert response.status_code == 200
    assert response.json()["data"]["user"]["role"] == "editor"


def test_verify_without_token(client):
    response = client.post(f"{API}/verify")
    assert response.status_code == 401
    assert response.json()["error"] == "Authorization token required"


def test_expired_token(client, db):
    user = User.ensure(db, "admin", PASSWORD)
    token = jwt.encode(
        {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value,
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        settings.SECRET_KEY,
        algorithm=ALGORITHM,
    )

    response = client.post(f"{API}/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Token has expired"


def test_token_signed_with_other_key(client, db):
    user = User.ensure(db, "admin", PASSWORD)
    token = jwt.encode(
        {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        "some-other-secret-key-of-reasonable-length",
        algorithm=ALGORITHM,
    )

    response = client.post(f"{API}/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_refresh(client, admin_headers):
    response = client.post(f"{API}/refresh", headers=admin_headers)
    assert response.status_code == 200

    data = response.json()["data"]
    claims = jwt.decode(data["token"], settings.SECRET_KEY, algorithms=[ALGORITHM])
    assert claims["role"] == "admin"
    assert data["expiresAt"] == claims["exp"]


def test_unknown_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "API endpoint not found"}


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"


def test_overlong_password_is_rejected(client, db):
    User.ensure(db, "admin", PASSWORD)

    with pytest.raises(ValidationError):
        hash_password("x" * 73)
    assert login(client, "admin", PASSWORD + "x" * 80).status_code == 401
