from datetime import timedelta

from auth import create_access_token
from conftest import make_user


def test_missing_token(client):
    assert client.get("/api/groups").status_code == 401


def test_invalid_token(client):
    response = client.get("/api/groups", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_expired_token(client, test_user):
    token = create_access_token({"sub": test_user.email}, expires_delta=timedelta(minutes=-1))
    response = client.get("/api/groups", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_unknown_user(client, db_session):
    token = create_access_token({"sub": "nobody@example.com"})
    response = client.get("/api/groups", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_inactive_user(client, db_session):
    user = make_user(db_session, "gone@example.com", "Gone")
    user.is_active = False
    db_session.commit()

    token = create_access_token({"sub": "gone@example.com"})
    response = client.get("/api/groups", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_valid_token(client, auth_headers):
    assert client.get("/api/groups", headers=auth_headers).status_code == 200
