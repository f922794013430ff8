"""Tests for signup, login and bearer-token identity."""
from tests.conftest import auth, create_test_user


class TestSignup:

    def test_signup_returns_user_and_token(self, client):
        data = create_test_user(client, email="Alice@Example.com", role="ORGANIZER")
        assert data["user"]["email"] == "alice@example.com"
        assert data["user"]["role"] == "ORGANIZER"
        assert data["token"]

    def test_signup_defaults_to_attendee(self, client):
        resp = client.post("/api/users/signup", json={"email": "bob@example.com", "password": "pw"})
        assert resp.status_code == 201
        assert resp.json()["user"]["role"] == "ATTENDEE"

    def test_duplicate_email_conflict(self, client):
        create_test_user(client, email="dup@example.com")
        resp = client.post("/api/users/signup", json={"email": "dup@example.com", "password": "pw"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "conflict"

    def test_unknown_role_rejected(self, client):
        resp = client.post("/api/users/signup", json={"email": "x@example.com", "password": "pw", "role": "ROOT"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "validation_error"


class TestLogin:

    def test_login_with_valid_password(self, client):
        create_test_user(client, email="carol@example.com", password="correct horse")
        resp = client.post("/api/users/login", json={"email": "carol@example.com", "password": "correct horse"})
        assert resp.status_code == 200
        assert resp.json()["user"]["email"] == "carol@example.com"

    def test_login_with_wrong_password(self, client):
        create_test_user(client, email="dave@example.com", password="right")
        resp = client.post("/api/users/login", json={"email": "dave@example.com", "password": "wrong"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "authentication_error"

    def test_login_unknown_email(self, client):
        resp = client.post("/api/users/login", json={"email": "ghost@example.com", "password": "pw"})
        assert resp.status_code == 401


class TestMe:

    def test_me_returns_token_owner(self, client):
        user = create_test_user(client, email="erin@example.com", role="ADMIN")
        resp = client.get("/api/users/me", headers=auth(user))
        assert resp.status_code == 200
        assert resp.json()["id"] == user["user"]["id"]
        assert resp.json()["role"] == "ADMIN"

    def test_me_without_token(self, client):
        resp = client.get("/api/users/me")
        assert resp.status_code == 401

    def test_me_with_garbage_token(self, client):
        resp = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid token"
