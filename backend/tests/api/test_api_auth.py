"""
认证 API 测试
"""
from fastapi.testclient import TestClient


class TestLogin:

    def test_login_success(self, client: TestClient, manager_user):
        response = client.post("/auth/login", json={
            "email": "manager@example.com",
            "password": "password123"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 60 * 60 * 24 * 30
        assert data["session"]["data"] == {"id": str(manager_user.id), "role": "manager"}

    def test_login_wrong_password(self, client: TestClient, manager_user):
        response = client.post("/auth/login", json={
            "email": "manager@example.com",
            "password": "wrong"
        })
        assert response.status_code == 401

    def test_login_unknown_email(self, client: TestClient):
        response = client.post("/auth/login", json={
            "email": "nobody@example.com",
            "password": "password123"
        })
        assert response.status_code == 401

    def test_login_token_works(self, client: TestClient, receptionist_user):
        token = client.post("/auth/login", json={
            "email": "front@example.com",
            "password": "password123"
        }).json()["access_token"]

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "front@example.com"
        assert "password_hash" not in response.json()


class TestSession:

    def test_me_requires_token(self, client: TestClient):
        assert client.get("/auth/me").status_code in (401, 403)

    def test_invalid_token(self, client: TestClient):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_token_of_deleted_user(self, client: TestClient, db_session, receptionist_user, receptionist_auth_headers):
        db_session.delete(receptionist_user)
        db_session.commit()
        response = client.get("/rooms/", headers=receptionist_auth_headers)
        assert response.status_code == 401


class TestFirstUser:

    def test_init_status(self, client: TestClient):
        assert client.get("/auth/init").json() == {"initialized": False}

    def test_init_creates_manager(self, client: TestClient):
        response = client.post("/auth/init", json={
            "name": "Owner",
            "email": "owner@example.com",
            "password": "password123"
        })

        assert response.status_code == 200
        assert response.json()["session"]["data"]["role"] == "manager"
        assert client.get("/auth/init").json() == {"initialized": True}

    def test_init_closed_once_users_exist(self, client: TestClient, receptionist_user):
        response = client.post("/auth/init", json={
            "name": "Owner",
            "email": "owner@example.com",
            "password": "password123"
        })
        assert response.status_code == 400

    def test_init_password_too_short(self, client: TestClient):
        response = client.post("/auth/init", json={
            "name": "Owner",
            "email": "owner@example.com",
            "password": "short"
        })
        assert response.status_code == 422
