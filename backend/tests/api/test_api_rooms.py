"""
房间管理 API 测试
"""
from fastapi.testclient import TestClient

from app.models.ontology import Room


def _room(db_session, number, status):
    room = Room(room_number=number, room_type="double", price_per_night=15000, status=status)
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


class TestRoomCrud:

    def test_manager_creates_room(self, client: TestClient, manager_auth_headers):
        response = client.post("/rooms/", headers=manager_auth_headers, json={
            "room_number": 301,
            "room_type": "suite",
            "price_per_night": 25000
        })

        assert response.status_code == 200
        data = response.json()
        assert data["room_number"] == 301
        assert data["status"] == "available"

    def test_receptionist_cannot_create_room(self, client: TestClient, receptionist_auth_headers):
        response = client.post("/rooms/", headers=receptionist_auth_headers, json={
            "room_number": 301,
            "room_type": "suite",
            "price_per_night": 25000
        })
        assert response.status_code == 403

    def test_duplicate_room_number(self, client: TestClient, manager_auth_headers, sample_room):
        response = client.post("/rooms/", headers=manager_auth_headers, json={
            "room_number": 101,
            "room_type": "single",
            "price_per_night": 10000
        })
        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_list_with_status_filter(self, client: TestClient, housekeeping_auth_headers, db_session):
        _room(db_session, 101, "available")
        _room(db_session, 102, "cleaning")

        response = client.get("/rooms/", params={"status": "cleaning"}, headers=housekeeping_auth_headers)
        assert response.status_code == 200
        assert [r["room_number"] for r in response.json()] == [102]

    def test_get_missing_room(self, client: TestClient, manager_auth_headers):
        assert client.get("/rooms/999", headers=manager_auth_headers).status_code == 404

    def test_delete_manager_only(self, client: TestClient, receptionist_auth_headers, manager_auth_headers, sample_room):
        assert client.delete(f"/rooms/{sample_room.id}", headers=receptionist_auth_headers).status_code == 403
        assert client.delete(f"/rooms/{sample_room.id}", headers=manager_auth_headers).status_code == 200


class TestRoomStatusGuard:

    def test_housekeeping_finishes_cleaning(self, client: TestClient, housekeeping_auth_headers, db_session):
        room = _room(db_session, 102, "cleaning")
        response = client.put(f"/rooms/{room.id}", headers=housekeeping_auth_headers, json={"status": "available"})
        assert response.status_code == 200
        assert response.json()["status"] == "available"

    def test_housekeeping_cannot_touch_occupied_room(self, client: TestClient, housekeeping_auth_headers, db_session):
        room = _room(db_session, 102, "occupied")
        response = client.put(f"/rooms/{room.id}", headers=housekeeping_auth_headers, json={"status": "available"})
        assert response.status_code == 403

    def test_maintenance_releases_room(self, client: TestClient, maintenance_auth_headers, db_session):
        room = _room(db_session, 102, "maintenance")
        response = client.put(f"/rooms/{room.id}", headers=maintenance_auth_headers, json={"status": "cleaning"})
        assert response.status_code == 200

    def test_receptionist_can_update_price(self, client: TestClient, receptionist_auth_headers, sample_room):
        response = client.put(f"/rooms/{sample_room.id}", headers=receptionist_auth_headers, json={
            "price_per_night": 12000
        })
        assert response.status_code == 200
        assert response.json()["price_per_night"] == 12000

    def test_invalid_status_value(self, client: TestClient, manager_auth_headers, sample_room):
        response = client.put(f"/rooms/{sample_room.id}", headers=manager_auth_headers, json={"status": "haunted"})
        assert response.status_code == 422
