"""
基线数据测试
"""
import logging

from app.models.ontology import Booking, Feedback, Guest, Room, Service, User
from app.security.auth import verify_password
from app.services.seed_loader import seed_all, seed_if_empty


def test_seed_all_creates_baseline(db_session):
    stats = seed_all(db_session)

    assert stats == {"User": 1, "Guest": 4, "Room": 4, "Booking": 4, "Service": 3, "Feedback": 2}
    admin = db_session.query(User).one()
    assert admin.email == "admin@example.com"
    assert admin.role == "manager"
    assert verify_password("password123", admin.password_hash)

    rooms = {r.room_number: r for r in db_session.query(Room).all()}
    assert rooms[101].price_per_night == 10000
    assert rooms[202].room_type == "suite"
    assert all(r.status == "available" for r in rooms.values())


def test_bookings_link_guests_and_rooms(db_session):
    seed_all(db_session)
    booking = db_session.query(Booking).order_by(Booking.id).first()
    assert booking.guest.email == "john.doe@example.com"
    assert booking.room.room_number == 101
    assert booking.status == "booked"
    assert str(booking.check_in_date) == "2024-10-10"


def test_seed_is_idempotent(db_session, caplog):
    seed_all(db_session)
    with caplog.at_level(logging.INFO, logger="app.services.seed_loader"):
        stats = seed_all(db_session)

    assert not any(stats.values())
    assert db_session.query(Guest).count() == 4
    assert db_session.query(Service).count() == 3
    assert "Room already exist, skipping seeding" in caplog.text


def test_seed_only_empty_tables(db_session, sample_room):
    assert seed_if_empty(db_session, "Room") == 0
    assert db_session.query(Room).count() == 1
    assert seed_if_empty(db_session, "Guest") == 4


def test_feedback_seeded(db_session):
    seed_all(db_session)
    ratings = sorted(f.rating for f in db_session.query(Feedback).all())
    assert ratings == [4, 5]
