"""
基线数据：启动时按表写入，表内已有任何记录则跳过（幂等）
"""
from datetime import date
from typing import Any, Callable, Dict, List
import logging

from sqlalchemy.orm import Session

from app.security.auth import get_password_hash
from app.services.gateway import ResourceGateway, ValidationFailed

logger = logging.getLogger(__name__)


SEED_USERS = [
    {"name": "Admin User", "email": "admin@example.com", "password": "password123", "role": "manager"},
]

SEED_GUESTS = [
    {"name": "John Doe", "email": "john.doe@example.com",
     "contact_number": "1234567890", "preferences": "Late check-in, Non-smoking room"},
    {"name": "Jane Smith", "email": "jane.smith@example.com",
     "contact_number": "0987654321", "preferences": "Allergy-friendly bedding"},
    {"name": "Alice Johnson", "email": "alice.johnson@example.com",
     "contact_number": "5551234567", "preferences": "Early check-in"},
    {"name": "Bob Brown", "email": "bob.brown@example.com",
     "contact_number": "5559876543", "preferences": "Vegetarian meal"},
]

SEED_ROOMS = [
    {"room_number": 101, "room_type": "single", "price_per_night": 10000, "status": "available"},
    {"room_number": 102, "room_type": "double", "price_per_night": 15000, "status": "available"},
    {"room_number": 201, "room_type": "suite", "price_per_night": 25000, "status": "available"},
    {"room_number": 202, "room_type": "suite", "price_per_night": 30000, "status": "available"},
]

# 客人按 email、房间按房号关联
SEED_BOOKINGS = [
    {"guest": "john.doe@example.com", "room": 101,
     "check_in_date": date(2024, 10, 10), "check_out_date": date(2024, 10, 15)},
    {"guest": "jane.smith@example.com", "room": 102,
     "check_in_date": date(2024, 10, 12), "check_out_date": date(2024, 10, 20)},
    {"guest": "alice.johnson@example.com", "room": 201,
     "check_in_date": date(2024, 10, 15), "check_out_date": date(2024, 10, 22)},
    {"guest": "bob.brown@example.com", "room": 202,
     "check_in_date": date(2024, 10, 18), "check_out_date": date(2024, 10, 25)},
]

SEED_SERVICES = [
    {"service_name": "Room Service", "service_type": "room_service", "price": 2000},
    {"service_name": "Food and Beverage", "service_type": "food_beverage", "price": 1500},
    {"service_name": "Transport", "service_type": "transport", "price": 3000},
]

SEED_FEEDBACK = [
    {"guest": "john.doe@example.com", "rating": 5,
     "comments": "Excellent stay! The room was clean and the staff was friendly."},
    {"guest": "jane.smith@example.com", "rating": 4,
     "comments": "Great location and comfortable beds, but the Wi-Fi was slow."},
]


def _user_rows(gateway: ResourceGateway) -> List[Dict[str, Any]]:
    rows = []
    for user in SEED_USERS:
        row = dict(user)
        row["password_hash"] = get_password_hash(row.pop("password"))
        rows.append(row)
    return rows


def _guest_id(gateway: ResourceGateway, email: str) -> int:
    guest = gateway.find_one("Guest", {"email": email})
    if guest is None:
        raise ValidationFailed(f"Seed references unknown guest {email}")
    return guest.id


def _room_id(gateway: ResourceGateway, room_number: int) -> int:
    room = gateway.find_one("Room", {"room_number": room_number})
    if room is None:
        raise ValidationFailed(f"Seed references unknown room {room_number}")
    return room.id


def _booking_rows(gateway: ResourceGateway) -> List[Dict[str, Any]]:
    rows = []
    for booking in SEED_BOOKINGS:
        row = dict(booking, status="booked")
        row["guest_id"] = _guest_id(gateway, row.pop("guest"))
        row["room_id"] = _room_id(gateway, row.pop("room"))
        rows.append(row)
    return rows


def _feedback_rows(gateway: ResourceGateway) -> List[Dict[str, Any]]:
    rows = []
    for feedback in SEED_FEEDBACK:
        row = dict(feedback)
        row["guest_id"] = _guest_id(gateway, row.pop("guest"))
        rows.append(row)
    return rows


# 顺序即写入顺序（预订依赖客人和房间）
SEED_PLAN: Dict[str, Callable[[ResourceGateway], List[Dict[str, Any]]]] = {
    "User": _user_rows,
    "Guest": lambda gateway: [dict(row) for row in SEED_GUESTS],
    "Room": lambda gateway: [dict(row) for row in SEED_ROOMS],
    "Booking": _booking_rows,
    "Service": lambda gateway: [dict(row) for row in SEED_SERVICES],
    "Feedback": _feedback_rows,
}


def seed_if_empty(db: Session, kind: str) -> int:
    """表为空时写入基线数据，返回写入条数"""
    gateway = ResourceGateway(db)
    if gateway.count(kind) > 0:
        logger.info(f"{kind} already exist, skipping seeding")
        return 0

    records = gateway.create_many(kind, SEED_PLAN[kind](gateway))
    logger.info(f"Seeded {len(records)} {kind} record(s)")
    return len(records)


def seed_all(db: Session) -> Dict[str, int]:
    """Seed every baseline kind. Idempotent.

    Returns dict with count of created items per kind.
    """
    return {kind: seed_if_empty(db, kind) for kind in SEED_PLAN}
