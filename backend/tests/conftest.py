"""
Pytest 配置和共享 fixtures
"""
import os

# 应用导入前设置：内存数据库，不写入基线数据
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from core.engine.event_bus import EventBus
from app.database import Base, get_db
from app.models import ontology  # noqa: F401
from app.models.ontology import Booking, Guest, Room, Service, User
from app.hotel.services.event_handlers import BookingRoomSync
from app.routers.bookings import get_event_bus
from app.security.auth import get_password_hash, create_access_token
from app.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """会话工厂（房态同步器每次同步使用独立会话）"""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """创建数据库会话"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def test_event_bus():
    """独立事件总线，避免与全局实例互相影响"""
    return EventBus()


@pytest.fixture
def room_sync(session_factory, test_event_bus):
    """注册到测试事件总线的房态同步器"""
    sync = BookingRoomSync(
        db_session_factory=session_factory,
        bus=test_event_bus,
        timeout=5.0,
        release_on_checkout=False,
    )
    sync.register_handlers(test_event_bus)
    yield sync
    sync.shutdown()


@pytest.fixture(scope="function")
def client(db_session, test_event_bus, room_sync):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_bus] = lambda: test_event_bus
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 认证相关 Fixtures ==============

def _create_user(db_session, name, email, role, password="password123"):
    user = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def manager_user(db_session):
    return _create_user(db_session, "经理", "manager@example.com", "manager")


@pytest.fixture
def receptionist_user(db_session):
    return _create_user(db_session, "前台小王", "front@example.com", "receptionist")


@pytest.fixture
def housekeeping_user(db_session):
    return _create_user(db_session, "清洁员小李", "clean@example.com", "housekeeping")


@pytest.fixture
def maintenance_user(db_session):
    return _create_user(db_session, "维修员老张", "fix@example.com", "maintenance")


def _headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role, user.email)}"}


@pytest.fixture
def manager_auth_headers(manager_user):
    """返回经理认证的请求头"""
    return _headers(manager_user)


@pytest.fixture
def receptionist_auth_headers(receptionist_user):
    """返回前台认证的请求头"""
    return _headers(receptionist_user)


@pytest.fixture
def housekeeping_auth_headers(housekeeping_user):
    """返回清洁员认证的请求头"""
    return _headers(housekeeping_user)


@pytest.fixture
def maintenance_auth_headers(maintenance_user):
    """返回维修员认证的请求头"""
    return _headers(maintenance_user)


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_guest(db_session):
    guest = Guest(
        name="John Doe",
        email="john.doe@example.com",
        contact_number="1234567890",
        preferences="Late check-in",
    )
    db_session.add(guest)
    db_session.commit()
    db_session.refresh(guest)
    return guest


@pytest.fixture
def sample_room(db_session):
    """101 单人间，空闲"""
    room = Room(room_number=101, room_type="single", price_per_night=10000, status="available")
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_service(db_session):
    service = Service(service_name="Room Service", service_type="room_service", price=2000)
    db_session.add(service)
    db_session.commit()
    db_session.refresh(service)
    return service


@pytest.fixture
def sample_booking(db_session, sample_guest, sample_room):
    booking = Booking(
        guest_id=sample_guest.id,
        room_id=sample_room.id,
        check_in_date=date(2024, 10, 10),
        check_out_date=date(2024, 10, 15),
        status="booked",
    )
    db_session.add(booking)
    db_session.commit()
    db_session.refresh(booking)
    return booking
