"""
本体对象定义 (Ontology Objects)
酒店后台的全部记录类型：员工账号、客人、房间、预订、服务、客房清洁与维修工单等
状态类字段以字符串存储，取值由下方枚举约束
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, Date, Boolean,
    ForeignKey, Text, Table
)
from sqlalchemy.orm import relationship
from app.database import Base


# ============== 枚举定义 ==============

class UserRole(str, Enum):
    """员工角色"""
    MANAGER = "manager"            # 经理
    RECEPTIONIST = "receptionist"  # 前台
    HOUSEKEEPING = "housekeeping"  # 客房清洁
    MAINTENANCE = "maintenance"    # 维修


class RoomType(str, Enum):
    """房型"""
    SINGLE = "single"
    DOUBLE = "double"
    SUITE = "suite"


class RoomStatus(str, Enum):
    """房间状态 - 房态同步的目标"""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"


class BookingStatus(str, Enum):
    """预订状态 - 房态同步的触发源"""
    BOOKED = "booked"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class ServiceType(str, Enum):
    ROOM_SERVICE = "room_service"
    LAUNDRY = "laundry"
    SPA = "spa"
    FOOD_BEVERAGE = "food_beverage"
    TRANSPORT = "transport"


class ServiceAvailability(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class HousekeepingStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MaintenanceStatus(str, Enum):
    REPORTED = "reported"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class ServiceRequestStatus(str, Enum):
    REQUESTED = "requested"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SupportRequestStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


# ============== 本体对象定义 ==============

booking_services = Table(
    "booking_services",
    Base.metadata,
    Column("booking_id", Integer, ForeignKey("bookings.id", ondelete="CASCADE"), primary_key=True),
    Column("service_id", Integer, ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """
    员工账号
    email 为登录标识，password_hash 为 bcrypt 哈希
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.RECEPTIONIST.value)
    created_at = Column(DateTime, default=datetime.utcnow)


class Guest(Base):
    """客人"""
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    contact_number = Column(String(30), nullable=False)
    preferences = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    bookings = relationship("Booking", back_populates="guest")
    feedback = relationship("Feedback", back_populates="guest")


class Room(Base):
    """
    房间
    price_per_night 以分为单位（10000 = $100.00）
    """
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(Integer, unique=True, nullable=False, index=True)
    room_type = Column(String(20), nullable=False)
    price_per_night = Column(Integer, nullable=False)
    status = Column(String(20), default=RoomStatus.AVAILABLE.value)
    room_image = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow)

    bookings = relationship("Booking", back_populates="room")


class Booking(Base):
    """
    预订 - 每条预订恰好关联一个房间
    total_amount 以分为单位
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"))
    room_id = Column(Integer, ForeignKey("rooms.id"))
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.BOOKED.value)
    total_amount = Column(Integer)
    created_at = Column(DateTime, default=datetime.utcnow)

    guest = relationship("Guest", back_populates="bookings")
    room = relationship("Room", back_populates="bookings")
    services = relationship("Service", secondary=booking_services)
    expenses = relationship("Expense", back_populates="booking")

    @property
    def service_ids(self):
        return [service.id for service in self.services]


class Expense(Base):
    """预订附加费用（分）"""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Integer, nullable=False)
    booking_id = Column(Integer, ForeignKey("bookings.id"))
    created_at = Column(DateTime, default=datetime.utcnow)

    booking = relationship("Booking", back_populates="expenses")


class Service(Base):
    """附加服务（洗衣、SPA、餐饮等），price 以分为单位，duration 以分钟为单位"""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    service_name = Column(String(100), nullable=False)
    service_type = Column(String(30), nullable=False)
    price = Column(Integer, nullable=False)
    duration = Column(Integer)
    description = Column(Text)
    is_recurring = Column(Boolean, default=False)
    availability = Column(String(20), default=ServiceAvailability.AVAILABLE.value)
    created_at = Column(DateTime, default=datetime.utcnow)


class Housekeeping(Base):
    """客房清洁工单"""
    __tablename__ = "housekeeping"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"))
    staff_id = Column(Integer, ForeignKey("users.id"))
    status = Column(String(20), default=HousekeepingStatus.PENDING.value)
    comments = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    room = relationship("Room")
    staff = relationship("User")


class MaintenanceRequest(Base):
    """维修工单 - 任何人（包括客人）都可以提交"""
    __tablename__ = "maintenance_requests"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"))
    reported_by_id = Column(Integer, ForeignKey("users.id"))
    description = Column(Text, nullable=False)
    status = Column(String(20), default=MaintenanceStatus.REPORTED.value)
    created_at = Column(DateTime, default=datetime.utcnow)

    room = relationship("Room")
    reported_by = relationship("User")


class ServiceRequest(Base):
    """客人发起的服务请求"""
    __tablename__ = "service_requests"

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"))
    service_id = Column(Integer, ForeignKey("services.id"))
    status = Column(String(20), default=ServiceRequestStatus.REQUESTED.value)
    comments = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    guest = relationship("Guest")
    service = relationship("Service")


class Feedback(Base):
    """客人评价，rating 取值 1-10"""
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"))
    rating = Column(Integer, nullable=False)
    comments = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    guest = relationship("Guest", back_populates="feedback")


class SupportRequest(Base):
    """客人支持请求"""
    __tablename__ = "support_requests"

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"))
    subject = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), default=SupportRequestStatus.OPEN.value)
    created_at = Column(DateTime, default=datetime.utcnow)

    guest = relationship("Guest")
