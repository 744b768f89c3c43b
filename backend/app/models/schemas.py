"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime, date
from typing import Optional, List, Dict
from pydantic import BaseModel, Field, ConfigDict, EmailStr, model_validator
from app.models.ontology import (
    UserRole, RoomType, RoomStatus, BookingStatus, ServiceType, ServiceAvailability,
    HousekeepingStatus, MaintenanceStatus, ServiceRequestStatus, SupportRequestStatus
)


# ============== 认证 Schemas ==============

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionData(BaseModel):
    id: str
    role: UserRole


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    session: Dict[str, SessionData]


# ============== 员工 Schemas ==============

class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: UserRole


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)


class FirstUserCreate(BaseModel):
    """首个账号：角色固定为 manager"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    password: Optional[str] = Field(None, min_length=8)


class UserResponse(UserBase):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 客人 Schemas ==============

class GuestBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    contact_number: str = Field(..., min_length=1, max_length=30)
    preferences: Optional[str] = None


class GuestCreate(GuestBase):
    pass


class GuestUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    contact_number: Optional[str] = Field(None, min_length=1, max_length=30)
    preferences: Optional[str] = None


class GuestResponse(GuestBase):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 房间 Schemas ==============

class RoomBase(BaseModel):
    room_number: int = Field(..., gt=0)
    room_type: RoomType
    price_per_night: int = Field(..., ge=0, description="Price in cents (e.g., 10000 for $100.00)")


class RoomCreate(RoomBase):
    status: RoomStatus = RoomStatus.AVAILABLE
    room_image: Optional[str] = None


class RoomUpdate(BaseModel):
    room_number: Optional[int] = Field(None, gt=0)
    room_type: Optional[RoomType] = None
    price_per_night: Optional[int] = Field(None, ge=0)
    status: Optional[RoomStatus] = None
    room_image: Optional[str] = None


class RoomResponse(RoomBase):
    id: int
    status: RoomStatus
    room_image: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 预订 Schemas ==============

class BookingBase(BaseModel):
    guest_id: Optional[int] = None
    room_id: Optional[int] = None
    check_in_date: date
    check_out_date: date
    total_amount: Optional[int] = Field(None, ge=0, description="Total amount in cents")

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_out_date < self.check_in_date:
            raise ValueError("check_out_date must not be before check_in_date")
        return self


class BookingCreate(BookingBase):
    status: BookingStatus = BookingStatus.BOOKED
    service_ids: List[int] = Field(default_factory=list)


class BookingUpdate(BaseModel):
    guest_id: Optional[int] = None
    room_id: Optional[int] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    status: Optional[BookingStatus] = None
    total_amount: Optional[int] = Field(None, ge=0)
    service_ids: Optional[List[int]] = None


class BookingResponse(BaseModel):
    id: int
    guest_id: Optional[int] = None
    room_id: Optional[int] = None
    check_in_date: date
    check_out_date: date
    status: BookingStatus
    total_amount: Optional[int] = None
    service_ids: List[int] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 工单 Schemas ==============

class HousekeepingCreate(BaseModel):
    room_id: Optional[int] = None
    staff_id: Optional[int] = None
    status: HousekeepingStatus = HousekeepingStatus.PENDING
    comments: Optional[str] = None


class HousekeepingUpdate(BaseModel):
    room_id: Optional[int] = None
    staff_id: Optional[int] = None
    status: Optional[HousekeepingStatus] = None
    comments: Optional[str] = None


class HousekeepingResponse(HousekeepingCreate):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class MaintenanceRequestCreate(BaseModel):
    room_id: Optional[int] = None
    reported_by_id: Optional[int] = None
    description: str = Field(..., min_length=1)
    status: MaintenanceStatus = MaintenanceStatus.REPORTED


class MaintenanceRequestUpdate(BaseModel):
    room_id: Optional[int] = None
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[MaintenanceStatus] = None


class MaintenanceRequestResponse(MaintenanceRequestCreate):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 服务与客人反馈 Schemas ==============

class ServiceCreate(BaseModel):
    service_name: str = Field(..., min_length=1, max_length=100)
    service_type: ServiceType
    price: int = Field(..., ge=0, description="Price in cents")
    duration: Optional[int] = Field(None, ge=0, description="Duration in minutes")
    description: Optional[str] = None
    is_recurring: bool = False
    availability: ServiceAvailability = ServiceAvailability.AVAILABLE


class ServiceUpdate(BaseModel):
    service_name: Optional[str] = Field(None, min_length=1, max_length=100)
    service_type: Optional[ServiceType] = None
    price: Optional[int] = Field(None, ge=0)
    duration: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    is_recurring: Optional[bool] = None
    availability: Optional[ServiceAvailability] = None


class ServiceResponse(ServiceCreate):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    amount: int = Field(..., description="Amount in cents")
    booking_id: Optional[int] = None


class ExpenseUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[int] = None
    booking_id: Optional[int] = None


class ExpenseResponse(ExpenseCreate):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ServiceRequestCreate(BaseModel):
    guest_id: Optional[int] = None
    service_id: Optional[int] = None
    status: ServiceRequestStatus = ServiceRequestStatus.REQUESTED
    comments: Optional[str] = None


class ServiceRequestUpdate(BaseModel):
    guest_id: Optional[int] = None
    service_id: Optional[int] = None
    status: Optional[ServiceRequestStatus] = None
    comments: Optional[str] = None


class ServiceRequestResponse(ServiceRequestCreate):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class FeedbackCreate(BaseModel):
    guest_id: Optional[int] = None
    rating: int = Field(..., ge=1, le=10)
    comments: Optional[str] = None


class FeedbackUpdate(BaseModel):
    guest_id: Optional[int] = None
    rating: Optional[int] = Field(None, ge=1, le=10)
    comments: Optional[str] = None


class FeedbackResponse(FeedbackCreate):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class SupportRequestCreate(BaseModel):
    guest_id: Optional[int] = None
    subject: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    status: SupportRequestStatus = SupportRequestStatus.OPEN


class SupportRequestUpdate(BaseModel):
    guest_id: Optional[int] = None
    subject: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[SupportRequestStatus] = None


class SupportRequestResponse(SupportRequestCreate):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 界面提示 Schemas ==============

class ListUIResponse(BaseModel):
    resource: str
    is_hidden: bool
    hide_create: bool
    hide_delete: bool


class FieldModesResponse(BaseModel):
    resource: str
    record_id: Optional[int] = None
    modes: Dict[str, str]
