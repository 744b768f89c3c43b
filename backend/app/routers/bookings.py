"""
预订管理路由
预订状态写入提交后发布 booking.updated，房态同步由订阅方完成
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.engine.event_bus import EventBus, event_bus
from core.security.context import SecurityContext
from app.database import get_db
from app.models.ontology import BookingStatus
from app.models.schemas import BookingCreate, BookingUpdate, BookingResponse
from app.security.auth import get_security_context
from app.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["预订管理"])


def get_event_bus() -> EventBus:
    """依赖注入：事件总线（测试中可替换）"""
    return event_bus


def get_booking_service(
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context),
    bus: EventBus = Depends(get_event_bus),
) -> BookingService:
    return BookingService(db, context, event_publisher=bus.publish)


@router.get("/", response_model=List[BookingResponse])
def list_bookings(
    status: Optional[BookingStatus] = None,
    room_id: Optional[int] = None,
    guest_id: Optional[int] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: BookingService = Depends(get_booking_service)
):
    """获取预订列表"""
    filters = {}
    if status:
        filters["status"] = status
    if room_id is not None:
        filters["room_id"] = room_id
    if guest_id is not None:
        filters["guest_id"] = guest_id
    return service.list(skip=skip, limit=limit, filters=filters)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: int, service: BookingService = Depends(get_booking_service)):
    """获取预订详情"""
    return service.get(booking_id)


@router.post("/", response_model=BookingResponse)
def create_booking(data: BookingCreate, service: BookingService = Depends(get_booking_service)):
    """创建预订（经理、前台）"""
    return service.create(data.model_dump())


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: int,
    data: BookingUpdate,
    service: BookingService = Depends(get_booking_service)
):
    """更新预订；状态改为 checked_in 时房间随之变为 occupied"""
    return service.update(booking_id, data.model_dump(exclude_unset=True))


@router.delete("/{booking_id}")
def delete_booking(booking_id: int, service: BookingService = Depends(get_booking_service)):
    """删除预订（仅经理）"""
    service.delete(booking_id)
    return {"message": "预订已删除"}
