"""
房间管理路由
房间状态字段按角色与当前状态受限（清洁员仅在 cleaning，维修员仅在 maintenance 时可改）
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.security.context import SecurityContext
from app.database import get_db
from app.models.ontology import RoomStatus, RoomType
from app.models.schemas import RoomCreate, RoomUpdate, RoomResponse
from app.security.auth import get_security_context
from app.services.resource_service import ResourceService

router = APIRouter(prefix="/rooms", tags=["房间管理"])


def get_room_service(db: Session, context: SecurityContext) -> ResourceService:
    """获取房间服务实例"""
    return ResourceService(db, context, "Room")


@router.get("/", response_model=List[RoomResponse])
def list_rooms(
    status: Optional[RoomStatus] = None,
    room_type: Optional[RoomType] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """获取房间列表"""
    filters = {}
    if status:
        filters["status"] = status
    if room_type:
        filters["room_type"] = room_type
    return get_room_service(db, context).list(skip=skip, limit=limit, filters=filters)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: int,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """获取房间详情"""
    return get_room_service(db, context).get(room_id)


@router.post("/", response_model=RoomResponse)
def create_room(
    data: RoomCreate,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """创建房间（仅经理）"""
    return get_room_service(db, context).create(data.model_dump())


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: int,
    data: RoomUpdate,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """更新房间"""
    return get_room_service(db, context).update(room_id, data.model_dump(exclude_unset=True))


@router.delete("/{room_id}")
def delete_room(
    room_id: int,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """删除房间（仅经理）"""
    get_room_service(db, context).delete(room_id)
    return {"message": "房间已删除"}
