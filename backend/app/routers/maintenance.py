"""
维修工单路由
提交工单不需要登录（客人也可报修），其余操作需要登录
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.security.context import SecurityContext
from app.database import get_db
from app.models.schemas import (
    MaintenanceRequestCreate, MaintenanceRequestUpdate, MaintenanceRequestResponse
)
from app.security.auth import get_optional_security_context, get_security_context
from app.services.resource_service import ResourceService

router = APIRouter(prefix="/maintenance-requests", tags=["维修工单"])

KIND = "MaintenanceRequest"


@router.get("/", response_model=List[MaintenanceRequestResponse])
def list_maintenance_requests(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    return ResourceService(db, context, KIND).list(skip=skip, limit=limit)


@router.get("/{request_id}", response_model=MaintenanceRequestResponse)
def get_maintenance_request(
    request_id: int,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    return ResourceService(db, context, KIND).get(request_id)


@router.post("/", response_model=MaintenanceRequestResponse)
def create_maintenance_request(
    data: MaintenanceRequestCreate,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_optional_security_context)
):
    """提交维修工单（允许匿名）"""
    payload = data.model_dump()
    if payload.get("reported_by_id") is None and context.user_id is not None:
        payload["reported_by_id"] = int(context.user_id)
    return ResourceService(db, context, KIND).create(payload)


@router.put("/{request_id}", response_model=MaintenanceRequestResponse)
def update_maintenance_request(
    request_id: int,
    data: MaintenanceRequestUpdate,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    return ResourceService(db, context, KIND).update(request_id, data.model_dump(exclude_unset=True))


@router.delete("/{request_id}")
def delete_maintenance_request(
    request_id: int,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    ResourceService(db, context, KIND).delete(request_id)
    return {"message": "维修工单已删除"}
