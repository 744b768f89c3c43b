"""
界面提示路由
列表级开关与字段显示模式；仅用于渲染，服务端写入仍独立授权
"""
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.security.context import SecurityContext
from app.database import get_db
from app.hotel.security import field_acl
from app.models.schemas import FieldModesResponse, ListUIResponse
from app.security.auth import get_optional_security_context, get_security_context
from app.services.gateway import ResourceGateway, record_to_dict
from app.services.resource_service import ResourceService

router = APIRouter(prefix="/ui", tags=["界面提示"])


@router.get("/lists/{resource}", response_model=ListUIResponse)
def get_list_ui(
    resource: str,
    context: SecurityContext = Depends(get_optional_security_context)
):
    """列表级界面开关"""
    ResourceGateway.model_for(resource)
    flags = field_acl.list_ui(context.role, resource)
    return ListUIResponse(resource=resource, **flags.to_dict())


@router.get("/fields/{resource}", response_model=FieldModesResponse)
def get_field_modes(
    resource: str,
    record_id: Optional[int] = None,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """
    字段显示模式

    不带 record_id 时为新建视图；带 record_id 时按当前记录计算（需要读权限）。
    """
    ResourceGateway.model_for(resource)
    record = None
    if record_id is not None:
        service = ResourceService(db, context, resource)
        record = record_to_dict(service.get(record_id))
    modes = field_acl.resolve_entity(context.role, resource, record)
    return FieldModesResponse(
        resource=resource,
        record_id=record_id,
        modes={attribute: mode.value for attribute, mode in modes.items()},
    )
