"""
员工账号路由
非经理只能看到非经理账号；增删改仅限经理
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.security.context import SecurityContext
from app.database import get_db
from app.models.ontology import UserRole
from app.models.schemas import UserCreate, UserUpdate, UserResponse
from app.security.auth import get_security_context
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["员工管理"])


@router.get("/", response_model=List[UserResponse])
def list_users(
    role: Optional[UserRole] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """获取员工列表"""
    filters = {"role": role} if role else None
    return UserService(db, context).list(skip=skip, limit=limit, filters=filters)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """获取员工详情"""
    return UserService(db, context).get(user_id)


@router.post("/", response_model=UserResponse)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """创建员工账号"""
    return UserService(db, context).create(data.model_dump())


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """更新员工账号"""
    return UserService(db, context).update(user_id, data.model_dump(exclude_unset=True))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_security_context)
):
    """删除员工账号"""
    UserService(db, context).delete(user_id)
    return {"message": "员工已删除"}
