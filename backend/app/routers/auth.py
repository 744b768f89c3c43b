"""
认证路由
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.security.context import SecurityContext
from app.config import settings
from app.database import get_db
from app.models.ontology import User
from app.models.schemas import FirstUserCreate, LoginRequest, LoginResponse, UserResponse
from app.security.auth import (
    authenticate_user, create_access_token, get_current_user, get_optional_security_context,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["认证"])


def _login_response(user: User) -> LoginResponse:
    token = create_access_token(user.id, user.role, user.email)
    return LoginResponse(
        access_token=token,
        expires_in=settings.SESSION_MAX_AGE_SECONDS,
        session={"data": {"id": str(user.id), "role": user.role}},
    )


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """邮箱 + 密码登录"""
    user = authenticate_user(db, data.email, data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="邮箱或密码错误"
        )
    return _login_response(user)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """获取当前用户信息"""
    return current_user


@router.get("/init")
def get_init_status(db: Session = Depends(get_db)):
    """是否还需要创建第一个账号"""
    return {"initialized": UserService(db).is_initialized()}


@router.post("/init", response_model=LoginResponse)
def init_first_user(
    data: FirstUserCreate,
    db: Session = Depends(get_db),
    context: SecurityContext = Depends(get_optional_security_context)
):
    """创建第一个账号（经理）并直接登录"""
    user = UserService(db, context).init_first_user(data.model_dump())
    return _login_response(user)
