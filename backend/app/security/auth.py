"""
认证模块
邮箱 + 密码登录，签发无状态签名令牌；请求时从令牌还原 SecurityContext

令牌只携带 {id, role}；授权判断全部由 app.hotel.security 完成。
"""
import bcrypt
import logging
from datetime import datetime, timedelta, UTC
from typing import Any, Dict, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from core.security.context import SecurityContext
from app.config import settings
from app.database import get_db
from app.models.ontology import User

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    """密码哈希"""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        # 非 bcrypt 格式的哈希
        return False


def create_access_token(user_id: int, role: str, email: Optional[str] = None) -> str:
    """创建会话令牌，有效期 SESSION_MAX_AGE_SECONDS"""
    expire = datetime.now(UTC) + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)
    to_encode = {
        "sub": str(user_id),
        "role": getattr(role, "value", role),
        "exp": expire,
    }
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """解码令牌"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="无效的认证凭证"
        )


def session_from_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """令牌载荷 -> 会话数据 {"data": {"id", "role"}}"""
    return {"data": {"id": payload.get("sub"), "role": payload.get("role"), "email": payload.get("email")}}


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """校验邮箱和密码，失败返回 None"""
    user = db.query(User).filter(User.email == email).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info(f"Failed login for {email}")
        return None
    return user


def _context_from_token(token: str, db: Session) -> SecurityContext:
    payload = decode_token(token)
    context = SecurityContext.from_session(session_from_payload(payload))
    if context.user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="无效的认证凭证")

    # 账号删除后令牌失效
    user = db.get(User, int(context.user_id))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="用户不存在")
    return SecurityContext(user_id=str(user.id), role=user.role, email=user.email)


async def get_security_context(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> SecurityContext:
    """已登录请求的安全上下文（缺少或无效令牌返回 401）"""
    return _context_from_token(credentials.credentials, db)


async def get_optional_security_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: Session = Depends(get_db)
) -> SecurityContext:
    """允许匿名的安全上下文；令牌存在但无效时仍返回 401"""
    if credentials is None:
        return SecurityContext.anonymous()
    return _context_from_token(credentials.credentials, db)


async def get_current_user(
    context: SecurityContext = Depends(get_security_context),
    db: Session = Depends(get_db)
) -> User:
    """获取当前登录用户"""
    return db.get(User, int(context.user_id))
