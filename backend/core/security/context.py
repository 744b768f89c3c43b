"""
core/security/context.py

安全上下文 - 当前请求主体的身份（id + role）
每个请求创建一次，请求生命周期内不可变，可在任意线程中安全共享
"""
from typing import Any, Mapping, Optional
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecurityContext:
    """
    安全上下文数据类

    Attributes:
        user_id: 用户ID（匿名请求为 None）
        role: 角色（如 'manager', 'receptionist', 'housekeeping'）
        email: 登录标识（可选，仅用于日志）
    """

    user_id: Optional[str] = None
    role: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "SecurityContext":
        """未登录请求的空上下文"""
        return cls()

    @classmethod
    def from_session(cls, session: Optional[Mapping[str, Any]]) -> "SecurityContext":
        """
        从会话数据构建上下文

        会话形状为 ``{"data": {"id": ..., "role": ...}}``；
        缺少 data 或 data.role 时与未识别角色等同处理（默认拒绝）。
        """
        if not session:
            return cls.anonymous()
        data = session.get("data") or {}
        user_id = data.get("id")
        return cls(
            user_id=str(user_id) if user_id is not None else None,
            role=data.get("role") or None,
            email=data.get("email"),
        )

    @property
    def is_authenticated(self) -> bool:
        return self.role is not None

    def __repr__(self) -> str:
        return f"SecurityContext(user_id={self.user_id!r}, role={self.role!r})"


__all__ = [
    "SecurityContext",
]
