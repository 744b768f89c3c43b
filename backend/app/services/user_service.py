"""
员工账号服务
密码在写入前做 bcrypt 哈希；列表受行过滤约束（非经理看不到经理账号）
"""
from typing import Any, Dict
import logging

from app.models.ontology import User, UserRole
from app.security.auth import get_password_hash
from app.services.gateway import ValidationFailed
from app.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


def _hash_password_field(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    password = data.pop("password", None)
    if password:
        data["password_hash"] = get_password_hash(password)
    return data


class UserService(ResourceService):
    """员工账号服务"""

    kind = "User"

    def _create(self, data: Dict[str, Any]) -> User:
        user = self.gateway.create_one(self.kind, _hash_password_field(data))
        logger.info(f"User {user.email} created with role {user.role}")
        return user

    def _update(self, user: User, patch: Dict[str, Any]) -> User:
        return self.gateway.update_one(self.kind, user.id, _hash_password_field(patch))

    def is_initialized(self) -> bool:
        return self.gateway.count(self.kind) > 0

    def init_first_user(self, data: Dict[str, Any]) -> User:
        """
        创建第一个账号（角色固定为 manager）

        不需要登录；只要已存在任何账号就拒绝。
        """
        if self.is_initialized():
            raise ValidationFailed("Users already exist; first-user setup is closed")
        data = dict(data, role=UserRole.MANAGER.value)
        user = self.gateway.create_one(self.kind, _hash_password_field(data))
        logger.info(f"First user {user.email} initialized as manager")
        return user
