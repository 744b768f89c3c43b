"""
core/security/checker.py

权限检查器 - 操作级授权 + 行过滤
基于角色权限表（Role → Operation 集合）与资源级覆盖规则进行判断

检查器在启动时配置一次，之后只读；authorize / row_filter
为纯函数，可被任意多个并发请求同时调用。
"""
from typing import Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Union
from dataclasses import dataclass
from abc import ABC, abstractmethod
from enum import Enum
import logging

from core.security.context import SecurityContext
from core.security.data_scope import RowFilter, ALLOW_ALL

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """操作类型"""
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


ALL_OPERATIONS: FrozenSet[Operation] = frozenset(Operation)


@dataclass(frozen=True)
class Permission:
    """
    权限定义

    Attributes:
        resource: 资源类型 (如 "Room", "Booking")
        action: 操作类型 (如 "read", "update")
    """

    resource: str
    action: str


class AuthorizationDenied(Exception):
    """权限拒绝异常 - 在任何写入之前抛出"""

    def __init__(self, resource: str, operation: str, role: Optional[str] = None, detail: str = ""):
        self.resource = resource
        self.operation = operation
        self.role = role
        self.detail = detail
        message = f"Access denied: {operation} on {resource} for role {role!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class PermissionRule(ABC):
    """单个 (资源, 操作) 的判定规则"""

    @abstractmethod
    def check(self, context: SecurityContext, permission: Permission) -> bool:
        raise NotImplementedError


class AllowAllRule(PermissionRule):
    """任何人（包括匿名）都允许"""

    def check(self, context: SecurityContext, permission: Permission) -> bool:
        return True

    def __repr__(self) -> str:
        return "AllowAllRule()"


class RoleSetRule(PermissionRule):
    """仅允许指定角色集合"""

    def __init__(self, roles: Iterable[str]):
        self.roles: FrozenSet[str] = frozenset(roles)

    def check(self, context: SecurityContext, permission: Permission) -> bool:
        return context.role is not None and context.role in self.roles

    def __repr__(self) -> str:
        return f"RoleSetRule({sorted(self.roles)})"


class RolePermissionRule(PermissionRule):
    """
    基于角色权限表的规则

    角色不存在或操作不在其集合内时返回 False（失败即拒绝）
    """

    def __init__(self, role_permissions: Mapping[str, Iterable[Union[Operation, str]]]):
        self._role_permissions: Dict[str, FrozenSet[str]] = {
            role: frozenset(Operation(op).value for op in ops)
            for role, ops in role_permissions.items()
        }

    def has_permission(self, role: Optional[str], operation: Union[Operation, str]) -> bool:
        if role is None:
            return False
        return Operation(operation).value in self._role_permissions.get(role, frozenset())

    def check(self, context: SecurityContext, permission: Permission) -> bool:
        return self.has_permission(context.role, permission.action)

    def __repr__(self) -> str:
        return "RolePermissionRule()"


RowFilterResolver = Callable[[SecurityContext], RowFilter]


class PermissionChecker:
    """
    权限检查器

    - 受控资源：每个操作对应一条 PermissionRule，未配置的操作回退到角色权限表
    - 开放资源：所有操作允许（allow-all）
    - 未注册资源：拒绝

    Example:
        >>> checker = PermissionChecker({"manager": ALL_OPERATIONS})
        >>> checker.register_resource("Room", {Operation.CREATE: RoleSetRule({"manager"})})
        >>> checker.authorize(SecurityContext(user_id="1", role="manager"), "Room", "create")
        True
    """

    def __init__(self, role_permissions: Mapping[str, Iterable[Union[Operation, str]]]):
        self._role_rule = RolePermissionRule(role_permissions)
        self._resource_rules: Dict[str, Dict[str, PermissionRule]] = {}
        self._open_resources: set = set()
        self._row_filters: Dict[str, RowFilterResolver] = {}

    # ---------- 配置（仅启动时调用） ----------

    def register_resource(
        self,
        resource: str,
        rules: Mapping[Union[Operation, str], PermissionRule],
        row_filter: Optional[RowFilterResolver] = None,
    ) -> None:
        """注册受控资源的操作规则"""
        self._resource_rules[resource] = {Operation(op).value: rule for op, rule in rules.items()}
        self._open_resources.discard(resource)
        if row_filter is not None:
            self._row_filters[resource] = row_filter
        logger.debug(f"Registered policy for {resource}: {self._resource_rules[resource]}")

    def register_open_resource(self, resource: str) -> None:
        """注册 allow-all 资源"""
        self._resource_rules.pop(resource, None)
        self._open_resources.add(resource)

    # ---------- 查询 ----------

    def rule_for(self, resource: str, operation: Union[Operation, str]) -> Optional[PermissionRule]:
        """获取 (资源, 操作) 生效的规则；未注册资源返回 None"""
        if resource in self._open_resources:
            return AllowAllRule()
        rules = self._resource_rules.get(resource)
        if rules is None:
            return None
        return rules.get(Operation(operation).value, self._role_rule)

    def authorize(
        self,
        context: Optional[SecurityContext],
        resource: str,
        operation: Union[Operation, str],
    ) -> bool:
        """操作级授权判断"""
        context = context or SecurityContext.anonymous()
        try:
            operation = Operation(operation)
        except ValueError:
            logger.warning(f"Unknown operation {operation!r} on {resource}")
            return False

        rule = self.rule_for(resource, operation)
        if rule is None:
            logger.warning(f"No policy registered for resource {resource!r}, denying")
            return False
        return rule.check(context, Permission(resource, operation.value))

    def require(
        self,
        context: Optional[SecurityContext],
        resource: str,
        operation: Union[Operation, str],
    ) -> None:
        """授权失败时抛出 AuthorizationDenied"""
        if not self.authorize(context, resource, operation):
            role = context.role if context else None
            op_value = operation.value if isinstance(operation, Operation) else str(operation)
            logger.info(f"Denied {op_value} on {resource} for role={role!r}")
            raise AuthorizationDenied(resource, op_value, role)

    def row_filter(self, context: Optional[SecurityContext], resource: str) -> RowFilter:
        """行过滤条件；未配置的资源返回 ALLOW_ALL"""
        resolver = self._row_filters.get(resource)
        if resolver is None:
            return ALLOW_ALL
        return resolver(context or SecurityContext.anonymous())


__all__ = [
    "Operation",
    "ALL_OPERATIONS",
    "Permission",
    "AuthorizationDenied",
    "PermissionRule",
    "AllowAllRule",
    "RoleSetRule",
    "RolePermissionRule",
    "RowFilterResolver",
    "PermissionChecker",
]
