"""
core/security - 安全模块

包含框架的核心安全组件：
- context: 安全上下文（请求主体身份）
- checker: 操作级授权 + 行过滤
- attribute_acl: 字段显示模式
- data_scope: 行过滤谓词

使用方式:
    >>> from core.security import SecurityContext, PermissionChecker, Operation
    >>> ctx = SecurityContext.from_session({"data": {"id": "1", "role": "manager"}})
    >>> checker.authorize(ctx, "Room", Operation.DELETE)
    >>> attribute_acl.resolve(ctx.role, "Room.status", {"status": "cleaning"})
"""

from core.security.context import SecurityContext

from core.security.checker import (
    Operation,
    ALL_OPERATIONS,
    Permission,
    AuthorizationDenied,
    PermissionRule,
    AllowAllRule,
    RoleSetRule,
    RolePermissionRule,
    PermissionChecker,
)

from core.security.attribute_acl import (
    FieldMode,
    AttributePermission,
    ListUIFlags,
    AttributeACL,
)

from core.security.data_scope import (
    RowFilter,
    AllowAll,
    DenyAll,
    FieldNotEquals,
    ALLOW_ALL,
    DENY_ALL,
    apply_row_filter,
)

__all__ = [
    "SecurityContext",
    "Operation",
    "ALL_OPERATIONS",
    "Permission",
    "AuthorizationDenied",
    "PermissionRule",
    "AllowAllRule",
    "RoleSetRule",
    "RolePermissionRule",
    "PermissionChecker",
    "FieldMode",
    "AttributePermission",
    "ListUIFlags",
    "AttributeACL",
    "RowFilter",
    "AllowAll",
    "DenyAll",
    "FieldNotEquals",
    "ALLOW_ALL",
    "DENY_ALL",
    "apply_row_filter",
]
