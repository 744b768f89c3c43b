"""
core - 领域无关的框架层

- security: 授权、行过滤、字段显示模式
- engine: 事件总线

使用方式:
    >>> from core.security import PermissionChecker, SecurityContext, Operation
    >>> from core.engine import event_bus, Event

架构原则:
    - 策略即数据：角色/资源/操作表在 app 层声明，core 只负责求值
    - 判定函数无共享可变状态，可并发调用
"""

from core.security import (
    SecurityContext,
    Operation,
    PermissionChecker,
    AuthorizationDenied,
    FieldMode,
    AttributeACL,
    RowFilter,
)
from core.engine import Event, EventBus, event_bus

__all__ = [
    "SecurityContext",
    "Operation",
    "PermissionChecker",
    "AuthorizationDenied",
    "FieldMode",
    "AttributeACL",
    "RowFilter",
    "Event",
    "EventBus",
    "event_bus",
]
