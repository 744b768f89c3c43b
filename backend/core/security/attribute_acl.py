"""
core/security/attribute_acl.py

属性级访问控制 - 计算每个字段的显示模式（edit / read / hidden）

字段模式只用于界面渲染提示，不能替代 PermissionChecker.authorize；
服务端写入仍需独立授权。
"""
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class FieldMode(str, Enum):
    """字段显示模式"""
    EDIT = "edit"
    READ = "read"
    HIDDEN = "hidden"


# (role, current_record) -> FieldMode
ModeFunc = Callable[[Optional[str], Optional[Mapping[str, Any]]], FieldMode]


def roles_else(roles: Tuple[str, ...], otherwise: FieldMode) -> ModeFunc:
    """指定角色可编辑，其他角色使用 otherwise"""
    def _mode(role: Optional[str], record: Optional[Mapping[str, Any]]) -> FieldMode:
        return FieldMode.EDIT if role in roles else otherwise
    return _mode


@dataclass(frozen=True)
class AttributePermission:
    """
    属性模式定义

    Attributes:
        entity_type: 实体类型 (如 "Room", "User")
        attribute: 属性名 (如 "status", "email")
        create_mode: 新建视图中的模式（无当前记录）
        item_mode: 详情视图中的模式（可依赖当前记录状态）
    """

    entity_type: str
    attribute: str
    create_mode: ModeFunc
    item_mode: ModeFunc

    @property
    def field_id(self) -> str:
        return f"{self.entity_type}.{self.attribute}"

    def __repr__(self) -> str:
        return f"AttributePermission({self.field_id})"


@dataclass(frozen=True)
class ListUIFlags:
    """列表级界面提示"""
    is_hidden: bool = False
    hide_create: bool = False
    hide_delete: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "is_hidden": self.is_hidden,
            "hide_create": self.hide_create,
            "hide_delete": self.hide_delete,
        }


ListUIFunc = Callable[[Optional[str]], ListUIFlags]


def split_field_id(field_id: str) -> Tuple[str, str]:
    """'Room.status' -> ('Room', 'status')"""
    if "." not in field_id:
        raise ValueError(f"Invalid field id: {field_id!r}, expected 'Entity.attribute'")
    entity_type, attribute = field_id.split(".", 1)
    return entity_type, attribute


class AttributeACL:
    """
    属性级访问控制

    未注册的字段默认可编辑（与列表本身的授权一致）。
    启动时注册，之后只读，resolve 为纯函数。

    Example:
        >>> acl = AttributeACL()
        >>> acl.register_attribute(AttributePermission(
        ...     "User", "email",
        ...     create_mode=roles_else(("manager",), FieldMode.HIDDEN),
        ...     item_mode=roles_else(("manager",), FieldMode.READ),
        ... ))
        >>> acl.resolve("receptionist", "User.email", {"email": "a@b.c"})
        <FieldMode.READ: 'read'>
    """

    def __init__(self):
        self._rules: Dict[str, Dict[str, AttributePermission]] = {}
        self._list_rules: Dict[str, ListUIFunc] = {}

    def register_domain_permissions(self, permissions: List[AttributePermission]) -> None:
        """批量注册领域属性规则"""
        for attr in permissions:
            self.register_attribute(attr)

    def register_attribute(self, permission: AttributePermission) -> None:
        self._rules.setdefault(permission.entity_type, {})[permission.attribute] = permission
        logger.debug(f"Registered attribute mode rule: {permission}")

    def register_list_ui(self, entity_type: str, func: ListUIFunc) -> None:
        self._list_rules[entity_type] = func

    def get_permission(self, entity_type: str, attribute: str) -> Optional[AttributePermission]:
        return self._rules.get(entity_type, {}).get(attribute)

    def has_rule(self, entity_type: str, attribute: str) -> bool:
        return self.get_permission(entity_type, attribute) is not None

    def resolve(
        self,
        role: Optional[str],
        field_id: str,
        current_record: Optional[Mapping[str, Any]] = None,
    ) -> FieldMode:
        """
        计算字段模式

        Args:
            role: 当前角色（None 表示匿名）
            field_id: 'Entity.attribute'
            current_record: 当前记录；None 表示新建视图
        """
        entity_type, attribute = split_field_id(field_id)
        perm = self.get_permission(entity_type, attribute)
        if perm is None:
            return FieldMode.EDIT
        if current_record is None:
            return perm.create_mode(role, None)
        return perm.item_mode(role, current_record)

    def resolve_entity(
        self,
        role: Optional[str],
        entity_type: str,
        current_record: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, FieldMode]:
        """实体所有受控字段的模式"""
        return {
            attribute: self.resolve(role, f"{entity_type}.{attribute}", current_record)
            for attribute in self.get_entity_attributes(entity_type)
        }

    def can_write(
        self,
        role: Optional[str],
        entity_type: str,
        attribute: str,
        current_record: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        return self.resolve(role, f"{entity_type}.{attribute}", current_record) == FieldMode.EDIT

    def list_ui(self, role: Optional[str], entity_type: str) -> ListUIFlags:
        func = self._list_rules.get(entity_type)
        return func(role) if func else ListUIFlags()

    def get_entity_attributes(self, entity_type: str) -> List[str]:
        """获取实体所有受控属性名"""
        return list(self._rules.get(entity_type, {}).keys())


__all__ = [
    "FieldMode",
    "ModeFunc",
    "roles_else",
    "AttributePermission",
    "ListUIFlags",
    "split_field_id",
    "AttributeACL",
]
