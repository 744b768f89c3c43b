"""
app/hotel/security: Hotel domain access policy

Declares the role → operation table, the per-resource overrides for the
gated lists, the User row filter, and the field display modes. Everything
here is data plus a few named pure predicates; core.security evaluates it.
"""
from typing import Any, Dict, FrozenSet, Mapping, Optional

from core.security.attribute_acl import (
    AttributeACL, AttributePermission, FieldMode, ListUIFlags, roles_else,
)
from core.security.checker import (
    ALL_OPERATIONS, AllowAllRule, Operation, PermissionChecker, RoleSetRule,
)
from core.security.context import SecurityContext
from core.security.data_scope import DENY_ALL, ALLOW_ALL, FieldNotEquals, RowFilter
from app.models.ontology import RoomStatus, UserRole

MANAGER = UserRole.MANAGER.value
RECEPTIONIST = UserRole.RECEPTIONIST.value
HOUSEKEEPING = UserRole.HOUSEKEEPING.value
MAINTENANCE = UserRole.MAINTENANCE.value


PERMISSION_TABLE: Dict[str, FrozenSet[Operation]] = {
    MANAGER: ALL_OPERATIONS,
    RECEPTIONIST: frozenset({Operation.CREATE, Operation.READ, Operation.UPDATE}),
    HOUSEKEEPING: frozenset({Operation.READ, Operation.UPDATE}),
    MAINTENANCE: frozenset({Operation.READ, Operation.UPDATE}),
}

# Named role sets
MANAGERS = frozenset({MANAGER})
BOOKING_MANAGERS = frozenset({MANAGER, RECEPTIONIST})
HOUSEKEEPING_MANAGERS = frozenset({MANAGER, HOUSEKEEPING})
MAINTENANCE_MANAGERS = frozenset({MANAGER, MAINTENANCE})

# Lists with no access restrictions
OPEN_RESOURCES = (
    "Guest",
    "Expense",
    "Service",
    "ServiceRequest",
    "Feedback",
    "SupportRequest",
)

# Operations missing from a gated resource fall back to PERMISSION_TABLE.
GATED_RESOURCES: Dict[str, Dict[Operation, Any]] = {
    "User": {
        Operation.CREATE: RoleSetRule(MANAGERS),
        Operation.READ: AllowAllRule(),
        Operation.UPDATE: RoleSetRule(MANAGERS),
        Operation.DELETE: RoleSetRule(MANAGERS),
    },
    "Room": {
        Operation.CREATE: RoleSetRule(MANAGERS),
        Operation.DELETE: RoleSetRule(MANAGERS),
    },
    "Booking": {
        Operation.CREATE: RoleSetRule(BOOKING_MANAGERS),
        Operation.UPDATE: RoleSetRule(BOOKING_MANAGERS),
        Operation.DELETE: RoleSetRule(MANAGERS),
    },
    "Housekeeping": {
        Operation.CREATE: RoleSetRule(HOUSEKEEPING_MANAGERS),
        Operation.UPDATE: RoleSetRule(HOUSEKEEPING_MANAGERS),
        Operation.DELETE: RoleSetRule(MANAGERS),
    },
    "MaintenanceRequest": {
        Operation.CREATE: AllowAllRule(),
        Operation.UPDATE: RoleSetRule(MAINTENANCE_MANAGERS),
        Operation.DELETE: RoleSetRule(MANAGERS),
    },
}


def can_manage_bookings(role: Optional[str]) -> bool:
    return role in BOOKING_MANAGERS


def user_row_filter(context: SecurityContext) -> RowFilter:
    """Managers see every account; other staff never see manager accounts."""
    if not context.role:
        return DENY_ALL
    if context.role == MANAGER:
        return ALLOW_ALL
    return FieldNotEquals("role", UserRole.MANAGER)


def build_policy_engine() -> PermissionChecker:
    checker = PermissionChecker(PERMISSION_TABLE)
    for resource, rules in GATED_RESOURCES.items():
        row_filter = user_row_filter if resource == "User" else None
        checker.register_resource(resource, rules, row_filter=row_filter)
    for resource in OPEN_RESOURCES:
        checker.register_open_resource(resource)
    return checker


# ---------- Field display modes ----------

def room_status_editable_by(role: Optional[str], current_status: Optional[str]) -> bool:
    """
    Housekeeping may only change a room that is being cleaned, maintenance
    only a room under maintenance. Managers always may.
    """
    if role == MANAGER:
        return True
    current_status = getattr(current_status, "value", current_status)
    if role == HOUSEKEEPING:
        return current_status == RoomStatus.CLEANING.value
    if role == MAINTENANCE:
        return current_status == RoomStatus.MAINTENANCE.value
    return False


def _room_status_item_mode(role: Optional[str], record: Optional[Mapping[str, Any]]) -> FieldMode:
    current_status = (record or {}).get("status")
    return FieldMode.EDIT if room_status_editable_by(role, current_status) else FieldMode.READ


_manager_only_create = roles_else((MANAGER,), FieldMode.HIDDEN)
_manager_only_item = roles_else((MANAGER,), FieldMode.READ)

HOTEL_FIELD_MODES = [
    AttributePermission("User", "name", _manager_only_create, _manager_only_item),
    AttributePermission("User", "email", _manager_only_create, _manager_only_item),
    AttributePermission("User", "password", _manager_only_create, roles_else((MANAGER,), FieldMode.HIDDEN)),
    AttributePermission("User", "role", _manager_only_create, _manager_only_item),
    AttributePermission("Room", "room_number", _manager_only_create, _manager_only_item),
    AttributePermission("Room", "status", _manager_only_create, _room_status_item_mode),
]


def _list_ui(visible_to: FrozenSet[str], creatable_by: FrozenSet[str]):
    def _flags(role: Optional[str]) -> ListUIFlags:
        return ListUIFlags(
            is_hidden=role not in visible_to,
            hide_create=role not in creatable_by,
            hide_delete=role != MANAGER,
        )
    return _flags


def _maintenance_list_ui(role: Optional[str]) -> ListUIFlags:
    # anyone may file a request
    return ListUIFlags(
        is_hidden=role not in MAINTENANCE_MANAGERS,
        hide_create=False,
        hide_delete=role != MANAGER,
    )


HOTEL_LIST_UI = {
    "User": _list_ui(MANAGERS, MANAGERS),
    "Booking": _list_ui(BOOKING_MANAGERS, BOOKING_MANAGERS),
    "Housekeeping": _list_ui(HOUSEKEEPING_MANAGERS, HOUSEKEEPING_MANAGERS),
    "MaintenanceRequest": _maintenance_list_ui,
}


def build_field_acl() -> AttributeACL:
    acl = AttributeACL()
    acl.register_domain_permissions(HOTEL_FIELD_MODES)
    for resource, func in HOTEL_LIST_UI.items():
        acl.register_list_ui(resource, func)
    return acl


# Built once at import and read-only afterwards
policy_engine = build_policy_engine()
field_acl = build_field_acl()


def authorize(session: Optional[Mapping[str, Any]], resource: str, operation: str) -> bool:
    """authorize(session, resource, operation) over the raw session shape."""
    return policy_engine.authorize(SecurityContext.from_session(session), resource, operation)


def row_filter(session: Optional[Mapping[str, Any]], resource: str) -> RowFilter:
    return policy_engine.row_filter(SecurityContext.from_session(session), resource)


def resolve_field_mode(
    role: Optional[str],
    field_id: str,
    record: Optional[Mapping[str, Any]] = None,
) -> FieldMode:
    return field_acl.resolve(role, field_id, record)


__all__ = [
    "PERMISSION_TABLE",
    "GATED_RESOURCES",
    "OPEN_RESOURCES",
    "can_manage_bookings",
    "user_row_filter",
    "room_status_editable_by",
    "build_policy_engine",
    "build_field_acl",
    "policy_engine",
    "field_acl",
    "authorize",
    "row_filter",
    "resolve_field_mode",
]
