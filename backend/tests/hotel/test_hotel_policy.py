"""
酒店访问策略测试 - 角色 × 资源 × 操作全表
"""
import itertools

import pytest

from core.security.checker import AuthorizationDenied, Operation
from core.security.context import SecurityContext
from core.security.data_scope import ALLOW_ALL, DENY_ALL, FieldNotEquals
from app.hotel.security import (
    OPEN_RESOURCES,
    PERMISSION_TABLE,
    authorize,
    build_policy_engine,
    can_manage_bookings,
    policy_engine,
    row_filter,
)

ROLES = [None, "manager", "receptionist", "housekeeping", "maintenance"]
STAFF = {"manager", "receptionist", "housekeeping", "maintenance"}
GATED = ["User", "Room", "Booking", "Housekeeping", "MaintenanceRequest"]

C, R, U, D = Operation.CREATE, Operation.READ, Operation.UPDATE, Operation.DELETE

EXPECTED = {
    ("User", C): {"manager"},
    ("User", R): STAFF | {None},
    ("User", U): {"manager"},
    ("User", D): {"manager"},
    ("Room", C): {"manager"},
    ("Room", R): STAFF,
    ("Room", U): STAFF,
    ("Room", D): {"manager"},
    ("Booking", C): {"manager", "receptionist"},
    ("Booking", R): STAFF,
    ("Booking", U): {"manager", "receptionist"},
    ("Booking", D): {"manager"},
    ("Housekeeping", C): {"manager", "housekeeping"},
    ("Housekeeping", R): STAFF,
    ("Housekeeping", U): {"manager", "housekeeping"},
    ("Housekeeping", D): {"manager"},
    ("MaintenanceRequest", C): STAFF | {None},
    ("MaintenanceRequest", R): STAFF,
    ("MaintenanceRequest", U): {"manager", "maintenance"},
    ("MaintenanceRequest", D): {"manager"},
}


def session_for(role):
    if role is None:
        return None
    return {"data": {"id": "1", "role": role}}


@pytest.mark.parametrize(
    "resource,operation,role",
    list(itertools.product(GATED, list(Operation), ROLES)),
)
def test_gated_resource_table(resource, operation, role):
    expected = role in EXPECTED[(resource, operation)]
    assert authorize(session_for(role), resource, operation.value) is expected


@pytest.mark.parametrize("resource", OPEN_RESOURCES)
@pytest.mark.parametrize("role", ROLES)
def test_open_resources_allow_everything(resource, role):
    for operation in Operation:
        assert authorize(session_for(role), resource, operation)


def test_every_role_has_nonempty_permissions():
    assert set(PERMISSION_TABLE) == STAFF
    for operations in PERMISSION_TABLE.values():
        assert operations
    for role in STAFF:
        assert PERMISSION_TABLE[role] <= PERMISSION_TABLE["manager"]


def test_missing_role_in_session_is_denied():
    assert not authorize({"data": {"id": "1"}}, "Room", "read")
    assert not authorize({}, "Booking", "read")


def test_unrecognized_role_is_denied():
    assert not authorize({"data": {"id": "1", "role": "guest"}}, "Room", "read")
    assert not authorize({"data": {"id": "1", "role": "guest"}}, "Booking", "create")


def test_unregistered_resource_is_denied():
    assert not authorize(session_for("manager"), "Invoice", "read")


def test_can_manage_bookings():
    assert can_manage_bookings("manager")
    assert can_manage_bookings("receptionist")
    assert not can_manage_bookings("housekeeping")
    assert not can_manage_bookings(None)


class TestUserRowFilter:

    def test_manager_unfiltered(self):
        assert row_filter(session_for("manager"), "User") is ALLOW_ALL

    @pytest.mark.parametrize("role", ["receptionist", "housekeeping", "maintenance"])
    def test_staff_cannot_see_managers(self, role):
        rf = row_filter(session_for(role), "User")
        assert isinstance(rf, FieldNotEquals)
        assert not rf.matches({"role": "manager"})
        assert rf.matches({"role": "receptionist"})

    def test_anonymous_sees_nothing(self):
        assert row_filter(None, "User") is DENY_ALL

    @pytest.mark.parametrize("resource", ["Room", "Booking", "Housekeeping", "MaintenanceRequest"])
    def test_other_resources_unfiltered(self, resource):
        assert row_filter(session_for("receptionist"), resource) is ALLOW_ALL


def test_require_raises_before_anything():
    with pytest.raises(AuthorizationDenied):
        policy_engine.require(SecurityContext(user_id="1", role="housekeeping"), "Booking", Operation.UPDATE)


def test_build_policy_engine_is_independent():
    engine = build_policy_engine()
    assert engine is not policy_engine
    assert engine.authorize(SecurityContext(user_id="1", role="manager"), "Room", "delete")
