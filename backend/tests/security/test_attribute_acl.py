"""
测试 core.security.attribute_acl 字段显示模式
"""
import pytest

from core.security.attribute_acl import (
    AttributeACL, AttributePermission, FieldMode, ListUIFlags, roles_else, split_field_id,
)


@pytest.fixture
def acl():
    acl = AttributeACL()
    acl.register_domain_permissions([
        AttributePermission(
            "Doc", "title",
            create_mode=roles_else(("editor",), FieldMode.HIDDEN),
            item_mode=roles_else(("editor",), FieldMode.READ),
        ),
        AttributePermission(
            "Doc", "state",
            create_mode=roles_else(("editor",), FieldMode.HIDDEN),
            item_mode=lambda role, record: FieldMode.EDIT if record.get("state") == "draft" else FieldMode.READ,
        ),
    ])
    acl.register_list_ui("Doc", lambda role: ListUIFlags(is_hidden=role is None))
    return acl


def test_split_field_id():
    assert split_field_id("Room.status") == ("Room", "status")
    with pytest.raises(ValueError):
        split_field_id("status")


def test_create_vs_item_view(acl):
    assert acl.resolve("viewer", "Doc.title") == FieldMode.HIDDEN
    assert acl.resolve("viewer", "Doc.title", {"title": "x"}) == FieldMode.READ
    assert acl.resolve("editor", "Doc.title") == FieldMode.EDIT


def test_stateful_rule(acl):
    assert acl.resolve("viewer", "Doc.state", {"state": "draft"}) == FieldMode.EDIT
    assert acl.resolve("viewer", "Doc.state", {"state": "final"}) == FieldMode.READ


def test_unregistered_field_is_editable(acl):
    assert acl.resolve("viewer", "Doc.body", {"body": "x"}) == FieldMode.EDIT
    assert not acl.has_rule("Doc", "body")


def test_resolve_entity_and_can_write(acl):
    modes = acl.resolve_entity("viewer", "Doc", {"title": "x", "state": "draft"})
    assert modes == {"title": FieldMode.READ, "state": FieldMode.EDIT}
    assert acl.can_write("editor", "Doc", "title", {"title": "x"})
    assert not acl.can_write("viewer", "Doc", "title", {"title": "x"})


def test_list_ui(acl):
    assert acl.list_ui(None, "Doc").is_hidden
    assert not acl.list_ui("viewer", "Doc").is_hidden
    assert acl.list_ui("viewer", "Other") == ListUIFlags()
    assert ListUIFlags(hide_delete=True).to_dict() == {
        "is_hidden": False, "hide_create": False, "hide_delete": True,
    }
