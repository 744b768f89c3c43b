"""
测试 core.security.context 安全上下文
"""
import dataclasses

import pytest

from core.security.context import SecurityContext


def test_from_session():
    ctx = SecurityContext.from_session({"data": {"id": 7, "role": "receptionist"}})
    assert ctx.user_id == "7"
    assert ctx.role == "receptionist"
    assert ctx.is_authenticated


@pytest.mark.parametrize("session", [None, {}, {"data": None}, {"data": {"id": "1"}}, {"data": {"id": "1", "role": ""}}])
def test_missing_role_is_unauthenticated(session):
    ctx = SecurityContext.from_session(session)
    assert ctx.role is None
    assert not ctx.is_authenticated


def test_immutable():
    ctx = SecurityContext(user_id="1", role="manager")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.role = "receptionist"
