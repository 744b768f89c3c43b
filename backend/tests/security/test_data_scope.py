"""
测试 core.security.data_scope 行过滤
"""
from sqlalchemy import Column, Integer, String, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from core.security.data_scope import (
    ALLOW_ALL, DENY_ALL, FieldNotEquals, apply_row_filter,
)
from app.models.ontology import UserRole

LocalBase = declarative_base()


class Account(LocalBase):
    __tablename__ = "accounts"
    id = Column(Integer, primary_key=True)
    role = Column(String(20))


def _session():
    engine = create_engine("sqlite:///:memory:")
    LocalBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    session.add_all([Account(role="manager"), Account(role="receptionist"), Account(role="housekeeping")])
    session.commit()
    return session


def test_matches_in_memory():
    assert ALLOW_ALL.matches({"role": "manager"})
    assert not DENY_ALL.matches({"role": "manager"})
    assert FieldNotEquals("role", "manager").matches({"role": "receptionist"})
    assert not FieldNotEquals("role", "manager").matches({"role": "manager"})
    assert not FieldNotEquals("role", "manager").matches(Account(role="manager"))


def test_enum_value_normalized():
    row_filter = FieldNotEquals("role", UserRole.MANAGER)
    assert row_filter.value == "manager"
    assert not row_filter.matches(Account(role="manager"))


def test_is_unfiltered():
    assert ALLOW_ALL.is_unfiltered
    assert not DENY_ALL.is_unfiltered
    assert not FieldNotEquals("role", "x").is_unfiltered


def test_apply_to_query():
    session = _session()
    query = session.query(Account)

    assert len(apply_row_filter(query, Account, ALLOW_ALL).all()) == 3
    assert apply_row_filter(query, Account, DENY_ALL).all() == []
    visible = apply_row_filter(query, Account, FieldNotEquals("role", "manager")).all()
    assert sorted(a.role for a in visible) == ["housekeeping", "receptionist"]
    assert len(apply_row_filter(query, Account, None).all()) == 3
    session.close()
