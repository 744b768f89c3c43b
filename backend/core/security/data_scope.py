"""
core/security/data_scope.py

行过滤：领域无关的数据可见范围抽象

RowFilter 既可以在内存中判断单条记录（matches），
也可以转换为 SQLAlchemy 查询条件（to_clause）。
"""
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from sqlalchemy import false, true
from sqlalchemy.sql.elements import ColumnElement


def _field_value(record: Any, field_name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field_name)
    value = getattr(record, field_name, None)
    # 枚举列取其值比较
    return getattr(value, "value", value)

class RowFilter(ABC):
    """行过滤谓词"""

    @abstractmethod
    def matches(self, record: Any) -> bool:
        """判断单条记录是否可见"""

    @abstractmethod
    def to_clause(self, model: Any) -> ColumnElement:
        """转换为 SQLAlchemy WHERE 子句"""

    @property
    def is_unfiltered(self) -> bool:
        return False

class AllowAll(RowFilter):
    """不过滤"""

    def matches(self, record: Any) -> bool:
        return True

    def to_clause(self, model: Any) -> ColumnElement:
        return true()

    @property
    def is_unfiltered(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "AllowAll()"

class DenyAll(RowFilter):
    """全部不可见"""

    def matches(self, record: Any) -> bool:
        return False

    def to_clause(self, model: Any) -> ColumnElement:
        return false()

    def __repr__(self) -> str:
        return "DenyAll()"

class FieldNotEquals(RowFilter):
    """field != value"""

    def __init__(self, field_name: str, value: Any):
        self.field_name = field_name
        self.value = getattr(value, "value", value)

    def matches(self, record: Any) -> bool:
        return _field_value(record, self.field_name) != self.value

    def to_clause(self, model: Any) -> ColumnElement:
        return getattr(model, self.field_name) != self.value

    def __repr__(self) -> str:
        return f"FieldNotEquals({self.field_name!r}, {self.value!r})"

ALLOW_ALL = AllowAll()
DENY_ALL = DenyAll()

def apply_row_filter(query: Any, model: Any, row_filter: Optional[RowFilter]) -> Any:
    """将行过滤应用到 SQLAlchemy 查询（Query 或 Select）"""
    if row_filter is None or row_filter.is_unfiltered:
        return query
    return query.filter(row_filter.to_clause(model))

__all__ = [
    "RowFilter",
    "AllowAll",
    "DenyAll",
    "FieldNotEquals",
    "ALLOW_ALL",
    "DENY_ALL",
    "apply_row_filter",
]
