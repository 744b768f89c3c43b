"""
资源网关 - 通用 CRUD/查询执行层
按资源类型（User, Room, Booking ...）对 SQLAlchemy 模型做增删改查，
唯一性与外键引用在这里校验。授权由调用方在进入网关之前完成。
"""
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.security.data_scope import RowFilter, apply_row_filter
from app.database import Base
from app.models.ontology import (
    Booking, Expense, Feedback, Guest, Housekeeping, MaintenanceRequest,
    Room, Service, ServiceRequest, SupportRequest, User,
)

logger = logging.getLogger(__name__)


class ValidationFailed(ValueError):
    """必填、唯一性或引用校验失败"""


class RecordNotFound(ValidationFailed):
    """记录不存在"""


MODEL_REGISTRY: Dict[str, Type[Base]] = {
    "User": User,
    "Guest": Guest,
    "Room": Room,
    "Booking": Booking,
    "Expense": Expense,
    "Service": Service,
    "Housekeeping": Housekeeping,
    "MaintenanceRequest": MaintenanceRequest,
    "ServiceRequest": ServiceRequest,
    "Feedback": Feedback,
    "SupportRequest": SupportRequest,
}

# 唯一字段
UNIQUE_FIELDS: Dict[str, tuple] = {
    "User": ("email",),
    "Guest": ("email",),
    "Room": ("room_number",),
}

# 外键字段 -> 引用的资源类型
REFERENCE_FIELDS: Dict[str, str] = {
    "guest_id": "Guest",
    "room_id": "Room",
    "booking_id": "Booking",
    "service_id": "Service",
    "staff_id": "User",
    "reported_by_id": "User",
}


def _value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    """枚举取值，其余原样保留"""
    return {key: _value(value) for key, value in data.items()}


def record_to_dict(record: Any) -> Dict[str, Any]:
    """ORM 对象 -> 列字典"""
    if record is None:
        return {}
    return {column.name: getattr(record, column.name) for column in record.__table__.columns}


class ResourceGateway:
    """资源网关"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def model_for(kind: str) -> Type[Base]:
        try:
            return MODEL_REGISTRY[kind]
        except KeyError:
            raise RecordNotFound(f"Unknown resource kind: {kind}")

    # ============== 查询 ==============

    def find_one(self, kind: str, key: Any) -> Optional[Any]:
        """按主键查找；key 为 dict 时按字段等值查找"""
        model = self.model_for(kind)
        if isinstance(key, dict):
            stmt = select(model).filter_by(**_normalize(key))
            return self.db.execute(stmt).scalars().first()
        return self.db.get(model, key)

    def get_or_404(self, kind: str, key: Any) -> Any:
        record = self.find_one(kind, key)
        if record is None:
            raise RecordNotFound(f"{kind} {key} not found")
        return record

    def find_many(
        self,
        kind: str,
        filters: Optional[Dict[str, Any]] = None,
        row_filter: Optional[RowFilter] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Any]:
        model = self.model_for(kind)
        query = self.db.query(model)
        if filters:
            query = query.filter_by(**_normalize(filters))
        query = apply_row_filter(query, model, row_filter)
        query = query.order_by(model.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count(self, kind: str) -> int:
        return self.db.query(self.model_for(kind)).count()

    # ============== 写入 ==============

    def create_one(self, kind: str, data: Dict[str, Any]) -> Any:
        record = self._build(kind, data)
        self._commit(kind)
        self.db.refresh(record)
        return record

    def create_many(self, kind: str, rows: Iterable[Dict[str, Any]]) -> List[Any]:
        records = [self._build(kind, data) for data in rows]
        self._commit(kind)
        for record in records:
            self.db.refresh(record)
        return records

    def update_one(self, kind: str, key: Any, patch: Dict[str, Any]) -> Any:
        record = self.get_or_404(kind, key)
        patch = _normalize(patch)
        self._validate(kind, patch, exclude_id=record.id)
        for field_name, value in patch.items():
            setattr(record, field_name, value)
        self._commit(kind)
        self.db.refresh(record)
        return record

    def update_where(self, kind: str, key: Any, expected: Dict[str, Any], patch: Dict[str, Any]) -> int:
        """
        条件更新（compare-and-swap）：仅当当前值满足 expected 时写入
        expected 中值为 ('!=', v) 表示不等条件。返回受影响行数。
        """
        model = self.model_for(kind)
        stmt = update(model).where(model.id == key)
        for field_name, condition in expected.items():
            column = getattr(model, field_name)
            if isinstance(condition, tuple) and condition[0] == "!=":
                stmt = stmt.where(column != _value(condition[1]))
            else:
                stmt = stmt.where(column == _value(condition))
        stmt = stmt.values(**_normalize(patch)).execution_options(synchronize_session=False)
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount

    def delete_one(self, kind: str, key: Any) -> None:
        record = self.get_or_404(kind, key)
        self.db.delete(record)
        self._commit(kind)

    # ============== 内部 ==============

    def _build(self, kind: str, data: Dict[str, Any]) -> Any:
        model = self.model_for(kind)
        data = _normalize(data)
        self._validate(kind, data)
        record = model(**data)
        self.db.add(record)
        return record

    def _validate(self, kind: str, data: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        model = self.model_for(kind)
        for field_name in UNIQUE_FIELDS.get(kind, ()):
            if data.get(field_name) is None:
                continue
            existing = self.db.query(model).filter(getattr(model, field_name) == data[field_name]).first()
            if existing is not None and existing.id != exclude_id:
                raise ValidationFailed(f"{kind}.{field_name} '{data[field_name]}' already exists")

        for field_name, ref_kind in REFERENCE_FIELDS.items():
            ref_id = data.get(field_name)
            if ref_id is None or not hasattr(model, field_name):
                continue
            if self.db.get(self.model_for(ref_kind), ref_id) is None:
                raise ValidationFailed(f"{kind}.{field_name}: {ref_kind} {ref_id} does not exist")

    def _commit(self, kind: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Integrity error on {kind}: {e.orig}")
            raise ValidationFailed(f"{kind} violates a database constraint") from e
