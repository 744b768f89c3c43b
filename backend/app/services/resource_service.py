"""
资源服务 - 授权后的增删改查
每个操作先经过 policy_engine 授权，读操作再叠加行过滤；
受控字段的写入按字段模式校验。未通过授权时在任何写入前抛出 AuthorizationDenied。
"""
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from core.security.checker import AuthorizationDenied, Operation
from core.security.context import SecurityContext
from core.security.data_scope import RowFilter
from app.hotel.security import field_acl, policy_engine
from app.services.gateway import RecordNotFound, ResourceGateway, record_to_dict

logger = logging.getLogger(__name__)


class ResourceService:
    """通用资源服务；子类通过覆盖 _create / _update 增加领域行为"""

    kind: str = ""

    def __init__(self, db: Session, context: Optional[SecurityContext] = None, kind: Optional[str] = None):
        self.db = db
        self.context = context or SecurityContext.anonymous()
        if kind:
            self.kind = kind
        self.gateway = ResourceGateway(db)

    # ============== 授权 ==============

    def require(self, operation: Operation) -> None:
        policy_engine.require(self.context, self.kind, operation)

    def row_filter(self) -> RowFilter:
        return policy_engine.row_filter(self.context, self.kind)

    def guard_fields(self, data: Dict[str, Any], record: Optional[Any] = None) -> None:
        """受控字段校验；record 为 None 时按新建视图判断"""
        current = record_to_dict(record) if record is not None else None
        for attribute, value in data.items():
            if not field_acl.has_rule(self.kind, attribute):
                continue
            if current is not None and current.get(attribute) == getattr(value, "value", value):
                continue
            if not field_acl.can_write(self.context.role, self.kind, attribute, current):
                logger.info(f"Denied write of {self.kind}.{attribute} for role={self.context.role!r}")
                raise AuthorizationDenied(
                    self.kind, Operation.UPDATE.value if record is not None else Operation.CREATE.value,
                    self.context.role, detail=f"field {attribute} is not editable",
                )

    # ============== 操作 ==============

    def list(self, skip: int = 0, limit: Optional[int] = 100, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        self.require(Operation.READ)
        return self.gateway.find_many(self.kind, filters, self.row_filter(), skip, limit)

    def get(self, record_id: int) -> Any:
        self.require(Operation.READ)
        return self._get_visible(record_id)

    def create(self, data: Dict[str, Any]) -> Any:
        self.require(Operation.CREATE)
        self.guard_fields(data)
        return self._create(data)

    def update(self, record_id: int, patch: Dict[str, Any]) -> Any:
        self.require(Operation.UPDATE)
        record = self._get_visible(record_id)
        self.guard_fields(patch, record)
        return self._update(record, patch)

    def delete(self, record_id: int) -> None:
        self.require(Operation.DELETE)
        self._get_visible(record_id)
        self.gateway.delete_one(self.kind, record_id)
        logger.info(f"{self.kind} {record_id} deleted by user {self.context.user_id}")

    # ============== 子类扩展点 ==============

    def _create(self, data: Dict[str, Any]) -> Any:
        return self.gateway.create_one(self.kind, data)

    def _update(self, record: Any, patch: Dict[str, Any]) -> Any:
        return self.gateway.update_one(self.kind, record.id, patch)

    def _get_visible(self, record_id: int) -> Any:
        record = self.gateway.get_or_404(self.kind, record_id)
        if not self.row_filter().matches(record):
            # 行过滤外的记录与不存在等同
            raise RecordNotFound(f"{self.kind} {record_id} not found")
        return record
