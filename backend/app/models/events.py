"""
领域事件定义 (Domain Events)
写入提交后由服务层发布，订阅方据此做跨实体同步
"""
from enum import Enum
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, Dict, Any


class EventType(str, Enum):
    """事件类型枚举"""
    # 预订相关
    BOOKING_CREATED = "booking.created"
    BOOKING_UPDATED = "booking.updated"

    # 房间相关
    ROOM_STATUS_CHANGED = "room.status_changed"
    ROOM_SYNC_FAILED = "room.sync_failed"


@dataclass
class BaseEventData:
    """事件数据基类"""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
        return result


@dataclass
class BookingUpdatedData(BaseEventData):
    """预订更新事件数据（提交后的快照）"""
    booking_id: int = 0
    room_id: Optional[int] = None
    room_number: Optional[int] = None
    old_status: Optional[str] = None
    new_status: str = ""
    operator_id: Optional[str] = None


@dataclass
class RoomStatusChangedData(BaseEventData):
    """房间状态变更事件数据"""
    room_id: int = 0
    room_number: int = 0
    old_status: str = ""
    new_status: str = ""
    changed_by: Optional[str] = None
    reason: str = ""
    superseded_timeout: bool = False   # 写入发生在已报告超时之后


@dataclass
class RoomSyncFailedData(BaseEventData):
    """房态同步失败事件数据 - 预订已提交，房态未同步"""
    booking_id: int = 0
    room_id: Optional[int] = None
    target_status: str = ""
    error_kind: str = ""   # lookup_miss, write_failed, timeout
    message: str = ""
