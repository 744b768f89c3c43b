"""
事件处理器 - 预订 → 房态同步

订阅 booking.updated：预订提交后，根据新状态修改关联房间的状态。
- checked_in  → occupied
- checked_out → available（仅在 ROOM_SYNC_RELEASE_ON_CHECKOUT 打开时）

房间写入在按房间的互斥锁内执行，并使用条件更新（status != 目标值）；
同一房间的并发同步串行化，重复同步为无操作。
同步失败不回滚预订：记录日志并发布 room.sync_failed。
"""
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from datetime import datetime
from typing import Callable, Dict, Optional
import logging
import threading

from sqlalchemy.exc import SQLAlchemyError

from core.engine.event_bus import Event, EventBus, event_bus
from app.config import settings
from app.database import SessionLocal
from app.models.events import EventType, RoomStatusChangedData, RoomSyncFailedData
from app.models.ontology import BookingStatus, RoomStatus
from app.services.gateway import ResourceGateway

logger = logging.getLogger(__name__)


class SyncLookupMiss(Exception):
    """关联房间无法解析"""


class SyncWriteFailed(Exception):
    """房间状态写入失败（预订已提交）"""


class RoomLockRegistry:
    """按房间 ID 分配的互斥锁"""

    def __init__(self):
        self._locks: Dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, room_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(room_id)
            if lock is None:
                lock = self._locks[room_id] = threading.Lock()
            return lock


class BookingRoomSync:
    """
    预订 → 房态同步器

    支持依赖注入以便于测试：
    - db_session_factory: 数据库会话工厂（每次同步独立会话）
    - bus: 失败/变更事件发布到的事件总线
    """

    def __init__(
        self,
        db_session_factory: Optional[Callable] = None,
        bus: Optional[EventBus] = None,
        timeout: Optional[float] = None,
        release_on_checkout: Optional[bool] = None,
        lock_registry: Optional[RoomLockRegistry] = None,
        max_workers: int = 4,
    ):
        self._db_session_factory = db_session_factory or SessionLocal
        self._bus = bus or event_bus
        self._timeout = settings.ROOM_SYNC_TIMEOUT_SECONDS if timeout is None else timeout
        self._release_on_checkout = (
            settings.ROOM_SYNC_RELEASE_ON_CHECKOUT if release_on_checkout is None else release_on_checkout
        )
        self._locks = lock_registry or RoomLockRegistry()
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()
        self._registered_on: Optional[EventBus] = None

    def target_status(self, booking_status: Optional[str]) -> Optional[str]:
        """预订状态 → 房间目标状态；None 表示不同步"""
        if booking_status == BookingStatus.CHECKED_IN.value:
            return RoomStatus.OCCUPIED.value
        if booking_status == BookingStatus.CHECKED_OUT.value and self._release_on_checkout:
            return RoomStatus.AVAILABLE.value
        return None

    def handle_booking_updated(self, event: Event) -> None:
        """
        处理预订更新事件

        在工作线程中执行同步并限时等待；超时与失败均记录后吞掉。
        """
        data = event.data
        booking_id = data.get("booking_id")
        room_id = data.get("room_id")
        target = self.target_status(data.get("new_status"))
        if target is None:
            return

        abandoned = threading.Event()
        future = self._get_executor().submit(
            self.sync_room, booking_id, room_id, target, event.event_id, abandoned
        )
        try:
            future.result(timeout=self._timeout)
        except FutureTimeout:
            # 尚未开始的任务不再执行；已开始的任务在写入前放弃
            abandoned.set()
            future.cancel()
            logger.warning(
                f"Room sync for booking {booking_id} timed out after {self._timeout}s"
            )
            self._report_failure(event, room_id, target, "timeout", "room sync timed out")
        except SyncLookupMiss as e:
            logger.warning(f"Room sync skipped for booking {booking_id}: {e}")
            self._report_failure(event, room_id, target, "lookup_miss", str(e))
        except SyncWriteFailed as e:
            logger.error(f"Room sync failed for booking {booking_id}: {e}", exc_info=True)
            self._report_failure(event, room_id, target, "write_failed", str(e))
        except Exception as e:
            logger.error(f"Room sync crashed for booking {booking_id}: {e}", exc_info=True)
            self._report_failure(event, room_id, target, "write_failed", str(e))

    def sync_room(
        self,
        booking_id: Optional[int],
        room_id: Optional[int],
        target: str,
        correlation_id: Optional[str] = None,
        abandoned: Optional[threading.Event] = None,
    ) -> bool:
        """
        将房间状态设置为 target

        Args:
            abandoned: 调用方等待超时后置位；置位后不再写入

        Returns:
            True 如果状态发生了变化；已处于 target 或已放弃时返回 False

        Raises:
            SyncLookupMiss: 房间不存在
            SyncWriteFailed: 获取锁超时或数据库写入失败
        """
        if room_id is None:
            raise SyncLookupMiss(f"booking {booking_id} has no room")

        lock = self._locks.get(room_id)
        if not lock.acquire(timeout=self._timeout):
            raise SyncWriteFailed(f"could not lock room {room_id} within {self._timeout}s")

        try:
            db = self._db_session_factory()
            try:
                gateway = ResourceGateway(db)
                room = gateway.find_one("Room", room_id)
                if room is None:
                    raise SyncLookupMiss(f"room {room_id} not found")
                old_status = room.status
                room_number = room.room_number
                if abandoned is not None and abandoned.is_set():
                    logger.warning(f"Room sync for booking {booking_id} abandoned after timeout, room {room_number} untouched")
                    return False
                changed = gateway.update_where(
                    "Room", room_id, {"status": ("!=", target)}, {"status": target}
                )
            except SQLAlchemyError as e:
                db.rollback()
                raise SyncWriteFailed(f"room {room_id} update failed: {e}") from e
            finally:
                db.close()
        finally:
            lock.release()

        if not changed:
            logger.debug(f"Room {room_number} already {target}, nothing to sync")
            return False

        late = abandoned is not None and abandoned.is_set()
        if late:
            logger.warning(f"Room {room_number} written after booking {booking_id} sync was reported as timed out")
        logger.info(f"{room_number} is now {target}")
        self._bus.publish(Event(
            event_type=EventType.ROOM_STATUS_CHANGED.value,
            timestamp=datetime.now(),
            data=RoomStatusChangedData(
                room_id=room_id,
                room_number=room_number,
                old_status=old_status,
                new_status=target,
                reason=f"booking {booking_id}",
                superseded_timeout=late,
            ).to_dict(),
            source="booking_room_sync",
            correlation_id=correlation_id,
        ))
        return True

    def _report_failure(self, event: Event, room_id: Optional[int], target: str, kind: str, message: str) -> None:
        self._bus.publish(Event(
            event_type=EventType.ROOM_SYNC_FAILED.value,
            timestamp=datetime.now(),
            data=RoomSyncFailedData(
                booking_id=event.data.get("booking_id") or 0,
                room_id=room_id,
                target_status=target,
                error_kind=kind,
                message=message,
            ).to_dict(),
            source="booking_room_sync",
            correlation_id=event.event_id,
        ))

    def register_handlers(self, bus: Optional[EventBus] = None) -> None:
        """注册事件处理器"""
        bus = bus or self._bus
        if self._registered_on is bus:
            return
        bus.subscribe(EventType.BOOKING_UPDATED.value, self.handle_booking_updated)
        self._registered_on = bus
        logger.info("Booking room sync registered")

    def unregister_handlers(self, bus: Optional[EventBus] = None) -> None:
        """取消注册（用于测试）"""
        bus = bus or self._bus
        bus.unsubscribe(EventType.BOOKING_UPDATED.value, self.handle_booking_updated)
        if self._registered_on is bus:
            self._registered_on = None

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="room-sync"
                )
            return self._executor

    def shutdown(self) -> None:
        """等待进行中的同步结束并释放工作线程；之后再次同步会重建线程池"""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)


# 全局同步器实例
booking_room_sync = BookingRoomSync()


def register_event_handlers():
    """注册所有事件处理器（应用启动时调用）"""
    booking_room_sync.register_handlers()


def shutdown_event_handlers():
    """取消注册并关闭同步线程池（应用关闭时调用）"""
    booking_room_sync.unregister_handlers()
    booking_room_sync.shutdown()
    logger.info("Booking room sync stopped")
