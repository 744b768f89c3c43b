"""
core/engine/event_bus.py

框架级事件总线 - 内存级发布/订阅模式
写入提交之后由服务层发布事件，订阅方（如房态同步器）在处理器中完成跨实体同步。
处理器异常被隔离并记录，不会回传给发布方。
"""
from typing import Callable, Dict, List, Any, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime
from collections import deque
import logging
import threading
import uuid

logger = logging.getLogger(__name__)

EventId = str
EventHandler = Callable[["Event"], None]


def _generate_event_id() -> EventId:
    """生成唯一事件ID"""
    return f"{datetime.now().strftime('%Y%m%d%H%M%S')}_{uuid.uuid4().hex[:8]}"


@dataclass
class Event:
    """
    事件

    Attributes:
        event_type: 事件类型（如 "booking.updated"）
        timestamp: 事件时间戳
        data: 事件数据
        source: 触发来源（服务名）
        event_id: 唯一事件ID
        correlation_id: 关联ID（派生事件指向触发它的事件）
    """

    event_type: str
    timestamp: datetime
    data: Dict[str, Any]
    source: str = ""
    event_id: EventId = field(default_factory=_generate_event_id)
    correlation_id: Optional[EventId] = None


@dataclass
class PublishResult:
    """
    事件发布结果

    Attributes:
        event_type: 事件类型
        subscriber_count: 订阅者数量
        success_count: 成功处理的处理器数量
        failure_count: 失败的处理器数量
        errors: (handler, exception) 列表
    """

    event_type: str
    subscriber_count: int
    success_count: int = 0
    failure_count: int = 0
    errors: List[Tuple[Callable, Exception]] = field(default_factory=list)


class EventBus:
    """
    事件总线（线程安全）

    使用方式：
    1. 订阅事件：bus.subscribe("booking.updated", handler)
    2. 发布事件：bus.publish(Event(...))
    3. 取消订阅：bus.unsubscribe("booking.updated", handler)
    """

    def __init__(self, history_size: int = 100):
        self._subscribers: Dict[str, List[EventHandler]] = {}
        self._event_history: deque = deque(maxlen=history_size)
        self._subscriber_lock = threading.RLock()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        with self._subscriber_lock:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)
                logger.info(f"Handler {_handler_name(handler)} subscribed to {event_type}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        with self._subscriber_lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                logger.info(f"Handler {_handler_name(handler)} unsubscribed from {event_type}")

    def publish(self, event: Event) -> PublishResult:
        """
        发布事件（在调用线程中同步执行所有处理器）

        处理器异常不会影响其他处理器，也不会抛给发布方。
        """
        self._event_history.append(event)

        with self._subscriber_lock:
            handlers = list(self._subscribers.get(event.event_type, []))

        result = PublishResult(event_type=event.event_type, subscriber_count=len(handlers))
        if handlers:
            logger.debug(f"Publishing {event.event_type} to {len(handlers)} handlers")

        for handler in handlers:
            try:
                handler(event)
                result.success_count += 1
            except Exception as e:
                result.failure_count += 1
                result.errors.append((handler, e))
                logger.error(
                    f"Event handler {_handler_name(handler)} error for {event.event_type}: {e}",
                    exc_info=True,
                )

        return result

    def get_history(self, event_type: Optional[str] = None, limit: int = 50) -> List[Event]:
        """获取事件历史（最新的在前）"""
        history = list(self._event_history)
        if event_type:
            history = [e for e in history if e.event_type == event_type]
        return list(reversed(history))[:limit]

    def get_subscribers(self, event_type: Optional[str] = None) -> Dict[str, List[str]]:
        with self._subscriber_lock:
            if event_type:
                return {event_type: [_handler_name(h) for h in self._subscribers.get(event_type, [])]}
            return {
                et: [_handler_name(h) for h in handlers]
                for et, handlers in self._subscribers.items()
            }

    def clear(self) -> None:
        """清空订阅与历史（用于测试）"""
        with self._subscriber_lock:
            self._subscribers.clear()
        self._event_history.clear()


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__name__", repr(handler))


# 全局事件总线实例
event_bus = EventBus()


__all__ = [
    "EventId",
    "EventHandler",
    "Event",
    "PublishResult",
    "EventBus",
    "event_bus",
]
