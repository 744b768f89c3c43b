"""
core/engine - 核心引擎模块

- event_bus: 事件总线（发布/订阅）

使用方式:
    >>> from core.engine import event_bus, Event
"""

from core.engine.event_bus import (
    EventId,
    EventHandler,
    Event,
    PublishResult,
    EventBus,
    event_bus,
)

__all__ = [
    "EventId",
    "EventHandler",
    "Event",
    "PublishResult",
    "EventBus",
    "event_bus",
]
