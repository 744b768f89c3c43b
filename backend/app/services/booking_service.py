"""
预订服务 - 本体操作层
预订写入提交后发布 booking.updated / booking.created；房态同步由订阅方完成
"""
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime
import logging

from sqlalchemy.orm import Session

from core.engine.event_bus import Event, event_bus
from core.security.context import SecurityContext
from app.models.events import BookingUpdatedData, EventType
from app.models.ontology import Booking, Service
from app.services.gateway import ValidationFailed
from app.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


def on_booking_updated(
    booking: Booking,
    old_status: Optional[str] = None,
    operator_id: Optional[str] = None,
    publisher: Optional[Callable[[Event], Any]] = None,
    event_type: EventType = EventType.BOOKING_UPDATED,
) -> Event:
    """发布预订已提交事件（快照），返回发布的事件"""
    publish = publisher or event_bus.publish
    event = Event(
        event_type=event_type.value,
        timestamp=datetime.now(),
        data=BookingUpdatedData(
            booking_id=booking.id,
            room_id=booking.room_id,
            room_number=booking.room.room_number if booking.room else None,
            old_status=old_status,
            new_status=booking.status,
            operator_id=operator_id,
        ).to_dict(),
        source="booking_service",
    )
    publish(event)
    return event


class BookingService(ResourceService):
    """预订服务"""

    kind = "Booking"

    def __init__(
        self,
        db: Session,
        context: Optional[SecurityContext] = None,
        event_publisher: Optional[Callable[[Event], Any]] = None,
    ):
        super().__init__(db, context)
        # 支持依赖注入事件发布器，便于测试
        self._publish_event = event_publisher or event_bus.publish

    def _resolve_services(self, service_ids: List[int]) -> List[Service]:
        services = []
        for service_id in service_ids:
            service = self.gateway.find_one("Service", service_id)
            if service is None:
                raise ValidationFailed(f"Booking.services: Service {service_id} does not exist")
            services.append(service)
        return services

    def _create(self, data: Dict[str, Any]) -> Booking:
        data = dict(data)
        services = self._resolve_services(data.pop("service_ids", None) or [])
        booking = self.gateway.create_one(self.kind, data)
        if services:
            booking.services = services
            self.db.commit()
            self.db.refresh(booking)

        logger.info(f"Booking {booking.id} created for room {booking.room_id}")
        on_booking_updated(
            booking, None, self.context.user_id, self._publish_event, EventType.BOOKING_CREATED
        )
        return booking

    def _update(self, booking: Booking, patch: Dict[str, Any]) -> Booking:
        patch = dict(patch)
        old_status = booking.status
        service_ids = patch.pop("service_ids", None)
        services = self._resolve_services(service_ids) if service_ids is not None else None

        booking = self.gateway.update_one(self.kind, booking.id, patch)
        if services is not None:
            booking.services = services
            self.db.commit()
            self.db.refresh(booking)

        if old_status != booking.status:
            logger.info(f"Booking {booking.id} status {old_status} -> {booking.status}")

        # 写入已提交，之后的同步失败不影响本次结果
        on_booking_updated(booking, old_status, self.context.user_id, self._publish_event)
        return booking
