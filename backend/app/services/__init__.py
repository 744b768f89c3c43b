# Business Services
from app.services.gateway import ResourceGateway, ValidationFailed, RecordNotFound
from app.services.resource_service import ResourceService
from app.services.booking_service import BookingService, on_booking_updated
from app.services.user_service import UserService

__all__ = [
    'ResourceGateway', 'ValidationFailed', 'RecordNotFound',
    'ResourceService', 'BookingService', 'on_booking_updated', 'UserService',
]
