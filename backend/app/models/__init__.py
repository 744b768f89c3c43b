# Ontology Models
from app.models.ontology import (
    User, Guest, Room, Booking, Expense, Service,
    Housekeeping, MaintenanceRequest, ServiceRequest, Feedback, SupportRequest
)

__all__ = [
    'User', 'Guest', 'Room', 'Booking', 'Expense', 'Service',
    'Housekeeping', 'MaintenanceRequest', 'ServiceRequest', 'Feedback', 'SupportRequest'
]
