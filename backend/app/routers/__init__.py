# API Routers
from app.routers import auth, users, rooms, bookings, maintenance, catalog, ui

__all__ = ['auth', 'users', 'rooms', 'bookings', 'maintenance', 'catalog', 'ui']
