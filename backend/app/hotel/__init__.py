"""
app/hotel/__init__.py

Hotel domain: access policy data (security) and the booking → room
status synchronizer (services.event_handlers)
"""
