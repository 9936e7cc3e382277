"""Contracts for the external collaborators the core consumes."""

from rail_ticketing.domain.contracts.auth_session import AuthSession
from rail_ticketing.domain.contracts.location_provider import LocationProvider
from rail_ticketing.domain.contracts.notification_scheduler import NotificationScheduler
from rail_ticketing.domain.contracts.router import PAYMENT_ROUTE, TICKETS_ROUTE, Router

__all__ = [
    "PAYMENT_ROUTE",
    "TICKETS_ROUTE",
    "AuthSession",
    "LocationProvider",
    "NotificationScheduler",
    "Router",
]
