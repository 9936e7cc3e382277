"""Adapters layer - external system integrations."""

from rail_ticketing.adapters.config import AppConfig
from rail_ticketing.adapters.local_collaborators import (
    FixedLocationProvider,
    LoggingNotificationScheduler,
    LoggingRouter,
    StaticAuthSession,
)
from rail_ticketing.adapters.rest_api import (
    RestConnectionRepository,
    RestHttpClient,
    RestStationRepository,
    RestTicketPurchaseRepository,
    RestTicketRepository,
)

__all__ = [
    "AppConfig",
    "FixedLocationProvider",
    "LoggingNotificationScheduler",
    "LoggingRouter",
    "RestConnectionRepository",
    "RestHttpClient",
    "RestStationRepository",
    "RestTicketPurchaseRepository",
    "RestTicketRepository",
    "StaticAuthSession",
]
