"""Ticketing REST API adapters."""

from rail_ticketing.adapters.rest_api.http_client import RestHttpClient
from rail_ticketing.adapters.rest_api.rest_connection_repository import RestConnectionRepository
from rail_ticketing.adapters.rest_api.rest_station_repository import RestStationRepository
from rail_ticketing.adapters.rest_api.rest_ticket_purchase_repository import (
    RestTicketPurchaseRepository,
)
from rail_ticketing.adapters.rest_api.rest_ticket_repository import RestTicketRepository

__all__ = [
    "RestConnectionRepository",
    "RestHttpClient",
    "RestStationRepository",
    "RestTicketPurchaseRepository",
    "RestTicketRepository",
]
