"""Ports (interfaces) for the ports-and-adapters architecture."""

from rail_ticketing.domain.ports.connection_repository import ConnectionRepository
from rail_ticketing.domain.ports.station_repository import StationRepository
from rail_ticketing.domain.ports.ticket_purchase_repository import TicketPurchaseRepository
from rail_ticketing.domain.ports.ticket_repository import TicketRepository

__all__ = [
    "ConnectionRepository",
    "StationRepository",
    "TicketPurchaseRepository",
    "TicketRepository",
]
