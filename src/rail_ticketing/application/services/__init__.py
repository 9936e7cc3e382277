"""Application services (use cases) for the ticketing pipeline."""

from rail_ticketing.application.services.connection_search_engine import ConnectionSearchEngine
from rail_ticketing.application.services.order_builder import (
    ConnectionDraft,
    OrderBuilder,
    PassengerDraft,
)
from rail_ticketing.application.services.payment_processor import PaymentProcessor
from rail_ticketing.application.services.pending_actions import PendingActions
from rail_ticketing.application.services.pricing_engine import PriceQuote, PricingEngine
from rail_ticketing.application.services.purchase_orchestrator import (
    PurchaseOrchestrator,
    PurchaseOutcome,
    PurchaseStatus,
)
from rail_ticketing.application.services.station_catalog import LocationStatus, StationCatalog
from rail_ticketing.application.services.ticket_lifecycle_manager import TicketLifecycleManager

__all__ = [
    "ConnectionDraft",
    "ConnectionSearchEngine",
    "LocationStatus",
    "OrderBuilder",
    "PassengerDraft",
    "PaymentProcessor",
    "PendingActions",
    "PriceQuote",
    "PricingEngine",
    "PurchaseOrchestrator",
    "PurchaseOutcome",
    "PurchaseStatus",
    "StationCatalog",
    "TicketLifecycleManager",
]
