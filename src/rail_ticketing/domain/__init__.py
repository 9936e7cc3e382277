"""Domain layer - core models, codecs, ports and collaborator contracts."""

from rail_ticketing.domain.errors import (
    BusinessRuleViolation,
    InvalidDiscountCode,
    InvalidPriceData,
    InvalidResponseShape,
    LocationUnavailable,
    NetworkError,
    PaymentRejected,
    RequestTimeout,
    TicketingError,
    ValidationError,
)
from rail_ticketing.domain.models import (
    CurrencyCode,
    Itinerary,
    Money,
    PurchaseOrder,
    Station,
    TicketDetails,
    TicketStatus,
)

__all__ = [
    "BusinessRuleViolation",
    "CurrencyCode",
    "InvalidDiscountCode",
    "InvalidPriceData",
    "InvalidResponseShape",
    "Itinerary",
    "LocationUnavailable",
    "Money",
    "NetworkError",
    "PaymentRejected",
    "PurchaseOrder",
    "RequestTimeout",
    "Station",
    "TicketDetails",
    "TicketStatus",
    "TicketingError",
    "ValidationError",
]
