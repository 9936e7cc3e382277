"""Domain models for rail ticketing."""

from rail_ticketing.domain.models.discount import Discount, DiscountCode
from rail_ticketing.domain.models.error_details import ErrorDetails
from rail_ticketing.domain.models.itinerary import (
    NO_CONNECTION_DETAILS,
    Itinerary,
    ItineraryPage,
    Leg,
    SearchQuery,
)
from rail_ticketing.domain.models.money import CurrencyCode, Money
from rail_ticketing.domain.models.parse_result import ParseKind, ParseResult
from rail_ticketing.domain.models.purchase import (
    CardDetails,
    ConnectionRef,
    Passenger,
    PaymentMethod,
    PurchaseOrder,
    collect_field_errors,
)
from rail_ticketing.domain.models.station import Coordinates, NearestStation, Station
from rail_ticketing.domain.models.ticket import (
    ALLOWED_TRANSITIONS,
    RefundRequest,
    TicketActions,
    TicketArrival,
    TicketDetails,
    TicketPage,
    TicketPerson,
    TicketScope,
    TicketStatus,
    TicketStop,
    TicketSummary,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "NO_CONNECTION_DETAILS",
    "CardDetails",
    "ConnectionRef",
    "Coordinates",
    "CurrencyCode",
    "Discount",
    "DiscountCode",
    "ErrorDetails",
    "Itinerary",
    "ItineraryPage",
    "Leg",
    "Money",
    "NearestStation",
    "ParseKind",
    "ParseResult",
    "Passenger",
    "PaymentMethod",
    "PurchaseOrder",
    "RefundRequest",
    "SearchQuery",
    "Station",
    "TicketActions",
    "TicketArrival",
    "TicketDetails",
    "TicketPage",
    "TicketPerson",
    "TicketScope",
    "TicketStatus",
    "TicketStop",
    "TicketSummary",
    "collect_field_errors",
]
