"""Ticket domain models and the ticket status state machine."""

from dataclasses import dataclass, field
from enum import Enum


class TicketStatus(str, Enum):
    """Lifecycle state of a ticket as reported by the server."""

    UNPAID = "UNPAID"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    REFUND_REQUESTED = "REFUND_REQUESTED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "TicketStatus":
        """Map the server's status text ("Paid", "refund_requested", ...) onto a state."""
        if not value:
            return cls.UNKNOWN
        key = "".join(ch for ch in str(value).upper() if ch.isalnum())
        return _STATUS_ALIASES.get(key, cls.UNKNOWN)

    @property
    def is_terminal(self) -> bool:
        return self in (TicketStatus.CANCELLED, TicketStatus.REFUND_REQUESTED)

    def can_transition_to(self, target: "TicketStatus") -> bool:
        return target in ALLOWED_TRANSITIONS.get(self, frozenset())


_STATUS_ALIASES = {
    "UNPAID": TicketStatus.UNPAID,
    "PAID": TicketStatus.PAID,
    "CANCELLED": TicketStatus.CANCELLED,
    "CANCELED": TicketStatus.CANCELLED,
    "REFUNDREQUESTED": TicketStatus.REFUND_REQUESTED,
}

ALLOWED_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    TicketStatus.UNPAID: frozenset({TicketStatus.PAID, TicketStatus.CANCELLED}),
    TicketStatus.PAID: frozenset({TicketStatus.CANCELLED, TicketStatus.REFUND_REQUESTED}),
}


class TicketScope(str, Enum):
    """Which ticket collection the passenger is looking at."""

    CURRENT = "current"
    ARCHIVE = "archive"

    @property
    def wire_type(self) -> int:
        return 0 if self is TicketScope.CURRENT else 1


@dataclass(frozen=True)
class TicketSummary:
    """Row of the ticket list."""

    id: str
    start_station: str
    end_station: str
    departure_time: str
    arrival_time: str
    connection_date: str


@dataclass(frozen=True)
class TicketPage:
    """A page of tickets. ``page_number`` is 0-based once it leaves the lifecycle manager."""

    items: tuple[TicketSummary, ...]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages - 1


@dataclass(frozen=True)
class TicketStop:
    """A station on the ticket's route."""

    name: str
    arrival_time: str | None
    departure_time: str | None
    sequence_number: int


@dataclass(frozen=True)
class TicketPerson:
    """A passenger printed on the ticket."""

    first_name: str
    last_name: str
    date_of_birth: str
    discount: str | None = None


@dataclass(frozen=True)
class TicketDetails:
    """Full ticket as returned by the details endpoint."""

    id: str
    ticket_number: int
    status: TicketStatus
    departure_time: str
    arrival_time: str
    connection_date: str
    operator_code: str
    operator_name: str
    train_name: str
    stations: tuple[TicketStop, ...] = field(default_factory=tuple)
    people: tuple[TicketPerson, ...] = field(default_factory=tuple)
    seat_numbers: tuple[int, ...] | None = None
    qr_code_id: str | None = None


@dataclass(frozen=True)
class TicketActions:
    """Which lifecycle actions the passenger may trigger for a ticket."""

    can_cancel: bool
    can_request_refund: bool
    can_show_qr_code: bool


@dataclass(frozen=True)
class RefundRequest:
    """Body of the refund-request call."""

    user_id: str
    ticket_id: str
    reason: str
    email: str

    def to_wire(self) -> dict[str, str]:
        return {
            "userId": self.user_id,
            "ticketId": self.ticket_id,
            "reason": self.reason,
            "email": self.email,
        }


@dataclass(frozen=True)
class TicketArrival:
    """Planned arrival in a city along the ticket's route."""

    city_name: str
    arrival_time: str
