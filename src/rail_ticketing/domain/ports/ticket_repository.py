"""Ticket repository port."""

from typing import Protocol

from rail_ticketing.domain.models.ticket import (
    RefundRequest,
    TicketArrival,
    TicketDetails,
    TicketPage,
    TicketScope,
)


class TicketRepository(Protocol):
    """Port for reading and mutating purchased tickets.

    Page numbers are passed and returned exactly as the API uses them (1-based).
    """

    async def list_tickets(
        self, user_id: str, scope: TicketScope, page_number: int, page_size: int
    ) -> TicketPage:
        """List one page of a user's tickets."""
        ...

    async def get_ticket_details(self, ticket_id: str) -> TicketDetails:
        """Get full details of a ticket."""
        ...

    async def get_qr_code(self, qr_code_id: str) -> bytes:
        """Get the QR code PNG for a ticket."""
        ...

    async def cancel_ticket(self, ticket_id: str) -> None:
        """Cancel a ticket."""
        ...

    async def request_refund(self, request: RefundRequest) -> None:
        """File a refund request."""
        ...

    async def get_ticket_arrivals(self, ticket_id: str) -> list[TicketArrival]:
        """Planned arrivals along the ticket's route."""
        ...
