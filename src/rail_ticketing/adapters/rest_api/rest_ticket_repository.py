"""Ticket repository adapter: ticket lists, details, QR codes, cancel and refund."""

from typing import TYPE_CHECKING
from urllib.parse import quote

from rail_ticketing.adapters.rest_api.constants import (
    REFUND_REQUEST_PATH,
    TICKET_ARRIVALS_PATH,
    TICKET_CANCEL_PATH,
    TICKET_DETAILS_PATH,
    TICKET_QR_CODE_PATH,
    USER_TICKETS_PATH,
)
from rail_ticketing.adapters.rest_api.schemas import (
    TicketArrivalSchema,
    TicketDetailsSchema,
    TicketPageSchema,
    parse_list,
    parse_model,
)
from rail_ticketing.domain.models import (
    RefundRequest,
    TicketArrival,
    TicketDetails,
    TicketPage,
    TicketScope,
)
from rail_ticketing.domain.ports import TicketRepository

if TYPE_CHECKING:
    from rail_ticketing.adapters.rest_api.http_client import RestHttpClient


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class RestTicketRepository(TicketRepository):
    """Adapter for the ticket half of the ticketing API (1-based pages)."""

    def __init__(self, http_client: "RestHttpClient") -> None:
        self._http = http_client

    async def list_tickets(
        self, user_id: str, scope: TicketScope, page_number: int, page_size: int
    ) -> TicketPage:
        data = await self._http.get_json(
            USER_TICKETS_PATH.format(user_id=_segment(user_id)),
            params={"type": scope.wire_type, "pageNumber": page_number, "pageSize": page_size},
        )
        return parse_model(TicketPageSchema, data, "tickets").to_domain()

    async def get_ticket_details(self, ticket_id: str) -> TicketDetails:
        data = await self._http.get_json(TICKET_DETAILS_PATH.format(ticket_id=_segment(ticket_id)))
        return parse_model(TicketDetailsSchema, data, "ticket details").to_domain()

    async def get_qr_code(self, qr_code_id: str) -> bytes:
        return await self._http.get_bytes(
            TICKET_QR_CODE_PATH.format(qr_code_id=_segment(qr_code_id))
        )

    async def cancel_ticket(self, ticket_id: str) -> None:
        await self._http.post_json(TICKET_CANCEL_PATH.format(ticket_id=_segment(ticket_id)))

    async def request_refund(self, request: RefundRequest) -> None:
        await self._http.post_json(REFUND_REQUEST_PATH, request.to_wire())

    async def get_ticket_arrivals(self, ticket_id: str) -> list[TicketArrival]:
        data = await self._http.get_json(
            TICKET_ARRIVALS_PATH.format(ticket_id=_segment(ticket_id))
        )
        return [a.to_domain() for a in parse_list(TicketArrivalSchema, data, "arrivals")]
