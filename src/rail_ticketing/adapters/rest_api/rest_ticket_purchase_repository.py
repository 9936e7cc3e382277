"""Ticket purchase repository adapter: discounts, pricing, buying and card payment."""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from rail_ticketing.adapters.rest_api.constants import (
    CARD_PAYMENT_PATH,
    DISCOUNT_CODE_PATH,
    DISCOUNTS_PATH,
    TICKET_PRICE_PATH,
    TICKETS_PATH,
)
from rail_ticketing.adapters.rest_api.schemas import (
    DiscountCodeSchema,
    DiscountSchema,
    parse_list,
    parse_model,
)
from rail_ticketing.domain.errors import InvalidPriceData, InvalidResponseShape, NetworkError
from rail_ticketing.domain.models import Discount, DiscountCode, PurchaseOrder
from rail_ticketing.domain.ports import TicketPurchaseRepository

if TYPE_CHECKING:
    from rail_ticketing.adapters.rest_api.http_client import RestHttpClient

_TICKET_IDS = TypeAdapter(list[UUID])


class RestTicketPurchaseRepository(TicketPurchaseRepository):
    """Adapter for the purchase half of the ticketing API."""

    def __init__(self, http_client: "RestHttpClient") -> None:
        self._http = http_client

    async def list_discounts(self) -> list[Discount]:
        data = await self._http.get_json(DISCOUNTS_PATH)
        return [d.to_domain() for d in parse_list(DiscountSchema, data, "discounts")]

    async def find_discount_code(self, code: str) -> DiscountCode | None:
        """Resolve a discount code; an unknown code (404) yields None."""
        path = DISCOUNT_CODE_PATH.format(code=quote(code.strip(), safe=""))
        try:
            data = await self._http.get_json(path)
        except NetworkError as e:
            if e.status_code == 404:
                return None
            raise
        if data is None:
            return None
        return parse_model(DiscountCodeSchema, data, "discount code").to_domain()

    async def quote_price(self, order: PurchaseOrder) -> dict[str, Any]:
        data = await self._http.post_json(TICKET_PRICE_PATH, order.to_wire())
        if not isinstance(data, dict):
            raise InvalidPriceData("Invalid price value received from server")
        return data

    async def buy_tickets(self, order: PurchaseOrder) -> list[str]:
        data = await self._http.post_json(TICKETS_PATH, order.to_wire())
        try:
            ticket_ids = _TICKET_IDS.validate_python(data)
        except ValidationError as e:
            raise InvalidResponseShape("Invalid ticket identifiers received from server") from e
        return [str(ticket_id) for ticket_id in ticket_ids]

    async def pay_by_card(self, payment: dict[str, Any]) -> None:
        await self._http.post_json(CARD_PAYMENT_PATH, payment)
