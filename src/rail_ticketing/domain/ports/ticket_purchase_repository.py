"""Ticket purchase repository port."""

from typing import Any, Protocol

from rail_ticketing.domain.models.discount import Discount, DiscountCode
from rail_ticketing.domain.models.purchase import PurchaseOrder


class TicketPurchaseRepository(Protocol):
    """Port for discounts, pricing, ticket creation and card payment."""

    async def list_discounts(self) -> list[Discount]:
        """List passenger-category discounts."""
        ...

    async def find_discount_code(self, code: str) -> DiscountCode | None:
        """Resolve a promotional code, or None if the server does not know it."""
        ...

    async def quote_price(self, order: PurchaseOrder) -> dict[str, Any]:
        """Return the raw price payload for an order; shape varies by server version."""
        ...

    async def buy_tickets(self, order: PurchaseOrder) -> list[str]:
        """Create tickets for an order and return their identifiers."""
        ...

    async def pay_by_card(self, payment: dict[str, Any]) -> None:
        """Submit a card payment body (numeric currency)."""
        ...
