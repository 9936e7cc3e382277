"""Server-side price calculation and discount resolution."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rail_ticketing.domain.codecs import CurrencyCodec
from rail_ticketing.domain.errors import InvalidDiscountCode
from rail_ticketing.domain.models import Discount, DiscountCode, Money, PurchaseOrder

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from rail_ticketing.application.services.order_builder import OrderBuilder
    from rail_ticketing.domain.ports import TicketPurchaseRepository


@dataclass(frozen=True)
class PriceQuote:
    """Validated price for one revision of an order."""

    price: Money
    revision: int

    def is_current_for(self, builder: "OrderBuilder") -> bool:
        return self.revision == builder.revision


class PricingEngine:
    """Prices orders and resolves discount codes."""

    def __init__(self, purchase_repository: "TicketPurchaseRepository") -> None:
        self._purchase_repository = purchase_repository
        self._discounts: list[Discount] | None = None

    async def calculate(self, order: PurchaseOrder) -> Money:
        """Ask the server to price ``order``.

        Raises:
            InvalidPriceData: If the response does not validate as a price.
        """
        payload = await self._purchase_repository.quote_price(order)
        price = CurrencyCodec.normalize_money(payload)
        logger.info(
            f"Priced order with {len(order.passengers)} passenger(s) and "
            f"{len(order.connections)} connection(s): {price}"
        )
        return price

    async def quote(self, builder: "OrderBuilder") -> PriceQuote:
        """Price the builder's current state and remember which revision it was."""
        revision = builder.revision
        price = await self.calculate(builder.to_command())
        return PriceQuote(price=price, revision=revision)

    async def validate_discount_code(self, code: str) -> DiscountCode:
        """Resolve a typed promotional code.

        Raises:
            InvalidDiscountCode: If the code is empty or unknown to the server.
        """
        code = code.strip()
        if not code:
            raise InvalidDiscountCode("Enter a discount code")
        discount_code = await self._purchase_repository.find_discount_code(code)
        if discount_code is None:
            raise InvalidDiscountCode(f"Invalid discount code: {code}")
        return discount_code

    async def apply_discount_code(self, builder: "OrderBuilder", code: str) -> DiscountCode:
        """Validate ``code`` and attach it; a failure leaves the previous discount in place."""
        discount_code = await self.validate_discount_code(code)
        builder.apply_discount_code(discount_code)
        logger.info(f"Applied discount code {discount_code.code} ({discount_code.percentage}%)")
        return discount_code

    async def list_discounts(self) -> list[Discount]:
        """Passenger-category discounts, fetched once."""
        if self._discounts is None:
            self._discounts = await self._purchase_repository.list_discounts()
        return list(self._discounts)
