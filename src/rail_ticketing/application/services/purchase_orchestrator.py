"""Submission of a composed order and the cash/card branch that follows."""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from rail_ticketing.application.services.pending_actions import PendingActions
from rail_ticketing.domain.contracts import PAYMENT_ROUTE, TICKETS_ROUTE
from rail_ticketing.domain.errors import (
    BusinessRuleViolation,
    InvalidResponseShape,
    TicketingError,
)
from rail_ticketing.domain.models import CardDetails, Money, PaymentMethod, TicketArrival

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rail_ticketing.application.services.order_builder import OrderBuilder
    from rail_ticketing.application.services.payment_processor import PaymentProcessor
    from rail_ticketing.application.services.pricing_engine import PriceQuote
    from rail_ticketing.domain.contracts import NotificationScheduler, Router
    from rail_ticketing.domain.ports import TicketPurchaseRepository, TicketRepository

CASH_CONFIRMATION = "Tickets purchased successfully. Please pay in cash to the conductor."


class PurchaseStatus(str, Enum):
    """Where a submitted purchase stands."""

    CONFIRMED = "confirmed"  # cash: tickets stay UNPAID until settled on board
    AWAITING_PAYMENT = "awaiting_payment"
    PAID = "paid"


@dataclass(frozen=True)
class PurchaseOutcome:
    """Result of submitting an order."""

    ticket_ids: tuple[str, ...]
    payment_method: PaymentMethod
    status: PurchaseStatus
    price: Money | None = None
    message: str = ""

    @property
    def is_complete(self) -> bool:
        return self.status is not PurchaseStatus.AWAITING_PAYMENT


class PurchaseOrchestrator:
    """Submits orders and routes card purchases into payment."""

    def __init__(
        self,
        purchase_repository: "TicketPurchaseRepository",
        payment_processor: "PaymentProcessor",
        router: "Router | None" = None,
        ticket_repository: "TicketRepository | None" = None,
        notification_scheduler: "NotificationScheduler | None" = None,
        pending_actions: PendingActions | None = None,
    ) -> None:
        self._purchase_repository = purchase_repository
        self._payment_processor = payment_processor
        self._router = router
        self._ticket_repository = ticket_repository
        self._notification_scheduler = notification_scheduler
        self._pending_actions = pending_actions or PendingActions()

    @property
    def is_submitting(self) -> bool:
        return self._pending_actions.is_pending("purchase")

    async def submit(
        self,
        builder: "OrderBuilder",
        payment_method: PaymentMethod | str,
        quote: "PriceQuote | None" = None,
    ) -> PurchaseOutcome:
        """Create tickets for the builder's order.

        Card purchases need a quote computed for the builder's current state,
        since that price is what the payment step charges. On any failure the
        builder keeps its state so the passenger can retry.

        Raises:
            ValidationError: If the order is incomplete.
            BusinessRuleViolation: If a card quote is missing or stale, or a
                submission is already in flight.
        """
        method = PaymentMethod(payment_method)
        if method is PaymentMethod.CARD and (quote is None or not quote.is_current_for(builder)):
            raise BusinessRuleViolation("Price must be recalculated before paying by card")

        price = quote.price if quote is not None else None
        order = builder.to_command()
        with self._pending_actions.guard("purchase", "Purchase"):
            ticket_ids = await self._purchase_repository.buy_tickets(order)
        if not ticket_ids:
            raise InvalidResponseShape("Server did not return any ticket identifiers")

        logger.info(f"Created {len(ticket_ids)} ticket(s), payment method {method.value}")
        builder.reset()
        await self._schedule_arrivals(ticket_ids)

        if method is PaymentMethod.CASH:
            self._navigate(TICKETS_ROUTE, {"message": CASH_CONFIRMATION})
            return PurchaseOutcome(
                ticket_ids=tuple(ticket_ids),
                payment_method=method,
                status=PurchaseStatus.CONFIRMED,
                message=CASH_CONFIRMATION,
            )

        self._navigate(
            PAYMENT_ROUTE,
            {
                "ticketIds": list(ticket_ids),
                "price": str(price.amount) if price else "0",
                "currency": price.currency.value if price else "",
            },
        )
        return PurchaseOutcome(
            ticket_ids=tuple(ticket_ids),
            payment_method=method,
            status=PurchaseStatus.AWAITING_PAYMENT,
            price=price,
        )

    async def pay(
        self, outcome: PurchaseOutcome, card: "CardDetails | Mapping[str, Any]"
    ) -> PurchaseOutcome:
        """Complete a card purchase with the price computed before submission."""
        if outcome.status is not PurchaseStatus.AWAITING_PAYMENT or outcome.price is None:
            raise BusinessRuleViolation("This purchase is not awaiting card payment")
        await self._payment_processor.pay(
            list(outcome.ticket_ids), card, outcome.price.currency
        )
        return replace(outcome, status=PurchaseStatus.PAID)

    def _navigate(self, route: str, params: dict[str, Any]) -> None:
        if self._router is not None:
            self._router.navigate(route, params)

    async def _schedule_arrivals(self, ticket_ids: list[str]) -> None:
        if self._notification_scheduler is None or self._ticket_repository is None:
            return
        arrivals: list[TicketArrival] = []
        try:
            for ticket_id in ticket_ids:
                arrivals.extend(await self._ticket_repository.get_ticket_arrivals(ticket_id))
            if arrivals:
                await self._notification_scheduler.schedule_arrival(arrivals)
        except TicketingError as e:
            logger.warning(f"Could not schedule arrival notifications: {e}")
