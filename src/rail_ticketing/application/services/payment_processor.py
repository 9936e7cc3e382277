"""Card payment for tickets awaiting payment."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from rail_ticketing.application.services.pending_actions import PendingActions
from rail_ticketing.domain.codecs import CurrencyCodec
from rail_ticketing.domain.contracts import TICKETS_ROUTE
from rail_ticketing.domain.errors import NetworkError, PaymentRejected, ValidationError
from rail_ticketing.domain.models import CardDetails, CurrencyCode, collect_field_errors

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from rail_ticketing.domain.contracts import Router
    from rail_ticketing.domain.ports import TicketPurchaseRepository

PAYMENT_FAILED_MESSAGE = "Payment failed. Please check your card details and try again."


class PaymentProcessor:
    """Validates card details and submits the payment.

    Card data is only ever placed in the request body; it is never logged or
    included in raised errors.
    """

    def __init__(
        self,
        purchase_repository: "TicketPurchaseRepository",
        router: "Router | None" = None,
        pending_actions: PendingActions | None = None,
    ) -> None:
        self._purchase_repository = purchase_repository
        self._router = router
        self._pending_actions = pending_actions or PendingActions()

    @staticmethod
    def validate_card(card: CardDetails | Mapping[str, Any]) -> CardDetails:
        """Check card fields locally.

        Raises:
            ValidationError: With a message per invalid field.
        """
        if isinstance(card, CardDetails):
            return card
        try:
            return CardDetails.model_validate(dict(card))
        except PydanticValidationError as e:
            raise ValidationError(collect_field_errors(e)) from None

    async def pay(
        self,
        ticket_ids: list[str],
        card: CardDetails | Mapping[str, Any],
        currency: CurrencyCode | str,
    ) -> None:
        """Pay for ``ticket_ids`` by card.

        Raises:
            ValidationError: Before any network call, if inputs are invalid.
            PaymentRejected: If the server declines the payment.
            NetworkError: On transport failures.
        """
        card_details = self.validate_card(card)
        if not ticket_ids:
            raise ValidationError({"ticket_ids": "At least one ticket is required"})
        symbol = CurrencyCodec.to_symbol(currency)
        if not symbol:
            raise ValidationError({"currency": "Unsupported currency"})

        payload = {
            "ticketIds": list(ticket_ids),
            "currency": CurrencyCodec.to_numeric(symbol),
            "cardNumber": card_details.card_number,
            "cardExpMonth": int(card_details.exp_month),
            "cardExpYear": int(card_details.exp_year),
            "cardCvc": card_details.cvc,
        }

        key = "payment:" + ",".join(sorted(ticket_ids))
        with self._pending_actions.guard(key, "Payment"):
            try:
                await self._purchase_repository.pay_by_card(payload)
            except NetworkError as e:
                if e.details.is_client_error:
                    logger.warning(
                        f"Card payment for {len(ticket_ids)} ticket(s) declined "
                        f"(status {e.status_code})"
                    )
                    raise PaymentRejected(PAYMENT_FAILED_MESSAGE) from None
                logger.error(f"Card payment for {len(ticket_ids)} ticket(s) failed: {e}")
                raise

        logger.info(f"Card payment accepted for {len(ticket_ids)} ticket(s)")
        if self._router is not None:
            self._router.navigate(TICKETS_ROUTE)
