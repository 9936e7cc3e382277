"""Reads purchased tickets and guards their cancel/refund transitions.

State is never updated optimistically: after a mutation the manager refetches
the ticket details and drops cached list pages, so what callers see is what
the server confirmed.
"""

import base64
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rail_ticketing.application.services.pending_actions import PendingActions
from rail_ticketing.domain.codecs import DateNormalizer
from rail_ticketing.domain.errors import BusinessRuleViolation
from rail_ticketing.domain.models import (
    RefundRequest,
    TicketActions,
    TicketDetails,
    TicketPage,
    TicketScope,
    TicketStatus,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from rail_ticketing.domain.contracts import AuthSession
    from rail_ticketing.domain.ports import TicketRepository

DEFAULT_REFUND_REASON = "No reason provided"
CANCELLED_NOT_REFUNDABLE = "Cancelled tickets are not refundable"

_ListKey = tuple[str, TicketScope, int, int]


class TicketLifecycleManager:
    """Ticket lists, details, QR codes and the cancel/refund state machine."""

    def __init__(
        self,
        ticket_repository: "TicketRepository",
        auth_session: "AuthSession | None" = None,
        page_size: int = 10,
        clock: Callable[[], datetime] | None = None,
        pending_actions: PendingActions | None = None,
    ) -> None:
        self._ticket_repository = ticket_repository
        self._auth_session = auth_session
        self._page_size = page_size
        self._clock = clock or (lambda: datetime.now(UTC))
        self._pending_actions = pending_actions or PendingActions()
        self._details: dict[str, TicketDetails] = {}
        self._lists: dict[_ListKey, TicketPage] = {}
        self._current: dict[str, TicketDetails | None] = {}

    def _resolve_user_id(self, user_id: str | None) -> str:
        if user_id:
            return user_id
        session_user = self._auth_session.current_user_id() if self._auth_session else None
        if not session_user:
            raise BusinessRuleViolation("Sign in to see your tickets")
        return session_user

    async def _fetch_page(self, key: _ListKey) -> TicketPage:
        user_id, scope, page, page_size = key
        wire_page = await self._ticket_repository.list_tickets(
            user_id, scope, page_number=page + 1, page_size=page_size
        )
        return replace(wire_page, page_number=max(wire_page.page_number - 1, 0))

    async def list_tickets(
        self,
        user_id: str | None = None,
        scope: TicketScope = TicketScope.CURRENT,
        page: int = 0,
        page_size: int | None = None,
        refresh: bool = True,
    ) -> TicketPage:
        """List a page of tickets; ``page`` is 0-based here and 1-based on the wire."""
        if page < 0:
            raise ValueError("page must be >= 0")
        key = (self._resolve_user_id(user_id), scope, page, page_size or self._page_size)
        if refresh or key not in self._lists:
            self._lists[key] = await self._fetch_page(key)
        return self._lists[key]

    async def get_details(self, ticket_id: str, refresh: bool = False) -> TicketDetails:
        if refresh or ticket_id not in self._details:
            self._details[ticket_id] = await self._ticket_repository.get_ticket_details(ticket_id)
        return self._details[ticket_id]

    async def current_ticket(
        self, user_id: str | None = None, refresh: bool = False
    ) -> TicketDetails | None:
        """The passenger's next upcoming ticket with its details.

        The id lookup and the details lookup are cached together under the
        user id, so callers never see an id without matching details.
        """
        user = self._resolve_user_id(user_id)
        if refresh or user not in self._current:
            page = await self._fetch_page((user, TicketScope.CURRENT, 0, 1))
            details = None
            if page.items:
                details = await self.get_details(page.items[0].id, refresh=True)
            self._current[user] = details
        return self._current[user]

    def has_journey_started(self, ticket: TicketDetails) -> bool:
        """True once the departure time has passed; unreadable times count as not started."""
        departure = DateNormalizer.parse_datetime(ticket.departure_time, ticket.connection_date)
        if departure is None:
            return False
        if departure.tzinfo is None:
            departure = departure.astimezone()
        return self._clock() >= departure

    def can_cancel(self, ticket: TicketDetails, scope: TicketScope) -> bool:
        return (
            scope is TicketScope.CURRENT
            and ticket.status.can_transition_to(TicketStatus.CANCELLED)
            and not self.has_journey_started(ticket)
        )

    @staticmethod
    def can_request_refund(ticket: TicketDetails, scope: TicketScope) -> bool:
        return scope is TicketScope.ARCHIVE and ticket.status is TicketStatus.PAID

    @staticmethod
    def can_show_qr_code(ticket: TicketDetails) -> bool:
        return ticket.status is TicketStatus.PAID and bool(ticket.qr_code_id)

    def available_actions(self, ticket: TicketDetails, scope: TicketScope) -> TicketActions:
        return TicketActions(
            can_cancel=self.can_cancel(ticket, scope),
            can_request_refund=self.can_request_refund(ticket, scope),
            can_show_qr_code=self.can_show_qr_code(ticket),
        )

    async def get_qr_code(self, ticket: TicketDetails) -> str | None:
        """Base64 PNG of the ticket's QR code; None unless the ticket is paid."""
        if not self.can_show_qr_code(ticket):
            return None
        png = await self._ticket_repository.get_qr_code(str(ticket.qr_code_id))
        return base64.b64encode(png).decode("ascii")

    async def cancel(self, ticket: TicketDetails, scope: TicketScope) -> TicketDetails:
        """Cancel an upcoming ticket and return its refreshed details.

        Raises:
            BusinessRuleViolation: If cancelling is not allowed for this ticket/view.
        """
        if scope is not TicketScope.CURRENT:
            raise BusinessRuleViolation("Tickets can only be cancelled from current tickets")
        if not ticket.status.can_transition_to(TicketStatus.CANCELLED):
            raise BusinessRuleViolation(
                f"Ticket with status {ticket.status.value} cannot be cancelled"
            )
        if self.has_journey_started(ticket):
            raise BusinessRuleViolation("Journey has already started")

        with self._pending_actions.guard(f"ticket:{ticket.id}", "An action on this ticket"):
            await self._ticket_repository.cancel_ticket(ticket.id)
        logger.info(f"Cancelled ticket {ticket.id}")
        return await self._refresh_after_mutation(ticket.id)

    async def request_refund(
        self, ticket: TicketDetails, scope: TicketScope, reason: str = ""
    ) -> TicketDetails:
        """File a refund request for a paid, archived ticket.

        Raises:
            BusinessRuleViolation: Before any network call, if the ticket is not
                refundable from this view.
        """
        if ticket.status is TicketStatus.CANCELLED:
            raise BusinessRuleViolation(CANCELLED_NOT_REFUNDABLE)
        if scope is not TicketScope.ARCHIVE:
            raise BusinessRuleViolation("Refunds can only be requested for archived tickets")
        if ticket.status is not TicketStatus.PAID:
            raise BusinessRuleViolation(
                f"Only paid tickets can be refunded (status {ticket.status.value})"
            )
        user_id = self._auth_session.current_user_id() if self._auth_session else None
        email = self._auth_session.email() if self._auth_session else None
        if not user_id or not email:
            raise BusinessRuleViolation("Sign in to request a refund")

        request = RefundRequest(
            user_id=user_id,
            ticket_id=ticket.id,
            reason=reason.strip() or DEFAULT_REFUND_REASON,
            email=email,
        )
        with self._pending_actions.guard(f"ticket:{ticket.id}", "An action on this ticket"):
            await self._ticket_repository.request_refund(request)
        logger.info(f"Refund requested for ticket {ticket.id}")
        return await self._refresh_after_mutation(ticket.id)

    async def _refresh_after_mutation(self, ticket_id: str) -> TicketDetails:
        self._current.clear()
        self._lists.clear()
        self._details.pop(ticket_id, None)
        return await self.get_details(ticket_id, refresh=True)
