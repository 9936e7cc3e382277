"""Protocol for arrival notifications."""

from typing import Protocol

from rail_ticketing.domain.models.ticket import TicketArrival


class NotificationScheduler(Protocol):
    """Schedules local notifications for planned arrivals."""

    async def schedule_arrival(self, arrivals: list[TicketArrival]) -> None:
        """Schedule one notification per arrival."""
        ...
