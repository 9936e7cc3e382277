"""Local stand-ins for the collaborators a UI shell would provide.

The CLI has no screens, device location or notification centre, so these
implementations read the signed-in user and position from configuration and
log navigation and notification requests.
"""

import logging
from typing import Any

from rail_ticketing.domain.contracts import (
    AuthSession,
    LocationProvider,
    NotificationScheduler,
    Router,
)
from rail_ticketing.domain.models import Coordinates, TicketArrival

logger = logging.getLogger(__name__)


class StaticAuthSession(AuthSession):
    """Session for a user configured up front."""

    def __init__(self, user_id: str | None = None, email: str | None = None) -> None:
        self._user_id = user_id
        self._email = email

    def current_user_id(self) -> str | None:
        return self._user_id

    def email(self) -> str | None:
        return self._email


class FixedLocationProvider(LocationProvider):
    """Reports a configured position, or no fix when none is configured."""

    def __init__(self, latitude: float | None = None, longitude: float | None = None) -> None:
        self._latitude = latitude
        self._longitude = longitude

    async def current_coordinates(self) -> Coordinates | None:
        if self._latitude is None or self._longitude is None:
            return None
        return Coordinates(latitude=self._latitude, longitude=self._longitude)


class LoggingRouter(Router):
    """Records navigation requests instead of switching screens."""

    def __init__(self) -> None:
        self.history: list[tuple[str, dict[str, Any]]] = []

    def navigate(self, route: str, params: dict[str, Any] | None = None) -> None:
        self.history.append((route, dict(params or {})))
        logger.info(f"Navigate to {route}")


class LoggingNotificationScheduler(NotificationScheduler):
    """Logs the arrival notifications a device would schedule."""

    async def schedule_arrival(self, arrivals: list[TicketArrival]) -> None:
        for arrival in arrivals:
            logger.info(f"Arrival in {arrival.city_name} at {arrival.arrival_time}")
