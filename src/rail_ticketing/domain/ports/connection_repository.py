"""Connection search repository port."""

from typing import Protocol

from rail_ticketing.domain.models.itinerary import ItineraryPage
from rail_ticketing.domain.models.parse_result import ParseResult


class ConnectionRepository(Protocol):
    """Port for fetching pages of connection search results."""

    async def fetch_connections_page(
        self,
        start_station_id: str,
        end_station_id: str,
        departure_time: str,
    ) -> ParseResult[ItineraryPage]:
        """Fetch the page whose cursor is ``departure_time``."""
        ...
