"""Connection search repository adapter.

Pages are parsed strictly first; when that fails the lenient envelope schema
is tried, and only when both fail is the page reported as invalid.
"""

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from rail_ticketing.adapters.rest_api.constants import CONNECTIONS_PATH
from rail_ticketing.adapters.rest_api.schemas import (
    ConnectionsPageSchema,
    LenientConnectionsPageSchema,
)
from rail_ticketing.domain.models import ItineraryPage, ParseResult
from rail_ticketing.domain.ports import ConnectionRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from rail_ticketing.adapters.rest_api.http_client import RestHttpClient

SEARCH_PAGE_TIMEOUT_SECONDS = 30.0


def parse_connections_page(data: Any, cursor: str | None = None) -> ParseResult[ItineraryPage]:
    """Tag a raw connections payload as STRICT, LENIENT or INVALID."""
    try:
        return ParseResult.strict(ConnectionsPageSchema.model_validate(data).to_domain(cursor))
    except ValidationError as strict_error:
        reason = f"{strict_error.error_count()} field(s) did not match the connections schema"
    try:
        page = LenientConnectionsPageSchema.model_validate(data).to_domain(cursor)
    except ValidationError:
        logger.error("Connections payload matched neither the strict nor the lenient schema")
        return ParseResult.invalid("Invalid connections data received from server")
    return ParseResult.lenient(page, reason)


class RestConnectionRepository(ConnectionRepository):
    """Adapter for cursor-paginated connection search."""

    def __init__(
        self,
        http_client: "RestHttpClient",
        page_timeout_seconds: float = SEARCH_PAGE_TIMEOUT_SECONDS,
    ) -> None:
        self._http = http_client
        self._page_timeout_seconds = page_timeout_seconds

    async def fetch_connections_page(
        self,
        start_station_id: str,
        end_station_id: str,
        departure_time: str,
    ) -> ParseResult[ItineraryPage]:
        data = await self._http.get_json(
            CONNECTIONS_PATH,
            params={
                "startStationId": start_station_id,
                "endStationId": end_station_id,
                "departureTime": departure_time,
            },
            timeout=self._page_timeout_seconds,
        )
        return parse_connections_page(data, cursor=departure_time)
