"""Cursor-paginated connection search.

The cursor is a departure time: page 1 is requested with the query's own
departure time, every following page re-sends the previous page's
``next_cursor`` as ``departureTime`` while the station ids stay fixed.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from rail_ticketing.domain.errors import InvalidResponseShape, TicketingError
from rail_ticketing.domain.models import Itinerary, ItineraryPage, ParseKind, SearchQuery

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from rail_ticketing.domain.ports import ConnectionRepository


class _SearchSession:
    """Pagination state for one search key."""

    def __init__(self, query: SearchQuery) -> None:
        self.query = query
        self.pages: list[ItineraryPage] = []
        self.seen_cursors: set[str] = set()
        self.next_cursor: str | None = query.departure_time
        self.has_next_page = True
        self.lock = asyncio.Lock()


class ConnectionSearchEngine:
    """Fetches connection pages strictly in order for the active search key."""

    def __init__(self, connection_repository: "ConnectionRepository") -> None:
        self._connection_repository = connection_repository
        self._session: _SearchSession | None = None

    @property
    def query(self) -> SearchQuery | None:
        return self._session.query if self._session else None

    @property
    def pages(self) -> list[ItineraryPage]:
        return list(self._session.pages) if self._session else []

    @property
    def itineraries(self) -> list[Itinerary]:
        """All itineraries loaded so far, in page order."""
        return [item for page in self.pages for item in page.items]

    @property
    def has_next_page(self) -> bool:
        return bool(self._session and self._session.has_next_page)

    @property
    def is_loading(self) -> bool:
        return bool(self._session and self._session.lock.locked())

    async def search(self, query: SearchQuery) -> ItineraryPage | None:
        """Start a new search and fetch its first page.

        Issuing a query, even the same one again, resets pagination. Results
        still in flight for the previous query are discarded when they arrive.
        """
        logger.info(
            f"Searching connections {query.start_station_id} -> {query.end_station_id} "
            f"from {query.departure_time}"
        )
        self._session = _SearchSession(query)
        return await self.load_more()

    async def load_more(self) -> ItineraryPage | None:
        """Fetch the next page of the active search.

        Returns None when there is no active search, no further page, or the
        search was replaced while this page was loading. A failed page leaves
        the session untouched, so calling this again retries the same cursor.
        """
        session = self._session
        if session is None:
            return None

        async with session.lock:
            if session is not self._session or not session.has_next_page:
                return None
            cursor = session.next_cursor
            if not cursor or cursor in session.seen_cursors:
                logger.warning(f"Stopping pagination, cursor {cursor!r} was already fetched")
                session.has_next_page = False
                return None

            try:
                result = await self._connection_repository.fetch_connections_page(
                    session.query.start_station_id,
                    session.query.end_station_id,
                    cursor,
                )
            except TicketingError as e:
                if session is not self._session:
                    logger.debug(f"Dropping failure for superseded search cursor {cursor}: {e}")
                    return None
                raise

            if session is not self._session:
                logger.debug(f"Discarding page for superseded search cursor {cursor}")
                return None

            if result.kind is ParseKind.INVALID or result.value is None:
                raise InvalidResponseShape(result.error or "Invalid connections data")
            if result.kind is ParseKind.LENIENT:
                logger.warning(f"Connections page accepted by lenient schema: {result.error}")

            page = result.value
            session.seen_cursors.add(cursor)
            session.pages.append(page)
            session.has_next_page = page.has_next_page and bool(page.next_cursor)
            session.next_cursor = page.next_cursor
            return page

    async def iter_pages(self, query: SearchQuery) -> AsyncIterator[ItineraryPage]:
        """Yield every page of a search, stopping when the server reports no more."""
        page = await self.search(query)
        while page is not None:
            yield page
            page = await self.load_more()
