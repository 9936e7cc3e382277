"""Station reference data and nearest-station lookup."""

import logging
from enum import Enum
from typing import TYPE_CHECKING

from rail_ticketing.domain.errors import LocationUnavailable
from rail_ticketing.domain.models import Coordinates, NearestStation, Station

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from rail_ticketing.domain.contracts import LocationProvider
    from rail_ticketing.domain.ports import StationRepository


class LocationStatus(str, Enum):
    """State of the "use current location" lookup."""

    IDLE = "idle"
    PENDING = "pending"
    AVAILABLE = "available"
    FAILED = "failed"


class StationCatalog:
    """Lists stations once per session and resolves the nearest one."""

    def __init__(
        self,
        station_repository: "StationRepository",
        location_provider: "LocationProvider | None" = None,
    ) -> None:
        self._station_repository = station_repository
        self._location_provider = location_provider
        self._stations: list[Station] | None = None
        self._by_id: dict[str, Station] = {}
        self.location_status = LocationStatus.IDLE

    async def list_stations(self) -> list[Station]:
        """Return all stations, fetching them on first use."""
        if self._stations is None:
            stations = await self._station_repository.list_stations()
            self._stations = stations
            self._by_id = {station.id: station for station in stations}
            logger.info(f"Cached {len(stations)} stations")
        return list(self._stations)

    async def find_station(self, station_id: str) -> Station | None:
        """Look a station up by id in the cached list."""
        await self.list_stations()
        return self._by_id.get(station_id)

    @property
    def can_use_current_location(self) -> bool:
        """Whether a "use current location" affordance should be enabled."""
        return self._location_provider is not None and self.location_status not in (
            LocationStatus.PENDING,
            LocationStatus.FAILED,
        )

    async def nearest_station(self, coordinates: Coordinates | None = None) -> NearestStation:
        """Resolve the station nearest to ``coordinates`` or to the device position.

        Raises:
            LocationUnavailable: If no position is known or permission was denied.
        """
        self.location_status = LocationStatus.PENDING
        try:
            if coordinates is None:
                coordinates = await self._current_coordinates()
            station = await self._station_repository.find_nearest_station(
                coordinates.latitude, coordinates.longitude
            )
        except Exception:
            self.location_status = LocationStatus.FAILED
            raise
        self.location_status = LocationStatus.AVAILABLE
        return station

    async def _current_coordinates(self) -> Coordinates:
        if self._location_provider is None:
            raise LocationUnavailable("No location provider configured")
        coordinates = await self._location_provider.current_coordinates()
        if coordinates is None:
            raise LocationUnavailable("Current location could not be determined")
        return coordinates
