"""Station repository port."""

from typing import Protocol

from rail_ticketing.domain.models.station import NearestStation, Station


class StationRepository(Protocol):
    """Port for retrieving station reference data."""

    async def list_stations(self) -> list[Station]:
        """List all stations."""
        ...

    async def find_nearest_station(self, latitude: float, longitude: float) -> NearestStation:
        """Find the station closest to the given coordinates."""
        ...
