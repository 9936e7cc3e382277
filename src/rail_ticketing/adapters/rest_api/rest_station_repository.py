"""Station repository adapter for the ticketing REST API."""

from typing import TYPE_CHECKING

from rail_ticketing.adapters.rest_api.constants import NEAREST_STATION_PATH, STATIONS_PATH
from rail_ticketing.adapters.rest_api.schemas import (
    NearestStationSchema,
    StationSchema,
    parse_list,
    parse_model,
)
from rail_ticketing.domain.models import NearestStation, Station
from rail_ticketing.domain.ports import StationRepository

if TYPE_CHECKING:
    from rail_ticketing.adapters.rest_api.http_client import RestHttpClient


class RestStationRepository(StationRepository):
    """Adapter for station reference data."""

    def __init__(self, http_client: "RestHttpClient") -> None:
        self._http = http_client

    async def list_stations(self) -> list[Station]:
        data = await self._http.get_json(STATIONS_PATH)
        return [s.to_domain() for s in parse_list(StationSchema, data, "stations")]

    async def find_nearest_station(self, latitude: float, longitude: float) -> NearestStation:
        data = await self._http.get_json(
            NEAREST_STATION_PATH, params={"latitude": latitude, "longitude": longitude}
        )
        return parse_model(NearestStationSchema, data, "nearest station").to_domain()
