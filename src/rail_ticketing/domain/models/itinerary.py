"""Itinerary (connection search result) domain models."""

from dataclasses import dataclass, field

from rail_ticketing.domain.models.money import Money

NO_CONNECTION_DETAILS = "No connection details available"


@dataclass(frozen=True)
class Leg:
    """A single train segment within an itinerary."""

    id: str
    name: str
    operator_name: str
    operator_code: str
    departure_station_id: str
    departure_station: str
    arrival_station_id: str
    arrival_station: str
    departure_time: str
    arrival_time: str
    price: Money | None
    duration: str


@dataclass(frozen=True)
class Itinerary:
    """One searchable journey, possibly made of several legs with transfers."""

    start_station: str
    end_station: str
    departure_time: str
    arrival_time: str
    total_duration: str
    transfers_count: int
    legs: tuple[Leg, ...] = ()

    @property
    def has_details(self) -> bool:
        return bool(self.legs)

    def legs_summary(self) -> list[str]:
        """Describe each leg on one line, or explain that no details were sent."""
        if not self.legs:
            return [NO_CONNECTION_DETAILS]
        return [
            f"{leg.departure_station} -> {leg.arrival_station} ({leg.operator_name} {leg.name})".rstrip()
            for leg in self.legs
        ]


@dataclass(frozen=True)
class SearchQuery:
    """Search key; the departure time doubles as the first page cursor."""

    start_station_id: str
    end_station_id: str
    departure_time: str


@dataclass(frozen=True)
class ItineraryPage:
    """One page of connection search results."""

    items: tuple[Itinerary, ...] = field(default_factory=tuple)
    has_next_page: bool = False
    next_cursor: str | None = None
    cursor: str | None = None  # departure time this page was requested with
