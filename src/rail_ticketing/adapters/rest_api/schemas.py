"""Wire schemas for the ticketing REST API.

Responses are validated with pydantic models using the API's camelCase field
names and then mapped onto domain models. Connection pages have two schemas:
the strict one describes the full payload, the lenient one only requires the
pagination envelope so a drifted page can still be shown.
"""

import logging
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from rail_ticketing.domain.codecs import CurrencyCodec
from rail_ticketing.domain.errors import InvalidPriceData, InvalidResponseShape
from rail_ticketing.domain.models import (
    Discount,
    DiscountCode,
    Itinerary,
    ItineraryPage,
    Leg,
    NearestStation,
    Station,
    TicketArrival,
    TicketDetails,
    TicketPage,
    TicketPerson,
    TicketStatus,
    TicketStop,
    TicketSummary,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiModel(BaseModel):
    """Base for response schemas: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def parse_model(schema: type[ModelT], data: Any, what: str) -> ModelT:
    """Validate ``data`` against ``schema`` or raise InvalidResponseShape."""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise InvalidResponseShape(f"Invalid {what} data received from server") from e


def parse_list(schema: type[ModelT], data: Any, what: str) -> list[ModelT]:
    """Validate a JSON array of ``schema`` items or raise InvalidResponseShape."""
    try:
        return TypeAdapter(list[schema]).validate_python(data)  # type: ignore[valid-type]
    except ValidationError as e:
        raise InvalidResponseShape(f"Invalid {what} data received from server") from e


# Stations


class StationSchema(ApiModel):
    id: str
    name: str

    def to_domain(self) -> Station:
        return Station(id=self.id, name=self.name)


class NearestStationSchema(ApiModel):
    id: str
    name: str
    city: str = ""

    def to_domain(self) -> NearestStation:
        return NearestStation(id=self.id, name=self.name, city=self.city)


# Connections


class LegPriceSchema(ApiModel):
    amount: float
    currency: int | str


class LegSchema(ApiModel):
    id: str
    name: str
    operator_name: str
    operator_code: str
    departure_time: str
    arrival_time: str
    departure_station_id: str
    departure_station: str
    arrival_station_id: str
    arrival_station: str
    price: LegPriceSchema
    duration: str

    def to_domain(self) -> Leg:
        try:
            price = CurrencyCodec.normalize_money(self.price.model_dump())
        except InvalidPriceData:
            logger.warning(f"Leg {self.id} has an unreadable price, showing it without one")
            price = None
        return Leg(
            id=self.id,
            name=self.name,
            operator_name=self.operator_name,
            operator_code=self.operator_code,
            departure_station_id=self.departure_station_id,
            departure_station=self.departure_station,
            arrival_station_id=self.arrival_station_id,
            arrival_station=self.arrival_station,
            departure_time=self.departure_time,
            arrival_time=self.arrival_time,
            price=price,
            duration=self.duration,
        )


class ItinerarySchema(ApiModel):
    connections: list[LegSchema]
    transfers_count: int
    start_station: str
    end_station: str
    departure_time: str
    arrival_time: str
    total_duration: str

    def to_domain(self) -> Itinerary:
        return Itinerary(
            start_station=self.start_station,
            end_station=self.end_station,
            departure_time=self.departure_time,
            arrival_time=self.arrival_time,
            total_duration=self.total_duration,
            transfers_count=self.transfers_count,
            legs=tuple(leg.to_domain() for leg in self.connections),
        )


class ConnectionsPageSchema(ApiModel):
    """Full connections page; every field must be present."""

    items: list[ItinerarySchema]
    next_cursor: str | None
    has_next_page: bool

    def to_domain(self, cursor: str | None = None) -> ItineraryPage:
        return ItineraryPage(
            items=tuple(item.to_domain() for item in self.items),
            has_next_page=self.has_next_page,
            next_cursor=self.next_cursor,
            cursor=cursor,
        )


class LenientItinerarySchema(ApiModel):
    """Summary fields of an itinerary whose legs could not be validated."""

    start_station: str = ""
    end_station: str = ""
    departure_time: str = ""
    arrival_time: str = ""
    total_duration: str = ""
    transfers_count: int = 0

    def to_domain(self) -> Itinerary:
        return Itinerary(
            start_station=self.start_station,
            end_station=self.end_station,
            departure_time=self.departure_time,
            arrival_time=self.arrival_time,
            total_duration=self.total_duration,
            transfers_count=self.transfers_count,
        )


class LenientConnectionsPageSchema(ApiModel):
    """Fallback page: missing envelope fields default to an empty last page."""

    items: list[dict[str, Any]] = Field(default_factory=list)
    next_cursor: str | None = None
    has_next_page: bool = False

    def to_domain(self, cursor: str | None = None) -> ItineraryPage:
        return ItineraryPage(
            items=tuple(_lenient_itinerary(item) for item in self.items),
            has_next_page=self.has_next_page,
            next_cursor=self.next_cursor,
            cursor=cursor,
        )


def _lenient_itinerary(item: dict[str, Any]) -> Itinerary:
    try:
        return ItinerarySchema.model_validate(item).to_domain()
    except ValidationError:
        pass
    try:
        return LenientItinerarySchema.model_validate(item).to_domain()
    except ValidationError:
        logger.debug("Itinerary summary fields unreadable, showing an empty entry")
        return LenientItinerarySchema().to_domain()


# Discounts


class DiscountSchema(ApiModel):
    id: UUID
    name: str

    def to_domain(self) -> Discount:
        return Discount(id=self.id, name=self.name)


class DiscountCodeSchema(ApiModel):
    id: UUID
    code: str
    percentage: float
    valid_from: str = Field(alias="from")
    valid_to: str = Field(alias="to")

    def to_domain(self) -> DiscountCode:
        return DiscountCode(
            id=self.id,
            code=self.code,
            percentage=self.percentage,
            valid_from=self.valid_from,
            valid_to=self.valid_to,
        )


# Tickets


class TicketSummarySchema(ApiModel):
    id: UUID
    start_station: str
    end_station: str
    departure_time: str
    arrival_time: str
    connection_date: str

    def to_domain(self) -> TicketSummary:
        return TicketSummary(
            id=str(self.id),
            start_station=self.start_station,
            end_station=self.end_station,
            departure_time=self.departure_time,
            arrival_time=self.arrival_time,
            connection_date=self.connection_date,
        )


class TicketPageSchema(ApiModel):
    items: list[TicketSummarySchema]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int

    def to_domain(self) -> TicketPage:
        return TicketPage(
            items=tuple(item.to_domain() for item in self.items),
            page_number=self.page_number,
            page_size=self.page_size,
            total_count=self.total_count,
            total_pages=self.total_pages,
        )


class TicketPersonSchema(ApiModel):
    first_name: str
    last_name: str
    date_of_birth: str
    discount: str | None = None


class TicketStopSchema(ApiModel):
    name: str
    arrival_time: str | None = None
    departure_time: str | None = None
    sequence_number: int


class TicketDetailsSchema(ApiModel):
    id: UUID
    ticket_number: int
    people: list[TicketPersonSchema]
    seat_numbers: list[int] | None = None
    connection_date: str
    stations: list[TicketStopSchema]
    operator_code: str
    operator_name: str
    train_name: str
    qr_code_id: UUID | None = None
    status: str
    departure_time: str
    arrival_time: str

    def to_domain(self) -> TicketDetails:
        status = TicketStatus.parse(self.status)
        if status is TicketStatus.UNKNOWN:
            logger.warning(f"Ticket {self.id} has unrecognised status {self.status!r}")
        stops = sorted(self.stations, key=lambda s: s.sequence_number)
        return TicketDetails(
            id=str(self.id),
            ticket_number=self.ticket_number,
            status=status,
            departure_time=self.departure_time,
            arrival_time=self.arrival_time,
            connection_date=self.connection_date,
            operator_code=self.operator_code,
            operator_name=self.operator_name,
            train_name=self.train_name,
            stations=tuple(
                TicketStop(
                    name=s.name,
                    arrival_time=s.arrival_time,
                    departure_time=s.departure_time,
                    sequence_number=s.sequence_number,
                )
                for s in stops
            ),
            people=tuple(
                TicketPerson(
                    first_name=p.first_name,
                    last_name=p.last_name,
                    date_of_birth=p.date_of_birth,
                    discount=p.discount,
                )
                for p in self.people
            ),
            seat_numbers=tuple(self.seat_numbers) if self.seat_numbers is not None else None,
            qr_code_id=str(self.qr_code_id) if self.qr_code_id else None,
        )


class TicketArrivalSchema(ApiModel):
    city_name: str
    arrival_time: str

    def to_domain(self) -> TicketArrival:
        return TicketArrival(city_name=self.city_name, arrival_time=self.arrival_time)
