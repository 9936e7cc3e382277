"""Working state of a purchase: passengers, connections and discount code."""

import logging
from dataclasses import dataclass, fields, replace
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from rail_ticketing.domain.codecs import DateNormalizer
from rail_ticketing.domain.errors import ValidationError
from rail_ticketing.domain.models import (
    DiscountCode,
    Itinerary,
    PurchaseOrder,
    collect_field_errors,
)

logger = logging.getLogger(__name__)


@dataclass
class PassengerDraft:
    """Passenger form fields as typed, before normalisation."""

    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    discount_id: str | None = None


@dataclass(frozen=True)
class ConnectionDraft:
    """Chosen leg with its travel date in whatever encoding it arrived."""

    id: str
    start_station_id: str
    end_station_id: str
    connection_date: str


_PASSENGER_FIELDS = {f.name for f in fields(PassengerDraft)}


class OrderBuilder:
    """Accumulates an order and turns it into a validated ``PurchaseOrder``.

    Every mutation bumps ``revision`` so a price quote can be matched to the
    exact state it was computed for. There is always at least one passenger.
    """

    def __init__(
        self,
        date_normalizer: DateNormalizer,
        connections: list[ConnectionDraft] | None = None,
        email: str = "",
    ) -> None:
        self._date_normalizer = date_normalizer
        self._connections: list[ConnectionDraft] = list(connections or [])
        self._passengers: list[PassengerDraft] = [PassengerDraft()]
        self._discount_code: DiscountCode | None = None
        self.email = email
        self.revision = 0

    @classmethod
    def from_itinerary(
        cls,
        itinerary: Itinerary,
        date_normalizer: DateNormalizer,
        email: str = "",
        connection_date: str | None = None,
    ) -> "OrderBuilder":
        """Create a builder with one connection per leg of ``itinerary``.

        The travel date defaults to each leg's departure time, normalised later.
        """
        connections = [
            ConnectionDraft(
                id=leg.id,
                start_station_id=leg.departure_station_id,
                end_station_id=leg.arrival_station_id,
                connection_date=connection_date or leg.departure_time,
            )
            for leg in itinerary.legs
        ]
        if not connections:
            logger.warning("Itinerary has no legs; order cannot be completed")
        return cls(date_normalizer, connections=connections, email=email)

    def _touch(self) -> None:
        self.revision += 1

    @property
    def passengers(self) -> list[PassengerDraft]:
        return [replace(p) for p in self._passengers]

    @property
    def connections(self) -> list[ConnectionDraft]:
        return list(self._connections)

    @property
    def discount_code(self) -> DiscountCode | None:
        return self._discount_code

    def set_email(self, email: str) -> None:
        self.email = email
        self._touch()

    def set_connections(self, connections: list[ConnectionDraft]) -> None:
        self._connections = list(connections)
        self._touch()

    def add_passenger(self) -> int:
        """Append a blank passenger and return its index."""
        self._passengers.append(PassengerDraft())
        self._touch()
        return len(self._passengers) - 1

    def _has_passenger(self, index: int) -> bool:
        return 0 <= index < len(self._passengers)

    def remove_passenger(self, index: int) -> bool:
        """Remove a passenger; does nothing when only one is left or ``index`` is out of range."""
        if len(self._passengers) <= 1 or not self._has_passenger(index):
            return False
        del self._passengers[index]
        self._touch()
        return True

    def update_passenger(self, index: int, **changes: Any) -> None:
        if not self._has_passenger(index):
            raise ValueError(
                f"No passenger at index {index} (order has {len(self._passengers)})"
            )
        unknown = set(changes) - _PASSENGER_FIELDS
        if unknown:
            raise ValueError(f"Unknown passenger fields: {sorted(unknown)}")
        self._passengers[index] = replace(self._passengers[index], **changes)
        self._touch()

    def apply_discount_code(self, discount_code: DiscountCode) -> None:
        self._discount_code = discount_code
        self._touch()

    def clear_discount_code(self) -> None:
        self._discount_code = None
        self._touch()

    def reset(self) -> None:
        """Forget the submitted order."""
        self._passengers = [PassengerDraft()]
        self._connections = []
        self._discount_code = None
        self._touch()

    def validate(self) -> dict[str, str]:
        """Per-field error messages, empty when the order can be submitted."""
        try:
            self.to_command()
        except ValidationError as e:
            return e.field_errors
        return {}

    def to_command(self) -> PurchaseOrder:
        """Normalise dates and build the purchase command.

        Raises:
            ValidationError: With one message per invalid field.
        """
        normalize = self._date_normalizer.normalize
        payload = {
            "email": self.email,
            "passengers": [
                {
                    "first_name": p.first_name,
                    "last_name": p.last_name,
                    "date_of_birth": normalize(p.date_of_birth),
                    "discount_id": p.discount_id or None,
                }
                for p in self._passengers
            ],
            "discount_code_id": self._discount_code.id if self._discount_code else None,
            "connections": [
                {
                    "id": c.id,
                    "start_station_id": c.start_station_id,
                    "end_station_id": c.end_station_id,
                    "connection_date": normalize(c.connection_date),
                }
                for c in self._connections
            ],
        }
        try:
            return PurchaseOrder.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(collect_field_errors(e)) from None
