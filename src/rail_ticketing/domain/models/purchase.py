"""Purchase command models.

These cross the API boundary, so they are pydantic models serialised with the
camelCase field names the ticketing API expects.
"""

import re
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel, to_snake

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class PaymentMethod(str, Enum):
    """How the passenger settles the order."""

    CASH = "cash"
    CARD = "card"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        hide_input_in_errors=True,
        str_strip_whitespace=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialise with API field names."""
        return self.model_dump(mode="json", by_alias=True)


def _require_iso_date(value: str) -> str:
    if not ISO_DATE_PATTERN.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    return value


class Passenger(_WireModel):
    """A traveller on the order."""

    first_name: str
    last_name: str
    date_of_birth: str
    discount_id: UUID | None = None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        if not v:
            raise ValueError("First name is required")
        return v

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        if not v:
            raise ValueError("Last name is required")
        return v

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: str) -> str:
        return _require_iso_date(v)


class ConnectionRef(_WireModel):
    """Binds a chosen leg to its stations and travel date."""

    id: str = Field(min_length=1)
    start_station_id: str = Field(min_length=1)
    end_station_id: str = Field(min_length=1)
    connection_date: str

    @field_validator("connection_date")
    @classmethod
    def validate_connection_date(cls, v: str) -> str:
        return _require_iso_date(v)


class PurchaseOrder(_WireModel):
    """Normalised purchase command sent to the pricing and ticket endpoints."""

    email: EmailStr
    passengers: list[Passenger] = Field(min_length=1)
    discount_code_id: UUID | None = None
    connections: list[ConnectionRef] = Field(min_length=1)

    @field_validator("passengers")
    @classmethod
    def validate_passengers(cls, v: list[Passenger]) -> list[Passenger]:
        if not v:
            raise ValueError("At least one passenger is required")
        return v

    @field_validator("connections")
    @classmethod
    def validate_connections(cls, v: list[ConnectionRef]) -> list[ConnectionRef]:
        if not v:
            raise ValueError("At least one connection is required")
        return v


class CardDetails(_WireModel):
    """Card data as typed by the passenger. Never logged."""

    card_number: str
    exp_month: str
    exp_year: str
    cvc: str

    @field_validator("card_number", mode="before")
    @classmethod
    def strip_card_number_spaces(cls, v: Any) -> Any:
        return v.replace(" ", "") if isinstance(v, str) else v

    @field_validator("card_number")
    @classmethod
    def validate_card_number(cls, v: str) -> str:
        if not re.fullmatch(r"\d{16}", v):
            raise ValueError("Card number must be 16 digits")
        return v

    @field_validator("exp_month")
    @classmethod
    def validate_exp_month(cls, v: str) -> str:
        if not re.fullmatch(r"0[1-9]|1[0-2]", v):
            raise ValueError("Month must be between 01-12")
        return v

    @field_validator("exp_year")
    @classmethod
    def validate_exp_year(cls, v: str) -> str:
        if not re.fullmatch(r"\d{2}", v):
            raise ValueError("Year must be 2 digits")
        return v

    @field_validator("cvc")
    @classmethod
    def validate_cvc(cls, v: str) -> str:
        if not re.fullmatch(r"\d{3,4}", v):
            raise ValueError("CVC must be 3 or 4 digits")
        return v

    def __repr__(self) -> str:
        return "CardDetails(***)"

    __str__ = __repr__


def collect_field_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic error into ``{"passengers.0.first_name": message}``.

    Only locations and messages are kept; input values are dropped so card
    numbers and personal data never end up in error text.
    """
    field_errors: dict[str, str] = {}
    for error in exc.errors(include_input=False, include_url=False):
        path = ".".join(
            to_snake(part) if isinstance(part, str) else str(part) for part in error["loc"]
        )
        message = error["msg"].removeprefix("Value error, ")
        field_errors.setdefault(path or "__root__", message)
    return field_errors
