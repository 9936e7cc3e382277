"""Discount domain models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Discount:
    """Passenger-category reduction selectable per passenger (e.g. student)."""

    id: UUID
    name: str


@dataclass(frozen=True)
class DiscountCode:
    """Promotional code applied once per order."""

    id: UUID
    code: str
    percentage: float
    valid_from: str
    valid_to: str
