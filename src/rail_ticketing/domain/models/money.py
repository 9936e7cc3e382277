"""Money domain model."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class CurrencyCode(str, Enum):
    """Currencies accepted by the ticketing API."""

    PLN = "PLN"
    EUR = "EUR"
    USD = "USD"


@dataclass(frozen=True)
class Money:
    """An amount in one of the supported currencies."""

    amount: Decimal
    currency: CurrencyCode

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency.value}"
