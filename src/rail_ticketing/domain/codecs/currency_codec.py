"""Single conversion point between the API's currency encodings.

The API sends currencies either as symbols ("PLN") or as integer enum values
(0=PLN, 1=EUR, 2=USD), and the payment endpoint only accepts the integer form.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rail_ticketing.domain.errors import InvalidPriceData
from rail_ticketing.domain.models.money import CurrencyCode, Money

logger = logging.getLogger(__name__)

NUMERIC_TO_SYMBOL: dict[int, CurrencyCode] = {
    0: CurrencyCode.PLN,
    1: CurrencyCode.EUR,
    2: CurrencyCode.USD,
}
SYMBOL_TO_NUMERIC: dict[CurrencyCode, int] = {v: k for k, v in NUMERIC_TO_SYMBOL.items()}
DEFAULT_NUMERIC = 0


class _CanonicalMoney(BaseModel):
    model_config = ConfigDict(frozen=True, hide_input_in_errors=True)

    amount: Decimal = Field(ge=0, allow_inf_nan=False)
    currency: CurrencyCode

    @field_validator("amount", mode="before")
    @classmethod
    def reject_booleans(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("amount must be numeric")
        return v


class CurrencyCodec:
    """Maps numeric currency codes to symbols and back."""

    @staticmethod
    def to_symbol(code: int | str | CurrencyCode | None) -> CurrencyCode | str:
        """Return the currency for ``code`` or ``""`` when it is not recognised."""
        if isinstance(code, CurrencyCode):
            return code
        if isinstance(code, bool) or code is None:
            return ""
        if isinstance(code, int):
            return NUMERIC_TO_SYMBOL.get(code, "")
        if isinstance(code, str):
            text = code.strip()
            if text.isdigit():
                return NUMERIC_TO_SYMBOL.get(int(text), "")
            try:
                return CurrencyCode(text.upper())
            except ValueError:
                return ""
        return ""

    @staticmethod
    def to_numeric(symbol: CurrencyCode | str) -> int:
        """Return the integer wire code; unknown symbols fall back to PLN (0).

        The fallback is not a confirmed currency, callers validate the symbol first.
        """
        currency = CurrencyCodec.to_symbol(symbol)
        if not currency:
            logger.warning(f"Unknown currency {symbol!r}, defaulting to numeric code 0")
            return DEFAULT_NUMERIC
        return SYMBOL_TO_NUMERIC[CurrencyCode(currency)]

    @staticmethod
    def _coerce_amount(raw: Any) -> Any:
        if isinstance(raw, str):
            try:
                return Decimal(raw.strip())
            except InvalidOperation:
                return raw
        if isinstance(raw, float):
            return Decimal(str(raw))
        return raw

    @classmethod
    def normalize_money(cls, payload: Any) -> Money:
        """Canonicalise a money payload in any accepted wire shape.

        Accepts ``{"price": 12.5, "currency": "PLN"}``,
        ``{"amount": "12.50", "currency": 0}`` and
        ``{"price": {"amount": 12.5, "currency": 0}}``.

        Raises:
            InvalidPriceData: If the payload cannot be validated after coercion.
        """
        if not isinstance(payload, Mapping):
            raise InvalidPriceData("Price payload must be an object")

        body: Mapping[str, Any] = payload
        nested = payload.get("price")
        if isinstance(nested, Mapping):
            body = nested

        raw_amount = body.get("amount")
        if raw_amount is None:
            raw_amount = body.get("price")

        candidate = {
            "amount": cls._coerce_amount(raw_amount),
            "currency": cls.to_symbol(body.get("currency")) or None,
        }
        try:
            money = _CanonicalMoney.model_validate(candidate)
        except ValidationError as e:
            raise InvalidPriceData("Invalid price value received from server") from e
        return Money(amount=money.amount, currency=money.currency)
