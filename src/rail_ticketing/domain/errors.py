"""Error taxonomy for the ticketing core.

Validation and business-rule errors are raised before any network call.
Network and shape errors wrap the underlying cause via exception chaining so
the user sees one message while diagnostics keep the original error.
"""

from rail_ticketing.domain.models.error_details import ErrorDetails


class TicketingError(Exception):
    """Base class for all errors raised by the ticketing core."""


class ValidationError(TicketingError):
    """Local field or command validation failed; nothing was sent."""

    def __init__(self, field_errors: dict[str, str], message: str | None = None) -> None:
        self.field_errors = dict(field_errors)
        if message is None:
            first = next(iter(self.field_errors.items()), None)
            message = f"{first[0]}: {first[1]}" if first else "Invalid input"
        super().__init__(message)


class InvalidResponseShape(TicketingError):
    """Server payload did not match any accepted schema."""


class InvalidPriceData(InvalidResponseShape):
    """Price quote could not be validated; the price must be recalculated."""


class NetworkError(TicketingError):
    """Transport failure or non-2xx response."""

    def __init__(self, message: str, details: ErrorDetails | None = None) -> None:
        super().__init__(message)
        self.details = details or ErrorDetails(reason=message)

    @property
    def status_code(self) -> int | None:
        return self.details.status_code


class RequestTimeout(NetworkError):
    """Request exceeded its timeout. Recoverable by a manual retry."""


class BusinessRuleViolation(TicketingError):
    """Action is not permitted for the current state; blocked pre-flight."""


class InvalidDiscountCode(TicketingError):
    """Entered discount code does not resolve to a valid code."""


class PaymentRejected(TicketingError):
    """Server declined the card payment."""


class LocationUnavailable(TicketingError):
    """No location fix could be obtained (permission denied or no signal)."""
