"""Protocol for screen navigation."""

from typing import Any, Protocol

TICKETS_ROUTE = "tickets"
PAYMENT_ROUTE = "payment"


class Router(Protocol):
    """Navigates the presentation layer to a named route."""

    def navigate(self, route: str, params: dict[str, Any] | None = None) -> None:
        """Navigate to ``route`` with optional parameters."""
        ...
