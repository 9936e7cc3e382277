"""Registry of in-flight user actions."""

from collections.abc import Iterator
from contextlib import contextmanager

from rail_ticketing.domain.errors import BusinessRuleViolation


class PendingActions:
    """Rejects a second submit/pay/cancel/refund for a target while one is in flight.

    Mirrors a disabled button: the trigger is unavailable until the first
    action settles, whatever its outcome.
    """

    def __init__(self) -> None:
        self._pending: set[str] = set()

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    @contextmanager
    def guard(self, key: str, description: str) -> Iterator[None]:
        if key in self._pending:
            raise BusinessRuleViolation(f"{description} is already in progress")
        self._pending.add(key)
        try:
            yield
        finally:
            self._pending.discard(key)
