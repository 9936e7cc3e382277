"""Protocol for device location."""

from typing import Protocol

from rail_ticketing.domain.models.station import Coordinates


class LocationProvider(Protocol):
    """Supplies the device position."""

    async def current_coordinates(self) -> Coordinates | None:
        """Return the current fix, or None when unavailable.

        Raises:
            LocationUnavailable: If permission to read the location was denied.
        """
        ...
