"""Station domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """A railway station as listed by the ticketing API."""

    id: str
    name: str


@dataclass(frozen=True)
class NearestStation:
    """Station resolved from the passenger's coordinates."""

    id: str
    name: str
    city: str = ""

    def as_station(self) -> Station:
        return Station(id=self.id, name=self.name)


@dataclass(frozen=True)
class Coordinates:
    """Geographic position in decimal degrees."""

    latitude: float
    longitude: float
