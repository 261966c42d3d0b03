"""
NearSky Data Model
Canonical flight records and ranked results shared by every provider.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional, Tuple

from ..geo import GeoPoint, distance_km

NO_DATA_MESSAGE = "No flights nearby yet"


@dataclass(frozen=True)
class ProviderCredentials:
    """Credentials read once per acquisition cycle."""

    primary_api_key: str = ""

    @property
    def has_primary(self) -> bool:
        return bool(self.primary_api_key)


@dataclass(frozen=True)
class FlightRecord:
    """
    One aircraft normalized to common units.

    Altitude is in feet, ground speed in km/h, heading in degrees.
    ``distance_km`` is measured from the configured home point and is None
    until the record has been annotated.
    """

    callsign: str
    position: GeoPoint
    airline: str = ""
    flight_number: str = ""
    aircraft_type: str = ""
    origin_code: str = ""
    origin_city: str = ""
    destination_code: str = ""
    destination_city: str = ""
    altitude_ft: float = 0.0
    ground_speed_kmh: float = 0.0
    heading_deg: float = 0.0
    distance_km: Optional[float] = None

    def with_distance(self, home: GeoPoint) -> "FlightRecord":
        """Return a copy annotated with the distance from ``home``."""
        return replace(self, distance_km=distance_km(home, self.position))

    @property
    def has_route(self) -> bool:
        return bool(self.origin_code or self.destination_code)


class RankedResult:
    """
    Up to three flights ordered by distance, nearest first.

    Instances are immutable; a new one is built for every successful refresh.
    """

    __slots__ = ("_flights",)

    def __init__(self, flights: Iterable[FlightRecord] = ()):
        self._flights: Tuple[FlightRecord, ...] = tuple(flights)

    def __len__(self) -> int:
        return len(self._flights)

    def __iter__(self) -> Iterator[FlightRecord]:
        return iter(self._flights)

    def __getitem__(self, index: int) -> FlightRecord:
        return self._flights[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RankedResult):
            return NotImplemented
        return self._flights == other._flights

    def __hash__(self) -> int:
        return hash(self._flights)

    def __repr__(self) -> str:
        callsigns = ", ".join(f.callsign or "?" for f in self._flights)
        return f"RankedResult([{callsigns}])"

    @property
    def flights(self) -> Tuple[FlightRecord, ...]:
        return self._flights

    @property
    def is_empty(self) -> bool:
        return not self._flights

    @property
    def closest(self) -> Optional[FlightRecord]:
        return self._flights[0] if self._flights else None

    def status_text(self) -> str:
        """Message for the display when there is nothing to show."""
        if self.is_empty:
            return NO_DATA_MESSAGE
        return f"{len(self._flights)} flight(s) nearby"
