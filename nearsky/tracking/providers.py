"""
NearSky Flight Providers

Each provider turns a bounding box into a list of FlightRecords annotated
with their distance from home. Transport, status and payload problems are
raised as FetchError subclasses; a bad individual record is skipped.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from ..geo import BoundingBox, GeoPoint, validate_coordinates
from .airlines import AIRLINES, airline_name
from .constants import (
    AEROAPI_SEARCH_URL,
    DEFAULT_API_TIMEOUT,
    FEET_PER_FLIGHT_LEVEL,
    KNOTS_TO_KMH,
    METERS_TO_FEET,
    MS_TO_KMH,
    OPENSKY_STATES_URL,
    STATE_BARO_ALTITUDE,
    STATE_CALLSIGN,
    STATE_GEO_ALTITUDE,
    STATE_LATITUDE,
    STATE_LONGITUDE,
    STATE_TRUE_TRACK,
    STATE_VELOCITY,
)
from .errors import CredentialMissing, ParseError, RecordError, StatusError, TransportError
from .models import FlightRecord, ProviderCredentials

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    """Convert value to float, return None if missing or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _position(lat: Optional[float], lon: Optional[float]) -> Optional[GeoPoint]:
    """Return a GeoPoint for finite, in-range coordinates, otherwise None."""
    if lat is None or lon is None:
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    if not validate_coordinates(lat, lon):
        return None
    return GeoPoint(lat, lon)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _at(state: list, index: int) -> Any:
    return state[index] if len(state) > index else None


class FlightProvider(ABC):
    """Common fetch contract for every flight data source."""

    name = "provider"
    requires_credentials = False

    def __init__(self, url: str, timeout: int = DEFAULT_API_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def is_available(self, credentials: ProviderCredentials) -> bool:
        """Whether this provider can run with the given credentials."""
        return not self.requires_credentials

    def fetch(
        self, box: BoundingBox, home: GeoPoint, credentials: ProviderCredentials
    ) -> List[FlightRecord]:
        """
        Fetch all flights inside ``box``.

        Args:
            box: Query region
            home: Point distances are measured from
            credentials: Credentials snapshot for this cycle

        Returns:
            Records annotated with ``distance_km``, in provider order

        Raises:
            FetchError: On transport, HTTP status or payload failures
            CredentialMissing: If the provider needs credentials it was not given
        """
        payload = self._request(box, credentials)
        entries = self._extract_entries(payload)

        records = []
        skipped = 0
        for entry in entries:
            try:
                record = self.parse_record(entry)
            except RecordError as e:
                skipped += 1
                logger.debug("%s: skipping record: %s", self.name, e)
                continue
            records.append(record.with_distance(home))

        logger.info(
            "%s returned %d flight(s) (%d skipped)", self.name, len(records), skipped
        )
        return records

    def _get(self, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Any:
        """GET the provider URL and decode the JSON body."""
        try:
            response = requests.get(
                self.url, params=params, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(
                self.name, f"request timeout after {self.timeout}s", e
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(self.name, f"request failed: {e}", e) from e

        if not 200 <= response.status_code < 300:
            raise StatusError(self.name, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(self.name, f"invalid JSON payload: {e}", e) from e

    @abstractmethod
    def _request(self, box: BoundingBox, credentials: ProviderCredentials) -> Any:
        """Issue the HTTP request and return the decoded payload."""

    @abstractmethod
    def _extract_entries(self, payload: Any) -> List[Any]:
        """Return the raw per-flight entries from a decoded payload."""

    @abstractmethod
    def parse_record(self, entry: Any) -> FlightRecord:
        """Normalize one raw entry, raising RecordError if it is unusable."""


class AeroApiProvider(FlightProvider):
    """
    FlightAware AeroAPI flight search (primary, API key required).

    Supplies route, operator and aircraft type. Altitude arrives in
    flight levels and ground speed in knots.
    """

    name = "aeroapi"
    requires_credentials = True

    def __init__(self, url: str = AEROAPI_SEARCH_URL, timeout: int = DEFAULT_API_TIMEOUT):
        super().__init__(url, timeout)

    def is_available(self, credentials: ProviderCredentials) -> bool:
        return credentials.has_primary

    def _request(self, box: BoundingBox, credentials: ProviderCredentials) -> Any:
        if not credentials.has_primary:
            raise CredentialMissing(self.name)

        query = '-latlong "{:.4f} {:.4f} {:.4f} {:.4f}"'.format(*box.as_tuple())
        headers = {
            "x-apikey": credentials.primary_api_key,
            "Accept": "application/json",
        }
        return self._get({"query": query}, headers=headers)

    def _extract_entries(self, payload: Any) -> List[Any]:
        if not isinstance(payload, dict) or "flights" not in payload:
            raise ParseError(self.name, "response has no 'flights' list")

        flights = payload["flights"]
        if flights is None:
            return []
        if not isinstance(flights, list):
            raise ParseError(self.name, "'flights' is not a list")
        return flights

    def parse_record(self, entry: Any) -> FlightRecord:
        if not isinstance(entry, dict):
            raise RecordError("flight entry is not an object")

        position = entry.get("last_position")
        if not isinstance(position, dict):
            raise RecordError(f"{_text(entry.get('ident')) or '?'} has no last_position")

        point = _position(
            _to_float(position.get("latitude")), _to_float(position.get("longitude"))
        )
        if point is None:
            raise RecordError(f"{_text(entry.get('ident')) or '?'} has no valid coordinates")

        callsign = _text(entry.get("ident"))
        operator = _text(entry.get("operator"))
        airline = AIRLINES.get(operator.upper(), operator) if operator else airline_name(callsign)

        origin = entry.get("origin") if isinstance(entry.get("origin"), dict) else {}
        destination = (
            entry.get("destination") if isinstance(entry.get("destination"), dict) else {}
        )

        return FlightRecord(
            callsign=callsign,
            position=point,
            airline=airline,
            flight_number=_text(entry.get("flight_number")),
            aircraft_type=_text(entry.get("aircraft_type")),
            origin_code=_text(origin.get("code")),
            origin_city=_text(origin.get("city")),
            destination_code=_text(destination.get("code")),
            destination_city=_text(destination.get("city")),
            altitude_ft=(_to_float(position.get("altitude")) or 0.0) * FEET_PER_FLIGHT_LEVEL,
            ground_speed_kmh=(_to_float(position.get("groundspeed")) or 0.0) * KNOTS_TO_KMH,
            heading_deg=_to_float(position.get("heading")) or 0.0,
        )


class OpenSkyProvider(FlightProvider):
    """
    OpenSky Network state vectors (fallback, anonymous).

    Only identifier, position, altitude, speed and heading are available;
    the airline is derived from the callsign prefix.

    OpenSky state vector format (indices used here):
        [1] callsign
        [5] longitude
        [6] latitude
        [7] baro_altitude - meters
        [9] velocity - m/s
        [10] true_track - degrees
        [13] geo_altitude - meters
    """

    name = "opensky"

    def __init__(self, url: str = OPENSKY_STATES_URL, timeout: int = DEFAULT_API_TIMEOUT):
        super().__init__(url, timeout)

    def _request(self, box: BoundingBox, credentials: ProviderCredentials) -> Any:
        lat_min, lon_min, lat_max, lon_max = box.as_tuple()
        params = {
            "lamin": lat_min,
            "lomin": lon_min,
            "lamax": lat_max,
            "lomax": lon_max,
        }
        return self._get(params)

    def _extract_entries(self, payload: Any) -> List[Any]:
        if not isinstance(payload, dict) or "states" not in payload:
            raise ParseError(self.name, "response has no 'states' list")

        # OpenSky reports an empty sky as null
        states = payload["states"]
        if states is None:
            return []
        if not isinstance(states, list):
            raise ParseError(self.name, "'states' is not a list")
        return states

    def parse_record(self, entry: Any) -> FlightRecord:
        if not isinstance(entry, (list, tuple)) or len(entry) <= STATE_LATITUDE:
            raise RecordError("truncated state vector")

        point = _position(
            _to_float(entry[STATE_LATITUDE]), _to_float(entry[STATE_LONGITUDE])
        )
        if point is None:
            raise RecordError(f"{_text(entry[STATE_CALLSIGN]) or '?'} has no valid position")

        callsign = _text(entry[STATE_CALLSIGN])

        altitude_m = _to_float(_at(entry, STATE_GEO_ALTITUDE))
        if altitude_m is None:
            altitude_m = _to_float(_at(entry, STATE_BARO_ALTITUDE))

        return FlightRecord(
            callsign=callsign,
            position=point,
            airline=airline_name(callsign),
            altitude_ft=(altitude_m or 0.0) * METERS_TO_FEET,
            ground_speed_kmh=(_to_float(_at(entry, STATE_VELOCITY)) or 0.0) * MS_TO_KMH,
            heading_deg=_to_float(_at(entry, STATE_TRUE_TRACK)) or 0.0,
        )
