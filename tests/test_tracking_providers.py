"""
Tests for NearSky flight providers.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import requests
from unittest.mock import Mock, patch

from nearsky.geo import GeoPoint, bounding_box
from nearsky.tracking.errors import (
    CredentialMissing,
    ParseError,
    RecordError,
    StatusError,
    TransportError,
)
from nearsky.tracking.models import ProviderCredentials
from nearsky.tracking.providers import AeroApiProvider, OpenSkyProvider
from nearsky.tracking.ranking import rank_flights

HOME = GeoPoint(42.3601, -71.0589)
BOX = bounding_box(HOME, 0.45, 0.45)
KEY = ProviderCredentials(primary_api_key="test-key")
NO_KEY = ProviderCredentials()


def mock_response(payload=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def aeroapi_payload():
    """AeroAPI flight search response with two flights."""
    return {
        "flights": [
            {
                "ident": "UAL123",
                "operator": "UAL",
                "flight_number": "123",
                "aircraft_type": "B738",
                "origin": {"code": "KBOS", "city": "Boston"},
                "destination": {"code": "KORD", "city": "Chicago"},
                "last_position": {
                    "latitude": 42.40,
                    "longitude": -71.00,
                    "altitude": 350,
                    "groundspeed": 450,
                    "heading": 270,
                },
            },
            {
                "ident": "N123AB",
                "last_position": {
                    "latitude": 42.36,
                    "longitude": -71.05,
                    "altitude": 12,
                    "groundspeed": 110,
                    "heading": 90,
                },
            },
        ],
        "links": None,
        "num_pages": 1,
    }


@pytest.fixture
def opensky_payload():
    """OpenSky states response with two aircraft."""
    return {
        "time": 1234567890,
        "states": [
            [
                "abc123",      # icao24
                "DLH123 ",     # callsign
                "Germany",     # origin_country
                1234567890,    # time_position
                1234567890,    # last_contact
                -71.0,         # longitude
                42.4,          # latitude
                10000,         # baro_altitude
                False,         # on_ground
                250,           # velocity
                90,            # true_track
                0,             # vertical_rate
                None,          # sensors
                10050,         # geo_altitude
                "1200",        # squawk
            ],
            [
                "def456",
                "XYZ9   ",
                "France",
                1234567890,
                1234567890,
                -71.1,
                42.3,
                3000,
                False,
                100,
                180,
                -5,
                None,
                None,
                "2000",
            ],
        ],
    }


class TestAeroApiProvider:
    """Tests for the AeroAPI provider."""

    @patch("nearsky.tracking.providers.requests.get")
    def test_fetch_success(self, mock_get, aeroapi_payload):
        mock_get.return_value = mock_response(aeroapi_payload)

        records = AeroApiProvider().fetch(BOX, HOME, KEY)

        assert len(records) == 2
        first = records[0]
        assert first.callsign == "UAL123"
        assert first.airline == "United Airlines"
        assert first.flight_number == "123"
        assert first.aircraft_type == "B738"
        assert first.origin_code == "KBOS"
        assert first.origin_city == "Boston"
        assert first.destination_code == "KORD"
        assert first.destination_city == "Chicago"
        assert first.position == GeoPoint(42.40, -71.00)
        assert first.altitude_ft == 35000
        assert first.ground_speed_kmh == pytest.approx(450 * 1.852)
        assert first.heading_deg == 270
        assert first.distance_km > 0

    @patch("nearsky.tracking.providers.requests.get")
    def test_missing_optional_fields(self, mock_get, aeroapi_payload):
        mock_get.return_value = mock_response(aeroapi_payload)

        record = AeroApiProvider().fetch(BOX, HOME, KEY)[1]

        assert record.callsign == "N123AB"
        assert record.airline == ""
        assert record.origin_code == ""
        assert record.destination_city == ""
        assert record.altitude_ft == 1200

    @patch("nearsky.tracking.providers.requests.get")
    def test_request_parameters(self, mock_get):
        mock_get.return_value = mock_response({"flights": []})

        AeroApiProvider("https://example.test/search", timeout=7).fetch(BOX, HOME, KEY)

        args, kwargs = mock_get.call_args
        assert args[0] == "https://example.test/search"
        assert kwargs["headers"]["x-apikey"] == "test-key"
        assert kwargs["params"]["query"] == (
            '-latlong "41.9101 -71.5089 42.8101 -70.6089"'
        )
        assert kwargs["timeout"] == 7

    def test_requires_key(self):
        provider = AeroApiProvider()
        assert provider.is_available(KEY)
        assert not provider.is_available(NO_KEY)

    @patch("nearsky.tracking.providers.requests.get")
    def test_fetch_without_key(self, mock_get):
        with pytest.raises(CredentialMissing):
            AeroApiProvider().fetch(BOX, HOME, NO_KEY)
        mock_get.assert_not_called()

    @patch("nearsky.tracking.providers.requests.get")
    def test_bad_records_skipped(self, mock_get, aeroapi_payload):
        aeroapi_payload["flights"].extend(
            [
                {"ident": "NOPOS"},
                {"ident": "BADPOS", "last_position": {"latitude": "north"}},
                "not-an-object",
            ]
        )
        mock_get.return_value = mock_response(aeroapi_payload)

        records = AeroApiProvider().fetch(BOX, HOME, KEY)

        assert [r.callsign for r in records] == ["UAL123", "N123AB"]

    @patch("nearsky.tracking.providers.requests.get")
    def test_unauthorized(self, mock_get):
        mock_get.return_value = mock_response(status_code=401)

        with pytest.raises(StatusError) as excinfo:
            AeroApiProvider().fetch(BOX, HOME, KEY)
        assert excinfo.value.status_code == 401
        assert excinfo.value.provider == "aeroapi"

    @patch("nearsky.tracking.providers.requests.get")
    def test_missing_flights_key(self, mock_get):
        mock_get.return_value = mock_response({"error": "nope"})

        with pytest.raises(ParseError):
            AeroApiProvider().fetch(BOX, HOME, KEY)

    def test_parse_record_requires_position(self):
        with pytest.raises(RecordError):
            AeroApiProvider().parse_record({"ident": "UAL1", "last_position": None})

    @patch("nearsky.tracking.providers.requests.get")
    def test_invalid_coordinates_skipped(self, mock_get, aeroapi_payload):
        aeroapi_payload["flights"].extend(
            [
                {"ident": "NANLAT", "last_position": {"latitude": "nan", "longitude": -71.0}},
                {"ident": "INFLON", "last_position": {"latitude": 42.4, "longitude": "inf"}},
                {"ident": "FARLAT", "last_position": {"latitude": 999.0, "longitude": -71.0}},
                {"ident": "FARLON", "last_position": {"latitude": 42.4, "longitude": -200.0}},
            ]
        )
        mock_get.return_value = mock_response(aeroapi_payload)

        records = AeroApiProvider().fetch(BOX, HOME, KEY)

        assert [r.callsign for r in records] == ["UAL123", "N123AB"]


class TestOpenSkyProvider:
    """Tests for the OpenSky provider."""

    @patch("nearsky.tracking.providers.requests.get")
    def test_fetch_success(self, mock_get, opensky_payload):
        mock_get.return_value = mock_response(opensky_payload)

        records = OpenSkyProvider().fetch(BOX, HOME, NO_KEY)

        assert len(records) == 2
        first = records[0]
        assert first.callsign == "DLH123"
        assert first.airline == "Lufthansa"
        assert first.position == GeoPoint(42.4, -71.0)
        assert first.altitude_ft == pytest.approx(10050 * 3.28084)
        assert first.ground_speed_kmh == pytest.approx(900)
        assert first.heading_deg == 90
        assert first.flight_number == ""
        assert first.origin_code == ""
        assert first.distance_km is not None

    @patch("nearsky.tracking.providers.requests.get")
    def test_unknown_prefix_and_baro_fallback(self, mock_get, opensky_payload):
        mock_get.return_value = mock_response(opensky_payload)

        record = OpenSkyProvider().fetch(BOX, HOME, NO_KEY)[1]

        assert record.callsign == "XYZ9"
        assert record.airline == ""
        assert record.altitude_ft == pytest.approx(3000 * 3.28084)

    @patch("nearsky.tracking.providers.requests.get")
    def test_request_parameters(self, mock_get):
        mock_get.return_value = mock_response({"time": 1, "states": []})

        OpenSkyProvider().fetch(BOX, HOME, NO_KEY)

        _, kwargs = mock_get.call_args
        assert kwargs["params"] == {
            "lamin": BOX.lat_min,
            "lomin": BOX.lon_min,
            "lamax": BOX.lat_max,
            "lomax": BOX.lon_max,
        }
        assert kwargs["headers"] is None

    def test_available_without_key(self):
        assert OpenSkyProvider().is_available(NO_KEY)

    @patch("nearsky.tracking.providers.requests.get")
    def test_null_states_is_empty(self, mock_get):
        mock_get.return_value = mock_response({"time": 1, "states": None})

        assert OpenSkyProvider().fetch(BOX, HOME, NO_KEY) == []

    @patch("nearsky.tracking.providers.requests.get")
    def test_malformed_state_vectors(self, mock_get, opensky_payload):
        opensky_payload["states"].append(["abc123", "DLH123"])
        opensky_payload["states"].append(
            ["abc123", "NOPOS", "Germany", 1, 1, None, None, 100, False, 1, 1, 0, None, 100]
        )
        mock_get.return_value = mock_response(opensky_payload)

        records = OpenSkyProvider().fetch(BOX, HOME, NO_KEY)

        assert [r.callsign for r in records] == ["DLH123", "XYZ9"]

    @patch("nearsky.tracking.providers.requests.get")
    def test_invalid_positions_do_not_reach_ranking(self, mock_get):
        def state(callsign, lat, lon=-71.0):
            return ["abc123", callsign, "US", 1, 1, lon, lat, 1000, False, 200, 90, 0, None, 1000]

        mock_get.return_value = mock_response(
            {
                "time": 1,
                "states": [
                    state("BAD1", "nan"),
                    state("AAL1", 42.5),
                    state("DAL2", 42.9),
                    state("UAL3", 42.7),
                    state("JBU4", 999.0),
                    state("SWA5", 42.6, lon=float("inf")),
                ],
            }
        )

        records = OpenSkyProvider().fetch(BOX, HOME, NO_KEY)

        assert [r.callsign for r in records] == ["AAL1", "DAL2", "UAL3"]
        ranked = rank_flights(records)
        assert [r.callsign for r in ranked] == ["AAL1", "UAL3", "DAL2"]

    @patch("nearsky.tracking.providers.requests.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(TransportError) as excinfo:
            OpenSkyProvider().fetch(BOX, HOME, NO_KEY)
        assert "timeout" in str(excinfo.value)
        assert isinstance(excinfo.value.cause, requests.exceptions.Timeout)

    @patch("nearsky.tracking.providers.requests.get")
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportError):
            OpenSkyProvider().fetch(BOX, HOME, NO_KEY)

    @patch("nearsky.tracking.providers.requests.get")
    def test_rate_limited(self, mock_get):
        mock_get.return_value = mock_response(status_code=429)

        with pytest.raises(StatusError) as excinfo:
            OpenSkyProvider().fetch(BOX, HOME, NO_KEY)
        assert excinfo.value.status_code == 429

    @patch("nearsky.tracking.providers.requests.get")
    def test_invalid_json(self, mock_get):
        mock_get.return_value = mock_response(json_error=ValueError("Invalid JSON"))

        with pytest.raises(ParseError):
            OpenSkyProvider().fetch(BOX, HOME, NO_KEY)

    @patch("nearsky.tracking.providers.requests.get")
    def test_states_wrong_type(self, mock_get):
        mock_get.return_value = mock_response({"states": "oops"})

        with pytest.raises(ParseError):
            OpenSkyProvider().fetch(BOX, HOME, NO_KEY)
