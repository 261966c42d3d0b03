"""
Tests for NearSky formatting helpers.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nearsky.utils import format_altitude, format_distance, format_route, format_speed


class TestFormatting:
    """Tests for human-readable formatting."""

    def test_altitude_feet(self):
        assert format_altitude(3500) == "3,500 ft"

    def test_altitude_flight_level(self):
        assert format_altitude(36000) == "FL360"
        assert format_altitude(18000) == "FL180"

    def test_altitude_missing(self):
        assert format_altitude(None) == "N/A"

    def test_speed(self):
        assert format_speed(463) == "463 km/h"
        assert format_speed(463, "knots") == "250 kt"
        assert format_speed(None) == "N/A"

    def test_distance(self):
        assert format_distance(5.24) == "5.2 km"
        assert format_distance(None) == "N/A"

    def test_route(self):
        assert format_route("BOS", "JFK") == "BOS → JFK"
        assert format_route("BOS", "") == "BOS → ???"
        assert format_route("", "") == ""
