"""
NearSky Tracking Constants
Provider endpoints and unit conversion factors.
"""

# API constants
AEROAPI_SEARCH_URL = "https://aeroapi.flightaware.com/aeroapi/flights/search"
OPENSKY_STATES_URL = "https://opensky-network.org/api/states/all"
PROBE_URL = "https://opensky-network.org"
DEFAULT_API_TIMEOUT = 10  # seconds

# Ranking
MAX_RESULTS = 3

# Conversion factors
METERS_TO_FEET = 3.28084
MS_TO_KMH = 3.6
KNOTS_TO_KMH = 1.852
FEET_PER_FLIGHT_LEVEL = 100

# OpenSky state vector indices
STATE_CALLSIGN = 1
STATE_LONGITUDE = 5
STATE_LATITUDE = 6
STATE_BARO_ALTITUDE = 7
STATE_VELOCITY = 9
STATE_TRUE_TRACK = 10
STATE_GEO_ALTITUDE = 13
