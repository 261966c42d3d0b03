"""
NearSky Utility Functions
Human-readable formatting for flight records.
"""

from typing import Optional


def format_altitude(altitude_ft: Optional[float]) -> str:
    """
    Format altitude in feet, switching to flight levels above 18,000 ft.

    Args:
        altitude_ft: Altitude in feet

    Returns:
        Formatted altitude string

    Example:
        >>> format_altitude(3500)
        '3,500 ft'
        >>> format_altitude(36000)
        'FL360'
    """
    if altitude_ft is None:
        return "N/A"

    if altitude_ft >= 18000:
        return f"FL{int(round(altitude_ft / 100.0)):03d}"

    return f"{altitude_ft:,.0f} ft"


def format_speed(speed_kmh: Optional[float], unit: str = "kmh") -> str:
    """
    Format ground speed in various units.

    Args:
        speed_kmh: Ground speed in km/h
        unit: Output unit ('kmh', 'knots')

    Returns:
        Formatted speed string

    Example:
        >>> format_speed(463, 'kmh')
        '463 km/h'
    """
    if speed_kmh is None:
        return "N/A"

    if unit == "knots":
        return f"{speed_kmh / 1.852:.0f} kt"

    return f"{speed_kmh:.0f} km/h"


def format_distance(distance_km: Optional[float]) -> str:
    """
    Format distance from home.

    Example:
        >>> format_distance(5.24)
        '5.2 km'
    """
    if distance_km is None:
        return "N/A"

    return f"{distance_km:.1f} km"


def format_route(origin: str, destination: str) -> str:
    """
    Format an origin/destination pair.

    Missing codes are shown as '???' so a one-sided route still reads.

    Example:
        >>> format_route('BOS', 'JFK')
        'BOS → JFK'
        >>> format_route('', '')
        ''
    """
    if not origin and not destination:
        return ""

    return f"{origin or '???'} → {destination or '???'}"
