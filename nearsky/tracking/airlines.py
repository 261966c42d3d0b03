"""
Airline lookup by ICAO callsign prefix.

Only the carrier name is resolved; logos and liveries are left to the display.
"""

import re
from typing import Dict

AIRLINES: Dict[str, str] = {
    # North America
    "AAL": "American Airlines",
    "ACA": "Air Canada",
    "ASA": "Alaska Airlines",
    "DAL": "Delta Air Lines",
    "EDV": "Endeavor Air",
    "ENY": "Envoy Air",
    "FDX": "FedEx",
    "FFT": "Frontier Airlines",
    "HAL": "Hawaiian Airlines",
    "JBU": "JetBlue",
    "JIA": "PSA Airlines",
    "NKS": "Spirit Airlines",
    "RPA": "Republic Airways",
    "SKW": "SkyWest Airlines",
    "SWA": "Southwest Airlines",
    "UAL": "United Airlines",
    "UPS": "UPS Airlines",
    "WJA": "WestJet",
    # Europe
    "AFR": "Air France",
    "AUA": "Austrian Airlines",
    "BAW": "British Airways",
    "BEL": "Brussels Airlines",
    "DLH": "Lufthansa",
    "EIN": "Aer Lingus",
    "EWG": "Eurowings",
    "EZY": "easyJet",
    "FIN": "Finnair",
    "IBE": "Iberia",
    "ICE": "Icelandair",
    "KLM": "KLM",
    "LOT": "LOT Polish Airlines",
    "RYR": "Ryanair",
    "SAS": "Scandinavian Airlines",
    "SWR": "Swiss",
    "TAP": "TAP Air Portugal",
    "THY": "Turkish Airlines",
    "VIR": "Virgin Atlantic",
    "VLG": "Vueling",
    "WZZ": "Wizz Air",
    # Middle East / Asia Pacific
    "ANA": "All Nippon Airways",
    "CPA": "Cathay Pacific",
    "ETD": "Etihad Airways",
    "JAL": "Japan Airlines",
    "KAL": "Korean Air",
    "QFA": "Qantas",
    "QTR": "Qatar Airways",
    "SIA": "Singapore Airlines",
    "UAE": "Emirates",
    # Latin America
    "AMX": "Aeromexico",
    "AVA": "Avianca",
    "CMP": "Copa Airlines",
    "LAN": "LATAM Airlines",
}

_PREFIX = re.compile(r"^([A-Z]{3})\d")


def airline_code(callsign: str) -> str:
    """
    Extract the 3-letter ICAO airline prefix from a callsign.

    Registrations such as 'N123AB' or 'DEABC' have no airline prefix.

    Example:
        >>> airline_code('DLH4AB')
        'DLH'
        >>> airline_code('N123AB')
        ''
    """
    match = _PREFIX.match((callsign or "").strip().upper())
    return match.group(1) if match else ""


def airline_name(callsign: str) -> str:
    """Carrier name for a callsign, or '' when the prefix is unknown."""
    return AIRLINES.get(airline_code(callsign), "")
