"""
NearSky Tracking Component

Flight acquisition from external providers, normalization and ranking.

Main Classes:
    - FlightRecord: Canonical flight record
    - RankedResult: Nearest flights, ordered by distance
    - AeroApiProvider: FlightAware AeroAPI (primary, API key)
    - OpenSkyProvider: OpenSky Network (fallback, anonymous)
    - ProviderChain: Ordered fallback across providers

Example:
    >>> from nearsky import Config
    >>> from nearsky.geo import bounding_box
    >>> from nearsky.tracking import ProviderChain, rank_flights
    >>> config = Config('config.yaml')
    >>> chain = ProviderChain.default(config)
    >>> box = bounding_box(config.home, config.lat_delta, config.lon_delta)
    >>> result = chain.fetch(box, config.home, config.credentials())
    >>> ranked = rank_flights(result.records)
"""

# Core tracking components
from .models import FlightRecord, ProviderCredentials, RankedResult
from .errors import (
    CredentialMissing,
    FetchError,
    ParseError,
    ProviderChainError,
    RecordError,
    StatusError,
    TrackingError,
    TransportError,
)
from .providers import AeroApiProvider, FlightProvider, OpenSkyProvider
from .chain import ChainResult, ProviderChain
from .ranking import deduplicate, rank_flights

# Utilities
from . import airlines
from . import constants

__all__ = [
    # Data model
    "FlightRecord",
    "ProviderCredentials",
    "RankedResult",
    # Providers
    "FlightProvider",
    "AeroApiProvider",
    "OpenSkyProvider",
    "ProviderChain",
    "ChainResult",
    # Ranking
    "rank_flights",
    "deduplicate",
    # Errors
    "TrackingError",
    "FetchError",
    "TransportError",
    "StatusError",
    "ParseError",
    "RecordError",
    "CredentialMissing",
    "ProviderChainError",
    # Modules
    "airlines",
    "constants",
]
