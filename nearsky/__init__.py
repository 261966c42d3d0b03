"""
NearSky - Nearest aircraft tracker

Finds the flights closest to a fixed location using FlightAware AeroAPI
(when an API key is configured) with OpenSky Network as fallback, and keeps
the nearest three ready for a display.

Components:
    - geo: Great-circle distance and query boxes
    - tracking: Providers, fallback chain and ranking
    - device: Connectivity state machine and refresh orchestration

Example:
    >>> from nearsky import Config
    >>> from nearsky.device import ConnectivityStateMachine, HostNetworkLink, RefreshOrchestrator
    >>> from nearsky.tracking import ProviderChain
    >>> config = Config('config.yaml')
    >>> machine = ConnectivityStateMachine(config, HostNetworkLink(config.probe_url))
    >>> orchestrator = RefreshOrchestrator(config, ProviderChain.default(config), machine)
"""

# Component imports for easy access
from . import geo
from . import utils
from . import tracking
from . import config
from . import device
from .config import Config

NEARSKY_VERSION = "v0.1.0"

__version__ = NEARSKY_VERSION
__author__ = "NearSky Project"
__license__ = "MIT"

__all__ = [
    "geo",
    "utils",
    "tracking",
    "config",
    "device",
    "Config",
]
